"""Supporting tools for strict markup parsing."""

from .memory import MemorySampler, MemoryStats

__all__ = [
    "MemorySampler",
    "MemoryStats",
]
