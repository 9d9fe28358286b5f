"""Process memory sampling for parse metrics.

Resident memory is read through psutil before and after a parse; the
difference is reported as ``PerformanceMetrics.memory_used_bytes``.
"""

from dataclasses import dataclass
from typing import Optional

import psutil

from strict_markup_parser.shared.logging import get_logger


@dataclass
class MemoryStats:
    """Memory usage snapshot of the current process."""

    resident_memory_bytes: int = 0
    virtual_memory_bytes: int = 0
    memory_percent: float = 0.0

    @property
    def resident_memory_mb(self) -> float:
        return self.resident_memory_bytes / (1024 * 1024)


class MemorySampler:
    """Take resident-memory snapshots around an operation."""

    def __init__(
        self,
        correlation_id: Optional[str] = None,
        logging_level: Optional[str] = None
    ) -> None:
        self._process = psutil.Process()
        self._baseline: Optional[MemoryStats] = None
        self.logger = get_logger(__name__, correlation_id, "memory", logging_level)

    def get_memory_stats(self) -> MemoryStats:
        """Get current memory statistics."""
        memory_info = self._process.memory_info()
        return MemoryStats(
            resident_memory_bytes=memory_info.rss,
            virtual_memory_bytes=memory_info.vms,
            memory_percent=self._process.memory_percent(),
        )

    def start(self) -> MemoryStats:
        """Record the baseline snapshot."""
        self._baseline = self.get_memory_stats()
        return self._baseline

    def stop(self) -> int:
        """Return resident bytes gained since ``start`` (never negative)."""
        if self._baseline is None:
            raise RuntimeError("MemorySampler.stop() called before start()")
        current = self.get_memory_stats()
        delta = max(0, current.resident_memory_bytes - self._baseline.resident_memory_bytes)
        self.logger.debug(
            "Memory sample complete",
            extra={
                "resident_memory_mb": current.resident_memory_mb,
                "delta_bytes": delta,
            }
        )
        self._baseline = None
        return delta
