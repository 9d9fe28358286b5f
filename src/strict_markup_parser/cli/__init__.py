"""Command-line interface module for Strict Markup Parser.

This module provides CLI tools for parsing markup files, printing their
document trees and checking well-formedness.
"""

from .main import main

__all__ = ["main"]
