"""
Utilities package for qrgen.

Exports shared helpers for logging and profiling.
Keep this package lightweight and free of domain-specific logic.
"""

from qrgen.utils.logging import configure_logging, get_logger, level_from_verbosity
from qrgen.utils.profiler import ProfileStats, profile_block

__all__ = [
    "configure_logging",
    "get_logger",
    "level_from_verbosity",
    "ProfileStats",
    "profile_block",
]
