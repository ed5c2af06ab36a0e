# Area: Shared
"""
Shared utilities used across the engine.

This package contains:
- Logging configuration
- Injectable clocks
"""

from .clock import Clock, ManualClock, SystemClock
from .logging_config import setup_logging, log_store_failure

__all__ = [
    "Clock",
    "ManualClock",
    "SystemClock",
    "setup_logging",
    "log_store_failure",
]
