"""
Utility functions for the ID card OCR application.
"""

from .timing import (
    format_duration,
    timed_operation,
    Timer,
    TimingResult,
)

__all__ = [
    # Timing utilities
    "format_duration",
    "timed_operation",
    "Timer",
    "TimingResult",
]
