"""
Timing helpers for processor runs and OCR calls.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional


def format_duration(seconds: float) -> str:
    """Human-readable duration: 850.0ms, 2.31s, 1m 4.2s."""
    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}m {rest:.1f}s"


@dataclass
class Timer:
    """Wall-clock time since creation."""
    started: float = field(default_factory=time.perf_counter)

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.started


@dataclass
class TimingResult:
    """Duration of a named block, filled in when the block exits."""
    name: str
    duration_sec: float = 0.0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def __str__(self) -> str:
        text = f"{self.name}: {format_duration(self.duration_sec)}"
        if self.error is not None:
            text += f" (failed: {self.error})"
        return text


@contextmanager
def timed_operation(
    name: str,
    logger: Optional[logging.Logger] = None,
    log_level: int = logging.DEBUG
) -> Iterator[TimingResult]:
    """
    Time the enclosed block and optionally log the result.

    Usage:
        with timed_operation("OCR front side", logger) as timing:
            text = run_ocr(image)
        print(timing.duration_sec)

    Exceptions propagate; the failure is recorded on the result and in
    the log line first.
    """
    result = TimingResult(name)
    timer = Timer()

    try:
        yield result
    except Exception as e:
        result.error = str(e)
        raise
    finally:
        result.duration_sec = timer.elapsed
        if logger is not None:
            logger.log(log_level, str(result))
