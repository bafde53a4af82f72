"""
Base processor class and processing context.

Processors share one context object and hand their results forward
through it: OCR fills in the text, CardProcessor the records.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Any, Union

from ..config import Config
from ..logger import get_logger
from ..models import IDCardRecord, SideRecord
from ..utils.timing import Timer, format_duration

# An image on disk or the raw bytes of an upload
ImageSource = Union[Path, str, bytes]


@dataclass
class ProcessingContext:
    """
    Shared context passed between processors.

    Each processor fills in the next stage:
    images -> OCR text -> side records -> merged record
    """

    config: Config

    # Inputs
    front_image: Optional[ImageSource] = None
    back_image: Optional[ImageSource] = None
    front_name: str = ""
    back_name: str = ""

    # OCR output
    front_text: Optional[str] = None
    back_text: Optional[str] = None

    # Parse output
    front_record: Optional[SideRecord] = None
    back_record: Optional[SideRecord] = None
    record: Optional[IDCardRecord] = None

    def file_name(self) -> str:
        """Display name of the uploaded image pair, e.g. "front.jpg & back.jpg"."""
        names = [n for n in (self.front_name, self.back_name) if n]
        return " & ".join(names)


class BaseProcessor(ABC):
    """
    Abstract base class for card processors.

    Subclasses implement `process()` and, where they have prerequisites,
    `validate()`. `run()` adds the start/finish log lines and the timing,
    and turns any failure into a False return.
    """

    # Processor name for logging (override in subclass)
    name: str = "BaseProcessor"

    def __init__(self, context: ProcessingContext):
        self.context = context
        self.config = context.config
        self.logger = get_logger(self.name)

    def _log(self, level: int, message: str, fields: dict[str, Any], exc_info: bool = False) -> None:
        if fields:
            message = f"{message} " + " ".join(f"{k}={v}" for k, v in fields.items())
        self.logger.log(level, message, exc_info=exc_info)

    def log_debug(self, message: str, **fields: Any) -> None:
        """Debug line, emitted only when DEBUG is on."""
        if self.config.debug:
            self._log(logging.DEBUG, message, fields)

    def log_info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, fields)

    def log_error(self, message: str, error: Optional[Exception] = None) -> None:
        """Error line; the traceback is included in debug mode."""
        if error is None:
            self._log(logging.ERROR, message, {})
        else:
            self._log(logging.ERROR, f"{message}: {error}", {}, exc_info=self.config.debug)

    @abstractmethod
    def process(self) -> bool:
        """
        Do the processor's work on the context.

        Returns:
            True if processing succeeded, False otherwise
        """

    def validate(self) -> bool:
        """Check prerequisites in the context (override in subclass)."""
        return True

    def run(self) -> bool:
        """
        Validate, then process, logging the outcome and duration.

        Returns:
            True if processing succeeded
        """
        self.log_info(f"Starting {self.name}")
        timer = Timer()

        if not self.validate():
            self.log_error(f"{self.name} validation failed")
            return False

        try:
            result = self.process()
        except Exception as e:
            self.log_error(f"{self.name} failed after {format_duration(timer.elapsed)}", error=e)
            return False

        self.log_info(f"Completed {self.name}", duration=format_duration(timer.elapsed))
        return result
