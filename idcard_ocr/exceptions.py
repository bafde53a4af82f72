"""
Custom exceptions for the ID card OCR application.

All application-specific exceptions inherit from IDCardError. The parsing
engine itself never raises: these surface only from the OCR engine, the
persistence layer and the registration flows.
"""

from __future__ import annotations

from typing import Optional, Any


def _details(**values: Any) -> dict[str, Any]:
    """Keep only the detail values that were actually supplied."""
    return {key: value for key, value in values.items() if value is not None}


class IDCardError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        details: Context for logs and debugging (image, location, ids...)
        recoverable: Whether retrying the same input could succeed
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False
    ):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})
        self.recoverable = recoverable

    def __str__(self) -> str:
        if not self.details:
            return self.message
        context = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({context})"


class ConfigurationError(IDCardError):
    """Required configuration is missing, e.g. --postgres without DB_HOST."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message, _details(config_key=config_key))


class OCRError(IDCardError):
    """Tesseract could not turn a card image into text."""

    def __init__(
        self,
        message: str,
        image: Optional[str] = None,
        languages: Optional[str] = None
    ):
        super().__init__(message, _details(image=image, languages=languages))


class TesseractNotFoundError(OCRError):
    """The Tesseract binary is not installed or not on the configured path."""

    def __init__(self, tesseract_path: Optional[str] = None):
        super().__init__(
            "Tesseract OCR not found. Install it (apt install tesseract-ocr, "
            "brew install tesseract) or set TESSERACT_PATH"
        )
        if tesseract_path:
            self.details["tesseract_path"] = tesseract_path


class ImageLoadError(OCRError):
    """The uploaded card image could not be decoded."""

    def __init__(self, message: str, image: Optional[str] = None):
        super().__init__(message, image=image)


class DataPersistenceError(IDCardError):
    """
    Reading or writing stored records failed.

    Examples:
        - Record file is not valid JSON
        - Database unreachable
    """

    def __init__(
        self,
        message: str,
        location: Optional[str] = None,
        operation: Optional[str] = None
    ):
        super().__init__(message, _details(location=location, operation=operation), recoverable=True)


class DuplicateRecordError(DataPersistenceError):
    """A record with the same register number is already stored."""

    def __init__(self, register_number: str):
        super().__init__("User with this register number already exists", operation="save")
        self.register_number = register_number
        self.details["register_number"] = register_number


class RecordNotFoundError(DataPersistenceError):
    """No stored record has the requested id."""

    def __init__(self, record_id: Any):
        super().__init__("User not found", operation="lookup")
        self.record_id = record_id
        self.details["record_id"] = record_id
