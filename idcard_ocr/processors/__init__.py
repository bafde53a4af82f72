"""
Card processors module.

Contains the processing components for the ID card pipeline:
- OCRProcessor: Extract raw text from front/back card images
- CardProcessor: Parse both sides and merge them into one record
- register_card / authenticate_card / verify_record: registration flows
"""

from .base import BaseProcessor, ProcessingContext
from .ocr_processor import OCRProcessor, load_card_image
from .card_processor import CardProcessor
from .registration import (
    AuthenticationResult,
    AUTH_SUCCESS,
    AUTH_INVALID,
    AUTH_NOT_FOUND,
    AUTH_MISMATCH,
    register_card,
    authenticate_card,
    verify_record,
)

__all__ = [
    "BaseProcessor",
    "ProcessingContext",
    "OCRProcessor",
    "load_card_image",
    "CardProcessor",
    "AuthenticationResult",
    "AUTH_SUCCESS",
    "AUTH_INVALID",
    "AUTH_NOT_FOUND",
    "AUTH_MISMATCH",
    "register_card",
    "authenticate_card",
    "verify_record",
]
