"""
OCR Processor for ID card images.

Turns a photographed or scanned card side into raw text with Tesseract.
The only preprocessing is grayscale conversion; everything else is left
to the text parser, which expects noisy output.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Optional

import pytesseract
from PIL import Image, UnidentifiedImageError

from .base import BaseProcessor, ProcessingContext, ImageSource
from ..config import OCRConfig
from ..exceptions import OCRError, TesseractNotFoundError, ImageLoadError
from ..utils.timing import timed_operation


def load_card_image(source: ImageSource) -> Image.Image:
    """
    Load a card image from a path or raw upload bytes as grayscale.

    Raises:
        ImageLoadError: if the image cannot be read or decoded
    """
    label = "<upload>" if isinstance(source, bytes) else str(source)
    try:
        if isinstance(source, bytes):
            image = Image.open(io.BytesIO(source))
        else:
            image = Image.open(Path(source))
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(f"Failed to read card image: {e}", image=label) from e

    return image.convert("L")


class OCRProcessor(BaseProcessor):
    """
    Extract raw text from the front and back images in the context.

    Failures are not swallowed by `extract_text`: the parser never sees
    an image, so a broken image or engine is the caller's problem.
    """

    name = "OCRProcessor"

    def __init__(self, context: ProcessingContext, ocr_config: Optional[OCRConfig] = None):
        super().__init__(context)
        self.ocr_config = ocr_config or self.config.ocr
        self._tesseract_checked = False

    def validate(self) -> bool:
        """Validate prerequisites."""
        if self.context.front_image is None and self.context.back_image is None:
            self.log_error("No card images in context")
            return False
        return True

    def _initialize_tesseract(self) -> None:
        """Point pytesseract at a custom binary and check it runs."""
        if self._tesseract_checked:
            return

        if self.ocr_config.tesseract_path:
            pytesseract.pytesseract.tesseract_cmd = self.ocr_config.tesseract_path

        try:
            version = pytesseract.get_tesseract_version()
        except pytesseract.TesseractNotFoundError as e:
            raise TesseractNotFoundError(self.ocr_config.tesseract_path or None) from e

        self.log_debug(f"Tesseract version: {version}")
        self._tesseract_checked = True

    def extract_text(self, source: ImageSource) -> str:
        """
        Run OCR on one card side.

        Args:
            source: Image path or raw image bytes

        Returns:
            Raw recognized text

        Raises:
            TesseractNotFoundError: if Tesseract is not installed
            ImageLoadError: if the image cannot be decoded
            OCRError: for any other recognition failure
        """
        self._initialize_tesseract()
        image = load_card_image(source)

        try:
            text = pytesseract.image_to_string(
                image,
                lang=self.ocr_config.languages,
                config=self.ocr_config.tesseract_args(),
            )
        except pytesseract.TesseractError as e:
            label = "<upload>" if isinstance(source, bytes) else str(source)
            raise OCRError(
                f"Tesseract failed: {e}", image=label, languages=self.ocr_config.languages
            ) from e

        if self.config.dump_raw_ocr:
            self.logger.debug(f"Raw OCR text:\n{text}")

        return text

    def process(self) -> bool:
        """OCR whichever sides are present in the context."""
        if self.context.front_image is not None:
            with timed_operation("OCR front side", self.logger):
                self.context.front_text = self.extract_text(self.context.front_image)

        if self.context.back_image is not None:
            with timed_operation("OCR back side", self.logger):
                self.context.back_text = self.extract_text(self.context.back_image)

        return True
