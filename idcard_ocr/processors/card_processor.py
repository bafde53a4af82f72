"""
Card processor: parse both sides and merge them into one record.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from .base import BaseProcessor, ProcessingContext
from ..models import SideRecord
from ..parsing import CardParser, merge_sides


class CardProcessor(BaseProcessor):
    """
    Parse the OCR text in the context and merge the two sides.

    The sides are independent, so they are parsed concurrently unless
    PARSER_PARALLEL_SIDES is switched off.
    """

    name = "CardProcessor"

    def __init__(self, context: ProcessingContext, parser: Optional[CardParser] = None):
        super().__init__(context)
        self.parser = parser or CardParser(self.config.card, self.config.parser)

    def validate(self) -> bool:
        if self.context.front_text is None and self.context.back_text is None:
            self.log_error("No OCR text in context")
            return False
        return True

    def _parse_optional(self, text: Optional[str]) -> Optional[SideRecord]:
        return self.parser.parse(text) if text is not None else None

    def process(self) -> bool:
        if self.config.parser.parallel_sides:
            with ThreadPoolExecutor(max_workers=2) as executor:
                front_future = executor.submit(self._parse_optional, self.context.front_text)
                back_future = executor.submit(self._parse_optional, self.context.back_text)
                front, back = front_future.result(), back_future.result()
        else:
            front = self._parse_optional(self.context.front_text)
            back = self._parse_optional(self.context.back_text)

        for label, side in (("front", front), ("back", back)):
            if side is not None:
                self.log_debug(f"Parsed {label} upload", card_type=side.card_type.value)

        self.context.front_record = front
        self.context.back_record = back
        self.context.record = merge_sides(front, back)
        self.context.record.file_name = self.context.file_name()

        return True
