"""
Parsing of a single card side.

Normalizes the OCR text, classifies the side, then extracts and validates
every field printed on that side. Nothing here raises for missing or
garbled fields; they come back as empty strings.
"""

from __future__ import annotations

from typing import Dict, Optional

from ..config import CardConfig, ParserConfig, get_config
from ..logger import get_logger
from ..models import CardField, CardType, SideRecord
from .classifier import classify
from .extractor import extract_best, extract_first_valid
from .normalizer import normalize_text
from .patterns import patterns_for
from .validators import (
    clean_address,
    is_valid_address,
    is_valid_name,
    normalize_blood_group,
    normalize_date_of_birth,
    validate_field,
)

logger = get_logger(__name__)


def extract_field(text: str, card_field: CardField) -> str:
    """Best raw candidate for a field, or "" when nothing matched."""
    candidate = extract_best(text, patterns_for(card_field))
    return candidate.value if candidate is not None else ""


def extract_name(text: str) -> str:
    name = extract_field(text, CardField.NAME)
    return name if is_valid_name(name) else ""


def extract_blood_group(text: str) -> str:
    return normalize_blood_group(extract_field(text, CardField.BLOOD_GROUP))


def extract_address(text: str) -> str:
    """Address block between its label and the pin code, with a birth-line fallback."""
    return extract_first_valid(
        text,
        patterns_for(CardField.ADDRESS),
        clean=clean_address,
        accept=is_valid_address,
    )


class CardParser:
    """
    Turns the OCR text of one card side into a SideRecord.

    Stateless apart from its configuration; a single instance can parse
    both sides concurrently.
    """

    FRONT_EXTRACTED = (
        CardField.NAME,
        CardField.PROGRAMME,
        CardField.REGISTER_NUMBER,
        CardField.VALID_FROM,
        CardField.VALID_TO,
    )

    BACK_EXTRACTED = (
        CardField.BLOOD_GROUP,
        CardField.DATE_OF_BIRTH,
        CardField.ADDRESS,
        CardField.PIN,
        CardField.PERMANENT_CONTACT,
        CardField.EMERGENCY_CONTACT,
        CardField.EMAIL,
    )

    def __init__(
        self,
        card_config: Optional[CardConfig] = None,
        parser_config: Optional[ParserConfig] = None,
    ):
        config = get_config()
        self.card_config = card_config or config.card
        self.parser_config = parser_config or config.parser

    def parse(self, ocr_text: Optional[str]) -> SideRecord:
        """
        Parse the OCR text of one side.

        Args:
            ocr_text: Raw text from the OCR engine (may be None or empty)

        Returns:
            SideRecord whose raw_text is the untouched input
        """
        raw_text = ocr_text or ""
        text = normalize_text(self._bound(raw_text))

        logger.debug(f"Processing OCR text. Length: {len(text)}")

        card_type = classify(text)
        record = SideRecord(card_type=card_type, raw_text=raw_text)

        if card_type is CardType.FRONT:
            record.fields = self.parse_front(text)
        elif card_type is CardType.BACK:
            record.fields = self.parse_back(text)
        else:
            logger.warning("Unable to determine card type from text")

        return record

    def parse_front(self, text: str) -> Dict[CardField, str]:
        """Extract front-side fields from normalized text."""
        logger.info("Parsing front side of ID card")

        fields: Dict[CardField, str] = {
            CardField.INSTITUTION: self.card_config.institution,
            CardField.FACULTY: self.card_config.faculty,
        }
        for card_field in self.FRONT_EXTRACTED:
            fields[card_field] = validate_field(card_field.kind, self._extract(text, card_field))
            logger.debug(f"Extracted {card_field.attr}: {fields[card_field]}")

        return fields

    def parse_back(self, text: str) -> Dict[CardField, str]:
        """Extract back-side fields from normalized text."""
        logger.info("Parsing back side of ID card")

        fields: Dict[CardField, str] = {}
        for card_field in self.BACK_EXTRACTED:
            value = self._extract(text, card_field)
            if card_field is CardField.DATE_OF_BIRTH:
                fields[card_field] = normalize_date_of_birth(value)
            else:
                fields[card_field] = validate_field(card_field.kind, value)
            logger.debug(f"Extracted {card_field.attr}: {fields[card_field]}")

        return fields

    def _extract(self, text: str, card_field: CardField) -> str:
        if card_field is CardField.NAME:
            return extract_name(text)
        if card_field is CardField.BLOOD_GROUP:
            return extract_blood_group(text)
        if card_field is CardField.ADDRESS:
            return extract_address(text)
        return extract_field(text, card_field)

    def _bound(self, text: str) -> str:
        limit = self.parser_config.max_text_length
        if limit > 0 and len(text) > limit:
            logger.warning(f"OCR text truncated from {len(text)} to {limit} characters")
            return text[:limit]
        return text


def parse_card_text(ocr_text: Optional[str]) -> SideRecord:
    """Convenience function: parse one side with the global configuration."""
    return CardParser().parse(ocr_text)
