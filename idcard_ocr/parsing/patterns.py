"""
Field pattern tables.

Every card field has an ordered tuple of precompiled patterns. Order is
part of the contract: when two patterns score the same confidence the
earlier one wins. Each pattern has at least one capturing group and the
extracted value is always the last group.

The tables are built once at import and are read-only afterwards.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Pattern, Tuple

from ..logger import get_logger
from ..models import CardField

logger = get_logger(__name__)

# Label separator: a colon or a glyph OCR commonly reads in its place
SEP = r"[:©€]?"

_WHITESPACE_FLEXIBLE = r"\s*"


@dataclass(frozen=True)
class FieldPattern:
    """A compiled extraction pattern plus the properties confidence scoring reads."""

    regex: Pattern[str]

    @property
    def source(self) -> str:
        return self.regex.pattern

    @property
    def case_insensitive(self) -> bool:
        return bool(self.regex.flags & re.IGNORECASE)

    @property
    def whitespace_flexible(self) -> bool:
        return _WHITESPACE_FLEXIBLE in self.regex.pattern

    def search(self, text: str) -> Optional[str]:
        """Return the last capturing group of the first match, or None."""
        if self.regex.groups < 1:
            return None
        match = self.regex.search(text)
        if match is None:
            return None
        return match.group(self.regex.groups)


def compile_pattern(source: str, flags: int = 0) -> FieldPattern:
    """
    Compile a pattern source.

    Character classes, \\d, \\s and \\w are ASCII-only, and case folding is
    restricted to ASCII letters.

    Raises:
        re.error: if the source is malformed
    """
    return FieldPattern(re.compile(source, flags | re.ASCII))


def compile_patterns(sources: Iterable[str], flags: int = 0) -> Tuple[FieldPattern, ...]:
    """Compile an ordered pattern list, logging and dropping malformed entries."""
    compiled = []
    for source in sources:
        try:
            compiled.append(compile_pattern(source, flags))
        except re.error as e:
            logger.error(f"Skipping malformed pattern {source!r}: {e}")
    return tuple(compiled)


# Shared value shapes
_MONTH_YEAR = r"([A-Za-z]+[-\s]?\d{4})"
_DAY_MONTH_YEAR = r"(\d{1,2}[-\/\\]\w{3,9}[-\/\\]\d{4})"
_PHONE = r"(\d{10})"
_EMAIL = r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})"
_PIN_AHEAD = rf"Pin\s*{SEP}\s*\d{{6}}"


FIELD_PATTERNS: Mapping[CardField, Tuple[FieldPattern, ...]] = MappingProxyType({
    CardField.NAME: compile_patterns([
        rf"(?i)Name\s*{SEP}\s*([A-Z][A-Z\s]{{2,50}}?)(?=\n|Programme|Register|$)",
        r"(?i)Name[^:]*[:©€]\s*([A-Z][A-Z\s]+?)(?=\n|Programme)",
        # Name printed right under the institution line
        r"(?:TECHNOLOGY\s{1,30})([A-Z][A-Z\s]{2,50}?)(?=\s*Programme|\s*Register|\s*Name)",
    ]),
    CardField.PROGRAMME: compile_patterns([
        rf"(?i)Programme\s*{SEP}\s*([A-Z0-9\.\(\)\s&-]+?)(?=\n|Register|Valid|$)",
        rf"(?i)Program\s*{SEP}\s*([A-Z0-9\.\(\)\s&-]+?)(?=\n|Register|Valid|$)",
        r"(?i)[:©€]\s*(B\.?\s*Tech[^\n]*?)(?=\s*Register|\s*Valid|\n|$)",
        r"(?i)(B\.?\s*Tech\s*\([^)]+\))",
    ]),
    CardField.REGISTER_NUMBER: compile_patterns([
        rf"(?i)Register\s*No\.?\s*{SEP}\s*([A-Z]{{2}}\d{{8,12}})",
        rf"(?i)Reg\.?\s*No\.?\s*{SEP}\s*([A-Z]{{2}}\d{{8,12}})",
        rf"(?i)Register\s*Number\s*{SEP}\s*([A-Z]{{2}}\d{{8,12}})",
        r"([A-Z]{2}\d{10})",
    ]),
    CardField.VALID_FROM: compile_patterns([
        rf"(?i)Valid\s*From\s*{SEP}\s*{_MONTH_YEAR}",
        rf"(?i)From\s*{SEP}\s*([A-Za-z]{{3,9}}[-\s]?\d{{4}})",
    ]),
    CardField.VALID_TO: compile_patterns([
        rf"(?i)To\s*{SEP}\s*{_MONTH_YEAR}",
        rf"(?i)Valid\s*To\s*{SEP}\s*{_MONTH_YEAR}",
    ]),
    CardField.BLOOD_GROUP: compile_patterns([
        rf"(?i)Blood\s*Group\s*{SEP}\s*([ABO]+\s*[+\-]\s*(?:ve|VE)?)",
        rf"(?i)Blood\s*Group\s*{SEP}\s*([ABO]\s*[+\-])",
        r"([ABO]+\s*[+\-]\s*(?:ve|VE)?)",
        # Digits misread for letters, e.g. "4VE", "0+"
        r"([0-9ABO]+\s*[vV+\-]?[eE€]?)",
    ]),
    CardField.DATE_OF_BIRTH: compile_patterns([
        rf"(?i)Date\s*of\s*Birth\s*{SEP}\s*{_DAY_MONTH_YEAR}",
        rf"(?i)Birth\s*{SEP}\s*{_DAY_MONTH_YEAR}",
        rf"(?i)DOB\s*{SEP}\s*{_DAY_MONTH_YEAR}",
        r"(\d{1,2}\s*[-\/\\]?\s*[A-Za-z]{3,9}\s*[-\/\\]?\s*\d{4})",
    ]),
    CardField.ADDRESS: compile_patterns([
        rf"(?i)Address\s*{SEP}\s*([\s\S]{{10,200}}?)(?={_PIN_AHEAD}|Perm\.?\s*Cont|$)",
        # Fallback: the lines between the birth date and the pin code
        rf"(?i)(?:Birth|DOB)[^\n]*\n\s*([\s\S]{{10,200}}?)(?={_PIN_AHEAD})",
    ], flags=re.MULTILINE),
    CardField.PIN: compile_patterns([
        r"(?i)Pin\s*(?:Code)?\s*[:©€+]?\s*(\d{6})",
        r"(?i)Pincode\s*[:©€+]?\s*(\d{6})",
        r"(?i)Pin\s*[:©€+]?\s*(\d{6})",
        r"(\d{6})(?=\s|$)",
    ]),
    CardField.PERMANENT_CONTACT: compile_patterns([
        rf"(?i)Perm\.?\s*Cont\.?\s*No\.?\s*{SEP}\s*{_PHONE}",
        rf"(?i)Permanent\s*Contact\s*{SEP}\s*{_PHONE}",
        rf"(?i)Perm\s*{SEP}\s*{_PHONE}",
    ]),
    CardField.EMERGENCY_CONTACT: compile_patterns([
        rf"(?i)Emg\.?\s*Cont\.?\s*No\.?\s*{SEP}\s*{_PHONE}",
        rf"(?i)Emergency\s*Contact\s*{SEP}\s*{_PHONE}",
        rf"(?i)Emg\s*{SEP}\s*{_PHONE}",
    ]),
    CardField.EMAIL: compile_patterns([
        rf"(?i)E[-\s]?mail\s*ID\s*{SEP}\s*{_EMAIL}",
        rf"(?i)Email\s*{SEP}\s*{_EMAIL}",
        _EMAIL,
    ]),
})


def patterns_for(card_field: CardField) -> Tuple[FieldPattern, ...]:
    """Ordered patterns for a field; empty for fields not read from text."""
    return FIELD_PATTERNS.get(card_field, ())
