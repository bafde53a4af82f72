"""
Field extraction with confidence scoring.

Runs an ordered list of patterns over card text and keeps the candidate
with the highest confidence. Confidence is a heuristic built from the
value and the pattern definition, not from document context:

    base                                   50
    3 <= len(value) <= 100                +10
    pattern is case-insensitive            +5
    pattern tolerates whitespace (\\s*)     +5
    only letters, digits, whitespace
      and @ . - + ( ) & : / ,             +10
    no leading/trailing whitespace         +5

A blank value scores 0.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Optional, Union

from ..logger import get_logger
from ..models import ExtractionCandidate
from .patterns import FieldPattern, compile_pattern

logger = get_logger(__name__)

BASE_CONFIDENCE = 50
LENGTH_BONUS = 10
CASE_INSENSITIVE_BONUS = 5
WHITESPACE_BONUS = 5
CLEAN_CHARS_BONUS = 10
TRIMMED_BONUS = 5

MIN_VALUE_LENGTH = 3
MAX_VALUE_LENGTH = 100

_UNEXPECTED_CHAR_RE = re.compile(r"[^a-zA-Z0-9\s@.\-+()&:/,]")

PatternLike = Union[FieldPattern, str]


def calculate_confidence(value: Optional[str], pattern: FieldPattern) -> int:
    """Score a candidate value produced by `pattern`."""
    if value is None or not value.strip():
        return 0

    score = BASE_CONFIDENCE

    if MIN_VALUE_LENGTH <= len(value) <= MAX_VALUE_LENGTH:
        score += LENGTH_BONUS
    if pattern.case_insensitive:
        score += CASE_INSENSITIVE_BONUS
    if pattern.whitespace_flexible:
        score += WHITESPACE_BONUS
    if not _UNEXPECTED_CHAR_RE.search(value):
        score += CLEAN_CHARS_BONUS
    if value.strip() == value:
        score += TRIMMED_BONUS

    return score


def _as_field_pattern(pattern: PatternLike) -> FieldPattern:
    if isinstance(pattern, FieldPattern):
        return pattern
    return compile_pattern(pattern)


def extract_best(text: str, patterns: Iterable[PatternLike]) -> Optional[ExtractionCandidate]:
    """
    Try every pattern and return the highest-confidence candidate.

    A candidate only replaces the current best when its confidence is
    strictly greater, so on ties the earliest pattern wins. A pattern that
    is malformed or fails while matching is logged and skipped.

    Returns:
        Best candidate, or None when no pattern matched
    """
    best: Optional[ExtractionCandidate] = None
    text = text or ""

    for index, pattern in enumerate(patterns):
        try:
            field_pattern = _as_field_pattern(pattern)
            value = field_pattern.search(text)
        except Exception as e:
            logger.error(f"Error processing regex pattern: {pattern!r}: {e}")
            continue

        if value is None:
            continue

        confidence = calculate_confidence(value, field_pattern)
        if best is None or confidence > best.confidence:
            best = ExtractionCandidate(value=value, confidence=confidence, pattern_index=index)

    return best


def extract_first_valid(
    text: str,
    patterns: Iterable[PatternLike],
    clean: Callable[[str], str],
    accept: Callable[[str], bool],
) -> str:
    """
    Return the first cleaned match that `accept` approves.

    Used for free-text fields where a later, looser pattern should only be
    consulted when the earlier one produced nothing usable.
    """
    text = text or ""

    for pattern in patterns:
        try:
            value = _as_field_pattern(pattern).search(text)
        except Exception as e:
            logger.error(f"Error processing regex pattern: {pattern!r}: {e}")
            continue

        if value is None:
            continue

        cleaned = clean(value)
        if accept(cleaned):
            return cleaned

    return ""
