"""
OCR text cleanup applied before any classification or extraction.
"""

from __future__ import annotations

import re
from typing import Optional

# (pattern, replacement), applied in order
OCR_CORRECTIONS = (
    # Glyphs Tesseract emits in place of a colon
    (re.compile(r"[©€]"), ":"),
    # Number/letter confusions
    (re.compile(r"8\s*Tech"), "B.Tech"),
    (re.compile(r"4VE", re.IGNORECASE), "B +ve"),
    (re.compile(r"apri1", re.IGNORECASE), "April"),
    (re.compile(r"0ct", re.IGNORECASE), "Oct"),
)

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    """
    Fix known OCR misreads and collapse whitespace.

    Never fails; None or empty input yields an empty string. Applying it
    twice gives the same result as applying it once.
    """
    if not text:
        return ""

    for pattern, replacement in OCR_CORRECTIONS:
        text = pattern.sub(replacement, text)

    return _WHITESPACE_RE.sub(" ", text).strip()
