"""
ID card text parsing engine.

Pipeline, leaves first:
- normalize_text: fix known OCR misreads, collapse whitespace
- classify: decide FRONT / BACK / UNKNOWN from weighted labels
- extract_best: ordered patterns + confidence scoring
- validate_field: per-kind acceptance and canonical form
- CardParser: orchestrates the above for one side
- merge_sides: combine front and back into one record
"""

from .normalizer import normalize_text
from .classifier import classify, score_card_side, FRONT_SIGNALS, BACK_SIGNALS
from .patterns import FieldPattern, FIELD_PATTERNS, compile_pattern, patterns_for
from .extractor import calculate_confidence, extract_best, extract_first_valid
from .validators import (
    validate_field,
    is_valid_name,
    is_valid_address,
    clean_address,
    normalize_blood_group,
    normalize_date_of_birth,
)
from .side_parser import (
    CardParser,
    parse_card_text,
    extract_field,
    extract_name,
    extract_blood_group,
    extract_address,
)
from .merger import merge_sides

__all__ = [
    # Normalization and classification
    "normalize_text",
    "classify",
    "score_card_side",
    "FRONT_SIGNALS",
    "BACK_SIGNALS",

    # Patterns and extraction
    "FieldPattern",
    "FIELD_PATTERNS",
    "compile_pattern",
    "patterns_for",
    "calculate_confidence",
    "extract_best",
    "extract_first_valid",

    # Validation
    "validate_field",
    "is_valid_name",
    "is_valid_address",
    "clean_address",
    "normalize_blood_group",
    "normalize_date_of_birth",

    # Side parsing and merging
    "CardParser",
    "parse_card_text",
    "extract_field",
    "extract_name",
    "extract_blood_group",
    "extract_address",
    "merge_sides",
]
