"""
Data models for the ID card OCR application.

These models represent the core data structures and are designed
to be easily serializable to JSON and mappable to SQL database tables.
"""

from .card import (
    CardType,
    FieldKind,
    CardField,
    FRONT_FIELDS,
    BACK_FIELDS,
    ExtractionCandidate,
    SideRecord,
    IDCardRecord,
)

__all__ = [
    # Enumerations
    "CardType",
    "FieldKind",
    "CardField",
    "FRONT_FIELDS",
    "BACK_FIELDS",

    # Records
    "ExtractionCandidate",
    "SideRecord",
    "IDCardRecord",
]
