"""
ID card data models.

Represents the per-side parse result and the merged, storable card record.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, Any, Dict


class CardType(str, Enum):
    """Classification tag of a parsed side or of a merged record."""
    FRONT = "FRONT"
    BACK = "BACK"
    UNKNOWN = "UNKNOWN"
    MERGED = "MERGED"


class FieldKind(str, Enum):
    """Validation family of a field; drives canonicalization rules."""
    NAME = "NAME"
    REGISTER_NUMBER = "REGISTER_NUMBER"
    PROGRAMME = "PROGRAMME"
    DATE = "DATE"
    BLOOD_GROUP = "BLOOD_GROUP"
    PIN_CODE = "PIN_CODE"
    PHONE = "PHONE"
    EMAIL = "EMAIL"
    ADDRESS = "ADDRESS"
    GENERIC = "GENERIC"


class CardField(Enum):
    """
    A printed field of the card.

    Each member carries the attribute name it maps to on IDCardRecord
    and the FieldKind used to validate it.
    """

    # Front side
    NAME = ("name", FieldKind.NAME)
    REGISTER_NUMBER = ("register_number", FieldKind.REGISTER_NUMBER)
    PROGRAMME = ("programme", FieldKind.PROGRAMME)
    VALID_FROM = ("valid_from", FieldKind.DATE)
    VALID_TO = ("valid_to", FieldKind.DATE)
    INSTITUTION = ("institution", FieldKind.GENERIC)
    FACULTY = ("faculty", FieldKind.GENERIC)

    # Back side
    BLOOD_GROUP = ("blood_group", FieldKind.BLOOD_GROUP)
    DATE_OF_BIRTH = ("date_of_birth", FieldKind.DATE)
    ADDRESS = ("address", FieldKind.ADDRESS)
    PIN = ("pin", FieldKind.PIN_CODE)
    PERMANENT_CONTACT = ("permanent_contact", FieldKind.PHONE)
    EMERGENCY_CONTACT = ("emergency_contact", FieldKind.PHONE)
    EMAIL = ("email", FieldKind.EMAIL)

    def __init__(self, attr: str, kind: FieldKind):
        self.attr = attr
        self.kind = kind


FRONT_FIELDS = (
    CardField.NAME,
    CardField.REGISTER_NUMBER,
    CardField.PROGRAMME,
    CardField.VALID_FROM,
    CardField.VALID_TO,
    CardField.INSTITUTION,
    CardField.FACULTY,
)

BACK_FIELDS = (
    CardField.BLOOD_GROUP,
    CardField.DATE_OF_BIRTH,
    CardField.ADDRESS,
    CardField.PIN,
    CardField.PERMANENT_CONTACT,
    CardField.EMERGENCY_CONTACT,
    CardField.EMAIL,
)


@dataclass(frozen=True)
class ExtractionCandidate:
    """A provisional field value produced by one pattern attempt."""
    value: str
    confidence: int
    pattern_index: int


@dataclass
class SideRecord:
    """
    Parse result for one side of a card.

    `fields` only ever holds the fields printed on that side; an UNKNOWN
    side holds none.
    """

    card_type: CardType = CardType.UNKNOWN
    fields: Dict[CardField, str] = field(default_factory=dict)
    raw_text: str = ""

    def get(self, card_field: CardField) -> str:
        """Value of a field, empty string when not present on this side."""
        return self.fields.get(card_field, "")

    def has_field(self, card_field: CardField) -> bool:
        return card_field in self.fields

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data: dict[str, Any] = {"card_type": self.card_type.value}
        data.update({f.attr: value for f, value in self.fields.items()})
        data["raw_text"] = self.raw_text
        return data


@dataclass
class IDCardRecord:
    """
    Canonical card record built from both sides.

    This is the unit handed to persistence; `id`, `created_at` and
    `verified` are owned by the storage layer and the registration flow.
    """

    # Primary key (assigned on save)
    id: Optional[int] = None

    # Front side
    name: str = ""
    register_number: str = ""
    programme: str = ""
    valid_from: str = ""
    valid_to: str = ""
    institution: str = ""
    faculty: str = ""

    # Back side
    blood_group: str = ""
    date_of_birth: str = ""
    address: str = ""
    pin: str = ""
    permanent_contact: str = ""
    emergency_contact: str = ""
    email: str = ""

    # Audit fields
    raw_text: str = ""
    card_type: str = CardType.MERGED.value
    file_name: str = ""
    verified: bool = False
    created_at: str = ""  # ISO timestamp

    def get(self, card_field: CardField) -> str:
        return getattr(self, card_field.attr)

    def set(self, card_field: CardField, value: str) -> None:
        setattr(self, card_field.attr, value)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "IDCardRecord":
        """Create IDCardRecord from dictionary, ignoring unknown keys."""
        return cls(**{
            k: v for k, v in data.items()
            if k in cls.__dataclass_fields__
        })

    @property
    def is_complete(self) -> bool:
        """Check if the identifying fields are populated."""
        return bool(self.register_number and self.name)
