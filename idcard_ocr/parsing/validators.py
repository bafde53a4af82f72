"""
Per-field validation and canonicalization.

`validate_field` either returns the canonical form of a value or an empty
string; it never raises. Blood group and date of birth have their own
normalizers because OCR mangles them in predictable ways.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from ..models import FieldKind

REGISTER_NUMBER_RE = re.compile(r"[A-Z]{2}\d{8,12}", re.ASCII)
PIN_CODE_RE = re.compile(r"\d{6}", re.ASCII)
PHONE_RE = re.compile(r"\d{10}", re.ASCII)
EMAIL_RE = re.compile(r"[\w._%+-]+@[\w.-]+\.\w{2,}", re.ASCII)

_NAME_CHARS_RE = re.compile(r"[A-Za-z\s]+")
_UPPER_NAME_RE = re.compile(r"[A-Z\s]+")
_LETTER_RUN_RE = re.compile(r"[A-Za-z]{3,}")
_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]")
_NON_DIGIT_RE = re.compile(r"\D")
_WHITESPACE_RE = re.compile(r"\s+")

# OCR misreads inside a blood group value, applied in order so the
# compound fix runs before the single-character ones
BLOOD_GROUP_FIXES = (
    ("4VE", "B +ve"),
    ("4", "A"),
    ("0", "O"),
    ("€", "e"),
)
_BLOOD_GROUP_RE = re.compile(r"[ABO]+\s*[+\-].*", re.DOTALL)
_NON_ABO_RE = re.compile(r"[^ABO]")

# Tried in order; the last two are only distinguishable before the
# separators are unified, so dd/MM/yyyy never matches after it
DATE_OF_BIRTH_FORMATS = (
    "%d-%b-%Y",   # dd-MMM-yyyy
    "%d-%B-%Y",   # dd-MMMM-yyyy
    "%d %b %Y",   # dd MMM yyyy
    "%d %B %Y",   # dd MMMM yyyy
    "%d-%m-%Y",   # dd-MM-yyyy
    "%d/%m/%Y",   # dd/MM/yyyy
)
CANONICAL_DATE_FORMAT = "%d-%b-%Y"

_ADDRESS_NOISE_RE = re.compile(r"(Blood Group|Date of Birth|DOB|Birth)[^\n]*", re.IGNORECASE)
_BACKSLASHES_RE = re.compile(r"[\\]+")
_EMPTY_COMMA_RE = re.compile(r",\s*,")


def is_valid_name(name: Optional[str]) -> bool:
    """
    Check that a value looks like a person's name.

    Letters and spaces only, at least 3 characters, not a lone uppercase
    token, and either two words or at least 5 characters.
    """
    if not name or len(name) < 3:
        return False

    if not _NAME_CHARS_RE.fullmatch(name):
        return False

    # A single all-caps token is usually a label or stray heading
    if _UPPER_NAME_RE.fullmatch(name) and len(name.split()) < 2:
        return False

    words = name.strip().split()
    return len(words) >= 2 or len(name) >= 5


def is_valid_address(address: Optional[str]) -> bool:
    if not address or len(address) < 10:
        return False

    if not _LETTER_RUN_RE.search(address):
        return False

    if len(_NON_ALNUM_RE.sub("", address)) < 5:
        return False

    return True


def clean_address(address: Optional[str]) -> str:
    """Strip neighbouring labels and separator noise from an address block."""
    if address is None:
        return ""

    address = _ADDRESS_NOISE_RE.sub("", address)
    address = _BACKSLASHES_RE.sub(", ", address)
    address = _WHITESPACE_RE.sub(" ", address)
    address = _EMPTY_COMMA_RE.sub(",", address)
    return address.strip()


def normalize_blood_group(blood_group: Optional[str]) -> str:
    """
    Canonicalize a blood group to "<TYPE> +ve" / "<TYPE> -ve".

    Values that still do not look like a blood group after the OCR fixes
    are returned cleaned but otherwise unchanged.
    """
    if not blood_group:
        return ""

    for wrong, right in BLOOD_GROUP_FIXES:
        blood_group = blood_group.replace(wrong, right)
    blood_group = _WHITESPACE_RE.sub(" ", blood_group).strip()

    if _BLOOD_GROUP_RE.fullmatch(blood_group):
        group_type = _NON_ABO_RE.sub("", blood_group)
        sign = "+" if "+" in blood_group else "-"
        return f"{group_type} {sign}ve"

    return blood_group


def normalize_date_of_birth(dob: Optional[str]) -> str:
    """
    Reformat a date of birth as dd-Mon-yyyy.

    Backslashes and slashes become hyphens first. If no format parses the
    value, the separator-normalized string is returned as is.
    """
    if not dob:
        return ""

    dob = dob.replace("\\", "-").replace("/", "-")

    for fmt in DATE_OF_BIRTH_FORMATS:
        try:
            parsed = datetime.strptime(dob, fmt)
        except ValueError:
            continue
        return parsed.strftime(CANONICAL_DATE_FORMAT)

    return dob


def validate_field(kind: FieldKind, value: Optional[str]) -> str:
    """
    Validate and canonicalize a field value.

    Returns:
        Canonical value, or "" if the value is missing or rejected
    """
    if value is None or not value.strip():
        return ""

    value = value.strip()

    if kind is FieldKind.NAME:
        return value if is_valid_name(value) else ""

    if kind is FieldKind.REGISTER_NUMBER:
        return value if REGISTER_NUMBER_RE.fullmatch(value) else ""

    if kind is FieldKind.PIN_CODE:
        return value if PIN_CODE_RE.fullmatch(value) else ""

    if kind is FieldKind.PHONE:
        digits = _NON_DIGIT_RE.sub("", value)
        return digits if PHONE_RE.fullmatch(digits) else ""

    if kind is FieldKind.EMAIL:
        return value.lower() if EMAIL_RE.fullmatch(value) else ""

    if kind is FieldKind.BLOOD_GROUP:
        return normalize_blood_group(value)

    if kind is FieldKind.ADDRESS:
        return value if is_valid_address(value) else ""

    # PROGRAMME, DATE, GENERIC
    return value
