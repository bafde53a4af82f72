"""
Merging of independently parsed front and back sides.
"""

from __future__ import annotations

from typing import Optional

from ..logger import get_logger
from ..models import BACK_FIELDS, FRONT_FIELDS, CardType, IDCardRecord, SideRecord

logger = get_logger(__name__)


def merge_sides(
    front: Optional[SideRecord] = None,
    back: Optional[SideRecord] = None,
) -> IDCardRecord:
    """
    Combine a front and a back SideRecord into one IDCardRecord.

    Front-only fields are read from `front` alone and back-only fields
    from `back` alone, so neither side can overwrite the other. A missing
    side leaves its fields empty and contributes no audit text.
    """
    merged = IDCardRecord()
    raw_parts = []

    if front is not None:
        for card_field in FRONT_FIELDS:
            merged.set(card_field, front.get(card_field))
        raw_parts.append(f"FRONT:\n{front.raw_text}\n\n")

    if back is not None:
        for card_field in BACK_FIELDS:
            merged.set(card_field, back.get(card_field))
        raw_parts.append(f"BACK:\n{back.raw_text}")

    merged.raw_text = "".join(raw_parts)
    merged.card_type = CardType.MERGED.value

    logger.info("Successfully merged front and back card data")

    return merged
