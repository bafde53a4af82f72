"""
Card side classification.

Each side of the card prints its own set of labels. The classifier sums
fixed weights for the labels it finds and picks the heavier side.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple

from ..logger import get_logger
from ..models import CardType

logger = get_logger(__name__)


@dataclass(frozen=True)
class SideSignal:
    """
    A weighted keyword signal.

    Fires when any keyword occurs in the text (case-sensitive) and, if
    `requires` is set, that pattern also matches somewhere.
    """
    keywords: Tuple[str, ...]
    weight: int
    requires: Optional[Pattern[str]] = None

    def fires(self, text: str) -> bool:
        if not any(keyword in text for keyword in self.keywords):
            return False
        if self.requires is not None:
            return self.requires.search(text) is not None
        return True


FRONT_SIGNALS: Tuple[SideSignal, ...] = (
    SideSignal(("FACULTY",), 3),
    SideSignal(("Programme", "Program"), 2),
    SideSignal(("Register",), 2),
    SideSignal(("Valid From", "Valid To"), 2),
)

BACK_SIGNALS: Tuple[SideSignal, ...] = (
    SideSignal(("Blood Group",), 3),
    SideSignal(("Address",), 2),
    SideSignal(("Pin",), 2, requires=re.compile(r"Pin\s*[:©€+]?\s*\d{6}")),
    SideSignal(("Cont.No", "Contact"), 2),
    SideSignal(("Date of Birth", "Birth"), 2),
)


def _score(text: str, signals: Tuple[SideSignal, ...]) -> int:
    return sum(signal.weight for signal in signals if signal.fires(text))


def score_card_side(text: str) -> Tuple[int, int]:
    """Return (front_score, back_score) for normalized text."""
    text = text or ""
    return _score(text, FRONT_SIGNALS), _score(text, BACK_SIGNALS)


def classify(text: str) -> CardType:
    """
    Decide which side of the card the text came from.

    FRONT only when the front score is strictly higher; otherwise BACK
    whenever the back score is positive, so positive ties go to BACK.
    UNKNOWN only when neither side scored.
    """
    front_score, back_score = score_card_side(text)
    logger.debug(f"Card type scoring - Front: {front_score}, Back: {back_score}")

    if front_score > back_score:
        return CardType.FRONT
    if back_score > 0:
        return CardType.BACK
    return CardType.UNKNOWN
