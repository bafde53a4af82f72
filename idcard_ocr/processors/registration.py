"""
Registration and login flows built on the parsing engine.

Registration parses both sides of a new card, refuses a register number
that is already stored and saves the merged record unverified. Login
parses a freshly scanned front and checks it against the stored record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .base import ProcessingContext
from .card_processor import CardProcessor
from ..config import Config, get_config
from ..exceptions import DuplicateRecordError, RecordNotFoundError
from ..logger import get_logger
from ..models import CardField, IDCardRecord, SideRecord
from ..parsing import CardParser
from ..persistence import CardRepository

logger = get_logger(__name__)

# Login outcomes
AUTH_SUCCESS = "success"
AUTH_INVALID = "invalid"
AUTH_NOT_FOUND = "not_found"
AUTH_MISMATCH = "mismatch"


@dataclass
class AuthenticationResult:
    """Outcome of matching a scanned card front against stored records."""
    status: str
    message: str
    record: Optional[IDCardRecord] = None
    scanned: Optional[SideRecord] = None

    @property
    def authenticated(self) -> bool:
        return self.status == AUTH_SUCCESS


def register_card(
    front_text: Optional[str],
    back_text: Optional[str],
    repository: CardRepository,
    file_names: Sequence[str] = (),
    config: Optional[Config] = None,
) -> IDCardRecord:
    """
    Parse, merge and store a newly presented card.

    Args:
        front_text: OCR text of the front side
        back_text: OCR text of the back side
        repository: Where the record is stored
        file_names: Original upload names (front, back)
        config: Configuration (default: global)

    Returns:
        The stored record, with its id assigned

    Raises:
        DuplicateRecordError: if the register number is already stored
    """
    config = config or get_config()
    names = list(file_names) + ["", ""]
    context = ProcessingContext(
        config=config,
        front_text=front_text,
        back_text=back_text,
        front_name=names[0],
        back_name=names[1],
    )

    # process() rather than run(): run() logs failures and returns False
    CardProcessor(context).process()
    record = context.record
    record.verified = False
    if not record.is_complete:
        logger.warning("Registering a card without a readable name or register number")

    if record.register_number and repository.find_by_register_number(record.register_number):
        logger.warning(f"Register number already stored: {record.register_number}")
        raise DuplicateRecordError(record.register_number)

    saved = repository.save(record)
    logger.info(f"Registered card {saved.register_number or '<no register number>'} as id={saved.id}")
    return saved


def authenticate_card(
    front_text: Optional[str],
    repository: CardRepository,
    parser: Optional[CardParser] = None,
) -> AuthenticationResult:
    """
    Log in with a scanned card front.

    The scanned register number selects the stored record; the login
    succeeds when the stored name contains the first word of the scanned
    name (case-insensitive).
    """
    parser = parser or CardParser()
    scanned = parser.parse(front_text)
    register_number = scanned.get(CardField.REGISTER_NUMBER)
    scanned_name = scanned.get(CardField.NAME)

    logger.debug(f"Login scan: register={register_number!r} name={scanned_name!r}")

    if not register_number:
        return AuthenticationResult(
            AUTH_INVALID, "Could not extract register number from ID card", scanned=scanned
        )

    stored = repository.find_by_register_number(register_number)
    if stored is None:
        return AuthenticationResult(
            AUTH_NOT_FOUND, "User not found. Please register first.", scanned=scanned
        )

    first_word = scanned_name.lower().split()[0] if scanned_name.strip() else ""
    if first_word and first_word in (stored.name or "").lower():
        return AuthenticationResult(AUTH_SUCCESS, "Login successful", record=stored, scanned=scanned)

    return AuthenticationResult(
        AUTH_MISMATCH, "ID card details do not match records", scanned=scanned
    )


def verify_record(record_id: int, repository: CardRepository) -> IDCardRecord:
    """
    Mark a stored record as verified.

    Raises:
        RecordNotFoundError: if no record has that id
    """
    record = repository.mark_verified(record_id)
    if record is None:
        raise RecordNotFoundError(record_id)
    logger.info(f"Record {record_id} verified")
    return record
