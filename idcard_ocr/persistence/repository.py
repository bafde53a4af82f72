"""
Repository pattern for card record persistence.

Defines the storage interface the registration flows rely on. The
parsing engine never touches it; it only produces the records stored here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, List

from ..models import IDCardRecord


class CardRepository(ABC):
    """
    Abstract repository for ID card records.

    Implementations own identity assignment (`id`, `created_at`) and
    enforce uniqueness of non-empty register numbers.
    """

    @abstractmethod
    def save(self, record: IDCardRecord) -> IDCardRecord:
        """
        Insert a new record or update an existing one.

        Args:
            record: Record to save (id None means insert)

        Returns:
            The stored record

        Raises:
            DuplicateRecordError: if another record has the same register number
        """
        pass

    @abstractmethod
    def get(self, record_id: int) -> Optional[IDCardRecord]:
        """
        Retrieve a record by ID.

        Returns:
            Record if found, None otherwise
        """
        pass

    @abstractmethod
    def list_all(self) -> List[IDCardRecord]:
        """List all records in insertion order."""
        pass

    @abstractmethod
    def delete(self, record_id: int) -> bool:
        """
        Delete a record.

        Returns:
            True if deleted, False if not found
        """
        pass

    def exists(self, record_id: int) -> bool:
        return self.get(record_id) is not None

    def find_by_register_number(self, register_number: str) -> Optional[IDCardRecord]:
        for record in self.list_all():
            if record.register_number == register_number:
                return record
        return None

    def find_by_email(self, email: str) -> Optional[IDCardRecord]:
        for record in self.list_all():
            if record.email == email:
                return record
        return None

    def find_by_verified(self, verified: bool) -> List[IDCardRecord]:
        return [r for r in self.list_all() if r.verified == verified]

    def find_by_card_type(self, card_type: str) -> List[IDCardRecord]:
        return [r for r in self.list_all() if r.card_type == card_type]

    def search_by_name(self, fragment: str) -> List[IDCardRecord]:
        """Records whose name contains `fragment`, ignoring case."""
        fragment = fragment.lower()
        return [r for r in self.list_all() if fragment in (r.name or "").lower()]

    def search_by_programme(self, fragment: str) -> List[IDCardRecord]:
        """Records whose programme contains `fragment`, ignoring case."""
        fragment = fragment.lower()
        return [r for r in self.list_all() if fragment in (r.programme or "").lower()]

    def mark_verified(self, record_id: int) -> Optional[IDCardRecord]:
        """
        Set the verified flag on a stored record.

        Returns:
            Updated record, or None if not found
        """
        record = self.get(record_id)
        if record is None:
            return None
        record.verified = True
        return self.save(record)
