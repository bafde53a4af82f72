"""
JSON file-based storage implementation.

Keeps every card record in a single JSON document:

    {
      "next_id": 3,
      "records": [ {...}, {...} ]
    }

Suitable for a single process and small datasets; use the PostgreSQL
repository otherwise.
"""

from __future__ import annotations

import json
import threading
from datetime import datetime
from pathlib import Path
from typing import Optional, List, Any

from .repository import CardRepository
from ..exceptions import DataPersistenceError, DuplicateRecordError
from ..logger import get_logger
from ..models import IDCardRecord

logger = get_logger(__name__)


class JSONCardStore(CardRepository):
    """
    Card repository backed by one JSON file.

    Every operation reads the file, so several store instances pointing
    at the same path see each other's writes.
    """

    def __init__(self, path: Path):
        """
        Initialize JSON store.

        Args:
            path: JSON file holding the records (created on first save)
        """
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {"next_id": 1, "records": []}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise DataPersistenceError(
                f"Failed to load card records: {e}", location=str(self.path), operation="load"
            ) from e

        data.setdefault("records", [])
        data.setdefault("next_id", max((r.get("id") or 0 for r in data["records"]), default=0) + 1)
        return data

    def _write(self, data: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            raise DataPersistenceError(
                f"Failed to write card records: {e}", location=str(self.path), operation="save"
            ) from e

    def save(self, record: IDCardRecord) -> IDCardRecord:
        """Insert or update a record and return the stored copy."""
        with self._lock:
            data = self._load()
            records = data["records"]

            if record.register_number:
                for existing in records:
                    if (existing.get("register_number") == record.register_number
                            and existing.get("id") != record.id):
                        raise DuplicateRecordError(record.register_number)

            if record.id is None:
                record.id = data["next_id"]
                data["next_id"] += 1
                if not record.created_at:
                    record.created_at = datetime.now().isoformat(timespec="seconds")
                records.append(record.to_dict())
                logger.debug(f"Inserted record id={record.id}")
            else:
                for index, existing in enumerate(records):
                    if existing.get("id") == record.id:
                        records[index] = record.to_dict()
                        break
                else:
                    records.append(record.to_dict())
                logger.debug(f"Updated record id={record.id}")

            self._write(data)

        return IDCardRecord.from_dict(record.to_dict())

    def get(self, record_id: int) -> Optional[IDCardRecord]:
        for record in self.list_all():
            if record.id == record_id:
                return record
        return None

    def list_all(self) -> List[IDCardRecord]:
        return [IDCardRecord.from_dict(r) for r in self._load()["records"]]

    def delete(self, record_id: int) -> bool:
        with self._lock:
            data = self._load()
            remaining = [r for r in data["records"] if r.get("id") != record_id]
            if len(remaining) == len(data["records"]):
                return False
            data["records"] = remaining
            self._write(data)

        logger.debug(f"Deleted record id={record_id}")
        return True
