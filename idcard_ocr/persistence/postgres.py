"""
PostgreSQL repository implementation.
"""
from __future__ import annotations

import logging
from dataclasses import fields
from typing import Optional, List, Any, Dict

import psycopg2
from psycopg2 import errors, sql
from psycopg2.extras import RealDictCursor

from .repository import CardRepository
from ..config import DBConfig
from ..exceptions import DataPersistenceError, DuplicateRecordError
from ..models import IDCardRecord

logger = logging.getLogger(__name__)

TABLE_NAME = "id_card_records"

# Every record attribute except the generated ones
DATA_COLUMNS = [
    f.name for f in fields(IDCardRecord) if f.name not in ("id", "created_at")
]


class PostgresCardRepository(CardRepository):
    """
    PostgreSQL repository for registered ID card records.

    Handles:
    - Connection management
    - Schema initialization
    - Record insert/update and the lookups used by login
    """

    def __init__(self, config: DBConfig):
        """
        Initialize repository.

        Args:
            config: Database configuration
        """
        self.config = config
        self._conn = None
        self._table = sql.Identifier(config.schema or "public", TABLE_NAME)

    def _get_connection(self):
        """Get or create database connection."""
        if self._conn is None or self._conn.closed:
            try:
                self._conn = psycopg2.connect(
                    host=self.config.host,
                    port=self.config.port,
                    dbname=self.config.name,
                    user=self.config.user,
                    password=self.config.password,
                    sslmode=self.config.ssl_mode
                )
                self._conn.autocommit = False
            except psycopg2.Error as e:
                logger.error(f"Failed to connect to PostgreSQL: {e}")
                raise DataPersistenceError(
                    f"Failed to connect to PostgreSQL: {e}",
                    location=f"{self.config.host}:{self.config.port}/{self.config.name}",
                    operation="connect",
                ) from e
        return self._conn

    def init_db(self):
        """Initialize database schema."""
        conn = self._get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(sql.SQL("""
                    CREATE TABLE IF NOT EXISTS {table} (
                        id SERIAL PRIMARY KEY,
                        name TEXT DEFAULT '',
                        register_number TEXT DEFAULT '',
                        programme TEXT DEFAULT '',
                        valid_from TEXT DEFAULT '',
                        valid_to TEXT DEFAULT '',
                        institution TEXT DEFAULT '',
                        faculty TEXT DEFAULT '',
                        blood_group TEXT DEFAULT '',
                        date_of_birth TEXT DEFAULT '',
                        address TEXT DEFAULT '',
                        pin TEXT DEFAULT '',
                        permanent_contact TEXT DEFAULT '',
                        emergency_contact TEXT DEFAULT '',
                        email TEXT DEFAULT '',
                        raw_text TEXT DEFAULT '',
                        card_type TEXT DEFAULT 'MERGED',
                        file_name TEXT DEFAULT '',
                        verified BOOLEAN DEFAULT FALSE,
                        created_at TIMESTAMP WITH TIME ZONE DEFAULT CURRENT_TIMESTAMP
                    );
                """).format(table=self._table))

                # Empty register numbers are allowed more than once
                cur.execute(sql.SQL("""
                    CREATE UNIQUE INDEX IF NOT EXISTS idx_id_card_records_register_number
                    ON {table} (register_number) WHERE register_number <> '';
                """).format(table=self._table))
                cur.execute(sql.SQL(
                    "CREATE INDEX IF NOT EXISTS idx_id_card_records_email ON {table} (email);"
                ).format(table=self._table))

            conn.commit()
            logger.info("Database schema initialized")
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to initialize database: {e}")
            raise DataPersistenceError(
                f"Failed to initialize database: {e}", location=TABLE_NAME, operation="init_db"
            ) from e

    @staticmethod
    def _to_record(row: Dict[str, Any]) -> IDCardRecord:
        data = dict(row)
        created_at = data.get("created_at")
        if created_at is not None and not isinstance(created_at, str):
            data["created_at"] = created_at.isoformat(timespec="seconds")
        return IDCardRecord.from_dict(data)

    def _fetch(self, where: sql.Composable, params: tuple = ()) -> List[IDCardRecord]:
        conn = self._get_connection()
        query = sql.SQL("SELECT * FROM {table} {where} ORDER BY id").format(
            table=self._table, where=where
        )
        try:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(query, params)
                rows = cur.fetchall()
            conn.commit()
        except psycopg2.Error as e:
            conn.rollback()
            raise DataPersistenceError(
                f"Failed to query card records: {e}", location=TABLE_NAME, operation="select"
            ) from e
        return [self._to_record(row) for row in rows]

    def save(self, record: IDCardRecord) -> IDCardRecord:
        """Insert or update a record; the database assigns id and created_at."""
        conn = self._get_connection()
        values = [getattr(record, column) for column in DATA_COLUMNS]
        columns = sql.SQL(", ").join(sql.Identifier(c) for c in DATA_COLUMNS)

        if record.id is None:
            query = sql.SQL(
                "INSERT INTO {table} ({columns}) VALUES ({placeholders}) RETURNING *"
            ).format(
                table=self._table,
                columns=columns,
                placeholders=sql.SQL(", ").join(sql.Placeholder() * len(DATA_COLUMNS)),
            )
            params = tuple(values)
        else:
            query = sql.SQL("UPDATE {table} SET {assignments} WHERE id = %s RETURNING *").format(
                table=self._table,
                assignments=sql.SQL(", ").join(
                    sql.SQL("{} = %s").format(sql.Identifier(c)) for c in DATA_COLUMNS
                ),
            )
            params = tuple(values) + (record.id,)

        try:
            with conn.cursor(cursor_factory=RealDictCursor) as cur:
                cur.execute(query, params)
                row = cur.fetchone()
            conn.commit()
        except errors.UniqueViolation as e:
            conn.rollback()
            raise DuplicateRecordError(record.register_number) from e
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to save card record: {e}")
            raise DataPersistenceError(
                f"Failed to save card record: {e}", location=TABLE_NAME, operation="save"
            ) from e

        if row is None:
            raise DataPersistenceError(
                f"Record {record.id} no longer exists", location=TABLE_NAME, operation="save"
            )

        saved = self._to_record(row)
        record.id = saved.id
        record.created_at = saved.created_at
        logger.debug(f"Saved record id={saved.id}")
        return saved

    def get(self, record_id: int) -> Optional[IDCardRecord]:
        records = self._fetch(sql.SQL("WHERE id = %s"), (record_id,))
        return records[0] if records else None

    def list_all(self) -> List[IDCardRecord]:
        return self._fetch(sql.SQL(""))

    def delete(self, record_id: int) -> bool:
        conn = self._get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(
                    sql.SQL("DELETE FROM {table} WHERE id = %s").format(table=self._table),
                    (record_id,),
                )
                deleted = cur.rowcount > 0
            conn.commit()
        except psycopg2.Error as e:
            conn.rollback()
            raise DataPersistenceError(
                f"Failed to delete card record: {e}", location=TABLE_NAME, operation="delete"
            ) from e
        return deleted

    def find_by_register_number(self, register_number: str) -> Optional[IDCardRecord]:
        records = self._fetch(sql.SQL("WHERE register_number = %s"), (register_number,))
        return records[0] if records else None

    def find_by_email(self, email: str) -> Optional[IDCardRecord]:
        records = self._fetch(sql.SQL("WHERE email = %s"), (email,))
        return records[0] if records else None

    def find_by_verified(self, verified: bool) -> List[IDCardRecord]:
        return self._fetch(sql.SQL("WHERE verified = %s"), (verified,))

    def find_by_card_type(self, card_type: str) -> List[IDCardRecord]:
        return self._fetch(sql.SQL("WHERE card_type = %s"), (card_type,))

    def search_by_name(self, fragment: str) -> List[IDCardRecord]:
        return self._fetch(sql.SQL("WHERE name ILIKE %s"), (f"%{fragment}%",))

    def search_by_programme(self, fragment: str) -> List[IDCardRecord]:
        return self._fetch(sql.SQL("WHERE programme ILIKE %s"), (f"%{fragment}%",))
