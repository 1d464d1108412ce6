"""
repositories/birthday_repo.py
------------------------------
Data access layer for member birthdays.
All SQL queries related to the `birthdays` table live here.

Every method is a single statement in its own transaction. psycopg2
failures never leave this module as-is: they are logged and re-raised as
the typed errors from `models.errors`.
"""

from typing import Optional

import psycopg2
from psycopg2 import errors

from db.connection import Database
from models.birthday import BirthdayRecord
from models.errors import ConflictError, NotFoundError, StorageError
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "user_id, birth_day, birth_month, name"


class BirthdayRepository:
    """Repository for CRUD operations on the birthdays table."""

    def __init__(self, db: Database):
        self.db = db

    # ── READ ──────────────────────────────────────────────

    def exists(self, owner_id: str) -> bool:
        """
        Check whether the member has a stored birthday.

        Raises:
            StorageError: If the lookup itself failed.
        """
        sql = "SELECT 1 FROM birthdays WHERE user_id = %s;"
        try:
            with self.db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (owner_id,))
                    return cur.fetchone() is not None
        except psycopg2.Error as e:
            raise self._storage_error("exists", owner_id, e) from e

    def get(self, owner_id: str) -> BirthdayRecord:
        """
        Fetch the member's birthday.

        Raises:
            NotFoundError: If nothing is stored for the member.
            StorageError: If the query failed.
        """
        sql = f"SELECT {_COLUMNS} FROM birthdays WHERE user_id = %s;"
        try:
            with self.db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (owner_id,))
                    row = cur.fetchone()
        except psycopg2.Error as e:
            raise self._storage_error("get", owner_id, e) from e

        if row is None:
            raise NotFoundError(owner_id)
        return self._row_to_record(row)

    # ── CREATE ────────────────────────────────────────────

    def insert(self, owner_id: str, day: int, month: int, display_name: str) -> BirthdayRecord:
        """
        Store a new birthday.

        The primary key on `user_id` decides races: when two inserts for the
        same member run concurrently, exactly one commits.

        Raises:
            ConflictError: If the member already has a birthday.
            StorageError: If the insert failed for any other reason.
        """
        sql = f"""
            INSERT INTO birthdays ({_COLUMNS})
            VALUES (%s, %s, %s, %s)
            RETURNING {_COLUMNS};
        """
        try:
            with self.db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (owner_id, day, month, display_name))
                    row = cur.fetchone()
        except errors.UniqueViolation:
            logger.info(f"Birthday for {owner_id} already exists, insert rejected")
            raise ConflictError(owner_id)
        except psycopg2.Error as e:
            raise self._storage_error("insert", owner_id, e) from e

        logger.info(f"Added birthday {day:02d}.{month:02d} for {owner_id}")
        return self._row_to_record(row)

    # ── UPDATE ────────────────────────────────────────────

    def update(
        self,
        owner_id: str,
        day: int,
        month: int,
        display_name: Optional[str] = None,
    ) -> BirthdayRecord:
        """
        Change the stored day and month.

        Args:
            display_name: Refreshed member name. The stored name is kept
                when this is None.

        Raises:
            NotFoundError: If nothing is stored for the member.
            StorageError: If the update failed.
        """
        sql = f"""
            UPDATE birthdays
            SET birth_day = %s,
                birth_month = %s,
                name = COALESCE(%s, name),
                updated_at = NOW()
            WHERE user_id = %s
            RETURNING {_COLUMNS};
        """
        try:
            with self.db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (day, month, display_name, owner_id))
                    row = cur.fetchone()
        except psycopg2.Error as e:
            raise self._storage_error("update", owner_id, e) from e

        if row is None:
            raise NotFoundError(owner_id)
        logger.info(f"Updated birthday of {owner_id} to {day:02d}.{month:02d}")
        return self._row_to_record(row)

    # ── DELETE ────────────────────────────────────────────

    def remove(self, owner_id: str) -> None:
        """
        Delete the member's birthday.

        Raises:
            NotFoundError: If nothing is stored for the member.
            StorageError: If the delete failed.
        """
        sql = "DELETE FROM birthdays WHERE user_id = %s;"
        try:
            with self.db.connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (owner_id,))
                    deleted = cur.rowcount > 0
        except psycopg2.Error as e:
            raise self._storage_error("remove", owner_id, e) from e

        if not deleted:
            raise NotFoundError(owner_id)
        logger.info(f"Removed birthday of {owner_id}")

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_record(row: tuple) -> BirthdayRecord:
        """Convert a database row tuple to a BirthdayRecord domain object."""
        return BirthdayRecord(
            owner_id=row[0],
            day=int(row[1]),
            month=int(row[2]),
            display_name=row[3],
        )

    @staticmethod
    def _storage_error(operation: str, owner_id: str, exc: Exception) -> StorageError:
        logger.error(f"Birthday {operation} failed for {owner_id}: {exc}")
        return StorageError(operation, owner_id, detail=str(exc).strip())
