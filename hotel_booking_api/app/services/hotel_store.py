"""
Persistence of hotel records.

``HotelStore`` is the only code that touches the ``hotels`` table.
Every query that reads or changes a single record is scoped by both
the hotel id and the owner id, so a record owned by someone else
behaves exactly like a missing one.

All queries use parameterized statements.  Column names in dynamic
``UPDATE`` statements come from the fixed ``_UPDATABLE`` set, never
from client input.
"""

from __future__ import annotations

import json
import sqlite3
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..core.db import get_connection
from ..schemas.hotel import HotelRead


_COLUMNS = (
    "id, owner_id, name, city, country, description, type, star_rating, "
    "price_per_night, adult_count, child_count, facilities, image_urls, last_updated"
)

_UPDATABLE = {
    "name",
    "city",
    "country",
    "description",
    "type",
    "star_rating",
    "price_per_night",
    "adult_count",
    "child_count",
    "facilities",
    "image_urls",
    "last_updated",
}

_JSON_FIELDS = {"facilities", "image_urls"}


def _to_column(key: str, value: Any) -> Any:
    if key in _JSON_FIELDS:
        return json.dumps(list(value))
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class HotelStore:
    """SQLite-backed collection of hotel documents."""

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url

    def _connect(self) -> sqlite3.Connection:
        return get_connection(self.database_url)

    @staticmethod
    def _row_to_hotel(row: sqlite3.Row) -> HotelRead:
        return HotelRead(
            id=row["id"],
            owner_id=row["owner_id"],
            name=row["name"],
            city=row["city"],
            country=row["country"],
            description=row["description"],
            type=row["type"],
            star_rating=row["star_rating"],
            price_per_night=row["price_per_night"],
            adult_count=row["adult_count"],
            child_count=row["child_count"],
            facilities=json.loads(row["facilities"]),
            image_urls=json.loads(row["image_urls"] or "[]"),
            last_updated=row["last_updated"],
        )

    def _fetch(self, cursor: sqlite3.Cursor, hotel_id: str, owner_id: str) -> Optional[sqlite3.Row]:
        return cursor.execute(
            f"SELECT {_COLUMNS} FROM hotels WHERE id = ? AND owner_id = ?",
            (hotel_id, owner_id),
        ).fetchone()

    def insert(self, record: Dict[str, Any]) -> HotelRead:
        """Insert a new hotel document and return it with its assigned id."""
        hotel_id = uuid.uuid4().hex
        conn = self._connect()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"""
                INSERT INTO hotels ({_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    hotel_id,
                    record["owner_id"],
                    record["name"],
                    record["city"],
                    record["country"],
                    record["description"],
                    record["type"],
                    record.get("star_rating"),
                    record["price_per_night"],
                    record.get("adult_count", 0),
                    record.get("child_count", 0),
                    _to_column("facilities", record["facilities"]),
                    _to_column("image_urls", record.get("image_urls", [])),
                    _to_column("last_updated", record["last_updated"]),
                ),
            )
            conn.commit()
            row = self._fetch(cursor, hotel_id, record["owner_id"])
            return self._row_to_hotel(row)
        finally:
            conn.close()

    def find_many(self, owner_id: str) -> List[HotelRead]:
        """Return every hotel of ``owner_id``, most recently updated first."""
        conn = self._connect()
        try:
            rows = conn.execute(
                f"SELECT {_COLUMNS} FROM hotels WHERE owner_id = ? ORDER BY last_updated DESC",
                (owner_id,),
            ).fetchall()
            return [self._row_to_hotel(row) for row in rows]
        finally:
            conn.close()

    def find_one(self, hotel_id: str, owner_id: str) -> Optional[HotelRead]:
        conn = self._connect()
        try:
            row = self._fetch(conn.cursor(), hotel_id, owner_id)
            return self._row_to_hotel(row) if row else None
        finally:
            conn.close()

    def update_one(self, hotel_id: str, owner_id: str, patch: Dict[str, Any]) -> Optional[HotelRead]:
        """Apply ``patch`` to an owned hotel and return the updated record.

        Returns ``None`` when no hotel with this id belongs to
        ``owner_id``.  Keys outside the updatable columns (``id``,
        ``owner_id``) are ignored.
        """
        fields = [key for key in patch if key in _UPDATABLE]
        conn = self._connect()
        try:
            cursor = conn.cursor()
            if fields:
                assignments = ", ".join(f"{key} = ?" for key in fields)
                values = [_to_column(key, patch[key]) for key in fields]
                cursor.execute(
                    f"UPDATE hotels SET {assignments} WHERE id = ? AND owner_id = ?",
                    (*values, hotel_id, owner_id),
                )
                conn.commit()
            row = self._fetch(cursor, hotel_id, owner_id)
            return self._row_to_hotel(row) if row else None
        finally:
            conn.close()

    def delete_one(self, hotel_id: str, owner_id: str) -> Optional[HotelRead]:
        """Remove an owned hotel and return the removed record, or ``None``."""
        conn = self._connect()
        try:
            cursor = conn.cursor()
            row = self._fetch(cursor, hotel_id, owner_id)
            if not row:
                return None
            cursor.execute(
                "DELETE FROM hotels WHERE id = ? AND owner_id = ?",
                (hotel_id, owner_id),
            )
            conn.commit()
            return self._row_to_hotel(row)
        finally:
            conn.close()
