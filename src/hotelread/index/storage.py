"""SQLite store backing the hotel index and its JSON documents."""

from __future__ import annotations

import json
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List

from hotelread.models import HotelRow
from hotelread.utils.files import canonical_json, compute_sha256

JSON_SCHEME = "json://"


class SQLiteHotelStore:
    """Persistence layer for index rows and pointer-addressed documents."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        self._conn = sqlite3.connect(self.db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA journal_mode=WAL;")
        self._conn.execute("PRAGMA synchronous=NORMAL;")
        self._ensure_schema()

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    def close(self) -> None:
        self._conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        try:
            yield self._conn
            self._conn.commit()
        except Exception:
            self._conn.rollback()
            raise

    def _ensure_schema(self) -> None:
        with self.transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS hotels (
                    id INTEGER PRIMARY KEY,
                    address TEXT NOT NULL UNIQUE,
                    manager TEXT,
                    data_uri TEXT,
                    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
            conn.execute(
                """
                CREATE TRIGGER IF NOT EXISTS hotels_updated
                AFTER UPDATE ON hotels
                BEGIN
                    UPDATE hotels SET updated_at = CURRENT_TIMESTAMP WHERE id = NEW.id;
                END;
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS documents (
                    key TEXT PRIMARY KEY,
                    contents TEXT NOT NULL,
                    created_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
                """
            )

    def list_hotels(self) -> List[HotelRow]:
        """All index rows in insertion order."""
        rows = self._conn.execute(
            "SELECT address, manager, data_uri FROM hotels ORDER BY id"
        ).fetchall()
        return [_to_row(row) for row in rows]

    def get_hotel(self, address: str) -> HotelRow | None:
        row = self._conn.execute(
            "SELECT address, manager, data_uri FROM hotels WHERE lower(address) = lower(?)",
            (address,),
        ).fetchone()
        return _to_row(row) if row else None

    def put_document(self, contents: Any) -> str:
        """Store a JSON document and return its ``json://`` pointer.

        Documents are keyed by content hash, so storing the same document
        twice yields the same pointer.
        """
        key = compute_sha256(contents)
        self._conn.execute(
            "INSERT OR IGNORE INTO documents(key, contents) VALUES (?, ?)",
            (key, canonical_json(contents)),
        )
        return f"{JSON_SCHEME}{key}"

    def get_document(self, key: str) -> Any | None:
        row = self._conn.execute(
            "SELECT contents FROM documents WHERE key = ?", (key,)
        ).fetchone()
        if row is None:
            return None
        return json.loads(row["contents"])

    def upsert_hotel(self, address: str, manager: str | None, data_uri: str | None) -> str:
        """Insert or update an index row.

        Returns:
            'inserted', 'updated', or 'skipped' when nothing changed.
        """
        # Note: This should be called within a transaction
        conn = self._conn
        existing = conn.execute(
            "SELECT id, manager, data_uri FROM hotels WHERE lower(address) = lower(?)",
            (address,),
        ).fetchone()

        if existing and existing["manager"] == manager and existing["data_uri"] == data_uri:
            return "skipped"

        if existing:
            conn.execute(
                "UPDATE hotels SET manager = ?, data_uri = ? WHERE id = ?",
                (manager, data_uri, existing["id"]),
            )
            return "updated"

        conn.execute(
            "INSERT INTO hotels(address, manager, data_uri) VALUES (?, ?, ?)",
            (address, manager, data_uri),
        )
        return "inserted"

    def get_stats(self) -> dict[str, int]:
        hotel_count = self._conn.execute("SELECT COUNT(*) FROM hotels").fetchone()[0]
        document_count = self._conn.execute("SELECT COUNT(*) FROM documents").fetchone()[0]
        return {"hotel_count": hotel_count, "document_count": document_count}


def _to_row(row: sqlite3.Row) -> HotelRow:
    return HotelRow(address=row["address"], manager=row["manager"], data_uri=row["data_uri"])
