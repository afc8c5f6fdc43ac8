"""Tests for SQLiteHotelStore."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import MANAGER, make_address
from hotelread.index.storage import JSON_SCHEME, SQLiteHotelStore
from hotelread.models import HotelRow


class TestSQLiteHotelStore:
    """Test SQLiteHotelStore initialization and schema."""

    def test_init_creates_database(self, tmp_path: Path) -> None:
        db_path = tmp_path / "new.db"
        assert not db_path.exists()

        store = SQLiteHotelStore(db_path)

        assert db_path.exists()
        assert store.db_path == db_path
        store.close()

    def test_schema_creation(self, store: SQLiteHotelStore) -> None:
        """Test that schema is properly created."""
        conn = store.connection
        for table in ("hotels", "documents"):
            cursor = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name=?", (table,)
            )
            assert cursor.fetchone() is not None

    def test_pragma_settings(self, store: SQLiteHotelStore) -> None:
        """Test that PRAGMA settings are applied."""
        mode = store.connection.execute("PRAGMA journal_mode").fetchone()[0]
        assert mode.lower() == "wal"

    def test_reopen_keeps_data(self, tmp_path: Path) -> None:
        db_path = tmp_path / "hotels.db"
        store = SQLiteHotelStore(db_path)
        with store.transaction():
            store.upsert_hotel(make_address(1), MANAGER, "json://abc")
        store.close()

        reopened = SQLiteHotelStore(db_path)
        assert reopened.get_hotel(make_address(1)) is not None
        reopened.close()


class TestTransaction:
    """Test the transaction context manager."""

    def test_commit(self, store: SQLiteHotelStore) -> None:
        with store.transaction():
            store.upsert_hotel(make_address(1), MANAGER, "json://abc")
        assert len(store.list_hotels()) == 1

    def test_rollback_on_error(self, store: SQLiteHotelStore) -> None:
        with pytest.raises(RuntimeError):
            with store.transaction():
                store.upsert_hotel(make_address(1), MANAGER, "json://abc")
                raise RuntimeError("abort")
        assert store.list_hotels() == []


class TestHotels:
    """Test index rows."""

    def test_upsert_statuses(self, store: SQLiteHotelStore) -> None:
        with store.transaction():
            assert store.upsert_hotel(make_address(1), MANAGER, "json://a") == "inserted"
            assert store.upsert_hotel(make_address(1), MANAGER, "json://a") == "skipped"
            assert store.upsert_hotel(make_address(1), MANAGER, "json://b") == "updated"

        assert store.get_hotel(make_address(1)) == HotelRow(make_address(1), MANAGER, "json://b")

    def test_list_keeps_insertion_order(self, store: SQLiteHotelStore) -> None:
        with store.transaction():
            for number in (3, 1, 2):
                store.upsert_hotel(make_address(number), MANAGER, "json://a")
            store.upsert_hotel(make_address(3), MANAGER, "json://b")

        addresses = [row.address for row in store.list_hotels()]
        assert addresses == [make_address(3), make_address(1), make_address(2)]

    def test_get_hotel_is_case_insensitive(self, store: SQLiteHotelStore) -> None:
        address = make_address(0xABC)
        with store.transaction():
            store.upsert_hotel(address, MANAGER, "json://a")

        row = store.get_hotel(address.upper().replace("0X", "0x"))

        assert row is not None
        assert row.address == address

    def test_get_missing_hotel(self, store: SQLiteHotelStore) -> None:
        assert store.get_hotel(make_address(1)) is None


class TestDocuments:
    """Test pointer-addressed documents."""

    def test_put_and_get(self, store: SQLiteHotelStore) -> None:
        with store.transaction():
            pointer = store.put_document({"name": "Hotel", "rooms": [1, 2]})

        assert pointer.startswith(JSON_SCHEME)
        assert store.get_document(pointer[len(JSON_SCHEME):]) == {"name": "Hotel", "rooms": [1, 2]}

    def test_same_document_same_pointer(self, store: SQLiteHotelStore) -> None:
        with store.transaction():
            first = store.put_document({"a": 1, "b": 2})
            second = store.put_document({"b": 2, "a": 1})

        assert first == second
        assert store.get_stats()["document_count"] == 1

    def test_missing_document(self, store: SQLiteHotelStore) -> None:
        assert store.get_document("0" * 64) is None

    def test_stats(self, store: SQLiteHotelStore) -> None:
        assert store.get_stats() == {"hotel_count": 0, "document_count": 0}
        with store.transaction():
            store.upsert_hotel(make_address(1), MANAGER, store.put_document({"x": 1}))
        assert store.get_stats() == {"hotel_count": 1, "document_count": 1}
