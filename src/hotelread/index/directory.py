"""Enumeration of the hotels registered in the index."""

from __future__ import annotations

import logging
import sqlite3
from typing import List

from hotelread.errors import HotelNotFoundError, UpstreamInaccessibleError
from hotelread.index.pointers import DocumentFetcher
from hotelread.index.record import HotelRecord
from hotelread.index.storage import SQLiteHotelStore

LOGGER = logging.getLogger(__name__)


class HotelDirectory:
    """High-level API to list and look up hotels."""

    def __init__(self, store: SQLiteHotelStore, fetcher: DocumentFetcher) -> None:
        self.store = store
        self.fetcher = fetcher

    def list_all(self) -> List[HotelRecord]:
        """All hotels in the index's fixed enumeration order."""
        try:
            rows = self.store.list_hotels()
        except sqlite3.Error as exc:
            LOGGER.error("Cannot list hotels from %s: %s", self.store.db_path, exc)
            raise UpstreamInaccessibleError(str(exc)) from exc
        return [HotelRecord(row, self.fetcher) for row in rows]

    def get_one(self, address: str) -> HotelRecord:
        try:
            row = self.store.get_hotel(address)
        except sqlite3.Error as exc:
            LOGGER.error("Cannot read hotel %s from %s: %s", address, self.store.db_path, exc)
            raise UpstreamInaccessibleError(str(exc)) from exc
        if row is None:
            raise HotelNotFoundError(address)
        return HotelRecord(row, self.fetcher)
