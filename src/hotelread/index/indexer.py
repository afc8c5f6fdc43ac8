"""Seeding of the local hotel index from JSON files."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping, Sequence

from hotelread.index.storage import SQLiteHotelStore
from hotelread.utils.files import iter_json_paths
from hotelread.utils.text import is_hotel_address

LOGGER = logging.getLogger(__name__)


# hotel file key -> pointer group in the data document
DOCUMENT_KEYS = {
    "description": "descriptionUri",
    "ratePlans": "ratePlansUri",
    "availability": "availabilityUri",
}
PLAIN_KEYS = ("dataFormatVersion", "notificationsUri", "bookingUri")


def find_hotel_files(paths: Sequence[Path]) -> list[Path]:
    """Find all JSON files under the given paths."""
    return list(iter_json_paths(paths))


@dataclass(slots=True)
class LoadStats:
    inserted: int = 0
    updated: int = 0
    skipped: int = 0
    failed: int = 0
    processed_hotels: list[str] = field(default_factory=list)

    def increment(self, status: str, address: str) -> None:
        if status == "inserted":
            self.inserted += 1
        elif status == "updated":
            self.updated += 1
        elif status == "skipped":
            self.skipped += 1
        else:
            self.failed += 1
        self.processed_hotels.append(address)


def _read_hotels(path: Path) -> Iterator[Mapping[str, Any]]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    hotels = payload if isinstance(payload, list) else [payload]
    for hotel in hotels:
        if not isinstance(hotel, Mapping):
            raise ValueError(f"{path} contains a non-object hotel entry")
        yield hotel


class HotelLoader:
    """Stores hotel documents and registers the hotels in the index.

    A hotel file holds one hotel object or a list of them::

        {"address": "0x...", "manager": "0x...", "dataFormatVersion": "0.2.0",
         "description": {...}, "ratePlans": {...}, "availability": {...},
         "notificationsUri": "https://...", "bookingUri": "https://..."}

    ``description``, ``ratePlans`` and ``availability`` may also be given as
    pointer strings, which are stored as they are.
    """

    def __init__(self, store: SQLiteHotelStore) -> None:
        self.store = store

    def load(self, paths: Sequence[Path]) -> LoadStats:
        """Load all hotel files found under the given paths."""
        hotel_files = find_hotel_files(paths)
        if not hotel_files:
            LOGGER.warning("No hotel files found")
            return LoadStats()

        stats = LoadStats()
        for path in hotel_files:
            LOGGER.info("Processing: %s", path)
            try:
                hotels = list(_read_hotels(path))
            except (OSError, ValueError) as e:
                LOGGER.error("Failed to read %s: %s", path, e)
                stats.increment("failed", str(path))
                continue

            for hotel in hotels:
                address = str(hotel.get("address", path))
                try:
                    stats.increment(self.load_hotel(hotel), address)
                except ValueError as e:
                    LOGGER.error("Failed to load hotel %s from %s: %s", address, path, e)
                    stats.increment("failed", address)

        return stats

    def load_hotel(self, hotel: Mapping[str, Any]) -> str:
        """Register a single hotel; returns 'inserted', 'updated' or 'skipped'."""
        address = hotel.get("address")
        if not isinstance(address, str) or not is_hotel_address(address):
            raise ValueError(f"Invalid hotel address: {address!r}")
        if hotel.get("description") is None:
            raise ValueError("Hotel has no description")

        with self.store.transaction():
            data_document: Dict[str, Any] = {}
            for key in PLAIN_KEYS:
                if hotel.get(key) is not None:
                    data_document[key] = hotel[key]
            for key, group in DOCUMENT_KEYS.items():
                value = hotel.get(key)
                if value is None:
                    continue
                data_document[group] = value if isinstance(value, str) else self.store.put_document(value)

            data_uri = self.store.put_document(data_document)
            return self.store.upsert_hotel(address, hotel.get("manager"), data_uri)
