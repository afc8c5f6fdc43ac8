"""Shared fixtures: sample hotels and seeded index databases."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, Iterator

import pytest

from hotelread.index.directory import HotelDirectory
from hotelread.index.indexer import HotelLoader
from hotelread.index.pointers import DocumentFetcher
from hotelread.index.storage import SQLiteHotelStore

MANAGER = "0x" + "a" * 40
MISSING_POINTER = "json://" + "0" * 64

DESCRIPTION: Dict[str, Any] = {
    "name": "Hotel Prague",
    "description": "A quiet hotel in the old town.",
    "location": {"latitude": 50.087, "longitude": 14.421},
    "contacts": {"general": {"email": "info@example.com", "phone": "+420123456789"}},
    "address": {"line1": "Main street 1", "city": "Prague", "country": "CZ"},
    "roomTypes": {
        "single": {"name": "Single", "totalQuantity": 3, "occupancy": {"min": 1, "max": 1}},
        "double": {"name": "Double", "totalQuantity": 2, "occupancy": {"min": 1, "max": 2}},
    },
    "timezone": "Europe/Prague",
    "currency": "CZK",
    "images": ["https://example.com/front.jpg"],
    "amenities": ["wifi", "parking"],
    "updatedAt": "2018-06-19T15:53:00+0200",
    "defaultCancellationAmount": 30,
    "cancellationPolicies": [{"from": "2018-01-01", "to": "2018-12-31", "amount": 50}],
}

RATE_PLANS: Dict[str, Any] = {
    "basic": {"name": "Basic", "currency": "CZK", "price": 100, "roomTypeIds": ["single"]},
}

AVAILABILITY: Dict[str, Any] = {
    "single": [{"date": "2018-07-01", "quantity": 2}],
}


def make_address(number: int) -> str:
    return "0x" + f"{number:040x}"


def hotel_payload(number: int, **overrides: Any) -> Dict[str, Any]:
    """Hotel file entry as accepted by HotelLoader."""
    description = copy.deepcopy(DESCRIPTION)
    description["name"] = f"Hotel {number}"
    payload: Dict[str, Any] = {
        "address": make_address(number),
        "manager": MANAGER,
        "dataFormatVersion": "0.2.0",
        "description": description,
        "ratePlans": copy.deepcopy(RATE_PLANS),
        "availability": copy.deepcopy(AVAILABILITY),
        "notificationsUri": "https://notifications.example.com",
        "bookingUri": "https://booking.example.com",
    }
    payload.update(overrides)
    return payload


def seed(db_path: Path, *hotels: Dict[str, Any]) -> Path:
    store = SQLiteHotelStore(db_path)
    try:
        loader = HotelLoader(store)
        for hotel in hotels:
            loader.load_hotel(hotel)
    finally:
        store.close()
    return db_path


@pytest.fixture
def store(tmp_path: Path) -> Iterator[SQLiteHotelStore]:
    """Empty store in a temporary database."""
    store = SQLiteHotelStore(tmp_path / "hotels.db")
    yield store
    store.close()


@pytest.fixture
def directory(store: SQLiteHotelStore) -> HotelDirectory:
    """Directory over three healthy hotels."""
    loader = HotelLoader(store)
    for number in (1, 2, 3):
        loader.load_hotel(hotel_payload(number))
    return HotelDirectory(store, DocumentFetcher(store))
