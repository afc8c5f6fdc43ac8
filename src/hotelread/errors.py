"""Exceptions raised while reading hotels from the index and its documents."""

from __future__ import annotations

from typing import Any, Dict, List


class HotelDataError(Exception):
    """Base class for failures while reading a single hotel."""


class RemoteDataReadError(HotelDataError):
    """The index entry of a hotel cannot be read."""


class StoragePointerError(HotelDataError):
    """A document pointer cannot be resolved."""


class HotelNotFoundError(LookupError):
    """No hotel with the given address exists in the index."""


class UpstreamInaccessibleError(Exception):
    """The index itself cannot be reached."""


class HotelNotAccessibleError(Exception):
    """A single hotel failed to resolve."""

    def __init__(self, message: str, original_error: Any = None) -> None:
        super().__init__(message)
        self.original_error = original_error


class HotelDataFormatError(ValueError):
    """A resolved hotel does not conform to the requested schema view."""

    def __init__(self, errors: List[Dict[str, Any]], data: Dict[str, Any] | None = None) -> None:
        super().__init__("; ".join(_describe(error) for error in errors) or "invalid hotel data")
        self.errors = errors
        self.data = data


def _describe(error: Dict[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg', '')}" if location else str(error.get("msg", ""))
