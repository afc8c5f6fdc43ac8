"""Core hotelread data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


@dataclass(slots=True, frozen=True)
class Unresolved:
    """Pointer to a document that has not been fetched."""

    ref: str


@dataclass(slots=True, frozen=True)
class Resolved:
    """Pointer together with the document it points to."""

    ref: str
    contents: Any


StoragePointer = Union[Unresolved, Resolved]


@dataclass(slots=True, frozen=True)
class HotelRow:
    """Index-resident attributes of one hotel."""

    address: str
    manager: str | None
    data_uri: str | None


@dataclass(slots=True)
class ResolutionFailure:
    """A hotel that could not be resolved or failed validation."""

    error: str
    original_error: Any
    data: Dict[str, Any] | None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error,
            "originalError": self.original_error,
            "data": self.data,
        }


@dataclass(slots=True)
class Page:
    """One page of resolved hotels plus the cursor for the next one."""

    items: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[ResolutionFailure] = field(default_factory=list)
    next_start: str | None = None
