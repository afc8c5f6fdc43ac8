"""Cursor-based pagination over an ordered collection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, List, Mapping, Sequence, TypeVar

T = TypeVar("T")


class LimitValidationError(ValueError):
    """The page size is not a natural number greater than 0."""


class MissingStartWithError(LookupError):
    """The start cursor does not identify any element of the collection."""


@dataclass(slots=True)
class PageWindow(Generic[T]):
    items: List[T] = field(default_factory=list)
    next_start: str | None = None


def parse_limit(value: Any, default: int, maximum: int | None = None) -> int:
    """Validate a client-supplied page size.

    ``None`` or an empty string gives ``default``; values above ``maximum``
    are clamped to it.
    """
    if value is None or value == "":
        limit = default
    elif isinstance(value, bool):
        raise LimitValidationError(f"Invalid limit: {value!r}")
    elif isinstance(value, int):
        limit = value
    else:
        try:
            limit = int(str(value).strip(), 10)
        except ValueError as exc:
            raise LimitValidationError(f"Invalid limit: {value!r}") from exc
    if limit <= 0:
        raise LimitValidationError(f"Limit must be greater than 0, got {limit}")
    if maximum is not None:
        limit = min(limit, maximum)
    return limit


def _key_of(item: Any, key: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(key)
    return getattr(item, key, None)


def paginate(
    items: Sequence[T], limit: Any, start_with: str | None = None, key: str = "address"
) -> PageWindow[T]:
    """Return up to ``limit`` items starting at the item keyed ``start_with``.

    The collection's own order is kept. ``next_start`` is the key of the
    first item not returned, or None when the window reaches the end.
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise LimitValidationError(f"Invalid limit: {limit!r}")

    start = 0
    if start_with is not None:
        for index, item in enumerate(items):
            if _key_of(item, key) == start_with:
                start = index
                break
        else:
            raise MissingStartWithError(start_with)

    window = list(items[start : start + limit])
    end = start + len(window)
    next_start = _key_of(items[end], key) if end < len(items) else None
    return PageWindow(items=window, next_start=next_start)
