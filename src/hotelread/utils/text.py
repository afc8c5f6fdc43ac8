"""Text helpers for field lists and dotted paths."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Sequence

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def split_csv(value: str | Sequence[str]) -> list[str]:
    """Split a comma-joined string, or pass a sequence through, trimming parts.

    Empty parts are dropped, so ``"a,,b"`` and ``["a", " ", "b"]`` both give
    ``["a", "b"]``.
    """
    parts: Iterable[str] = value.split(",") if isinstance(value, str) else value
    return [part.strip() for part in parts if part and part.strip()]


def split_path(path: str) -> tuple[str, str | None]:
    """Split a dotted path into its first segment and the remainder."""
    head, sep, rest = path.partition(".")
    return head, rest if sep else None


def normalize_path(path: str) -> str | None:
    """Trim every segment of a dotted path; None if any segment is empty."""
    segments = [segment.strip() for segment in path.split(".")]
    if not all(segments):
        return None
    return ".".join(segments)


def unique(values: Iterable[str]) -> Iterator[str]:
    """Yield values in order, skipping repeats."""
    seen: set[str] = set()
    for value in values:
        if value not in seen:
            seen.add(value)
            yield value


def is_hotel_address(value: str) -> bool:
    """Whether ``value`` is a 0x-prefixed 20 byte hex address."""
    return bool(ADDRESS_PATTERN.match(value))
