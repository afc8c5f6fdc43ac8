"""Turn a client field list into a query plan."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from hotelread.projection.mapping import (
    DATA_FIELDS,
    DESCRIPTION_FIELDS,
    DESCRIPTION_GROUP,
    DOCUMENT_GROUPS,
    ON_CHAIN_FIELDS,
    to_internal_field_names,
    to_public_field_name,
)
from hotelread.utils.text import normalize_path, split_csv, split_path, unique


@dataclass(slots=True)
class PathSpec:
    """Which fields were asked for and where each of them lives.

    ``mapped`` holds the internal names of every accepted field. Index
    attributes end up in ``on_chain``, everything that needs a document fetch
    in ``to_flatten``; no field is in both.
    """

    mapped: List[str] = field(default_factory=list)
    on_chain: List[str] = field(default_factory=list)
    to_flatten: List[str] = field(default_factory=list)

    @property
    def requested(self) -> List[str]:
        """Public names of the accepted fields."""
        return [to_public_field_name(path) for path in self.mapped]

    @property
    def top_level(self) -> List[str]:
        """Public top-level attribute names the response may contain."""
        return list(unique(split_path(path)[0] for path in self.requested))


def _classify(path: str) -> tuple[str, str] | None:
    head, _ = split_path(path)
    if head in ON_CHAIN_FIELDS:
        return "on_chain", head
    if head in DESCRIPTION_FIELDS:
        return "to_flatten", f"{DESCRIPTION_GROUP}.{path}"
    if head in DOCUMENT_GROUPS or head in DATA_FIELDS:
        return "to_flatten", path
    return None


def plan(fields: str | Sequence[str]) -> PathSpec:
    """Build a :class:`PathSpec` from a comma-joined string or a list of paths.

    Malformed and unknown paths are dropped without raising.
    """
    normalized = [path for path in map(normalize_path, split_csv(fields)) if path]
    mapped = list(unique(to_internal_field_names(normalized)))

    spec = PathSpec(mapped=mapped)
    for path in mapped:
        classified = _classify(path)
        if classified is None:
            continue
        target, value = classified
        bucket = spec.on_chain if target == "on_chain" else spec.to_flatten
        if value not in bucket:
            bucket.append(value)
    return spec
