"""Utility helpers for working with files and documents."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any, Iterable, Iterator


def iter_json_paths(inputs: Iterable[Path]) -> Iterator[Path]:
    """Yield JSON paths from input paths, descending into directories."""
    for item in inputs:
        if item.is_dir():
            yield from iter_json_paths(sorted(child for child in item.rglob("*.json")))
        elif item.is_file() and item.suffix.lower() == ".json":
            yield item


def canonical_json(contents: Any) -> str:
    """Serialize a document so that equal documents produce equal text."""
    return json.dumps(contents, sort_keys=True, separators=(",", ":"), ensure_ascii=True)


def compute_sha256(contents: Any) -> str:
    """Compute SHA256 hash for a JSON document."""
    return hashlib.sha256(canonical_json(contents).encode("utf-8")).hexdigest()
