"""Project a resolved hotel tree onto a set of dotted field paths."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

from hotelread.models import Resolved, Unresolved
from hotelread.utils.text import split_path

# field name -> remaining sub-paths, or None when the whole field is wanted
FieldTree = Dict[str, "List[str] | None"]


def build_field_tree(paths: Sequence[str]) -> FieldTree:
    """Group paths by their first segment, one level deep.

    Asking for a whole field wins over asking for parts of it.
    """
    tree: FieldTree = {}
    for path in paths:
        head, rest = split_path(path)
        if rest is None:
            tree[head] = None
        elif head not in tree:
            tree[head] = [rest]
        elif tree[head] is not None:
            tree[head].append(rest)
    return tree


def unwrap(value: Any) -> Any:
    """Return the contents of a resolved pointer, or the value itself."""
    if isinstance(value, Resolved):
        return value.contents
    return value


def materialize(value: Any) -> Any:
    """Deep copy a value, replacing every pointer by its contents or its ref."""
    if isinstance(value, Resolved):
        return materialize(value.contents)
    if isinstance(value, Unresolved):
        return value.ref
    if isinstance(value, Mapping):
        return {key: materialize(item) for key, item in value.items()}
    if isinstance(value, list):
        return [materialize(item) for item in value]
    return value


def _project(value: Any, children: List[str] | None) -> Any:
    if children is None:
        return materialize(value)
    return flatten_object(value, children)


def _flatten_sequence(contents: Sequence[Any], tree: FieldTree) -> List[Dict[str, Any]]:
    result: List[Dict[str, Any]] = [{} for _ in contents]
    for field, children in tree.items():
        for slot, item in zip(result, contents):
            item = unwrap(item)
            if isinstance(item, Mapping) and field in item:
                slot[field] = _project(item[field], children)
    return result


def flatten_object(contents: Any, paths: Sequence[str]) -> Any:
    """Extract exactly ``paths`` from ``contents``.

    A field that is not a direct key of a mapping is projected across its
    values instead (``roomTypes.name`` reaches the name of every room type),
    and a list is projected element by element. Missing fields are omitted.
    """
    contents = unwrap(contents)
    tree = build_field_tree(paths)
    if isinstance(contents, list):
        return _flatten_sequence(contents, tree)
    if not isinstance(contents, Mapping):
        return {}

    result: Dict[str, Any] = {}
    for field, children in tree.items():
        if field in contents:
            value = contents[field]
            if children is not None and isinstance(value, Unresolved):
                continue
            result[field] = _project(value, children)
            continue
        # Mapping collection such as roomTypes keyed by room type id
        for key, item in contents.items():
            item = unwrap(item)
            if not isinstance(item, Mapping) or field not in item:
                continue
            slot = result.setdefault(key, {})
            if isinstance(slot, dict):
                slot[field] = _project(item[field], children)
    return result
