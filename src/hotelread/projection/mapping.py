"""Field tables and the mapping between public and internal hotel field names.

Internal names follow the layout of the index and its documents, public names
are what API clients see. The tables below are the single source of truth for
which fields exist and where each one is stored.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

from hotelread.utils.text import split_path

# Attributes stored directly in the index row
ON_CHAIN_FIELDS = ("manager", "dataUri")

# Attributes of the description document
DESCRIPTION_FIELDS = (
    "name",
    "description",
    "location",
    "contacts",
    "address",
    "roomTypes",
    "timezone",
    "currency",
    "images",
    "amenities",
    "updatedAt",
    "defaultCancellationAmount",
    "cancellationPolicies",
)

DESCRIPTION_GROUP = "descriptionUri"

# Groups of the data document requested under their own name
DOCUMENT_GROUPS = ("ratePlansUri", "availabilityUri", "notificationsUri", "bookingUri")

# Plain attributes of the data document itself
DATA_FIELDS = ("dataFormatVersion",)

# Groups that are pointers to further documents
POINTER_GROUPS = (DESCRIPTION_GROUP, "ratePlansUri", "availabilityUri")

# Renames applied when a document group is promoted to a top-level attribute
GROUP_PROMOTIONS: Dict[str, str] = {
    "notificationsUri": "notificationsUri",
    "bookingUri": "bookingUri",
    "ratePlansUri": "ratePlans",
    "availabilityUri": "availability",
}

IDENTIFIER_FIELD = "id"

# public name -> internal name
QUERY_FIELD_MAPPING: Dict[str, str] = {
    "managerAddress": "manager",
    "ratePlans": "ratePlansUri",
    "availability": "availabilityUri",
}

# internal name -> public name
RESPONSE_FIELD_MAPPING: Dict[str, str] = {
    "manager": "managerAddress",
    "ratePlansUri": "ratePlans",
    "availabilityUri": "availability",
}

KNOWN_FIELDS = frozenset(
    (IDENTIFIER_FIELD, *ON_CHAIN_FIELDS, *DESCRIPTION_FIELDS, *DOCUMENT_GROUPS, *DATA_FIELDS)
)


def _rename_head(path: str, table: Mapping[str, str]) -> str:
    head, rest = split_path(path)
    head = table.get(head, head)
    return f"{head}.{rest}" if rest is not None else head


def to_internal_field_names(fields: Iterable[str]) -> List[str]:
    """Map public field paths to internal ones, dropping unknown fields."""
    mapped: List[str] = []
    for field in fields:
        internal = _rename_head(field, QUERY_FIELD_MAPPING)
        if split_path(internal)[0] in KNOWN_FIELDS:
            mapped.append(internal)
    return mapped


def to_public_field_name(path: str) -> str:
    return _rename_head(path, RESPONSE_FIELD_MAPPING)


def to_public_fields(hotel: Mapping[str, Any]) -> Dict[str, Any]:
    """Rename internal top-level keys of a resolved hotel to public names."""
    return {RESPONSE_FIELD_MAPPING.get(key, key): value for key, value in hotel.items()}
