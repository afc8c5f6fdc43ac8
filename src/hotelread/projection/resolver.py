"""Resolution of a single hotel into the shape a client asked for."""

from __future__ import annotations

import logging
from typing import Any, Dict, Protocol, Sequence

from hotelread.errors import RemoteDataReadError, StoragePointerError
from hotelread.models import ResolutionFailure
from hotelread.projection.flatten import flatten_object, unwrap
from hotelread.projection.mapping import (
    DATA_FIELDS,
    DESCRIPTION_GROUP,
    GROUP_PROMOTIONS,
    IDENTIFIER_FIELD,
    to_public_fields,
)

LOGGER = logging.getLogger(__name__)

GENERIC_FAILURE = "Cannot get hotel data"
INDEX_FAILURE = "Cannot access on-chain data, maybe the index entry is broken"
DOCUMENT_FAILURE = "Cannot access off-chain data"


class RawHotel(Protocol):
    address: str

    def get_attribute(self, name: str) -> Any | None: ...

    def to_plain_object(self, paths: Sequence[str] = ()) -> Dict[str, Any]: ...


def _failure_message(exc: Exception) -> str:
    if isinstance(exc, RemoteDataReadError):
        return INDEX_FAILURE
    if isinstance(exc, StoragePointerError):
        return DOCUMENT_FAILURE
    return GENERIC_FAILURE


def _resolve_documents(hotel: RawHotel, to_flatten: Sequence[str]) -> Dict[str, Any]:
    plain = hotel.to_plain_object(to_flatten)
    flattened = flatten_object(unwrap(plain["dataUri"]), to_flatten)

    data: Dict[str, Any] = {}
    for name in DATA_FIELDS:
        if name in flattened:
            data[name] = flattened[name]
    data.update(flattened.get(DESCRIPTION_GROUP, {}))
    for group, name in GROUP_PROMOTIONS.items():
        if group in flattened:
            data[name] = flattened[group]
    return data


def resolve_hotel(
    hotel: RawHotel, to_flatten: Sequence[str], on_chain: Sequence[str]
) -> Dict[str, Any] | ResolutionFailure:
    """Merge document and index attributes of one hotel.

    Failures are returned as :class:`ResolutionFailure` rather than raised,
    so a single broken hotel never aborts a listing.
    """
    try:
        data = _resolve_documents(hotel, to_flatten) if to_flatten else {}
        for name in on_chain:
            value = hotel.get_attribute(name)
            if value is not None:
                data[name] = value
    except Exception as exc:
        message = _failure_message(exc)
        if message == GENERIC_FAILURE:
            LOGGER.exception("Unexpected failure while resolving hotel %s", hotel.address)
        else:
            LOGGER.warning("Hotel %s not resolved: %s (%s)", hotel.address, message, exc)
        return ResolutionFailure(
            error=message,
            original_error=str(exc),
            data={IDENTIFIER_FIELD: hotel.address},
        )

    data[IDENTIFIER_FIELD] = hotel.address
    return to_public_fields(data)
