"""Assembly of hotel pages that stay full despite per-hotel failures."""

from __future__ import annotations

import logging
from typing import Any, Dict, Sequence, Type

from pydantic import BaseModel

from hotelread.errors import HotelDataFormatError, HotelNotAccessibleError
from hotelread.models import Page, ResolutionFailure
from hotelread.pagination import paginate
from hotelread.projection.fields import PathSpec
from hotelread.projection.resolver import RawHotel, resolve_hotel
from hotelread.projection.validation import load_schema_view, validate_hotel

LOGGER = logging.getLogger(__name__)

FORMAT_FAILURE = "Upstream hotel data format validation failed: "


def _resolve_and_validate(
    hotel: RawHotel, fields: PathSpec, view: Type[BaseModel]
) -> Dict[str, Any] | ResolutionFailure:
    resolved = resolve_hotel(hotel, fields.to_flatten, fields.on_chain)
    if isinstance(resolved, ResolutionFailure):
        return resolved
    try:
        validate_hotel(resolved, view)
    except HotelDataFormatError as exc:
        LOGGER.warning("Hotel %s failed validation: %s", hotel.address, exc)
        return ResolutionFailure(
            error=FORMAT_FAILURE + str(exc),
            original_error={"valid": False, "errors": exc.errors},
            data=resolved,
        )
    return resolved


def assemble_page(
    fields: PathSpec,
    hotels: Sequence[RawHotel],
    limit: int,
    start_with: str | None = None,
    *,
    schema_view: Type[BaseModel] | None = None,
) -> Page:
    """Resolve a page of ``limit`` hotels starting at ``start_with``.

    Hotels that fail resolution or validation are reported in
    ``Page.errors`` and replaced by further hotels from the collection, so
    the page only comes up short once the collection is exhausted.
    """
    view = schema_view or load_schema_view(fields.top_level)
    page = Page()
    cursor = start_with
    remaining = limit

    while True:
        window = paginate(hotels, remaining, cursor, "address")
        round_failed = False
        for hotel in window.items:
            resolved = _resolve_and_validate(hotel, fields, view)
            if isinstance(resolved, ResolutionFailure):
                page.errors.append(resolved)
                round_failed = True
            else:
                page.items.append(resolved)
                remaining -= 1
        cursor = window.next_start

        if not round_failed or remaining == 0 or cursor is None:
            break
        LOGGER.debug("Backfilling %d hotels starting at %s", remaining, cursor)

    page.next_start = cursor
    return page


def resolve_single(
    hotel: RawHotel, fields: PathSpec, *, schema_view: Type[BaseModel] | None = None
) -> Dict[str, Any]:
    """Resolve and validate one hotel.

    Raises:
        HotelNotAccessibleError: The hotel's data could not be read.
        HotelDataFormatError: The hotel's data does not fit the schema view.
    """
    view = schema_view or load_schema_view(fields.top_level)
    resolved = resolve_hotel(hotel, fields.to_flatten, fields.on_chain)
    if isinstance(resolved, ResolutionFailure):
        raise HotelNotAccessibleError(resolved.error, resolved.original_error)
    validate_hotel(resolved, view)
    return resolved
