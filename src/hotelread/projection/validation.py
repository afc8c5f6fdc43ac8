"""Validation of resolved hotels against a schema view of the requested fields."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model

from hotelread.errors import HotelDataFormatError


class _Partial(BaseModel):
    """Nested objects may be projected down to any subset of their fields."""

    model_config = ConfigDict(extra="allow")


class Location(_Partial):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class Address(_Partial):
    line1: Optional[str] = None
    line2: Optional[str] = None
    postalCode: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class Contact(_Partial):
    email: Optional[str] = None
    phone: Optional[str] = None
    url: Optional[str] = None
    ethereum: Optional[str] = None
    additionalContacts: Optional[List[Dict[str, Any]]] = None


class Contacts(_Partial):
    general: Optional[Contact] = None


class Occupancy(_Partial):
    min: Optional[int] = None
    max: Optional[int] = None


class RoomType(_Partial):
    name: Optional[str] = None
    description: Optional[str] = None
    totalQuantity: Optional[int] = None
    occupancy: Optional[Occupancy] = None
    amenities: Optional[List[str]] = None
    images: Optional[List[str]] = None
    updatedAt: Optional[str] = None
    properties: Optional[Dict[str, Any]] = None


class CancellationPolicy(_Partial):
    from_: Optional[str] = Field(default=None, alias="from")
    to: Optional[str] = None
    deadline: Optional[int] = None
    amount: Optional[float] = None


class RatePlan(_Partial):
    name: Optional[str] = None
    description: Optional[str] = None
    currency: Optional[str] = None
    price: Optional[float] = None
    roomTypeIds: Optional[List[str]] = None
    updatedAt: Optional[str] = None
    availableForReservation: Optional[Dict[str, Any]] = None
    availableForTravel: Optional[Dict[str, Any]] = None
    modifiers: Optional[List[Dict[str, Any]]] = None
    restrictions: Optional[Dict[str, Any]] = None


# public field -> (type, required when requested)
HOTEL_SCHEMA: Dict[str, Tuple[Any, bool]] = {
    "id": (str, True),
    "managerAddress": (str, True),
    "dataUri": (str, False),
    "dataFormatVersion": (str, False),
    "name": (str, True),
    "description": (str, True),
    "location": (Location, False),
    "contacts": (Contacts, True),
    "address": (Address, True),
    "roomTypes": (Dict[str, RoomType], False),
    "timezone": (str, False),
    "currency": (str, True),
    "images": (List[str], False),
    "amenities": (List[str], False),
    "updatedAt": (str, True),
    "defaultCancellationAmount": (float, False),
    "cancellationPolicies": (List[CancellationPolicy], False),
    "ratePlans": (Dict[str, RatePlan], False),
    "availability": (Dict[str, Any], False),
    "notificationsUri": (str, False),
    "bookingUri": (str, False),
}


@lru_cache(maxsize=128)
def _build_view(names: Tuple[str, ...]) -> Type[BaseModel]:
    definitions: Dict[str, Any] = {}
    for name in names:
        annotation, required = HOTEL_SCHEMA[name]
        if required:
            definitions[name] = (annotation, ...)
        else:
            definitions[name] = (Optional[annotation], None)
    return create_model("HotelView", __base__=_Partial, **definitions)


def load_schema_view(fields: Iterable[str]) -> Type[BaseModel]:
    """Hotel model restricted to the given public top-level fields.

    A field is required only if the full schema requires it and it was
    requested; unknown names are ignored.
    """
    names = tuple(sorted({name for name in fields if name in HOTEL_SCHEMA}))
    return _build_view(names)


def validate_hotel(hotel: Mapping[str, Any], view: Type[BaseModel]) -> None:
    """Raise :class:`HotelDataFormatError` if ``hotel`` does not fit ``view``."""
    try:
        view.model_validate(dict(hotel))
    except ValidationError as exc:
        violations = [
            {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
            for error in exc.errors()
        ]
        raise HotelDataFormatError(violations, data=dict(hotel)) from exc
