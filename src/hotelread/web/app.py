"""FastAPI application serving hotel projections."""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator
from urllib.parse import urlencode

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware

from hotelread import __version__
from hotelread.config import DEFAULT_HOTEL_FIELDS, DEFAULT_HOTELS_FIELDS, AppConfig
from hotelread.errors import (
    HotelDataError,
    HotelDataFormatError,
    HotelNotAccessibleError,
    HotelNotFoundError,
    UpstreamInaccessibleError,
)
from hotelread.index.directory import HotelDirectory
from hotelread.index.pointers import DocumentFetcher
from hotelread.index.storage import SQLiteHotelStore
from hotelread.listing import assemble_page, resolve_single
from hotelread.models import Page
from hotelread.pagination import LimitValidationError, MissingStartWithError, parse_limit
from hotelread.projection.fields import PathSpec, plan
from hotelread.projection.flatten import materialize
from hotelread.utils.text import is_hotel_address
from hotelread.web.root import router as root_router

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="hotelread", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)
app.include_router(root_router)

META_GROUPS = ("descriptionUri", "ratePlansUri", "availabilityUri", "dataFormatVersion")


def _get_config() -> AppConfig:
    config = getattr(app.state, "config", None)
    return config if config is not None else AppConfig()


def _resolve_db_path(config: AppConfig) -> Path:
    return config.resolve_db_path(Path.cwd())


def _api_error(status_code: int, code: str, short: str, long: str | None = None, **extra: Any) -> HTTPException:
    detail: Dict[str, Any] = {"code": f"#{code}", "short": short, "long": long or short}
    detail.update(extra)
    return HTTPException(status_code=status_code, detail=detail)


def _upstream_error(exc: UpstreamInaccessibleError) -> HTTPException:
    return _api_error(502, "upstreamInaccessible", "Hotel index is not accessible.", str(exc))


@contextmanager
def _open_directory(config: AppConfig) -> Iterator[HotelDirectory]:
    resolved_db = _resolve_db_path(config)
    if not resolved_db.exists():
        raise UpstreamInaccessibleError(f"Hotel index not found at {resolved_db}")

    store = SQLiteHotelStore(resolved_db)
    fetcher = DocumentFetcher(store, timeout=config.fetch_timeout)
    try:
        yield HotelDirectory(store, fetcher)
    finally:
        fetcher.close()
        store.close()


def _check_address(address: str) -> None:
    if not is_hotel_address(address):
        raise _api_error(
            422,
            "hotelAddressFormat",
            "Malformed hotel address.",
            f"{address} is not a 0x-prefixed 20 byte hex address.",
        )


def _next_link(config: AppConfig, path: str, limit: int, fields: PathSpec, cursor: str | None) -> str | None:
    if cursor is None:
        return None
    query = urlencode(
        {"limit": limit, "fields": ",".join(fields.requested), "startWith": cursor},
        safe=",",
    )
    return f"{config.base_url}{path}?{query}"


def _run_list_job(config: AppConfig, fields: PathSpec, limit: int, start_with: str | None) -> Page:
    with _open_directory(config) as directory:
        hotels = directory.list_all()
        return assemble_page(fields, hotels, limit, start_with)


def _run_find_job(config: AppConfig, address: str, fields: PathSpec) -> Dict[str, Any]:
    with _open_directory(config) as directory:
        hotel = directory.get_one(address)
        return resolve_single(hotel, fields)


def _run_meta_job(config: AppConfig, address: str) -> Dict[str, Any]:
    with _open_directory(config) as directory:
        hotel = directory.get_one(address)
        plain = hotel.to_plain_object([])

    data = plain["dataUri"]
    meta: Dict[str, Any] = {"address": plain["address"], "dataUri": data.ref}
    for group in META_GROUPS:
        if data.contents.get(group) is not None:
            meta[group] = materialize(data.contents[group])
    return meta


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.get("/hotels")
async def list_hotels(
    request: Request,
    limit: str | None = None,
    start_with: str | None = Query(None, alias="startWith"),
    fields: str | None = None,
) -> dict[str, Any]:
    """List hotels with the requested fields."""
    config = _get_config()
    try:
        page_size = parse_limit(limit, config.default_page_size, config.max_page_size)
    except LimitValidationError as exc:
        raise _api_error(
            422, "paginationLimitError", "Limit must be a natural number greater than 0.", str(exc)
        ) from exc

    path_spec = plan(fields or ",".join(DEFAULT_HOTELS_FIELDS))
    try:
        page = await asyncio.to_thread(_run_list_job, config, path_spec, page_size, start_with)
    except MissingStartWithError as exc:
        raise _api_error(
            404, "paginationStartWithError", "Cannot find startWith in hotel collection.", str(exc)
        ) from exc
    except UpstreamInaccessibleError as exc:
        raise _upstream_error(exc) from exc

    if page.errors:
        LOGGER.info("Listed %d hotels, %d failed", len(page.items), len(page.errors))

    response: dict[str, Any] = {
        "items": page.items,
        "errors": [failure.to_dict() for failure in page.errors],
    }
    next_link = _next_link(config, request.url.path, page_size, path_spec, page.next_start)
    if next_link is not None:
        response["next"] = next_link
    return response


@app.get("/hotels/{address}")
async def get_hotel(address: str, fields: str | None = None) -> dict[str, Any]:
    """Return one hotel with the requested fields."""
    _check_address(address)
    config = _get_config()
    path_spec = plan(fields or ",".join(DEFAULT_HOTEL_FIELDS))
    try:
        return await asyncio.to_thread(_run_find_job, config, address, path_spec)
    except HotelNotFoundError as exc:
        raise _api_error(404, "hotelNotFound", "Hotel not found.", f"No hotel at {address}.") from exc
    except HotelNotAccessibleError as exc:
        raise _api_error(
            502,
            "hotelNotAccessible",
            "Hotel data is not accessible.",
            str(exc),
            originalError=exc.original_error,
        ) from exc
    except HotelDataFormatError as exc:
        raise _api_error(
            502,
            "hotelDataFormat",
            "Upstream hotel data format validation failed.",
            str(exc),
            errors=exc.errors,
            data=exc.data,
        ) from exc
    except UpstreamInaccessibleError as exc:
        raise _upstream_error(exc) from exc


@app.get("/hotels/{address}/meta")
async def get_hotel_meta(address: str) -> dict[str, Any]:
    """Return the pointers of one hotel without fetching its documents."""
    _check_address(address)
    config = _get_config()
    try:
        return await asyncio.to_thread(_run_meta_job, config, address)
    except HotelNotFoundError as exc:
        raise _api_error(404, "hotelNotFound", "Hotel not found.", f"No hotel at {address}.") from exc
    except HotelDataError as exc:
        raise _api_error(502, "hotelNotAccessible", "Hotel data is not accessible.", str(exc)) from exc
    except UpstreamInaccessibleError as exc:
        raise _upstream_error(exc) from exc
