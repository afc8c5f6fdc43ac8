"""Service description served at the API root."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

from hotelread import __version__

router = APIRouter()


@router.get("/")
async def index(request: Request) -> dict[str, Any]:
    config = request.app.state.config if hasattr(request.app.state, "config") else None
    base_url = config.base_url if config is not None else str(request.base_url).rstrip("/")
    return {
        "name": "hotelread",
        "version": __version__,
        "docs": f"{base_url}/docs",
        "baseUrl": base_url,
    }
