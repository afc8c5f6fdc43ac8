"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_HOTELS_FIELDS = ("id", "location", "name")
DEFAULT_HOTEL_FIELDS = (
    "id",
    "location",
    "name",
    "description",
    "contacts",
    "address",
    "currency",
    "images",
    "amenities",
    "updatedAt",
)


def _get_default_db_path() -> Path:
    """Get the default index database path."""
    # When running from a checkout, prefer local data/ if it exists
    local_db = Path("data/hotels.db")
    if local_db.exists():
        return local_db

    return Path.home() / ".hotelread" / "hotels.db"


@dataclass(slots=True)
class AppConfig:
    db_path: Path | None = None
    base_url: str = "http://localhost:8000"
    default_page_size: int = 30
    max_page_size: int = 300
    fetch_timeout: float = 30.0

    def __post_init__(self) -> None:
        if self.db_path is None:
            self.db_path = _get_default_db_path()
        self.base_url = self.base_url.rstrip("/")

    def resolve_db_path(self, base_dir: Path | None = None) -> Path:
        if self.db_path is None:
            self.db_path = _get_default_db_path()
        if Path(self.db_path).is_absolute() or base_dir is None:
            return Path(self.db_path)
        return base_dir / self.db_path
