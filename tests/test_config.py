"""Tests for application configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from hotelread.config import DEFAULT_HOTEL_FIELDS, DEFAULT_HOTELS_FIELDS, AppConfig


class TestAppConfig:
    """Test AppConfig dataclass."""

    def test_default_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should create config with default values."""
        monkeypatch.chdir(tmp_path)
        config = AppConfig()

        assert config.db_path == Path.home() / ".hotelread" / "hotels.db"
        assert config.base_url == "http://localhost:8000"
        assert config.default_page_size == 30
        assert config.max_page_size == 300
        assert config.fetch_timeout == 30.0

    def test_prefers_local_data_directory(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should use data/hotels.db when it exists in the working directory."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "data").mkdir()
        (tmp_path / "data" / "hotels.db").touch()

        config = AppConfig()

        assert config.db_path == Path("data/hotels.db")

    def test_custom_config(self) -> None:
        """Should create config with custom values."""
        config = AppConfig(
            db_path=Path("/custom/path.db"),
            base_url="https://api.example.com/",
            default_page_size=10,
            max_page_size=50,
        )

        assert config.db_path == Path("/custom/path.db")
        assert config.base_url == "https://api.example.com"
        assert config.default_page_size == 10
        assert config.max_page_size == 50

    def test_resolve_db_path_absolute(self) -> None:
        """Should return absolute path as-is."""
        config = AppConfig(db_path=Path("/absolute/path/db.db"))

        assert config.resolve_db_path(Path("/base")) == Path("/absolute/path/db.db")

    def test_resolve_db_path_relative_no_base(self) -> None:
        """Should return relative path when no base_dir provided."""
        config = AppConfig(db_path=Path("relative/db.db"))

        assert config.resolve_db_path(base_dir=None) == Path("relative/db.db")

    def test_resolve_db_path_relative_with_base(self) -> None:
        """Should resolve relative path against base_dir."""
        config = AppConfig(db_path=Path("relative/db.db"))

        resolved = config.resolve_db_path(base_dir=Path("/base/directory"))

        assert resolved == Path("/base/directory/relative/db.db")


class TestDefaultFields:
    """Default field lists."""

    def test_list_defaults(self) -> None:
        assert DEFAULT_HOTELS_FIELDS == ("id", "location", "name")

    def test_single_defaults_include_list_defaults(self) -> None:
        assert set(DEFAULT_HOTELS_FIELDS) <= set(DEFAULT_HOTEL_FIELDS)
