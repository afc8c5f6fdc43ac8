"""Tests for text utility functions."""

from __future__ import annotations

import pytest

from hotelread.utils.text import is_hotel_address, normalize_path, split_csv, split_path, unique


class TestSplitCsv:
    """Test split_csv function."""

    def test_string(self) -> None:
        assert split_csv(" name , location,,id ") == ["name", "location", "id"]

    def test_sequence(self) -> None:
        assert split_csv(["name", " ", " id"]) == ["name", "id"]

    def test_empty(self) -> None:
        assert split_csv("") == []


class TestPaths:
    """Test dotted path helpers."""

    def test_split_path(self) -> None:
        assert split_path("roomTypes.name.en") == ("roomTypes", "name.en")
        assert split_path("name") == ("name", None)

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("roomTypes.name", "roomTypes.name"),
            (" roomTypes . name ", "roomTypes.name"),
            ("roomTypes..name", None),
            ("name.", None),
            ("", None),
        ],
    )
    def test_normalize_path(self, path: str, expected: str | None) -> None:
        assert normalize_path(path) == expected


class TestUnique:
    def test_keeps_first_occurrence_order(self) -> None:
        assert list(unique(["b", "a", "b", "c", "a"])) == ["b", "a", "c"]


class TestIsHotelAddress:
    """Test is_hotel_address function."""

    @pytest.mark.parametrize(
        "value",
        ["0x" + "a" * 40, "0x" + "AbCdEf0123" * 4, "0x" + "0" * 40],
    )
    def test_valid(self, value: str) -> None:
        assert is_hotel_address(value)

    @pytest.mark.parametrize(
        "value",
        ["", "0x", "0x" + "a" * 39, "0x" + "a" * 41, "0X" + "a" * 40, "0x" + "g" * 40, "a" * 42],
    )
    def test_invalid(self, value: str) -> None:
        assert not is_hotel_address(value)
