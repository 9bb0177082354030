from __future__ import annotations

import pytest

from synthcity._constants import clamp_count, clamp_interval_ms
from synthcity.normalize import format_cell, format_size, safe_float, safe_int


def test_safe_float_rejects_bools_and_non_finite() -> None:
    assert safe_float(True) is None
    assert safe_float(float("inf")) is None
    assert safe_float("nan") is None
    assert safe_float("") is None
    assert safe_float("12.5") == 12.5
    assert safe_int("7.9") == 7


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, 1000),
        ("abc", 1000),
        (0, 1000),
        (50, 100),
        (500, 500),
        ("2000", 2000),
        (99_999, 10_000),
        (float("inf"), 1000),
    ],
)
def test_clamp_interval_ms(raw: object, expected: int) -> None:
    assert clamp_interval_ms(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("lots", 100), (None, 100), (-5, 1), (2500, 2500), (50_000, 10_000), ("12", 12)],
)
def test_clamp_count(raw: object, expected: int) -> None:
    assert clamp_count(raw) == expected


def test_format_cell() -> None:
    assert format_cell(None) == "-"
    assert format_cell(True) == "Yes"
    assert format_cell(False) == "No"
    assert format_cell(42) == "42"
    assert format_cell(3.0) == "3"
    assert format_cell(3.14159) == "3.14"
    assert format_cell("street") == "street"


def test_format_size() -> None:
    assert format_size(512) == "512 B"
    assert format_size(2048) == "2.0 KB"
    assert format_size(3 * 1024 * 1024) == "3.0 MB"
