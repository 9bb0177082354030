from __future__ import annotations

import csv
import io
import json
from pathlib import Path

import pytest

from synthcity.dashboard.export import flatten_record, to_csv, to_json, write_export
from synthcity.exceptions import EmptyExportError


def test_flatten_record() -> None:
    flat = flatten_record(
        {
            "id": "x",
            "location": {"lat": 1.5, "lng": 2.5},
            "data": {"fill_level": 40},
            "vehicles": [{"id": 1}],
        }
    )
    assert flat == {
        "id": "x",
        "location_lat": 1.5,
        "location_lng": 2.5,
        "data": '{"fill_level": 40}',
        "vehicles": '[{"id": 1}]',
    }


def test_csv_header_is_union_in_first_seen_order() -> None:
    text = to_csv([{"a": 1, "b": 2}, {"b": 3, "c": None}])
    rows = list(csv.reader(io.StringIO(text)))

    assert rows[0] == ["a", "b", "c"]
    assert rows[1] == ["1", "2", ""]
    assert rows[2] == ["", "3", ""]


def test_json_export_is_pretty_printed() -> None:
    text = to_json([{"a": 1}])
    assert json.loads(text) == [{"a": 1}]
    assert "\n  " in text


def test_empty_export_raises() -> None:
    with pytest.raises(EmptyExportError):
        to_json([])
    with pytest.raises(EmptyExportError):
        to_csv([])


def test_write_export_infers_format(tmp_path: Path) -> None:
    path = write_export([{"a": 1}], tmp_path / "out.csv")
    assert path.read_text().splitlines() == ["a", "1"]

    with pytest.raises(ValueError):
        write_export([{"a": 1}], tmp_path / "out.xlsx")
