"""Tabular and raw-JSON views of records."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from synthcity._constants import MAX_TABLE_ROWS
from synthcity.normalize import format_cell


@dataclass(frozen=True)
class TableView:
    columns: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.rows


def _is_scalar(value: Any) -> bool:
    return not isinstance(value, (Mapping, list, tuple))


def build_table(records: Sequence[Mapping[str, Any]], max_rows: int = MAX_TABLE_ROWS) -> TableView:
    """Columns are the first record's scalar fields; at most *max_rows* rows."""
    if not records:
        return TableView()
    columns = [key for key, value in records[0].items() if _is_scalar(value)]
    rows = [[format_cell(record.get(col)) for col in columns] for record in records[:max_rows]]
    return TableView(columns=columns, rows=rows)


def render_raw(records: Sequence[Mapping[str, Any]]) -> str:
    return json.dumps(list(records), indent=2, ensure_ascii=False, default=str)
