"""JSON and CSV export of buffered records."""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from synthcity.exceptions import EmptyExportError


def flatten_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """Flatten one record for tabular export.

    Nested objects carrying ``lat``/``lng`` become ``<key>_lat``/``<key>_lng``
    columns; any other nested object or list is stored as a JSON string.
    """
    flat: dict[str, Any] = {}
    for key, value in record.items():
        if isinstance(value, Mapping):
            if "lat" in value and "lng" in value:
                flat[f"{key}_lat"] = value["lat"]
                flat[f"{key}_lng"] = value["lng"]
            else:
                flat[key] = json.dumps(value, default=str)
        elif isinstance(value, (list, tuple)):
            flat[key] = json.dumps(list(value), default=str)
        else:
            flat[key] = value
    return flat


def _require_records(records: Iterable[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
    items = list(records)
    if not items:
        raise EmptyExportError("No data to export")
    return items


def to_json(records: Iterable[Mapping[str, Any]]) -> str:
    return json.dumps(_require_records(records), indent=2, ensure_ascii=False, default=str)


def to_csv(records: Iterable[Mapping[str, Any]]) -> str:
    """CSV text with the union of flattened keys as header (first-seen order)."""
    rows = [flatten_record(r) for r in _require_records(records)]
    header: dict[str, None] = {}
    for row in rows:
        header.update(dict.fromkeys(row))

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=list(header), restval="", lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({k: ("" if v is None else v) for k, v in row.items()})
    return out.getvalue()


def default_export_name(fmt: str, *, now: datetime | None = None) -> str:
    stamp = int((now or datetime.now(UTC)).timestamp() * 1000)
    return f"synthetic_data_{stamp}.{fmt}"


def write_export(records: Sequence[Mapping[str, Any]], path: Path, fmt: str | None = None) -> Path:
    """Write *records* to *path* as ``json`` or ``csv`` (inferred from the suffix)."""
    fmt = (fmt or path.suffix.lstrip(".")).lower()
    if fmt == "json":
        text = to_json(records)
    elif fmt == "csv":
        text = to_csv(records)
    else:
        raise ValueError(f"Unsupported export format: {fmt!r}")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8", newline="")
    return path
