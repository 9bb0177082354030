"""Helpers for compact debug logging.

Stream frames can carry large nested records (traffic vehicles, budget
tables). This module trims values before they are emitted at DEBUG level.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def summarize_for_log(
    value: Any,
    *,
    max_string: int = 200,
    max_items: int = 10,
    _depth: int = 0,
) -> Any:
    """Return a trimmed copy of *value* suitable for debug logs."""
    if _depth > 6:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        summary: dict[str, Any] = {}
        for index, (k, v) in enumerate(value.items()):
            if index >= max_items:
                summary["…"] = f"<{len(value) - max_items} more keys>"
                break
            summary[str(k)] = summarize_for_log(
                v, max_string=max_string, max_items=max_items, _depth=_depth + 1
            )
        return summary

    if isinstance(value, Sequence):
        items = [
            summarize_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
            for v in list(value)[:max_items]
        ]
        if len(value) > max_items:
            items.append(f"<{len(value) - max_items} more items>")
        return items

    return repr(value)
