"""Normalization helpers.

Centralizes defensive parsing of loosely-typed record and option values.
"""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    """Return *value* as a finite float, or ``None``.

    Booleans are rejected so ``True`` never masquerades as ``1.0``.
    """
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def safe_int(value: Any) -> int | None:
    parsed = safe_float(value)
    if parsed is None:
        return None
    return int(parsed)


def is_number(value: Any) -> bool:
    """True for real int/float values (bools excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def format_cell(value: Any) -> str:
    """Format a scalar for the table view.

    - Missing -> ``-``
    - Booleans -> ``Yes`` / ``No``
    - Integers verbatim, other numbers to two decimals
    """
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return f"{value:.2f}"
    return str(value)


def format_size(num_bytes: int) -> str:
    """Human readable size: ``B`` below 1 KiB, then ``KB`` / ``MB`` with one decimal."""
    if num_bytes < 1024:
        return f"{num_bytes} B"
    if num_bytes < 1024 * 1024:
        return f"{num_bytes / 1024:.1f} KB"
    return f"{num_bytes / (1024 * 1024):.1f} MB"
