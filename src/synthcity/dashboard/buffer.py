"""Bounded ring buffer of the most recent records."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from typing import Any

from synthcity._constants import INGEST_BUFFER_CAP

Record = dict[str, Any]


class IngestBuffer:
    """Insertion-ordered records, capped; the oldest record is evicted first."""

    def __init__(self, capacity: int = INGEST_BUFFER_CAP) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._records: deque[Record] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._records.maxlen or 0

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __bool__(self) -> bool:
        return bool(self._records)

    def push(self, record: Record) -> None:
        self._records.append(record)

    def extend(self, records: Iterable[Record]) -> None:
        self._records.extend(records)

    def replace(self, records: Iterable[Record]) -> None:
        """Reset contents to the tail of *records* (one-shot generation)."""
        self._records.clear()
        self._records.extend(records)

    def recent(self, n: int) -> list[Record]:
        """The newest *n* records in arrival order."""
        if n <= 0:
            return []
        size = len(self._records)
        if n >= size:
            return list(self._records)
        return [self._records[i] for i in range(size - n, size)]

    def latest(self) -> Record | None:
        return self._records[-1] if self._records else None

    def snapshot(self) -> list[Record]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()
