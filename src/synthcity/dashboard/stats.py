"""Statistics panel: record count, serialized size and last update."""

from __future__ import annotations

import json
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from synthcity._constants import STATS_THROTTLE_SECONDS
from synthcity.normalize import format_size


@dataclass(frozen=True)
class StatsSnapshot:
    total_records: int = 0
    data_size: str = "0 B"
    last_update: str | None = None


def _serialized_size(records: Sequence[Mapping[str, Any]]) -> int:
    return len(json.dumps(list(records), default=str).encode("utf-8"))


class StatsPanel:
    """Recomputes the snapshot at most once per *throttle* seconds."""

    def __init__(
        self,
        *,
        throttle: float = STATS_THROTTLE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._throttle = throttle
        self._clock = clock
        self._last_refresh: float | None = None
        self.snapshot = StatsSnapshot()
        self.refresh_count = 0

    def due(self) -> bool:
        """Whether an unforced update would refresh now."""
        return self._due_at(self._clock())

    def update(self, records: Sequence[Mapping[str, Any]], *, force: bool = False) -> bool:
        now = self._clock()
        if not force and not self._due_at(now):
            return False
        self._last_refresh = now
        newest = records[-1] if records else None
        last_update = newest.get("timestamp") if newest is not None else None
        self.snapshot = StatsSnapshot(
            total_records=len(records),
            data_size=format_size(_serialized_size(records)),
            last_update=str(last_update) if last_update is not None else None,
        )
        self.refresh_count += 1
        return True

    def _due_at(self, now: float) -> bool:
        return self._last_refresh is None or now - self._last_refresh >= self._throttle

    def reset(self) -> None:
        self._last_refresh = None
        self.snapshot = StatsSnapshot()
