"""Fan-out of incoming records to the dashboard views.

Streamed records land in the :class:`IngestBuffer` and on the map at once;
chart, table and raw views are recomputed at most once per throttle window.
A throttled-out update is dropped, not queued; :meth:`ViewSynchronizer.flush`
renders the latest state when a stream ends.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from synthcity._constants import (
    CHART_WINDOW,
    HEATMAP_SWITCH_THRESHOLD,
    MAX_TABLE_ROWS,
    POINT_HEAVY_TYPES,
    UI_THROTTLE_SECONDS,
)
from synthcity.dashboard.autofit import AutoFitController
from synthcity.dashboard.buffer import IngestBuffer, Record
from synthcity.dashboard.charts import ChartSet, build_charts
from synthcity.dashboard.mapview import MapMode, MapView
from synthcity.dashboard.notifications import NotificationCenter, NotificationLevel
from synthcity.dashboard.stats import StatsPanel
from synthcity.dashboard.table import TableView, build_table, render_raw
from synthcity.geo import resolve_position

_logger = logging.getLogger(__name__)


class ViewSynchronizer:
    """Owns the buffer and every view derived from it."""

    def __init__(
        self,
        *,
        buffer: IngestBuffer | None = None,
        map_view: MapView | None = None,
        notifications: NotificationCenter | None = None,
        stats: StatsPanel | None = None,
        clock: Callable[[], float] = time.monotonic,
        throttle: float = UI_THROTTLE_SECONDS,
    ) -> None:
        self.buffer = buffer if buffer is not None else IngestBuffer()
        self.map_view = map_view if map_view is not None else MapView()
        self.notifications = notifications if notifications is not None else NotificationCenter()
        self.stats = stats if stats is not None else StatsPanel(clock=clock)
        self.autofit = AutoFitController(self.map_view.fit_bounds)
        self._clock = clock
        self._throttle = throttle
        self._last_update: float | None = None
        self._pending = False
        # Full one-shot dataset; re-rendered on map mode changes.
        self._dataset: list[Record] = []

        self.data_type = ""
        self.charts = ChartSet()
        self.table = TableView()
        self.raw = ""
        self.chart_updates = 0
        self.dropped_updates = 0

    # ------------------------------------------------------------------
    # Streaming
    # ------------------------------------------------------------------

    def begin_stream(self, data_type: str) -> None:
        """Prepare for a new stream; arms map auto-fit (needs a running loop)."""
        self.data_type = data_type
        self._dataset = []
        self._pending = False
        self.autofit.arm()

    def on_record(self, data_type: str, record: Record) -> bool:
        """Ingest one streamed record; returns ``True`` when views were refreshed."""
        self.data_type = data_type or self.data_type
        self.buffer.push(record)

        self.map_view.add_record(record)
        if self.autofit.armed:
            position = resolve_position(record)
            if position is not None:
                self.autofit.collect(position.lat, position.lng)

        if self.stats.due():
            self.stats.update(self.buffer.snapshot())

        now = self._clock()
        if self._last_update is not None and now - self._last_update < self._throttle:
            self._pending = True
            self.dropped_updates += 1
            return False
        self._last_update = now
        self._render_rolling()
        return True

    def end_stream(self) -> None:
        self.autofit.disarm()
        self.flush()

    def flush(self) -> None:
        """Render pending chart/table/raw state right away."""
        if not self._pending:
            return
        self._last_update = self._clock()
        self._render_rolling()
        self.stats.update(self.buffer.snapshot(), force=True)

    def _render_rolling(self) -> None:
        self._pending = False
        self.charts = build_charts(self.data_type, self.buffer.recent(CHART_WINDOW))
        recent = self.buffer.recent(MAX_TABLE_ROWS)
        self.table = build_table(recent)
        self.raw = render_raw(recent)
        self.chart_updates += 1

    # ------------------------------------------------------------------
    # One-shot data
    # ------------------------------------------------------------------

    def maybe_switch_to_heatmap(self, data_type: str, count: int) -> bool:
        """Large point-like datasets move the map to heatmap mode (never back)."""
        if (
            data_type in POINT_HEAVY_TYPES
            and count > HEATMAP_SWITCH_THRESHOLD
            and self.map_view.mode == MapMode.POINTS
        ):
            self.map_view.set_mode(MapMode.HEATMAP)
            self.notifications.notify(
                f"Large dataset ({count}). Switched map to Heatmap for performance.",
                NotificationLevel.INFO,
            )
            return True
        return False

    def visualize(self, data_type: str, records: Sequence[Mapping[str, Any]]) -> None:
        """Recompute every view from the full dataset, unthrottled."""
        self.data_type = data_type
        self._dataset = [dict(r) for r in records]
        self.map_view.render(self._dataset)
        self.charts = build_charts(data_type, self._dataset)
        self.table = build_table(self._dataset)
        self.raw = render_raw(self._dataset)
        self.chart_updates += 1
        self._pending = False

    def load_generated(self, data_type: str, records: Sequence[Mapping[str, Any]]) -> None:
        """Replace the buffer with a one-shot result and render it."""
        self.buffer.replace(dict(r) for r in records)
        self.maybe_switch_to_heatmap(data_type, len(records))
        self.visualize(data_type, records)
        self.stats.update(self.buffer.snapshot(), force=True)
        _logger.debug("Loaded %d %s records", len(records), data_type)

    # ------------------------------------------------------------------
    # Misc
    # ------------------------------------------------------------------

    def set_map_mode(self, mode: MapMode | str) -> None:
        """Switch the map mode and re-render what is currently loaded."""
        self.map_view.set_mode(mode)
        self.map_view.render(self._dataset or self.buffer.snapshot())

    def clear(self) -> None:
        self.buffer.clear()
        self._dataset = []
        self.map_view.clear()
        self.charts = ChartSet()
        self.table = TableView()
        self.raw = ""
        self._pending = False
        self.stats.update([], force=True)
