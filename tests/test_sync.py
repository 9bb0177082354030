from __future__ import annotations

import random

import pytest

from synthcity.dashboard.buffer import IngestBuffer
from synthcity.dashboard.mapview import MapMode
from synthcity.dashboard.notifications import NotificationLevel
from synthcity.dashboard.sync import ViewSynchronizer
from synthcity.generator import generate
from synthcity.geo import resolve_position


class _FakeClock:
    def __init__(self) -> None:
        self.ms = 0

    def advance(self, ms: int) -> None:
        self.ms += ms

    def __call__(self) -> float:
        return self.ms / 1000


class _CountingBuffer(IngestBuffer):
    def __init__(self) -> None:
        super().__init__()
        self.snapshots = 0

    def snapshot(self) -> list[dict[str, object]]:
        self.snapshots += 1
        return super().snapshot()


def _geo(i: int) -> dict[str, object]:
    return {"id": f"r{i}", "lat": 50.0 + i * 0.001, "lng": 7.0 + i * 0.001, "timestamp": f"t{i}", "type": "public"}


@pytest.mark.asyncio
async def test_fast_ticks_are_throttled_but_fully_buffered() -> None:
    clock = _FakeClock()
    sync = ViewSynchronizer(clock=clock)
    sync.begin_stream("geo")

    refreshed_at: list[int] = []
    for i in range(40):  # 2 seconds of 50ms ticks
        if sync.on_record("geo", _geo(i)):
            refreshed_at.append(clock.ms)
        clock.advance(50)

    assert len(sync.buffer) == 40
    assert len(sync.map_view.markers) == 40
    assert 1 <= sync.chart_updates <= 9
    assert all(b - a >= 250 for a, b in zip(refreshed_at, refreshed_at[1:]))
    assert sync.dropped_updates == 40 - sync.chart_updates
    sync.end_stream()


@pytest.mark.asyncio
async def test_fast_ticks_copy_buffer_only_when_stats_refresh() -> None:
    clock = _FakeClock()
    buffer = _CountingBuffer()
    sync = ViewSynchronizer(buffer=buffer, clock=clock)
    sync.begin_stream("geo")

    for i in range(40):  # 2 seconds of 50ms ticks
        sync.on_record("geo", _geo(i))
        clock.advance(50)

    assert sync.stats.refresh_count == 4
    assert buffer.snapshots == 4
    assert sync.stats.snapshot.total_records == 31
    sync.autofit.disarm()


@pytest.mark.asyncio
async def test_end_stream_flushes_latest_state() -> None:
    clock = _FakeClock()
    sync = ViewSynchronizer(clock=clock)
    sync.begin_stream("geo")

    sync.on_record("geo", _geo(0))
    clock.advance(10)
    sync.on_record("geo", _geo(1))
    assert len(sync.table.rows) == 1

    sync.end_stream()
    assert len(sync.table.rows) == 2
    assert '"r1"' in sync.raw


@pytest.mark.asyncio
async def test_streamed_points_trigger_autofit() -> None:
    sync = ViewSynchronizer(clock=_FakeClock())
    sync.begin_stream("geo")
    for i in range(15):
        sync.on_record("geo", _geo(i))

    assert sync.map_view.fit_count == 1
    bounds = sync.map_view.viewport.bounds
    assert bounds is not None
    # Only the first twelve points were framed.
    assert bounds.north < 50.0 + 12 * 0.001 + 0.002
    sync.end_stream()


def test_large_point_dataset_switches_to_heatmap() -> None:
    sync = ViewSynchronizer()
    records = generate("traffic", 2500, {"includeVehicles": False}, rng=random.Random(3))

    sync.load_generated("traffic", records)

    assert sync.map_view.mode == MapMode.HEATMAP
    assert len(sync.map_view.heat_points) == 2500
    notice = sync.notifications.last()
    assert notice is not None
    assert notice.level == NotificationLevel.INFO
    assert "2500" in notice.message
    assert len(sync.buffer) == 1000
    assert len(sync.table.rows) == 100

    bounds = sync.map_view.viewport.bounds
    assert bounds is not None
    positions = [p for p in map(resolve_position, records) if p is not None]
    assert len(positions) == 2500
    assert min(p.lat for p in positions) >= bounds.south
    assert max(p.lat for p in positions) <= bounds.north
    assert min(p.lng for p in positions) >= bounds.west
    assert max(p.lng for p in positions) <= bounds.east


def test_small_or_non_point_dataset_keeps_mode() -> None:
    sync = ViewSynchronizer()
    assert sync.maybe_switch_to_heatmap("traffic", 2000) is False
    assert sync.maybe_switch_to_heatmap("climate", 5000) is False
    assert sync.map_view.mode == MapMode.POINTS

    sync.map_view.set_mode(MapMode.HEATMAP)
    assert sync.maybe_switch_to_heatmap("geo", 5000) is False


def test_set_map_mode_rerenders_current_data() -> None:
    sync = ViewSynchronizer()
    sync.visualize("geo", [_geo(i) for i in range(5)])
    assert len(sync.map_view.markers) == 5

    sync.set_map_mode("heatmap")
    assert len(sync.map_view.heat_points) == 5
    assert sync.map_view.markers == []


def test_clear_empties_views() -> None:
    sync = ViewSynchronizer()
    sync.load_generated("geo", [_geo(i) for i in range(3)])
    sync.clear()

    assert len(sync.buffer) == 0
    assert sync.map_view.markers == []
    assert sync.table.is_empty
    assert sync.raw == ""
    assert sync.stats.snapshot.total_records == 0
