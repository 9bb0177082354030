"""Map view model: point/segment primitives, heatmap points and the viewport.

Rendering (tiles, Leaflet layers) is left to the front-end; this module keeps
the bounded primitive sets and decides where the viewport is framed.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, NamedTuple

from synthcity._constants import (
    BOUNDS_PAD_RATIO,
    DEFAULT_CENTER_LAT,
    DEFAULT_CENTER_LNG,
    DEFAULT_ZOOM,
    MAX_HEAT_POINTS,
    MAX_MARKERS,
)
from synthcity.geo import Bounds, LatLng, resolve_position, resolve_segment
from synthcity.normalize import clamp, is_number, safe_float

_logger = logging.getLogger(__name__)


class MapMode(StrEnum):
    POINTS = "points"
    HEATMAP = "heatmap"


# Congestion tiers for traffic segments.
LOW_CONGESTION_COLOR = "#22c55e"
MID_CONGESTION_COLOR = "#f59e0b"
HIGH_CONGESTION_COLOR = "#ef4444"

DEFAULT_MARKER_COLOR = "#3b82f6"
UNKNOWN_TYPE_COLOR = "#6b7280"
TYPE_COLORS: dict[str, str] = {
    "residential": "#10b981",
    "commercial": "#3b82f6",
    "industrial": "#f59e0b",
    "public": "#8b5cf6",
    "green_space": "#22c55e",
    "parking": "#6366f1",
    "waste": "#f97316",
    "lighting": "#facc15",
    "water": "#06b6d4",
    "energy": "#ec4899",
    "noise": "#ef4444",
}

# (field, scale) in priority order; first present field wins.
_HEAT_WEIGHT_RULES: tuple[tuple[str, Any], ...] = (
    ("population_density", lambda v: v / 100),
    ("congestion_level", lambda v: v * 10),
    ("temperature", lambda v: (v - 10) * 2),
    ("air_quality_index", lambda v: v / 20),
    ("occupancy", lambda v: v / 10),
)
MAX_HEAT_WEIGHT = 10.0


def traffic_color(congestion_level: Any) -> str:
    level = safe_float(congestion_level)
    if level is None:
        level = 0.0
    if level < 0.3:
        return LOW_CONGESTION_COLOR
    if level < 0.6:
        return MID_CONGESTION_COLOR
    return HIGH_CONGESTION_COLOR


def marker_color(record: Mapping[str, Any]) -> str:
    record_type = record.get("type")
    if record_type:
        return TYPE_COLORS.get(str(record_type), UNKNOWN_TYPE_COLOR)
    return DEFAULT_MARKER_COLOR


def heat_weight(record: Mapping[str, Any]) -> float:
    """Heat intensity in ``[0, 10]``; ``1`` when no intensity field is present."""
    metadata = record.get("metadata")
    sources: list[Mapping[str, Any]] = [record]
    if isinstance(metadata, Mapping):
        sources.append(metadata)
    for source in sources:
        for field_name, scale in _HEAT_WEIGHT_RULES:
            value = source.get(field_name)
            if is_number(value):
                return clamp(float(scale(value)), 0.0, MAX_HEAT_WEIGHT)
    return 1.0


def popup_fields(record: Mapping[str, Any]) -> dict[str, str]:
    """Plain-text label/value pairs shown when a primitive is selected."""
    fields: dict[str, str] = {}
    record_id = record.get("id")
    if isinstance(record_id, str) and record_id:
        fields["ID"] = f"{record_id[:8]}..."
    for key, label in (("type", "Type"), ("name", "Name")):
        if record.get(key):
            fields[label] = str(record[key])
    if is_number(record.get("temperature")):
        fields["Temperature"] = f"{record['temperature']}°C"
    if is_number(record.get("congestion_level")):
        fields["Congestion"] = f"{record['congestion_level'] * 100:.0f}%"
    if record.get("current_speed"):
        fields["Speed"] = f"{record['current_speed']} km/h"
    if record.get("vehicle_count"):
        fields["Vehicles"] = str(record["vehicle_count"])
    if "occupancy" in record:
        fields["Occupancy"] = f"{record['occupancy']}%"
    metadata = record.get("metadata")
    if isinstance(metadata, Mapping):
        if metadata.get("address"):
            fields["Address"] = str(metadata["address"])
        if metadata.get("population_density"):
            fields["Pop. Density"] = str(metadata["population_density"])
    payload = record.get("data")
    if isinstance(payload, Mapping):
        for key, value in payload.items():
            fields[str(key).replace("_", " ")] = str(value)
    return fields


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PointMarker:
    position: LatLng
    color: str
    popup: dict[str, str] = field(default_factory=dict)

    def coordinates(self) -> tuple[LatLng, ...]:
        return (self.position,)


@dataclass(frozen=True)
class SegmentLine:
    start: LatLng
    end: LatLng
    color: str
    popup: dict[str, str] = field(default_factory=dict)

    def coordinates(self) -> tuple[LatLng, ...]:
        return (self.start, self.end)


MapPrimitive = PointMarker | SegmentLine


class HeatPoint(NamedTuple):
    lat: float
    lng: float
    weight: float


def primitive_for(record: Mapping[str, Any]) -> MapPrimitive | None:
    """Point marker from the resolved position, or a congestion-coloured line for segments."""
    segment = resolve_segment(record)
    if segment is not None:
        start, end = segment
        return SegmentLine(
            start=start,
            end=end,
            color=traffic_color(record.get("congestion_level")),
            popup=popup_fields(record),
        )
    position = resolve_position(record)
    if position is None:
        return None
    return PointMarker(position=position, color=marker_color(record), popup=popup_fields(record))


def heat_point_for(record: Mapping[str, Any]) -> HeatPoint | None:
    position = resolve_position(record)
    if position is None:
        return None
    return HeatPoint(position.lat, position.lng, heat_weight(record))


@dataclass(frozen=True)
class Viewport:
    """Current framing: either a centre/zoom or a padded bounding box."""

    center: LatLng
    zoom: int | None = DEFAULT_ZOOM
    bounds: Bounds | None = None


# ---------------------------------------------------------------------------
# View model
# ---------------------------------------------------------------------------


class MapView:
    """Bounded marker set, heat layer and viewport for one dashboard."""

    def __init__(
        self,
        mode: MapMode = MapMode.POINTS,
        *,
        default_center: LatLng = LatLng(DEFAULT_CENTER_LAT, DEFAULT_CENTER_LNG),
        default_zoom: int = DEFAULT_ZOOM,
        max_markers: int = MAX_MARKERS,
        max_heat_points: int = MAX_HEAT_POINTS,
    ) -> None:
        self._mode = MapMode(mode)
        self._default_center = default_center
        self._default_zoom = default_zoom
        self._markers: deque[MapPrimitive] = deque(maxlen=max_markers)
        self._heat: deque[HeatPoint] = deque(maxlen=max_heat_points)
        self.viewport = Viewport(center=default_center, zoom=default_zoom)
        self.fit_count = 0

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def mode(self) -> MapMode:
        return self._mode

    def set_mode(self, mode: MapMode | str) -> None:
        self._mode = MapMode(mode)

    @property
    def markers(self) -> list[MapPrimitive]:
        return list(self._markers)

    @property
    def heat_points(self) -> list[HeatPoint]:
        return list(self._heat)

    def clear(self) -> None:
        self._markers.clear()
        self._heat.clear()

    # ------------------------------------------------------------------
    # Incremental updates (streaming)
    # ------------------------------------------------------------------

    def add_record(self, record: Mapping[str, Any]) -> bool:
        """Place one record in the current mode; oldest primitive evicted past the cap."""
        if self._mode == MapMode.HEATMAP:
            point = heat_point_for(record)
            if point is None:
                return False
            self._heat.append(point)
            return True
        primitive = primitive_for(record)
        if primitive is None:
            return False
        self._markers.append(primitive)
        return True

    # ------------------------------------------------------------------
    # Full render (one-shot data, mode switches)
    # ------------------------------------------------------------------

    def render(self, records: Iterable[Mapping[str, Any]]) -> None:
        """Rebuild the layer for the current mode and frame it."""
        self.clear()
        for record in records:
            self.add_record(record)

        if self._mode == MapMode.HEATMAP:
            coords: list[tuple[float, float]] = [(p.lat, p.lng) for p in self._heat]
        else:
            coords = [c for primitive in self._markers for c in primitive.coordinates()]

        bounds = Bounds.from_points(coords)
        if bounds is None or not self.fit_bounds(bounds):
            self.recenter()

    def fit_bounds(self, bounds: Bounds, pad: float = BOUNDS_PAD_RATIO) -> bool:
        """Frame *bounds* padded by *pad*; ``False`` (no change) for a degenerate box."""
        if not bounds.is_valid:
            _logger.debug("Skipping fit for degenerate bounds %s", bounds)
            return False
        padded = bounds.pad(pad)
        self.viewport = Viewport(center=padded.center, zoom=None, bounds=padded)
        self.fit_count += 1
        return True

    def recenter(self) -> None:
        self.viewport = Viewport(center=self._default_center, zoom=self._default_zoom)
