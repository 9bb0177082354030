"""Position lookup and bounding boxes for schema-free records.

Records are plain ``dict`` payloads whose shape depends on the data type.
A position is located by trying each known shape in a fixed order:

1. direct ``lat`` / ``lng``
2. ``location.{lat,lng}``
3. ``coordinates.start.{lat,lng}``
4. ``current_location.{lat,lng}``
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple

from synthcity._constants import BOUNDS_PAD_RATIO
from synthcity.normalize import safe_float

_NESTED_POSITION_KEYS: tuple[str, ...] = ("location", "coordinates", "current_location")


class LatLng(NamedTuple):
    lat: float
    lng: float


def _coerce_latlng(obj: Any) -> LatLng | None:
    if not isinstance(obj, Mapping):
        return None
    lat = safe_float(obj.get("lat"))
    lng = safe_float(obj.get("lng"))
    if lat is None or lng is None:
        return None
    return LatLng(lat, lng)


def resolve_position(record: Mapping[str, Any]) -> LatLng | None:
    """Return the first usable position of *record*, or ``None``."""
    direct = _coerce_latlng(record)
    if direct is not None:
        return direct
    for key in _NESTED_POSITION_KEYS:
        nested = record.get(key)
        if key == "coordinates":
            nested = nested.get("start") if isinstance(nested, Mapping) else None
        found = _coerce_latlng(nested)
        if found is not None:
            return found
    return None


def resolve_segment(record: Mapping[str, Any]) -> tuple[LatLng, LatLng] | None:
    """Return ``(start, end)`` for segment-shaped records (``coordinates.start/end``)."""
    if _coerce_latlng(record) is not None or _coerce_latlng(record.get("location")) is not None:
        return None
    coordinates = record.get("coordinates")
    if not isinstance(coordinates, Mapping):
        return None
    start = _coerce_latlng(coordinates.get("start"))
    end = _coerce_latlng(coordinates.get("end"))
    if start is None or end is None:
        return None
    return start, end


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned lat/lng bounding box."""

    south: float
    west: float
    north: float
    east: float

    @classmethod
    def from_points(cls, points: Iterable[tuple[float, float]]) -> Bounds | None:
        """Smallest box containing *points*; ``None`` when *points* is empty."""
        south = west = float("inf")
        north = east = float("-inf")
        seen = False
        for lat, lng in points:
            seen = True
            south = min(south, lat)
            north = max(north, lat)
            west = min(west, lng)
            east = max(east, lng)
        if not seen:
            return None
        return cls(south=south, west=west, north=north, east=east)

    @property
    def is_valid(self) -> bool:
        """A box with zero extent in both axes cannot be framed."""
        return self.north >= self.south and self.east >= self.west and (
            self.north > self.south or self.east > self.west
        )

    @property
    def center(self) -> LatLng:
        return LatLng((self.south + self.north) / 2, (self.west + self.east) / 2)

    def pad(self, ratio: float = BOUNDS_PAD_RATIO) -> Bounds:
        """Grow the box by *ratio* of its height/width on every side."""
        lat_pad = (self.north - self.south) * ratio
        lng_pad = (self.east - self.west) * ratio
        return Bounds(
            south=self.south - lat_pad,
            west=self.west - lng_pad,
            north=self.north + lat_pad,
            east=self.east + lng_pad,
        )

    def contains(self, point: tuple[float, float]) -> bool:
        lat, lng = point
        return self.south <= lat <= self.north and self.west <= lng <= self.east
