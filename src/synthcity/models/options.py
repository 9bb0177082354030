"""Generator option models.

Options arrive as an opaque camelCase object from the dashboard (HTTP body or
``start_stream`` frame). Each data type reads the subset it understands;
unknown keys are ignored and invalid values fall back to the field default.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal, TypeVar

from pydantic import Field, ValidationError, field_validator

from synthcity._constants import DEFAULT_CENTER_LAT, DEFAULT_CENTER_LNG
from synthcity.models._base import SynthBaseModel

ALL_SENSOR_TYPES: tuple[str, ...] = ("parking", "waste", "lighting", "water", "energy", "noise")

TOptions = TypeVar("TOptions", bound=SynthBaseModel)


class CenteredOptions(SynthBaseModel):
    """Options shared by every location-bearing data type."""

    center_lat: float = Field(default=DEFAULT_CENTER_LAT, ge=-90.0, le=90.0)
    center_lng: float = Field(default=DEFAULT_CENTER_LNG, ge=-180.0, le=180.0)


class GeoOptions(CenteredOptions):
    radius: float = Field(default=0.1, ge=0.0)
    include_metadata: bool = True


class TrafficOptions(CenteredOptions):
    radius: float = Field(default=0.05, ge=0.0)
    include_vehicles: bool = True


class SocialOptions(SynthBaseModel):
    include_details: bool = True


class FinancialOptions(CenteredOptions):
    data_type: Literal["transactions", "budget"] = "transactions"


class ClimateOptions(SynthBaseModel):
    start_date: datetime | None = None
    interval_hours: float = Field(default=1.0, gt=0.0)


class IotOptions(CenteredOptions):
    sensor_types: tuple[str, ...] = ALL_SENSOR_TYPES

    @field_validator("sensor_types", mode="before")
    @classmethod
    def _expand_sensor_types(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            return ALL_SENSOR_TYPES
        wanted = [str(v) for v in value]
        if not wanted or "all" in wanted:
            return ALL_SENSOR_TYPES
        known = tuple(t for t in ALL_SENSOR_TYPES if t in wanted)
        return known or ALL_SENSOR_TYPES


def parse_options(model_cls: type[TOptions], raw: Any) -> TOptions:
    """Validate *raw* into *model_cls*, discarding fields that fail validation."""
    data: dict[str, Any] = dict(raw) if isinstance(raw, Mapping) else {}
    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        bad = {str(err["loc"][0]) for err in exc.errors() if err.get("loc")}

    drop: set[str] = set()
    for name, field in model_cls.model_fields.items():
        if name in bad or (field.alias is not None and field.alias in bad):
            drop.add(name)
            if field.alias is not None:
                drop.add(field.alias)
    try:
        return model_cls.model_validate({k: v for k, v in data.items() if k not in drop})
    except ValidationError:
        return model_cls()
