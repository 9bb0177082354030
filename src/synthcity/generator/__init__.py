"""Synthetic record generator.

``generate(data_type, count, options)`` is the single entry point used by the
HTTP API and the stream dispatcher. It is a pure function of its inputs and
the random source: no state survives between calls.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

from synthcity.exceptions import GenerationError, InvalidDataTypeError
from synthcity.generator import records as _records
from synthcity.generator.records import Record
from synthcity.models._base import SynthBaseModel
from synthcity.models.options import (
    CenteredOptions,
    ClimateOptions,
    FinancialOptions,
    GeoOptions,
    IotOptions,
    SocialOptions,
    TrafficOptions,
    parse_options,
)


class DataType(StrEnum):
    GEO = "geo"
    TRAFFIC = "traffic"
    SOCIAL = "social"
    DEMOGRAPHIC = "demographic"
    FINANCIAL = "financial"
    CLIMATE = "climate"
    IOT = "iot"
    TRANSPORT = "transport"
    EMERGENCY = "emergency"


_Builder = Callable[[Any, int, random.Random], list[Record]]

_REGISTRY: dict[DataType, tuple[type[SynthBaseModel], _Builder]] = {
    DataType.GEO: (GeoOptions, _records.build_geo),
    DataType.TRAFFIC: (TrafficOptions, _records.build_traffic),
    DataType.SOCIAL: (SocialOptions, _records.build_social),
    # Demographic data shares the social schema.
    DataType.DEMOGRAPHIC: (SocialOptions, _records.build_social),
    DataType.FINANCIAL: (FinancialOptions, _records.build_financial),
    DataType.CLIMATE: (ClimateOptions, _records.build_climate),
    DataType.IOT: (IotOptions, _records.build_iot),
    DataType.TRANSPORT: (CenteredOptions, _records.build_transport),
    DataType.EMERGENCY: (CenteredOptions, _records.build_emergency),
}

DATA_TYPES: frozenset[str] = frozenset(member.value for member in DataType)


def resolve_data_type(data_type: object) -> DataType:
    """Map a wire tag to :class:`DataType`; raises :class:`InvalidDataTypeError`."""
    if isinstance(data_type, str):
        try:
            return DataType(data_type)
        except ValueError:
            pass
    raise InvalidDataTypeError(data_type)


def generate(
    data_type: object,
    count: int = 100,
    options: Mapping[str, Any] | None = None,
    *,
    rng: random.Random | None = None,
) -> list[Record]:
    """Generate *count* records of *data_type*.

    Parameters
    ----------
    data_type : str
        One of :data:`DATA_TYPES`.
    count : int
        Number of records. The financial ``budget`` mode always yields one
        record per budget category.
    options : mapping, optional
        camelCase options object; unknown keys are ignored.
    rng : random.Random, optional
        Random source, for reproducible output in tests.

    Raises
    ------
    InvalidDataTypeError
        When *data_type* is not a known tag.
    GenerationError
        When a record builder fails.
    """
    tag = resolve_data_type(data_type)
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    options_cls, builder = _REGISTRY[tag]
    parsed = parse_options(options_cls, options)
    try:
        return builder(parsed, count, rng or random.Random())
    except Exception as exc:
        raise GenerationError(f"Failed to generate {tag.value} records: {exc}", data_type=tag.value) from exc


def generate_one(
    data_type: object,
    options: Mapping[str, Any] | None = None,
    *,
    rng: random.Random | None = None,
) -> Record:
    """Generate a single record (one stream tick)."""
    return generate(data_type, 1, options, rng=rng)[0]


__all__ = [
    "DATA_TYPES",
    "DataType",
    "Record",
    "generate",
    "generate_one",
    "resolve_data_type",
]
