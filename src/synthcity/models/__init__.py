"""Pydantic models for synthcity wire payloads and generator options."""

from synthcity.models._base import SynthBaseModel
from synthcity.models.messages import (
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    HealthStatus,
    MapResponse,
    StartStreamRequest,
    StopStreamRequest,
    StreamData,
    StreamStarted,
    StreamStopped,
    WireMessage,
    parse_control_frame,
    parse_server_message,
)
from synthcity.models.options import (
    ALL_SENSOR_TYPES,
    CenteredOptions,
    ClimateOptions,
    FinancialOptions,
    GeoOptions,
    IotOptions,
    SocialOptions,
    TrafficOptions,
    parse_options,
)

__all__ = [
    "ALL_SENSOR_TYPES",
    "CenteredOptions",
    "ClimateOptions",
    "ErrorResponse",
    "FinancialOptions",
    "GenerateRequest",
    "GenerateResponse",
    "GeoOptions",
    "HealthStatus",
    "IotOptions",
    "MapResponse",
    "SocialOptions",
    "StartStreamRequest",
    "StopStreamRequest",
    "StreamData",
    "StreamStarted",
    "StreamStopped",
    "SynthBaseModel",
    "TrafficOptions",
    "WireMessage",
    "parse_control_frame",
    "parse_options",
    "parse_server_message",
]
