"""Wire messages for the HTTP API and the stream WebSocket."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from synthcity._logsafe import summarize_for_log
from synthcity.models._base import SynthBaseModel

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


# ---------------------------------------------------------------------------
# Client -> server
# ---------------------------------------------------------------------------


class StartStreamRequest(SynthBaseModel):
    """``{"action": "start_stream", "dataType", "interval", "options"}``."""

    action: Literal["start_stream"]
    data_type: str
    # Clamped by the session manager; kept raw so bad values fall back to the default.
    interval: Any = None
    options: dict[str, Any] = Field(default_factory=dict)


class StopStreamRequest(SynthBaseModel):
    action: Literal["stop_stream"]


ControlFrame = Annotated[StartStreamRequest | StopStreamRequest, Field(discriminator="action")]
_CONTROL_ADAPTER: TypeAdapter[StartStreamRequest | StopStreamRequest] = TypeAdapter(ControlFrame)


def parse_control_frame(text: str | bytes) -> StartStreamRequest | StopStreamRequest | None:
    """Parse an inbound text frame; ``None`` for anything malformed or unknown."""
    try:
        payload = json.loads(text)
    except (TypeError, ValueError):
        _logger.warning("Invalid WS message, ignoring")
        return None
    if not isinstance(payload, dict):
        _logger.warning("WS message is not an object, ignoring")
        return None
    try:
        return _CONTROL_ADAPTER.validate_python(payload)
    except ValidationError:
        _logger.warning("Unrecognised control frame ignored: %s", summarize_for_log(payload))
        return None


class GenerateRequest(SynthBaseModel):
    """Body of ``POST /api/generate``."""

    data_type: str
    count: Any = None
    options: dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Server -> client
# ---------------------------------------------------------------------------


class WireMessage(BaseModel):
    """Outbound message serialized with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class StreamStarted(WireMessage):
    type: Literal["stream_started"] = "stream_started"
    data_type: str
    interval: int


class StreamData(WireMessage):
    type: Literal["stream_data"] = "stream_data"
    data_type: str
    data: dict[str, Any]
    timestamp: datetime = Field(default_factory=_utcnow)


class StreamStopped(WireMessage):
    type: Literal["stream_stopped"] = "stream_stopped"


class GenerateResponse(WireMessage):
    success: bool = True
    data_type: str
    count: int
    data: list[dict[str, Any]]


class MapResponse(WireMessage):
    success: bool = True
    topic: str
    data: list[dict[str, Any]]


class HealthStatus(WireMessage):
    status: Literal["healthy"] = "healthy"
    timestamp: datetime = Field(default_factory=_utcnow)


class ErrorResponse(WireMessage):
    error: str


ServerMessage = Annotated[StreamStarted | StreamData | StreamStopped, Field(discriminator="type")]
_SERVER_ADAPTER: TypeAdapter[StreamStarted | StreamData | StreamStopped] = TypeAdapter(ServerMessage)


def parse_server_message(text: str | bytes) -> StreamStarted | StreamData | StreamStopped | None:
    """Client-side counterpart of :func:`parse_control_frame`."""
    try:
        return _SERVER_ADAPTER.validate_json(text)
    except ValidationError:
        _logger.debug("Unrecognised server message ignored: %s", summarize_for_log(text))
        return None
