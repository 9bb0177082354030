from __future__ import annotations

import json

import pytest

from synthcity.models.messages import (
    GenerateResponse,
    StartStreamRequest,
    StopStreamRequest,
    StreamData,
    StreamStarted,
    parse_control_frame,
    parse_server_message,
)


def test_parse_start_stream_frame() -> None:
    frame = parse_control_frame(
        json.dumps({"action": "start_stream", "dataType": "iot", "interval": 500, "options": {"x": 1}})
    )

    assert isinstance(frame, StartStreamRequest)
    assert frame.data_type == "iot"
    assert frame.interval == 500
    assert frame.options == {"x": 1}


def test_parse_stop_stream_frame() -> None:
    assert isinstance(parse_control_frame('{"action": "stop_stream"}'), StopStreamRequest)


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[1, 2, 3]",
        '"start_stream"',
        "{}",
        '{"action": "dance"}',
        '{"action": "start_stream"}',
        '{"action": "start_stream", "dataType": 42}',
    ],
)
def test_malformed_frames_are_ignored(text: str) -> None:
    assert parse_control_frame(text) is None


def test_outbound_messages_use_camel_case() -> None:
    started = StreamStarted(data_type="geo", interval=500).to_wire()
    assert started == {"type": "stream_started", "dataType": "geo", "interval": 500}

    data = StreamData(data_type="geo", data={"id": "a"}).to_wire()
    assert data["type"] == "stream_data"
    assert data["dataType"] == "geo"
    assert isinstance(data["timestamp"], str)

    response = GenerateResponse(data_type="geo", count=0, data=[]).to_wire()
    assert response == {"success": True, "dataType": "geo", "count": 0, "data": []}


def test_parse_server_message_round_trip() -> None:
    wire = json.dumps(StreamData(data_type="iot", data={"sensor_id": "s"}).to_wire())
    message = parse_server_message(wire)

    assert isinstance(message, StreamData)
    assert message.data == {"sensor_id": "s"}
    assert parse_server_message('{"type": "unknown"}') is None
    assert parse_server_message("garbage") is None
