from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import pytest

from synthcity.stream.registry import StreamSessionManager


class _FakeChannel:
    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.closed = False
        self.fail_sends = False

    async def send_json(self, data: Any) -> None:
        if self.fail_sends:
            raise ConnectionResetError("Cannot write to closing transport")
        self.sent.append(data)

    def of_type(self, kind: str) -> list[dict[str, Any]]:
        return [m for m in self.sent if m["type"] == kind]


def _fake_generate(data_type: str, options: Mapping[str, Any]) -> dict[str, Any]:
    return {"kind": data_type, "center": options.get("centerLat")}


def _manager(**kwargs: Any) -> StreamSessionManager:
    return StreamSessionManager(generate=kwargs.pop("generate", _fake_generate), **kwargs)


@pytest.mark.asyncio
async def test_start_stream_acknowledges_clamped_interval() -> None:
    manager = _manager()
    channel = _FakeChannel()

    session = await manager.start_stream(channel, "geo", 20, {})

    assert session.interval_ms == 100
    assert channel.sent[0] == {"type": "stream_started", "dataType": "geo", "interval": 100}
    assert len(manager) == 1
    await manager.shutdown()


@pytest.mark.asyncio
async def test_ticks_carry_generated_records() -> None:
    manager = _manager(default_options={"centerLat": 1.5})
    channel = _FakeChannel()

    await manager.start_stream(channel, "iot", 100, {})
    await asyncio.sleep(0.35)
    await manager.shutdown()

    data = channel.of_type("stream_data")
    assert 2 <= len(data) <= 4
    assert all(m["dataType"] == "iot" and m["data"] == {"kind": "iot", "center": 1.5} for m in data)


@pytest.mark.asyncio
async def test_switching_data_type_stops_previous_stream() -> None:
    manager = _manager()
    channel = _FakeChannel()

    first = await manager.start_stream(channel, "geo", 500, {})
    await asyncio.sleep(0.55)
    second = await manager.start_stream(channel, "traffic", 2000, {})
    switch_index = len(channel.sent)
    await asyncio.sleep(0.6)

    assert not first.is_running
    assert second.is_running
    after = channel.sent[switch_index:]
    assert all(m.get("dataType") != "geo" for m in after)
    assert len(manager) == 1
    await manager.shutdown()


@pytest.mark.asyncio
async def test_stop_stream_twice_sends_one_ack() -> None:
    manager = _manager()
    channel = _FakeChannel()
    await manager.start_stream(channel, "geo", 1000, {})

    assert await manager.stop_stream(channel) is True
    assert await manager.stop_stream(channel) is False

    assert len(channel.of_type("stream_stopped")) == 1
    assert len(manager) == 0


@pytest.mark.asyncio
async def test_stop_without_session_is_noop() -> None:
    manager = _manager()
    channel = _FakeChannel()

    assert await manager.stop_stream(channel) is False
    assert channel.sent == []


@pytest.mark.asyncio
async def test_generation_failure_skips_tick_and_continues() -> None:
    calls = 0

    def flaky(data_type: str, options: Mapping[str, Any]) -> dict[str, Any]:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise RuntimeError("boom")
        return {"n": calls}

    manager = _manager(generate=flaky)
    channel = _FakeChannel()
    session = await manager.start_stream(channel, "geo", 100, {})
    await asyncio.sleep(0.35)

    assert session.ticks_failed == 1
    assert session.is_running
    assert channel.of_type("stream_data")[0]["data"] == {"n": 2}
    await manager.shutdown()


@pytest.mark.asyncio
async def test_unserializable_record_skips_tick_and_continues() -> None:
    calls = 0

    def lossy(data_type: str, options: Mapping[str, Any]) -> dict[str, Any]:
        nonlocal calls
        calls += 1
        if calls == 1:
            return {"bad": object()}
        return {"n": calls}

    manager = _manager(generate=lossy)
    channel = _FakeChannel()
    session = await manager.start_stream(channel, "geo", 100, {})
    await asyncio.sleep(0.35)

    assert session.ticks_failed == 1
    assert session.is_running
    assert channel.of_type("stream_data")[0]["data"] == {"n": 2}
    await manager.shutdown()



@pytest.mark.asyncio
async def test_disconnect_cleans_up_without_ack() -> None:
    manager = _manager()
    channel = _FakeChannel()
    session = await manager.start_stream(channel, "geo", 100, {})

    channel.closed = True
    assert manager.on_disconnect(channel) is True
    assert manager.on_disconnect(channel) is False
    await asyncio.sleep(0.01)

    assert not session.is_running
    assert channel.of_type("stream_stopped") == []
    assert len(manager) == 0


@pytest.mark.asyncio
async def test_send_failure_ends_session_and_forgets_it() -> None:
    manager = _manager()
    channel = _FakeChannel()
    session = await manager.start_stream(channel, "geo", 100, {})

    channel.fail_sends = True
    await asyncio.sleep(0.25)

    assert not session.is_running
    assert manager.get(channel) is None


@pytest.mark.asyncio
async def test_shutdown_cancels_every_session() -> None:
    manager = _manager()
    channels = [_FakeChannel() for _ in range(3)]
    sessions = [await manager.start_stream(ch, "geo", 100, {}) for ch in channels]

    await manager.shutdown()

    assert len(manager) == 0
    assert not any(s.is_running for s in sessions)
