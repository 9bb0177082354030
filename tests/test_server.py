from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Mapping
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestClient, TestServer

from synthcity.config import SynthConfig
from synthcity.server import MANAGER_KEY, create_app
from synthcity.stream.registry import StreamSessionManager


def _fake_generate(data_type: str, options: Mapping[str, Any]) -> dict[str, Any]:
    return {"kind": data_type, "lat": options["centerLat"], "lng": options["centerLng"]}


@pytest_asyncio.fixture
async def app() -> web.Application:
    manager = StreamSessionManager(generate=_fake_generate, default_options=SynthConfig().default_options())
    return create_app(SynthConfig(), manager=manager)


@pytest_asyncio.fixture
async def client(app: web.Application) -> AsyncIterator[TestClient]:
    async with TestClient(TestServer(app)) as test_client:
        yield test_client


@pytest.mark.asyncio
async def test_health(client: TestClient) -> None:
    resp = await client.get("/api/health")
    assert resp.status == 200
    body = await resp.json()
    assert body["status"] == "healthy"
    assert "timestamp" in body


@pytest.mark.asyncio
async def test_generate_clamps_count(client: TestClient) -> None:
    resp = await client.post("/api/generate", json={"dataType": "geo", "count": 50_000, "options": {}})
    body = await resp.json()

    assert resp.status == 200
    assert body["success"] is True
    assert body["dataType"] == "geo"
    assert body["count"] == 10_000
    assert len(body["data"]) == 10_000


@pytest.mark.asyncio
async def test_generate_non_numeric_count_defaults(client: TestClient) -> None:
    resp = await client.post("/api/generate", json={"dataType": "climate", "count": "many"})
    body = await resp.json()
    assert body["count"] == 100


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [{"dataType": "unicorns", "count": 5}, {"count": 5}, [1, 2]],
)
async def test_generate_rejects_bad_requests(client: TestClient, payload: Any) -> None:
    resp = await client.post("/api/generate", json=payload)
    assert resp.status == 400
    assert "error" in await resp.json()


@pytest.mark.asyncio
async def test_generate_rejects_non_json(client: TestClient) -> None:
    resp = await client.post("/api/generate", data="dataType=geo")
    assert resp.status == 400


@pytest.mark.asyncio
async def test_map_topic(client: TestClient) -> None:
    resp = await client.get("/api/map", params={"topic": "transport"})
    body = await resp.json()
    assert body["topic"] == "transport"
    assert len(body["data"]) == 1000

    bad = await client.get("/api/map", params={"topic": "nope"})
    assert bad.status == 400


@pytest.mark.asyncio
async def test_websocket_start_and_stop(client: TestClient, app: web.Application) -> None:
    ws = await client.ws_connect("/ws")
    await ws.send_json({"action": "start_stream", "dataType": "geo", "interval": 100, "options": {}})

    started = await ws.receive_json(timeout=2)
    assert started == {"type": "stream_started", "dataType": "geo", "interval": 100}

    data = await ws.receive_json(timeout=2)
    assert data["type"] == "stream_data"
    assert data["data"] == {"kind": "geo", "lat": 50.9375, "lng": 6.9603}

    await ws.send_json({"action": "stop_stream"})
    while True:
        message = await ws.receive_json(timeout=2)
        if message["type"] == "stream_stopped":
            break
    assert len(app[MANAGER_KEY]) == 0
    await ws.close()


@pytest.mark.asyncio
async def test_websocket_ignores_malformed_frames(client: TestClient, app: web.Application) -> None:
    ws = await client.ws_connect("/ws")
    await ws.send_str("this is not json")
    await ws.send_json({"action": "start_stream", "dataType": "unicorns"})
    await ws.send_json({"action": "jump"})
    await ws.send_json({"action": "start_stream", "dataType": "iot", "interval": 5000})

    started = await ws.receive_json(timeout=2)
    assert started["dataType"] == "iot"
    assert started["interval"] == 5000
    await ws.close()


@pytest.mark.asyncio
async def test_disconnect_removes_session(client: TestClient, app: web.Application) -> None:
    ws = await client.ws_connect("/ws")
    await ws.send_json({"action": "start_stream", "dataType": "geo", "interval": 100})
    await ws.receive_json(timeout=2)
    assert len(app[MANAGER_KEY]) == 1

    await ws.close()
    for _ in range(50):
        if len(app[MANAGER_KEY]) == 0:
            break
        await asyncio.sleep(0.02)
    assert len(app[MANAGER_KEY]) == 0


@pytest.mark.asyncio
async def test_static_dir_served_at_root(tmp_path: Path) -> None:
    (tmp_path / "index.html").write_text("<h1>dashboard</h1>", encoding="utf-8")
    (tmp_path / "app.js").write_text("console.log('up');", encoding="utf-8")
    app = create_app(SynthConfig(static_dir=str(tmp_path)))

    async with TestClient(TestServer(app)) as test_client:
        index = await test_client.get("/")
        assert index.status == 200
        assert "dashboard" in await index.text()
        assert index.headers["Cache-Control"] == "no-cache"

        script = await test_client.get("/app.js")
        assert script.status == 200
        assert "console.log" in await script.text()

        health = await test_client.get("/api/health")
        assert health.status == 200
        assert (await health.json())["status"] == "healthy"
