"""aiohttp application: HTTP API plus the stream WebSocket."""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path

from aiohttp import WSMsgType, web
from pydantic import ValidationError

from synthcity._constants import MAP_TOPIC_COUNT, clamp_count
from synthcity.config import SynthConfig
from synthcity.exceptions import GenerationError, InvalidDataTypeError, InvalidRequestError
from synthcity.generator import DATA_TYPES, generate, resolve_data_type
from synthcity.models.messages import (
    ErrorResponse,
    GenerateRequest,
    GenerateResponse,
    HealthStatus,
    MapResponse,
    StartStreamRequest,
    StopStreamRequest,
    parse_control_frame,
)
from synthcity.stream.registry import StreamSessionManager

_logger = logging.getLogger(__name__)

CONFIG_KEY: web.AppKey[SynthConfig] = web.AppKey("config", SynthConfig)
MANAGER_KEY: web.AppKey[StreamSessionManager] = web.AppKey("stream_manager", StreamSessionManager)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def _error(message: str, status: int = 400) -> web.Response:
    return web.json_response(ErrorResponse(error=message).to_wire(), status=status)


@web.middleware
async def _no_cache_html(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Avoid stale dashboard HTML; other assets keep their own caching."""
    response = await handler(request)
    if request.path == "/" or request.path.endswith(".html"):
        response.headers["Cache-Control"] = "no-cache"
    return response


# ---------------------------------------------------------------------------
# HTTP handlers
# ---------------------------------------------------------------------------


async def health(_request: web.Request) -> web.Response:
    return web.json_response(HealthStatus().to_wire())


async def _generate_off_loop(data_type: str, count: int, options: dict) -> list[dict]:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, functools.partial(generate, data_type, count, options))


async def generate_data(request: web.Request) -> web.Response:
    config = request.app[CONFIG_KEY]
    try:
        body = await request.json()
    except ValueError:
        return _error("Request body must be JSON")
    if not isinstance(body, dict):
        return _error("Request body must be a JSON object")

    try:
        parsed = GenerateRequest.model_validate(body)
    except ValidationError:
        return _error("dataType is required")

    try:
        tag = resolve_data_type(parsed.data_type)
    except InvalidRequestError as exc:
        return _error(str(exc))

    count = clamp_count(parsed.count)
    options = {**config.default_options(), **parsed.options}
    try:
        data = await _generate_off_loop(tag.value, count, options)
    except GenerationError as exc:
        _logger.exception("Generation failed for %s", tag.value)
        return _error(str(exc), status=500)
    _logger.info("Generated %d %s records", len(data), tag.value)
    return web.json_response(GenerateResponse(data_type=tag.value, count=len(data), data=data).to_wire())


async def map_data(request: web.Request) -> web.Response:
    config = request.app[CONFIG_KEY]
    topic = request.query.get("topic", "")
    try:
        tag = resolve_data_type(topic)
    except InvalidDataTypeError as exc:
        return _error(str(exc))
    data = await _generate_off_loop(tag.value, MAP_TOPIC_COUNT, config.default_options())
    return web.json_response(MapResponse(topic=tag.value, data=data).to_wire())


# ---------------------------------------------------------------------------
# WebSocket
# ---------------------------------------------------------------------------


async def handle_control_frame(
    manager: StreamSessionManager,
    ws: web.WebSocketResponse,
    text: str,
) -> None:
    """Apply one inbound control frame. Never raises."""
    frame = parse_control_frame(text)
    if frame is None:
        return
    try:
        if isinstance(frame, StartStreamRequest):
            if frame.data_type not in DATA_TYPES:
                _logger.warning("start_stream with unknown dataType %r ignored", frame.data_type)
                return
            await manager.start_stream(ws, frame.data_type, frame.interval, frame.options)
        elif isinstance(frame, StopStreamRequest):
            await manager.stop_stream(ws)
    except Exception:
        _logger.exception("Control frame handling failed; connection kept open")


async def stream_socket(request: web.Request) -> web.WebSocketResponse:
    manager = request.app[MANAGER_KEY]
    ws = web.WebSocketResponse(heartbeat=30.0)
    await ws.prepare(request)
    _logger.info("New WebSocket connection from %s", request.remote)

    try:
        async for msg in ws:
            if msg.type == WSMsgType.TEXT:
                await handle_control_frame(manager, ws, msg.data)
            elif msg.type == WSMsgType.ERROR:
                _logger.warning("WebSocket error: %s", ws.exception())
            else:
                _logger.debug("Ignoring non-text frame type=%s", msg.type)
    finally:
        manager.on_disconnect(ws)
        _logger.info("WebSocket connection closed")
    return ws


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


async def _shutdown_streams(app: web.Application) -> None:
    await app[MANAGER_KEY].shutdown()


def create_app(
    config: SynthConfig | None = None,
    *,
    manager: StreamSessionManager | None = None,
) -> web.Application:
    """Build the web application with an injected session manager."""
    config = config or SynthConfig()
    app = web.Application(middlewares=[_no_cache_html])
    app[CONFIG_KEY] = config
    app[MANAGER_KEY] = manager or StreamSessionManager(
        default_options=config.default_options(),
        default_interval_ms=config.default_interval_ms,
    )

    app.router.add_get("/api/health", health)
    app.router.add_post("/api/generate", generate_data)
    app.router.add_get("/api/map", map_data)
    app.router.add_get("/ws", stream_socket)

    if config.static_dir:
        static_root = Path(config.static_dir)
        index = static_root / "index.html"

        async def _index(_request: web.Request) -> web.FileResponse:
            return web.FileResponse(index)

        if index.is_file():
            app.router.add_get("/", _index)
        # Catch-all; registered last so the API routes above win.
        app.router.add_static("/", static_root)

    app.on_shutdown.append(_shutdown_streams)
    return app


def run(config: SynthConfig | None = None) -> None:
    """Serve forever (blocking)."""
    config = config or SynthConfig.from_env()
    app = create_app(config)
    _logger.info("Server running on http://%s:%s", config.host, config.port)
    web.run_app(app, host=config.host, port=config.port, print=None)
