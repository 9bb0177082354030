"""Async dashboard client: one-shot generation, live streams and health polling."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from pathlib import Path
from typing import Any

import aiohttp

from synthcity._constants import clamp_count, clamp_interval_ms
from synthcity.config import ClientConfig
from synthcity.dashboard.export import write_export
from synthcity.dashboard.health import ControlState, HealthMonitor
from synthcity.dashboard.mapview import MapMode
from synthcity.dashboard.notifications import NotificationCenter, NotificationLevel
from synthcity.dashboard.preferences import Preferences
from synthcity.dashboard.sync import ViewSynchronizer
from synthcity.exceptions import SynthError, SynthTransportError
from synthcity.models.messages import (
    GenerateResponse,
    StreamData,
    StreamStarted,
    StreamStopped,
    parse_server_message,
)

_logger = logging.getLogger(__name__)


class DashboardClient:
    """Client side of the synthcity dashboard.

    Usage::

        async with DashboardClient(ClientConfig(base_url="http://localhost:3001")) as client:
            await client.generate("geo", count=500)
            await client.start_stream("iot", interval_ms=500)
            ...
            await client.stop_stream()
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        sync: ViewSynchronizer | None = None,
        notifications: NotificationCenter | None = None,
        monitor_health: bool = True,
    ) -> None:
        self._config = config or ClientConfig()
        self._external_session = session is not None
        self._http_session = session
        self.notifications = notifications if notifications is not None else NotificationCenter()
        self.sync = sync if sync is not None else ViewSynchronizer(notifications=self.notifications)
        self.health = HealthMonitor(
            self.health_check,
            interval=self._config.health_interval,
            notifications=self.notifications,
        )
        self._monitor_health = monitor_health
        self._ws: aiohttp.ClientWebSocketResponse | None = None
        self._reader: asyncio.Task[None] | None = None
        self.stream_interval_ms: int | None = None

        self.preferences = Preferences.load(self._config.preferences_path)
        self.sync.map_view.set_mode(self.preferences.map_mode)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> DashboardClient:
        if self._http_session is None:
            timeout = aiohttp.ClientTimeout(total=self._config.request_timeout)
            self._http_session = aiohttp.ClientSession(timeout=timeout)
        if self._monitor_health:
            self.health.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop_stream(notify=False)
        await self.health.stop()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
        self._http_session = None

    def _require_session(self) -> aiohttp.ClientSession:
        if self._http_session is None:
            raise SynthError("Client not initialized. Use 'async with DashboardClient(...) as client:'")
        return self._http_session

    def _url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}{path}"

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def stream_active(self) -> bool:
        return self._ws is not None and not self._ws.closed

    @property
    def controls(self) -> ControlState:
        return ControlState.derive(self.health.server_online, self.stream_active)

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    async def _request_json(self, method: str, endpoint: str, **kwargs: Any) -> dict[str, Any]:
        session = self._require_session()
        _logger.debug("%s %s", method, endpoint)
        try:
            async with session.request(method, self._url(endpoint), **kwargs) as resp:
                if resp.status != 200:
                    text = await resp.text()
                    raise SynthTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
                body = await resp.json(content_type=None)
        except SynthTransportError:
            raise
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise SynthTransportError(f"Request to {endpoint} failed: {exc}", endpoint=endpoint) from exc
        except ValueError as exc:
            raise SynthTransportError(f"Invalid JSON from {endpoint}", endpoint=endpoint) from exc

        if not isinstance(body, dict):
            raise SynthTransportError(f"Unexpected payload from {endpoint}", endpoint=endpoint)
        return body

    async def health_check(self) -> dict[str, Any]:
        return await self._request_json("GET", "/api/health", headers={"Cache-Control": "no-store"})

    async def generate(
        self,
        data_type: str,
        count: int = 100,
        options: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Fetch a one-shot dataset and render it on every view."""
        payload = {"dataType": data_type, "count": clamp_count(count), "options": options or {}}
        try:
            body = await self._request_json("POST", "/api/generate", json=payload)
            response = GenerateResponse.model_validate(body)
        except SynthTransportError:
            self.notifications.notify("Failed to generate data", NotificationLevel.ERROR)
            raise
        except ValueError as exc:
            self.notifications.notify("Error generating data", NotificationLevel.ERROR)
            raise SynthTransportError("Malformed generate response", endpoint="/api/generate") from exc

        self.sync.load_generated(data_type, response.data)
        self.notifications.notify(
            f"Generated {response.count} {data_type} records", NotificationLevel.SUCCESS
        )
        return response.data

    # ------------------------------------------------------------------
    # Streaming
    # ------------------------------------------------------------------

    async def start_stream(
        self,
        data_type: str,
        interval_ms: int | None = None,
        options: dict[str, Any] | None = None,
    ) -> None:
        """Open the stream WebSocket and request records of *data_type*."""
        if self._ws is not None:
            await self.stop_stream(notify=False)

        session = self._require_session()
        interval = clamp_interval_ms(interval_ms)
        try:
            ws = await session.ws_connect(self._config.ws_url)
        except (aiohttp.ClientError, ConnectionError) as exc:
            self.notifications.notify("WebSocket error", NotificationLevel.ERROR)
            raise SynthTransportError(f"Stream connection failed: {exc}", endpoint="/ws") from exc
        try:
            await ws.send_json(
                {
                    "action": "start_stream",
                    "dataType": data_type,
                    "interval": interval,
                    "options": options or {},
                }
            )
        except (aiohttp.ClientError, ConnectionError) as exc:
            with contextlib.suppress(aiohttp.ClientError, ConnectionError):
                await ws.close()
            self.notifications.notify("WebSocket error", NotificationLevel.ERROR)
            raise SynthTransportError(f"Stream request failed: {exc}", endpoint="/ws") from exc

        self._ws = ws
        self.stream_interval_ms = interval
        self.sync.begin_stream(data_type)
        self._reader = asyncio.get_running_loop().create_task(
            self._read_stream(ws), name="synthcity-stream-reader"
        )
        self.notifications.notify("Real-time stream started", NotificationLevel.SUCCESS)

    async def _read_stream(self, ws: aiohttp.ClientWebSocketResponse) -> None:
        try:
            async for msg in ws:
                if msg.type == aiohttp.WSMsgType.TEXT:
                    self._handle_message(msg.data)
                elif msg.type == aiohttp.WSMsgType.ERROR:
                    _logger.warning("Stream WebSocket error: %s", ws.exception())
                    self.notifications.notify("WebSocket error", NotificationLevel.ERROR)
                    break
        finally:
            self.sync.end_stream()
            if self._ws is ws:
                # Closed from the server side, not via stop_stream().
                self._ws = None
                self._reader = None
                self.notifications.notify("Stream disconnected", NotificationLevel.WARNING)
            with contextlib.suppress(aiohttp.ClientError, ConnectionError):
                await ws.close()

    def _handle_message(self, text: str) -> None:
        message = parse_server_message(text)
        if isinstance(message, StreamData):
            self.sync.on_record(message.data_type, message.data)
        elif isinstance(message, StreamStarted):
            self.stream_interval_ms = message.interval
            _logger.debug("Stream started: %s every %dms", message.data_type, message.interval)
        elif isinstance(message, StreamStopped):
            _logger.debug("Stream stopped by server acknowledgement")

    async def stop_stream(self, *, notify: bool = True) -> bool:
        """Ask the server to stop and close the socket; ``False`` if nothing was open."""
        ws, self._ws = self._ws, None
        reader, self._reader = self._reader, None
        if ws is None:
            return False

        if not ws.closed:
            with contextlib.suppress(aiohttp.ClientError, ConnectionError):
                await ws.send_json({"action": "stop_stream"})
        if reader is not None and not reader.done():
            reader.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await reader
        with contextlib.suppress(aiohttp.ClientError, ConnectionError):
            await ws.close()
        self.sync.end_stream()
        if notify:
            self.notifications.notify("Stream stopped", NotificationLevel.INFO)
        return True

    # ------------------------------------------------------------------
    # View actions
    # ------------------------------------------------------------------

    def set_map_mode(self, mode: MapMode | str) -> None:
        """Switch map mode and persist it."""
        self.sync.set_map_mode(mode)
        self.save_preferences(map_mode=MapMode(mode))

    def save_preferences(self, **changes: Any) -> Preferences:
        self.preferences = self.preferences.with_changes(**changes)
        self.preferences.save(self._config.preferences_path)
        return self.preferences

    def clear(self) -> None:
        self.sync.clear()
        self.notifications.notify("Data cleared", NotificationLevel.INFO)

    def export(self, path: Path | str, fmt: str | None = None) -> Path | None:
        """Write the buffered records to *path*; warns and returns ``None`` when empty."""
        records = self.sync.buffer.snapshot()
        if not records:
            self.notifications.notify("No data to export", NotificationLevel.WARNING)
            return None
        written = write_export(records, Path(path), fmt)
        self.notifications.notify(
            f"Data exported as {written.suffix.lstrip('.').upper() or fmt}", NotificationLevel.SUCCESS
        )
        return written
