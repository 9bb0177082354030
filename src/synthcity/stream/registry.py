"""Stream session registry.

The manager is the only component allowed to create, replace or destroy
stream sessions. All registry mutations for a connection happen
synchronously before the first ``await`` of each operation, so start, stop
and disconnect for one connection cannot interleave half-way: a stop racing
a disconnect pops the entry exactly once and cancels exactly one timer.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from synthcity._constants import DEFAULT_STREAM_INTERVAL_MS, clamp_interval_ms
from synthcity.generator import generate_one
from synthcity.models.messages import StreamStarted, StreamStopped, WireMessage
from synthcity.stream.dispatcher import CHANNEL_ERRORS, GenerateOne, run_dispatcher
from synthcity.stream.session import StreamChannel, StreamSession

_logger = logging.getLogger(__name__)


class StreamSessionManager:
    """Maps each live connection to at most one active :class:`StreamSession`.

    Usage::

        manager = StreamSessionManager()
        await manager.start_stream(ws, "geo", 500, {})
        await manager.stop_stream(ws)
        await manager.shutdown()
    """

    def __init__(
        self,
        *,
        generate: GenerateOne = generate_one,
        default_options: Mapping[str, Any] | None = None,
        default_interval_ms: int = DEFAULT_STREAM_INTERVAL_MS,
    ) -> None:
        self._generate = generate
        self._default_options = dict(default_options or {})
        self._default_interval_ms = default_interval_ms
        self._sessions: dict[int, StreamSession] = {}

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, channel: StreamChannel) -> StreamSession | None:
        return self._sessions.get(id(channel))

    @property
    def sessions(self) -> list[StreamSession]:
        return list(self._sessions.values())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start_stream(
        self,
        channel: StreamChannel,
        data_type: str,
        interval_ms: Any = None,
        options: Mapping[str, Any] | None = None,
    ) -> StreamSession:
        """Start (or replace) the stream for *channel* and acknowledge it."""
        key = id(channel)
        interval = clamp_interval_ms(self._default_interval_ms if interval_ms is None else interval_ms)

        previous = self._sessions.pop(key, None)
        if previous is not None:
            previous.cancel()
            _logger.debug(
                "Replacing stream connection=%s %s -> %s",
                key,
                previous.data_type,
                data_type,
            )

        session = StreamSession(
            connection_id=key,
            data_type=data_type,
            interval_ms=interval,
            options={**self._default_options, **dict(options or {})},
        )
        task = asyncio.create_task(
            run_dispatcher(session, channel, self._generate),
            name=f"synthcity-stream-{key}",
        )
        session.task = task
        self._sessions[key] = session
        task.add_done_callback(lambda _t: self._forget(session))

        _logger.info("Stream started connection=%s dataType=%s interval=%sms", key, data_type, interval)
        await self._send(channel, StreamStarted(data_type=data_type, interval=interval))
        return session

    async def stop_stream(self, channel: StreamChannel) -> bool:
        """Stop the stream for *channel*; no-op (``False``) when none is active."""
        session = self._sessions.pop(id(channel), None)
        if session is None:
            return False
        session.cancel()
        _logger.info("Stream stopped connection=%s", session.connection_id)
        await self._send(channel, StreamStopped())
        return True

    def on_disconnect(self, channel: StreamChannel) -> bool:
        """Same cleanup as :meth:`stop_stream`, without acknowledgement."""
        session = self._sessions.pop(id(channel), None)
        if session is None:
            return False
        session.cancel()
        _logger.info("Stream cleaned up after disconnect connection=%s", session.connection_id)
        return True

    async def shutdown(self) -> None:
        """Cancel every outstanding timer and wait for the tasks to finish."""
        sessions = list(self._sessions.values())
        self._sessions.clear()
        tasks = [s.task for s in sessions if s.task is not None]
        for session in sessions:
            session.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        _logger.debug("Session manager shut down (%d sessions cancelled)", len(sessions))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _forget(self, session: StreamSession) -> None:
        """Drop *session* once its task ended on its own (channel failure)."""
        current = self._sessions.get(session.connection_id)
        if current is session:
            del self._sessions[session.connection_id]
            _logger.debug("Stream ended by channel failure connection=%s", session.connection_id)

    async def _send(self, channel: StreamChannel, message: WireMessage) -> None:
        if channel.closed:
            return
        try:
            await channel.send_json(message.to_wire())
        except CHANNEL_ERRORS:
            _logger.debug("Acknowledgement not delivered", exc_info=True)
