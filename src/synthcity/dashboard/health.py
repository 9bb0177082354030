"""Periodic server health polling and the control affordances it drives."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from synthcity._constants import HEALTH_INTERVAL_SECONDS
from synthcity.dashboard.notifications import NotificationCenter, NotificationLevel

_logger = logging.getLogger(__name__)

HealthCheck = Callable[[], Awaitable[object]]


@dataclass(frozen=True)
class ControlState:
    """Which dashboard controls are usable.

    Stop stays available while a stream is open so it can always be closed,
    even when health checks fail.
    """

    generate_enabled: bool
    stop_enabled: bool

    @classmethod
    def derive(cls, server_online: bool | None, stream_active: bool) -> ControlState:
        online = bool(server_online)
        return cls(generate_enabled=online, stop_enabled=online or stream_active)


class HealthMonitor:
    """Polls *check* every *interval* seconds; the first poll runs immediately.

    ``server_online`` starts as ``None`` (unknown). Notices are emitted only
    when the state changes: a warning on the first failure after being online
    or unknown, a success when coming back.
    """

    def __init__(
        self,
        check: HealthCheck,
        *,
        interval: float = HEALTH_INTERVAL_SECONDS,
        notifications: NotificationCenter | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._check = check
        self._interval = interval
        self._notifications = notifications if notifications is not None else NotificationCenter()
        self._clock = clock
        self._task: asyncio.Task[None] | None = None
        self.server_online: bool | None = None
        self.latency_ms: int | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="synthcity-health")

    async def stop(self) -> None:
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        while True:
            await self.poll_once()
            await asyncio.sleep(self._interval)

    async def poll_once(self) -> bool:
        started = self._clock()
        try:
            await self._check()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            _logger.debug("Health check failed: %s", exc)
            self._set_status(False, None)
            return False
        self._set_status(True, round((self._clock() - started) * 1000))
        return True

    def _set_status(self, online: bool, latency_ms: int | None) -> None:
        previous = self.server_online
        self.server_online = online
        self.latency_ms = latency_ms
        if online:
            if previous is False:
                self._notifications.notify("Server is back online", NotificationLevel.SUCCESS)
        elif previous is not False:
            _logger.warning("Server unreachable (health check failed)")
            self._notifications.notify(
                "Cannot reach server (health check failed)", NotificationLevel.WARNING
            )
