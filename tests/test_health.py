from __future__ import annotations

import asyncio

import pytest

from synthcity.dashboard.health import ControlState, HealthMonitor
from synthcity.dashboard.notifications import NotificationCenter, NotificationLevel


class _FlakyServer:
    def __init__(self) -> None:
        self.online = True
        self.calls = 0

    async def __call__(self) -> dict[str, str]:
        self.calls += 1
        if not self.online:
            raise ConnectionRefusedError("connection refused")
        return {"status": "healthy"}


@pytest.mark.asyncio
async def test_notifies_only_on_state_change() -> None:
    server = _FlakyServer()
    notifications = NotificationCenter()
    monitor = HealthMonitor(server, notifications=notifications)

    assert await monitor.poll_once() is True
    assert monitor.server_online is True
    assert monitor.latency_ms is not None
    assert notifications.history == []

    server.online = False
    await monitor.poll_once()
    await monitor.poll_once()
    assert monitor.server_online is False
    assert monitor.latency_ms is None
    assert [n.level for n in notifications.history] == [NotificationLevel.WARNING]

    server.online = True
    await monitor.poll_once()
    assert [n.level for n in notifications.history] == [
        NotificationLevel.WARNING,
        NotificationLevel.SUCCESS,
    ]


@pytest.mark.asyncio
async def test_first_failure_warns() -> None:
    server = _FlakyServer()
    server.online = False
    notifications = NotificationCenter()
    monitor = HealthMonitor(server, notifications=notifications)

    await monitor.poll_once()
    assert notifications.last() is not None
    assert notifications.last().level == NotificationLevel.WARNING


@pytest.mark.asyncio
async def test_background_polling_starts_immediately_and_stops() -> None:
    server = _FlakyServer()
    monitor = HealthMonitor(server, interval=0.02)

    monitor.start()
    await asyncio.sleep(0.07)
    await monitor.stop()
    calls = server.calls

    assert calls >= 3
    assert not monitor.is_running
    await asyncio.sleep(0.05)
    assert server.calls == calls


def test_control_state() -> None:
    assert ControlState.derive(True, False) == ControlState(generate_enabled=True, stop_enabled=True)
    assert ControlState.derive(False, True) == ControlState(generate_enabled=False, stop_enabled=True)
    assert ControlState.derive(False, False) == ControlState(generate_enabled=False, stop_enabled=False)
    assert ControlState.derive(None, False).generate_enabled is False
