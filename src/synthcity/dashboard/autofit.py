"""One-shot viewport framing for the first points of a stream."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from enum import StrEnum

from synthcity._constants import AUTOFIT_FALLBACK_SECONDS, AUTOFIT_MAX_POINTS
from synthcity.geo import Bounds, LatLng

_logger = logging.getLogger(__name__)


class AutoFitState(StrEnum):
    IDLE = "idle"
    ARMED = "armed"
    SETTLED = "settled"
    DISARMED = "disarmed"


class AutoFitController:
    """Collects the first stream points and frames the map exactly once.

    Parameters
    ----------
    fit
        Callback receiving the collected bounds; returns ``True`` when the map
        was actually framed (degenerate boxes are refused).
    max_points
        Number of points that settles the controller immediately.
    fallback_seconds
        Delay after arming at which the collected points (if any) are framed.
    """

    def __init__(
        self,
        fit: Callable[[Bounds], bool],
        *,
        max_points: int = AUTOFIT_MAX_POINTS,
        fallback_seconds: float = AUTOFIT_FALLBACK_SECONDS,
    ) -> None:
        self._fit = fit
        self._max_points = max_points
        self._fallback_seconds = fallback_seconds
        self._points: list[LatLng] = []
        self._timer: asyncio.TimerHandle | None = None
        self._state = AutoFitState.IDLE
        self.fit_count = 0

    @property
    def state(self) -> AutoFitState:
        return self._state

    @property
    def points(self) -> list[LatLng]:
        return list(self._points)

    @property
    def armed(self) -> bool:
        return self._state == AutoFitState.ARMED

    def arm(self) -> None:
        """Start collecting; must be called from inside the running event loop."""
        self._cancel_timer()
        self._points.clear()
        self._state = AutoFitState.ARMED
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._fallback_seconds, self._on_timeout)

    def collect(self, lat: float, lng: float) -> bool:
        """Record a point while armed; returns ``True`` if this point settled the controller."""
        if self._state != AutoFitState.ARMED:
            return False
        if len(self._points) < self._max_points:
            self._points.append(LatLng(lat, lng))
        if len(self._points) >= self._max_points:
            self._settle()
            return True
        return False

    def disarm(self) -> None:
        """Stop collecting without framing (stream stopped or failed)."""
        self._cancel_timer()
        if self._state == AutoFitState.ARMED:
            self._state = AutoFitState.DISARMED
        self._points.clear()

    def _on_timeout(self) -> None:
        self._timer = None
        if self._state != AutoFitState.ARMED:
            return
        if not self._points:
            # Nothing to frame yet; the point-count trigger still applies.
            _logger.debug("Auto-fit timer fired with no points collected")
            return
        self._settle()

    def _settle(self) -> None:
        self._cancel_timer()
        self._state = AutoFitState.SETTLED
        bounds = Bounds.from_points(self._points)
        if bounds is None:
            return
        if self._fit(bounds):
            self.fit_count += 1
        else:
            _logger.debug("Auto-fit skipped for %d points (degenerate bounds)", len(self._points))

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
