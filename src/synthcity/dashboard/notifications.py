"""User-visible notices (toasts) raised by the dashboard pipeline."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum

_logger = logging.getLogger(__name__)


class NotificationLevel(StrEnum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    message: str
    level: NotificationLevel = NotificationLevel.INFO
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def title(self) -> str:
        return self.level.value.capitalize()


class NotificationCenter:
    """Keeps the most recent notices and forwards each one to an optional listener."""

    def __init__(
        self,
        *,
        history: int = 50,
        listener: Callable[[Notification], None] | None = None,
    ) -> None:
        self._history: deque[Notification] = deque(maxlen=history)
        self._listener = listener

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.INFO) -> Notification:
        notification = Notification(message=message, level=level)
        self._history.append(notification)
        _logger.debug("notification level=%s message=%s", level.value, message)
        if self._listener is not None:
            try:
                self._listener(notification)
            except Exception:
                _logger.debug("notification listener failed", exc_info=True)
        return notification

    @property
    def history(self) -> list[Notification]:
        return list(self._history)

    def last(self) -> Notification | None:
        return self._history[-1] if self._history else None

    def clear(self) -> None:
        self._history.clear()
