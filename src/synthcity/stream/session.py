"""Server-side state of one connection's active stream."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from typing import Any, Protocol


class StreamChannel(Protocol):
    """Structural interface of the push channel owned by a session.

    ``aiohttp.web.WebSocketResponse`` satisfies it; tests pass small fakes.
    """

    @property
    def closed(self) -> bool: ...

    async def send_json(self, data: Any) -> None: ...


@dataclass(slots=True, eq=False)
class StreamSession:
    """One live stream.

    ``task`` is the single owner of the session's timer; cancelling it is the
    only way a session stops producing ticks.
    """

    connection_id: int
    data_type: str
    interval_ms: int
    options: dict[str, Any] = field(default_factory=dict)
    task: asyncio.Task[None] | None = None
    started_at: float = field(default_factory=time.monotonic)
    ticks_sent: int = 0
    ticks_failed: int = 0

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000.0

    @property
    def is_running(self) -> bool:
        return self.task is not None and not self.task.done()

    def cancel(self) -> bool:
        """Cancel the timer task; ``False`` if it was not running."""
        task = self.task
        if task is None or task.done():
            return False
        task.cancel()
        return True
