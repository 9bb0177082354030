"""Per-session tick loop.

Each tick asks the record generator for one record and pushes a
``stream_data`` frame. A record that fails to build or serialize only costs
that tick; a failing channel ends the loop.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any

from synthcity._logsafe import summarize_for_log
from synthcity.models.messages import StreamData
from synthcity.stream.session import StreamChannel, StreamSession

_logger = logging.getLogger(__name__)

GenerateOne = Callable[[str, Mapping[str, Any]], dict[str, Any]]

# Exceptions aiohttp raises when writing to a closing/closed WebSocket.
CHANNEL_ERRORS: tuple[type[BaseException], ...] = (ConnectionError, RuntimeError)


async def run_dispatcher(
    session: StreamSession,
    channel: StreamChannel,
    generate_one: GenerateOne,
) -> None:
    """Tick at a fixed rate until cancelled or the channel goes away."""
    loop = asyncio.get_running_loop()
    interval = session.interval_seconds
    deadline = loop.time() + interval

    while True:
        await asyncio.sleep(max(0.0, deadline - loop.time()))
        # Fixed-rate schedule; skip missed slots instead of bursting.
        deadline += interval
        if deadline < loop.time():
            deadline = loop.time() + interval

        try:
            record = generate_one(session.data_type, session.options)
            payload = StreamData(data_type=session.data_type, data=record).to_wire()
        except Exception:
            session.ticks_failed += 1
            _logger.exception(
                "Error generating %s record (tick skipped, connection=%s)",
                session.data_type,
                session.connection_id,
            )
            continue

        if channel.closed:
            _logger.debug("Channel closed, ending stream connection=%s", session.connection_id)
            return

        try:
            await channel.send_json(payload)
        except CHANNEL_ERRORS:
            _logger.debug(
                "Send failed, ending stream connection=%s",
                session.connection_id,
                exc_info=True,
            )
            return
        session.ticks_sent += 1
        _logger.debug("stream_data sent %s", summarize_for_log(record, max_items=5))
