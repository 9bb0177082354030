#!/usr/bin/env python3
"""Passive stream probe for a running synthcity server.

Opens the stream WebSocket, requests one data type and reports tick timing:
how many ``stream_data`` frames arrived, and the observed gap between them
compared with the requested interval.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path

import aiohttp

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from synthcity.config import ClientConfig  # noqa: E402
from synthcity.generator import DATA_TYPES  # noqa: E402
from synthcity.models.messages import (  # noqa: E402
    StreamData,
    StreamStarted,
    StreamStopped,
    parse_server_message,
)

_LOG = logging.getLogger("stream_probe")


@dataclass
class ProbeStats:
    started_at: float
    total_messages: int = 0
    data_frames: int = 0
    ignored_frames: int = 0
    granted_interval_ms: int | None = None
    last_data_at: float | None = None
    min_gap: float | None = None
    max_gap: float | None = None

    def on_data(self, now: float) -> float | None:
        previous = self.last_data_at
        self.data_frames += 1
        self.last_data_at = now
        if previous is None:
            return None
        gap = now - previous
        self.min_gap = gap if self.min_gap is None else min(self.min_gap, gap)
        self.max_gap = gap if self.max_gap is None else max(self.max_gap, gap)
        return gap


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Passive probe for the synthcity stream WebSocket.")
    parser.add_argument("data_type", choices=sorted(DATA_TYPES), help="Data type to stream.")
    parser.add_argument("--url", default="http://localhost:3001", help="Server base URL.")
    parser.add_argument("--interval", type=int, default=1000, help="Requested tick interval in ms.")
    parser.add_argument(
        "--duration",
        type=float,
        default=10.0,
        help="Seconds to listen before sending stop_stream (0 = until Ctrl+C).",
    )
    parser.add_argument("--json", action="store_true", help="Pretty-print each record.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logs.")
    return parser.parse_args()


def _print_summary(stats: ProbeStats) -> None:
    runtime = time.monotonic() - stats.started_at
    print("[probe] Summary")
    print(f"[probe]   runtime_s      : {runtime:.1f}")
    print(f"[probe]   interval_ms    : {stats.granted_interval_ms}")
    print(f"[probe]   total_messages : {stats.total_messages}")
    print(f"[probe]   data_frames    : {stats.data_frames}")
    print(f"[probe]   ignored_frames : {stats.ignored_frames}")
    if stats.min_gap is not None and stats.max_gap is not None:
        print(f"[probe]   gap_ms min/max : {stats.min_gap * 1000:.0f} / {stats.max_gap * 1000:.0f}")


async def _listen(ws: aiohttp.ClientWebSocketResponse, stats: ProbeStats, pretty: bool) -> None:
    async for msg in ws:
        if msg.type != aiohttp.WSMsgType.TEXT:
            _LOG.debug("non-text frame type=%s", msg.type)
            continue
        stats.total_messages += 1
        message = parse_server_message(msg.data)
        if isinstance(message, StreamStarted):
            stats.granted_interval_ms = message.interval
            print(f"[probe] stream_started dataType={message.data_type} interval={message.interval}ms")
        elif isinstance(message, StreamData):
            gap = stats.on_data(time.monotonic())
            gap_text = "-" if gap is None else f"{gap * 1000:.0f}ms"
            print(f"[probe] stream_data #{stats.data_frames} gap={gap_text}")
            if pretty:
                print(json.dumps(message.data, indent=2, ensure_ascii=False))
        elif isinstance(message, StreamStopped):
            print("[probe] stream_stopped")
            return
        else:
            stats.ignored_frames += 1


async def _run(args: argparse.Namespace) -> ProbeStats:
    config = ClientConfig(base_url=args.url)
    stats = ProbeStats(started_at=time.monotonic())
    async with aiohttp.ClientSession() as session, session.ws_connect(config.ws_url) as ws:
        await ws.send_json(
            {"action": "start_stream", "dataType": args.data_type, "interval": args.interval, "options": {}}
        )
        listener = asyncio.create_task(_listen(ws, stats, args.json))
        try:
            await asyncio.wait_for(asyncio.shield(listener), timeout=args.duration or None)
        except asyncio.TimeoutError:
            await ws.send_json({"action": "stop_stream"})
            await asyncio.wait_for(listener, timeout=5.0)
    return stats


def _main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        stats = asyncio.run(_run(args))
    except KeyboardInterrupt:
        print("[probe] Interrupted")
        return 130
    except (aiohttp.ClientError, OSError, asyncio.TimeoutError) as exc:
        print(f"[probe] Stream failed: {exc}", file=sys.stderr)
        return 2
    _print_summary(stats)
    return 0


if __name__ == "__main__":
    sys.exit(_main())
