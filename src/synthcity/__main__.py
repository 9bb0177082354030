"""``python -m synthcity``: run the HTTP/WebSocket server."""

from __future__ import annotations

import argparse
import logging
import sys

from synthcity.config import SynthConfig
from synthcity.exceptions import SynthConfigError
from synthcity.server import run


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Synthetic smart-city data server (HTTP API + real-time stream).",
    )
    parser.add_argument("--host", help="Bind address (default: SYNTHCITY_HOST or 0.0.0.0).")
    parser.add_argument("--port", type=int, help="TCP port (default: SYNTHCITY_PORT, PORT or 3001).")
    parser.add_argument("--static-dir", help="Directory with dashboard assets to serve at /.")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: SYNTHCITY_LOG_LEVEL or INFO).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    overrides = {
        key: value
        for key, value in {
            "host": args.host,
            "port": args.port,
            "static_dir": args.static_dir,
            "log_level": args.log_level,
        }.items()
        if value is not None
    }
    try:
        config = SynthConfig.from_env(**overrides)
    except SynthConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    run(config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
