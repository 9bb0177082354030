"""Server and dashboard client configuration for synthcity."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from synthcity._constants import (
    DEFAULT_CENTER_LAT,
    DEFAULT_CENTER_LNG,
    DEFAULT_STREAM_INTERVAL_MS,
    HEALTH_INTERVAL_SECONDS,
)
from synthcity.exceptions import SynthConfigError


def _env_number(env: Mapping[str, str], key: str, cast: type) -> Any:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return None
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise SynthConfigError(f"{key} must be a {cast.__name__}, got {raw!r}") from exc


def default_preferences_path() -> Path:
    """Location of the persisted dashboard preferences file."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / "synthcity" / "preferences.json"


@dataclasses.dataclass(frozen=True)
class SynthConfig:
    """Server configuration.

    Parameters
    ----------
    host : str
        Interface the HTTP/WebSocket server binds to.
    port : int
        TCP port. Defaults to ``3001``.
    static_dir : str or None
        Optional directory served at ``/`` (dashboard front-end assets).
    log_level : str
        Root logging level used by ``python -m synthcity``.
    center_lat : float
        Default latitude injected into generator options that omit one.
    center_lng : float
        Default longitude injected into generator options that omit one.
    default_interval_ms : int
        Stream interval used when a ``start_stream`` frame carries none.
    """

    host: str = "0.0.0.0"
    port: int = 3001
    static_dir: str | None = None
    log_level: str = "INFO"
    center_lat: float = DEFAULT_CENTER_LAT
    center_lng: float = DEFAULT_CENTER_LNG
    default_interval_ms: int = DEFAULT_STREAM_INTERVAL_MS

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise SynthConfigError(f"port must be between 1 and 65535, got {self.port}")
        if not -90.0 <= self.center_lat <= 90.0:
            raise SynthConfigError(f"center_lat out of range: {self.center_lat}")
        if not -180.0 <= self.center_lng <= 180.0:
            raise SynthConfigError(f"center_lng out of range: {self.center_lng}")

    @classmethod
    def from_env(cls, **overrides: Any) -> SynthConfig:
        """Create configuration from ``SYNTHCITY_*`` environment variables.

        ``PORT`` is honoured as a fallback for ``SYNTHCITY_PORT``. Explicit
        keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        host = env.get("SYNTHCITY_HOST")
        if host:
            config_kwargs["host"] = host

        port = _env_number(env, "SYNTHCITY_PORT", int)
        if port is None:
            port = _env_number(env, "PORT", int)
        if port is not None:
            config_kwargs["port"] = port

        static_dir = env.get("SYNTHCITY_STATIC_DIR")
        if static_dir:
            config_kwargs["static_dir"] = static_dir

        log_level = env.get("SYNTHCITY_LOG_LEVEL")
        if log_level:
            config_kwargs["log_level"] = log_level.strip().upper()

        _ENV_FLOAT_MAP = {
            "SYNTHCITY_CENTER_LAT": "center_lat",
            "SYNTHCITY_CENTER_LNG": "center_lng",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = _env_number(env, env_key, float)
            if val is not None:
                config_kwargs[field_name] = val

        interval = _env_number(env, "SYNTHCITY_DEFAULT_INTERVAL_MS", int)
        if interval is not None:
            config_kwargs["default_interval_ms"] = interval

        config_kwargs.update(overrides)
        return cls(**config_kwargs)

    def default_options(self) -> dict[str, float]:
        """Generator options pinning the configured map centre."""
        return {"centerLat": self.center_lat, "centerLng": self.center_lng}


@dataclasses.dataclass(frozen=True)
class ClientConfig:
    """Dashboard client configuration.

    Parameters
    ----------
    base_url : str
        Server root, e.g. ``"http://localhost:3001"``.
    health_interval : float
        Seconds between health checks.
    request_timeout : float
        Total timeout applied to HTTP requests.
    preferences_path : Path
        JSON file holding map mode, theme and compact flags.
    """

    base_url: str = "http://localhost:3001"
    health_interval: float = HEALTH_INTERVAL_SECONDS
    request_timeout: float = 30.0
    preferences_path: Path = dataclasses.field(default_factory=default_preferences_path)

    @property
    def ws_url(self) -> str:
        """WebSocket endpoint derived from :attr:`base_url`."""
        root = self.base_url.rstrip("/")
        if root.startswith("https://"):
            return "wss://" + root[len("https://") :] + "/ws"
        if root.startswith("http://"):
            return "ws://" + root[len("http://") :] + "/ws"
        return root + "/ws"
