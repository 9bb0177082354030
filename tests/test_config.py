from __future__ import annotations

from pathlib import Path

import pytest

from synthcity.config import ClientConfig, SynthConfig, default_preferences_path
from synthcity.exceptions import SynthConfigError


def test_from_env_reads_synthcity_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SYNTHCITY_HOST", "127.0.0.1")
    monkeypatch.setenv("SYNTHCITY_PORT", "8080")
    monkeypatch.setenv("SYNTHCITY_CENTER_LAT", "52.52")
    monkeypatch.setenv("SYNTHCITY_LOG_LEVEL", "debug")

    config = SynthConfig.from_env()

    assert config.host == "127.0.0.1"
    assert config.port == 8080
    assert config.center_lat == 52.52
    assert config.log_level == "DEBUG"
    assert config.default_options() == {"centerLat": 52.52, "centerLng": config.center_lng}


def test_from_env_port_fallback_and_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SYNTHCITY_PORT", raising=False)
    monkeypatch.setenv("PORT", "4000")

    assert SynthConfig.from_env().port == 4000
    assert SynthConfig.from_env(port=5000).port == 5000


def test_from_env_invalid_number_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SYNTHCITY_PORT", "not-a-port")
    with pytest.raises(SynthConfigError):
        SynthConfig.from_env()


def test_out_of_range_values_raise() -> None:
    with pytest.raises(SynthConfigError):
        SynthConfig(port=0)
    with pytest.raises(SynthConfigError):
        SynthConfig(center_lat=91.0)


def test_client_ws_url() -> None:
    assert ClientConfig(base_url="http://localhost:3001/").ws_url == "ws://localhost:3001/ws"
    assert ClientConfig(base_url="https://city.example").ws_url == "wss://city.example/ws"


def test_default_preferences_path_honours_xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_preferences_path() == tmp_path / "synthcity" / "preferences.json"
