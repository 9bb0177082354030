from __future__ import annotations

import pytest

from synthcity import __main__ as entry


def test_invalid_environment_exits_with_code_2(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SYNTHCITY_PORT", "eighty")
    called: list[object] = []
    monkeypatch.setattr(entry, "run", called.append)

    assert entry.main([]) == 2
    assert called == []


def test_cli_overrides_reach_server_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SYNTHCITY_PORT", raising=False)
    monkeypatch.delenv("PORT", raising=False)
    captured: list[object] = []
    monkeypatch.setattr(entry, "run", captured.append)

    assert entry.main(["--port", "4100", "--host", "127.0.0.1", "--log-level", "DEBUG"]) == 0
    (config,) = captured
    assert config.port == 4100
    assert config.host == "127.0.0.1"
