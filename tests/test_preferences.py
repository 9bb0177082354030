from __future__ import annotations

import json
from pathlib import Path

from synthcity.dashboard.mapview import MapMode
from synthcity.dashboard.preferences import Preferences


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    prefs = Preferences.load(tmp_path / "absent.json")
    assert prefs.map_mode == MapMode.POINTS
    assert prefs.theme == "light"
    assert prefs.compact is False


def test_save_and_restore(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "preferences.json"
    Preferences(map_mode=MapMode.HEATMAP, theme="dark", compact=True).save(path)

    assert json.loads(path.read_text())["mapMode"] == "heatmap"
    restored = Preferences.load(path)
    assert restored.map_mode == MapMode.HEATMAP
    assert restored.theme == "dark"
    assert restored.compact is True


def test_corrupt_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "preferences.json"
    path.write_text("{not json")
    assert Preferences.load(path) == Preferences()

    path.write_text(json.dumps({"mapMode": "satellite"}))
    assert Preferences.load(path) == Preferences()


def test_with_changes_keeps_other_fields() -> None:
    prefs = Preferences(theme="dark").with_changes(map_mode=MapMode.HEATMAP)
    assert prefs.theme == "dark"
    assert prefs.map_mode == MapMode.HEATMAP
