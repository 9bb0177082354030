"""Persisted dashboard preferences (map mode, theme, compact layout)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic import ValidationError

from synthcity.dashboard.mapview import MapMode
from synthcity.models._base import SynthBaseModel

_logger = logging.getLogger(__name__)


class Preferences(SynthBaseModel):
    map_mode: MapMode = MapMode.POINTS
    theme: Literal["light", "dark"] = "light"
    compact: bool = False

    @classmethod
    def load(cls, path: Path) -> Preferences:
        """Read *path*; a missing, unreadable or corrupt file yields defaults."""
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return cls()
        except OSError:
            _logger.warning("Could not read preferences from %s", path, exc_info=True)
            return cls()
        try:
            return cls.model_validate_json(raw)
        except ValidationError:
            _logger.warning("Ignoring corrupt preferences file %s", path)
            return cls()

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(by_alias=True, indent=2), encoding="utf-8")

    def with_changes(self, **changes: object) -> Preferences:
        return self.model_copy(update=changes)
