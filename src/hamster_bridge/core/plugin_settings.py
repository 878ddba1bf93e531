# src/hamster_bridge/core/plugin_settings.py

"""
User-editable plugin settings, stored as a small JSON object.

Loading merges the stored object over the defaults; saving writes it back verbatim
(keys this version does not know about are kept).
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_DATA: dict[str, Any] = {
    "mySetting": "default",
}


@dataclass(slots=True)
class PluginSettings:
    my_setting: str = DEFAULT_DATA["mySetting"]
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_data(cls, data: dict[str, Any]) -> "PluginSettings":
        merged = {**DEFAULT_DATA, **data}
        value = merged.pop("mySetting")
        return cls(my_setting=str(value) if value is not None else DEFAULT_DATA["mySetting"], extra=merged)

    def to_data(self) -> dict[str, Any]:
        return {**self.extra, "mySetting": self.my_setting}


class PluginSettingsStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> PluginSettings:
        if not self.path.exists():
            return PluginSettings()
        try:
            data = json.loads(self.path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.exception("Failed to read plugin settings from %s; using defaults.", self.path)
            return PluginSettings()
        if not isinstance(data, dict):
            logger.warning("Plugin settings in %s are not a JSON object; using defaults.", self.path)
            return PluginSettings()
        return PluginSettings.from_data(data)

    def save(self, settings: PluginSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".tmp")
        tmp.write_text(json.dumps(settings.to_data(), ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self.path)
        with contextlib.suppress(OSError):
            os.chmod(self.path, 0o600)
        logger.debug("Saved plugin settings to %s", self.path)
