# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from hamster_bridge.connectors.hamster_client import HamsterConnection
from hamster_bridge.core.document import FileEditor
from hamster_bridge.core.plugin_settings import PluginSettingsStore
from hamster_bridge.plugin import HamsterPlugin

from .fakes import FakeConnector, RecordingNotifier

NOTE = """---
project: Acme
tags:
  - writing
  - q3
---
# Notes

- [ ] Write report
- [x] Done already
Plain text line
- [ ] Call @Bob
"""


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with HamsterPlugin.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        data_dir=tmp_path,
        settings_path=tmp_path / "data.json",
        connect_on_load=True,
    )


@pytest.fixture()
def connector() -> FakeConnector:
    return FakeConnector()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def plugin(settings: SimpleNamespace, connector: FakeConnector, notifier: RecordingNotifier) -> HamsterPlugin:
    return HamsterPlugin(
        settings=settings,
        settings_store=PluginSettingsStore(settings.settings_path),
        connection=HamsterConnection(connector),
        notifier=notifier,
    )


@pytest.fixture()
def note_path(tmp_path: Path) -> Path:
    path = tmp_path / "note.md"
    path.write_text(NOTE, "utf-8")
    return path


@pytest.fixture()
def editor_at(note_path: Path):
    """Open the sample note with the cursor on a 0-based line."""

    def _open(line: int) -> FileEditor:
        return FileEditor.open(note_path, line)

    return _open
