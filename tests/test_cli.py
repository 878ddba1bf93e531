# tests/test_cli.py

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from hamster_bridge.cli import bootstrap, main
from hamster_bridge.config import Settings

from .fakes import FakeConnector, RecordingNotifier


@pytest.fixture()
def cli_env(tmp_path: Path, monkeypatch) -> FakeConnector:
    connector = FakeConnector()
    settings = Settings(
        app_name="hamster-bridge",
        log_level="INFO",
        data_dir=tmp_path / "data",
        settings_path=tmp_path / "data" / "data.json",
        bus_name="org.gnome.Hamster",
        object_path="/org/gnome/Hamster",
        interface="org.gnome.Hamster",
        connect_on_load=True,
    )

    def _create_plugin(*, settings):
        return bootstrap.create_plugin(settings=settings, notifier=RecordingNotifier(), connector=connector)

    monkeypatch.setattr(main, "get_settings", lambda: settings)
    monkeypatch.setattr(main, "setup_logging", lambda **kwargs: None)
    monkeypatch.setattr(main, "create_plugin", _create_plugin)
    return connector


def test_cli_start_sends_fact(cli_env, note_path) -> None:
    result = CliRunner().invoke(main.cli, ["start", str(note_path), "--line", "9"])

    assert result.exit_code == 0, result.output
    assert cli_env.client.calls == [("AddFact", ("Write report@Acme,, #writing, #q3,", 0, 0, False))]


def test_cli_start_on_non_task_fails(cli_env, note_path) -> None:
    result = CliRunner().invoke(main.cli, ["start", str(note_path), "--line", "10"])

    assert result.exit_code == 1
    assert cli_env.client.calls == []


def test_cli_stop(cli_env) -> None:
    result = CliRunner().invoke(main.cli, ["stop"])
    assert result.exit_code == 0
    assert cli_env.client.calls == [("StopTracking", (0,))]


def test_cli_stop_when_unreachable(cli_env) -> None:
    cli_env.unavailable = True
    result = CliRunner().invoke(main.cli, ["stop"])
    assert result.exit_code == 1


def test_cli_compose_does_not_connect(cli_env, note_path) -> None:
    result = CliRunner().invoke(main.cli, ["compose", str(note_path), "-l", "12"])

    assert result.exit_code == 0
    assert result.output.strip() == "Call @Bob,, #writing, #q3,"
    assert cli_env.attempts == 0


def test_cli_compose_non_task_is_an_error(cli_env, note_path) -> None:
    result = CliRunner().invoke(main.cli, ["compose", str(note_path), "-l", "1"])
    assert result.exit_code == 1
    assert "Current line is not a task" in result.output


def test_cli_setting_saves(cli_env, tmp_path: Path) -> None:
    runner = CliRunner()
    assert runner.invoke(main.cli, ["setting"]).output.strip() == "mySetting = default"

    result = runner.invoke(main.cli, ["setting", "mine"])

    assert result.output.strip() == "mySetting = mine"
    stored = json.loads((tmp_path / "data" / "data.json").read_text("utf-8"))
    assert stored == {"mySetting": "mine"}
