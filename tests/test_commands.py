# tests/test_commands.py

from __future__ import annotations

import asyncio
import builtins
import io
import json
import threading

import pytest

from hamster_bridge.cli.commands import Command, CommandRegistry
from hamster_bridge.connectors.console_connector import handle_line, run_console_loop
from hamster_bridge.connectors.notices import ConsoleNotifier
from hamster_bridge.errors import HAMSTER_UNREACHABLE


@pytest.mark.asyncio
async def test_command_registry_routes_ids_and_aliases() -> None:
    reg = CommandRegistry()
    seen: list[object] = []

    async def cb(editor) -> bool:
        seen.append(editor)
        return True

    reg.register(Command("do-thing", "Do thing", cb), aliases=["do"])

    assert await reg.execute("do-thing", "ed1") is True
    assert await reg.execute("DO") is True
    assert seen == ["ed1", None]
    assert "do-thing (/do) - Do thing" in reg.build_help()

    reg.unregister("do-thing")
    assert "do" not in reg
    assert len(reg) == 0
    with pytest.raises(KeyError):
        await reg.execute("do")


@pytest.mark.asyncio
async def test_console_non_command_and_unknown(plugin) -> None:
    await plugin.load()
    assert await handle_line(plugin, "hello") is None
    assert "Unknown command" in (await handle_line(plugin, "/nope") or "")


@pytest.mark.asyncio
async def test_console_start_uses_one_based_lines(plugin, connector, note_path) -> None:
    await plugin.load()

    reply = await handle_line(plugin, f"/start '{note_path}' 9")

    assert reply == "Timer started."
    assert connector.client.calls[0][1][0] == "Write report@Acme,, #writing, #q3,"


@pytest.mark.asyncio
async def test_console_compose_is_a_dry_run(plugin, connector, note_path) -> None:
    await plugin.load()

    assert await handle_line(plugin, f"/compose {note_path} 12") == "Call @Bob,, #writing, #q3,"
    assert await handle_line(plugin, f"/compose {note_path} 10") == "Current line is not a task"
    assert connector.client.calls == []


@pytest.mark.asyncio
async def test_console_start_usage_errors(plugin, tmp_path) -> None:
    await plugin.load()
    assert (await handle_line(plugin, "/start")).startswith("Usage: /start FILE LINE")
    assert "LINE starts at 1" in await handle_line(plugin, "/start x.md 0")
    assert "must be a number" in await handle_line(plugin, "/start x.md two")
    assert (await handle_line(plugin, f"/start {tmp_path / 'missing.md'} 1")).startswith("Could not open note")


@pytest.mark.asyncio
async def test_console_stop_reports_unreachable_via_notice(plugin, connector, notifier) -> None:
    connector.unavailable = True
    await plugin.load()

    assert await handle_line(plugin, "/stop") is None
    assert notifier.notices == [HAMSTER_UNREACHABLE]


@pytest.mark.asyncio
async def test_console_setting_and_status(plugin) -> None:
    await plugin.load()

    assert await handle_line(plugin, "/setting") == "mySetting = default"
    assert await handle_line(plugin, "/setting new value") == "mySetting saved: new value"
    status = await handle_line(plugin, "/status")
    assert "Hamster: connected" in status
    assert "mySetting: new value" in status


@pytest.mark.asyncio
async def test_console_setting_keeps_value_verbatim(plugin, settings) -> None:
    await plugin.load()

    reply = await handle_line(plugin, "/setting  don't   panic")

    assert reply == "mySetting saved: don't   panic"
    assert plugin.plugin_settings.my_setting == "don't   panic"
    assert json.loads(settings.settings_path.read_text("utf-8"))["mySetting"] == "don't   panic"


@pytest.mark.asyncio
async def test_console_loop_runs_until_exit(plugin, connector, capsys) -> None:
    await plugin.load()
    inputs = iter(["", "/stop", "/exit", "/stop"])

    async def read_line(prompt: str) -> str:
        return next(inputs)

    await run_console_loop(plugin, read_line=read_line)

    assert connector.client.calls == [("StopTracking", (0,))]
    assert "Timer stopped." in capsys.readouterr().out


@pytest.mark.asyncio
async def test_console_loop_stops_on_eof(plugin) -> None:
    await plugin.load()

    async def read_line(prompt: str) -> str:
        raise EOFError

    await run_console_loop(plugin, read_line=read_line)


def test_console_notifier_prints_timestamped_notice() -> None:
    stream = io.StringIO()
    ConsoleNotifier(stream=stream).notice("Current line is not a task")
    out = stream.getvalue()
    assert out.startswith("[")
    assert out.rstrip().endswith("[Hamster] Current line is not a task")


@pytest.mark.asyncio
async def test_console_loop_exits_when_cancelled_while_waiting(plugin) -> None:
    await plugin.load()
    never = asyncio.Event()

    async def read_line(prompt: str) -> str:
        await never.wait()
        return ""

    task = asyncio.create_task(run_console_loop(plugin, read_line=read_line))
    await asyncio.sleep(0.01)
    task.cancel()

    await asyncio.wait_for(task, timeout=1)


@pytest.mark.asyncio
async def test_stdin_reader_does_not_block_cancellation(plugin, monkeypatch) -> None:
    await plugin.load()
    release = threading.Event()

    def blocking_input(prompt: str = "") -> str:
        release.wait(timeout=5)
        return "/exit"

    monkeypatch.setattr(builtins, "input", blocking_input)

    task = asyncio.create_task(run_console_loop(plugin))
    await asyncio.sleep(0.05)
    readers = [t for t in threading.enumerate() if t.name == "console-input"]
    task.cancel()

    await asyncio.wait_for(task, timeout=1)
    assert readers and all(t.daemon for t in readers)
    release.set()
