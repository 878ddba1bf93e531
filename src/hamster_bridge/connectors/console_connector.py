# src/hamster_bridge/connectors/console_connector.py

from __future__ import annotations

import asyncio
import contextlib
import logging
import shlex
import threading
from collections.abc import Awaitable, Callable
from datetime import datetime

from ..core.document import FileEditor
from ..errors import HamsterBridgeError
from ..plugin import START_TIMER, STOP_TIMER, HamsterPlugin

logger = logging.getLogger(__name__)

LineReader = Callable[[str], Awaitable[str]]

USAGE = (
    "Console commands:\n"
    "  /start FILE LINE    - start a timer for the task on LINE (1-based) of FILE\n"
    "  /stop               - stop the running timer\n"
    "  /compose FILE LINE  - show the fact description without contacting Hamster\n"
    "  /setting [VALUE]    - show or change the plugin setting\n"
    "  /status             - show connection and settings\n"
    "  /help               - this help\n"
    "  /exit               - quit"
)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _open_editor(args: list[str]) -> FileEditor:
    """FILE LINE -> editor with the cursor on LINE (1-based on the console)."""
    if len(args) != 2:
        raise ValueError("expected FILE LINE")
    path, raw_line = args
    try:
        line_no = int(raw_line)
    except ValueError:
        raise ValueError(f"LINE must be a number, got {raw_line!r}") from None
    if line_no < 1:
        raise ValueError("LINE starts at 1")
    return FileEditor.open(path, line_no - 1)


async def handle_line(plugin: HamsterPlugin, line: str) -> str | None:
    """
    Handle a string like "/command args".
    Returns a reply string, or None if the input is not a command.
    """
    if not line.startswith("/"):
        return None

    # /setting keeps its value verbatim, so it is handled before shlex.
    head, *rest = line[1:].split(None, 1) or [""]
    if head.lower() == "setting":
        value = rest[0] if rest else ""
        if not value:
            return f"mySetting = {plugin.plugin_settings.my_setting}"
        plugin.update_setting(value)
        return f"mySetting saved: {plugin.plugin_settings.my_setting}"

    try:
        parts = shlex.split(line[1:])
    except ValueError as e:
        return f"Could not parse command: {e}"
    if not parts:
        return "Empty command. Use /help to list available commands."

    name, args = parts[0].lower(), parts[1:]

    if name in ("help", "h", "?"):
        return f"{USAGE}\n\n{plugin.registry.build_help()}"

    if name == "status":
        hamster = "connected" if plugin.connection.connected else "not connected"
        return (
            "Status:\n"
            f"  Hamster: {hamster}\n"
            f"  Commands: {len(plugin.registry)}\n"
            f"  mySetting: {plugin.plugin_settings.my_setting}"
        )

    if name in ("start", "compose"):
        try:
            editor = _open_editor(args)
        except OSError as e:
            return f"Could not open note: {e}"
        except ValueError as e:
            return f"Usage: /{name} FILE LINE ({e})"

        if name == "compose":
            try:
                return plugin.compose_current_line(editor)
            except HamsterBridgeError as e:
                return str(e)

        ok = await plugin.registry.execute(START_TIMER, editor)
        return "Timer started." if ok else None

    if name == "stop":
        ok = await plugin.registry.execute(STOP_TIMER)
        return "Timer stopped." if ok else None

    return f"Unknown command: /{name}. Use /help to list available commands."


async def _read_stdin(prompt: str) -> str:
    """
    Read one line on a daemon thread.

    A pending input() must not keep the process alive once the loop is cancelled (Ctrl+C).
    """
    loop = asyncio.get_running_loop()
    fut: asyncio.Future[str] = loop.create_future()

    def _resolve(line: str | None, error: Exception | None) -> None:
        if fut.done():
            return
        if error is not None:
            fut.set_exception(error)
        else:
            fut.set_result(line or "")

    def _worker() -> None:
        try:
            line, error = input(prompt), None
        except Exception as e:
            line, error = None, e
        with contextlib.suppress(RuntimeError):
            # The loop may already be closed after a cancellation.
            loop.call_soon_threadsafe(_resolve, line, error)

    threading.Thread(target=_worker, name="console-input", daemon=True).start()
    return await fut


async def run_console_loop(plugin: HamsterPlugin, read_line: LineReader | None = None) -> None:
    read_line = read_line or _read_stdin
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.")

    while True:
        try:
            user_input = (await read_line(">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except (KeyboardInterrupt, asyncio.CancelledError):
            logger.info("Console interrupted, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = await handle_line(plugin, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            if not user_input.startswith("/"):
                _print_ts("Commands start with '/'. Use /help.")
            continue

        _print_ts(reply)

    logger.info("Console connector finished.")
