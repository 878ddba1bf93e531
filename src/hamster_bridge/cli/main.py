# src/hamster_bridge/cli/main.py

"""
CLI entrypoint.

Each subcommand initializes logging, builds and loads the plugin, runs one command
(or the interactive console) and unloads the plugin again.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TypeVar

import click

from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.document import FileEditor
from ..errors import HamsterBridgeError
from ..logging_setup import setup_logging
from ..plugin import START_TIMER, STOP_TIMER, HamsterPlugin
from .bootstrap import create_plugin

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _init_logging(settings) -> None:
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, file_level=file_level)


async def _with_plugin(
        plugin: HamsterPlugin,
        action: Callable[[HamsterPlugin], Awaitable[T]],
) -> T:
    await plugin.load()
    try:
        return await action(plugin)
    finally:
        await plugin.unload()


def _run(action: Callable[[HamsterPlugin], Awaitable[T]], *, connect_on_load: bool = True) -> T:
    settings = get_settings()
    _init_logging(settings)
    if not connect_on_load:
        settings = dataclasses.replace(settings, connect_on_load=False)
    plugin = create_plugin(settings=settings)
    return asyncio.run(_with_plugin(plugin, action))


def _editor(file: Path, line: int) -> FileEditor:
    try:
        return FileEditor.open(file, line - 1)
    except OSError as e:
        raise click.ClickException(f"Could not open note: {e}") from e


@click.group()
@click.version_option(package_name="hamster-bridge")
def cli() -> None:
    """Start and stop Hamster timers from task lines in Markdown notes."""


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--line", "-l", type=click.IntRange(min=1), required=True, help="Line number of the task (1-based).")
@click.pass_context
def start(ctx: click.Context, file: Path, line: int) -> None:
    """Start a Hamster timer for the task on LINE of FILE."""
    editor = _editor(file, line)
    ok = _run(lambda plugin: plugin.registry.execute(START_TIMER, editor))
    if not ok:
        ctx.exit(1)


@cli.command()
@click.pass_context
def stop(ctx: click.Context) -> None:
    """Stop the running Hamster timer."""
    ok = _run(lambda plugin: plugin.registry.execute(STOP_TIMER))
    if not ok:
        ctx.exit(1)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--line", "-l", type=click.IntRange(min=1), required=True, help="Line number of the task (1-based).")
def compose(file: Path, line: int) -> None:
    """Print the fact description for LINE of FILE without contacting Hamster."""
    editor = _editor(file, line)

    async def _compose(plugin: HamsterPlugin) -> str:
        return plugin.compose_current_line(editor)

    try:
        description = _run(_compose, connect_on_load=False)
    except HamsterBridgeError as e:
        raise click.ClickException(str(e)) from e
    click.echo(description)


@cli.command()
@click.argument("value", required=False)
def setting(value: str | None) -> None:
    """Show the plugin setting, or save VALUE as the new one."""

    async def _setting(plugin: HamsterPlugin) -> str:
        if value is not None:
            plugin.update_setting(value)
        return plugin.plugin_settings.my_setting

    click.echo(f"mySetting = {_run(_setting, connect_on_load=False)}")


@cli.command()
def shell() -> None:
    """Interactive console with slash commands (/start, /stop, /compose, ...)."""
    try:
        _run(run_console_loop)
    except KeyboardInterrupt:
        # asyncio.run re-raises Ctrl+C after the console loop has exited and the plugin unloaded.
        logger.info("Shell interrupted.")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
