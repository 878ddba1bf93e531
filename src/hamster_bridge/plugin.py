# src/hamster_bridge/plugin.py

"""
The Hamster plugin: lifecycle plus the two timer commands.

load() reads the plugin settings, tries to reach Hamster once and registers the
commands; unload() unregisters them and runs every registered cleanup, so nothing
the plugin attached survives deactivation.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .cli.commands import Command, CommandRegistry
from .connectors.hamster_client import HamsterConnection
from .core.frontmatter import extract_frontmatter
from .core.plugin_settings import PluginSettings, PluginSettingsStore
from .core.ports import Editor, Notifier
from .core.task_line import compose, is_task
from .errors import HamsterBridgeError, HamsterUnavailable, NotActionable

logger = logging.getLogger(__name__)

START_TIMER = "start-hamster-timer"
STOP_TIMER = "stop-hamster-timer"

NO_ACTIVE_NOTE = "Open a note first"


class HamsterPlugin:
    def __init__(
            self,
            *,
            settings: object,
            settings_store: PluginSettingsStore,
            connection: HamsterConnection,
            notifier: Notifier,
            registry: CommandRegistry | None = None,
    ) -> None:
        self.settings = settings
        self.settings_store = settings_store
        self.connection = connection
        self.notifier = notifier
        self.registry = registry if registry is not None else CommandRegistry()

        self.plugin_settings = PluginSettings()
        self.loaded = False

        self._command_ids: list[str] = []
        self._cleanups: list[Callable[[], None]] = []

    # ---- lifecycle ----

    async def load(self) -> None:
        if self.loaded:
            return
        self.plugin_settings = self.settings_store.load()

        if getattr(self.settings, "connect_on_load", True):
            try:
                await self.connection.acquire()
            except HamsterUnavailable:
                logger.info("Hamster is not reachable yet; commands will retry.")

        self.add_command(Command(START_TIMER, "Start Hamster timer", self.start_timer), aliases=["start"])
        self.add_command(Command(STOP_TIMER, "Stop Hamster timer", self.stop_timer), aliases=["stop"])
        self.register_cleanup(self.connection.invalidate)

        self.loaded = True
        logger.info("Plugin loaded (commands=%d).", len(self._command_ids))

    async def unload(self) -> None:
        for command_id in reversed(self._command_ids):
            self.registry.unregister(command_id)
        self._command_ids.clear()

        while self._cleanups:
            cleanup = self._cleanups.pop()
            try:
                cleanup()
            except Exception:
                logger.exception("Plugin cleanup failed.")

        self.loaded = False
        logger.info("Plugin unloaded.")

    def add_command(self, command: Command, aliases: list[str] | None = None) -> None:
        self.registry.register(command, aliases)
        self._command_ids.append(command.id)

    def register_cleanup(self, cleanup: Callable[[], None]) -> None:
        """Run `cleanup` on unload (last registered runs first)."""
        self._cleanups.append(cleanup)

    # ---- settings ----

    def update_setting(self, value: str) -> None:
        self.plugin_settings.my_setting = value
        self.settings_store.save(self.plugin_settings)

    # ---- commands ----

    def compose_current_line(self, editor: Editor) -> str:
        """
        Build the fact description for the line under the cursor.

        Raises NotActionable for non-task lines and FrontmatterError for broken front-matter.
        """
        line = editor.get_line(editor.get_cursor_line())
        if not is_task(line):
            raise NotActionable()
        task = compose(line, extract_frontmatter(editor.document))
        if task is None:
            raise NotActionable()
        return task

    async def start_timer(self, editor: Editor | None) -> bool:
        if editor is None:
            self.notifier.notice(NO_ACTIVE_NOTE)
            return False
        try:
            client = await self.connection.acquire()
            task = self.compose_current_line(editor)
            await client.add_fact(task, 0, 0, False)
        except HamsterBridgeError as e:
            self._abort("start", e)
            return False
        logger.info("Started timer for %r", task)
        return True

    async def stop_timer(self, editor: Editor | None = None) -> bool:
        try:
            client = await self.connection.acquire()
            await client.stop_tracking(0)
        except HamsterBridgeError as e:
            self._abort("stop", e)
            return False
        return True

    def _abort(self, action: str, error: HamsterBridgeError) -> None:
        if isinstance(error, HamsterUnavailable):
            self.connection.invalidate()
        logger.info("%s timer aborted: %s", action.capitalize(), error)
        self.notifier.notice(str(error))
