# src/hamster_bridge/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from ..core.ports import Editor

EditorCallback = Callable[[Editor | None], Awaitable[bool]]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Command:
    id: str
    name: str
    editor_callback: EditorCallback


class CommandRegistry:
    """Commands contributed by the plugin, addressable by id or short alias."""

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._aliases: dict[str, str] = {}

    def register(self, command: Command, aliases: list[str] | None = None) -> None:
        aliases = aliases or []
        key = command.id.lower()
        self._commands[key] = command
        for alias in aliases:
            self._aliases[alias.lower()] = key

    def unregister(self, command_id: str) -> None:
        key = command_id.lower()
        self._commands.pop(key, None)
        for alias in [a for a, target in self._aliases.items() if target == key]:
            del self._aliases[alias]

    def get(self, name: str) -> Command | None:
        key = name.lower()
        return self._commands.get(self._aliases.get(key, key))

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def __len__(self) -> int:
        return len(self._commands)

    async def execute(self, name: str, editor: Editor | None = None) -> bool:
        """Run a command. Unknown commands raise KeyError."""
        command = self.get(name)
        if command is None:
            raise KeyError(name)
        logger.debug("Executing command %s", command.id)
        return await command.editor_callback(editor)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        aliases_by_id: dict[str, list[str]] = {}
        for alias, target in self._aliases.items():
            aliases_by_id.setdefault(target, []).append(alias)
        for key, command in self._commands.items():
            alias_str = f" (/{', /'.join(aliases_by_id[key])})" if key in aliases_by_id else ""
            lines.append(f"  {command.id}{alias_str} - {command.name}")
        return "\n".join(lines)
