# src/hamster_bridge/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The plugin depends on Protocols instead of concrete implementations.
This keeps the D-Bus transport and the user-facing surface swappable and makes testing easier.
"""

from typing import Awaitable, Callable, Protocol

from .document import Document


class HamsterClient(Protocol):
    """The two Hamster calls the plugin needs. Failures raise HamsterUnavailable."""

    async def add_fact(
            self,
            description: str,
            start_time: int = 0,
            end_time: int = 0,
            temporary: bool = False,
    ) -> None: ...

    async def stop_tracking(self, end_time: int = 0) -> None: ...

    def disconnect(self) -> None: ...


# Opens a new client or raises HamsterUnavailable.
HamsterConnector = Callable[[], Awaitable[HamsterClient]]


class Notifier(Protocol):
    """Transient user-facing messages."""
    def notice(self, text: str) -> None: ...


class Editor(Protocol):
    document: Document

    def get_cursor_line(self) -> int: ...
    def get_line(self, line: int) -> str: ...
