# src/hamster_bridge/errors.py

"""
Error taxonomy.

Every failure is terminal for the current command. The string form of each error
is the notice shown to the user.
"""

from __future__ import annotations

HAMSTER_UNREACHABLE = "Hamster is not running or not reachable"
NOT_A_TASK = "Current line is not a task"


class HamsterBridgeError(Exception):
    """Base class for errors surfaced as user notices."""


class HamsterUnavailable(HamsterBridgeError):
    """The session bus or the Hamster service cannot be reached."""

    def __init__(self, message: str = HAMSTER_UNREACHABLE) -> None:
        super().__init__(message)


class NotActionable(HamsterBridgeError):
    """The current line is not an unchecked task line."""

    def __init__(self, message: str = NOT_A_TASK) -> None:
        super().__init__(message)


class FrontmatterError(HamsterBridgeError):
    """The front-matter block is not valid YAML or not a mapping."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Could not read front-matter: {detail}")
        self.detail = detail
