# src/hamster_bridge/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local data directory exists,
- wires the D-Bus connector, notifier and settings store into a HamsterPlugin.
"""

from __future__ import annotations

import functools
import logging

from ..config import get_settings
from ..connectors.hamster_client import HamsterConnection, connect_hamster
from ..connectors.notices import ConsoleNotifier
from ..core.plugin_settings import PluginSettingsStore
from ..core.ports import HamsterConnector, Notifier
from ..plugin import HamsterPlugin

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.settings_path.parent.mkdir(parents=True, exist_ok=True)


def default_connector(settings) -> HamsterConnector:
    return functools.partial(
        connect_hamster,
        bus_name=settings.bus_name,
        object_path=settings.object_path,
        interface=settings.interface,
    )


def create_plugin(
        *,
        settings=None,
        notifier: Notifier | None = None,
        connector: HamsterConnector | None = None,
) -> HamsterPlugin:
    """
    Create an (unloaded) HamsterPlugin from the provided settings.

    Keeping settings and collaborators injectable makes the app easier to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if connector is None:
        connector = default_connector(settings)

    return HamsterPlugin(
        settings=settings,
        settings_store=PluginSettingsStore(settings.settings_path),
        connection=HamsterConnection(connector),
        notifier=notifier or ConsoleNotifier(),
    )
