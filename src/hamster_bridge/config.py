# src/hamster_bridge/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing has to be reachable at import time (no bus connection here).
- Plugin settings edited by the user live in a separate JSON file (see core/plugin_settings.py).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "HAMSTER_BRIDGE"

DEFAULT_BUS_NAME = "org.gnome.Hamster"
DEFAULT_OBJECT_PATH = "/org/gnome/Hamster"
DEFAULT_INTERFACE = "org.gnome.Hamster"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def load_env_file(path: str | Path | None = None) -> bool:
    """
    Load a .env file into os.environ without overriding variables already set.
    Without a path, the nearest .env at or above the working directory is used.
    """
    if path is None:
        return load_dotenv(find_dotenv(usecwd=True), override=False)
    return load_dotenv(dotenv_path=path, override=False)


load_env_file()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths ----
    data_dir: Path
    settings_path: Path

    # ---- Hamster D-Bus endpoint ----
    bus_name: str
    object_path: str
    interface: str

    # Try to reach Hamster while the plugin loads (commands reconnect lazily anyway).
    connect_on_load: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "hamster-bridge").strip() or "hamster-bridge"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/hamster-bridge"))
        settings_path = _env_path(_k("SETTINGS_PATH"), data_dir / "data.json")

        bus_name = _env(_k("BUS_NAME"), DEFAULT_BUS_NAME).strip() or DEFAULT_BUS_NAME
        object_path = _env(_k("OBJECT_PATH"), DEFAULT_OBJECT_PATH).strip() or DEFAULT_OBJECT_PATH
        interface = _env(_k("INTERFACE"), DEFAULT_INTERFACE).strip() or DEFAULT_INTERFACE

        connect_on_load = _env_bool(_k("CONNECT_ON_LOAD"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            settings_path=settings_path,
            bus_name=bus_name,
            object_path=object_path,
            interface=interface,
            connect_on_load=connect_on_load,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
