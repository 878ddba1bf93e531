# src/hamster_bridge/connectors/notices.py

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import TextIO

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class ConsoleNotifier:
    """Prints notices as timestamped terminal lines."""

    def __init__(self, stream: TextIO | None = None, prefix: str = "[Hamster]") -> None:
        self._stream = stream
        self._prefix = prefix

    def notice(self, text: str) -> None:
        logger.info("Notice: %s", text)
        stream = self._stream or sys.stdout
        print(f"[{_ts_local()}] {self._prefix} {text}", file=stream, flush=True)
