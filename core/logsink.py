"""Append-only event log.

The sink mirrors the ``server.log`` file kept next to the server: one
timestamped, human-readable line per event.  Writing is best effort; a
failed write is counted and reported to the module logger, never raised.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)


class LogSink:
    """Never-raising line logger backed by a file."""

    def __init__(self, path: Optional[Path]) -> None:
        self.path = Path(path) if path is not None else None
        self.failures = 0
        self._lock = threading.Lock()

    @staticmethod
    def format_line(message: str, when: Optional[datetime] = None) -> str:
        stamp = (when or datetime.now(timezone.utc)).isoformat(timespec="milliseconds")
        return f"[{stamp}] {message}\n"

    def write(self, message: str) -> bool:
        """Append ``message``; return ``False`` if the line was lost."""

        try:
            line = self.format_line(message)
            logger.info(message)
            if self.path is None:
                return True
            with self._lock:
                with self.path.open("a", encoding="utf-8") as handle:
                    handle.write(line)
            return True
        except Exception as exc:  # noqa: BLE001 - the sink must never raise
            with self._lock:
                self.failures += 1
            logger.warning("Failed to write %s: %s", self.path, exc)
            return False


class MemorySink(LogSink):
    """Sink that keeps lines in memory, handy for tests and dry runs."""

    def __init__(self) -> None:
        super().__init__(None)
        self.lines: List[str] = []

    def write(self, message: str) -> bool:
        self.lines.append(message)
        return super().write(message)
