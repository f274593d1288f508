"""Runtime settings for the contact backend.

Values come from the process environment (optionally populated from a
``.env`` file by the CLI).  Missing ``ADMIN_KEY`` leaves the admin view
permanently closed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional


DEFAULT_PORT = 3001
DEFAULT_HOST = "0.0.0.0"
DEFAULT_SUBMISSIONS_FILE = "submissions.json"
DEFAULT_LOG_FILE = "server.log"


@dataclass(frozen=True)
class Settings:
    """Immutable server configuration."""

    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    admin_key: Optional[str] = None
    submissions_file: Path = Path(DEFAULT_SUBMISSIONS_FILE)
    log_file: Path = Path(DEFAULT_LOG_FILE)
    static_dir: Optional[Path] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        raw_port = (env.get("PORT") or "").strip()
        if raw_port:
            try:
                port = int(raw_port)
            except ValueError:
                raise ValueError(f"PORT must be an integer, got {raw_port!r}") from None
        else:
            port = DEFAULT_PORT

        static_dir = (env.get("STATIC_DIR") or "").strip()
        return cls(
            port=port,
            host=(env.get("HOST") or "").strip() or DEFAULT_HOST,
            admin_key=env.get("ADMIN_KEY") or None,
            submissions_file=Path(env.get("SUBMISSIONS_FILE") or DEFAULT_SUBMISSIONS_FILE),
            log_file=Path(env.get("SERVER_LOG") or DEFAULT_LOG_FILE),
            static_dir=Path(static_dir) if static_dir else None,
        )

    def with_overrides(self, **values: Any) -> "Settings":
        """Return a copy with every non-``None`` value in ``values`` applied."""

        changes = {key: value for key, value in values.items() if value is not None}
        return replace(self, **changes)
