# src/tasklist/config.py

"""Application settings.

Only ambient concerns (logging, window geometry) are configurable; task data
always comes from the fixture set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ENV_PREFIX = "TASKLIST"


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True)
class Settings:
    app_name: str = "Task Manager"
    log_level: str = "INFO"
    log_dir: Optional[Path] = None
    window_width: int = 900
    window_height: int = 760

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            log_level=_env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO",
            log_dir=_env_path(_k("LOG_DIR")),
        )
