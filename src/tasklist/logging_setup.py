# src/tasklist/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Union


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - tasklist logs pass through
    - third-party loggers (Qt bindings, pandas, openpyxl) only at WARNING+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "tasklist" or record.name.startswith("tasklist."):
            return True
        return record.levelno >= logging.WARNING


def setup_logging(
    level: Union[int, str] = logging.INFO,
    log_dir: Optional[Union[str, Path]] = None,
) -> None:
    """
    Configure root logging with a stderr handler and, when log_dir is given,
    a DEBUG file handler writing to log_dir/tasklist.log.

    Call once, before the first window is created.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_dir / "tasklist.log"), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
