"""Logging setup.

The terminal is in raw mode while the editor runs, so log records go to a
file under the platform log directory and never to stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = "httpedit.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DEFAULT_LEVEL = "WARNING"


def log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def configure_logging(level: str = DEFAULT_LEVEL, path: Path | None = None) -> Path:
    """Attach a file handler to the ``httpedit`` logger and return the log path."""
    target = path if path is not None else log_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(target, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("httpedit")
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()
    root.addHandler(handler)
    root.setLevel(level.upper())
    root.propagate = False
    return target
