from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 10


def _level_of(level: Union[str, int]) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logging(level: Union[str, int] = "INFO", log_file: Optional[Path] = None) -> None:
    """
    Route every ``satrace.*`` logger through the root logger.

    Diagnostics go to stderr so stdout only ever carries header and data rows.
    With ``log_file`` the same records are also appended to a size-rotated file.
    Calling it again replaces the handlers installed by the previous call.
    Unknown level names fall back to INFO.
    """
    lvl = _level_of(level)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(path, maxBytes=LOG_FILE_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8")
        )

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    root.setLevel(lvl)
    for h in handlers:
        h.setFormatter(formatter)
        h.setLevel(lvl)
        root.addHandler(h)
