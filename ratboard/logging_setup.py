# ratboard/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """Keep ratboard logs; let werkzeug's request lines through; others only on ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("ratboard"):
            return True
        if record.name == "werkzeug":
            return record.levelno >= logging.INFO
        return record.levelno >= logging.ERROR


def setup_logging(*, level: str | int = logging.INFO, log_dir: str | Path | None = None) -> None:
    """
    Configure root logging once, before the server starts:
    - console handler on stderr, filtered
    - file handler with everything, only when log_dir is given
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

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

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_dir / "ratboard.log"), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    logging.captureWarnings(True)
