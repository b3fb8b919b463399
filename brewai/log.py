"""Logging setup shared by every brewai module (stdlib only).

Env knobs (read once, on the first get_logger call):
  LOG_LEVEL          console level, default INFO
  LOG_DIR            where daily brewai_YYYY-MM-DD.log files go, default ./logs
  BREWAI_NO_LOG_FILE any non-empty value disables the file handler
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import date
from pathlib import Path

DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"
_configured = False


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; configures root handlers on first call."""
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return logging.getLogger(name)


def resolve_log_dir() -> Path | None:
    """Directory for the run log, or None when file logging is switched off."""
    if os.environ.get("BREWAI_NO_LOG_FILE"):
        return None
    custom = os.environ.get("LOG_DIR", "").strip()
    return Path(custom).expanduser() if custom else DEFAULT_LOG_DIR


def log_file_path(log_dir: Path, day: date | None = None) -> Path:
    day = day or date.today()
    return log_dir / f"brewai_{day.isoformat()}.log"


def _configure() -> None:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FMT)

    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        return

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    log_dir = resolve_log_dir()
    if log_dir is None:
        return
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file_path(log_dir), encoding="utf-8")
    except OSError as exc:
        root.warning("File logging disabled, cannot write to %s: %s", log_dir, exc)
        return
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(formatter)
    root.addHandler(fh)
    # console keeps its own level; the file gets DEBUG
    root.setLevel(logging.DEBUG)
