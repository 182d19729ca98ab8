"""Logging configuration.

The UI owns the terminal, so records go to a file only. Stdlib loggers are
rendered through a structlog formatter.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import structlog
from platformdirs import user_log_dir

from .settings import APP_NAME

LOG_LEVEL_ENV_VAR = "SIMON_LOG_LEVEL"
LOG_FILE_ENV_VAR = "SIMON_LOG_FILE"
LOG_FILENAME = "simon.log"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def _resolve_level(value: str | int | None) -> int:
    if value is None:
        return logging.WARNING
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        pass
    return logging.getLevelNamesMapping().get(value.upper(), logging.WARNING)


def configure_logging(
    *,
    level: str | int | None = None,
    log_file: str | Path | None = None,
) -> Path:
    """Attach one file handler to the ``simon`` logger and return its path."""
    resolved_level = _resolve_level(level if level is not None else os.environ.get(LOG_LEVEL_ENV_VAR))
    env_file = os.environ.get(LOG_FILE_ENV_VAR)
    if log_file is not None:
        path = Path(log_file)
    elif env_file:
        path = Path(env_file)
    else:
        path = default_log_path()
    path = path.expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=False),
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
        ],
    )
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(formatter)

    package_logger = logging.getLogger(APP_NAME)
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
        existing.close()
    package_logger.addHandler(handler)
    package_logger.setLevel(resolved_level)
    package_logger.propagate = False
    return path


__all__ = ["configure_logging", "default_log_path"]
