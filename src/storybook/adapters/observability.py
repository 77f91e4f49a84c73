"""Runtime logging configuration with bounded retention."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

_CONFIGURED = False

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


@dataclass(frozen=True)
class LoggingSettings:
    """Logging options read from `STORYBOOK_LOG_*` environment variables."""

    level: int = logging.INFO
    path: Path = Path("work/logs/storybook.log")
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 10


def _int_env(name: str, default: int, *, minimum: int, maximum: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return max(minimum, min(maximum, value))


def load_logging_settings() -> LoggingSettings:
    defaults = LoggingSettings()
    level_name = os.environ.get("STORYBOOK_LOG_LEVEL", "").strip().upper()
    level = getattr(logging, level_name, defaults.level) if level_name else defaults.level
    if not isinstance(level, int):
        level = defaults.level
    raw_path = os.environ.get("STORYBOOK_LOG_PATH", "").strip()
    return LoggingSettings(
        level=level,
        path=Path(raw_path) if raw_path else defaults.path,
        max_bytes=_int_env(
            "STORYBOOK_LOG_MAX_BYTES",
            defaults.max_bytes,
            minimum=64 * 1024,
            maximum=100 * 1024 * 1024,
        ),
        backup_count=_int_env(
            "STORYBOOK_LOG_BACKUP_COUNT", defaults.backup_count, minimum=1, maximum=120
        ),
    )


def configure_runtime_logging(settings: LoggingSettings | None = None) -> None:
    """Attach console and rotating-file handlers to the root logger, once per process."""
    global _CONFIGURED
    if _CONFIGURED:
        return

    resolved = settings or load_logging_settings()
    resolved.path.parent.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers: list[logging.Handler] = [
        logging.StreamHandler(),
        RotatingFileHandler(
            filename=resolved.path,
            maxBytes=resolved.max_bytes,
            backupCount=resolved.backup_count,
            encoding="utf-8",
        ),
    ]
    root = logging.getLogger()
    root.setLevel(resolved.level)
    root.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    _CONFIGURED = True
