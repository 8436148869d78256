"""
Settings and logging setup.

Everything is read from environment variables with sensible defaults; the
CLI can override single values with command-line options.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, replace
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Mapping, Optional

from habit_tracker.models import DEFAULT_PROFILE_NAME
from habit_tracker.storage import DATA_PATH_DEFAULT

LOG_FILE_DEFAULT = os.path.join("data", "habit-tracker.log")
REMINDER_SECONDS_DEFAULT = 10.0
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised for settings that cannot be used."""


@dataclass(frozen=True)
class Settings:
    data_file: str = DATA_PATH_DEFAULT
    reminder_interval: float = REMINDER_SECONDS_DEFAULT
    reminder_enabled: bool = True
    log_file: str = LOG_FILE_DEFAULT
    log_level: str = "INFO"
    user_name: str = DEFAULT_PROFILE_NAME

    def with_overrides(self, **changes) -> "Settings":
        changes = {k: v for k, v in changes.items() if v is not None}
        if "log_level" in changes:
            changes["log_level"] = _parse_level(changes["log_level"])
        if "reminder_interval" in changes:
            changes["reminder_interval"] = _parse_interval(changes["reminder_interval"])
        return replace(self, **changes)


def _parse_interval(value) -> float:
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"reminder interval must be a number of seconds, got {value!r}")
    if seconds <= 0:
        raise ConfigError(f"reminder interval must be positive, got {value!r}")
    return seconds


def _parse_level(value: str) -> str:
    level = str(value).strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"unknown log level {value!r}, expected one of {', '.join(LOG_LEVELS)}")
    return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    settings = Settings(
        data_file=env.get("HABIT_TRACKER_DATA_FILE") or DATA_PATH_DEFAULT,
        log_file=env.get("HABIT_TRACKER_LOG_FILE") or LOG_FILE_DEFAULT,
        user_name=(env.get("HABIT_TRACKER_USER_NAME") or "").strip() or DEFAULT_PROFILE_NAME,
    )
    return settings.with_overrides(
        reminder_interval=env.get("HABIT_TRACKER_REMINDER_SECONDS") or None,
        log_level=env.get("HABIT_TRACKER_LOG_LEVEL") or None,
    )


def setup_logging(settings: Settings) -> logging.Logger:
    """
    File log at the configured level, plus warnings and errors on stderr.
    Safe to call more than once.
    """
    logger = logging.getLogger("habit_tracker")
    logger.setLevel(settings.log_level)
    for handler in list(logger.handlers):
        if getattr(handler, "_habit_tracker", False):
            logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    Path(settings.log_file).parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(settings.log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(formatter)
    file_handler.setLevel(settings.log_level)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    console.setLevel(logging.WARNING)

    for handler in (file_handler, console):
        handler._habit_tracker = True
        logger.addHandler(handler)
    return logger
