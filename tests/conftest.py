import logging
import os
import time
from datetime import datetime, timedelta, timezone

import pytest

# Central European rules, DST included, so day boundaries move across the
# last Sunday of October.
os.environ["TZ"] = "CET-1CEST,M3.5.0,M10.5.0/3"
time.tzset()

from habit_tracker.models import Habit  # noqa: E402
from habit_tracker.tracker import HabitTracker  # noqa: E402

TZ = timezone(timedelta(hours=2))
# A Monday afternoon; the rolling week starts Tuesday 2026-10-13 00:00
NOW = datetime(2026, 10, 19, 15, 30, tzinfo=TZ)


def days_ago(n, hour=9, minute=0):
    return (NOW - timedelta(days=n)).replace(hour=hour, minute=minute, second=0, microsecond=0)


def make_habit(name="Read", target=3, completions=(), habit_id=None):
    return Habit(
        id=habit_id or f"id-{name.lower()}",
        name=name,
        target_frequency=target,
        created_at=days_ago(10),
        completions=list(completions),
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def data_file(tmp_path):
    return str(tmp_path / "habits-data.json")


@pytest.fixture
def tracker(data_file):
    return HabitTracker(data_file, clock=lambda: NOW)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("habit_tracker")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
