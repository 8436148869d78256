"""
Metrics and date logic: the rolling weekly window, progress, stats.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from habit_tracker.validation import now_local, to_local


DAYS_IN_WEEK = 7
PROGRESS_BAR_WIDTH = 10
FILLED_CELL = "█"
EMPTY_CELL = "░"

HABIT_COLUMNS = ["name", "target", "this_week", "progress", "status", "completed"]


def round_half_up(x: float) -> int:
    """
    12.5 -> 13. Python's round() would give 12.
    """
    return int(math.floor(x + 0.5))


def current_time(now: Optional[datetime] = None) -> datetime:
    if now is None:
        return now_local()
    return to_local(now)


def local_date(ts: datetime, tz: Optional[tzinfo] = None) -> date:
    """
    Calendar day of `ts` under the zone rules in force at that instant.
    Without `tz` that is the system's local zone, DST changes included.
    """
    return ts.astimezone(tz).date()


def start_of_day(day: date, tz: Optional[tzinfo] = None) -> datetime:
    midnight = datetime.combine(day, time.min)
    return midnight.astimezone() if tz is None else midnight.replace(tzinfo=tz)


def window_start(now: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """
    Local midnight six days before today: the rolling week is today plus the
    six days before it, not a calendar week.
    """
    return start_of_day(local_date(now, tz) - timedelta(days=DAYS_IN_WEEK - 1), tz)


def completions_in_window(
    completions: Iterable[datetime], now: datetime, tz: Optional[tzinfo] = None
) -> List[datetime]:
    start = window_start(now, tz)
    return [c for c in completions if start <= c <= now]


def daterange(start: date, end: date) -> List[date]:
    """
    Inclusive date range.
    """
    days = []
    cur = start
    while cur <= end:
        days.append(cur)
        cur += timedelta(days=1)
    return days


def progress_percentage(count: int, target: int) -> int:
    if target <= 0:
        return 0
    return round_half_up(min(100.0, count / target * 100))


def progress_bar(percentage: float, width: int = PROGRESS_BAR_WIDTH) -> str:
    percentage = max(0.0, min(100.0, percentage))
    filled = round_half_up(percentage / 100 * width)
    return FILLED_CELL * filled + EMPTY_CELL * (width - filled)


@dataclass(frozen=True)
class HabitStats:
    total_target: int
    total_completions: int
    average_progress: int
    active: int
    completed: int


def habit_frame(habits: Sequence, now: Optional[datetime] = None) -> pd.DataFrame:
    """
    One row per habit with its weekly numbers.

    Columns: name, target, this_week, progress, status, completed
    """
    now = current_time(now)
    rows = []
    for h in habits:
        completed = h.is_completed_this_week(now)
        rows.append(
            {
                "name": h.name,
                "target": h.target_frequency,
                "this_week": len(h.this_week_completions(now)),
                "progress": h.progress_percentage(now),
                "status": h.status(now),
                "completed": completed,
            }
        )
    return pd.DataFrame(rows, columns=HABIT_COLUMNS)


def compute_stats(habits: Sequence, now: Optional[datetime] = None) -> Optional[HabitStats]:
    """
    Aggregate weekly numbers. None when there are no habits, since the
    average progress of nothing is undefined.
    """
    df = habit_frame(habits, now)
    if df.empty:
        return None
    completed = df["completed"].astype(bool)
    return HabitStats(
        total_target=int(df["target"].sum()),
        total_completions=int(df["this_week"].sum()),
        average_progress=round_half_up(float(df["progress"].mean())),
        active=int((~completed).sum()),
        completed=int(completed.sum()),
    )


def weekly_frame(habits: Sequence, now: Optional[datetime] = None) -> pd.DataFrame:
    """
    Per-day frame for the rolling week, oldest day first.

    Columns:
      - day (date)
      - done: completions logged that day across all habits
      - cum_done: running total of done
      - cum_target: even pace towards the summed weekly targets
    """
    now = current_time(now)
    days = daterange(local_date(window_start(now)), local_date(now))
    done_counts = {d: 0 for d in days}
    total_target = 0
    for h in habits:
        total_target += h.target_frequency
        for c in h.this_week_completions(now):
            day = local_date(c)
            if day in done_counts:
                done_counts[day] += 1

    df = pd.DataFrame({"day": days, "done": [done_counts[d] for d in days]})
    df["cum_done"] = df["done"].cumsum()
    df["cum_target"] = [total_target * (i + 1) / DAYS_IN_WEEK for i in range(len(days))]
    return df
