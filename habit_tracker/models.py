"""
Habit and user profile.

A habit owns its completion history; status and progress are always
computed from that history, never stored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from habit_tracker import metrics
from habit_tracker.validation import (
    DEFAULT_FREQUENCY,
    PLACEHOLDER_NAME,
    new_id,
    parse_frequency,
    parse_identifier,
    parse_name,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

STATUS_DONE = "Done"
STATUS_ACTIVE = "Active"
DEFAULT_PROFILE_NAME = "Habit Warrior"


@dataclass
class Habit:
    id: str
    name: str
    target_frequency: int
    created_at: datetime
    completions: List[datetime] = field(default_factory=list)

    @classmethod
    def create(cls, name: Any, frequency: Any = None, now: Optional[datetime] = None) -> "Habit":
        return cls(
            id=new_id(),
            name=parse_name(name).or_default(PLACEHOLDER_NAME),
            target_frequency=parse_frequency(frequency).or_default(DEFAULT_FREQUENCY),
            created_at=metrics.current_time(now),
        )

    @classmethod
    def from_dict(cls, record: Dict[str, Any], now: Optional[datetime] = None) -> "Habit":
        """
        Rebuild a habit from its stored record. Rejected fields are logged
        and replaced: bad completions are dropped rather than turned into
        a completion for today.
        """
        now = metrics.current_time(now)

        ident = parse_identifier(record.get("id"))
        if not ident.ok:
            logger.warning("Habit record without id, assigning a new one: %s", ident.error)
        name = parse_name(record.get("name"))
        if not name.ok:
            logger.warning("Habit %s: %s, using %r", ident.value, name.error, PLACEHOLDER_NAME)
        frequency = parse_frequency(record.get("targetFrequency"))
        if not frequency.ok:
            logger.warning("Habit %s: %s, using %d", ident.value, frequency.error, DEFAULT_FREQUENCY)
        created = parse_timestamp(record.get("createdAt"))
        if not created.ok:
            logger.warning("Habit %s: createdAt %s, using now", ident.value, created.error)

        raw_completions = record.get("completions") or []
        if not isinstance(raw_completions, list):
            logger.warning("Habit %s: completions is not a list, ignoring it", ident.value)
            raw_completions = []

        completions: List[datetime] = []
        seen_days = set()
        for raw in raw_completions:
            parsed = parse_timestamp(raw)
            if not parsed.ok:
                logger.warning("Habit %s: dropping completion, %s", ident.value, parsed.error)
                continue
            day = metrics.local_date(parsed.value)
            if day in seen_days:
                logger.warning("Habit %s: dropping second completion on %s", ident.value, day)
                continue
            seen_days.add(day)
            completions.append(parsed.value)

        return cls(
            id=ident.value if ident.ok else new_id(),
            name=name.or_default(PLACEHOLDER_NAME),
            target_frequency=frequency.or_default(DEFAULT_FREQUENCY),
            created_at=created.or_default(now),
            completions=completions,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "targetFrequency": self.target_frequency,
            "completions": [c.isoformat() for c in self.completions],
            "createdAt": self.created_at.isoformat(),
        }

    def completed_on(self, day: date) -> bool:
        return any(metrics.local_date(c) == day for c in self.completions)

    def done_today(self, now: Optional[datetime] = None) -> bool:
        return self.completed_on(metrics.local_date(metrics.current_time(now)))

    def mark_complete(self, now: Optional[datetime] = None) -> bool:
        """
        Record a completion for today. Returns False when today already has one.
        """
        now = metrics.current_time(now)
        if self.done_today(now):
            return False
        self.completions.append(now)
        return True

    def this_week_completions(self, now: Optional[datetime] = None) -> List[datetime]:
        return metrics.completions_in_window(self.completions, metrics.current_time(now))

    def is_completed_this_week(self, now: Optional[datetime] = None) -> bool:
        return len(self.this_week_completions(now)) >= self.target_frequency

    def progress_percentage(self, now: Optional[datetime] = None) -> int:
        return metrics.progress_percentage(len(self.this_week_completions(now)), self.target_frequency)

    def status(self, now: Optional[datetime] = None) -> str:
        return STATUS_DONE if self.is_completed_this_week(now) else STATUS_ACTIVE


@dataclass
class UserProfile:
    name: str = DEFAULT_PROFILE_NAME
    join_date: datetime = field(default_factory=metrics.current_time)
    total_habits: int = 0
    completed_this_week: int = 0

    def refresh_from(self, habits: Sequence[Habit], now: Optional[datetime] = None) -> None:
        now = metrics.current_time(now)
        self.total_habits = len(habits)
        self.completed_this_week = sum(1 for h in habits if h.is_completed_this_week(now))

    def days_joined(self, now: Optional[datetime] = None) -> int:
        now = metrics.current_time(now)
        days = (now - self.join_date).days + 1
        return max(days, 1)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "joinDate": self.join_date.isoformat(),
            "totalHabits": self.total_habits,
            "completedThisWeek": self.completed_this_week,
        }

    def update_from_dict(self, record: Dict[str, Any]) -> None:
        """
        Take name and join date from a stored record. Counters are derived
        and get recomputed by refresh_from(), so they are not read back.
        """
        name = record.get("name")
        if isinstance(name, str) and name.strip():
            self.name = name.strip()
        joined = parse_timestamp(record.get("joinDate"))
        if joined.ok:
            self.join_date = joined.value
        else:
            logger.warning("Profile joinDate %s, keeping %s", joined.error, self.join_date.isoformat())
