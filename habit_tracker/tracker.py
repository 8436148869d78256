"""
The habit tracker: the ordered habit list, the user profile, persistence.

Habits are addressed by their one-based position in the list, the number
shown next to them in listings.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from habit_tracker import metrics, storage
from habit_tracker.models import Habit, UserProfile
from habit_tracker.reminder import ReminderTimer
from habit_tracker.validation import parse_habit_number

logger = logging.getLogger(__name__)

RULE = "=" * 50
THIN_RULE = "-" * 50

FILTER_TITLES = {
    "all": "ALL HABITS",
    "active": "ACTIVE HABITS",
    "completed": "COMPLETED HABITS",
}


class HabitTracker:
    def __init__(
        self,
        data_file: str = storage.DATA_PATH_DEFAULT,
        profile: Optional[UserProfile] = None,
        clock: Callable[[], datetime] = metrics.current_time,
    ):
        self.data_file = data_file
        self.profile = profile if profile is not None else UserProfile(join_date=clock())
        self.habits: List[Habit] = []
        self.clock = clock
        self._reminder: Optional[ReminderTimer] = None

    # --- Persistence -----------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "userProfile": self.profile.to_dict(),
            "habits": [h.to_dict() for h in self.habits],
        }

    def save(self) -> bool:
        try:
            storage.save_state(self.to_dict(), self.data_file)
        except storage.StorageError as e:
            logger.error("Could not save habits: %s", e)
            return False
        logger.debug("Saved %d habit(s) to %s", len(self.habits), self.data_file)
        return True

    def load(self) -> bool:
        """
        Replace in-memory state with the file contents. A missing file is a
        fresh start; a broken one leaves the current state alone.
        """
        try:
            data = storage.load_state(self.data_file)
        except storage.StorageError as e:
            logger.error("Could not load habits: %s", e)
            return False
        if data is None:
            logger.info("No data file at %s yet, starting empty", self.data_file)
            self.profile.refresh_from(self.habits, self.clock())
            return True

        now = self.clock()
        stored_profile = data.get("userProfile")
        if isinstance(stored_profile, dict):
            self.profile.update_from_dict(stored_profile)
        elif stored_profile is not None:
            logger.warning("Ignoring userProfile of type %s", type(stored_profile).__name__)

        stored_habits = data.get("habits") or []
        if not isinstance(stored_habits, list):
            logger.warning("Ignoring habits of type %s", type(stored_habits).__name__)
            stored_habits = []
        habits = []
        for record in stored_habits:
            if not isinstance(record, dict):
                logger.warning("Skipping habit record of type %s", type(record).__name__)
                continue
            habits.append(Habit.from_dict(record, now))
        self.habits = habits
        self.profile.refresh_from(self.habits, now)
        logger.info("Loaded %d habit(s) from %s", len(self.habits), self.data_file)
        return True

    def _commit(self) -> None:
        self.profile.refresh_from(self.habits, self.clock())
        self.save()

    # --- Habit CRUD -------------------------------------------------------------

    def get_habit(self, number: Any) -> Optional[Habit]:
        parsed = parse_habit_number(number)
        if not parsed.ok:
            logger.info("Rejected habit number: %s", parsed.error)
            return None
        if not 1 <= parsed.value <= len(self.habits):
            logger.info("Habit number %d out of range (1-%d)", parsed.value, len(self.habits))
            return None
        return self.habits[parsed.value - 1]

    def add_habit(self, name: Any, frequency: Any = None) -> Habit:
        habit = Habit.create(name, frequency, self.clock())
        self.habits.append(habit)
        self._commit()
        logger.info("Added habit %s (%r, %dx/week)", habit.id, habit.name, habit.target_frequency)
        return habit

    def complete_habit(self, number: Any) -> Optional[Habit]:
        habit = self.get_habit(number)
        if habit is None:
            return None
        if habit.mark_complete(self.clock()):
            logger.info("Habit %s completed for today", habit.id)
        self._commit()
        return habit

    def delete_habit(self, number: Any) -> Optional[Habit]:
        habit = self.get_habit(number)
        if habit is None:
            return None
        self.habits.remove(habit)
        self._commit()
        logger.info("Deleted habit %s (%r)", habit.id, habit.name)
        return habit

    def clear_all(self) -> None:
        self.habits = []
        self._commit()
        logger.info("Cleared all habits")

    # --- Queries ------------------------------------------------------------------

    def filter_habits(self, filter_key: str = "all") -> Tuple[str, List[Habit]]:
        now = self.clock()
        if filter_key == "active":
            habits = [h for h in self.habits if not h.is_completed_this_week(now)]
        elif filter_key == "completed":
            habits = [h for h in self.habits if h.is_completed_this_week(now)]
        else:
            habits = list(self.habits)
        return FILTER_TITLES.get(filter_key, FILTER_TITLES["all"]), habits

    def compute_stats(self) -> Optional[metrics.HabitStats]:
        return metrics.compute_stats(self.habits, self.clock())

    def reminder_message(self) -> Optional[str]:
        now = self.clock()
        for h in self.habits:
            if not h.is_completed_this_week(now):
                return f'REMINDER: Don\'t forget "{h.name}"!'
        return None

    # --- Text rendering -------------------------------------------------------------

    def format_profile(self) -> str:
        now = self.clock()
        self.profile.refresh_from(self.habits, now)
        p = self.profile
        return "\n".join(
            [
                RULE,
                "USER PROFILE",
                RULE,
                f"Name               : {p.name}",
                f"Joined             : {p.join_date.strftime('%a %b %d %Y')}",
                f"Days joined        : {p.days_joined(now)} day(s)",
                f"Total habits       : {p.total_habits}",
                f"Completed this week: {p.completed_this_week}",
                RULE,
            ]
        )

    def format_habits(self, filter_key: str = "all") -> str:
        now = self.clock()
        title, habits = self.filter_habits(filter_key)
        lines = [RULE, title, RULE]
        if not habits:
            lines.append("No habits match this filter yet.")
            return "\n".join(lines)

        for i, h in enumerate(habits, start=1):
            pct = h.progress_percentage(now)
            count = len(h.this_week_completions(now))
            lines += [
                f"{i}. [{h.status(now)}] {h.name}",
                f"   Target       : {h.target_frequency}x/week",
                f"   Progress     : {count}/{h.target_frequency} ({pct}%)",
                f"   Progress bar : {metrics.progress_bar(pct)} {pct}%",
                f"   Created      : {h.created_at.strftime('%a %b %d %Y')}",
                THIN_RULE,
            ]
        return "\n".join(lines)

    def format_stats(self) -> str:
        stats = self.compute_stats()
        if stats is None:
            return "No habits yet, nothing to compute."
        return "\n".join(
            [
                RULE,
                "HABIT STATISTICS",
                RULE,
                f"Total target this week     : {stats.total_target}",
                f"Total completed this week  : {stats.total_completions}",
                f"Average progress           : {stats.average_progress}%",
                f"Active                     : {stats.active}",
                f"Completed                  : {stats.completed}",
                RULE,
            ]
        )

    def format_summary(self) -> str:
        if not self.habits:
            return "No habits to show yet."
        now = self.clock()
        lines = ["=== Weekly summary ==="]
        for i, h in enumerate(self.habits, start=1):
            count = len(h.this_week_completions(now))
            lines.append(f"{i}. {h.name} - {h.status(now)} - this week: {count}/{h.target_frequency}")
        return "\n".join(lines)

    # --- Reminder -------------------------------------------------------------------

    def start_reminder(self, interval: float, notify: Callable[[str], None] = print) -> bool:
        if self._reminder is not None and self._reminder.running:
            return False

        def remind() -> None:
            message = self.reminder_message()
            if message:
                notify("\n".join([RULE, message, RULE]))

        self._reminder = ReminderTimer(interval, remind)
        return self._reminder.start()

    def stop_reminder(self) -> None:
        if self._reminder is not None:
            self._reminder.stop()
            self._reminder = None
