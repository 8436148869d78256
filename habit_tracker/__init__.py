"""
Weekly habit tracker: habits, completions, progress, JSON persistence.
"""

from habit_tracker.models import Habit, UserProfile
from habit_tracker.tracker import HabitTracker

__all__ = ["Habit", "HabitTracker", "UserProfile"]
