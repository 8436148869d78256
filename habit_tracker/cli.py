"""
Interactive menu for the habit tracker.

Run with:
    habit-tracker
    python -m habit_tracker --data-file my-habits.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Callable, List, Optional

from habit_tracker.config import ConfigError, Settings, load_settings, setup_logging
from habit_tracker.models import Habit, UserProfile
from habit_tracker.tracker import RULE, HabitTracker

logger = logging.getLogger(__name__)

MENU = "\n".join(
    [
        RULE,
        "HABIT TRACKER - MAIN MENU",
        RULE,
        "1. View profile",
        "2. View all habits",
        "3. View active habits",
        "4. View completed habits",
        "5. Add a new habit",
        "6. Mark a habit complete",
        "7. Delete a habit",
        "8. View statistics",
        "9. Weekly summary",
        "0. Exit",
        RULE,
    ]
)

INVALID_NUMBER = "Invalid habit number."


class _EndOfInput(Exception):
    pass


def _ask(input_fn: Callable[[str], str], prompt: str) -> str:
    try:
        return input_fn(prompt)
    except EOFError:
        raise _EndOfInput() from None


def _pick_and_apply(
    tracker: HabitTracker,
    ask: Callable[[str], str],
    out: Callable[[str], None],
    prompt: str,
    action: Callable[[Any], Optional[Habit]],
    done_msg: str,
    empty_msg: str,
) -> None:
    if not tracker.habits:
        out(empty_msg)
        return
    out(tracker.format_habits("all"))
    habit = action(ask(prompt))
    if habit is None:
        out(INVALID_NUMBER)
    else:
        out(done_msg.format(name=habit.name))


def run_menu(
    tracker: HabitTracker,
    input_fn: Optional[Callable[[str], str]] = None,
    out: Callable[[str], None] = print,
) -> None:
    """
    Read one menu choice per line until 0 (or end of input), then save.
    """
    def ask(prompt: str) -> str:
        return _ask(input_fn or input, prompt)

    try:
        while True:
            out(MENU)
            choice = ask("Choose an option (0-9): ").strip()

            if choice == "1":
                out(tracker.format_profile())
            elif choice == "2":
                out(tracker.format_habits("all"))
            elif choice == "3":
                out(tracker.format_habits("active"))
            elif choice == "4":
                out(tracker.format_habits("completed"))
            elif choice == "5":
                name = ask("Habit name: ")
                frequency = ask("Weekly target (number): ")
                habit = tracker.add_habit(name, frequency)
                out(f'Habit "{habit.name}" added with a target of {habit.target_frequency}x/week.')
            elif choice == "6":
                _pick_and_apply(
                    tracker, ask, out,
                    "Number of the habit you completed: ",
                    tracker.complete_habit,
                    'Habit "{name}" marked complete for today.',
                    "No habits to mark complete yet.",
                )
            elif choice == "7":
                _pick_and_apply(
                    tracker, ask, out,
                    "Number of the habit to delete: ",
                    tracker.delete_habit,
                    'Habit "{name}" deleted.',
                    "No habits to delete yet.",
                )
            elif choice == "8":
                out(tracker.format_stats())
            elif choice == "9":
                out(tracker.format_summary())
            elif choice == "0":
                break
            else:
                out("Invalid choice, please try again.")
    except _EndOfInput:
        logger.info("End of input, exiting")
    finally:
        tracker.stop_reminder()
        tracker.save()
    out("Goodbye! Keep your habits going.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="habit-tracker", description="Track weekly habits from the terminal.")
    parser.add_argument("--data-file", help="JSON file holding your habits")
    parser.add_argument("--reminder-interval", type=float, help="seconds between reminders")
    parser.add_argument("--no-reminder", action="store_true", help="do not show periodic reminders")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    return parser


def create_tracker(settings: Settings) -> HabitTracker:
    tracker = HabitTracker(settings.data_file, profile=UserProfile(name=settings.user_name))
    tracker.load()
    return tracker


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings().with_overrides(
            data_file=args.data_file,
            reminder_interval=args.reminder_interval,
            log_level=args.log_level,
        )
        if args.no_reminder:
            settings = settings.with_overrides(reminder_enabled=False)
        setup_logging(settings)
        tracker = create_tracker(settings)
    except (ConfigError, OSError) as e:
        logging.getLogger("habit_tracker").error("Could not start the habit tracker: %s", e)
        print(f"Could not start the habit tracker: {e}", file=sys.stderr)
        return 1

    print(RULE)
    print("WELCOME TO HABIT TRACKER")
    print(RULE)
    if tracker.habits:
        print(f"Loaded {len(tracker.habits)} habit(s).")
    else:
        print("Tip: add a new habit to get started!")

    if settings.reminder_enabled:
        tracker.start_reminder(settings.reminder_interval)
    try:
        run_menu(tracker)
    except KeyboardInterrupt:
        print()
    except Exception:
        logger.exception("Unexpected error in the menu loop")
        tracker.stop_reminder()
    return 0


if __name__ == "__main__":
    sys.exit(main())
