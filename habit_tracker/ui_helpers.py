"""
Streamlit bits shared by the dashboard pages.

Every page builds a fresh tracker from the data file on each rerun, and
a save is usually followed by st.rerun(), so messages about a save are
parked in session state and shown on the next run.
"""

from __future__ import annotations

import streamlit as st

from habit_tracker.cli import create_tracker
from habit_tracker.config import load_settings, setup_logging
from habit_tracker.tracker import HabitTracker

_FLASH_KEY = "_flash"


def page_header(title: str, subtitle: str | None = None) -> None:
    st.title(title)
    if subtitle:
        st.caption(subtitle)
    flash = st.session_state.pop(_FLASH_KEY, None)
    if flash:
        st.toast(flash, icon="✅")


def load_tracker() -> HabitTracker:
    """
    Fresh tracker from the data file on every rerun, so the dashboard and a
    running CLI session see each other's saves.
    """
    settings = load_settings()
    setup_logging(settings)
    return create_tracker(settings)


def saved_then_rerun(msg: str) -> None:
    st.session_state[_FLASH_KEY] = msg
    st.rerun()


def warn(msg: str) -> None:
    st.toast(msg, icon="⚠️")


def reminder_banner(tracker: HabitTracker) -> None:
    reminder = tracker.reminder_message()
    if reminder:
        st.warning(reminder)


def confirmed(key: str, what: str) -> bool:
    """
    Tick box guarding a destructive button.
    """
    return st.checkbox(f"Yes, delete {what}", key=key)
