"""
Check-in page

Mark habits as done for today. Completions count once per day; the list
can be narrowed to habits still open this week or already done.
"""

from __future__ import annotations

import streamlit as st

from habit_tracker import metrics
from habit_tracker.tracker import FILTER_TITLES
from habit_tracker.ui_helpers import load_tracker, page_header, reminder_banner, saved_then_rerun

st.set_page_config(page_title="Check-in", page_icon="🗓️", layout="wide")


def main() -> None:
    page_header("Check-in", "Mark the habits you did today.")

    tracker = load_tracker()
    if not tracker.habits:
        st.info("Create a habit first.")
        return

    reminder_banner(tracker)
    now = tracker.clock()
    filter_key = st.radio(
        "Show",
        options=list(FILTER_TITLES),
        format_func=lambda k: FILTER_TITLES[k].title(),
        horizontal=True,
        key="filter",
    )
    title, habits = tracker.filter_habits(filter_key)

    st.divider()
    st.write(f"### {title.title()} · {now.strftime('%A, %b %d')}")
    if not habits:
        st.success("No habits match this filter.")
        return

    numbers = {h.id: i for i, h in enumerate(tracker.habits, start=1)}
    open_today = [h for h in habits if not h.done_today(now)]

    if open_today and st.button("Mark all done", key="mark_all"):
        for h in open_today:
            tracker.complete_habit(numbers[h.id])
        saved_then_rerun(f"Marked {len(open_today)} habit(s) done")

    for h in habits:
        pct = h.progress_percentage(now)
        with st.container(border=True):
            st.write(f"**{h.name}** · {h.status(now)}")
            st.caption(f"{metrics.progress_bar(pct)} {pct}% of {h.target_frequency}x/week")
            if h.done_today(now):
                st.caption("Done today ✅")
            elif st.button("Mark done", key=f"done_{h.id}"):
                tracker.complete_habit(numbers[h.id])
                saved_then_rerun(f"{h.name} done for today")


if __name__ == "__main__":
    main()
