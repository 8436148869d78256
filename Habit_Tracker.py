"""
Habit Tracker - Dashboard

Run with:
    streamlit run Habit_Tracker.py
"""

from __future__ import annotations

import altair as alt
import pandas as pd
import streamlit as st

from habit_tracker import metrics
from habit_tracker.tracker import HabitTracker
from habit_tracker.ui_helpers import load_tracker, page_header, reminder_banner, saved_then_rerun


st.set_page_config(
    page_title="Habit Tracker",
    page_icon="✅",
    layout="wide",
)


def render_week_progress(df: pd.DataFrame) -> None:
    """
    Completions per day of the rolling week, today last, against the daily
    pace that would meet every weekly target.
    """
    chart_df = df.copy()
    chart_df["label"] = pd.to_datetime(chart_df["day"]).dt.strftime("%a %d")
    order = list(chart_df["label"])
    pace = float(chart_df["cum_target"].iloc[0]) if len(chart_df) else 0.0

    bars = alt.Chart(chart_df, title="Rolling week").mark_bar().encode(
        x=alt.X("label:N", sort=order, title=None),
        y=alt.Y("done:Q", title="Completions"),
        tooltip=[
            alt.Tooltip("label:N", title="Day"),
            alt.Tooltip("done:Q", title="Done"),
            alt.Tooltip("cum_done:Q", title="Week so far"),
            alt.Tooltip("cum_target:Q", title="On pace", format=".1f"),
        ],
    )
    pace_rule = alt.Chart(pd.DataFrame({"pace": [pace]})).mark_rule(strokeDash=[4, 4]).encode(y="pace:Q")

    st.altair_chart(bars + pace_rule, use_container_width=True)
    st.caption(f"Dashed line: {pace:.1f} completions a day meets every weekly target.")


def render_profile(tracker: HabitTracker) -> None:
    now = tracker.clock()
    profile = tracker.profile
    profile.refresh_from(tracker.habits, now)

    c1, c2, c3 = st.columns(3)
    c1.metric("Days joined", f"{profile.days_joined(now)}")
    c2.metric("Habits", f"{profile.total_habits}")
    c3.metric("Done this week", f"{profile.completed_this_week}")
    st.caption(f"{profile.name} · joined {profile.join_date.strftime('%b %d, %Y')}")


def render_this_week(tracker: HabitTracker) -> None:
    st.subheader("This week")

    if not tracker.habits:
        st.info("No habits yet. Create one in **Habits**.")
        return

    reminder_banner(tracker)

    now = tracker.clock()
    for number, h in enumerate(tracker.habits, start=1):
        pct = h.progress_percentage(now)
        count = len(h.this_week_completions(now))
        left, right = st.columns([0.75, 0.25])
        with left:
            st.write(f"**{h.name}** · {h.status(now)}")
            st.progress(pct, text=f"{count}/{h.target_frequency} this week ({pct}%)")
        with right:
            done_today = h.done_today(now)
            label = "Done today ✅" if done_today else "Mark done"
            if st.button(label, key=f"done_{h.id}", disabled=done_today):
                tracker.complete_habit(number)
                saved_then_rerun(f"{h.name} done for today")


def render_stats(tracker: HabitTracker) -> None:
    st.subheader("Statistics")
    stats = tracker.compute_stats()
    if stats is None:
        st.info("No habits yet, nothing to compute.")
        return

    c1, c2, c3, c4, c5 = st.columns(5)
    c1.metric("Target", f"{stats.total_target}")
    c2.metric("Completed", f"{stats.total_completions}")
    c3.metric("Avg progress", f"{stats.average_progress}%")
    c4.metric("Active", f"{stats.active}")
    c5.metric("Done", f"{stats.completed}")

    render_week_progress(metrics.weekly_frame(tracker.habits, tracker.clock()))


def main() -> None:
    page_header("Habit Tracker", "Mark daily completions and watch your rolling week fill up.")

    tracker = load_tracker()
    render_profile(tracker)

    st.divider()
    render_this_week(tracker)

    st.divider()
    render_stats(tracker)


if __name__ == "__main__":
    main()
