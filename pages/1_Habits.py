"""
Habits page

Create and delete habits. Each habit has a name and a weekly target: how
many days out of the rolling week it should be done.
"""

from __future__ import annotations

import streamlit as st

from habit_tracker.ui_helpers import confirmed, load_tracker, page_header, saved_then_rerun, warn

st.set_page_config(page_title="Habits", page_icon="📌", layout="wide")


def main() -> None:
    page_header("Habits", "Create habits and set how often per week you want to do them.")

    tracker = load_tracker()
    now = tracker.clock()

    left, right = st.columns([0.9, 1.1], gap="large")

    with left:
        st.subheader("Your habits")
        if not tracker.habits:
            st.info("No habits yet.")
        else:
            for number, h in enumerate(tracker.habits, start=1):
                cols = st.columns([0.75, 0.25])
                with cols[0]:
                    st.write(f"**{number}. {h.name}**")
                    st.caption(f"{h.target_frequency}x/week · created {h.created_at.strftime('%b %d, %Y')}")
                with cols[1]:
                    if st.button("Delete", key=f"delete_{h.id}"):
                        st.session_state["confirm_delete"] = h.id
                        st.rerun()

                if st.session_state.get("confirm_delete") == h.id:
                    st.warning(f"This will remove **{h.name}** and its history.")
                    c1, c2 = st.columns(2)
                    with c1:
                        if st.button("Cancel", key=f"cancel_{h.id}"):
                            st.session_state["confirm_delete"] = None
                            st.rerun()
                    with c2:
                        if st.button("Delete permanently", key=f"really_{h.id}", type="primary"):
                            tracker.delete_habit(number)
                            st.session_state["confirm_delete"] = None
                            saved_then_rerun("Habit deleted")

        st.divider()
        with st.expander("Delete all data"):
            st.caption(f"Removes all {len(tracker.habits)} habit(s) and their history. Your profile is kept.")
            sure = confirmed("confirm_clear", "all habits")
            if st.button("Delete everything", key="clear_all", disabled=not sure):
                tracker.clear_all()
                saved_then_rerun("All habits deleted")

    with right:
        st.subheader("New Habit")

        name = st.text_input("Name", key="new_name", placeholder="e.g. Walk 20 minutes")
        frequency = st.number_input("Weekly target", key="new_target", min_value=1, value=7, step=1)

        if st.button("Save", key="save_habit", type="primary"):
            if not name.strip():
                warn("Please enter a name.")
            else:
                habit = tracker.add_habit(name, int(frequency))
                saved_then_rerun(f"Habit created: {habit.name}, {habit.target_frequency}x/week")

        st.caption(f"{sum(1 for h in tracker.habits if h.is_completed_this_week(now))} of "
                   f"{len(tracker.habits)} habit(s) already hit this week's target.")


if __name__ == "__main__":
    main()
