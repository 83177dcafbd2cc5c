# front_end/streamlit_app.py

import logging
from typing import Any, Dict, List, Optional

import graphviz
import streamlit as st

from grow_app.config.settings import settings
from grow_app.core.feature_flags import Feature, is_enabled
from grow_app.core.logging_tracking import log_once_per_session, setup_global_rotating_error_log
from grow_app.front_end.api_client import call_grow_api, KEY_DATA, KEY_ERROR, KEY_STATUS_CODE
from grow_app.front_end.tree_svg import render_tree_svg
from grow_app.front_end.utils import progress_label, show_recent_errors, sort_challenges, streak_label

logger = logging.getLogger(__name__)

BACKEND_URL = settings.BACKEND_URL

PAGE_TREE = "🌳 Tree"
PAGE_HABITS = "🔁 Habits"
PAGE_GOALS = "🎯 Goals"
PAGE_CHALLENGES = "🌱 Challenges"
PAGES = [PAGE_TREE, PAGE_HABITS, PAGE_GOALS, PAGE_CHALLENGES]

KEY_SHOW_HABIT_LIST = "show_habit_list"
KEY_PENDING_TOAST = "pending_toast"


# --- API helpers ---
def api(endpoint: str, method: str = "GET", data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return call_grow_api(endpoint, backend_url=BACKEND_URL, method=method, data=data)


def load(endpoint: str, what: str) -> Optional[Any]:
    """GET helper; shows a generic error message on failure."""
    response = api(endpoint)
    if response.get(KEY_ERROR):
        log_once_per_session('error', f"Failed fetch {endpoint}: {response.get(KEY_ERROR)} (Status: {response.get(KEY_STATUS_CODE)})")
        st.error(f"Failed to load your {what}. Please try again.")
        return None
    return response.get(KEY_DATA)


def mutate(endpoint: str, method: str, success_msg: str, failure_msg: str, data: Optional[Dict[str, Any]] = None):
    """POST/DELETE helper. Queues a toast and reruns the page on success."""
    response = api(endpoint, method=method, data=data)
    payload = response.get(KEY_DATA)
    failed = bool(response.get(KEY_ERROR)) or (isinstance(payload, dict) and payload.get("success") is False)
    if failed:
        logger.warning("Mutation %s %s failed: %s", method, endpoint, response.get(KEY_ERROR))
        st.toast(f"Error: {failure_msg}", icon="⚠️")
        return
    st.session_state[KEY_PENDING_TOAST] = success_msg
    st.rerun()


def flush_toast():
    msg = st.session_state.pop(KEY_PENDING_TOAST, None)
    if msg:
        st.toast(msg, icon="✅")


# --- Goal graph helpers ---
def progress_color(progress: int) -> str:
    if progress >= 100:
        return "#90EE90"
    if progress >= 50:
        return "#C5E1A5"
    if progress > 0:
        return "#FFF59D"
    return "#E0E0E0"


def build_goal_dot(goal: Dict[str, Any], dot: graphviz.Digraph, seen: Optional[set] = None):
    """Adds a goal node, its subgoal edges and their subtrees to the graph."""
    seen = set() if seen is None else seen
    goal_id = goal.get("id")
    if not goal_id or goal_id in seen:
        return
    seen.add(goal_id)
    progress = int(goal.get("progress", 0))
    label = f"{goal.get('title', 'Untitled')}\n({progress}%)"
    dot.node(name=str(goal_id), label=label, shape="box", style="filled", fillcolor=progress_color(progress))
    for child in goal.get("subgoals", []):
        if isinstance(child, dict) and child.get("id"):
            dot.edge(str(goal_id), str(child["id"]))
            build_goal_dot(child, dot, seen)


def display_goal_graph(root_goals: List[Dict[str, Any]]):
    if not root_goals:
        return
    try:
        dot = graphviz.Digraph(comment='Goal Tree')
        dot.attr(rankdir='TB')
        for goal in root_goals:
            build_goal_dot(goal, dot)
        st.graphviz_chart(dot)
    except Exception as e:
        logger.exception("Goal graph render exception!")
        st.error(f"Error generating goal graph: {e}")


# --- Pages ---
def habit_row(habit: Dict[str, Any], key_prefix: str):
    col_title, col_done, col_delete = st.columns([4, 1, 1])
    with col_title:
        mark = "✅" if habit["completed"] else "⬜"
        st.write(f"{mark} **{habit['title']}** · {streak_label(habit['streak'])}")
    with col_done:
        label = "Undo" if habit["completed"] else "Complete"
        if st.button(label, key=f"{key_prefix}_done_{habit['id']}"):
            response = api(f"/habits/{habit['id']}/complete", method="POST")
            updated = response.get(KEY_DATA)
            if response.get(KEY_ERROR) or not isinstance(updated, dict):
                st.toast("Error: Failed to update habit. Please try again.", icon="⚠️")
            else:
                msg = (f"Great job! You've maintained a {updated['streak']} day streak."
                       if updated.get("completed") else "Habit marked as not done.")
                st.session_state[KEY_SHOW_HABIT_LIST] = False
                st.session_state[KEY_PENDING_TOAST] = msg
                st.rerun()
    with col_delete:
        if st.button("🗑️", key=f"{key_prefix}_del_{habit['id']}", help="Delete habit"):
            mutate(f"/habits/{habit['id']}", "DELETE", "Your habit has been removed successfully.", "Failed to delete habit. Please try again.")


def new_habit_form(key: str):
    with st.form(key, clear_on_submit=True):
        title = st.text_input("Habit Name", placeholder="e.g., Morning Meditation")
        if st.form_submit_button("Add Habit") and title.strip():
            mutate("/habits", "POST", "Your new habit has been added successfully.", "Failed to add your habit. Please try again.", {"title": title})


def page_tree():
    col_title, col_toggle = st.columns([3, 1])
    with col_title:
        st.header("Your Growth Tree")
    with col_toggle:
        showing = st.session_state.get(KEY_SHOW_HABIT_LIST, False)
        if st.button("View Tree" if showing else "Quick Complete Habits"):
            st.session_state[KEY_SHOW_HABIT_LIST] = not showing
            st.rerun()

    summary = load("/tree/summary", "growth data")
    if isinstance(summary, dict):
        m1, m2, m3, m4 = st.columns(4)
        m1.metric("Habits done today", f"{summary.get('completed_habits', 0)}/{summary.get('habits', 0)}")
        m2.metric("Total streak", summary.get("total_streak", 0))
        m3.metric("Tasks done", f"{summary.get('completed_tasks', 0)}/{summary.get('tasks', 0)}")
        m4.metric("Challenges", f"{summary.get('completed_challenges', 0)}/{summary.get('challenges', 0)}")

    if st.session_state.get(KEY_SHOW_HABIT_LIST):
        st.subheader("Complete Today's Habits")
        st.caption("As you complete your habits, watch your tree grow stronger!")
        for habit in load("/habits", "habits") or []:
            habit_row(habit, "quick")
    elif not is_enabled(Feature.TREE_VISUALIZATION):
        st.info("Tree visualization is disabled.")
    else:
        layout = load("/tree/layout", "growth data")
        if isinstance(layout, dict):
            st.markdown(render_tree_svg(layout), unsafe_allow_html=True)
            if layout.get("hidden_goal_ids"):
                st.caption(f"{len(layout['hidden_goal_ids'])} deeper subgoal(s) are not drawn.")

    with st.expander("➕ New Habit"):
        new_habit_form("new_habit_tree")


def page_habits():
    st.header("Habits")
    habits = load("/habits", "habits")
    if habits is not None and not habits:
        st.info("No habits yet. Add your first one below.")
    for habit in habits or []:
        habit_row(habit, "habits")
    new_habit_form("new_habit_page")


def goal_card(goal: Dict[str, Any], depth: int = 0):
    indent = "　" * depth
    with st.container(border=True):
        col_title, col_delete = st.columns([5, 1])
        with col_title:
            st.markdown(f"{indent}**{goal['title']}**")
            st.progress(min(max(int(goal.get("progress", 0)), 0), 100) / 100, text=progress_label(int(goal.get("progress", 0))))
        with col_delete:
            if st.button("🗑️", key=f"del_goal_{goal['id']}", help="Delete goal and everything below it"):
                mutate(f"/goals/{goal['id']}", "DELETE", "Your goal has been removed successfully.", "Failed to delete goal. Please try again.")

        for task in goal.get("tasks", []):
            col_task, col_toggle, col_task_del = st.columns([4, 1, 1])
            with col_task:
                st.write(f"{indent}{'☑️' if task['completed'] else '⬜'} {task['title']}")
            with col_toggle:
                if st.button("Undo" if task["completed"] else "Done", key=f"task_done_{task['id']}"):
                    mutate(f"/tasks/{task['id']}/complete", "POST", "Your task status has been updated.", "Failed to update task. Please try again.")
            with col_task_del:
                if st.button("🗑️", key=f"task_del_{task['id']}", help="Delete task"):
                    mutate(f"/tasks/{task['id']}", "DELETE", "Your task has been removed successfully.", "Failed to delete task. Please try again.")

        with st.expander("Add task or subgoal"):
            with st.form(f"add_task_{goal['id']}", clear_on_submit=True):
                task_title = st.text_input("Task", placeholder="e.g., Create outline")
                if st.form_submit_button("Add Task") and task_title.strip():
                    mutate(f"/goals/{goal['id']}/tasks", "POST", "Your new task has been added successfully.",
                           "Failed to add your task. Please try again.", {"title": task_title})
            with st.form(f"add_subgoal_{goal['id']}", clear_on_submit=True):
                sub_title = st.text_input("Subgoal", placeholder="e.g., Finish chapter one")
                if st.form_submit_button("Add Subgoal") and sub_title.strip():
                    mutate("/goals", "POST", "Your new goal has been added successfully.",
                           "Failed to add your goal. Please try again.", {"title": sub_title, "parent_id": goal["id"]})

        for subgoal in goal.get("subgoals", []):
            goal_card(subgoal, depth + 1)


def page_goals():
    st.header("Goals")
    with st.form("new_goal", clear_on_submit=True):
        title = st.text_input("Goal", placeholder="e.g., Learn Spanish")
        if st.form_submit_button("Add Goal") and title.strip():
            mutate("/goals", "POST", "Your new goal has been added successfully.", "Failed to add your goal. Please try again.", {"title": title})

    root_goals = load("/goals/roots", "goals")
    if root_goals is None:
        return
    if not root_goals:
        st.info("No goals yet. Plant your first one above.")
        return
    if is_enabled(Feature.GOAL_GRAPH):
        with st.expander("Goal graph"):
            display_goal_graph(root_goals)
    for goal in root_goals:
        goal_card(goal)


def page_challenges():
    st.header("Challenges")
    if is_enabled(Feature.DAILY_CHALLENGES) and st.button("✨ Generate Daily Challenge"):
        mutate("/challenges/daily", "POST", "A new challenge has been planted.", "Failed to generate a challenge. Please try again.")

    challenges = load("/challenges", "challenges")
    if challenges is not None and not challenges:
        st.info("No Challenges Yet. Generate a daily challenge to start growing your roots.")
    for challenge in sort_challenges(challenges or []):
        with st.container(border=True):
            col_text, col_done, col_delete = st.columns([4, 1, 1])
            with col_text:
                st.markdown(f"**{challenge['title']}**")
                st.caption(challenge.get("description", ""))
            with col_done:
                if challenge["completed"]:
                    st.button("Completed", key=f"ch_done_{challenge['id']}", disabled=True)
                elif st.button("Complete", key=f"ch_done_{challenge['id']}"):
                    mutate(f"/challenges/{challenge['id']}/complete", "POST", "Great job! Your roots are growing stronger.",
                           "Failed to complete challenge. Please try again.")
            with col_delete:
                if st.button("🗑️", key=f"ch_del_{challenge['id']}", help="Delete challenge"):
                    mutate(f"/challenges/{challenge['id']}", "DELETE", "Your challenge has been removed successfully.",
                           "Failed to delete challenge. Please try again.")


def sidebar() -> str:
    with st.sidebar:
        st.title("UncompliGrow")
        page = st.radio("Navigate", PAGES, label_visibility="collapsed")
        with st.expander("Recent errors"):
            for line in show_recent_errors(settings.ERROR_LOG_PATH, n=20):
                st.text(line)
    return page


def main():
    st.set_page_config(page_title="UncompliGrow", page_icon="🌳", layout="wide")
    setup_global_rotating_error_log(settings.ERROR_LOG_PATH)
    flush_toast()
    page = sidebar()
    if page == PAGE_HABITS:
        page_habits()
    elif page == PAGE_GOALS:
        page_goals()
    elif page == PAGE_CHALLENGES:
        page_challenges()
    else:
        page_tree()


if __name__ == "__main__":
    try:
        main()
    except Exception:
        logging.getLogger(__name__).exception("Fatal error in streamlit_app.py:")
        raise
