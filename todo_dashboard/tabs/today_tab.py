import time

import streamlit as st

from todo_dashboard.data import loaders
from todo_dashboard.errors import TaskStoreError
from todo_dashboard.metrics import day_progress
from todo_dashboard.notifications import queue_toast, show_error
from todo_dashboard.state import session_slices
from todo_dashboard.tabs.task_item import process_toggle_request, render_task_row

SLICE = "today"
DUPLICATE_SUBMIT_WINDOW = 2.0


def _new_title_key():
    return f"{SLICE}.new_title.{session_slices.get_value(SLICE, 'form_version', 0)}"


def _is_duplicate_submit(title):
    # a double-click reruns the script once per click, each with submitted=True
    last = session_slices.get_value(SLICE, "last_created")
    if not last:
        return False
    last_title, last_ts = last
    return last_title == title and (time.monotonic() - last_ts) < DUPLICATE_SUBMIT_WINDOW


def _render_progress(tasks):
    completed, total, pct = day_progress(tasks)
    st.markdown("<div class='section-title'>Today's Progress</div>", unsafe_allow_html=True)
    st.progress(pct / 100, text=f"{completed} of {total} tasks completed • {pct}%")


def _render_add_form(ctx):
    with st.form("today.add_task"):
        cols = st.columns([0.85, 0.15])
        title = cols[0].text_input(
            "New task",
            key=_new_title_key(),
            placeholder="Add a new task...",
            label_visibility="collapsed",
        )
        submitted = cols[1].form_submit_button("Add", use_container_width=True)
    if not submitted:
        return
    clean = title.strip()
    if not clean:
        st.warning("Type a task title first.")
        return
    if _is_duplicate_submit(clean):
        return
    try:
        ctx.client.create(ctx.user_id, clean, ctx.today_key)
    except TaskStoreError as exc:
        # the input keeps its text so the user can retry
        show_error("add the task", exc)
        return
    session_slices.set_value(SLICE, "last_created", (clean, time.monotonic()))
    # a new key gives an empty input on the next run
    session_slices.set_value(SLICE, "form_version", session_slices.get_value(SLICE, "form_version", 0) + 1)
    loaders.invalidate()
    queue_toast("Task added")
    st.rerun()


def render_today_tab(ctx):
    process_toggle_request(ctx, SLICE)
    try:
        tasks = loaders.load_tasks_for_date(ctx.client, ctx.user_id, ctx.today_key)
    except TaskStoreError as exc:
        show_error("load today's tasks", exc)
        return

    _render_progress(tasks)
    _render_add_form(ctx)

    st.markdown("<div class='section-title'>Today's Tasks</div>", unsafe_allow_html=True)
    if not tasks:
        st.info("No tasks for today. Add one above to get started!")
        return
    for task in tasks:
        render_task_row(ctx, task, SLICE)
