import html

import streamlit as st

from todo_dashboard.data import loaders
from todo_dashboard.errors import TaskStoreError
from todo_dashboard.notifications import queue_toast, show_error
from todo_dashboard.state import session_slices


def _checkbox_key(slice_name, task):
    version = session_slices.get_value(slice_name, "toggle_version", 0)
    return f"{slice_name}.done.{task.id}.{int(task.is_completed)}.{version}"


def _request_toggle(slice_name, task):
    session_slices.set_value(slice_name, "toggle_request", task)


def process_toggle_request(ctx, slice_name):
    """Send at most one toggle per checkbox click."""
    task = session_slices.pop_value(slice_name, "toggle_request")
    if task is None:
        return
    try:
        ctx.client.toggle_completion(ctx.user_id, task.id)
    except TaskStoreError as exc:
        # fresh checkbox keys so the boxes redraw from the stored state
        version = session_slices.get_value(slice_name, "toggle_version", 0)
        session_slices.set_value(slice_name, "toggle_version", version + 1)
        show_error("update the task", exc)
        return
    loaders.invalidate()
    if task.is_completed:
        queue_toast("Task marked as incomplete", icon="↩️")
    else:
        queue_toast("Task completed! Great job.", icon="🎉")
    st.rerun()


def _save_title(ctx, slice_name, task, edited):
    clean = str(edited or "").strip()
    if not clean or clean == task.title:
        session_slices.pop_value(slice_name, "editing")
        st.rerun()
    try:
        ctx.client.rename(ctx.user_id, task.id, clean)
    except TaskStoreError as exc:
        # the edit box keeps its text for another attempt
        show_error("rename the task", exc)
        return
    session_slices.pop_value(slice_name, "editing")
    loaders.invalidate()
    queue_toast("Task updated")
    st.rerun()


def _delete(ctx, task):
    try:
        ctx.client.delete(ctx.user_id, task.id)
    except TaskStoreError as exc:
        show_error("delete the task", exc)
        return
    loaders.invalidate()
    queue_toast("Task deleted", icon="🗑️")
    st.rerun()


def render_task_row(ctx, task, slice_name, allow_toggle=True):
    editing = session_slices.get_value(slice_name, "editing") == task.id
    cols = st.columns([0.07, 0.71, 0.11, 0.11])
    cols[0].checkbox(
        "Done",
        value=task.is_completed,
        key=_checkbox_key(slice_name, task),
        label_visibility="collapsed",
        disabled=not allow_toggle,
        on_change=_request_toggle,
        args=(slice_name, task),
    )

    if editing:
        edit_key = f"{slice_name}.edit.{task.id}"
        edited = cols[1].text_input(
            "Title",
            value=task.title,
            key=edit_key,
            label_visibility="collapsed",
        )
        if cols[2].button("Save", key=f"{slice_name}.save.{task.id}", use_container_width=True):
            _save_title(ctx, slice_name, task, edited)
        if cols[3].button("Cancel", key=f"{slice_name}.cancel.{task.id}", use_container_width=True):
            session_slices.pop_value(slice_name, "editing")
            st.rerun()
        return

    css_class = "task-done" if task.is_completed else ""
    cols[1].markdown(f"<span class='{css_class}'>{html.escape(task.title)}</span>", unsafe_allow_html=True)
    if cols[2].button("Edit", key=f"{slice_name}.rename.{task.id}", use_container_width=True):
        session_slices.set_value(slice_name, "editing", task.id)
        st.rerun()
    if cols[3].button("Delete", key=f"{slice_name}.delete.{task.id}", use_container_width=True):
        _delete(ctx, task)
