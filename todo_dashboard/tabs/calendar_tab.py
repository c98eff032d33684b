from datetime import date

import streamlit as st

from todo_dashboard.data import loaders
from todo_dashboard.dates import date_key, parse_date_key
from todo_dashboard.errors import TaskStoreError
from todo_dashboard.metrics import build_progress_summary, completed_in_month
from todo_dashboard.notifications import show_error
from todo_dashboard.state import session_slices
from todo_dashboard.tabs.task_item import render_task_row
from todo_dashboard.theme import get_active_theme
from todo_dashboard.visualizations import month_last_day, month_progress_heatmap

SLICE = "calendar"


def _shift_month(year, month, delta):
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def _render_summary(summary):
    cols = st.columns(3)
    cols[0].metric("Total Completed", summary.total_completed)
    cols[1].metric("Current Streak", f"{summary.current_streak} days")
    cols[2].metric("This Month", summary.completed_this_month)


def _month_navigation(today):
    year = session_slices.get_value(SLICE, "year", today.year)
    month = session_slices.get_value(SLICE, "month", today.month)
    cols = st.columns([0.2, 0.6, 0.2])
    if cols[0].button("◀ Previous", key="calendar.prev", use_container_width=True):
        year, month = _shift_month(year, month, -1)
    at_current = (year, month) >= (today.year, today.month)
    if cols[2].button("Next ▶", key="calendar.next", use_container_width=True, disabled=at_current):
        year, month = _shift_month(year, month, 1)
    session_slices.set_value(SLICE, "year", year)
    session_slices.set_value(SLICE, "month", month)
    cols[1].markdown(
        f"<div class='section-title' style='text-align:center;'>{date(year, month, 1).strftime('%B %Y')}</div>",
        unsafe_allow_html=True,
    )
    return year, month


def _render_day_detail(ctx, selected):
    if selected is None:
        return
    day_key = date_key(selected)
    try:
        tasks = loaders.load_tasks_for_date(ctx.client, ctx.user_id, day_key)
    except TaskStoreError as exc:
        show_error("load tasks for that day", exc)
        return
    st.markdown(
        f"<div class='section-title'>Tasks on {selected.strftime('%A, %B %d, %Y')}</div>",
        unsafe_allow_html=True,
    )
    if not tasks:
        st.caption("No tasks on this day.")
        return
    for task in tasks:
        render_task_row(ctx, task, SLICE, allow_toggle=False)


def render_calendar_tab(ctx):
    try:
        aggregates = loaders.load_aggregates(ctx.client, ctx.user_id)
    except TaskStoreError as exc:
        show_error("load your progress", exc)
        return

    today = parse_date_key(ctx.today_key)
    _render_summary(build_progress_summary(aggregates, ctx.today_key))

    year, month = _month_navigation(today)
    by_date = {item.date: item for item in aggregates}
    _, theme = get_active_theme()
    fig = month_progress_heatmap(year, month, by_date, theme, today=today)
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})
    if (year, month) != (today.year, today.month):
        st.caption(f"Completed that month: {completed_in_month(aggregates, year, month)}")

    first_day = date(year, month, 1)
    last_day = min(month_last_day(first_day), today) if (year, month) == (today.year, today.month) else month_last_day(first_day)
    default_day = today if first_day <= today <= last_day else first_day
    selected = st.date_input(
        "Show tasks for",
        value=default_day,
        min_value=first_day,
        max_value=last_day,
        key=f"calendar.day.{year}-{month:02d}",
    )
    _render_day_detail(ctx, selected)

    with st.expander("History", expanded=False):
        frame = loaders.progress_frame(aggregates)
        if frame.empty:
            st.caption("No history yet.")
        else:
            st.dataframe(frame, hide_index=True, use_container_width=True)
