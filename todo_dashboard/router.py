import streamlit as st

from todo_dashboard.constants import TAB_CALENDAR, TAB_OPTIONS, TAB_TODAY
from todo_dashboard.tabs.calendar_tab import render_calendar_tab
from todo_dashboard.tabs.today_tab import render_today_tab


def render_router(ctx):
    active = st.segmented_control(
        "Workspace",
        TAB_OPTIONS,
        key="ui.active_tab",
        default=TAB_TODAY,
    )

    if active == TAB_CALENDAR:
        return _render_calendar(ctx)
    return _render_today(ctx)


@st.fragment
def _render_today(ctx):
    render_today_tab(ctx)


@st.fragment
def _render_calendar(ctx):
    render_calendar_tab(ctx)
