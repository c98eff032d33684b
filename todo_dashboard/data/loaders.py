from __future__ import annotations

import pandas as pd
import streamlit as st

from todo_dashboard.models import DailyAggregate

HISTORY_COLUMNS = ["date", "completed_tasks", "total_tasks", "pct_completed"]


@st.cache_data(ttl=120, show_spinner=False)
def load_aggregates_cached(_client, user_id, api_base):
    return _client.list_aggregates(user_id)


@st.cache_data(ttl=120, show_spinner=False)
def load_tasks_for_date_cached(_client, user_id, api_base, day_key):
    return _client.list_for_date(user_id, day_key)


def invalidate():
    load_aggregates_cached.clear()
    load_tasks_for_date_cached.clear()


def load_aggregates(client, user_id):
    return load_aggregates_cached(client, user_id, client.base_url)


def load_tasks_for_date(client, user_id, day_key):
    return load_tasks_for_date_cached(client, user_id, client.base_url, day_key)


def progress_frame(aggregates: list[DailyAggregate]) -> pd.DataFrame:
    if not aggregates:
        return pd.DataFrame(columns=HISTORY_COLUMNS)
    frame = pd.DataFrame(
        [
            {
                "date": item.date,
                "completed_tasks": item.completed_tasks,
                "total_tasks": item.total_tasks,
                "pct_completed": item.pct_completed,
            }
            for item in aggregates
        ],
        columns=HISTORY_COLUMNS,
    )
    return frame.sort_values("date", ascending=False).reset_index(drop=True)
