import streamlit as st

from todo_dashboard.auth import (
    enforce_google_login,
    get_current_user_id,
    get_display_name,
    get_secret,
    load_local_env,
    viewer_timezone,
)
from todo_dashboard.constants import APP_TITLE
from todo_dashboard.context import DashboardContext
from todo_dashboard.data.api_client import build_client
from todo_dashboard.dates import today_key
from todo_dashboard.header import render_global_header
from todo_dashboard.logging_config import configure_logging
from todo_dashboard.notifications import flush_toasts
from todo_dashboard.router import render_router
from todo_dashboard.theme import inject_theme_css

load_local_env()
configure_logging()

st.set_page_config(page_title=APP_TITLE, page_icon="✅", layout="wide")
inject_theme_css()

enforce_google_login()

client = build_client(get_secret)
if client is None:
    st.error("Backend API is not configured.")
    st.markdown("Set `API_BASE_URL` and `BACKEND_SESSION_SECRET` in your environment or Streamlit secrets.")
    st.stop()

user_id = get_current_user_id()
viewer_tz = viewer_timezone()
context = DashboardContext(
    client=client,
    user_id=user_id,
    user_name=get_display_name(user_id),
    today_key=today_key(viewer_tz),
    timezone=viewer_tz,
)

flush_toasts()
render_global_header(context)
render_router(context)
