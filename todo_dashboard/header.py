import streamlit as st

from todo_dashboard.constants import APP_TITLE, APP_TAGLINE
from todo_dashboard.data import loaders
from todo_dashboard.state import session_slices


def render_global_header(ctx):
    st.markdown(f"<div class='page-title'>{APP_TITLE}</div>", unsafe_allow_html=True)
    st.caption(APP_TAGLINE)

    with st.sidebar:
        st.markdown(f"**Hi, {ctx.user_name}**")
        st.caption(f"Signed in as: {ctx.user_id}")
        st.caption(f"Today: {ctx.today_key}")
        if st.button("Sign out", key="logout_sidebar"):
            loaders.invalidate()
            for slice_name in ("today", "calendar"):
                session_slices.clear_slice(slice_name)
            st.logout()
