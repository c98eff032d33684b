from __future__ import annotations

import logging
import os
from urllib.parse import urlparse

import streamlit as st

from todo_dashboard.constants import ENV_FALLBACK_KEYS
from todo_dashboard.dates import resolve_timezone

logger = logging.getLogger(__name__)

ENV_PATH = os.path.join(os.path.dirname(__file__), "..", ".env")


def load_local_env(path=ENV_PATH):
    if not os.path.exists(path):
        return
    with open(path, "r", encoding="utf-8") as env_file:
        for raw_line in env_file:
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


def get_secret(path, default=None):
    env_key = ENV_FALLBACK_KEYS.get(tuple(path))
    if env_key:
        env_value = os.getenv(env_key)
        if env_value:
            return env_value
    try:
        current = st.secrets
        for key in path:
            if key not in current:
                return default
            current = current[key]
    except FileNotFoundError:
        return default
    return current


def allowed_emails():
    raw = get_secret(("app", "allowed_emails")) or os.getenv("ALLOWED_EMAILS") or ""
    return {email.strip().lower() for email in str(raw).split(",") if email.strip()}


def auth_configured():
    return bool(
        get_secret(("auth", "redirect_uri"))
        and get_secret(("auth", "cookie_secret"))
        and get_secret(("auth", "google", "client_id"))
        and get_secret(("auth", "google", "client_secret"))
    )


def enforce_google_login():
    if not auth_configured():
        st.markdown("<div class='section-title'>Google Login Setup Required</div>", unsafe_allow_html=True)
        st.markdown("Configure Google OAuth in Streamlit secrets before using the app.")
        st.code(
            "[auth]\n"
            "redirect_uri = \"http://localhost:8501/oauth2callback\"\n"
            "cookie_secret = \"LONG_RANDOM_SECRET\"\n\n"
            "[auth.google]\n"
            "client_id = \"YOUR_CLIENT_ID\"\n"
            "client_secret = \"YOUR_CLIENT_SECRET\"\n"
            "server_metadata_url = \"https://accounts.google.com/.well-known/openid-configuration\"",
            language="toml",
        )
        st.stop()

    redirect_uri = str(get_secret(("auth", "redirect_uri")) or "").strip()
    if urlparse(redirect_uri).path != "/oauth2callback":
        st.error("Invalid auth.redirect_uri. For st.login it must end with /oauth2callback.")
        st.stop()

    if not st.user.is_logged_in:
        st.markdown("<div class='section-title'>Sign in</div>", unsafe_allow_html=True)
        st.markdown("Sign in to see your tasks and progress.")
        if st.button("Sign in with Google", key="google_login"):
            st.login("google")
        st.stop()

    user_id = get_current_user_id()
    allowed = allowed_emails()
    if allowed and user_id not in allowed:
        logger.warning("Rejected login for %s", user_id)
        st.error("Access denied for this account.")
        if st.button("Sign out", key="logout_denied"):
            st.logout()
        st.stop()


def get_current_user_id():
    return str(getattr(st.user, "email", "") or "").strip().lower()


def get_display_name(user_id):
    user_name = str(getattr(st.user, "name", "") or "").strip()
    if user_name:
        return user_name.split()[0]
    local = (user_id or "").split("@")[0].replace(".", " ").strip()
    return local.title() if local else "User"


def viewer_timezone():
    # None when the browser did not report one; callers fall back to server time
    return resolve_timezone(getattr(st.context, "timezone", None))
