import logging

import streamlit as st

from todo_dashboard.errors import AuthError, NotFoundError, TransportError, ValidationError

logger = logging.getLogger(__name__)

TOAST_QUEUE_KEY = "todo.toasts"


def error_message(action, exc):
    if isinstance(exc, ValidationError):
        return f"Could not {action}: the task title can't be empty."
    if isinstance(exc, AuthError):
        return f"Could not {action}: your session has expired. Please sign in again."
    if isinstance(exc, NotFoundError):
        return f"Could not {action}: the task no longer exists. Refresh to see the latest list."
    if isinstance(exc, TransportError):
        return f"Could not {action}: the server is unreachable right now. Please try again."
    return f"Could not {action}. Please try again."


def show_error(action, exc):
    logger.warning("Failed to %s: %s", action, exc)
    if isinstance(exc, ValidationError):
        st.warning(error_message(action, exc))
    else:
        st.error(error_message(action, exc))


def queue_toast(message, icon="✅"):
    # shown on the next run, after st.rerun()
    st.session_state.setdefault(TOAST_QUEUE_KEY, []).append((message, icon))


def flush_toasts():
    for message, icon in st.session_state.pop(TOAST_QUEUE_KEY, []):
        st.toast(message, icon=icon)
