import streamlit as st


PREFIX = "todo"


def _key(slice_name):
    return f"{PREFIX}.{slice_name}"


def get_slice(slice_name):
    key = _key(slice_name)
    if key not in st.session_state:
        st.session_state[key] = {}
    return st.session_state[key]


def get_value(slice_name, name, default=None):
    return get_slice(slice_name).get(name, default)


def set_value(slice_name, name, value):
    get_slice(slice_name)[name] = value


def pop_value(slice_name, name, default=None):
    return get_slice(slice_name).pop(name, default)


def clear_slice(slice_name):
    key = _key(slice_name)
    if key in st.session_state:
        del st.session_state[key]
