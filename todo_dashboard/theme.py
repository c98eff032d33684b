import streamlit as st

THEME_PRESETS = {
    "dark": {
        "bg_main": "#121017",
        "bg_glow": "#1f1a2a",
        "bg_card": "#1e1a27",
        "border": "#5b4f70",
        "text_main": "#f3edf9",
        "text_soft": "#c8bbd8",
        "accent": "#8e79af",
        "success": "#6fbf8e",
        "plot_grid": "#3d3550",
        "cell_empty": "#241e30",
        "today_border": "#d9c979",
    },
    "light": {
        "bg_main": "#f7f3ed",
        "bg_glow": "#eee2d3",
        "bg_card": "#fff9f1",
        "border": "#c4b59f",
        "text_main": "#1b1b1b",
        "text_soft": "#5d5d5d",
        "accent": "#8f7aa9",
        "success": "#3f9a63",
        "plot_grid": "#d9ccbb",
        "cell_empty": "#efe6d8",
        "today_border": "#b0902f",
    },
}
DEFAULT_THEME = "dark"


def ensure_theme_state():
    if st.session_state.get("ui_theme") not in THEME_PRESETS:
        st.session_state["ui_theme"] = DEFAULT_THEME
    return st.session_state["ui_theme"]


def get_active_theme():
    name = ensure_theme_state()
    return name, THEME_PRESETS[name]


def inject_theme_css():
    _, theme = get_active_theme()
    st.markdown(
        f"""
<style>
:root {{
    --bg-main: {theme['bg_main']};
    --bg-glow: {theme['bg_glow']};
    --bg-card: {theme['bg_card']};
    --border: {theme['border']};
    --text-main: {theme['text_main']};
    --text-soft: {theme['text_soft']};
    --accent: {theme['accent']};
    --success: {theme['success']};
}}

.stApp {{
    background: radial-gradient(1400px 900px at 20% 0%, var(--bg-glow) 0%, var(--bg-main) 58%);
    color: var(--text-main);
}}

.page-title {{
    font-size: 34px;
    font-weight: 600;
    margin-bottom: 0;
}}

.section-title {{
    font-size: 14px;
    font-weight: 600;
    margin: 0 0 8px 0;
}}

.small-label {{
    color: var(--text-soft);
    font-size: 12px;
    text-transform: uppercase;
    letter-spacing: 0.6px;
}}

.task-done {{
    color: var(--text-soft);
    text-decoration: line-through;
}}
</style>
""",
        unsafe_allow_html=True,
    )
    return theme
