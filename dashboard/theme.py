import streamlit as st

THEME_STATE_KEY = "ui_theme"
DEFAULT_THEME = "dark"

THEME_PRESETS = {
    "dark": {
        "bg_main": "#1a1324",
        "bg_card": "#251b33",
        "border": "#5b4f70",
        "text_main": "#fefce8",
        "text_soft": "#d6cce4",
        "today_border": "#facc15",
        "today_bg": "rgba(250, 204, 21, 0.12)",
        "guide_bg": "rgba(253, 230, 138, 0.18)",
        "padding_bg": "rgba(255, 255, 255, 0.02)",
    },
    "light": {
        "bg_main": "#faf7f2",
        "bg_card": "#fffdf8",
        "border": "#c9b8dd",
        "text_main": "#2b2136",
        "text_soft": "#5f5370",
        "today_border": "#b45309",
        "today_bg": "rgba(180, 83, 9, 0.08)",
        "guide_bg": "rgba(202, 138, 4, 0.14)",
        "padding_bg": "rgba(0, 0, 0, 0.02)",
    },
}

CALENDAR_CSS = """
.stApp { background: var(--bg-main); color: var(--text-main); }
.section-title { font-size: 1.6rem; font-weight: 600; margin: 4px 0 12px 0; }
.small-label { font-size: 0.8rem; color: var(--text-soft); text-transform: uppercase; letter-spacing: 0.06em; }
.lent-grid { display: grid; gap: 4px; }
.lent-grid.cols-7 { grid-template-columns: repeat(7, minmax(0, 1fr)); }
.lent-grid.cols-2 { grid-template-columns: repeat(2, minmax(0, 1fr)); }
.lent-weekday { text-align: center; font-size: 0.75rem; color: var(--text-soft); padding: 2px 0; }
.lent-cell {
    background: var(--bg-card);
    border: 1px solid var(--border);
    border-radius: 8px;
    min-height: 72px;
    padding: 4px 6px;
    overflow: hidden;
}
.lent-cell.padding { background: var(--padding-bg); border-style: dashed; }
.lent-cell.today { border-color: var(--today-border); background: var(--today-bg); }
.lent-day { font-weight: 600; font-size: 0.85rem; }
.lent-guide { display: block; background: var(--guide-bg); border-radius: 6px; font-size: 0.7rem; padding: 1px 4px; margin: 2px 0; }
.lent-task {
    display: block;
    font-size: 0.72rem;
    border-left: 3px solid var(--text-soft);
    padding-left: 4px;
    margin: 2px 0;
    white-space: nowrap;
    overflow: hidden;
    text-overflow: ellipsis;
}
.lent-legend-dot { display: inline-block; width: 10px; height: 10px; border-radius: 50%; margin-right: 6px; }
"""


def get_active_theme():
    name = st.session_state.get(THEME_STATE_KEY)
    if name not in THEME_PRESETS:
        name = DEFAULT_THEME
        st.session_state[THEME_STATE_KEY] = name
    return name, THEME_PRESETS[name]


def toggle_theme():
    name, _ = get_active_theme()
    st.session_state[THEME_STATE_KEY] = "light" if name == "dark" else "dark"


def _css_variables(theme):
    lines = [f"    --{key.replace('_', '-')}: {value};" for key, value in theme.items()]
    return ":root {\n" + "\n".join(lines) + "\n}"


def inject_theme_css() -> dict:
    active_name, active_theme = get_active_theme()
    st.markdown(f"<style>\n{_css_variables(active_theme)}\n{CALENDAR_CSS}</style>", unsafe_allow_html=True)
    return {"name": active_name, "theme": active_theme}
