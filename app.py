import html

import streamlit as st

from dashboard.auth import (
    enforce_login,
    get_current_user_email,
    get_display_name,
    get_secret,
    load_local_env,
)
from dashboard.constants import SCREEN_STATE_KEY
from dashboard.context import DashboardContext
from dashboard.data import api_client
from dashboard.data.repositories import ApiConnectionDirectory, ApiIdentitySession, ApiTaskStore
from dashboard.logging_config import configure_logging
from dashboard.router import render_router
from dashboard.sidebar import render_sidebar
from dashboard.theme import inject_theme_css
from lent.screen import CalendarScreen

load_local_env()
configure_logging()

st.set_page_config(page_title="Lent Tracker", layout="wide")
inject_theme_css()
enforce_login()

api_client.configure(get_secret, get_current_user_email, get_display_name)
if not api_client.is_enabled():
    st.error("Backend API is not configured. Set API_BASE_URL and BACKEND_SESSION_SECRET.")
    st.stop()


def _get_screen(user_email):
    screen = st.session_state.get(SCREEN_STATE_KEY)
    if screen is not None and st.session_state.get(f"{SCREEN_STATE_KEY}.owner") == user_email:
        return screen
    if screen is not None:
        screen.close()
    screen = CalendarScreen(ApiTaskStore(), ApiConnectionDirectory(), ApiIdentitySession())
    screen.load()
    st.session_state[SCREEN_STATE_KEY] = screen
    st.session_state[f"{SCREEN_STATE_KEY}.owner"] = user_email
    return screen


current_user_email = get_current_user_email()
current_user_name = get_display_name()
screen = _get_screen(current_user_email)

if screen.blocking_error:
    st.error(screen.blocking_error)
    st.session_state.pop(SCREEN_STATE_KEY, None)
    st.stop()

st.markdown(
    f"<div class='small-label' style='margin-bottom:10px;'>Welcome, <strong>{html.escape(current_user_name)}</strong>.</div>",
    unsafe_allow_html=True,
)

context = DashboardContext(screen=screen, user_email=current_user_email, user_name=current_user_name)
render_sidebar(context)
render_router(context)
