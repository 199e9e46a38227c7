import logging

import streamlit as st

from dashboard.theme import get_active_theme, toggle_theme
from lent.errors import LentError

logger = logging.getLogger(__name__)


def _render_invite(directory):
    with st.form("lent.connections.invite", clear_on_submit=True):
        email = st.text_input("Friend's email", placeholder="friend@example.com")
        submitted = st.form_submit_button("Send request", use_container_width=True)
    if not submitted:
        return
    email = email.strip().lower()
    if not email:
        st.warning("Enter an email first.")
        return
    try:
        record = directory.request_connection(email)
    except LentError as exc:
        logger.error("Connection request to %s failed: %s", email, exc)
        st.error(f"Could not send request: {exc}")
        return
    if record.get("status") == "accepted":
        st.info("You are already connected.")
    else:
        st.success("Request sent.")


def _render_pending(screen, directory):
    try:
        pending = directory.list_pending()
    except LentError as exc:
        logger.error("Could not load pending requests: %s", exc)
        st.caption("Pending requests unavailable.")
        return
    if not pending:
        st.caption("No pending requests.")
        return
    for item in pending:
        label = item.get("requester_name") or item.get("requester_email") or item.get("requester_id")
        cols = st.columns([3, 2])
        cols[0].markdown(label)
        if cols[1].button("Accept", key=f"lent.connections.accept.{item['id']}"):
            try:
                directory.accept(item["id"])
            except LentError as exc:
                logger.error("Accepting connection %s failed: %s", item["id"], exc)
                st.error(f"Could not accept request: {exc}")
                return
            screen.refresh()
            st.rerun()


def render_sidebar(ctx):
    screen = ctx.screen
    directory = screen.connections
    with st.sidebar:
        st.markdown("<div class='small-label'>Friends</div>", unsafe_allow_html=True)
        st.caption(f"{len(screen.connection_ids)} connected")
        _render_invite(directory)
        st.markdown("<div class='small-label' style='margin-top:12px;'>Requests</div>", unsafe_allow_html=True)
        _render_pending(screen, directory)
        if st.button("Refresh", key="lent.sidebar.refresh", use_container_width=True):
            screen.refresh()
            st.rerun()
        theme_name, _ = get_active_theme()
        if st.button("Light mode" if theme_name == "dark" else "Dark mode", key="lent.sidebar.theme"):
            toggle_theme()
            st.rerun()
