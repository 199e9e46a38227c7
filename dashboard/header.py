import streamlit as st

from dashboard.constants import MONTH_NAMES, VIEWPORT_LABELS
from lent.models import ViewMode, ViewportClass


def render_notification(screen):
    notification = screen.active_notification()
    if notification is None:
        return
    if notification.kind == "success":
        st.toast(notification.message)
    elif notification.transient:
        st.toast(notification.message, icon="⚠️")
    else:
        st.error(notification.message)
    screen.dismiss_notification()


def render_month_navigation(screen):
    if screen.mode != ViewMode.GRID:
        return
    cols = st.columns([1, 4, 1, 2])
    with cols[0]:
        if st.button("‹", key="lent.nav.prev", use_container_width=True):
            screen.previous_month()
            st.rerun()
    with cols[1]:
        st.markdown(
            f"<div class='section-title' style='text-align:center;'>{MONTH_NAMES[screen.month - 1]} {screen.year}</div>",
            unsafe_allow_html=True,
        )
    with cols[2]:
        if st.button("›", key="lent.nav.next", use_container_width=True):
            screen.next_month()
            st.rerun()
    with cols[3]:
        options = [ViewportClass.WIDE.value, ViewportClass.NARROW.value]
        choice = st.selectbox(
            "Layout",
            options,
            index=options.index(screen.viewport.value),
            format_func=lambda value: VIEWPORT_LABELS[value],
            key="lent.nav.viewport",
        )
        screen.set_viewport(choice)
