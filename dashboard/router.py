import streamlit as st

from dashboard.constants import LABEL_TO_MODE, MODE_LABELS
from dashboard.header import render_month_navigation, render_notification
from dashboard.tabs.calendar_tab import render_calendar_tab
from dashboard.tabs.list_tab import render_list_tab
from lent.models import ViewMode


TAB_OPTIONS = [MODE_LABELS[ViewMode.GRID.value], MODE_LABELS[ViewMode.LIST.value]]


def render_router(ctx):
    screen = ctx.screen
    render_notification(screen)

    active = st.segmented_control(
        "View",
        TAB_OPTIONS,
        key="ui.active_view",
        default=MODE_LABELS[screen.mode.value],
    )
    if active:
        screen.set_mode(LABEL_TO_MODE[active])

    render_month_navigation(screen)

    if screen.mode == ViewMode.GRID:
        return _render_calendar(ctx)
    return _render_list(ctx)


@st.fragment
def _render_calendar(ctx):
    render_calendar_tab(ctx)


@st.fragment
def _render_list(ctx):
    render_list_tab(ctx)
