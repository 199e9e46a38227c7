import html
from datetime import date

import streamlit as st
import streamlit.components.v1 as components

from dashboard.constants import SELF_TASK_COLOR, WEEKDAY_LABELS
from dashboard.tabs.task_forms import render_create_form, render_task_row, title_html
from lent.models import ViewportClass


def _cell_html(cell):
    if cell is None:
        return "<div class='lent-cell padding'></div>"
    classes = ["lent-cell"]
    if cell.is_today:
        classes.append("today")
    parts = [f"<div class='lent-day'>{cell.date.day}</div>"]
    if cell.guide_event is not None:
        parts.append(
            f"<span class='lent-guide' title='{html.escape(cell.guide_event.description, quote=True)}'>"
            f"{html.escape(cell.guide_event.title)}</span>"
        )
    for task in cell.own_tasks:
        parts.append(
            f"<span class='lent-task' style='border-left-color:{SELF_TASK_COLOR};'>{title_html(task)}</span>"
        )
    for task, color in cell.peer_tasks:
        parts.append(f"<span class='lent-task' style='border-left-color:{color};'>{title_html(task)}</span>")
    return f"<div class='{' '.join(classes)}' id='day-{cell.date.isoformat()}'>{''.join(parts)}</div>"


def build_month_grid_html(result):
    header = ""
    if result.viewport == ViewportClass.WIDE:
        header = "".join([f"<div class='lent-weekday'>{label}</div>" for label in WEEKDAY_LABELS])
    cells = "".join([_cell_html(cell) for cell in result.cells])
    return f"<div class='lent-grid cols-{result.columns}'>{header}{cells}</div>"


def build_legend_html(result):
    if not result.contributors:
        return ""
    items = [
        (
            "<span style='margin-right:12px;'>"
            f"<span class='lent-legend-dot' style='background:{result.colors.get(item.identity)};'></span>"
            f"{html.escape(item.display_name)}</span>"
        )
        for item in result.contributors
    ]
    return "<div class='small-label'>Friends</div>" + "".join(items)


def _scroll_to(offset):
    if offset is None:
        return
    components.html(
        f"<script>setTimeout(function(){{window.parent.scrollTo({{top: {int(offset)}, behavior: 'smooth'}});}}, 300);</script>",
        height=0,
    )


def _in_month(day, result):
    return day.month == result.month and day.year == result.year


def default_day(screen, result):
    today = screen.today_provider()
    return today if _in_month(today, result) else date(result.year, result.month, 1)


def render_calendar_tab(ctx):
    screen = ctx.screen
    result = screen.render()
    if result is None:
        st.caption("Calendar unavailable until tasks load.")
        return

    st.markdown(build_legend_html(result), unsafe_allow_html=True)
    st.markdown(build_month_grid_html(result), unsafe_allow_html=True)
    _scroll_to(result.scroll_target)

    selected = st.date_input("Day details", value=default_day(screen, result), key="lent.calendar.selected_day")

    cells = {cell.date: cell for cell in result.cells if cell is not None}
    cell = cells.get(selected)
    layout = st.columns([1.4, 1], gap="large")
    with layout[0]:
        if cell is None:
            st.caption("Pick a day inside the month shown above.")
        else:
            if cell.guide_event is not None:
                st.markdown(f"**{cell.guide_event.title}**")
                st.caption(cell.guide_event.description)
            if not cell.own_tasks and not cell.peer_tasks:
                st.caption("No tasks for this day.")
            for task in cell.own_tasks:
                render_task_row(screen, task, color=SELF_TASK_COLOR, editable=True)
            for task, color in cell.peer_tasks:
                render_task_row(screen, task, color=color)
    with layout[1]:
        render_create_form(screen, default_day=selected, key_prefix="lent.calendar.create")
