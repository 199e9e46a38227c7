import pandas as pd
import streamlit as st

from dashboard.constants import FILTER_LABELS, SELF_TASK_COLOR
from dashboard.tabs.task_forms import render_create_form, render_task_row
from lent.dates import format_day


def tasks_frame(tasks, colors=None):
    colors = colors or {}
    rows = [
        {
            "Date": format_day(task.date),
            "Task": task.title,
            "Description": task.description,
            "By": task.owner_name or task.owner_id,
            "Done": bool(task.completed),
            "Color": colors.get(task.owner_id, ""),
        }
        for task in tasks
    ]
    return pd.DataFrame(rows, columns=["Date", "Task", "Description", "By", "Done", "Color"])


def _render_filter(screen):
    options = list(FILTER_LABELS.keys())
    choice = st.selectbox(
        "Show",
        options,
        index=options.index(screen.task_filter.value),
        format_func=lambda value: FILTER_LABELS[value],
        key="lent.list.filter",
    )
    screen.set_task_filter(choice)


def render_list_tab(ctx):
    screen = ctx.screen
    _render_filter(screen)
    result = screen.render()
    if result is None:
        st.caption("Tasks unavailable until they load.")
        return

    layout = st.columns([1.4, 1], gap="large")
    with layout[0]:
        if screen.task_filter.value == "all":
            st.markdown("<div class='small-label'>My tasks</div>", unsafe_allow_html=True)
            if not result.own_tasks:
                st.caption("You haven't added any tasks yet.")
            for task in result.own_tasks:
                render_task_row(screen, task, color=SELF_TASK_COLOR, editable=True)

        st.markdown("<div class='small-label' style='margin-top:12px;'>Friends' tasks</div>", unsafe_allow_html=True)
        if not result.peer_tasks:
            st.caption("No tasks from friends yet.")
        else:
            st.dataframe(
                tasks_frame(result.peer_tasks, result.colors),
                hide_index=True,
                use_container_width=True,
            )
    with layout[1]:
        render_create_form(screen, key_prefix="lent.list.create")
