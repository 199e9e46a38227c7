import html

import streamlit as st

from dashboard.header import render_notification
from lent.dates import format_day


def _widget_key(raw_value):
    return str(raw_value).replace("-", "_")


def title_html(task):
    title = html.escape(task.title)
    return f"<s>{title}</s>" if task.completed else title


def render_create_form(screen, default_day=None, key_prefix="create"):
    default_day = default_day or screen.today_provider()
    with st.form(f"{key_prefix}.form", clear_on_submit=True):
        st.markdown("<div class='small-label'>New Lent task</div>", unsafe_allow_html=True)
        title = st.text_input("Task", key=f"{key_prefix}.title", placeholder="Fast from sweets")
        description = st.text_area("Description", key=f"{key_prefix}.description")
        picked = st.date_input("Date", value=default_day, key=f"{key_prefix}.date")
        submitted = st.form_submit_button("Create task", use_container_width=True)
    if submitted:
        if screen.request_create(title, description, picked) is not None:
            st.rerun()
        render_notification(screen)


def render_task_row(screen, task, color=None, editable=False):
    accent = color or "var(--text-soft)"
    owner = "" if editable else f" · {html.escape(task.owner_name or task.owner_id)}"
    st.markdown(
        (
            f"<div class='lent-task' style='border-left-color:{accent};'>"
            f"<strong>{title_html(task)}</strong> · on {format_day(task.date)}{owner}"
            "</div>"
        ),
        unsafe_allow_html=True,
    )
    st.caption(task.description)
    if not editable:
        return

    task_key = _widget_key(task.id)
    done_key = f"lent.task.done.{task_key}"
    # the snapshot owns the value; a failed toggle snaps back on the next run
    st.session_state[done_key] = task.completed
    st.checkbox("Done", key=done_key, on_change=screen.request_toggle_complete, args=(task.id,))

    open_key = f"lent.task.open.{task_key}"
    if open_key not in st.session_state:
        st.session_state[open_key] = False

    cols = st.columns([1, 1, 4])
    with cols[0]:
        if st.button("Edit", key=f"lent.task.edit.{task_key}", type="tertiary"):
            st.session_state[open_key] = not st.session_state[open_key]
    with cols[1]:
        if st.button("Delete", key=f"lent.task.delete.{task_key}", type="tertiary"):
            st.session_state[f"lent.task.confirm.{task_key}"] = True

    if st.session_state.get(f"lent.task.confirm.{task_key}"):
        st.warning("Are you sure you want to delete this task?")
        confirm = st.columns(2)
        if confirm[0].button("Cancel", key=f"lent.task.cancel.{task_key}"):
            st.session_state[f"lent.task.confirm.{task_key}"] = False
            st.rerun()
        if confirm[1].button("Delete", key=f"lent.task.confirm_delete.{task_key}", type="primary"):
            st.session_state[f"lent.task.confirm.{task_key}"] = False
            if not screen.request_delete(task.id):
                render_notification(screen)
                return
            st.rerun()

    if st.session_state[open_key]:
        with st.form(f"lent.task.form.{task_key}"):
            title = st.text_input("Task", value=task.title, key=f"lent.task.title.{task_key}")
            description = st.text_area("Description", value=task.description, key=f"lent.task.description.{task_key}")
            picked = st.date_input("Date", value=task.date.date(), key=f"lent.task.date.{task_key}")
            saved = st.form_submit_button("Save changes")
        if saved:
            if screen.request_update(task.id, title, description, picked):
                st.session_state[open_key] = False
                st.rerun()
            render_notification(screen)
