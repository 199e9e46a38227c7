"""Sign-in for the dashboard.

Google OAuth through ``st.login`` when its secrets are present. Without them
the dashboard can still run against a local backend as ``LOCAL_USER_EMAIL``.
"""
from __future__ import annotations

import os

import streamlit as st

ENV_PATH = os.path.join(os.path.dirname(__file__), "..", ".env")

# secret path -> environment variable checked first
ENV_OVERRIDES = {
    ("auth", "redirect_uri"): "AUTH_REDIRECT_URI",
    ("auth", "cookie_secret"): "AUTH_COOKIE_SECRET",
    ("auth", "google", "client_id"): "GOOGLE_CLIENT_ID",
    ("auth", "google", "client_secret"): "GOOGLE_CLIENT_SECRET",
    ("app", "API_BASE_URL"): "API_BASE_URL",
    ("app", "BACKEND_SESSION_SECRET"): "BACKEND_SESSION_SECRET",
    ("app", "local_user_email"): "LOCAL_USER_EMAIL",
}

OAUTH_SECRET_PATHS = (
    ("auth", "redirect_uri"),
    ("auth", "cookie_secret"),
    ("auth", "google", "client_id"),
    ("auth", "google", "client_secret"),
)


def _parse_env_line(raw_line):
    line = raw_line.strip()
    if not line or line.startswith("#") or "=" not in line:
        return None
    key, value = line.split("=", 1)
    return key.strip(), value.strip().strip("\"'")


def load_local_env(path=ENV_PATH):
    """Copy ``KEY=value`` pairs from a local .env into ``os.environ`` without overriding."""
    if not os.path.exists(path):
        return
    with open(path, "r", encoding="utf-8") as env_file:
        for raw_line in env_file:
            parsed = _parse_env_line(raw_line)
            if parsed and parsed[0]:
                os.environ.setdefault(*parsed)


def _from_streamlit_secrets(path):
    node = st.secrets
    for key in path:
        if key not in node:
            return None
        node = node[key]
    return node


def get_secret(path, default=None):
    path = tuple(path)
    env_key = ENV_OVERRIDES.get(path)
    if env_key and os.getenv(env_key):
        return os.getenv(env_key)
    try:
        value = _from_streamlit_secrets(path)
    except Exception:  # no secrets.toml at all
        return default
    return default if value is None else value


def auth_configured():
    return all(get_secret(path) for path in OAUTH_SECRET_PATHS)


def local_user_email():
    return str(get_secret(("app", "local_user_email")) or "").strip().lower()


def _render_gate(title, body):
    st.markdown(f"<div class='section-title'>{title}</div>", unsafe_allow_html=True)
    st.markdown(body)


def enforce_login():
    """Stop the script run until somebody is signed in."""
    if not auth_configured():
        if local_user_email():
            return
        _render_gate(
            "Login Setup Required",
            "Configure Google OAuth in Streamlit secrets, or set `LOCAL_USER_EMAIL` for local use.",
        )
        st.stop()

    if not st.user.is_logged_in:
        _render_gate("Login Required", "Sign in to see your Lent commitments and your friends'.")
        if st.button("Login with Google", key="google_login"):
            st.login("google")
        st.stop()

    with st.sidebar:
        st.caption(f"Signed in as {getattr(st.user, 'email', 'unknown')}")
        if st.button("Logout", key="logout_sidebar"):
            st.logout()


def get_current_user_email():
    if auth_configured():
        email = str(getattr(st.user, "email", "") or "").strip().lower()
        if email:
            return email
    return local_user_email()


def get_display_name():
    if auth_configured():
        name = str(getattr(st.user, "name", "") or "").strip()
        if name:
            return name
    local = get_current_user_email().split("@")[0].replace(".", " ").strip()
    return local.title() if local else ""
