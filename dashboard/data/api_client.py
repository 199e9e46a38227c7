"""Thin HTTP client for the Lent backend.

Every call carries the shared backend token plus the signed-in user's email
(and display name when known). Failures of any kind surface as ``ApiError``.
"""
import logging
import os
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger(__name__)

AUTH_STATUSES = (401, 403)
DEFAULT_TIMEOUT = 10

_SECRET_GETTER = None
_USER_GETTER = None
_NAME_GETTER = None


class ApiError(RuntimeError):
    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_auth_error(self):
        return self.status_code in AUTH_STATUSES


def _build_session():
    # writes are not idempotent here, so only reads are retried
    retry = Retry(
        total=2,
        backoff_factor=0.5,
        status_forcelist=(502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
    )
    session = requests.Session()
    session.mount("http://", HTTPAdapter(max_retries=retry))
    session.mount("https://", HTTPAdapter(max_retries=retry))
    return session


_SESSION = _build_session()


def configure(secret_getter, user_getter, name_getter=None):
    global _SECRET_GETTER, _USER_GETTER, _NAME_GETTER
    _SECRET_GETTER = secret_getter
    _USER_GETTER = user_getter
    _NAME_GETTER = name_getter


def _setting(key, env_key):
    if _SECRET_GETTER is not None:
        value = _SECRET_GETTER(("app", key)) or _SECRET_GETTER((key,))
        if value:
            return str(value)
    return os.getenv(env_key, "")


def api_base_url():
    return _setting("API_BASE_URL", "API_BASE_URL").rstrip("/")


def backend_token():
    return _setting("BACKEND_SESSION_SECRET", "BACKEND_SESSION_SECRET")


def is_enabled():
    return bool(api_base_url() and backend_token())


def _auth_headers():
    token = backend_token()
    if not token:
        raise ApiError("BACKEND_SESSION_SECRET not configured")
    user_email = _USER_GETTER() if _USER_GETTER else None
    if not user_email:
        raise ApiError("No signed-in user for API request", status_code=401)
    headers = {"X-Backend-Token": token, "X-User-Email": user_email}
    user_name = _NAME_GETTER() if _NAME_GETTER else None
    if user_name:
        headers["X-User-Name"] = user_name
    return headers


def _error_detail(response):
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or response.reason
    if isinstance(payload, dict) and "detail" in payload:
        detail = payload["detail"]
        if isinstance(detail, list):
            return "; ".join(str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail)
        return str(detail)
    return str(payload)


def request(method: str, path: str, params: dict | None = None, json: dict | None = None, timeout: int = DEFAULT_TIMEOUT) -> Any:
    base = api_base_url()
    if not base:
        raise ApiError("API_BASE_URL not configured")
    headers = _auth_headers()
    try:
        response = _SESSION.request(method, f"{base}{path}", params=params, json=json, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("%s %s failed: %s", method, path, exc)
        raise ApiError(f"Backend unreachable: {exc}") from exc
    logger.debug("%s %s -> %s", method, path, response.status_code)
    if not response.ok:
        detail = _error_detail(response)
        logger.warning("%s %s returned %s: %s", method, path, response.status_code, detail)
        raise ApiError(detail, status_code=response.status_code)
    if response.status_code == 204 or not response.content:
        return None
    return response.json()
