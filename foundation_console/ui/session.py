"""
Session state helpers for the Streamlit UI.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

import streamlit as st

from foundation_console.api import ApiClient, FoundationAPI
from foundation_console.auth import AuthSession
from foundation_console.logging_config import LogContext, log_event

logger = logging.getLogger(__name__)


def init_session_state() -> None:
    if "_session_id" not in st.session_state:
        st.session_state["_session_id"] = str(uuid.uuid4())
    if "_flash" not in st.session_state:
        st.session_state["_flash"] = []
    if "_errors" not in st.session_state:
        st.session_state["_errors"] = {}

    user = get_auth().user or {}
    LogContext.set(session_id=get_session_id(), user_id=user.get("_id"))


def get_session_id() -> str:
    return st.session_state.get("_session_id", "default")


def get_auth() -> AuthSession:
    return AuthSession(st.session_state)


# =============================================================================
# Navigation
# =============================================================================


def current_page() -> str | None:
    return st.query_params.get("page")


def query_param(name: str) -> str | None:
    return st.query_params.get(name)


def navigate(page: str, **params: str) -> None:
    """Switch page (with optional query parameters) and rerun."""
    st.query_params.clear()
    st.query_params["page"] = page
    for key, value in params.items():
        st.query_params[key] = value
    st.rerun()


def force_logout() -> None:
    """Handle a 401 from the backend: drop the session and go to the login page."""
    auth = get_auth()
    if not auth.is_authenticated:
        # Failed sign-in attempts also answer 401
        return
    logger.info("Session expired, logging out")
    log_event("forced_logout")
    auth.logout()
    navigate("login")


def get_api() -> FoundationAPI:
    """One API bundle per browser session, bound to that session's token."""
    if "_api" not in st.session_state:
        auth = get_auth()
        client = ApiClient(token_provider=lambda: auth.token, on_unauthorized=force_logout)
        st.session_state["_api"] = FoundationAPI(client)
    return st.session_state["_api"]


# =============================================================================
# Per-page messages
# =============================================================================


def set_error(namespace: str, message: str | None) -> None:
    errors = st.session_state.setdefault("_errors", {})
    if message:
        errors[namespace] = message
    else:
        errors.pop(namespace, None)


def get_error(namespace: str) -> str | None:
    return st.session_state.get("_errors", {}).get(namespace)


def flash(message: str, kind: str = "success") -> None:
    """Queue a message shown once after the next rerun."""
    st.session_state.setdefault("_flash", []).append((kind, message))


def pop_flashes() -> list[tuple[str, str]]:
    messages = st.session_state.get("_flash", [])
    st.session_state["_flash"] = []
    return messages


# =============================================================================
# Editor / dialog state
# =============================================================================


def open_editor(namespace: str, item: dict[str, Any] | None = None, **extra: Any) -> None:
    st.session_state[f"_editor_{namespace}"] = {"item": item, **extra}


def close_editor(namespace: str) -> None:
    st.session_state.pop(f"_editor_{namespace}", None)


def editor_state(namespace: str) -> dict[str, Any] | None:
    return st.session_state.get(f"_editor_{namespace}")


def request_delete(namespace: str, item: dict[str, Any]) -> None:
    st.session_state[f"_delete_{namespace}"] = item


def pending_delete(namespace: str) -> dict[str, Any] | None:
    return st.session_state.get(f"_delete_{namespace}")


def cancel_delete(namespace: str) -> None:
    st.session_state.pop(f"_delete_{namespace}", None)
