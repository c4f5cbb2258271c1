"""
Reusable UI components (banners, headers, cards, delete confirmation, sidebar).
"""

from __future__ import annotations

import html
import logging
from collections.abc import Callable, Mapping
from typing import Any

import streamlit as st

from foundation_console.api import unwrap
from foundation_console.auth import AuthSession
from foundation_console.config import get_settings
from foundation_console.exceptions import FoundationConsoleError, RequestRejectedError, ValidationError
from foundation_console.ui.router import nav_routes
from foundation_console.ui.session import (
    cancel_delete,
    close_editor,
    flash,
    get_error,
    navigate,
    open_editor,
    pending_delete,
    pop_flashes,
    request_delete,
    set_error,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Messages
# =============================================================================


def render_messages(namespace: str) -> None:
    """Show queued flash messages and the page's error banner with a dismiss button."""
    for kind, message in pop_flashes():
        if kind == "error":
            st.error(message)
        else:
            st.success(message)

    error = get_error(namespace)
    if error:
        col1, col2 = st.columns([6, 1])
        with col1:
            st.error(error)
        with col2:
            if st.button("Dismiss", key=f"dismiss_{namespace}", use_container_width=True):
                set_error(namespace, None)
                st.rerun()


def run_action(namespace: str, action: Callable[[], Any], fallback: str) -> tuple[bool, Any]:
    """
    Run a backend call or form submission, turning failures into the page banner.

    Returns ``(ok, result)``.
    """
    try:
        result = action()
    except ValidationError as exc:
        set_error(namespace, exc.message)
        return False, None
    except FoundationConsoleError as exc:
        exc.log(logging.WARNING)
        set_error(namespace, exc.user_message(fallback))
        return False, None
    set_error(namespace, None)
    return True, result


def load_data(
    namespace: str,
    call: Callable[[], Mapping[str, Any]],
    *,
    rejected: str,
    failed: str,
    key: str = "data",
    default: Any = None,
) -> Any:
    """
    Fetch a list or record for rendering.

    ``rejected`` is shown when the envelope says ``success: false``,
    ``failed`` when the request itself fails.
    """
    fallback = [] if default is None else default
    try:
        return unwrap(call(), key=key, default=fallback)
    except RequestRejectedError as exc:
        logger.warning("%s: %s", namespace, exc)
        set_error(namespace, rejected)
    except FoundationConsoleError as exc:
        exc.log(logging.WARNING)
        set_error(namespace, failed)
    return fallback


# =============================================================================
# Layout
# =============================================================================


def render_hero(title: str, subtitle: str = "") -> None:
    st.markdown(
        f'<div class="hero"><h1>{html.escape(title)}</h1><p>{html.escape(subtitle)}</p></div>',
        unsafe_allow_html=True,
    )


def render_section_title(title: str) -> None:
    st.markdown(f'<h3 class="section-title">{html.escape(title)}</h3>', unsafe_allow_html=True)


def render_page_header(title: str, caption: str | None = None, action: str | None = None, *, key: str = "") -> bool:
    """Title row with an optional primary action button; returns True when it was clicked."""
    col1, col2 = st.columns([4, 1])
    with col1:
        st.title(title)
        if caption:
            st.caption(caption)
    clicked = False
    if action:
        with col2:
            st.write("")
            clicked = st.button(action, type="primary", key=f"header_{key or title}", use_container_width=True)
    return clicked


def render_back_button(label: str, page: str, *, key: str, **params: str) -> None:
    if st.button(f"← {label}", key=key):
        navigate(page, **params)


def render_empty_state(message: str) -> None:
    st.info(message)


def render_stat(label: str, value: Any) -> None:
    st.markdown(
        f'<div class="stat-card"><div class="value">{html.escape(str(value))}</div>'
        f'<div class="label">{html.escape(label)}</div></div>',
        unsafe_allow_html=True,
    )


def status_badge(label: str, color: str) -> str:
    return f":{color}[**{label}**]"


def render_image(url: str | None, *, caption: str | None = None) -> None:
    if url:
        st.image(url, caption=caption, use_container_width=True)


def render_media(kind: str | None, url: str | None) -> None:
    if not url:
        return
    if kind == "video":
        st.video(url)
    else:
        st.image(url, use_container_width=True)


# =============================================================================
# Editors
# =============================================================================


def form_buttons(submit_label: str = "Save") -> tuple[bool, bool]:
    """Save/Cancel pair; must be called inside ``st.form``."""
    col1, col2, _ = st.columns([1, 1, 3])
    with col1:
        save = st.form_submit_button(submit_label, type="primary", use_container_width=True)
    with col2:
        cancel = st.form_submit_button("Cancel", use_container_width=True)
    return save, cancel


def save_and_close(namespace: str, action: Callable[[], Any], fallback: str, success: str) -> None:
    """Submit an editor; on success close it and queue ``success``. Always reruns."""
    ok, _ = run_action(namespace, action, fallback)
    if ok:
        close_editor(namespace)
        flash(success)
    st.rerun()


def cancel_editor(namespace: str) -> None:
    close_editor(namespace)
    set_error(namespace, None)
    st.rerun()


def edit_delete_buttons(namespace: str, item: dict[str, Any], **extra: Any) -> None:
    col1, col2 = st.columns(2)
    with col1:
        if st.button("Edit", key=f"{namespace}_edit_{item['_id']}", use_container_width=True):
            open_editor(namespace, item, **extra)
            st.rerun()
    with col2:
        if st.button("Delete", key=f"{namespace}_delete_{item['_id']}", use_container_width=True):
            request_delete(namespace, item)
            st.rerun()


def select_index(options: list[Any], value: Any) -> int | None:
    """Index of ``value`` in ``options`` for a selectbox default, or None."""
    try:
        return options.index(value)
    except ValueError:
        return None


# =============================================================================
# Delete confirmation
# =============================================================================


def render_delete_confirmation(
    namespace: str,
    describe: Callable[[dict[str, Any]], str],
    on_confirm: Callable[[dict[str, Any]], Any],
    fallback: str,
) -> None:
    """Confirmation panel for the item marked with ``request_delete``."""
    item = pending_delete(namespace)
    if item is None:
        return
    with st.container(border=True):
        st.warning(f"Are you sure you want to delete {describe(item)}? This action cannot be undone.")
        col1, col2, _ = st.columns([1, 1, 4])
        with col1:
            if st.button("Delete", type="primary", key=f"confirm_delete_{namespace}"):
                run_action(namespace, lambda: on_confirm(item), fallback)
                cancel_delete(namespace)
                st.rerun()
        with col2:
            if st.button("Cancel", key=f"cancel_delete_{namespace}"):
                cancel_delete(namespace)
                st.rerun()


# =============================================================================
# Sidebar
# =============================================================================


def render_sidebar(auth: AuthSession, current: str) -> None:
    settings = get_settings()
    st.sidebar.title(settings.site_name)

    for route in nav_routes(auth):
        label = f"▸ {route.title}" if route.slug == current else route.title
        if st.sidebar.button(label, key=f"nav_{route.slug}", use_container_width=True):
            navigate(route.slug)

    st.sidebar.divider()
    if auth.is_authenticated:
        user = auth.user or {}
        st.sidebar.markdown(f"**{user.get('name', 'User')}**")
        if user.get("email"):
            st.sidebar.caption(user["email"])
        if st.sidebar.button("Logout", key="nav_logout", use_container_width=True):
            auth.logout()
            navigate("login")
    else:
        col1, col2 = st.sidebar.columns(2)
        with col1:
            if st.button("Login", key="nav_login", use_container_width=True):
                navigate("login")
        with col2:
            if st.button("Register", key="nav_register", use_container_width=True):
                navigate("register")

    with st.sidebar.expander("About", expanded=False):
        st.write(f"{settings.site_name} admin console and public site.")
        st.caption(f"Backend: {settings.api_url}")
