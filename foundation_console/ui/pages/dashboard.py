"""
Admin dashboard.
"""

from __future__ import annotations

import streamlit as st

from foundation_console.config import ADMIN_ACTIONS
from foundation_console.ui.components import render_messages
from foundation_console.ui.session import get_auth, navigate


def render_dashboard_page() -> None:
    user = get_auth().user or {}
    st.title("Admin Dashboard")
    st.caption(f"Welcome back, {user.get('name') or 'Admin'}. Choose an area to manage.")
    render_messages("dashboard")

    cols = st.columns(3)
    for index, (title, description, slug) in enumerate(ADMIN_ACTIONS):
        with cols[index % 3]:
            with st.container(border=True):
                st.markdown(f"#### {title}")
                st.caption(description)
                if st.button("Open", key=f"dashboard_{slug}", use_container_width=True):
                    navigate(slug)
