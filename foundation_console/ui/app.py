"""
Streamlit application shell: page config, logging, guards and dispatch.

Run with:
  streamlit run foundation_console/app.py
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import streamlit as st

from foundation_console.config import get_settings
from foundation_console.exceptions import FoundationConsoleError
from foundation_console.logging_config import LogContext, LogLevel, configure_logging, is_configured, log_event
from foundation_console.ui.components import render_sidebar
from foundation_console.ui.pages.academics import (
    render_course_chapters_page,
    render_courses_page,
    render_departments_page,
    render_schools_page,
    render_skill_chapters_page,
    render_skills_page,
)
from foundation_console.ui.pages.account import (
    render_change_password_page,
    render_edit_profile_page,
    render_login_page,
    render_profile_page,
    render_register_page,
)
from foundation_console.ui.pages.dashboard import render_dashboard_page
from foundation_console.ui.pages.engagement import (
    render_contestants_page,
    render_contests_page,
    render_notifications_page,
)
from foundation_console.ui.pages.opportunities import (
    render_manage_internships_page,
    render_manage_scholarships_page,
    render_upload_internship_page,
    render_upload_scholarship_page,
)
from foundation_console.ui.pages.public import (
    render_about_page,
    render_home_page,
    render_scholarship_awards_page,
    render_voting_page,
)
from foundation_console.ui.pages.resources import (
    render_concours_page,
    render_library_page,
    render_live_sessions_page,
    render_questions_page,
    render_upload_question_page,
    render_upload_solution_page,
)
from foundation_console.ui.router import resolve_route
from foundation_console.ui.session import current_page, get_auth, init_session_state
from foundation_console.ui.styles import apply_styles

logger = logging.getLogger(__name__)

PAGES: dict[str, Callable[[], None]] = {
    "home": render_home_page,
    "about": render_about_page,
    "scholarship-awards": render_scholarship_awards_page,
    "voting": render_voting_page,
    "login": render_login_page,
    "register": render_register_page,
    "profile": render_profile_page,
    "profile-edit": render_edit_profile_page,
    "profile-change-password": render_change_password_page,
    "dashboard": render_dashboard_page,
    "manage-schools": render_schools_page,
    "manage-departments": render_departments_page,
    "manage-courses": render_courses_page,
    "manage-course-chapters": render_course_chapters_page,
    "manage-skills": render_skills_page,
    "manage-skill-chapters": render_skill_chapters_page,
    "manage-concours": render_concours_page,
    "manage-library": render_library_page,
    "manage-live-sessions": render_live_sessions_page,
    "manage-contests": render_contests_page,
    "manage-contestants": render_contestants_page,
    "manage-notifications": render_notifications_page,
    "manage-scholarships": render_manage_scholarships_page,
    "upload-scholarship": render_upload_scholarship_page,
    "edit-scholarship": render_upload_scholarship_page,
    "manage-internships": render_manage_internships_page,
    "upload-internship": render_upload_internship_page,
    "questions": render_questions_page,
    "upload-question": render_upload_question_page,
    "upload-solution": render_upload_solution_page,
}


def main() -> None:
    settings = get_settings()
    st.set_page_config(
        page_title=settings.site_name,
        page_icon="🎓",
        layout="wide",
        initial_sidebar_state="expanded",
    )
    if not is_configured():
        configure_logging(level="DEBUG" if settings.debug_mode else None)

    apply_styles()
    init_session_state()

    auth = get_auth()
    requested = current_page()
    page = resolve_route(requested, auth)
    if requested and page != requested:
        logger.info("Redirecting %s -> %s", requested, page)
        st.query_params["page"] = page
    LogContext.set(page=page)
    log_event("page_view", level=LogLevel.DEBUG)

    render_sidebar(auth, page)

    try:
        PAGES[page]()
    except FoundationConsoleError as exc:
        # Pages handle their own failures; anything left is unexpected here
        exc.log(logging.ERROR)
        st.error(exc.user_message("An error occurred. Please try again."))
