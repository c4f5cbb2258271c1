"""
Route table and access guards.

Pages are addressed by slug through ``st.query_params["page"]``. This module
is free of Streamlit so the guards can be tested on their own; renderers are
attached in ``foundation_console.ui.app``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from foundation_console.auth import AuthSession


class Access(str, Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ADMIN = "admin"


@dataclass(frozen=True)
class Route:
    slug: str
    title: str
    access: Access = Access.PUBLIC
    # Query parameter the page needs (e.g. the contest whose contestants are listed)
    param: str | None = None
    # Shown in the sidebar navigation
    in_nav: bool = True


HOME = "home"
LOGIN = "login"
DASHBOARD = "dashboard"

_ROUTE_LIST = (
    Route(HOME, "Home"),
    Route("about", "About"),
    Route("scholarship-awards", "Scholarship Awards"),
    Route("voting", "Voting"),
    Route(LOGIN, "Login", in_nav=False),
    Route("register", "Register", in_nav=False),
    Route("profile", "My Profile", Access.AUTHENTICATED),
    Route("profile-edit", "Edit Profile", Access.AUTHENTICATED, in_nav=False),
    Route("profile-change-password", "Change Password", Access.AUTHENTICATED, in_nav=False),
    Route(DASHBOARD, "Dashboard", Access.ADMIN),
    Route("manage-schools", "Manage Schools", Access.ADMIN),
    Route("manage-departments", "Manage Departments", Access.ADMIN),
    Route("manage-courses", "Manage Courses", Access.ADMIN),
    Route("manage-course-chapters", "Course Chapters", Access.ADMIN, param="course_id", in_nav=False),
    Route("manage-skills", "Manage Skills", Access.ADMIN),
    Route("manage-skill-chapters", "Skill Chapters", Access.ADMIN, param="skill_id", in_nav=False),
    Route("manage-concours", "Manage Concours", Access.ADMIN),
    Route("manage-library", "Manage Library", Access.ADMIN),
    Route("manage-live-sessions", "Manage Live Sessions", Access.ADMIN),
    Route("manage-contests", "Manage Contests", Access.ADMIN),
    Route("manage-contestants", "Contestants", Access.ADMIN, param="contest_id", in_nav=False),
    Route("manage-notifications", "Manage Notifications", Access.ADMIN),
    Route("manage-scholarships", "Manage Scholarships", Access.ADMIN),
    Route("upload-scholarship", "Upload Scholarship", Access.ADMIN, in_nav=False),
    Route("edit-scholarship", "Edit Scholarship", Access.ADMIN, param="scholarship_id", in_nav=False),
    Route("manage-internships", "Manage Internships", Access.ADMIN),
    Route("upload-internship", "Upload Internship", Access.ADMIN, in_nav=False),
    Route("questions", "View Questions", Access.ADMIN),
    Route("upload-question", "Upload Question", Access.ADMIN),
    Route("upload-solution", "Upload Solution", Access.ADMIN),
)

ROUTES: dict[str, Route] = {route.slug: route for route in _ROUTE_LIST}

# Pages a signed-in user is bounced away from
_GUEST_ONLY = frozenset({LOGIN, "register"})


def resolve_route(slug: str | None, auth: AuthSession) -> str:
    """
    Apply the access guards to a requested page.

    Returns the slug that should actually render:

    - unknown or missing slug -> ``home``
    - ``login``/``register`` while signed in -> ``dashboard`` for admins,
      ``home`` otherwise
    - protected page while signed out -> ``login``
    - admin page without the admin role -> ``home``
    """
    route = ROUTES.get(slug or "")
    if route is None:
        return HOME

    if route.slug in _GUEST_ONLY and auth.is_authenticated:
        return DASHBOARD if auth.is_admin else HOME

    if route.access is not Access.PUBLIC and not auth.is_authenticated:
        return LOGIN

    if route.access is Access.ADMIN and not auth.is_admin:
        return HOME

    return route.slug


def nav_routes(auth: AuthSession) -> list[Route]:
    """Sidebar entries visible to the current user."""
    visible = []
    for route in _ROUTE_LIST:
        if not route.in_nav:
            continue
        if resolve_route(route.slug, auth) == route.slug:
            visible.append(route)
    return visible
