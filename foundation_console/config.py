"""
Foundation Console - Configuration Management
=============================================
Centralized configuration with environment variable support.

Usage:
    from foundation_console.config import get_settings

    api_url = get_settings().api_url
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)


DEFAULT_API_URL = "https://uba-r875.onrender.com"


@dataclass
class Settings:
    """Application settings with environment variable overrides."""

    # Backend
    api_url: str = DEFAULT_API_URL
    request_timeout_seconds: float = 30.0
    registration_source: str = "website"

    # Admin pages
    notifications_page_size: int = 50
    max_scholarship_images: int = 10

    # Account forms
    max_profile_image_bytes: int = 5 * 1024 * 1024
    min_password_length: int = 6

    # Branding
    site_name: str = "Tenenghang Foundation"

    # Feature flags
    debug_mode: bool = False

    def __post_init__(self):
        """Load overrides from environment variables."""
        self._load_env_overrides()
        self.api_url = self.api_url.rstrip("/")

    def _load_env_overrides(self):
        if api_url := os.environ.get("FOUNDATION_API_URL", "").strip():
            self.api_url = api_url
        if timeout := os.environ.get("FOUNDATION_API_TIMEOUT"):
            self.request_timeout_seconds = float(timeout)

        if page_size := os.environ.get("NOTIFICATIONS_PAGE_SIZE"):
            self.notifications_page_size = int(page_size)

        if site_name := os.environ.get("FOUNDATION_SITE_NAME"):
            self.site_name = site_name

        if os.environ.get("DEBUG", "").lower() in ("1", "true"):
            self.debug_mode = True


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
        if _settings.debug_mode:
            logger.info("Settings loaded with debug mode enabled")
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from environment."""
    global _settings
    _settings = Settings()
    return _settings


# Choice lists used by the question upload form
QUESTION_SCHOOLS = ("Coltech", "Naphpi", "Faculty of Arts", "Faculty of Science")
QUESTION_DEPARTMENTS = ("Computer Science", "Mathematics", "Physics", "Chemistry", "Biology")
QUESTION_LEVELS = ("Level 100", "Level 200", "Level 300", "Level 400")
QUESTION_SUBJECTS = ("Mathematics", "Physics", "Chemistry", "Biology", "Computer Science")

COURSE_LEVELS = ("100", "200", "300", "400", "500")

VOTING_RESTRICTIONS = {
    "all": "All users",
    "school": "Specific school",
    "department": "Specific department",
}

LIVE_SESSION_STATUS_COLORS = {
    "scheduled": "gray",
    "live": "green",
    "ended": "orange",
}

INTERNSHIP_STATUS_COLORS = {
    "Active": "green",
    "Pending Review": "orange",
    "Expired": "red",
}

# (title, description, page slug)
ADMIN_ACTIONS = (
    ("Manage Schools", "Create, edit, and manage schools in the system.", "manage-schools"),
    ("Manage Departments", "Create and manage departments within schools.", "manage-departments"),
    ("Manage Courses", "Create, edit, and manage courses with chapters and videos.", "manage-courses"),
    ("Manage Concours", "Upload and organize concours by school and department.", "manage-concours"),
    ("Manage Library", "Upload and curate PDFs for the digital library.", "manage-library"),
    ("Manage Live Sessions", "Schedule department-based live classes and chats.", "manage-live-sessions"),
    ("Manage Skills", "Create, edit, and manage skills for students to learn.", "manage-skills"),
    ("Manage Contests", "Create and manage voting contests and contestants.", "manage-contests"),
    ("Manage Notifications", "Publish announcements with a thumbnail or video.", "manage-notifications"),
    ("Upload Question", "Upload a new past question PDF for students.", "upload-question"),
    ("Upload Solution", "Provide solutions (PDF or video) for existing questions.", "upload-solution"),
    ("View Questions", "Review and manage all uploaded questions and resources.", "questions"),
    ("Manage Scholarships", "Create, edit, and publish scholarship opportunities.", "manage-scholarships"),
    ("Manage Internships", "Post and manage internships/job openings.", "manage-internships"),
)

FOUNDATION_MISSION = (
    "The Tenenghang Foundation is dedicated to upgrading the standards of living of target "
    "populations through the promotion of indigenous and self-reliant development initiatives. "
    "We focus on encouraging academic excellence and supporting vulnerable children in schools "
    "and orphanages."
)

FOUNDATION_OBJECTIVES = (
    "To promote and support academic excellence through scholarship programs for outstanding students",
    "To provide assistance and support to orphans and vulnerable children in schools and orphanages",
    "To encourage and facilitate indigenous development initiatives that improve living standards",
    "To support vulnerable populations in developing sustainable livelihoods through petit trades "
    "and subsistence activities",
    "To foster self-reliance and community development through local initiatives",
    "To create awareness and advocate for the rights and welfare of vulnerable populations",
)

FOUNDATION_HISTORY = (
    "The TENENGHANG FOUNDATION FOR INDIGENOUS DEVELOPMENT INITIATIVES is an NGO, registered in "
    "the Mezam SDO's office, in the North West Region of Cameroon, since the year 2000. Located at "
    "Cow Street, Bamenda, the foundation has been actively involved in assisting vulnerable "
    "populations and promoting academic excellence through yearly scholarship awards."
)

FOUNDATION_ACTIVITIES = (
    "Yearly scholarships for outstanding students in GCE examinations",
    "Assistance to orphans and vulnerable children in schools and orphanages",
    "Support for vulnerable populations in developing petit trades and subsistence activities",
)

FOUNDER_NAME = "Mr. Mboh Patrice Lumumba"
FOUNDER_BIO = (
    "Mr. Mboh Patrice Lumumba is the visionary founder and Executive President of the Tenenghang "
    "Foundation. With a deep commitment to community development and education, he established "
    "the foundation in 2000 with the mission of upgrading living standards through indigenous and "
    "self-reliant development initiatives."
)

MANAGEMENT_TEAM = (
    "Miss. Powoh Blandine",
    "Mr. Elvis Ndatenu",
    "Mr. Tisighe Divine",
    "Mr. Tezeh Vigil Khan",
    "Mme Tengem Sinorine",
    "Mr. Ngaliwa Eugene",
    "Mme Teneng Conscience",
    "Bar. Awah Fidelis",
)
