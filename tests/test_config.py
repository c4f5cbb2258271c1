"""
Tests for foundation_console.config module.

Covers:
- Settings defaults
- Environment variable overrides
- Singleton behaviour
- Constants
"""

import os
from unittest import mock


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self):
        """Test that default values are set correctly."""
        from foundation_console.config import Settings

        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings()

        assert settings.api_url == "https://uba-r875.onrender.com"
        assert settings.request_timeout_seconds == 30.0
        assert settings.registration_source == "website"
        assert settings.notifications_page_size == 50
        assert settings.max_scholarship_images == 10
        assert settings.max_profile_image_bytes == 5 * 1024 * 1024
        assert settings.min_password_length == 6
        assert settings.site_name == "Tenenghang Foundation"
        assert settings.debug_mode is False

    def test_env_override_api_url_strips_trailing_slash(self):
        """Test that the API URL override loses its trailing slash."""
        from foundation_console.config import Settings

        env = {"FOUNDATION_API_URL": "http://localhost:5000/"}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings()

        assert settings.api_url == "http://localhost:5000"

    def test_blank_api_url_keeps_default(self):
        """Test that a blank API URL keeps the default."""
        from foundation_console.config import DEFAULT_API_URL, Settings

        with mock.patch.dict(os.environ, {"FOUNDATION_API_URL": "   "}, clear=True):
            settings = Settings()

        assert settings.api_url == DEFAULT_API_URL

    def test_env_override_numbers(self):
        """Test environment variable overrides for numeric settings."""
        from foundation_console.config import Settings

        env = {"FOUNDATION_API_TIMEOUT": "5", "NOTIFICATIONS_PAGE_SIZE": "20"}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = Settings()

        assert settings.request_timeout_seconds == 5.0
        assert settings.notifications_page_size == 20

    def test_env_override_site_name(self):
        """Test environment variable override for the site name."""
        from foundation_console.config import Settings

        with mock.patch.dict(os.environ, {"FOUNDATION_SITE_NAME": "Staging Console"}, clear=True):
            settings = Settings()

        assert settings.site_name == "Staging Console"

    def test_debug_mode_from_env(self):
        """Test that debug mode is read from the environment."""
        from foundation_console.config import Settings

        for value in ("1", "true", "TRUE"):
            with mock.patch.dict(os.environ, {"DEBUG": value}, clear=True):
                assert Settings().debug_mode is True

        with mock.patch.dict(os.environ, {"DEBUG": "no"}, clear=True):
            assert Settings().debug_mode is False


class TestSingleton:
    def test_get_settings_returns_same_instance(self):
        """Test that get_settings returns the same instance."""
        from foundation_console.config import get_settings

        assert get_settings() is get_settings()

    def test_reload_settings_picks_up_env(self):
        """Test that reload_settings creates a new instance from the environment."""
        from foundation_console.config import get_settings, reload_settings

        with mock.patch.dict(os.environ, {"FOUNDATION_API_URL": "http://other"}, clear=True):
            reloaded = reload_settings()

        assert reloaded.api_url == "http://other"
        assert get_settings() is reloaded


class TestConstants:
    def test_admin_actions_point_at_admin_routes(self):
        """Test that dashboard actions point at admin pages."""
        from foundation_console.config import ADMIN_ACTIONS
        from foundation_console.ui.router import ROUTES, Access

        assert len(ADMIN_ACTIONS) == 14
        for title, description, slug in ADMIN_ACTIONS:
            assert title and description
            assert ROUTES[slug].access is Access.ADMIN

    def test_status_colours(self):
        """Test the status colour tables."""
        from foundation_console.config import INTERNSHIP_STATUS_COLORS, LIVE_SESSION_STATUS_COLORS

        assert LIVE_SESSION_STATUS_COLORS == {"scheduled": "gray", "live": "green", "ended": "orange"}
        assert INTERNSHIP_STATUS_COLORS["Expired"] == "red"

    def test_voting_restrictions(self):
        """Test the voting restriction choices."""
        from foundation_console.config import VOTING_RESTRICTIONS

        assert list(VOTING_RESTRICTIONS) == ["all", "school", "department"]
