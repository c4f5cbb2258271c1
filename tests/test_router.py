"""
Tests for foundation_console.ui.router module and the page table.
"""

import pytest


def _auth(role=None):
    from foundation_console.auth import TOKEN_KEY, USER_KEY, AuthSession

    store = {}
    if role is not None:
        store[TOKEN_KEY] = "jwt"
        store[USER_KEY] = {"_id": "u1", "name": "Ada", "role": role}
    return AuthSession(store)


class TestResolveRoute:
    @pytest.mark.parametrize("slug", [None, "", "nope", "admin"])
    def test_unknown_goes_home(self, slug):
        """Test that unknown pages resolve to home."""
        from foundation_console.ui.router import resolve_route

        assert resolve_route(slug, _auth()) == "home"

    @pytest.mark.parametrize("slug", ["home", "about", "scholarship-awards", "voting", "login", "register"])
    def test_public_pages_for_guests(self, slug):
        """Test that guests reach public pages."""
        from foundation_console.ui.router import resolve_route

        assert resolve_route(slug, _auth()) == slug

    @pytest.mark.parametrize("slug", ["profile", "profile-edit", "dashboard", "manage-schools", "upload-question"])
    def test_protected_pages_redirect_guests_to_login(self, slug):
        """Test that guests are sent to login from protected pages."""
        from foundation_console.ui.router import resolve_route

        assert resolve_route(slug, _auth()) == "login"

    def test_signed_in_user_leaves_login(self):
        """Test where signed-in users go from login and register."""
        from foundation_console.ui.router import resolve_route

        assert resolve_route("login", _auth("user")) == "home"
        assert resolve_route("register", _auth("user")) == "home"
        assert resolve_route("login", _auth("admin")) == "dashboard"

    def test_non_admin_kept_out_of_admin_pages(self):
        """Test that non-admins are kept out of admin pages."""
        from foundation_console.ui.router import resolve_route

        assert resolve_route("manage-contests", _auth("user")) == "home"
        assert resolve_route("profile", _auth("user")) == "profile"

    def test_admin_reaches_admin_pages(self):
        """Test that admins reach admin pages."""
        from foundation_console.ui.router import resolve_route

        assert resolve_route("manage-contestants", _auth("admin")) == "manage-contestants"
        assert resolve_route("edit-scholarship", _auth("admin")) == "edit-scholarship"


class TestNavigation:
    def test_guest_nav(self):
        """Test the guest navigation."""
        from foundation_console.ui.router import nav_routes

        assert [r.slug for r in nav_routes(_auth())] == ["home", "about", "scholarship-awards", "voting"]

    def test_user_nav_adds_profile(self):
        """Test that signed-in users see their profile."""
        from foundation_console.ui.router import nav_routes

        slugs = [r.slug for r in nav_routes(_auth("user"))]

        assert "profile" in slugs
        assert "dashboard" not in slugs

    def test_admin_nav_hides_parameterised_pages(self):
        """Test that pages needing a parameter stay out of the menu."""
        from foundation_console.ui.router import ROUTES, nav_routes

        slugs = {r.slug for r in nav_routes(_auth("admin"))}

        assert "dashboard" in slugs
        assert "manage-internships" in slugs
        for route in ROUTES.values():
            if route.param:
                assert route.slug not in slugs


class TestPageTable:
    def test_every_route_has_a_renderer(self):
        """Test that every route has a page renderer."""
        from foundation_console.ui.app import PAGES
        from foundation_console.ui.router import ROUTES

        assert set(PAGES) == set(ROUTES)
        assert all(callable(renderer) for renderer in PAGES.values())
