"""
Tests for foundation_console.auth module.
"""

from unittest import mock

import pytest


@pytest.fixture
def auth(store):
    from foundation_console.auth import AuthSession

    return AuthSession(store)


@pytest.fixture
def auth_api():
    return mock.MagicMock()


def _signed_in(role="user"):
    return {"success": True, "token": "jwt-1", "user": {"_id": "u1", "name": "Ada", "role": role}}


class TestAuthSession:
    def test_signed_out_by_default(self, auth):
        """Test that a fresh session is signed out."""
        assert auth.token is None
        assert auth.user is None
        assert not auth.is_authenticated
        assert not auth.is_admin

    def test_login_success(self, auth, auth_api, store):
        """Test that a successful login stores the token and user."""
        from foundation_console.auth import TOKEN_KEY, USER_KEY
        from foundation_console.logging_config import LogContext

        auth_api.auth.login.return_value = _signed_in()

        assert auth.login(auth_api, "ada@x.cm", "secret") == (True, None)
        auth_api.auth.login.assert_called_once_with("ada@x.cm", "secret")
        assert store[TOKEN_KEY] == "jwt-1"
        assert store[USER_KEY]["name"] == "Ada"
        assert auth.is_authenticated
        assert not auth.is_admin
        assert LogContext.get("user_id") == "u1"

    def test_admin_role(self, auth, auth_api):
        """Test that the admin role is recognised."""
        auth_api.auth.login.return_value = _signed_in("admin")

        auth.login(auth_api, "admin@x.cm", "secret")

        assert auth.is_admin

    def test_login_rejected_uses_server_message(self, auth, auth_api):
        """Test that a rejected login reports the server message."""
        auth_api.auth.login.return_value = {"success": False, "message": "Invalid credentials"}

        assert auth.login(auth_api, "ada@x.cm", "bad") == (False, "Invalid credentials")
        assert not auth.is_authenticated

    def test_login_without_token_fails(self, auth, auth_api):
        """Test that a login response without a token fails."""
        auth_api.auth.login.return_value = {"success": True, "user": {"_id": "u1"}}

        assert auth.login(auth_api, "ada@x.cm", "secret") == (False, "Login failed")

    def test_login_http_error(self, auth, auth_api):
        """Test that an HTTP error reports the server message."""
        from foundation_console.exceptions import AuthenticationError

        auth_api.auth.login.side_effect = AuthenticationError(server_message="Invalid email or password")

        assert auth.login(auth_api, "ada@x.cm", "bad") == (False, "Invalid email or password")

    def test_login_http_error_without_message(self, auth, auth_api):
        """Test the fallback message for an HTTP error."""
        from foundation_console.exceptions import APIError

        auth_api.auth.login.side_effect = APIError("HTTP 500", status_code=500)

        assert auth.login(auth_api, "ada@x.cm", "x") == (False, "Login failed")

    def test_login_transport_error(self, auth, auth_api):
        """Test the generic message when the backend is unreachable."""
        from foundation_console.auth import GENERIC_FAILURE
        from foundation_console.exceptions import APIError

        auth_api.auth.login.side_effect = APIError("Could not reach the backend")

        assert auth.login(auth_api, "ada@x.cm", "x") == (False, GENERIC_FAILURE)

    def test_register(self, auth, auth_api):
        """Test a successful registration."""
        auth_api.auth.register.return_value = _signed_in()
        user_data = {"name": "Ada", "email": "ada@x.cm", "password": "secret1"}

        assert auth.register(auth_api, user_data) == (True, None)
        auth_api.auth.register.assert_called_once_with(user_data)
        assert auth.is_authenticated

    def test_register_failure_fallback(self, auth, auth_api):
        """Test the fallback message for a failed registration."""
        auth_api.auth.register.return_value = {"success": False}

        assert auth.register(auth_api, {}) == (False, "Registration failed")

    def test_logout(self, auth, auth_api, store):
        """Test that logout clears the session and log context."""
        from foundation_console.logging_config import LogContext

        auth_api.auth.login.return_value = _signed_in()
        auth.login(auth_api, "ada@x.cm", "secret")

        auth.logout()

        assert store == {}
        assert not auth.is_authenticated
        assert LogContext.get("user_id") is None

    def test_logout_when_signed_out(self, auth, store):
        """Test that logout is harmless when signed out."""
        auth.logout()

        assert store == {}

    def test_update_user(self, auth, auth_api):
        """Test replacing the cached user."""
        auth_api.auth.login.return_value = _signed_in()
        auth.login(auth_api, "ada@x.cm", "secret")

        auth.update_user({"_id": "u1", "name": "Ada L.", "role": "user"})
        auth.update_user(None)

        assert auth.user["name"] == "Ada L."
