"""
Authentication state for one browser session.

``AuthSession`` keeps the bearer token and the signed-in user in a mutable
mapping: ``st.session_state`` in the app, a plain dict in tests.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, MutableMapping
from typing import Any

from foundation_console.api.resources import FoundationAPI
from foundation_console.exceptions import APIError
from foundation_console.logging_config import LogContext, log_event

logger = logging.getLogger(__name__)

TOKEN_KEY = "_auth_token"
USER_KEY = "_auth_user"

GENERIC_FAILURE = "An error occurred. Please try again."


class AuthSession:
    def __init__(self, store: MutableMapping[str, Any]) -> None:
        self._store = store

    @property
    def token(self) -> str | None:
        return self._store.get(TOKEN_KEY)

    @property
    def user(self) -> dict[str, Any] | None:
        return self._store.get(USER_KEY)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_admin(self) -> bool:
        user = self.user or {}
        return self.is_authenticated and user.get("role") == "admin"

    def _accept(self, response: Mapping[str, Any]) -> None:
        self._store[TOKEN_KEY] = response.get("token")
        self._store[USER_KEY] = response.get("user")
        user_id = (response.get("user") or {}).get("_id")
        LogContext.set(user_id=user_id)

    def _authenticate(self, call, failure: str, event: str) -> tuple[bool, str | None]:
        try:
            response = call()
        except APIError as exc:
            logger.info("%s failed: %s", event, exc)
            if exc.status_code is None:
                return False, GENERIC_FAILURE
            return False, exc.user_message(failure)
        if not response.get("success") or not response.get("token"):
            return False, response.get("message") or failure
        self._accept(response)
        log_event(event, role=(self.user or {}).get("role"))
        return True, None

    def login(self, api: FoundationAPI, email: str, password: str) -> tuple[bool, str | None]:
        """Returns ``(True, None)`` on success, ``(False, message)`` otherwise."""
        return self._authenticate(lambda: api.auth.login(email, password), "Login failed", "login")

    def register(self, api: FoundationAPI, user_data: Mapping[str, Any]) -> tuple[bool, str | None]:
        return self._authenticate(lambda: api.auth.register(user_data), "Registration failed", "register")

    def logout(self) -> None:
        if self.is_authenticated:
            log_event("logout")
        self._store.pop(TOKEN_KEY, None)
        self._store.pop(USER_KEY, None)
        LogContext.set(user_id=None)

    def update_user(self, user: Mapping[str, Any] | None) -> None:
        if user:
            self._store[USER_KEY] = dict(user)
