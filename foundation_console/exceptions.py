"""
Centralized exception hierarchy for the Foundation Console.

Form validation failures carry the banner text shown to the user; API
failures carry the HTTP status and the backend's own ``message`` field so
pages can prefer it over their generic fallback text.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

logger = logging.getLogger(__name__)


# =============================================================================
# Base Exception
# =============================================================================


class FoundationConsoleError(RuntimeError):
    """
    Base exception for all Foundation Console errors.

    Attributes:
        message: Human-readable error message.
        detail: Additional error details (optional).
        error_code: Machine-readable error code.
        request_id: Unique identifier for correlating log lines.
    """

    def __init__(
        self,
        message: str,
        *,
        detail: str | None = None,
        error_code: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.error_code = error_code or self._default_error_code()
        self.request_id = request_id or str(uuid.uuid4())

    def _default_error_code(self) -> str:
        return f"foundation_console_{self.__class__.__name__.lower()}"

    def user_message(self, fallback: str | None = None) -> str:
        """Text for an inline alert banner."""
        return self.message or fallback or "An error occurred"

    def to_dict(self) -> dict[str, Any]:
        result = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.detail:
            result["detail"] = self.detail
        if self.request_id:
            result["request_id"] = self.request_id
        return result

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message

    def log(self, level: int = logging.ERROR) -> None:
        """Log the exception with structured data."""
        logger.log(
            level,
            self.message,
            extra={
                "error_code": self.error_code,
                "detail": self.detail,
                "request_id": self.request_id,
                "exception_type": self.__class__.__name__,
            },
        )


# =============================================================================
# Form Validation Errors
# =============================================================================


class ValidationError(FoundationConsoleError):
    """Raised when a form fails client-side validation."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        detail: str | None = None,
    ) -> None:
        self.field = field
        super().__init__(message, detail=detail, error_code="validation_error")


class MissingRequiredFieldError(ValidationError):
    """Raised when one or more required form fields are empty."""

    def __init__(self, fields: list[str] | tuple[str, ...], message: str) -> None:
        self.fields = tuple(fields)
        super().__init__(message, field=self.fields[0] if self.fields else None)


class InvalidURLError(ValidationError):
    """Raised when a link field is not an absolute http(s) URL."""

    def __init__(self, url: str, message: str, *, field: str | None = None) -> None:
        super().__init__(message, field=field, detail=f"Rejected URL: {url!r}")
        self.url = url


class InvalidFileError(ValidationError):
    """Raised when an uploaded file has the wrong type or size."""

    def __init__(self, message: str, *, filename: str | None = None) -> None:
        super().__init__(message, field="file", detail=filename)
        self.filename = filename


# =============================================================================
# API Errors
# =============================================================================


class APIError(FoundationConsoleError):
    """
    Raised when the backend call fails.

    ``status_code`` is ``None`` for transport failures (DNS, timeout,
    connection reset).
    """

    def __init__(
        self,
        message: str = "Request to the backend failed",
        *,
        status_code: int | None = None,
        server_message: str | None = None,
        method: str | None = None,
        path: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.server_message = server_message
        self.method = method
        self.path = path

        detail_parts = []
        if method and path:
            detail_parts.append(f"{method} {path}")
        if status_code:
            detail_parts.append(f"Status: {status_code}")
        if server_message:
            detail_parts.append(server_message)

        super().__init__(
            message,
            detail="; ".join(detail_parts) if detail_parts else None,
            error_code="api_error",
        )

    def user_message(self, fallback: str | None = None) -> str:
        return self.server_message or fallback or self.message


class AuthenticationError(APIError):
    """Raised on HTTP 401; the session is logged out before this propagates."""

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("status_code", 401)
        super().__init__("Authentication required", **kwargs)
        self.error_code = "authentication_error"


class NotFoundError(APIError):
    """Raised on HTTP 404."""

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("status_code", 404)
        super().__init__("Resource not found", **kwargs)
        self.error_code = "not_found"


class DuplicateVoteError(APIError):
    """Raised when the user already voted in a contest."""

    def __init__(self, message: str = "You have already voted in this contest", **kwargs: Any) -> None:
        kwargs.setdefault("status_code", 409)
        super().__init__(message, **kwargs)
        self.error_code = "duplicate_vote"

    def user_message(self, fallback: str | None = None) -> str:
        return self.message


class RequestRejectedError(APIError):
    """Raised when a 2xx response carries ``success: false``."""

    def __init__(self, server_message: str | None = None, **kwargs: Any) -> None:
        super().__init__("Request rejected by the backend", server_message=server_message, **kwargs)
        self.error_code = "request_rejected"
