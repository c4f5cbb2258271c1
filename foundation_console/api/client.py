"""
HTTP client for the foundation backend.

All pages talk to the backend through one ``ApiClient``. It attaches the
bearer token from the current session, turns HTTP failures into typed
exceptions and forces a logout on 401.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import requests

from foundation_console.config import get_settings
from foundation_console.exceptions import (
    APIError,
    AuthenticationError,
    NotFoundError,
    RequestRejectedError,
)
from foundation_console.logging_config import PerformanceTracker

logger = logging.getLogger(__name__)

# (field name, (filename, content, content type))
FilePart = tuple[str, tuple[str | None, Any, str | None]]

_STATUS_ERRORS: dict[int, type[APIError]] = {
    401: AuthenticationError,
    404: NotFoundError,
}


def _server_message(response: requests.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, Mapping):
        message = body.get("message")
        return str(message) if message else None
    return None


def clean_params(params: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop empty filters so they never reach the query string."""
    if not params:
        return {}
    return {key: value for key, value in params.items() if value not in (None, "")}


def upload_file(field: str, uploaded: Any) -> FilePart:
    """
    Adapt an uploaded file to a multipart part.

    Accepts Streamlit's ``UploadedFile`` or anything exposing ``name``,
    ``type`` and ``getvalue()``.
    """
    content_type = getattr(uploaded, "type", None) or "application/octet-stream"
    return field, (getattr(uploaded, "name", field), uploaded.getvalue(), content_type)


def multipart_parts(fields: Mapping[str, Any], files: Iterable[FilePart] = ()) -> list[FilePart]:
    """
    Build a multipart body from plain fields plus file parts.

    Plain fields are sent as filename-less parts so the request is always
    ``multipart/form-data`` even when no file was chosen.
    """
    parts: list[FilePart] = []
    for key, value in fields.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        parts.append((key, (None, str(value), None)))
    parts.extend(files)
    return parts


def unwrap(payload: Mapping[str, Any] | None, key: str = "data", default: Any = None) -> Any:
    """
    Return ``payload[key]`` from a ``{success, data, message}`` envelope.

    Raises:
        RequestRejectedError: if the envelope says ``success: false``.
    """
    if payload is None:
        return default
    if payload.get("success") is False:
        raise RequestRejectedError(payload.get("message"))
    value = payload.get(key)
    return default if value is None else value


class ApiClient:
    """
    Thin wrapper over ``requests.Session`` bound to the backend base URL.

    Args:
        base_url: Backend host; defaults to the configured API URL.
        token_provider: Returns the current bearer token or ``None``.
        on_unauthorized: Called before ``AuthenticationError`` is raised.
        timeout: Per-request timeout in seconds.
        session: Injected session (tests pass a fake).
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        token_provider: Callable[[], str | None] | None = None,
        on_unauthorized: Callable[[], None] | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self._token_provider = token_provider or (lambda: None)
        self._on_unauthorized = on_unauthorized
        self._session = session or requests.Session()
        self._session.headers.setdefault("Accept", "application/json")

    def _headers(self) -> dict[str, str]:
        token = self._token_provider()
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        json: Any = None,
        files: list[FilePart] | None = None,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        kwargs: dict[str, Any] = {"headers": self._headers(), "timeout": self.timeout}
        query = clean_params(params)
        if query:
            kwargs["params"] = query
        if files is not None:
            kwargs["files"] = files
        elif json is not None:
            kwargs["json"] = json

        try:
            with PerformanceTracker("api_request", method=method, path=path) as tracker:
                response = self._session.request(method, url, **kwargs)
                tracker.extra["status"] = response.status_code
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise APIError(f"Could not reach the backend: {exc}", method=method, path=path) from exc

        if response.status_code == 401:
            logger.info("%s %s returned 401, ending session", method, path)
            if self._on_unauthorized is not None:
                self._on_unauthorized()

        if not response.ok:
            error_cls = _STATUS_ERRORS.get(response.status_code)
            server_message = _server_message(response)
            logger.warning(
                "%s %s returned %s: %s", method, path, response.status_code, server_message or response.reason
            )
            if error_cls is not None:
                raise error_cls(server_message=server_message, method=method, path=path)
            raise APIError(
                f"Backend returned HTTP {response.status_code}",
                status_code=response.status_code,
                server_message=server_message,
                method=method,
                path=path,
            )

        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError as exc:
            raise APIError(
                "Backend returned a non-JSON response",
                status_code=response.status_code,
                method=method,
                path=path,
            ) from exc
        if not isinstance(body, dict):
            return {"success": True, "data": body}
        return body

    def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return self.request("GET", path, params=params)

    def post(self, path: str, *, json: Any = None, files: list[FilePart] | None = None) -> dict[str, Any]:
        return self.request("POST", path, json=json, files=files)

    def put(self, path: str, *, json: Any = None, files: list[FilePart] | None = None) -> dict[str, Any]:
        return self.request("PUT", path, json=json, files=files)

    def patch(self, path: str, *, json: Any = None) -> dict[str, Any]:
        return self.request("PATCH", path, json=json)

    def delete(self, path: str, *, json: Any = None) -> dict[str, Any]:
        return self.request("DELETE", path, json=json)
