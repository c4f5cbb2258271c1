"""
Tests for foundation_console.api.client module.

Covers:
- Request construction (base URL, bearer token, params, JSON, multipart)
- Envelope handling
- HTTP and transport errors
- 401 handling
"""

import pytest
import requests

from tests.conftest import FakeResponse, FakeSession, FakeUpload


class TestHelpers:
    def test_clean_params_drops_empty_values(self):
        """Test that None and blank query values are dropped."""
        from foundation_console.api.client import clean_params

        assert clean_params({"level": "", "year": None, "subject": "Physics", "limit": 0}) == {
            "subject": "Physics",
            "limit": 0,
        }
        assert clean_params(None) == {}

    def test_upload_file(self):
        """Test adapting an uploaded file to a requests files tuple."""
        from foundation_console.api.client import upload_file

        part = upload_file("pdf", FakeUpload("q.pdf", b"%PDF", "application/pdf"))

        assert part == ("pdf", ("q.pdf", b"%PDF", "application/pdf"))

    def test_upload_file_defaults_content_type(self):
        """Test that a missing content type falls back to octet-stream."""
        from foundation_console.api.client import upload_file

        _, (_, _, content_type) = upload_file("image", FakeUpload("x.bin", b"1"))

        assert content_type == "application/octet-stream"

    def test_multipart_parts(self):
        """Test that plain fields become bodyless multipart parts."""
        from foundation_console.api.client import multipart_parts

        parts = multipart_parts(
            {"title": "Algebra", "order": 2, "isActive": True, "skip": None},
            [("pdf", ("a.pdf", b"x", "application/pdf"))],
        )

        assert parts == [
            ("title", (None, "Algebra", None)),
            ("order", (None, "2", None)),
            ("isActive", (None, "true", None)),
            ("pdf", ("a.pdf", b"x", "application/pdf")),
        ]

    def test_unwrap(self):
        """Test unwrapping a successful envelope."""
        from foundation_console.api.client import unwrap

        assert unwrap({"success": True, "data": [1, 2]}) == [1, 2]
        assert unwrap({"success": True, "data": None}, default=[]) == []
        assert unwrap({"success": True, "token": "t"}, key="token") == "t"
        assert unwrap(None, default={}) == {}

    def test_unwrap_rejected(self):
        """Test that success false raises RequestRejectedError."""
        from foundation_console.api.client import unwrap
        from foundation_console.exceptions import RequestRejectedError

        with pytest.raises(RequestRejectedError) as exc_info:
            unwrap({"success": False, "message": "Name taken"})

        assert exc_info.value.server_message == "Name taken"


class TestApiClient:
    def test_get_builds_url_params_and_auth(self, client, fake_session):
        """Test that GET joins the base URL, query and bearer token."""
        fake_session.queue(FakeResponse(200, {"success": True, "data": []}))

        client.get("/questions", params={"subject": "Physics", "year": ""})

        call = fake_session.last
        assert call["method"] == "GET"
        assert call["url"] == "https://api.test/questions"
        assert call["params"] == {"subject": "Physics"}
        assert call["headers"] == {"Authorization": "Bearer tok-123"}
        assert call["timeout"] == 30.0

    def test_no_token_no_auth_header(self, fake_session):
        """Test that no Authorization header is sent without a token."""
        from foundation_console.api.client import ApiClient

        ApiClient("https://api.test", session=fake_session).get("/schools")

        assert fake_session.last["headers"] == {}

    def test_default_base_url_from_settings(self, fake_session):
        """Test that the base URL defaults to the configured API URL."""
        from foundation_console.api.client import ApiClient

        client = ApiClient(session=fake_session)

        assert client.base_url == "https://uba-r875.onrender.com"

    def test_post_json(self, client, fake_session):
        """Test posting a JSON body."""
        client.post("/schools", json={"name": "Coltech"})

        assert fake_session.last["json"] == {"name": "Coltech"}
        assert "files" not in fake_session.last

    def test_post_multipart_wins_over_json(self, client, fake_session):
        """Test that files take precedence over a JSON body."""
        client.post("/questions", json={"ignored": True}, files=[("year", (None, "2023", None))])

        assert fake_session.last["files"] == [("year", (None, "2023", None))]
        assert "json" not in fake_session.last

    def test_returns_envelope(self, client, fake_session):
        """Test that the decoded envelope is returned as is."""
        fake_session.queue(FakeResponse(200, {"success": True, "data": {"_id": "1"}}))

        assert client.get("/schools/1") == {"success": True, "data": {"_id": "1"}}

    def test_wraps_bare_list(self, client, fake_session):
        """Test that a bare JSON list is wrapped in an envelope."""
        fake_session.queue(FakeResponse(200, [{"_id": "1"}]))

        assert client.get("/schools") == {"success": True, "data": [{"_id": "1"}]}

    def test_empty_body(self, client, fake_session):
        """Test that an empty body decodes to an empty dict."""
        fake_session.queue(FakeResponse(204))

        assert client.delete("/schools/1") == {}

    def test_non_json_body(self, client, fake_session):
        """Test that a non-JSON body raises APIError."""
        from foundation_console.exceptions import APIError

        fake_session.queue(FakeResponse(200, text="<html>"))

        with pytest.raises(APIError) as exc_info:
            client.get("/schools")
        assert exc_info.value.status_code == 200

    def test_http_error_carries_server_message(self, client, fake_session):
        """Test that the server message is kept on HTTP errors."""
        from foundation_console.exceptions import APIError

        fake_session.queue(FakeResponse(400, {"success": False, "message": "Title is required"}))

        with pytest.raises(APIError) as exc_info:
            client.post("/library", files=[])
        exc = exc_info.value
        assert exc.status_code == 400
        assert exc.server_message == "Title is required"
        assert exc.method == "POST"
        assert exc.path == "/library"

    def test_not_found(self, client, fake_session):
        """Test that 404 maps to NotFoundError."""
        from foundation_console.exceptions import NotFoundError

        fake_session.queue(FakeResponse(404, {"message": "Scholarship not found"}))

        with pytest.raises(NotFoundError) as exc_info:
            client.get("/scholarships/x")
        assert exc_info.value.user_message() == "Scholarship not found"

    def test_transport_failure(self, client, fake_session):
        """Test that connection errors become APIError without a status."""
        from foundation_console.exceptions import APIError

        fake_session.error = requests.ConnectionError("connection refused")

        with pytest.raises(APIError) as exc_info:
            client.get("/schools")
        assert exc_info.value.status_code is None
        assert "connection refused" in exc_info.value.message

    def test_unauthorized_calls_hook_then_raises(self):
        """Test that 401 runs the unauthorized hook before raising."""
        from foundation_console.api.client import ApiClient
        from foundation_console.exceptions import AuthenticationError

        calls = []
        session = FakeSession(FakeResponse(401, {"message": "Token expired"}))
        client = ApiClient("https://api.test", on_unauthorized=lambda: calls.append("logout"), session=session)

        with pytest.raises(AuthenticationError) as exc_info:
            client.get("/auth/me")
        assert calls == ["logout"]
        assert exc_info.value.server_message == "Token expired"

    def test_sets_accept_header(self, fake_session):
        """Test that the session asks for JSON."""
        from foundation_console.api.client import ApiClient

        ApiClient("https://api.test", session=fake_session)

        assert fake_session.headers["Accept"] == "application/json"
