"""
Pytest configuration and shared fixtures for foundation console tests.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List
from unittest import mock

import pytest

# Add repo root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeResponse:
    """Minimal stand-in for ``requests.Response``."""

    def __init__(self, status_code: int = 200, body: Any = None, text: str | None = None):
        self.status_code = status_code
        self._body = body
        if text is not None:
            self.content = text.encode("utf-8")
        elif body is None:
            self.content = b""
        else:
            self.content = json.dumps(body).encode("utf-8")
        self.reason = "OK" if self.ok else "Error"

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if not self.content:
            raise ValueError("No JSON body")
        return json.loads(self.content)


class FakeSession:
    """Records requests and answers them from a queue of ``FakeResponse``."""

    def __init__(self, *responses: FakeResponse):
        self.headers: Dict[str, str] = {}
        self.calls: List[Dict[str, Any]] = []
        self._responses = list(responses)
        self.error: Exception | None = None

    def queue(self, *responses: FakeResponse) -> None:
        self._responses.extend(responses)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        if self._responses:
            return self._responses.pop(0)
        return FakeResponse(200, {"success": True, "data": []})

    @property
    def last(self) -> Dict[str, Any]:
        return self.calls[-1]


class FakeUpload:
    """Quacks like Streamlit's ``UploadedFile``."""

    def __init__(self, name: str, content: bytes = b"data", type: str | None = None):
        self.name = name
        self.type = type
        self._content = content
        self.size = len(content)

    def getvalue(self) -> bytes:
        return self._content


@pytest.fixture(autouse=True)
def clean_settings():
    """Each test starts from default settings and an empty log context."""
    from foundation_console.config import reload_settings
    from foundation_console.logging_config import LogContext

    with mock.patch.dict(os.environ, {}, clear=True):
        reload_settings()
        LogContext.clear()
        yield
    reload_settings()
    LogContext.clear()


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(fake_session):
    from foundation_console.api.client import ApiClient

    return ApiClient("https://api.test", token_provider=lambda: "tok-123", session=fake_session)


@pytest.fixture
def api(client):
    from foundation_console.api.resources import FoundationAPI

    return FoundationAPI(client)


@pytest.fixture
def store() -> Dict[str, Any]:
    """Plain dict standing in for ``st.session_state``."""
    return {}


@pytest.fixture
def image_file() -> FakeUpload:
    return FakeUpload("photo.png", b"\x89PNG....", "image/png")


@pytest.fixture
def pdf_file() -> FakeUpload:
    return FakeUpload("paper.pdf", b"%PDF-1.4", "application/pdf")


@pytest.fixture
def sample_contests() -> List[Dict[str, Any]]:
    return [
        {"_id": "c1", "name": "Best Student 2024", "isActive": False},
        {"_id": "c2", "name": "Miss Campus", "isActive": True},
        {"_id": "c3", "name": "Best Lecturer", "isActive": True},
    ]


@pytest.fixture
def sample_contestants() -> List[Dict[str, Any]]:
    return [
        {"_id": "p1", "name": "Alice", "votes": 10},
        {"_id": "p2", "name": "Bob", "votes": 4},
    ]


@pytest.fixture
def sample_scholarships() -> List[Dict[str, Any]]:
    return [
        {
            "_id": "s1",
            "organizationName": "Global Tech Foundation",
            "location": "Worldwide",
            "description": "Full tuition for computer science students.",
            "deadline": "2025-03-01T00:00:00.000Z",
        },
        {
            "_id": "s2",
            "organizationName": "Green Earth Fellowship",
            "location": "Africa",
            "description": "Funding for sustainable energy research.",
            "deadline": "2024-11-01T00:00:00.000Z",
        },
        {
            "_id": "s3",
            "organizationName": "Arts Academy",
            "location": "Europe",
            "description": "Masters scholarships in fine arts.",
            "deadline": "2025-01-15T00:00:00.000Z",
        },
        {
            "_id": "s4",
            "organizationName": "Open Grant",
            "location": "Cameroon",
            "description": "Rolling admission.",
        },
    ]
