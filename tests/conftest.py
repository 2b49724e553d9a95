"""Shared test fixtures and configuration."""

import json
from unittest.mock import patch

import pytest


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, text: str = "", reason: str = ""):
        self.status_code = status_code
        self.text = text
        self.reason = reason or ("OK" if status_code < 400 else "Error")


class ScriptedSession:
    """Session returning queued responses (or raising queued exceptions) in order."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, params=None, **kwargs):
        self.calls.append((method, url, dict(params or {})))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class PagedSession:
    """Session serving JSON pages by their ``page`` query parameter (1-based)."""

    def __init__(self, pages, total=None, envelope="data", fail_pages=()):
        self.pages = pages
        self.total = total
        self.envelope = envelope
        self.fail_pages = set(fail_pages)
        self.requested = []

    def request(self, method, url, params=None, **kwargs):
        page = int(params["page"])
        self.requested.append(page)
        if page in self.fail_pages:
            return FakeResponse(503, "unavailable")

        records = self.pages[page - 1] if page <= len(self.pages) else []
        payload = {self.envelope: records}
        if self.total is not None:
            payload["total"] = self.total
        return FakeResponse(200, json.dumps(payload))


@pytest.fixture(autouse=True)
def no_sleep():
    """Retries never actually wait in tests."""
    with patch("scrapers.client.time.sleep") as sleep:
        yield sleep


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def scripted_session():
    return ScriptedSession


@pytest.fixture
def paged_session():
    return PagedSession


@pytest.fixture
def raw_speaker() -> dict:
    """A speaker object shaped like the VivaTech payload."""
    return {
        "id": "spk-001",
        "firstname": "Jane",
        "lastname": "Doe",
        "email": "jane@acme.example",
        "jobTitle": "CTO",
        "company": "Acme",
        "tags": ["AI", "Cloud"],
        "themes": ["Future of Work"],
        "image": {
            "s": "https://img.example/s.jpg",
            "t": "https://img.example/t.jpg",
            "l": "https://img.example/l.jpg",
            "u": "https://img.example/u.jpg",
        },
        "hasBio": True,
        "hasSessions": False,
        "isOfficial": True,
        "isPartner": False,
        "top": True,
        "communication_manager": "press@acme.example",
    }


@pytest.fixture
def raw_partner() -> dict:
    """An exhibitor object shaped like the VivaTech payload."""
    return {
        "id": "ptn-001",
        "name": "Acme Robotics",
        "type": "startup",
        "key_figures": {"city": "Paris"},
        "desc": "Robots, for everyone.",
        "website": "https://acme.example",
        "logo": {"u": "https://img.example/acme.png"},
    }
