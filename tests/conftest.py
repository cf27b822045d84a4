"""Pytest fixtures shared by the lark_requests tests."""

import pytest

LARK_ENV_VARS = (
    "LARK_APP_ID",
    "LARK_APP_SECRET",
    "LARK_BASE_URL",
    "LARK_CONNECT_TIMEOUT",
    "LARK_TIMEOUT",
)


@pytest.fixture(autouse=True)
def clean_lark_env(monkeypatch):
    """Keep a developer's .env / shell from leaking into the tests."""
    for name in LARK_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class FakeResponse:
    def __init__(self, status_code: int = 200, content: bytes = b""):
        self.status_code = status_code
        self.content = content


class FakeSession:
    """Stands in for requests.Session; records every call."""

    def __init__(self, response: FakeResponse = None, error: Exception = None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []
        self.closed = False

    def request(self, method, url, headers=None, data=None, timeout=None):
        self.calls.append(
            {"method": method, "url": url, "headers": headers, "data": data, "timeout": timeout}
        )
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_response():
    return FakeResponse
