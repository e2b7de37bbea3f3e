"""Shared fixtures: a fake urllib opener standing in for the WebSim API."""

import io
import json
from typing import Any, Optional
from urllib.error import HTTPError
from urllib.parse import parse_qs, urlsplit

import pytest

from websim.client import WebSimClient
from websim.context import WebSimContext
from websim.formatting import Links
from websim_tools.dispatcher import Dispatcher
from websim_tools.registry import build_registry

API_BASE = "https://api.websim.test"
SITE_URL = "https://websim.test"


class FakeResponse:
    def __init__(self, body: bytes, read_error: Optional[BaseException] = None):
        self._body = io.BytesIO(body)
        self._read_error = read_error

    def read(self, amt: int = -1) -> bytes:
        return self.read1(amt)

    def read1(self, amt: int = -1) -> bytes:
        if self._read_error is not None:
            raise self._read_error
        return self._body.read(amt)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeOpener:
    """Records every request and answers from a path → response table.

    Unrouted paths answer 404, like the real API does for unknown ids.
    """

    def __init__(self):
        self.routes: dict[str, Any] = {}
        self.requests: list = []
        self.timeouts: list = []

    def respond(self, path: str, payload: Any = None, status: int = 200, raw: Optional[bytes] = None):
        body = raw if raw is not None else json.dumps(payload).encode("utf-8")
        self.routes[path] = (status, body)

    def fail(self, path: str, error: BaseException):
        self.routes[path] = error

    def fail_reading(self, path: str, error: BaseException):
        """Answer 200 but raise `error` once the body is read."""
        self.routes[path] = (200, b"", error)

    def __call__(self, req, timeout=None):
        self.requests.append(req)
        self.timeouts.append(timeout)
        path = urlsplit(req.full_url).path
        route = self.routes.get(path, (404, b'{"error": "Not found"}'))
        if isinstance(route, BaseException):
            raise route
        status, body, *read_error = route
        if status >= 400:
            raise HTTPError(req.full_url, status, "Error", {}, io.BytesIO(body))
        return FakeResponse(body, *read_error)

    @property
    def last(self):
        return self.requests[-1]

    def last_query(self) -> dict[str, str]:
        query = parse_qs(urlsplit(self.last.full_url).query)
        return {key: values[0] for key, values in query.items()}


@pytest.fixture()
def opener() -> FakeOpener:
    return FakeOpener()


@pytest.fixture()
def client(opener: FakeOpener) -> WebSimClient:
    return WebSimClient(API_BASE, "websim-tests/1.0", timeout_ms=5000, opener=opener)


@pytest.fixture()
def context(client: WebSimClient) -> WebSimContext:
    return WebSimContext(client=client, links=Links(SITE_URL))


@pytest.fixture()
def dispatcher(context: WebSimContext) -> Dispatcher:
    return Dispatcher(build_registry(), context)


def make_project(**overrides: Any) -> dict:
    """A project payload as the API returns it, overridable via kwargs."""
    project = {
        "id": "p_abc123",
        "title": "Pixel Garden",
        "slug": "pixel-garden",
        "description": "Grow a garden one pixel at a time",
        "owner": {"id": "u_1", "username": "sprout", "display_name": "Sprout"},
        "created_at": "2024-01-05T15:04:05Z",
        "updated_at": "2024-02-01T09:30:00Z",
        "visibility": "public",
        "tags": ["art", "garden"],
        "stats": {"views": 121757, "likes": 1132, "forks": 12},
    }
    project.update(overrides)
    return project
