"""Shared fixtures: a recording fake of the Teamhood API."""
import json
import re
from typing import Any

import httpx
import pytest

from teamhood_mcp.client import TeamhoodClient
from teamhood_mcp.config import Settings

BASE_URL = "https://teamhood.test/api/v1"
API_KEY = "test-api-key"


class FakeTeamhood:
    """Records every request and answers with canned responses.

    Responses are keyed by (method, path) where path excludes the
    ``/api/v1`` prefix and the query string.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], tuple[int, Any]] = {}
        self.default: tuple[int, Any] = (200, {"ok": True})

    def respond(self, method: str, path: str, status: int = 200, body: Any = None) -> None:
        self.routes[(method, path)] = (status, body)

    def respond_all(self, status: int = 200, body: Any = None) -> None:
        self.default = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api/v1")
        status, body = self.routes.get((request.method, path), self.default)
        if body is None:
            return httpx.Response(status)
        if isinstance(body, (str, bytes)):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_path(self) -> str:
        return self.last.url.path.removeprefix("/api/v1")

    def last_json(self) -> Any:
        return json.loads(self.last.content)


def multipart_fields(request: httpx.Request) -> dict[str, bytes]:
    """Split a multipart/form-data request body into {field name: raw bytes}."""
    content_type = request.headers["content-type"]
    boundary = content_type.split("boundary=", 1)[1].encode()
    fields = {}
    for part in request.content.split(b"--" + boundary):
        headers, sep, value = part.partition(b"\r\n\r\n")
        if not sep:
            continue
        match = re.search(rb'name="([^"]+)"', headers)
        if match:
            fields[match.group(1).decode()] = value[:-2]  # trailing CRLF
    return fields


@pytest.fixture
def fake_api():
    return FakeTeamhood()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        api_key=API_KEY,
        base_url=BASE_URL,
        timeout=5.0,
        secrets_file=str(tmp_path / "missing-secrets.yaml"),
    )


@pytest.fixture
async def client(fake_api):
    async with TeamhoodClient(API_KEY, BASE_URL, timeout=5.0, transport=fake_api.transport) as c:
        yield c
