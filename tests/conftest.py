"""Shared fixtures and fakes for the World API client tests.

This module provides:
- FakeTransport, an in-memory transport recording every dispatched request
- PagedServer, a fake listing endpoint answering limit/offset page requests
- Helpers building a WorldAPIClient on top of httpx.MockTransport
"""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from frontier_world.client import WorldAPIClient
from frontier_world.config import ClientConfig
from frontier_world.exceptions import HTTPStatusError
from frontier_world.transport import ParsedResponse, RequestDescriptor, Transport

TEST_BASE_URL = "https://world.test"


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests requiring a live API"
    )


Handler = Callable[[RequestDescriptor], ParsedResponse]


def ok_handler(request: RequestDescriptor) -> ParsedResponse:
    return ParsedResponse(status_code=200, parsed_body={"ok": True})


class FakeTransport:
    """Transport double that records requests and answers through a handler.

    The handler may return a ParsedResponse or raise a TransportError.
    """

    def __init__(self, handler: Handler | None = None, delay: float = 0.0) -> None:
        self.handler = handler or ok_handler
        self.delay = delay
        self.requests: list[RequestDescriptor] = []
        self.in_flight = 0
        self.max_in_flight = 0

    @property
    def urls(self) -> list[str]:
        return [request.url for request in self.requests]

    async def send(self, request: RequestDescriptor) -> ParsedResponse:
        self.requests.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            else:
                await asyncio.sleep(0)
            return self.handler(request)
        finally:
            self.in_flight -= 1


class PagedServer:
    """Fake paginated listing of ``total`` items.

    Attributes:
        items: The full dataset served page by page.
        declared_total: Total reported in metadata (defaults to len(items)).
        body_overrides: Raw bodies to return instead, keyed by offset.
        errors: Status code and error body to fail with, keyed by offset.
        offsets: Offsets requested so far.
    """

    def __init__(self, total: int, declared_total: int | None = None) -> None:
        self.items = [{"id": i, "name": f"item-{i}"} for i in range(total)]
        self.declared_total = total if declared_total is None else declared_total
        self.body_overrides: dict[int, Any] = {}
        self.errors: dict[int, tuple[int, Any]] = {}
        self.offsets: list[int] = []
        self.requests: list[RequestDescriptor] = []

    def page_body(self, limit: int, offset: int) -> dict[str, Any]:
        return {
            "data": self.items[offset : offset + limit],
            "metadata": {"total": self.declared_total, "limit": limit, "offset": offset},
        }

    def __call__(self, request: RequestDescriptor) -> ParsedResponse:
        params = httpx.URL(request.url).params
        limit = int(params["limit"])
        offset = int(params["offset"])
        self.offsets.append(offset)
        self.requests.append(request)

        if offset in self.errors:
            status_code, body = self.errors[offset]
            raise HTTPStatusError(status_code, parsed_body=body, request=request)
        if offset in self.body_overrides:
            return ParsedResponse(status_code=200, parsed_body=self.body_overrides[offset])
        return ParsedResponse(status_code=200, parsed_body=self.page_body(limit, offset))


def make_http_client(
    handler: Callable[[httpx.Request], httpx.Response],
    config: ClientConfig | None = None,
) -> WorldAPIClient:
    """Build a WorldAPIClient whose HTTP traffic is answered by ``handler``."""
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    transport = Transport(client=http_client)
    return WorldAPIClient(config or ClientConfig(base_url=TEST_BASE_URL), transport=transport)


def json_response(status_code: int, body: Any) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(body).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


@pytest.fixture
def fake_transport() -> FakeTransport:
    """A FakeTransport answering every request with {"ok": true}."""
    return FakeTransport()


# Live API tests run only when a World API URL is given explicitly
LIVE_API_URL = os.environ.get("FRONTIER_WORLD_LIVE_URL", "")

requires_live_api = pytest.mark.skipif(
    not LIVE_API_URL,
    reason="Integration test requires FRONTIER_WORLD_LIVE_URL pointing at a World API",
)
