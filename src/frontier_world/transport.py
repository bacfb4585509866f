"""Async HTTP transport for the World API.

This module performs single HTTP exchanges through httpx and normalizes the
outcome: a parsed response on success, or a typed TransportError on network
failure or non-success status. It never retries and never caches.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol

from httpx import AsyncClient, InvalidURL, RequestError, Response

from frontier_world.exceptions import HTTPStatusError, NetworkFailureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestDescriptor:
    """Immutable description of one outgoing HTTP request.

    Attributes:
        method: HTTP method (GET, POST, ...).
        url: Absolute request URL including query string.
        headers: Read-only request headers.
        body: Serialized request body, if any.
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.upper())
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @classmethod
    def with_json(
        cls,
        method: str,
        url: str,
        body: Any,
        headers: Mapping[str, str] | None = None,
    ) -> RequestDescriptor:
        """Build a request whose body is the JSON serialization of ``body``."""
        merged = {"Content-Type": "application/json"}
        merged.update(headers or {})
        return cls(method, url, merged, json.dumps(body).encode("utf-8"))


@dataclass
class ParsedResponse:
    """Outcome of a successful HTTP exchange.

    Attributes:
        status_code: HTTP status code (2xx).
        headers: Response headers.
        parsed_body: Decoded JSON body, or None when empty or not JSON.
    """

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    parsed_body: Any = None

    @property
    def has_body(self) -> bool:
        return self.parsed_body is not None


class TransportProtocol(Protocol):
    """Anything able to perform one request/response exchange."""

    async def send(self, request: RequestDescriptor) -> ParsedResponse:
        """Send ``request`` and return its parsed response."""
        ...


def parse_json_body(response: Response) -> Any:
    """Best-effort JSON decoding; empty or malformed bodies yield None."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return None


class Transport:
    """Performs single HTTP exchanges through an httpx.AsyncClient.

    Example:
        async with Transport(timeout=10.0) as transport:
            response = await transport.send(
                RequestDescriptor("GET", "https://example.com/health")
            )
    """

    def __init__(self, timeout: float = 30.0, client: AsyncClient | None = None):
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds for the owned client.
            client: Optional pre-built httpx client. An injected client is
                used as-is and never closed by this transport.
        """
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> Transport:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.close()

    async def connect(self) -> None:
        """Create the underlying httpx client if needed."""
        if self._client is None:
            self._client = AsyncClient(timeout=self.timeout)
            self._owns_client = True
            logger.debug("Transport connected (timeout=%.1fs)", self.timeout)

    async def close(self) -> None:
        """Close the owned httpx client and release resources."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
            logger.debug("Transport closed")

    async def send(self, request: RequestDescriptor) -> ParsedResponse:
        """Perform exactly one HTTP exchange.

        Args:
            request: Fully formed request description.

        Returns:
            ParsedResponse for any 2xx status.

        Raises:
            NetworkFailureError: If the URL is invalid or the exchange could
                not complete.
            HTTPStatusError: If the server returned a non-success status.
        """
        if self._client is None:
            await self.connect()
        assert self._client is not None

        logger.debug("Request %s %s", request.method, request.url)

        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=dict(request.headers),
                content=request.body,
            )
        except (RequestError, InvalidURL) as e:
            logger.warning("Request %s %s failed: %s", request.method, request.url, e)
            raise NetworkFailureError(f"fetch failed: {e}", request=request) from e

        parsed_body = parse_json_body(response)

        if not response.is_success:
            logger.warning(
                "API error %d for %s %s", response.status_code, request.method, request.url
            )
            raise HTTPStatusError(
                response.status_code,
                parsed_body=parsed_body,
                request=request,
                reason=response.reason_phrase,
            )

        return ParsedResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            parsed_body=parsed_body,
        )
