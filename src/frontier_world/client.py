"""Async client for the EVE:Frontier World API.

This module provides the WorldAPIClient, exposing one typed method per REST
endpoint. Every request goes through the client's RequestQueue, so the
configured rate limit applies across all endpoints and all callers sharing
the client.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from pydantic import ValidationError

from frontier_world.config import ClientConfig
from frontier_world.endpoints import EndpointRequest, Format, PageWindow, build_url
from frontier_world.exceptions import MissingPayloadError
from frontier_world.models import GameType, HealthResponse
from frontier_world.pagination import Page, fetch_all, fetch_page
from frontier_world.request_queue import RequestQueue
from frontier_world.transport import (
    ParsedResponse,
    RequestDescriptor,
    Transport,
    TransportProtocol,
)

logger = logging.getLogger(__name__)


class WorldAPIClient:
    """Async client for the EVE:Frontier World API.

    Example:
        async with WorldAPIClient(ClientConfig(interval_milliseconds=100)) as client:
            if await client.health():
                types = await client.all_types()
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: TransportProtocol | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Client configuration (default: ClientConfig()).
            transport: Optional transport replacing the default httpx one.
        """
        self.config = config or ClientConfig()
        self._transport = transport or Transport(timeout=self.config.timeout)
        self.queue = RequestQueue(self._transport, self.config.queue_config())

    @property
    def base_url(self) -> str:
        return self.config.base_url

    async def __aenter__(self) -> WorldAPIClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Stop the request queue and close the transport."""
        await self.queue.close()
        if isinstance(self._transport, Transport):
            await self._transport.close()

    # =========================================================================
    # Status and configuration
    # =========================================================================

    async def health(self) -> bool:
        """Tell whether the World API is ok.

        Returns:
            True when the API answers 200 with ``ok`` set, False otherwise.
            Failures are logged, never raised.
        """
        try:
            response = await self._send(EndpointRequest("health"))
        except Exception as e:
            logger.error("could not fetch health: %s", e)
            return False

        if response.status_code != 200 or not response.has_body:
            return False
        try:
            return HealthResponse.model_validate(response.parsed_body).ok
        except ValidationError as e:
            logger.error("could not parse health: %s", e)
            return False

    async def chain_config(self) -> list[dict[str, Any]]:
        """Get the World API chain configuration."""
        return await self._get(EndpointRequest("config"))

    async def abi_config(self) -> dict[str, Any]:
        """Get the ABI configuration of the World contracts."""
        return await self._get(EndpointRequest("abis/config"))

    async def fuels(self) -> list[dict[str, Any]]:
        """Get all fuel types and their efficiency."""
        return await self._get(EndpointRequest("v2/fuels"))

    # =========================================================================
    # Types
    # =========================================================================

    async def types(self, limit: int, offset: int = 0) -> Page:
        """Get one page of game types."""
        return await self._page(EndpointRequest("v2/types", window=PageWindow(limit, offset)))

    async def all_types(self) -> list[GameType]:
        """Get all the game types.

        Returns:
            Every game type, in listing order.
        """
        items = await self._all("v2/types")
        return [GameType.model_validate(item) for item in items]

    async def game_type(self, type_id: int, format: Format = "json") -> dict[str, Any]:
        """Get a single game type."""
        _require(type_id, "id")
        return await self._get(EndpointRequest(f"v2/types/{type_id}", format=format))

    # =========================================================================
    # Killmails
    # =========================================================================

    async def killmails(self, limit: int, offset: int = 0) -> Page:
        """Get one page of killmails."""
        return await self._page(
            EndpointRequest("v2/killmails", window=PageWindow(limit, offset))
        )

    async def all_killmails(self) -> list[dict[str, Any]]:
        return await self._all("v2/killmails")

    async def killmail(self, killmail_id: int, format: Format = "json") -> dict[str, Any]:
        """Get a single killmail."""
        _require(killmail_id, "id")
        return await self._get(
            EndpointRequest(f"v2/killmails/{killmail_id}", format=format)
        )

    # =========================================================================
    # Smart assemblies and characters
    # =========================================================================

    async def smart_assemblies(self, limit: int, offset: int = 0) -> Page:
        """Get one page of smart assemblies."""
        return await self._page(
            EndpointRequest("v2/smartassemblies", window=PageWindow(limit, offset))
        )

    async def all_smart_assemblies(self) -> list[dict[str, Any]]:
        return await self._all("v2/smartassemblies")

    async def smart_characters(self, limit: int, offset: int = 0) -> Page:
        """Get one page of smart characters."""
        return await self._page(
            EndpointRequest("v2/smartcharacters", window=PageWindow(limit, offset))
        )

    async def all_smart_characters(self) -> list[dict[str, Any]]:
        return await self._all("v2/smartcharacters")

    async def smart_character(self, address: str) -> dict[str, Any]:
        """Get a single smart character by wallet address."""
        _require(address, "address")
        return await self._get(
            EndpointRequest(f"v2/smartcharacters/{quote(address, safe='')}")
        )

    # =========================================================================
    # Solar systems
    # =========================================================================

    async def solar_system(self, system_id: int, format: Format = "json") -> dict[str, Any]:
        """Get a single solar system."""
        _require(system_id, "id")
        return await self._get(
            EndpointRequest(f"v2/solarsystems/{system_id}", format=format)
        )

    # =========================================================================
    # Authenticated character data
    # =========================================================================

    async def jumps(self, bearer: str, limit: int, offset: int = 0) -> Page:
        """Get one page of the authenticated character's jumps."""
        _require(bearer, "bearer")
        return await self._page(
            EndpointRequest(
                "v2/smartcharacters/me/jumps",
                window=PageWindow(limit, offset),
                bearer=bearer,
            )
        )

    async def all_jumps(self, bearer: str) -> list[dict[str, Any]]:
        _require(bearer, "bearer")
        return await self._all("v2/smartcharacters/me/jumps", bearer=bearer)

    async def jump(
        self, bearer: str, jump_id: int, format: Format = "json"
    ) -> dict[str, Any]:
        """Get a single jump of the authenticated character."""
        _require(bearer, "bearer")
        _require(jump_id, "id")
        return await self._get(
            EndpointRequest(
                f"v2/smartcharacters/me/jumps/{jump_id}", bearer=bearer, format=format
            )
        )

    async def scans(self, bearer: str, limit: int, offset: int = 0) -> Page:
        """Get one page of the authenticated character's scans."""
        _require(bearer, "bearer")
        return await self._page(
            EndpointRequest(
                "v2/smartcharacters/me/scans",
                window=PageWindow(limit, offset),
                bearer=bearer,
            )
        )

    async def all_scans(self, bearer: str) -> list[dict[str, Any]]:
        _require(bearer, "bearer")
        return await self._all("v2/smartcharacters/me/scans", bearer=bearer)

    async def scan(
        self, bearer: str, scan_id: int, format: Format = "json"
    ) -> dict[str, Any]:
        """Get a single scan of the authenticated character."""
        _require(bearer, "bearer")
        _require(scan_id, "id")
        return await self._get(
            EndpointRequest(
                f"v2/smartcharacters/me/scans/{scan_id}", bearer=bearer, format=format
            )
        )

    # =========================================================================
    # Submissions
    # =========================================================================

    async def submit_metatransaction(self, body: dict[str, Any]) -> Any:
        """Submit a signed metatransaction.

        Returns:
            The parsed response body, or None when the server sends none.
        """
        response = await self._send(EndpointRequest("metatransaction"), body=body)
        return response.parsed_body

    async def verify_pod(self, pod: dict[str, Any]) -> dict[str, Any]:
        """Verify a POD (provable object datatype) signature."""
        response = await self._send(EndpointRequest("v2/pod/verify"), body=pod)
        return _payload(response)

    # =========================================================================
    # Internal request methods
    # =========================================================================

    async def _send(
        self, request: EndpointRequest, body: Any = None
    ) -> ParsedResponse:
        """Enqueue a GET, or a POST when ``body`` is given, and await it."""
        url = build_url(self.base_url, request)
        if body is None:
            descriptor = RequestDescriptor("GET", url, request.headers())
        else:
            descriptor = RequestDescriptor.with_json("POST", url, body, request.headers())
        return await self.queue.enqueue(descriptor)

    async def _get(self, request: EndpointRequest) -> Any:
        return _payload(await self._send(request))

    async def _page(self, request: EndpointRequest) -> Page:
        return await fetch_page(self.queue, self.base_url, request)

    async def _all(self, path: str, bearer: str | None = None) -> list[Any]:
        return await fetch_all(
            self.queue,
            self.base_url,
            path,
            page_size=self.config.page_size,
            bearer=bearer,
        )


def _require(value: Any, name: str) -> None:
    if not value:
        raise ValueError(f"{name} parameter required")


def _payload(response: ParsedResponse) -> Any:
    if not response.has_body:
        raise MissingPayloadError("response without parsed body")
    return response.parsed_body
