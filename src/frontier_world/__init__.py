"""Async client SDK for the EVE:Frontier World API.

Usage:
    from frontier_world import ClientConfig, WorldAPIClient

    async with WorldAPIClient(ClientConfig()) as client:
        healthy = await client.health()
        types = await client.all_types()
"""

from frontier_world.client import WorldAPIClient
from frontier_world.config import ClientConfig
from frontier_world.endpoints import EndpointRequest, PageWindow
from frontier_world.exceptions import (
    AggregationAbortedError,
    AggregationError,
    HTTPStatusError,
    MissingDataError,
    MissingMetadataError,
    MissingPayloadError,
    MissingTotalError,
    NetworkFailureError,
    QueueClosedError,
    TotalMismatchError,
    TransportError,
    WorldAPIError,
)
from frontier_world.models import GameType, HealthResponse
from frontier_world.pagination import Page, fetch_all, fetch_page
from frontier_world.request_queue import QueueConfig, RequestQueue
from frontier_world.transport import ParsedResponse, RequestDescriptor, Transport

__all__ = [
    "WorldAPIClient",
    "ClientConfig",
    "EndpointRequest",
    "PageWindow",
    "Page",
    "fetch_all",
    "fetch_page",
    "QueueConfig",
    "RequestQueue",
    "Transport",
    "RequestDescriptor",
    "ParsedResponse",
    "GameType",
    "HealthResponse",
    "WorldAPIError",
    "TransportError",
    "NetworkFailureError",
    "HTTPStatusError",
    "QueueClosedError",
    "AggregationError",
    "MissingPayloadError",
    "MissingDataError",
    "MissingMetadataError",
    "MissingTotalError",
    "TotalMismatchError",
    "AggregationAbortedError",
]
