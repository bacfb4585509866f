"""Custom exceptions for the World API client.

This module defines the exception hierarchy shared by the transport, the
request queue and the paginated aggregator.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from frontier_world.transport import RequestDescriptor


class WorldAPIError(Exception):
    """Base exception for World API client errors."""

    pass


# =============================================================================
# Transport
# =============================================================================


class TransportError(WorldAPIError):
    """Raised when a single HTTP exchange fails."""

    pass


class NetworkFailureError(TransportError):
    """Raised when the exchange could not complete (DNS, refused, aborted)."""

    def __init__(self, message: str, request: RequestDescriptor | None = None):
        super().__init__(message)
        self.request = request


class HTTPStatusError(TransportError):
    """Raised when the server answers with a non-success status code.

    Attributes:
        status_code: HTTP status returned by the server.
        parsed_body: JSON error body, or None when absent or not JSON.
        request: The request that produced the response.
    """

    def __init__(
        self,
        status_code: int,
        parsed_body: Any = None,
        request: RequestDescriptor | None = None,
        reason: str = "",
    ):
        message = f"HTTP {status_code}"
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)
        self.status_code = status_code
        self.parsed_body = parsed_body
        self.request = request


# =============================================================================
# Queue
# =============================================================================


class QueueClosedError(WorldAPIError):
    """Raised for requests that can no longer be dispatched by a closed queue."""

    pass


# =============================================================================
# Aggregation
# =============================================================================


class AggregationError(WorldAPIError):
    """Base exception for responses that break the pagination contract."""

    pass


class MissingPayloadError(AggregationError):
    """Raised when a response has no parsed body."""

    pass


class MissingDataError(AggregationError):
    """Raised when a page response lacks its items array."""

    pass


class MissingMetadataError(AggregationError):
    """Raised when a page response lacks its metadata object."""

    pass


class MissingTotalError(AggregationError):
    """Raised when page metadata lacks the total field."""

    pass


class TotalMismatchError(AggregationError):
    """Raised when the aggregated item count disagrees with the declared total."""

    def __init__(self, expected: int, received: int):
        super().__init__(
            f"paginated response declared {expected} items but returned {received}"
        )
        self.expected = expected
        self.received = received


class AggregationAbortedError(AggregationError):
    """Raised when a page after the first one fails.

    Attributes:
        offset: Offset of the page that failed.
        error: The underlying transport or aggregation error.
    """

    def __init__(self, offset: int, error: Exception):
        super().__init__(f"aggregation aborted at offset {offset}: {error}")
        self.offset = offset
        self.error = error
