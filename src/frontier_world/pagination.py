"""Paginated aggregation over the request queue.

Listing endpoints answer with bounded pages of the form::

    {"data": [...], "metadata": {"total": 250, "limit": 100, "offset": 0}}

fetch_all() walks such a listing page by page, strictly one request at a
time, and concatenates the items. Any failing page aborts the whole
aggregation; partial results are never returned.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from frontier_world.endpoints import EndpointRequest, PageWindow, build_url
from frontier_world.exceptions import (
    AggregationAbortedError,
    MissingDataError,
    MissingMetadataError,
    MissingPayloadError,
    MissingTotalError,
    QueueClosedError,
    TotalMismatchError,
    TransportError,
)
from frontier_world.request_queue import RequestQueue
from frontier_world.transport import ParsedResponse, RequestDescriptor

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


@dataclass(frozen=True)
class Page:
    """One page of a paginated listing."""

    items: list[Any]
    total: int
    limit: int
    offset: int


def parse_page(
    response: ParsedResponse,
    window: PageWindow,
    items_key: str = "data",
) -> Page:
    """Extract items and total from a page response.

    Args:
        response: Parsed response of a listing request.
        window: The window that was requested.
        items_key: Name of the items array in the response body.

    Returns:
        The Page described by the response.

    Raises:
        MissingPayloadError: If the response has no parsed body.
        MissingDataError: If the body has no items array.
        MissingMetadataError: If the body has no metadata object.
        MissingTotalError: If the metadata has no total.
    """
    body = response.parsed_body
    if not isinstance(body, Mapping):
        raise MissingPayloadError("paginated response without parsed body")

    items = body.get(items_key)
    if not isinstance(items, list):
        raise MissingDataError(f"paginated response without {items_key}")

    metadata = body.get("metadata")
    if not isinstance(metadata, Mapping):
        raise MissingMetadataError("paginated response without metadata")

    total = metadata.get("total")
    # bool is an int subclass and never a valid total
    if not isinstance(total, int) or isinstance(total, bool) or total < 0:
        raise MissingTotalError("paginated response without total")

    return Page(items=items, total=total, limit=window.limit, offset=window.offset)


async def fetch_page(
    queue: RequestQueue,
    base_url: str,
    request: EndpointRequest,
    items_key: str = "data",
) -> Page:
    """Fetch and parse the single page described by ``request.window``."""
    if request.window is None:
        raise ValueError("paginated request requires a window")

    descriptor = RequestDescriptor(
        "GET", build_url(base_url, request), request.headers()
    )
    response = await queue.enqueue(descriptor)
    return parse_page(response, request.window, items_key)


async def fetch_all(
    queue: RequestQueue,
    base_url: str,
    path: str,
    page_size: int = DEFAULT_PAGE_SIZE,
    start_offset: int = 0,
    params: Mapping[str, str] | None = None,
    bearer: str | None = None,
    items_key: str = "data",
) -> list[Any]:
    """Fetch every item of a paginated listing.

    Pages are requested sequentially at ``start_offset``, ``start_offset +
    page_size``, ... while the next offset is below the declared total.

    Args:
        queue: Queue every page request is dispatched through.
        base_url: API base URL.
        path: Listing path relative to the base URL.
        page_size: Items requested per page.
        start_offset: Offset of the first page.
        params: Extra query parameters sent with every page.
        bearer: Bearer token for authenticated listings.
        items_key: Name of the items array in each page.

    Returns:
        All items in ascending offset order.

    Raises:
        TransportError: If the first page request fails.
        AggregationError: If the first page breaks the pagination contract.
        AggregationAbortedError: If any later page fails, or the queue is
            closed before it is sent, wrapping its error.
        TotalMismatchError: If the item count disagrees with the total.
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    if start_offset < 0:
        raise ValueError("start_offset must be non-negative")

    request = EndpointRequest(
        path,
        window=PageWindow(limit=page_size, offset=start_offset),
        bearer=bearer,
        params=dict(params or {}),
    )
    results: list[Any] = []
    pages = 0

    while True:
        window = request.window
        assert window is not None
        try:
            page = await fetch_page(queue, base_url, request, items_key)
        except (TransportError, MissingPayloadError, MissingDataError,
                MissingMetadataError, MissingTotalError, QueueClosedError) as e:
            if pages == 0:
                raise
            raise AggregationAbortedError(window.offset, e) from e

        pages += 1
        results.extend(page.items)
        logger.debug(
            "Fetched %s page at offset %d: %d item(s) of %d",
            path,
            page.offset,
            len(page.items),
            page.total,
        )

        if window.offset + window.limit >= page.total:
            break
        request = request.with_window(window.next())

    expected = max(page.total - start_offset, 0)
    if len(results) != expected:
        raise TotalMismatchError(expected, len(results))

    logger.debug("Aggregated %d item(s) from %s in %d page(s)", len(results), path, pages)
    return results
