"""Unit tests for paginated aggregation.

Tests cover:
- Concatenation of pages up to the declared total
- Distinct errors for malformed pages
- Abort semantics for failures on later pages
- Sequential page requests
"""

import asyncio

import httpx
import pytest

from frontier_world.endpoints import PageWindow
from frontier_world.exceptions import (
    AggregationAbortedError,
    HTTPStatusError,
    MissingDataError,
    MissingMetadataError,
    MissingPayloadError,
    MissingTotalError,
    QueueClosedError,
    TotalMismatchError,
)
from frontier_world.pagination import fetch_all, parse_page
from frontier_world.request_queue import QueueConfig, RequestQueue
from frontier_world.transport import ParsedResponse
from tests.conftest import TEST_BASE_URL, FakeTransport, PagedServer


def queue_for(server: PagedServer) -> RequestQueue:
    return RequestQueue(FakeTransport(server))


class TestParsePage:
    """Tests for parse_page()."""

    def test_valid_page(self) -> None:
        response = ParsedResponse(
            200, parsed_body={"data": [{"id": 1}], "metadata": {"total": 1}}
        )

        page = parse_page(response, PageWindow(limit=10, offset=0))

        assert page.items == [{"id": 1}]
        assert page.total == 1
        assert page.limit == 10
        assert page.offset == 0

    def test_custom_items_key(self) -> None:
        response = ParsedResponse(
            200, parsed_body={"scans": [], "metadata": {"total": 0}}
        )

        page = parse_page(response, PageWindow(limit=10), items_key="scans")

        assert page.items == []

    @pytest.mark.parametrize(
        ("body", "error"),
        [
            (None, MissingPayloadError),
            ([1, 2], MissingPayloadError),
            ({"metadata": {"total": 1}}, MissingDataError),
            ({"data": {"id": 1}, "metadata": {"total": 1}}, MissingDataError),
            ({"data": []}, MissingMetadataError),
            ({"data": [], "metadata": {}}, MissingTotalError),
            ({"data": [], "metadata": {"total": True}}, MissingTotalError),
            ({"data": [], "metadata": {"total": -1}}, MissingTotalError),
        ],
    )
    def test_malformed_pages(self, body: object, error: type[Exception]) -> None:
        with pytest.raises(error):
            parse_page(ParsedResponse(200, parsed_body=body), PageWindow(limit=10))


class TestFetchAll:
    """Tests for fetch_all()."""

    @pytest.mark.asyncio
    async def test_three_pages_concatenated_in_order(self) -> None:
        server = PagedServer(total=250)

        items = await fetch_all(queue_for(server), TEST_BASE_URL, "v2/types", page_size=100)

        assert server.offsets == [0, 100, 200]
        assert len(items) == 250
        assert items == server.items

    @pytest.mark.asyncio
    async def test_page_urls(self) -> None:
        server = PagedServer(total=150)

        await fetch_all(queue_for(server), TEST_BASE_URL, "v2/types", page_size=100)

        assert [request.url for request in server.requests] == [
            "https://world.test/v2/types?limit=100&offset=0",
            "https://world.test/v2/types?limit=100&offset=100",
        ]

    @pytest.mark.asyncio
    async def test_exact_multiple_of_page_size(self) -> None:
        server = PagedServer(total=200)

        items = await fetch_all(queue_for(server), TEST_BASE_URL, "v2/types", page_size=100)

        assert server.offsets == [0, 100]
        assert len(items) == 200

    @pytest.mark.asyncio
    async def test_empty_listing(self) -> None:
        server = PagedServer(total=0)

        items = await fetch_all(queue_for(server), TEST_BASE_URL, "v2/killmails")

        assert items == []
        assert server.offsets == [0]

    @pytest.mark.asyncio
    async def test_start_offset(self) -> None:
        server = PagedServer(total=250)

        items = await fetch_all(
            queue_for(server), TEST_BASE_URL, "v2/types", page_size=100, start_offset=100
        )

        assert server.offsets == [100, 200]
        assert items == server.items[100:]

    @pytest.mark.asyncio
    async def test_idempotent_against_unchanged_data(self) -> None:
        server = PagedServer(total=120)
        queue = queue_for(server)

        first = await fetch_all(queue, TEST_BASE_URL, "v2/types", page_size=50)
        second = await fetch_all(queue, TEST_BASE_URL, "v2/types", page_size=50)

        assert first == second

    @pytest.mark.asyncio
    async def test_params_and_bearer_sent_with_every_page(self) -> None:
        server = PagedServer(total=3)

        await fetch_all(
            queue_for(server),
            TEST_BASE_URL,
            "v2/smartcharacters/me/jumps",
            page_size=2,
            params={"format": "json"},
            bearer="secret",
        )

        assert len(server.requests) == 2
        for request in server.requests:
            assert request.headers["Authorization"] == "Bearer secret"
            assert httpx.URL(request.url).params["format"] == "json"

    @pytest.mark.asyncio
    async def test_invalid_arguments(self) -> None:
        queue = queue_for(PagedServer(total=1))

        with pytest.raises(ValueError):
            await fetch_all(queue, TEST_BASE_URL, "v2/types", page_size=0)
        with pytest.raises(ValueError):
            await fetch_all(queue, TEST_BASE_URL, "v2/types", start_offset=-1)


class TestFetchAllFailures:
    """Tests for failing aggregations."""

    @pytest.mark.asyncio
    async def test_missing_total_stops_after_first_page(self) -> None:
        server = PagedServer(total=250)
        server.body_overrides[0] = {"data": server.items[:100], "metadata": {}}

        with pytest.raises(MissingTotalError):
            await fetch_all(queue_for(server), TEST_BASE_URL, "v2/types", page_size=100)

        assert server.offsets == [0]

    @pytest.mark.asyncio
    async def test_error_status_on_first_page_is_raised_as_is(self) -> None:
        server = PagedServer(total=250)
        server.errors[0] = (500, {"error": "oops"})

        with pytest.raises(HTTPStatusError) as exc_info:
            await fetch_all(queue_for(server), TEST_BASE_URL, "v2/types")

        assert exc_info.value.status_code == 500
        assert exc_info.value.parsed_body["error"] == "oops"
        assert server.offsets == [0]

    @pytest.mark.asyncio
    async def test_error_on_later_page_aborts_with_offset(self) -> None:
        server = PagedServer(total=350)
        server.errors[100] = (503, {"error": "unavailable"})

        with pytest.raises(AggregationAbortedError) as exc_info:
            await fetch_all(queue_for(server), TEST_BASE_URL, "v2/types", page_size=100)

        assert exc_info.value.offset == 100
        assert isinstance(exc_info.value.error, HTTPStatusError)
        assert exc_info.value.error.status_code == 503
        assert exc_info.value.__cause__ is exc_info.value.error
        assert server.offsets == [0, 100]

    @pytest.mark.asyncio
    async def test_malformed_later_page_aborts(self) -> None:
        server = PagedServer(total=250)
        server.body_overrides[200] = {"metadata": {"total": 250}}

        with pytest.raises(AggregationAbortedError) as exc_info:
            await fetch_all(queue_for(server), TEST_BASE_URL, "v2/types", page_size=100)

        assert exc_info.value.offset == 200
        assert isinstance(exc_info.value.error, MissingDataError)

    @pytest.mark.asyncio
    async def test_queue_closed_between_pages_aborts_with_offset(self) -> None:
        server = PagedServer(total=250)
        queue = RequestQueue(
            FakeTransport(server), QueueConfig(interval_milliseconds=100)
        )

        task = asyncio.create_task(
            fetch_all(queue, TEST_BASE_URL, "v2/types", page_size=100)
        )
        await asyncio.sleep(0.15)
        await queue.close()

        with pytest.raises(AggregationAbortedError) as exc_info:
            await task

        assert exc_info.value.offset == 100
        assert isinstance(exc_info.value.error, QueueClosedError)
        assert server.offsets == [0]

    @pytest.mark.asyncio
    async def test_short_pages_are_a_total_mismatch(self) -> None:
        server = PagedServer(total=150, declared_total=250)

        with pytest.raises(TotalMismatchError) as exc_info:
            await fetch_all(queue_for(server), TEST_BASE_URL, "v2/types", page_size=100)

        assert exc_info.value.expected == 250
        assert exc_info.value.received == 150

    @pytest.mark.asyncio
    async def test_oversized_page_is_a_total_mismatch(self) -> None:
        server = PagedServer(total=10)
        server.body_overrides[0] = {
            "data": server.items + server.items,
            "metadata": {"total": 10},
        }

        with pytest.raises(TotalMismatchError):
            await fetch_all(queue_for(server), TEST_BASE_URL, "v2/types", page_size=100)
