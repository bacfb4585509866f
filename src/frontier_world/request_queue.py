"""Rate-limited request queue.

Outgoing requests are appended to a FIFO queue and dispatched by a single
background drain task. The task wakes every ``interval_milliseconds``, takes
up to ``max_per_interval`` requests from the head of the queue, sends each one
through the transport and settles each caller's future with that request's
own outcome. When a wake finds the queue empty the task ends; the next
enqueue starts a new one.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections import deque
from dataclasses import dataclass

from frontier_world.exceptions import QueueClosedError
from frontier_world.transport import ParsedResponse, RequestDescriptor, TransportProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueueConfig:
    """Dispatch limits for a RequestQueue.

    Attributes:
        interval_milliseconds: Wait before each batch. Zero means the next
            scheduling tick.
        max_per_interval: Maximum requests dispatched per batch.

    The defaults give the unthrottled mode: every pending request goes out
    in one batch on the next tick.
    """

    interval_milliseconds: int = 0
    max_per_interval: int = sys.maxsize

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.interval_milliseconds < 0:
            raise ValueError("interval_milliseconds must be non-negative")
        if self.max_per_interval < 1:
            raise ValueError("max_per_interval must be at least 1")

    @property
    def interval_seconds(self) -> float:
        return self.interval_milliseconds / 1000


@dataclass
class _PendingRequest:
    request: RequestDescriptor
    future: asyncio.Future[ParsedResponse]


class RequestQueue:
    """FIFO queue that dispatches requests in time-boxed batches.

    Example:
        queue = RequestQueue(transport, QueueConfig(interval_milliseconds=100,
                                                    max_per_interval=2))
        response = await queue.enqueue(RequestDescriptor("GET", url))
    """

    def __init__(
        self,
        transport: TransportProtocol,
        config: QueueConfig | None = None,
    ) -> None:
        """Initialize the queue.

        Args:
            transport: Transport used to dispatch every request.
            config: Dispatch limits (default: unthrottled).
        """
        self.transport = transport
        self.config = config or QueueConfig()
        self.batch_count = 0
        self._queue: deque[_PendingRequest] = deque()
        self._drain_task: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def pending(self) -> int:
        """Number of requests waiting for dispatch."""
        return len(self._queue)

    @property
    def is_draining(self) -> bool:
        """Whether the drain task is currently active."""
        return self._drain_task is not None and not self._drain_task.done()

    @property
    def closed(self) -> bool:
        return self._closed

    def enqueue(self, request: RequestDescriptor) -> asyncio.Future[ParsedResponse]:
        """Append a request to the tail of the queue.

        Returns immediately. Must be called from the event loop thread.

        Args:
            request: Request to dispatch.

        Returns:
            Future resolved with the ParsedResponse, or failed with the
            TransportError raised for this request.

        Raises:
            QueueClosedError: If the queue has been closed.
        """
        if self._closed:
            raise QueueClosedError("request queue is closed")

        loop = asyncio.get_running_loop()
        future: asyncio.Future[ParsedResponse] = loop.create_future()
        self._queue.append(_PendingRequest(request, future))

        if not self.is_draining:
            self._drain_task = loop.create_task(self._drain())

        return future

    async def close(self) -> None:
        """Stop draining and fail every request still in the queue.

        Safe to call more than once.
        """
        self._closed = True

        task = self._drain_task
        self._drain_task = None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        remaining = list(self._queue)
        self._queue.clear()
        self._fail_closed(remaining)

    async def _drain(self) -> None:
        while True:
            await asyncio.sleep(self.config.interval_seconds)

            batch = self._take_batch()
            if not batch:
                # No await between the empty check and clearing the task, so
                # a concurrent enqueue either lands in a batch or starts a new task.
                self._drain_task = None
                return

            self.batch_count += 1
            logger.debug(
                "Dispatching batch %d: %d request(s), %d remaining",
                self.batch_count,
                len(batch),
                len(self._queue),
            )

            for index, entry in enumerate(batch):
                try:
                    await self._dispatch(entry)
                except asyncio.CancelledError:
                    self._fail_closed(batch[index:])
                    raise

    @staticmethod
    def _fail_closed(entries: list[_PendingRequest]) -> None:
        for entry in entries:
            if not entry.future.done():
                entry.future.set_exception(QueueClosedError("request queue is closed"))

    def _take_batch(self) -> list[_PendingRequest]:
        batch: list[_PendingRequest] = []
        while self._queue and len(batch) < self.config.max_per_interval:
            batch.append(self._queue.popleft())
        return batch

    async def _dispatch(self, entry: _PendingRequest) -> None:
        if entry.future.done():
            # Cancelled by its caller while waiting.
            return

        try:
            response = await self.transport.send(entry.request)
        except Exception as e:
            logger.debug(
                "Request %s %s failed: %s", entry.request.method, entry.request.url, e
            )
            if not entry.future.done():
                entry.future.set_exception(e)
            return

        if not entry.future.done():
            entry.future.set_result(response)
