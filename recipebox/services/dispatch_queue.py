"""
DispatchQueue - FIFO queue that throttles outbound operations.

A single drain task runs queued operations strictly one at a time, in the
order they were submitted, and waits out a minimum interval between the end
of one operation and the start of the next. However many callers are
waiting, the upstream never sees more than one request per interval.
"""

import asyncio
from collections import deque
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

from loguru import logger

T = TypeVar("T")


@dataclass
class QueuedOperation:
    """An operation waiting for dispatch and the future its caller awaits."""

    operation: Callable[[], Awaitable[Any]]
    future: asyncio.Future[Any]
    label: str


class DispatchQueue:
    """
    Rate-limited FIFO dispatch queue.

    Usage:
        queue = DispatchQueue(min_interval=0.2)

        data = await queue.submit(lambda: fetch("/random.php"), label="/random.php")
    """

    def __init__(self, min_interval: float = 0.2, debug: bool = False):
        self._min_interval = min_interval
        self._debug = debug
        self._pending: deque[QueuedOperation] = deque()
        self._drain_task: asyncio.Task[None] | None = None
        self._last_dispatch_end: float | None = None
        self._stats = DispatchQueueStats()

    async def submit(
        self,
        operation: Callable[[], Awaitable[T]],
        label: str = "",
    ) -> T:
        """
        Enqueue an operation and wait for its outcome.

        Args:
            operation: Async function performing the actual network call
            label: Short description used in log lines

        Returns:
            Whatever the operation returns; its exception is re-raised here
        """
        loop = asyncio.get_running_loop()
        future: asyncio.Future[T] = loop.create_future()
        self._pending.append(QueuedOperation(operation, future, label))
        self._stats.submitted += 1
        self._log(f"ENQUEUE: {label} (depth: {len(self._pending)})")

        if self._drain_task is None or self._drain_task.done():
            self._drain_task = loop.create_task(self._drain())

        return await future

    async def _drain(self) -> None:
        """Dispatch queued operations one at a time until the queue is empty."""
        loop = asyncio.get_running_loop()

        while self._pending:
            if self._last_dispatch_end is not None:
                elapsed = loop.time() - self._last_dispatch_end
                if elapsed < self._min_interval:
                    await asyncio.sleep(self._min_interval - elapsed)

            item = self._pending.popleft()
            if item.future.done():
                # Caller went away while waiting
                continue

            self._log(f"DISPATCH: {item.label}")
            self._stats.dispatched += 1
            try:
                result = await item.operation()
            except asyncio.CancelledError:
                item.future.cancel()
                raise
            except Exception as e:
                self._stats.failed += 1
                logger.error(f"Queued request failed: {item.label}: {e}")
                if not item.future.done():
                    item.future.set_exception(e)
            else:
                if not item.future.done():
                    item.future.set_result(result)
            finally:
                self._last_dispatch_end = loop.time()

    def get_depth(self) -> int:
        """Number of operations waiting for dispatch."""
        return len(self._pending)

    async def close(self) -> None:
        """Stop the drain task and cancel every waiting operation."""
        while self._pending:
            item = self._pending.popleft()
            item.future.cancel()

        if self._drain_task is not None and not self._drain_task.done():
            self._drain_task.cancel()
            try:
                await self._drain_task
            except asyncio.CancelledError:
                pass
        self._drain_task = None

    def get_stats(self) -> "DispatchQueueStats":
        """Get dispatch statistics."""
        self._stats.depth = len(self._pending)
        return self._stats

    def _log(self, message: str) -> None:
        """Log debug message if debug mode is enabled."""
        if self._debug:
            logger.debug(f"[DispatchQueue] {message}")


@dataclass
class DispatchQueueStats:
    """Statistics for the dispatch queue."""

    submitted: int = 0
    dispatched: int = 0
    failed: int = 0
    depth: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "submitted": self.submitted,
            "dispatched": self.dispatched,
            "failed": self.failed,
            "depth": self.depth,
        }
