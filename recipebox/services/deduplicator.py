"""
RequestDeduplicator - Prevents duplicate concurrent requests.

When multiple callers request the same resource simultaneously,
only one actual request is made and the result is shared.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, TypeVar

from loguru import logger

T = TypeVar("T")


@dataclass
class PendingRequest:
    """An in-flight request and the moment it was started."""

    task: asyncio.Task[Any]
    timestamp: float


class RequestDeduplicator:
    """
    Deduplicates concurrent async requests.

    When multiple coroutines request the same key within the dedup window,
    only one actual request is made. All callers await the same task and
    therefore observe the same result or the same exception.

    A pending entry older than the window is not joined: the next call
    starts a fresh request even if the old one is still running.

    Usage:
        dedup = RequestDeduplicator(window=5.0)

        async def lookup(meal_id: str):
            return await dedup.dedupe(
                key=f"lookup:{meal_id}",
                request_fn=lambda: fetch_meal(meal_id),
            )
    """

    def __init__(
        self,
        window: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
        debug: bool = False,
    ):
        self._in_flight: dict[str, PendingRequest] = {}
        self._window = window
        self._clock = clock
        self._debug = debug
        self._stats = DeduplicatorStats()

    async def dedupe(
        self,
        key: str,
        request_fn: Callable[[], Awaitable[T]],
    ) -> T:
        """
        Execute request with deduplication.

        If a request with the same key is already in flight and younger than
        the dedup window, wait for and return its result instead of making a
        new request.

        Args:
            key: Unique identifier for this logical operation
            request_fn: Async function to execute if no live duplicate exists

        Returns:
            Result from request_fn (either fresh or from in-flight request)
        """
        now = self._clock()
        pending = self._in_flight.get(key)

        if pending is not None and now - pending.timestamp <= self._window:
            self._stats.deduplicated += 1
            self._log(f"DEDUPE: Waiting for in-flight request: {key[:50]}")
            task = pending.task
        else:
            if pending is not None:
                self._log(f"STALE: Starting over for: {key[:50]}")
            self._stats.total += 1
            self._log(f"NEW: Starting request: {key[:50]}")
            task = asyncio.ensure_future(request_fn())
            self._in_flight[key] = PendingRequest(task=task, timestamp=now)
            task.add_done_callback(lambda t: self._release(key, t))

        # Shield so one cancelled waiter does not cancel the shared request
        return await asyncio.shield(task)

    def _release(self, key: str, task: asyncio.Task[Any]) -> None:
        """Drop the registry entry once settled, unless a newer one replaced it."""
        pending = self._in_flight.get(key)
        if pending is not None and pending.task is task:
            del self._in_flight[key]
            self._log(f"DONE: Request completed: {key[:50]}")

        # Mark the exception as retrieved when every waiter has gone away
        if not task.cancelled():
            task.exception()

    async def cancel_all(self) -> int:
        """Cancel all in-flight requests."""
        count = len(self._in_flight)
        for pending in self._in_flight.values():
            pending.task.cancel()
        self._in_flight.clear()
        if count:
            self._log(f"CANCEL_ALL: {count} requests cancelled")
        return count

    def get_in_flight_count(self) -> int:
        """Get number of in-flight requests."""
        return len(self._in_flight)

    def get_in_flight_keys(self) -> list[str]:
        """Get keys of all in-flight requests."""
        return list(self._in_flight.keys())

    def get_stats(self) -> "DeduplicatorStats":
        """Get deduplication statistics."""
        self._stats.in_flight = len(self._in_flight)
        return self._stats

    def _log(self, message: str) -> None:
        """Log debug message if debug mode is enabled."""
        if self._debug:
            logger.debug(f"[Deduplicator] {message}")


class DeduplicatorStats:
    """Statistics for request deduplication."""

    def __init__(self):
        self.total: int = 0  # Total unique requests made
        self.deduplicated: int = 0  # Requests that were deduplicated
        self.in_flight: int = 0  # Current in-flight requests

    @property
    def dedup_rate(self) -> float:
        """Calculate deduplication rate."""
        total = self.total + self.deduplicated
        if total == 0:
            return 0.0
        return self.deduplicated / total

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_requests": self.total,
            "deduplicated": self.deduplicated,
            "in_flight": self.in_flight,
            "dedup_rate": f"{self.dedup_rate:.2%}",
        }
