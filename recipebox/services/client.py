"""
ServiceClient - Rate-limited async JSON client with retries.

Combines:
- DispatchQueue so every outbound request respects the minimum interval
- A bounded retry loop per request with exponential backoff
- A per-attempt timeout
- 429 handling that honors Retry-After without consuming an attempt
"""

import asyncio
import math
from typing import Any, Awaitable, Callable

import httpx
from loguru import logger

from recipebox.services.dispatch_queue import DispatchQueue
from recipebox.services.errors import (
    InvalidResponseError,
    NetworkUnreachableError,
    RateLimitError,
    RequestTimeoutError,
    RetriesExhaustedError,
    ServiceError,
    TransportFailureError,
    UpstreamHttpError,
)


class ServiceClient:
    """
    GET-only JSON client for a single upstream base URL.

    Every call to get_json() is pushed onto the dispatch queue; the retry
    loop runs inside the queued operation, so retries and backoff sleeps
    also hold the queue.

    Usage:
        client = ServiceClient(
            service_id="mealdb",
            base_url="https://www.themealdb.com/api/json/v1/1",
        )
        data = await client.get_json("/search.php", params={"s": "chicken"})
    """

    def __init__(
        self,
        service_id: str,
        base_url: str,
        timeout: float = 10.0,
        max_retries: int = 3,
        backoff_base: float = 1.0,
        rate_limit_delay: float = 0.2,
        rate_limit_default_wait: float = 10.0,
        max_rate_limit_waits: int = 10,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        debug: bool = False,
    ):
        self.service_id = service_id
        self.base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._backoff_base = backoff_base
        self._rate_limit_default_wait = rate_limit_default_wait
        self._max_rate_limit_waits = max_rate_limit_waits
        self._sleep = sleep
        self._debug = debug

        self._queue = DispatchQueue(min_interval=rate_limit_delay, debug=debug)

        # HTTP client (lazy initialization unless injected)
        self._http_client = http_client

    @property
    def queue(self) -> DispatchQueue:
        return self._queue

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                follow_redirects=True,
                headers={"Accept": "application/json"},
            )
        return self._http_client

    async def get_json(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        retries: int | None = None,
    ) -> dict[str, Any]:
        """
        Fetch a JSON document through the rate-limited queue.

        Args:
            path: Endpoint path relative to the base URL (e.g. "/random.php")
            params: Query parameters
            retries: Override the number of attempts

        Returns:
            Decoded JSON body

        Raises:
            NetworkUnreachableError: If the last attempt could not connect
            RequestTimeoutError: If the last attempt timed out
            RetriesExhaustedError: If every attempt failed for another reason
        """
        url = f"{self.base_url}{path}"
        attempts = max(1, retries) if retries is not None else self._max_retries
        label = f"{path}?{httpx.QueryParams(params or {})}" if params else path

        return await self._queue.submit(
            lambda: self._fetch_with_retries(url, params, attempts),
            label=label,
        )

    async def _fetch_with_retries(
        self,
        url: str,
        params: dict[str, Any] | None,
        attempts: int,
    ) -> dict[str, Any]:
        """Run the retry loop around a single logical request."""
        attempt = 1
        rate_limit_waits = 0
        last_error: ServiceError | None = None

        while attempt <= attempts:
            try:
                return await self._execute_request(url, params)

            except RateLimitError as e:
                # Same attempt number is retried after the wait
                rate_limit_waits += 1
                if rate_limit_waits > self._max_rate_limit_waits:
                    logger.error(
                        f"Still rate limited by {self.service_id} after "
                        f"{self._max_rate_limit_waits} waits, giving up"
                    )
                    raise RetriesExhaustedError(
                        self.service_id, attempt, e
                    ) from e
                delay = (
                    e.retry_after
                    if e.retry_after is not None
                    else self._rate_limit_default_wait
                )
                logger.warning(f"Rate limited. Waiting {delay}s before retry...")
                await self._sleep(delay)

            except ServiceError as e:
                last_error = e
                logger.warning(
                    f"API error (attempt {attempt}/{attempts}) for {url}: {e}"
                )
                if attempt == attempts:
                    break
                await self._sleep(self._backoff_base * 2**attempt)
                attempt += 1

        assert last_error is not None
        logger.error(f"Request to {url} failed after {attempts} attempts")
        if isinstance(last_error, (NetworkUnreachableError, RequestTimeoutError)):
            raise last_error
        raise RetriesExhaustedError(self.service_id, attempts, last_error) from last_error

    async def _execute_request(
        self,
        url: str,
        params: dict[str, Any] | None,
    ) -> dict[str, Any]:
        """Execute one HTTP attempt and translate failures into ServiceErrors."""
        client = await self._get_http_client()

        try:
            response = await asyncio.wait_for(
                client.get(url, params=params), timeout=self._timeout
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise RequestTimeoutError(self.service_id, self._timeout) from e
        except httpx.ConnectError as e:
            raise NetworkUnreachableError(self.service_id, url) from e
        except httpx.RequestError as e:
            raise TransportFailureError(
                self.service_id, url, f"{type(e).__name__}: {e}"
            ) from e

        if response.status_code == 429:
            raise RateLimitError(
                self.service_id, _parse_retry_after(response.headers.get("retry-after"))
            )

        if response.is_error:
            raise UpstreamHttpError(
                self.service_id, response.status_code, response.text
            )

        try:
            data = response.json()
        except ValueError as e:
            raise InvalidResponseError(
                f"Invalid JSON from service '{self.service_id}': {e}",
                service_id=self.service_id,
            ) from e

        if not isinstance(data, dict):
            raise InvalidResponseError(
                f"Expected a JSON object from service '{self.service_id}', "
                f"got {type(data).__name__}",
                service_id=self.service_id,
            )
        return data

    async def close(self) -> None:
        """Close the HTTP client and stop the dispatch queue."""
        await self._queue.close()
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug(f"ServiceClient '{self.service_id}' closed")

    async def __aenter__(self) -> "ServiceClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()


def _parse_retry_after(value: str | None) -> float | None:
    """Parse a Retry-After header given in seconds; "inf" and "nan" are ignored."""
    if value is None:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(seconds):
        return None
    return max(0.0, seconds)
