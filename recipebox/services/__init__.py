"""
Service layer infrastructure - resilience patterns for external API calls.

Provides:
- CacheManager: In-memory cache with per-entry TTL
- RequestDeduplicator: Prevents duplicate concurrent requests
- DispatchQueue: FIFO queue throttling outbound requests
- ServiceClient: JSON client with retries, backoff and 429 handling
"""

from recipebox.services.errors import (
    ServiceError,
    NetworkUnreachableError,
    TransportFailureError,
    RequestTimeoutError,
    RateLimitError,
    UpstreamHttpError,
    InvalidResponseError,
    RetriesExhaustedError,
)
from recipebox.services.cache import CacheManager, CacheEntry, CacheStats
from recipebox.services.deduplicator import RequestDeduplicator, PendingRequest
from recipebox.services.dispatch_queue import DispatchQueue
from recipebox.services.client import ServiceClient

__all__ = [
    # Errors
    "ServiceError",
    "NetworkUnreachableError",
    "TransportFailureError",
    "RequestTimeoutError",
    "RateLimitError",
    "UpstreamHttpError",
    "InvalidResponseError",
    "RetriesExhaustedError",
    # Cache
    "CacheManager",
    "CacheEntry",
    "CacheStats",
    # Deduplicator
    "RequestDeduplicator",
    "PendingRequest",
    # Queue
    "DispatchQueue",
    # Client
    "ServiceClient",
]
