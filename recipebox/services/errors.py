"""
Service layer exceptions.
"""


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, service_id: str | None = None):
        self.service_id = service_id
        super().__init__(message)


class NetworkUnreachableError(ServiceError):
    """The transport could not reach the service at all."""

    def __init__(self, service_id: str, url: str):
        self.url = url
        super().__init__(
            f"Network error: unable to connect to service '{service_id}'. "
            "Please check your internet connection.",
            service_id=service_id,
        )


class TransportFailureError(ServiceError):
    """The connection was made but the exchange failed (read error, bad redirect, ...)."""

    def __init__(self, service_id: str, url: str, reason: str = ""):
        self.url = url
        msg = f"Transport error talking to service '{service_id}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg, service_id=service_id)


class RequestTimeoutError(ServiceError):
    """Request timed out."""

    def __init__(self, service_id: str, timeout: float):
        self.timeout = timeout
        super().__init__(
            f"Request to service '{service_id}' timed out after {timeout}s",
            service_id=service_id,
        )


class RateLimitError(ServiceError):
    """Rate limit exceeded."""

    def __init__(self, service_id: str, retry_after: float | None = None):
        self.retry_after = retry_after
        msg = f"Rate limit exceeded for service '{service_id}'"
        if retry_after:
            msg += f", retry after {retry_after}s"
        super().__init__(msg, service_id=service_id)


class UpstreamHttpError(ServiceError):
    """Service answered with a non-2xx status other than 429."""

    def __init__(self, service_id: str, status_code: int, body: str = ""):
        self.status_code = status_code
        msg = f"HTTP {status_code} from service '{service_id}'"
        if body:
            msg += f": {body[:200]}"
        super().__init__(msg, service_id=service_id)


class InvalidResponseError(ServiceError):
    """Service answered 2xx with a body that is not JSON or has the wrong shape."""

    pass


class RetriesExhaustedError(ServiceError):
    """All configured attempts failed."""

    def __init__(self, service_id: str, attempts: int, last_error: Exception):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"All {attempts} attempts to service '{service_id}' failed: {last_error}",
            service_id=service_id,
        )
