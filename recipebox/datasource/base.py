"""
Base data source interface.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from recipebox.services.client import ServiceClient

T = TypeVar("T", bound=BaseModel)


class BaseDataSource(ABC, Generic[T]):
    """
    Abstract base class for all data sources.

    All data sources should:
    - Use ServiceClient for HTTP requests (rate limiting, retries, timeouts)
    - Return Pydantic models
    - Handle errors gracefully
    """

    def __init__(self, client: ServiceClient):
        self.client = client

    @property
    @abstractmethod
    def service_id(self) -> str:
        """Unique identifier for this data source."""
        ...

    @abstractmethod
    async def fetch(self) -> list[T]:
        """Fetch the default listing from the source."""
        ...
