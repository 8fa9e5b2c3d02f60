"""
Object backend interface used by the blob store.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StoredObject:
    """Payload and content type read back from a backend."""

    data: bytes
    content_type: Optional[str] = None


class ObjectBackend(ABC):
    """
    Key-addressed object storage.

    Implementations raise NotFoundError for missing keys and
    StorageUnavailableError when the backend cannot be reached.
    """

    async def start(self) -> None:
        """Open connections. Called once at process startup."""

    async def close(self) -> None:
        """Release connections. Called once at shutdown."""

    @abstractmethod
    async def put(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        """Store ``data`` under ``key`` with the content type as metadata."""

    @abstractmethod
    async def get(self, key: str) -> StoredObject:
        """Read the object stored under ``key``."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key``. Removing a missing key is not an error."""
