"""
In-process object backend for tests and local development.
"""

from typing import Dict, Optional

from src.kernel.errors import NotFoundError
from src.storage.base import ObjectBackend, StoredObject


class MemoryBackend(ObjectBackend):
    """Dict-backed backend. Contents are lost when the process exits."""

    def __init__(self) -> None:
        self._objects: Dict[str, StoredObject] = {}

    async def put(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        self._objects[key] = StoredObject(data=bytes(data), content_type=content_type)

    async def get(self, key: str) -> StoredObject:
        try:
            return self._objects[key]
        except KeyError:
            raise NotFoundError(f"Object not found: {key}") from None

    async def delete(self, key: str) -> None:
        self._objects.pop(key, None)

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, key: str) -> bool:
        return key in self._objects
