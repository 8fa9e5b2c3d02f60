"""
Blob store for opaque document payloads.
"""

import uuid
from typing import Callable, Optional

from src.kernel.errors import NotFoundError
from src.logging_config import get_logger
from src.schemas.document import DEFAULT_CONTENT_TYPE, Document
from src.storage.base import ObjectBackend

logger = get_logger(__name__)


def new_document_id() -> str:
    """Generate a document ID unrelated to the payload."""
    return str(uuid.uuid4())


class BlobStore:
    """
    Puts, reads and deletes documents by generated ID.

    Usage:
        store = BlobStore(backend)
        doc_id = await store.put(payload, "application/pdf")
        document = await store.get(doc_id)
        await store.delete(doc_id)
    """

    def __init__(
        self,
        backend: ObjectBackend,
        id_factory: Callable[[], str] = new_document_id,
    ):
        self.backend = backend
        self.id_factory = id_factory

    async def put(self, data: bytes, content_type: Optional[str] = None) -> str:
        """
        Store a payload under a fresh ID.

        Args:
            data: Payload bytes
            content_type: MIME type recorded as object metadata

        Returns:
            The generated document ID

        Raises:
            StorageUnavailableError: If the backend cannot be reached
        """
        doc_id = self.id_factory()
        await self.backend.put(doc_id, data, content_type)
        logger.info(
            "Document stored",
            extra={"document_id": doc_id, "size": len(data), "content_type": content_type},
        )
        return doc_id

    async def get(self, doc_id: str) -> Document:
        """
        Read a document.

        Raises:
            NotFoundError: If no object exists under ``doc_id``
        """
        try:
            stored = await self.backend.get(doc_id)
        except NotFoundError as exc:
            raise NotFoundError("Document not found") from exc
        return Document(
            id=doc_id,
            data=stored.data,
            content_type=stored.content_type or DEFAULT_CONTENT_TYPE,
        )

    async def delete(self, doc_id: str) -> None:
        """Delete a document. Unknown IDs are ignored."""
        await self.backend.delete(doc_id)
        logger.info("Document deleted", extra={"document_id": doc_id})
