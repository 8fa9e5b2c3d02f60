"""
Document storage - opaque payloads addressed by generated IDs.
"""

from src.storage.base import ObjectBackend, StoredObject
from src.storage.blob_store import BlobStore, new_document_id

__all__ = [
    "ObjectBackend",
    "StoredObject",
    "BlobStore",
    "new_document_id",
]
