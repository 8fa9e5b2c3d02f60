"""
Object backend implementations.
"""

from src.storage.backends.memory import MemoryBackend
from src.storage.backends.s3 import S3Backend

__all__ = ["MemoryBackend", "S3Backend"]
