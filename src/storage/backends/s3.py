"""
S3-compatible object backend (MinIO, AWS S3) using aioboto3.
"""

from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any, AsyncIterator, Optional

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError, HTTPClientError
from botocore.exceptions import ConnectionError as BotoConnectionError

from src.config import Settings
from src.kernel.errors import NotFoundError, StorageError, StorageUnavailableError
from src.logging_config import get_logger
from src.schemas.document import DEFAULT_CONTENT_TYPE
from src.storage.base import ObjectBackend, StoredObject

logger = get_logger(__name__)

_MISSING_KEY_CODES = frozenset(("NoSuchKey", "NotFound", "404"))


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


class S3Backend(ObjectBackend):
    """
    Stores objects in a single bucket.

    One client is opened by ``start()`` and shared by all operations until
    ``close()``.

    Usage:
        backend = S3Backend.from_settings(settings)
        await backend.start()
        await backend.put(doc_id, payload, "application/pdf")
    """

    def __init__(
        self,
        bucket: str,
        endpoint_url: Optional[str] = None,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        region: str = "us-east-1",
        session: Optional[aioboto3.Session] = None,
    ):
        self.bucket = bucket
        self.endpoint_url = endpoint_url
        self.access_key = access_key
        self.secret_key = secret_key
        self.region = region
        self._session = session or aioboto3.Session()
        self._client: Any = None
        self._exit_stack: Optional[AsyncExitStack] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3Backend":
        """Build a backend from the MINIO_* settings."""
        return cls(
            bucket=settings.minio_bucket,
            endpoint_url=settings.storage_endpoint_url,
            access_key=settings.minio_access_key or None,
            secret_key=settings.minio_secret_key or None,
            region=settings.minio_region,
        )

    async def start(self) -> None:
        if self._client is not None:
            return
        stack = AsyncExitStack()
        self._client = await stack.enter_async_context(
            self._session.client(
                "s3",
                endpoint_url=self.endpoint_url,
                aws_access_key_id=self.access_key,
                aws_secret_access_key=self.secret_key,
                region_name=self.region,
            )
        )
        self._exit_stack = stack
        logger.info(
            "Object storage client started",
            extra={"bucket": self.bucket, "endpoint": self.endpoint_url},
        )

    async def close(self) -> None:
        if self._exit_stack is not None:
            await self._exit_stack.aclose()
        self._exit_stack = None
        self._client = None

    @property
    def client(self) -> Any:
        if self._client is None:
            raise StorageError("Storage backend not started")
        return self._client

    @asynccontextmanager
    async def _translate_errors(self, key: str) -> AsyncIterator[None]:
        """Map botocore failures onto core storage errors."""
        try:
            yield
        except ClientError as exc:
            code = _error_code(exc)
            if code in _MISSING_KEY_CODES:
                raise NotFoundError(f"Object not found: {key}") from exc
            logger.warning("Object storage request failed", extra={"code": code, "key": key})
            raise StorageError() from exc
        except (BotoConnectionError, HTTPClientError) as exc:
            logger.warning("Object storage unreachable: %s", type(exc).__name__)
            raise StorageUnavailableError() from exc
        except BotoCoreError as exc:
            logger.warning("Object storage client error: %s", type(exc).__name__)
            raise StorageError() from exc

    async def ensure_bucket(self) -> None:
        """Create the bucket if it does not exist yet."""
        try:
            async with self._translate_errors(self.bucket):
                await self.client.head_bucket(Bucket=self.bucket)
            return
        except NotFoundError:
            pass

        async with self._translate_errors(self.bucket):
            await self.client.create_bucket(Bucket=self.bucket)
        logger.info("Created bucket", extra={"bucket": self.bucket})

    async def put(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        async with self._translate_errors(key):
            await self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type or DEFAULT_CONTENT_TYPE,
            )

    async def get(self, key: str) -> StoredObject:
        async with self._translate_errors(key):
            response = await self.client.get_object(Bucket=self.bucket, Key=key)
            data = await response["Body"].read()
        return StoredObject(data=data, content_type=response.get("ContentType") or None)

    async def delete(self, key: str) -> None:
        # S3 DeleteObject succeeds for keys that do not exist
        async with self._translate_errors(key):
            await self.client.delete_object(Bucket=self.bucket, Key=key)
