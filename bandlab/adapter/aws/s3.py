"""S3 object store for post images."""

import logfire
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from bandlab.adapter.error import describe, is_retryable
from bandlab.domain.error import StorageError
from bandlab.domain.service.image_service import ObjectStore

from .client import call


class S3ObjectStore(ObjectStore):
    """Stores images in an S3 bucket."""

    def __init__(self, client: BaseClient, bucket: str) -> None:
        """Initialize S3 object store.

        Args:
            client: boto3 S3 client
            bucket: Target bucket
        """
        self.client = client
        self.bucket = bucket

    async def put(self, key: str, data: bytes, content_type: str) -> None:
        """Upload an object."""
        with logfire.span("s3.put_object", bucket=self.bucket, key=key):
            try:
                await call(
                    self.client.put_object,
                    Bucket=self.bucket,
                    Key=key,
                    Body=data,
                    ContentType=content_type,
                )
            except (BotoCoreError, ClientError) as e:
                logfire.error(
                    "S3 upload failed",
                    bucket=self.bucket,
                    key=key,
                    error=describe(e),
                )
                raise StorageError(
                    f"Image upload failed ({describe(e)})", retryable=is_retryable(e)
                ) from e


class InMemoryObjectStore(ObjectStore):
    """In-memory object store for testing.

    Set ``fail`` to make every upload raise a StorageError.
    """

    def __init__(self, fail: bool = False) -> None:
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.fail = fail

    async def put(self, key: str, data: bytes, content_type: str) -> None:
        if self.fail:
            raise StorageError("Image upload failed (object store unavailable)")
        self.objects[key] = (data, content_type)
