"""
S3-backed blob store.

Maps boto3 failures onto the pipeline's storage errors so stage code only
has to deal with ``StorageUnavailable`` and ``BlobNotFound``.

Dependencies: boto3, botocore
System role: Production blob store
"""

import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from library_ingest.boundary.storage.base import BlobStore
from library_ingest.core.exceptions import BlobNotFound, StorageUnavailable

logger = logging.getLogger(__name__)

_MISSING_CODES = {"404", "NoSuchKey", "NotFound"}


class S3BlobStore(BlobStore):
    """Blob store over a single S3 bucket."""

    def __init__(
        self,
        bucket: str,
        region: str = "ap-southeast-2",
        client=None,
    ) -> None:
        """
        Initialize S3 blob store.

        Args:
            bucket: S3 bucket name
            region: AWS region for the bucket
            client: Optional preconfigured boto3 S3 client

        Raises:
            ValueError: When bucket is empty
        """
        if not bucket:
            raise ValueError("bucket cannot be empty")

        self._bucket = bucket
        self._region = region
        self._s3_client = client or boto3.client("s3", region_name=region)

    @property
    def bucket(self) -> str:
        return self._bucket

    def put(self, key: str, data: bytes) -> None:
        try:
            self._s3_client.put_object(Bucket=self._bucket, Key=key, Body=data)
        except (ClientError, BotoCoreError) as e:
            raise self._unavailable("put", key, e) from e

    def get(self, key: str) -> bytes:
        try:
            response = self._s3_client.get_object(Bucket=self._bucket, Key=key)
            return response["Body"].read()
        except ClientError as e:
            if _error_code(e) in _MISSING_CODES:
                raise BlobNotFound(
                    f"Object not found in S3: {key}", key=key, tier=self._bucket
                ) from e
            raise self._unavailable("get", key, e) from e
        except BotoCoreError as e:
            raise self._unavailable("get", key, e) from e

    def exists(self, key: str) -> bool:
        try:
            self._s3_client.head_object(Bucket=self._bucket, Key=key)
            return True
        except ClientError as e:
            if _error_code(e) in _MISSING_CODES:
                return False
            raise self._unavailable("exists", key, e) from e
        except BotoCoreError as e:
            raise self._unavailable("exists", key, e) from e

    def delete(self, key: str) -> None:
        try:
            self._s3_client.delete_object(Bucket=self._bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise self._unavailable("delete", key, e) from e

    def _unavailable(self, operation: str, key: str, error: Exception) -> StorageUnavailable:
        logger.error(
            f"{__name__}:{operation} - {type(error).__name__}: {error}",
            extra={"bucket": self._bucket, "key": key},
        )
        return StorageUnavailable(
            f"S3 {operation} failed: {error}",
            key=key,
            tier=self._bucket,
        )


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", "Unknown"))
