"""
Listing API — S3 Object Storage
===============================

What:  ObjectStorage backend on AWS S3 or any S3-compatible endpoint
       (MinIO, LocalStack) via boto3.
Who:   Used when STORAGE_BACKEND=s3.
How:   boto3 is synchronous, so every client call runs in Starlette's
       threadpool to keep the event loop free.

Object layout:
    s3://<bucket>/listings/<uuid hex>.<ext>
    public URL: <s3_public_base_url>/<key>
                or https://<bucket>.s3.<region>.amazonaws.com/<key>

Nothing here retries: a failed put surfaces as StorageError and the
request fails.
"""

import logging
import mimetypes
import uuid
from pathlib import Path
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from listing_api.config import settings
from listing_api.exceptions import StorageError
from listing_api.services.storage_base import ObjectStorage

logger = logging.getLogger(__name__)


class S3Storage(ObjectStorage):
    """Stores listing photos as S3 objects with a public-read ACL."""

    def __init__(
        self,
        bucket: Optional[str] = None,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        public_base_url: Optional[str] = None,
        client: Any = None,
    ):
        """
        Args:
            bucket, region, endpoint_url, public_base_url: Override settings.
            client: Pre-built boto3 S3 client (tests pass a mock).
        """
        self.bucket = bucket or settings.s3_bucket
        self.region = region or settings.aws_region
        self.endpoint_url = endpoint_url or settings.s3_endpoint_url
        self.public_base_url = public_base_url or settings.s3_public_base_url
        self._client = client

    @property
    def client(self):
        """boto3 S3 client, created on first use."""
        if self._client is None:
            self._client = boto3.client(
                "s3",
                region_name=self.region,
                endpoint_url=self.endpoint_url,
                config=Config(
                    signature_version="s3v4",
                    s3={"addressing_style": "virtual"},
                ),
            )
        return self._client

    async def store(
        self,
        content: bytes,
        directory: str,
        filename: str,
        content_type: Optional[str] = None,
    ) -> str:
        extension = Path(filename).suffix.lower()
        key = f"{directory.strip('/')}/{uuid.uuid4().hex}{extension}"
        ct = content_type or (mimetypes.guess_type(filename)[0] or "application/octet-stream")

        try:
            await run_in_threadpool(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=ct,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("S3 put_object failed for s3://%s/%s: %s", self.bucket, key, str(e))
            raise StorageError(context={"bucket": self.bucket, "key": key, "error": str(e)})

        logger.info("Object stored: s3://%s/%s (%d bytes)", self.bucket, key, len(content))
        return key

    async def set_public(self, path: str) -> None:
        try:
            await run_in_threadpool(
                self.client.put_object_acl,
                Bucket=self.bucket,
                Key=path,
                ACL="public-read",
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("S3 put_object_acl failed for s3://%s/%s: %s", self.bucket, path, str(e))
            raise StorageError(context={"bucket": self.bucket, "key": path, "error": str(e)})

    def public_url(self, path: str) -> str:
        key = path.lstrip("/")
        if self.public_base_url:
            return f"{self.public_base_url.rstrip('/')}/{key}"
        if self.endpoint_url:
            return f"{self.endpoint_url.rstrip('/')}/{self.bucket}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    async def health_check(self) -> bool:
        try:
            await run_in_threadpool(self.client.head_bucket, Bucket=self.bucket)
            return True
        except (BotoCoreError, ClientError) as e:
            logger.warning("S3 health check failed for bucket %s: %s", self.bucket, str(e))
            return False
