"""
S3-compatible object storage backend.

Works with AWS S3, Cloudflare R2, MinIO and other S3-compatible services.
boto3 is synchronous, so every call is pushed to the threadpool.
"""

from logging import getLogger
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from app.configs import file_logger, settings
from app.errors.upload import StorageError
from app.services.storage.base import StoredObject, compute_etag

logger = file_logger(getLogger(__name__))

MISSING_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


class S3Storage:
    """S3-compatible object storage backend."""

    def __init__(
        self,
        bucket: str | None = None,
        endpoint_url: str | None = None,
        region: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        client: Any = None,
    ) -> None:
        self.bucket = bucket or settings.S3_BUCKET
        if client is not None:
            self.client = client
            return

        secret = settings.S3_SECRET_ACCESS_KEY
        access_key = access_key or settings.S3_ACCESS_KEY_ID
        secret_key = secret_key or (secret.get_secret_value() if secret else None)

        client_kwargs: dict[str, Any] = {
            "service_name": "s3",
            "region_name": region or settings.S3_REGION,
            "config": Config(signature_version="s3v4"),
        }
        endpoint_url = endpoint_url or settings.S3_ENDPOINT_URL
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url
        if access_key and secret_key:
            client_kwargs["aws_access_key_id"] = access_key
            client_kwargs["aws_secret_access_key"] = secret_key

        self.client = boto3.client(**client_kwargs)
        logger.info(f"S3 storage initialized for bucket {self.bucket} at {endpoint_url}")

    async def put(self, key: str, body: bytes, content_type: str) -> None:
        try:
            await run_in_threadpool(
                self.client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=body,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as e:
            logger.exception(f"Failed to upload {key}")
            raise StorageError from e
        logger.info(f"Uploaded {key} to {self.bucket} ({len(body)} bytes)")

    async def get(self, key: str) -> StoredObject | None:
        try:
            response = await run_in_threadpool(
                self.client.get_object,
                Bucket=self.bucket,
                Key=key,
            )
            body: bytes = await run_in_threadpool(response["Body"].read)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in MISSING_CODES:
                return None
            logger.exception(f"Failed to fetch {key}")
            raise StorageError from e
        except BotoCoreError as e:
            logger.exception(f"Failed to fetch {key}")
            raise StorageError from e

        return StoredObject(
            key=key,
            body=body,
            content_type=response.get("ContentType") or "application/octet-stream",
            etag=response.get("ETag") or compute_etag(body),
            size=len(body),
        )

    async def delete(self, key: str) -> bool:
        try:
            await run_in_threadpool(self.client.head_object, Bucket=self.bucket, Key=key)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in MISSING_CODES:
                return False
            logger.exception(f"Failed to delete {key}")
            raise StorageError from e
        except BotoCoreError as e:
            logger.exception(f"Failed to delete {key}")
            raise StorageError from e

        try:
            await run_in_threadpool(self.client.delete_object, Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.exception(f"Failed to delete {key}")
            raise StorageError from e
        logger.info(f"Deleted {key} from {self.bucket}")
        return True
