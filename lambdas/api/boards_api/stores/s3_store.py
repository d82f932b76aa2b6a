"""S3-backed image object store."""

import os
from typing import Dict, List, Optional, Sequence

import boto3
from aws_lambda_powertools import Logger, Tracer
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from .base import ImageObjectStore, ObjectStoreError

logger = Logger(service="boards-s3-store", level=os.environ.get("LOG_LEVEL", "INFO"))
tracer = Tracer(service="boards-s3-store")

DEFAULT_CONTENT_TYPE = "application/octet-stream"
CACHE_CONTROL = "max-age=3600"
# delete_objects accepts at most 1000 keys per call
DELETE_BATCH_SIZE = 1000

_S3_CONFIG = Config(retries={"max_attempts": 3, "mode": "standard"})
_S3_CLIENT_CACHE: Dict[str, boto3.client] = {}  # {region → client}


def _get_s3_client(region: Optional[str] = None):
    """
    Return a cached S3 client for the region.
    Clients are cached to reuse TCP connections across warm invocations.
    """
    region = region or os.environ.get("AWS_REGION", "us-east-1")
    if region not in _S3_CLIENT_CACHE:
        _S3_CLIENT_CACHE[region] = boto3.client(
            "s3", region_name=region, config=_S3_CONFIG
        )
    return _S3_CLIENT_CACHE[region]


class S3ImageObjectStore(ImageObjectStore):
    """Image payloads stored as objects in a single bucket."""

    def __init__(self, bucket: str, s3_client=None):
        self.bucket = bucket
        self._s3 = s3_client

    @property
    def s3(self):
        if self._s3 is None:
            self._s3 = _get_s3_client()
        return self._s3

    @tracer.capture_method(capture_response=False)
    def download(self, path: str) -> bytes:
        try:
            response = self.s3.get_object(Bucket=self.bucket, Key=path)
            return response["Body"].read()
        except (ClientError, BotoCoreError) as e:
            raise ObjectStoreError(
                f"Failed to download s3://{self.bucket}/{path}: {e}", paths=[path]
            ) from e

    @tracer.capture_method
    def upload(self, path: str, payload: bytes, content_type: Optional[str]) -> None:
        try:
            self.s3.put_object(
                Bucket=self.bucket,
                Key=path,
                Body=payload,
                ContentType=content_type or DEFAULT_CONTENT_TYPE,
                CacheControl=CACHE_CONTROL,
                IfNoneMatch="*",
            )
        except (ClientError, BotoCoreError) as e:
            raise ObjectStoreError(
                f"Failed to upload to s3://{self.bucket}/{path}: {e}", paths=[path]
            ) from e

    @tracer.capture_method
    def delete(self, paths: Sequence[str]) -> None:
        failed: List[str] = []

        for i in range(0, len(paths), DELETE_BATCH_SIZE):
            batch = list(paths[i : i + DELETE_BATCH_SIZE])
            try:
                response = self.s3.delete_objects(
                    Bucket=self.bucket,
                    Delete={"Objects": [{"Key": key} for key in batch], "Quiet": True},
                )
            except (ClientError, BotoCoreError) as e:
                logger.warning(
                    f"Delete batch {i // DELETE_BATCH_SIZE + 1} failed: {e}",
                    extra={"bucket": self.bucket, "batch_size": len(batch)},
                )
                failed.extend(batch)
                continue

            for error in response.get("Errors", []):
                logger.warning(
                    f"Failed to delete s3://{self.bucket}/{error.get('Key')}: "
                    f"{error.get('Code')} {error.get('Message')}"
                )
                failed.append(error.get("Key"))

        if failed:
            raise ObjectStoreError(
                f"Failed to delete {len(failed)} of {len(paths)} object(s)",
                paths=failed,
            )
