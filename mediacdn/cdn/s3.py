from __future__ import annotations

from typing import Any, Optional, Sequence
from urllib.parse import quote

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from mediacdn.cdn import FlushStatus
from mediacdn.cdn.paths import compute_path
from mediacdn.exceptions import CDNError


class S3CDN:
    """Serves media straight from an S3 bucket.

    Objects are always read live from the bucket, so the flush operations
    have nothing to invalidate.
    """

    def __init__(
        self,
        bucket: str,
        directory: str,
        key: Optional[str],
        secret: Optional[str],
        expiration_interval: Optional[int] = None,
        *,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        client: Any = None,
    ) -> None:
        self.bucket = bucket
        self.directory = directory
        self.key = key
        self.secret = secret
        self.expiration_interval = expiration_interval
        self.region = region
        self.endpoint_url = endpoint_url
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            logger.debug("Creating S3 client for bucket {bucket}", bucket=self.bucket)
            session = boto3.session.Session(region_name=self.region) if self.region else boto3.session.Session()
            credentials: dict[str, str] = {}
            # unset credentials fall through to the default boto3 chain
            if self.key and self.secret:
                credentials = {"aws_access_key_id": self.key, "aws_secret_access_key": self.secret}
            self._client = session.client("s3", endpoint_url=self.endpoint_url, **credentials)
        return self._client

    def _key(self, relative_path: str) -> str:
        return compute_path(self.directory, relative_path)

    def get_path(self, relative_path: str, is_flushable: bool = False) -> str:  # noqa: ARG002
        s3_key = self._key(relative_path)
        client = self._get_client()
        if self.expiration_interval is None:
            endpoint = str(client.meta.endpoint_url).rstrip("/")
            return f"{endpoint}/{self.bucket}/{quote(s3_key, safe='/~')}"
        try:
            return client.generate_presigned_url(
                ClientMethod="get_object",
                Params={"Bucket": self.bucket, "Key": s3_key},
                ExpiresIn=int(self.expiration_interval),
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("Failed to presign {key}: {error}", key=s3_key, error=str(exc))
            raise CDNError(f"Unable to generate URL : {exc}", {"key": s3_key}) from exc

    def flush_by_string(self, path: str) -> None:
        # nothing to do
        return None

    def flush(self, path: str) -> None:
        # nothing to do
        return None

    def flush_paths(self, paths: Sequence[str]) -> None:
        # nothing to do
        return None

    def get_flush_status(self, identifier: str) -> FlushStatus | None:
        return None


__all__ = ["S3CDN"]
