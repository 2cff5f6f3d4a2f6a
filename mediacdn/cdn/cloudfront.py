"""CloudFront distribution adapter.

Resolves asset URLs against the distribution host, signs them when a key
pair is configured, and pushes invalidation batches so edge caches drop
stale copies after an asset changes.

Invalidations are billed per path above the monthly free tier, and a
directory has to be invalidated together with each of its files.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from mediacdn.cdn import FlushStatus
from mediacdn.cdn.paths import caller_reference, compute_path, join_url, normalize_paths
from mediacdn.cdn.signing import build_signer
from mediacdn.exceptions import InvalidationFailedError, InvalidRequestError, StatusLookupFailedError

ACCEPTED_STATUSES = ("Completed", "InProgress")


class CloudFrontCDN:
    """Serves media through a CloudFront distribution."""

    STATUS_LIST: dict[FlushStatus, str] = {
        FlushStatus.OK: "Completed",
        FlushStatus.TO_SEND: "STATUS_TO_SEND",
        FlushStatus.TO_FLUSH: "STATUS_TO_FLUSH",
        FlushStatus.ERROR: "STATUS_ERROR",
        FlushStatus.WAITING: "InProgress",
    }

    def __init__(
        self,
        host: str,
        directory: str,
        key: Optional[str],
        secret: Optional[str],
        distribution_id: str,
        expiration_interval: Optional[int] = None,
        private_key: Optional[str] = None,
        key_pair_id: Optional[str] = None,
        *,
        region: Optional[str] = None,
        client: Any = None,
        signer: Any = None,
    ) -> None:
        """Create the adapter.

        Args:
            host: Distribution base URL, e.g. ``https://d111111abcdef8.cloudfront.net``.
            directory: Optional prefix prepended to every relative path.
            key: AWS access key id.
            secret: AWS secret access key.
            distribution_id: Distribution targeted by invalidations.
            expiration_interval: Lifetime of signed URLs in seconds.
            private_key: PEM text, or path to the PEM file, of the CloudFront key pair.
            key_pair_id: Public key id matching ``private_key``.
            region: Optional region for the boto3 session.
            client: Pre-built CloudFront client, mainly for tests.
            signer: Pre-built ``CloudFrontSigner``, mainly for tests.
        """
        self.host = host
        self.directory = directory
        self.key = key
        self.secret = secret
        self.distribution_id = distribution_id
        self.expiration_interval = expiration_interval
        self.private_key = private_key
        self.key_pair_id = key_pair_id
        self.region = region
        self._client = client
        self._signer = signer

    @classmethod
    def get_status_list(cls) -> dict[FlushStatus, str]:
        return dict(cls.STATUS_LIST)

    @property
    def signs_urls(self) -> bool:
        return not (self.expiration_interval is None or self.private_key is None or self.key_pair_id is None)

    def _get_client(self) -> Any:
        if self._client is None:
            logger.debug("Creating CloudFront client for distribution {id}", id=self.distribution_id)
            session = boto3.session.Session(region_name=self.region) if self.region else boto3.session.Session()
            credentials: dict[str, str] = {}
            # unset credentials fall through to the default boto3 chain
            if self.key and self.secret:
                credentials = {"aws_access_key_id": self.key, "aws_secret_access_key": self.secret}
            self._client = session.client("cloudfront", **credentials)
        return self._client

    def _get_signer(self) -> Any:
        if self._signer is None:
            self._signer = build_signer(str(self.key_pair_id), str(self.private_key))
        return self._signer

    def get_path(self, relative_path: str, is_flushable: bool = False) -> str:  # noqa: ARG002
        url = join_url(self.host, compute_path(self.directory, relative_path))

        if self.signs_urls:
            expires = datetime.fromtimestamp(time.time() + int(self.expiration_interval), tz=timezone.utc)
            url = self._get_signer().generate_presigned_url(url, date_less_than=expires)

        return url

    def flush_by_string(self, path: str) -> str:
        return self.flush_paths([path])

    def flush(self, path: str) -> str:
        return self.flush_paths([path])

    def flush_paths(self, paths: Sequence[str]) -> str:
        if not paths:
            raise InvalidRequestError("Unable to flush : expected at least one path")

        normalized = normalize_paths(paths)
        reference = caller_reference(normalized)
        logger.info(
            "Submitting invalidation of {count} path(s) on {id}",
            count=len(normalized),
            id=self.distribution_id,
        )

        try:
            response = self._get_client().create_invalidation(
                DistributionId=self.distribution_id,
                InvalidationBatch={
                    "Paths": {"Quantity": len(normalized), "Items": normalized},
                    "CallerReference": reference,
                },
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("Invalidation request failed: {error}", error=str(exc))
            raise InvalidationFailedError(
                f"Unable to flush : {exc}",
                {"distribution_id": self.distribution_id, "caller_reference": reference},
            ) from exc

        invalidation = response.get("Invalidation", {})
        status = invalidation.get("Status")
        if status not in ACCEPTED_STATUSES:
            logger.error("Invalidation rejected with status {status}", status=status)
            raise InvalidationFailedError(
                f"Unable to flush : {status}",
                {"distribution_id": self.distribution_id, "status": str(status)},
            )

        return invalidation["Id"]

    def get_flush_status(self, identifier: str) -> FlushStatus | None:
        try:
            response = self._get_client().get_invalidation(
                DistributionId=self.distribution_id,
                Id=identifier,
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("Invalidation status lookup failed for {id}: {error}", id=identifier, error=str(exc))
            raise StatusLookupFailedError(
                f"Unable to retrieve flush status : {exc}",
                {"distribution_id": self.distribution_id, "invalidation_id": identifier},
            ) from exc

        status = response.get("Invalidation", {}).get("Status")
        for flush_status, backend_status in self.STATUS_LIST.items():
            if backend_status == status:
                return flush_status

        logger.warning("Unknown invalidation status {status} for {id}", status=status, id=identifier)
        return None


__all__ = ["CloudFrontCDN", "ACCEPTED_STATUSES"]
