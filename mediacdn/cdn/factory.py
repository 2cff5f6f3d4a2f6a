from __future__ import annotations

from functools import lru_cache

from mediacdn.cdn import CDNInterface
from mediacdn.cdn.cloudfront import CloudFrontCDN
from mediacdn.cdn.s3 import S3CDN
from mediacdn.exceptions import ConfigurationError
from mediacdn.logging_config import setup_logging_from_settings
from mediacdn.settings import Settings, get_settings


def create_cdn(
    settings: Settings | None = None,
    *,
    backend: str | None = None,
) -> CDNInterface:
    cfg = (settings or get_settings()).cdn
    selected_backend = (backend or cfg.backend).strip().lower()

    if selected_backend == "s3":
        if cfg.s3 is None:
            raise ConfigurationError("S3 backend selected but cdn.s3 is not configured", {"setting": "cdn.s3"})
        s3 = cfg.s3
        return S3CDN(
            bucket=s3.bucket,
            directory=s3.directory,
            key=s3.key,
            secret=s3.secret,
            expiration_interval=s3.expiration_interval,
            region=s3.region,
            endpoint_url=s3.endpoint_url,
        )

    if selected_backend == "cloudfront":
        if cfg.cloudfront is None:
            raise ConfigurationError(
                "CloudFront backend selected but cdn.cloudfront is not configured",
                {"setting": "cdn.cloudfront"},
            )
        cf = cfg.cloudfront
        return CloudFrontCDN(
            host=cf.host,
            directory=cf.directory,
            key=cf.key,
            secret=cf.secret,
            distribution_id=cf.distribution_id,
            expiration_interval=cf.expiration_interval,
            private_key=cf.private_key,
            key_pair_id=cf.key_pair_id,
            region=cf.region,
        )

    raise ConfigurationError(f"unsupported CDN backend: {selected_backend}", {"setting": "cdn.backend"})


@lru_cache(maxsize=1)
def get_cdn() -> CDNInterface:
    """Process-wide adapter; configures logging from the same settings on first use."""
    setup_logging_from_settings()
    return create_cdn()
