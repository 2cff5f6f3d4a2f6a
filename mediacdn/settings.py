from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load .env file from project root
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


class CredentialSettings(BaseModel):
    key_env: str = "AWS_ACCESS_KEY_ID"
    secret_env: str = "AWS_SECRET_ACCESS_KEY"

    @property
    def key(self) -> str | None:
        return os.getenv(self.key_env) or None

    @property
    def secret(self) -> str | None:
        return os.getenv(self.secret_env) or None


class S3Settings(CredentialSettings):
    bucket: str
    directory: str = ""
    region: str | None = None
    endpoint_url: str | None = None
    expiration_interval: int | None = Field(default=None, gt=0)

    @field_validator("directory", mode="before")
    @classmethod
    def _normalize_directory(cls, value: Any) -> str:  # noqa: D401
        if value is None:
            return ""
        return str(value)


class CloudFrontSettings(CredentialSettings):
    host: str
    distribution_id: str
    directory: str = ""
    region: str | None = None
    expiration_interval: int | None = Field(default=None, gt=0)
    key_pair_id: str | None = None
    private_key_path: str | None = None
    private_key_env: str | None = "CLOUDFRONT_PRIVATE_KEY"

    @field_validator("directory", mode="before")
    @classmethod
    def _normalize_directory(cls, value: Any) -> str:  # noqa: D401
        if value is None:
            return ""
        return str(value)

    @property
    def private_key(self) -> str | None:
        """PEM text from the environment, else the configured key file path."""
        if self.private_key_env:
            value = os.getenv(self.private_key_env)
            if value:
                return value
        return self.private_key_path or None


class CDNSettings(BaseModel):
    backend: Literal["s3", "cloudfront"] = "s3"
    s3: S3Settings | None = None
    cloudfront: CloudFrontSettings | None = None

    @field_validator("backend", mode="before")
    @classmethod
    def _lower_backend(cls, value: Any) -> Any:  # noqa: D401
        if isinstance(value, str):
            return value.strip().lower()
        return value


class LoggingSettings(BaseModel):
    level: str = "INFO"
    json_format: bool = False
    log_file: str | None = None


class Settings(BaseModel):
    cdn: CDNSettings
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from YAML configuration file.

        Args:
            path: Optional path to configuration file. If not provided, uses
                MEDIACDN_CONFIG environment variable or defaults to config/default.yaml.

        Returns:
            Settings instance with loaded configuration.

        Raises:
            FileNotFoundError: If configuration file does not exist.
            ValueError: If configuration is invalid.
        """
        config_path = path or Path(os.getenv("MEDIACDN_CONFIG", "config/default.yaml"))
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        with config_path.open("r", encoding="utf-8") as fp:
            payload = yaml.safe_load(fp) or {}
        try:
            return cls(**payload)
        except Exception as exc:
            raise ValueError(f"Invalid configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings(path: str | None = None) -> Settings:
    return Settings.load(Path(path) if path else None)


__all__ = [
    "Settings",
    "CredentialSettings",
    "S3Settings",
    "CloudFrontSettings",
    "CDNSettings",
    "LoggingSettings",
    "get_settings",
]
