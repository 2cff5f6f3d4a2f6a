"""Custom exception hierarchy for mediacdn."""

from __future__ import annotations


class MediaCdnError(Exception):
    """Base exception for all mediacdn-specific errors."""
    
    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(MediaCdnError):
    """Raised when configuration is invalid or missing."""
    pass


class CDNError(MediaCdnError):
    """Base class for CDN adapter errors."""
    pass


class InvalidRequestError(CDNError):
    """Raised when an invalidation is requested without any path."""
    pass


class InvalidationFailedError(CDNError):
    """Raised when the CDN rejects or fails an invalidation request."""
    pass


class StatusLookupFailedError(CDNError):
    """Raised when the status of an invalidation cannot be retrieved."""
    pass


class SigningError(MediaCdnError):
    """Raised when a signed URL cannot be produced."""
    pass
