"""CDN adapters (S3 direct URLs or CloudFront distribution with invalidation)."""

from __future__ import annotations

from enum import IntEnum
from typing import Protocol, Sequence


class FlushStatus(IntEnum):
    OK = 1
    TO_SEND = 2
    TO_FLUSH = 3
    ERROR = 4
    WAITING = 5


class CDNInterface(Protocol):
    def get_path(self, relative_path: str, is_flushable: bool = False) -> str:  # returns public url
        ...

    def flush(self, path: str) -> str | None:  # returns invalidation id
        ...

    def flush_by_string(self, path: str) -> str | None:
        ...

    def flush_paths(self, paths: Sequence[str]) -> str | None:
        ...

    def get_flush_status(self, identifier: str) -> FlushStatus | None:
        ...


def create_cdn(*args, **kwargs) -> CDNInterface:
    from mediacdn.cdn.factory import create_cdn as _create_cdn

    return _create_cdn(*args, **kwargs)


def get_cdn() -> CDNInterface:
    from mediacdn.cdn.factory import get_cdn as _get_cdn

    return _get_cdn()


__all__ = ["CDNInterface", "FlushStatus", "create_cdn", "get_cdn"]
