from __future__ import annotations

import hashlib
from typing import Iterable


def compute_path(directory: str | None, key: str) -> str:
    if not directory:
        return key
    return f"{directory}/{key}"


def _rstrip_one(value: str, char: str = "/") -> str:
    return value[:-1] if value.endswith(char) else value


def _lstrip_one(value: str, char: str = "/") -> str:
    return value[1:] if value.startswith(char) else value


def join_url(host: str, key: str) -> str:
    """Join host and key, dropping one trailing separator from the host and one leading from the key."""
    return f"{_rstrip_one(host)}/{_lstrip_one(key)}"


def normalize_path(path: str) -> str:
    # every CloudFront object path starts with a single slash
    return "/" + path.lstrip("/")


def normalize_paths(paths: Iterable[str]) -> list[str]:
    # duplicates collapse, first occurrence keeps its position
    return list(dict.fromkeys(normalize_path(path) for path in paths))


def caller_reference(paths: Iterable[str]) -> str:
    """Order-independent reference for a set of invalidation paths.

    Identical path sets produce the same reference, which lets the CDN
    recognise a resubmitted batch.
    """
    return hashlib.md5(",".join(sorted(paths)).encode("utf-8")).hexdigest()


__all__ = ["compute_path", "join_url", "normalize_path", "normalize_paths", "caller_reference"]
