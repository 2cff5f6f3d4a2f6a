"""Media asset URL resolution and CDN cache invalidation."""

from __future__ import annotations

__version__ = "0.1.0"
