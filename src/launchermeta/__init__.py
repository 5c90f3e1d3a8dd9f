"""Launcher version metadata resolver.

This package resolves the launcher's two-tier version metadata:
- models.py: manifest, manifest v2 and version detail types
- cache.py: load-once manifest cache with explicit invalidation
- pool.py: reusable decode buffers for detail documents
- resolver.py: single-version resolution and the latest pointers
- bulk.py: bounded concurrent resolution of a whole manifest
- client.py: VersionClient facade and the process-wide default client
"""

from .errors import (
    DecodeError,
    FetchError,
    HTTPStatusError,
    NotFoundError,
    PoisonedCacheError,
    ResolutionError,
    TransportError,
    UnexpectedContentTypeError,
)
from .models import (
    Manifest,
    ManifestEntry,
    ManifestEntryV2,
    ManifestV2,
    VersionDetail,
    VersionKind,
)
from .cache import ManifestCache
from .pool import DetailBuffer, DetailPool
from .resolver import DetailResolver
from .bulk import resolve_all
from .client import (
    VersionClient,
    all_versions,
    default_client,
    entry_info,
    latest_release,
    latest_snapshot,
    manifest,
    manifest_v2,
    reset,
    set_default_client,
    version,
)

__all__ = [
    # Errors
    "FetchError",
    "TransportError",
    "HTTPStatusError",
    "UnexpectedContentTypeError",
    "DecodeError",
    "ResolutionError",
    "NotFoundError",
    "PoisonedCacheError",
    # Models
    "Manifest",
    "ManifestEntry",
    "ManifestEntryV2",
    "ManifestV2",
    "VersionDetail",
    "VersionKind",
    # Core
    "ManifestCache",
    "DetailBuffer",
    "DetailPool",
    "DetailResolver",
    "resolve_all",
    "VersionClient",
    # Default client
    "default_client",
    "set_default_client",
    "manifest",
    "manifest_v2",
    "version",
    "entry_info",
    "latest_release",
    "latest_snapshot",
    "all_versions",
    "reset",
]
