"""Per-version detail resolution against a manifest."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from common.logging_utils import extra_context, is_debug_enabled
from .cache import ManifestCache
from .errors import DecodeError, NotFoundError
from .models import Manifest, ManifestEntry, VersionDetail
from .pool import DetailBuffer, DetailPool

logger = logging.getLogger(__name__)

# fetch(url, *, context, decoder) -> decoded value
FetchFn = Callable[..., Any]


class DetailResolver:
    """Fetch and decode detail documents for manifest entries."""

    def __init__(
        self,
        fetch: FetchFn,
        pool: Optional[DetailPool] = None,
        cache: Optional[ManifestCache] = None,
    ):
        """Initialize the resolver.

        Args:
            fetch: JSON fetcher with the signature of common.http_client.fetch_json
                minus transport settings.
            pool: Buffer pool; a private one is created when omitted.
            cache: Manifest cache whose failed load poisons every resolution.
        """
        self._fetch = fetch
        self.pool = pool if pool is not None else DetailPool()
        self._cache = cache

    def resolve(self, manifest: Manifest, identifier: str) -> VersionDetail:
        """Resolve the detail document for ``identifier``.

        Raises:
            PoisonedCacheError: The manifest cache holds a failed load.
            NotFoundError: ``identifier`` is not in ``manifest``.
            FetchError: Fetching or decoding the detail document failed.
        """
        entry = manifest.find(identifier)
        if entry is None:
            raise NotFoundError(identifier)
        return self.resolve_entry(entry)

    def resolve_entry(self, entry: ManifestEntry) -> VersionDetail:
        """Resolve the detail document an entry points at."""
        if self._cache is not None:
            self._cache.raise_if_poisoned()

        with self.pool.borrow() as buffer:
            self._fetch(entry.detail_url, context="detail", decoder=buffer.load)
            _check_matches(entry, buffer)
            detail = buffer.freeze()

        if is_debug_enabled(logger):
            logger.debug("Resolved version detail", extra=extra_context(
                event="resolve", component="resolver", action="resolve_entry",
                outcome="success", target=entry.identifier,
            ))
        return detail

    def latest_release(self, manifest: Manifest) -> VersionDetail:
        return self.resolve(manifest, manifest.latest_release)

    def latest_snapshot(self, manifest: Manifest) -> VersionDetail:
        return self.resolve(manifest, manifest.latest_snapshot)


def _check_matches(entry: ManifestEntry, buffer: DetailBuffer) -> None:
    if buffer.identifier != entry.identifier or buffer.kind is not entry.kind:
        raise DecodeError(
            entry.detail_url,
            f"document is {buffer.identifier} ({buffer.type_name or buffer.kind.value}), "
            f"manifest lists {entry.identifier} ({entry.type_name or entry.kind.value})",
        )
