"""Client facade tying the fetcher, manifest cache, pool and resolvers together."""

from __future__ import annotations

import functools
import threading
from typing import Any, List, Optional

import requests

from common.http_client import fetch_json
from constants import Constants
from .bulk import resolve_all
from .cache import ManifestCache
from .models import Manifest, ManifestEntry, ManifestV2, VersionDetail
from .pool import DetailPool
from .resolver import DetailResolver


class VersionClient:
    """Entry point for manifest and version detail lookups.

    Each client owns its manifest cache, so separate clients in one process
    never observe each other's cached manifest or cached failure.
    """

    def __init__(
        self,
        session: Any = None,
        *,
        manifest_url: str = Constants.MANIFEST_URL,
        manifest_v2_url: str = Constants.MANIFEST_V2_URL,
        timeout: float = Constants.REQUEST_TIMEOUT,
        max_workers: Optional[int] = None,
        pool: Optional[DetailPool] = None,
    ):
        """Initialize the client.

        Args:
            session: Transport with a requests-style ``get(url, timeout=...)``;
                a fresh requests.Session is used when omitted.
            manifest_url: Endpoint of the primary manifest.
            manifest_v2_url: Endpoint of the v2 manifest.
            timeout: Per-request deadline in seconds.
            max_workers: Concurrency bound for all_versions(); defaults to
                the processor count.
            pool: Detail buffer pool, shareable between clients.
        """
        self.session = session if session is not None else requests.Session()
        self.manifest_url = manifest_url
        self.manifest_v2_url = manifest_v2_url
        self.max_workers = max_workers
        self._fetch = functools.partial(fetch_json, session=self.session, timeout=timeout)
        self.cache = ManifestCache(self.manifest)
        self.resolver = DetailResolver(self._fetch, pool=pool, cache=self.cache)

    def manifest(self) -> Manifest:
        """Fetch the primary manifest, bypassing the cache."""
        return self._fetch(self.manifest_url, context="manifest", decoder=Manifest.from_dict)

    def manifest_v2(self) -> ManifestV2:
        """Fetch the v2 manifest; never cached."""
        return self._fetch(self.manifest_v2_url, context="manifest_v2", decoder=ManifestV2.from_dict)

    def global_manifest(self) -> Manifest:
        """Return the cached manifest, loading it on first use."""
        return self.cache.get_or_load()

    def invalidate(self) -> None:
        """Drop the cached manifest (or cached failure)."""
        self.cache.invalidate()

    def _manifest_or_cached(self, manifest: Optional[Manifest]) -> Manifest:
        return manifest if manifest is not None else self.global_manifest()

    def version(self, identifier: str, manifest: Optional[Manifest] = None) -> VersionDetail:
        return self.resolver.resolve(self._manifest_or_cached(manifest), identifier)

    def entry_info(self, entry: ManifestEntry) -> VersionDetail:
        """Resolve the detail document behind one manifest entry."""
        return self.resolver.resolve_entry(entry)

    def latest_release(self, manifest: Optional[Manifest] = None) -> VersionDetail:
        return self.resolver.latest_release(self._manifest_or_cached(manifest))

    def latest_snapshot(self, manifest: Optional[Manifest] = None) -> VersionDetail:
        return self.resolver.latest_snapshot(self._manifest_or_cached(manifest))

    def all_versions(self, manifest: Optional[Manifest] = None) -> List[VersionDetail]:
        """Resolve every version concurrently; see bulk.resolve_all."""
        return resolve_all(self.resolver, self._manifest_or_cached(manifest), self.max_workers)


_default_client: Optional[VersionClient] = None
_default_client_lock = threading.Lock()


def default_client() -> VersionClient:
    """Return the process-wide client, creating it on first use."""
    global _default_client  # pylint: disable=global-statement
    with _default_client_lock:
        if _default_client is None:
            _default_client = VersionClient()
        return _default_client


def set_default_client(client: Optional[VersionClient]) -> None:
    """Replace the process-wide client; None recreates it on next use."""
    global _default_client  # pylint: disable=global-statement
    with _default_client_lock:
        _default_client = client


def manifest() -> Manifest:
    return default_client().manifest()


def manifest_v2() -> ManifestV2:
    return default_client().manifest_v2()


def version(identifier: str) -> VersionDetail:
    return default_client().version(identifier)


def entry_info(entry: ManifestEntry) -> VersionDetail:
    return default_client().entry_info(entry)


def latest_release() -> VersionDetail:
    return default_client().latest_release()


def latest_snapshot() -> VersionDetail:
    return default_client().latest_snapshot()


def all_versions() -> List[VersionDetail]:
    return default_client().all_versions()


def reset() -> None:
    """Invalidate the process-wide client's manifest cache."""
    default_client().invalidate()
