"""Load-once cache for the top-level version manifest."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from common.logging_utils import extra_context, is_debug_enabled
from .errors import PoisonedCacheError
from .models import Manifest

logger = logging.getLogger(__name__)


class ManifestCache:
    """Holds the first manifest load result (success or failure).

    The load runs at most once until ``invalidate()``. A failed load is
    kept: the caller that triggered it gets the original error, later
    callers get PoisonedCacheError wrapping that same error.
    """

    def __init__(self, loader: Callable[[], Manifest]):
        """Initialize the cache.

        Args:
            loader: Zero-argument callable fetching a fresh manifest.
        """
        self._loader = loader
        self._lock = threading.Lock()
        self._loaded = False
        self._manifest: Optional[Manifest] = None
        self._error: Optional[Exception] = None

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def error(self) -> Optional[Exception]:
        """The cached load failure, if any."""
        return self._error

    def get_or_load(self) -> Manifest:
        """Return the cached manifest, loading it on first use.

        Raises:
            FetchError: The load performed by this call failed.
            PoisonedCacheError: An earlier load failed.
        """
        with self._lock:
            if not self._loaded:
                if is_debug_enabled(logger):
                    logger.debug("Loading manifest", extra=extra_context(
                        event="cache_miss", component="manifest_cache", action="load"
                    ))
                try:
                    manifest = self._loader()
                except Exception as exc:
                    self._error = exc
                    self._loaded = True
                    raise
                self._manifest = manifest
                self._loaded = True
                return manifest
            manifest, error = self._manifest, self._error
        if error is not None:
            raise PoisonedCacheError(error) from error
        return manifest

    def raise_if_poisoned(self) -> None:
        """Raise PoisonedCacheError if the cached load failed."""
        error = self._error
        if error is not None:
            raise PoisonedCacheError(error) from error

    def invalidate(self) -> None:
        """Forget the cached result so the next access loads again."""
        with self._lock:
            self._loaded = False
            self._manifest = None
            self._error = None
