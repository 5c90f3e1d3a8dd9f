"""Concurrent resolution of every detail document in a manifest.

Workers run on a bounded thread pool and publish into a completion queue
sized to the manifest. The first failure sets a shared cancellation event:
unstarted work is cancelled, running workers finish their request but do
not publish. The queue is drained only after every worker has returned,
and a failed batch yields its first error and nothing else.
"""

from __future__ import annotations

import logging
import os
import queue
import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import List, Optional

from common.logging_utils import Timer, extra_context, is_debug_enabled
from .models import Manifest, ManifestEntry, VersionDetail
from .resolver import DetailResolver

logger = logging.getLogger(__name__)


def default_worker_count() -> int:
    return os.cpu_count() or 1


class _TaskGroup:
    """Shared cancellation token plus first-error slot for one batch."""

    def __init__(self) -> None:
        self.cancelled = threading.Event()
        self._lock = threading.Lock()
        self.first_error: Optional[BaseException] = None

    def fail(self, exc: BaseException) -> None:
        with self._lock:
            if self.first_error is None:
                self.first_error = exc
        self.cancelled.set()


def resolve_all(
    resolver: DetailResolver,
    manifest: Manifest,
    max_workers: Optional[int] = None,
) -> List[VersionDetail]:
    """Resolve every entry of ``manifest`` concurrently.

    Args:
        resolver: Resolver used for each entry.
        manifest: Manifest whose entries are resolved.
        max_workers: Concurrency bound; defaults to the processor count.

    Returns:
        One VersionDetail per entry, in completion order.

    Raises:
        The first error raised by any worker.
    """
    entries = manifest.entries
    if not entries:
        return []
    workers = max_workers or default_worker_count()
    results: "queue.Queue[VersionDetail]" = queue.Queue(maxsize=len(entries))
    group = _TaskGroup()

    def run(entry: ManifestEntry) -> None:
        if group.cancelled.is_set():
            return
        try:
            detail = resolver.resolve_entry(entry)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            group.fail(exc)
            return
        if group.cancelled.is_set():
            return
        results.put_nowait(detail)

    if is_debug_enabled(logger):
        logger.debug("Bulk resolution start", extra=extra_context(
            event="function_entry", component="bulk", action="resolve_all",
            count=len(entries), workers=workers,
        ))

    with Timer() as t:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="launchermeta") as executor:
            futures: List[Future] = [executor.submit(run, entry) for entry in entries]
            for future in as_completed(futures):
                future.result()
                if group.cancelled.is_set():
                    for pending in futures:
                        pending.cancel()
                    break
        # executor has joined every worker; nothing publishes past this point

    if group.first_error is not None:
        if is_debug_enabled(logger):
            logger.debug("Bulk resolution failed", extra=extra_context(
                event="function_exit", component="bulk", action="resolve_all",
                outcome="error", error=type(group.first_error).__name__,
                duration_ms=t.duration_ms(),
            ))
        raise group.first_error

    versions: List[VersionDetail] = []
    while True:
        try:
            versions.append(results.get_nowait())
        except queue.Empty:
            break

    if is_debug_enabled(logger):
        logger.debug("Bulk resolution done", extra=extra_context(
            event="function_exit", component="bulk", action="resolve_all",
            outcome="success", count=len(versions), duration_ms=t.duration_ms(),
        ))
    return versions
