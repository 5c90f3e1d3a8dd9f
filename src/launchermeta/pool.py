"""Reusable decode buffers for version detail documents.

Bulk resolution decodes hundreds of detail documents; buffers are handed
out exclusively to one resolution at a time and reset before reuse.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional

from constants import Constants
from .models import (
    AssetIndex,
    Download,
    JavaVersion,
    Library,
    VersionDetail,
    VersionKind,
    parse_timestamp,
)


class DetailBuffer:
    """Mutable scratch target a detail payload is decoded into."""

    __slots__ = (
        "identifier", "kind", "type_name", "main_class", "assets", "compliance_level",
        "minimum_launcher_version", "publish_time", "release_time",
        "asset_index", "downloads", "java_version", "libraries",
        "arguments", "logging",
    )

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.identifier = ""
        self.kind = VersionKind.OTHER
        self.type_name = ""
        self.main_class = ""
        self.assets = ""
        self.compliance_level = 0
        self.minimum_launcher_version = 0
        self.publish_time = None
        self.release_time = None
        self.asset_index: Optional[AssetIndex] = None
        self.downloads: Dict[str, Download] = {}
        self.java_version: Optional[JavaVersion] = None
        self.libraries: List[Library] = []
        self.arguments: Dict[str, Any] = {}
        self.logging: Dict[str, Any] = {}

    def load(self, data: Mapping[str, Any]) -> "DetailBuffer":
        """Fill the buffer from a parsed detail document.

        Raises KeyError/TypeError/ValueError on a malformed document.
        """
        self.identifier = data["id"]
        self.kind = VersionKind(data.get("type"))
        self.type_name = data.get("type") or ""
        self.main_class = data.get("mainClass", "")
        self.assets = data.get("assets", "")
        self.compliance_level = int(data.get("complianceLevel", 0))
        self.minimum_launcher_version = int(data.get("minimumLauncherVersion", 0))
        self.publish_time = parse_timestamp(data.get("time"))
        self.release_time = parse_timestamp(data.get("releaseTime"))
        if data.get("assetIndex"):
            self.asset_index = AssetIndex.from_dict(data["assetIndex"])
        for name, download in (data.get("downloads") or {}).items():
            self.downloads[name] = Download.from_dict(download)
        if data.get("javaVersion"):
            self.java_version = JavaVersion.from_dict(data["javaVersion"])
        self.libraries.extend(Library.from_dict(lib) for lib in data.get("libraries") or ())
        self.arguments.update(data.get("arguments") or {})
        self.logging.update(data.get("logging") or {})
        return self

    def freeze(self) -> VersionDetail:
        """Snapshot the buffer into an immutable VersionDetail it does not alias."""
        return VersionDetail(
            identifier=self.identifier,
            kind=self.kind,
            type_name=self.type_name,
            main_class=self.main_class,
            assets=self.assets,
            compliance_level=self.compliance_level,
            minimum_launcher_version=self.minimum_launcher_version,
            publish_time=self.publish_time,
            release_time=self.release_time,
            asset_index=self.asset_index,
            downloads=dict(self.downloads),
            java_version=self.java_version,
            libraries=tuple(self.libraries),
            arguments=dict(self.arguments),
            logging=dict(self.logging),
        )


class DetailPool:
    """Thread-safe free list of DetailBuffer objects."""

    def __init__(self, max_idle: int = Constants.DETAIL_POOL_MAX_IDLE):
        """Initialize the pool.

        Args:
            max_idle: Upper bound on buffers kept for reuse; extra
                released buffers are dropped.
        """
        self._max_idle = max_idle
        self._free: List[DetailBuffer] = []
        self._lock = threading.Lock()
        self._created = 0
        self._reused = 0

    def acquire(self) -> DetailBuffer:
        with self._lock:
            if self._free:
                self._reused += 1
                return self._free.pop()
            self._created += 1
        return DetailBuffer()

    def release(self, buffer: DetailBuffer) -> None:
        buffer.reset()
        with self._lock:
            if len(self._free) < self._max_idle:
                self._free.append(buffer)

    @contextmanager
    def borrow(self) -> Iterator[DetailBuffer]:
        """Hold a buffer for the duration of the block, then release it."""
        buffer = self.acquire()
        try:
            yield buffer
        finally:
            self.release(buffer)

    def stats(self) -> Dict[str, int]:
        """Get pool statistics."""
        with self._lock:
            return {
                "created": self._created,
                "reused": self._reused,
                "idle": len(self._free),
                "max_idle": self._max_idle,
            }
