"""Data models for the launcher version manifest and per-version details."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple


class VersionKind(Enum):
    """Upstream classification of a version."""
    RELEASE = "release"
    SNAPSHOT = "snapshot"
    OLD_BETA = "old_beta"
    OLD_ALPHA = "old_alpha"
    OTHER = "other"

    @classmethod
    def _missing_(cls, value: object) -> "VersionKind":
        return cls.OTHER


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as served upstream ("Z" suffix accepted)."""
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class ManifestEntry:
    """One version listed in the manifest, pointing at its detail document."""
    identifier: str
    kind: VersionKind
    detail_url: str
    publish_time: Optional[datetime]
    release_time: Optional[datetime]
    type_name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ManifestEntry":
        return cls(
            identifier=data["id"],
            kind=VersionKind(data.get("type")),
            detail_url=data["url"],
            publish_time=parse_timestamp(data.get("time")),
            release_time=parse_timestamp(data.get("releaseTime")),
            type_name=data.get("type") or "",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.identifier,
            "type": self.type_name or self.kind.value,
            "url": self.detail_url,
            "time": _format_timestamp(self.publish_time),
            "releaseTime": _format_timestamp(self.release_time),
        }


@dataclass(frozen=True)
class ManifestEntryV2(ManifestEntry):
    """Manifest entry from the v2 document, with content hash and compliance level."""
    sha1: str = ""
    compliance_level: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ManifestEntryV2":
        base = ManifestEntry.from_dict(data)
        return cls(
            identifier=base.identifier,
            kind=base.kind,
            detail_url=base.detail_url,
            publish_time=base.publish_time,
            release_time=base.release_time,
            type_name=base.type_name,
            sha1=data.get("sha1", ""),
            compliance_level=int(data.get("complianceLevel", 0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        out = super().to_dict()
        out["sha1"] = self.sha1
        out["complianceLevel"] = self.compliance_level
        return out


@dataclass(frozen=True)
class Manifest:
    """Top-level manifest: the two latest pointers and every known version."""
    latest_release: str
    latest_snapshot: str
    entries: Tuple[ManifestEntry, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Manifest":
        latest = data.get("latest") or {}
        return cls(
            latest_release=latest.get("release", ""),
            latest_snapshot=latest.get("snapshot", ""),
            entries=tuple(ManifestEntry.from_dict(v) for v in data["versions"]),
        )

    def __iter__(self) -> Iterator[ManifestEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def find(self, identifier: str) -> Optional[ManifestEntry]:
        """Return the entry with ``identifier`` or None (linear scan)."""
        for entry in self.entries:
            if entry.identifier == identifier:
                return entry
        return None

    def ids(self) -> List[str]:
        return [entry.identifier for entry in self.entries]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latest": {"release": self.latest_release, "snapshot": self.latest_snapshot},
            "versions": [entry.to_dict() for entry in self.entries],
        }


@dataclass(frozen=True)
class ManifestV2(Manifest):
    """The v2 manifest; entries are ManifestEntryV2."""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ManifestV2":
        latest = data.get("latest") or {}
        return cls(
            latest_release=latest.get("release", ""),
            latest_snapshot=latest.get("snapshot", ""),
            entries=tuple(ManifestEntryV2.from_dict(v) for v in data["versions"]),
        )

    def to_manifest(self) -> Manifest:
        """Drop the v2-only fields."""
        return Manifest(
            latest_release=self.latest_release,
            latest_snapshot=self.latest_snapshot,
            entries=tuple(
                ManifestEntry(
                    identifier=e.identifier,
                    kind=e.kind,
                    detail_url=e.detail_url,
                    publish_time=e.publish_time,
                    release_time=e.release_time,
                    type_name=e.type_name,
                )
                for e in self.entries
            ),
        )


@dataclass(frozen=True)
class Download:
    sha1: str
    size: int
    url: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Download":
        return cls(sha1=data.get("sha1", ""), size=int(data.get("size", 0)), url=data.get("url", ""))


@dataclass(frozen=True)
class AssetIndex:
    id: str
    sha1: str
    size: int
    total_size: int
    url: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AssetIndex":
        return cls(
            id=data.get("id", ""),
            sha1=data.get("sha1", ""),
            size=int(data.get("size", 0)),
            total_size=int(data.get("totalSize", 0)),
            url=data.get("url", ""),
        )


@dataclass(frozen=True)
class JavaVersion:
    component: str
    major_version: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "JavaVersion":
        return cls(component=data.get("component", ""), major_version=int(data.get("majorVersion", 0)))


@dataclass(frozen=True)
class LibraryArtifact:
    path: str
    sha1: str
    size: int
    url: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LibraryArtifact":
        return cls(
            path=data.get("path", ""),
            sha1=data.get("sha1", ""),
            size=int(data.get("size", 0)),
            url=data.get("url", ""),
        )


@dataclass(frozen=True)
class Library:
    """A runtime library; rules, natives and extract hints are kept verbatim."""
    name: str
    artifact: Optional[LibraryArtifact] = None
    rules: Tuple[Dict[str, Any], ...] = ()
    natives: Dict[str, str] = field(default_factory=dict)
    extract: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Library":
        artifact = (data.get("downloads") or {}).get("artifact")
        return cls(
            name=data["name"],
            artifact=LibraryArtifact.from_dict(artifact) if artifact else None,
            rules=tuple(data.get("rules") or ()),
            natives=dict(data.get("natives") or {}),
            extract=dict(data.get("extract") or {}),
        )


@dataclass(frozen=True)
class VersionDetail:
    """Full detail document for one version.

    Only ``identifier`` and ``kind`` are interpreted by the resolver; the
    rest is carried for callers. ``arguments`` and ``logging`` stay in
    their upstream JSON form.
    """
    identifier: str
    kind: VersionKind
    type_name: str = ""
    main_class: str = ""
    assets: str = ""
    compliance_level: int = 0
    minimum_launcher_version: int = 0
    publish_time: Optional[datetime] = None
    release_time: Optional[datetime] = None
    asset_index: Optional[AssetIndex] = None
    downloads: Dict[str, Download] = field(default_factory=dict)
    java_version: Optional[JavaVersion] = None
    libraries: Tuple[Library, ...] = ()
    arguments: Dict[str, Any] = field(default_factory=dict)
    logging: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.identifier,
            "type": self.type_name or self.kind.value,
            "mainClass": self.main_class,
            "assets": self.assets,
            "complianceLevel": self.compliance_level,
            "minimumLauncherVersion": self.minimum_launcher_version,
            "time": _format_timestamp(self.publish_time),
            "releaseTime": _format_timestamp(self.release_time),
            "assetIndex": None if self.asset_index is None else {
                "id": self.asset_index.id,
                "sha1": self.asset_index.sha1,
                "size": self.asset_index.size,
                "totalSize": self.asset_index.total_size,
                "url": self.asset_index.url,
            },
            "downloads": {
                name: {"sha1": d.sha1, "size": d.size, "url": d.url}
                for name, d in self.downloads.items()
            },
            "javaVersion": None if self.java_version is None else {
                "component": self.java_version.component,
                "majorVersion": self.java_version.major_version,
            },
            "libraries": [_library_to_dict(lib) for lib in self.libraries],
            "arguments": self.arguments,
            "logging": self.logging,
        }


def _library_to_dict(lib: Library) -> Dict[str, Any]:
    out: Dict[str, Any] = {"name": lib.name}
    if lib.artifact is not None:
        out["downloads"] = {"artifact": {
            "path": lib.artifact.path,
            "sha1": lib.artifact.sha1,
            "size": lib.artifact.size,
            "url": lib.artifact.url,
        }}
    if lib.rules:
        out["rules"] = list(lib.rules)
    if lib.natives:
        out["natives"] = lib.natives
    if lib.extract:
        out["extract"] = lib.extract
    return out
