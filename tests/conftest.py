"""Shared fixtures: canned launcher metadata served by an in-memory transport."""

import json
import threading
import time

import pytest
import requests

from constants import Constants
from launchermeta import VersionClient, set_default_client

DETAIL_BASE = "https://piston-meta.example/v1/packages"

VERSIONS = [
    ("1.20.1", "release", "2023-06-12T13:25:51+00:00"),
    ("23w31a", "snapshot", "2023-08-01T11:03:31+00:00"),
    ("1.20", "release", "2023-06-02T08:36:17+00:00"),
    ("b1.7.3", "old_beta", "2011-07-07T22:00:00+00:00"),
    ("rd-132211", "old_alpha", "2009-05-13T20:11:00+00:00"),
]


def detail_url(identifier):
    return f"{DETAIL_BASE}/{identifier}.json"


def manifest_doc(versions=VERSIONS, latest=("1.20.1", "23w31a")):
    return {
        "latest": {"release": latest[0], "snapshot": latest[1]},
        "versions": [
            {
                "id": vid,
                "type": vtype,
                "url": detail_url(vid),
                "time": released,
                "releaseTime": released,
            }
            for vid, vtype, released in versions
        ],
    }


def manifest_v2_doc(versions=VERSIONS):
    doc = manifest_doc(versions)
    for i, entry in enumerate(doc["versions"]):
        entry["sha1"] = f"{i:040x}"
        entry["complianceLevel"] = 1 if entry["type"] in ("release", "snapshot") else 0
    return doc


def detail_doc(identifier, kind):
    return {
        "id": identifier,
        "type": kind,
        "mainClass": "net.minecraft.client.main.Main",
        "assets": "5",
        "complianceLevel": 1,
        "minimumLauncherVersion": 21,
        "time": "2023-06-12T13:25:51+00:00",
        "releaseTime": "2023-06-12T13:25:51Z",
        "assetIndex": {
            "id": "5",
            "sha1": "ab" * 20,
            "size": 413000,
            "totalSize": 622000000,
            "url": f"{DETAIL_BASE}/assets/5.json",
        },
        "downloads": {
            "client": {"sha1": "cd" * 20, "size": 23000000, "url": f"{DETAIL_BASE}/{identifier}/client.jar"},
            "server": {"sha1": "ef" * 20, "size": 47000000, "url": f"{DETAIL_BASE}/{identifier}/server.jar"},
        },
        "javaVersion": {"component": "java-runtime-gamma", "majorVersion": 17},
        "libraries": [
            {
                "name": "com.mojang:logging:1.1.1",
                "downloads": {"artifact": {
                    "path": "com/mojang/logging/1.1.1/logging-1.1.1.jar",
                    "sha1": "12" * 20,
                    "size": 15000,
                    "url": f"{DETAIL_BASE}/libraries/logging-1.1.1.jar",
                }},
            },
            {
                "name": "org.lwjgl:lwjgl:3.3.1:natives-macos",
                "downloads": {"artifact": {
                    "path": "org/lwjgl/lwjgl/3.3.1/lwjgl-3.3.1-natives-macos.jar",
                    "sha1": "34" * 20,
                    "size": 40000,
                    "url": f"{DETAIL_BASE}/libraries/lwjgl-natives-macos.jar",
                }},
                "rules": [{"action": "allow", "os": {"name": "osx"}}],
            },
        ],
        "arguments": {"game": ["--username", "${auth_player_name}"], "jvm": ["-Xss1M"]},
        "logging": {"client": {"argument": "-Dlog4j.configurationFile=${path}", "type": "log4j2-xml"}},
    }


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, body=b"", status_code=200, content_type=Constants.JSON_CONTENT_TYPE,
                 reason="OK", close_error=None):
        if not isinstance(body, bytes):
            body = json.dumps(body).encode("utf-8")
        self.content = body
        self.status_code = status_code
        self.reason = reason
        self.headers = {} if content_type is None else {"Content-Type": content_type}
        self.closed = False
        self._close_error = close_error

    def close(self):
        self.closed = True
        if self._close_error is not None:
            raise self._close_error


class FakeSession:
    """Transport serving canned responses by URL.

    ``routes`` maps a URL to a FakeResponse, a JSON-able payload, an
    exception instance (raised) or a zero-argument callable returning one
    of those. ``delays`` maps a URL to seconds slept before answering.
    """

    def __init__(self, routes=None, delays=None):
        self.routes = dict(routes or {})
        self.delays = dict(delays or {})
        self.calls = []
        self._lock = threading.Lock()
        self.in_flight = 0
        self.max_in_flight = 0

    def get(self, url, timeout=None):
        with self._lock:
            self.calls.append((url, timeout))
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self.delays.get(url)
            if delay:
                time.sleep(delay)
            route = self.routes.get(url)
            if route is None:
                raise requests.ConnectionError(f"no route for {url}")
            if callable(route) and not isinstance(route, FakeResponse):
                route = route()
            if isinstance(route, Exception):
                raise route
            if isinstance(route, FakeResponse):
                return route
            return FakeResponse(route)
        finally:
            with self._lock:
                self.in_flight -= 1

    def count(self, url):
        with self._lock:
            return sum(1 for called, _ in self.calls if called == url)


def default_routes(versions=VERSIONS):
    routes = {
        Constants.MANIFEST_URL: lambda: FakeResponse(manifest_doc(versions)),
        Constants.MANIFEST_V2_URL: lambda: FakeResponse(manifest_v2_doc(versions)),
    }
    for vid, vtype, _ in versions:
        routes[detail_url(vid)] = (lambda v=vid, t=vtype: FakeResponse(detail_doc(v, t)))
    return routes


@pytest.fixture
def session():
    return FakeSession(default_routes())


@pytest.fixture
def client(session):
    return VersionClient(session, max_workers=4)


@pytest.fixture
def default_client_for(session):
    """Install a VersionClient over the fake transport as the process-wide client."""
    installed = VersionClient(session, max_workers=4)
    set_default_client(installed)
    yield installed
    set_default_client(None)
