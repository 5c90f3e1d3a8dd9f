"""Shared HTTP helper used by the launcher metadata clients.

One GET, strict status and content-type checks, JSON decode. Failures are
raised as typed ``FetchError`` subclasses so callers can tell transport,
protocol and payload problems apart without reading messages. This module
is dependency-light and can be imported without pulling in the resolver.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Callable, Optional, TypeVar

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FetchError(Exception):
    """Base class for failures while fetching a JSON document."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{url}: {message}")
        self.url = url


class TransportError(FetchError):
    """The connection or request itself failed."""


class HTTPStatusError(FetchError):
    """The server answered with a status code >= 400."""

    def __init__(self, url: str, status: int, reason: str = ""):
        super().__init__(url, f"{status} {reason}".strip())
        self.status = status
        self.reason = reason


class UnexpectedContentTypeError(FetchError):
    """The response was not declared as application/json."""

    def __init__(self, url: str, content_type: Optional[str]):
        super().__init__(url, f"unexpected content type: {content_type or ''}")
        self.content_type = content_type


class DecodeError(FetchError):
    """The body was not valid JSON or did not have the expected shape."""


def _close(url: str, res: Any) -> None:
    try:
        res.close()
    except (OSError, requests.RequestException) as exc:
        raise TransportError(url, f"closing response failed: {exc}") from exc


def _close_quietly(url: str, res: Any) -> None:
    try:
        res.close()
    except (OSError, requests.RequestException) as exc:
        if is_debug_enabled(logger):
            logger.debug(
                "Closing failed response errored",
                extra=extra_context(
                    event="http_exception",
                    component="http_client",
                    action="close",
                    outcome="close_error",
                    error=type(exc).__name__,
                    target=safe_url(url),
                ),
            )


def _decode(url: str, res: Any, decoder: Optional[Callable[[Any], T]]) -> Any:
    if res.status_code >= 400:
        raise HTTPStatusError(url, res.status_code, getattr(res, "reason", "") or "")
    content_type = res.headers.get("Content-Type")
    if content_type != Constants.JSON_CONTENT_TYPE:
        raise UnexpectedContentTypeError(url, content_type)
    try:
        payload = json.loads(res.content)
    except ValueError as exc:  # includes json.JSONDecodeError and UnicodeDecodeError
        raise DecodeError(url, f"invalid JSON body: {exc}") from exc
    if decoder is None:
        return payload
    try:
        return decoder(payload)
    except (KeyError, TypeError, ValueError) as exc:
        raise DecodeError(url, f"unexpected document shape: {exc!r}") from exc


def fetch_json(
    url: str,
    *,
    context: str,
    decoder: Optional[Callable[[Any], T]] = None,
    session: Any = None,
    timeout: float = Constants.REQUEST_TIMEOUT,
) -> Any:
    """Fetch ``url`` and decode its JSON body.

    Args:
        url: Absolute URL to GET.
        context: Short source tag for DEBUG traces (e.g. "manifest", "detail").
        decoder: Optional callable turning the parsed JSON into a value;
            KeyError/TypeError/ValueError raised by it become DecodeError.
        session: Object with a requests-style ``get(url, timeout=...)``;
            defaults to the ``requests`` module.
        timeout: Per-request deadline in seconds.

    Returns:
        The decoded value (or the raw parsed JSON when no decoder is given).

    Raises:
        TransportError, HTTPStatusError, UnexpectedContentTypeError, DecodeError
    """
    getter = session if session is not None else requests
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context,
                ),
            )
        try:
            res = getter.get(url, timeout=timeout)
        except requests.RequestException as exc:  # includes ConnectionError and Timeout
            raise TransportError(url, str(exc)) from exc

        try:
            value = _decode(url, res, decoder)
        except Exception:  # pylint: disable=broad-exception-caught
            # the decode error wins over a failing close
            _close_quietly(url, res)
            raise
        _close(url, res)

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response ok",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success",
                    status_code=res.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target,
                    context=context,
                ),
            )
        return value
