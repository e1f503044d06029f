"""Centralized network boundary helpers."""

from __future__ import annotations

import urllib.error
import urllib.request


def http_get(url: str, timeout_seconds: float | None = None) -> tuple[int, bytes]:
    """GET `url` and return `(status, body)`.

    Error statuses are returned rather than raised so callers decide what a
    non-success response means. Without `timeout_seconds` the socket default
    applies.
    """
    req = urllib.request.Request(url, method="GET")
    kwargs = {} if timeout_seconds is None else {"timeout": timeout_seconds}
    try:
        with urllib.request.urlopen(req, **kwargs) as resp:  # nosec - caller controls endpoint
            return int(resp.status), resp.read()
    except urllib.error.HTTPError as exc:
        try:
            return int(exc.code), exc.read()
        finally:
            exc.close()
