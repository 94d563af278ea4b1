# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers."""

from __future__ import annotations

from urllib.parse import urlsplit

import httpx

from ..errors import InvalidURL

# GET and DELETE carry parameters in the query string; other methods send a form body.
QUERY_PARAMETER_METHODS = frozenset({"GET", "HEAD", "DELETE"})
_ILLEGAL_HOST_CHARS = frozenset(' <>"{}|\\^`')


def validate_url(url: object) -> str:
    """
    Return ``url`` as a string if it is a usable absolute URL, else raise InvalidURL.

    Accepts ``str`` and ``httpx.URL``. A scheme and a host are both required.
    """
    if isinstance(url, httpx.URL):
        url = str(url)
    if not isinstance(url, str):
        raise InvalidURL(url, "expected a string")

    raw = url.strip()
    if not raw:
        raise InvalidURL(url, "empty")

    try:
        parts = urlsplit(raw)
    except ValueError as exc:
        raise InvalidURL(url, str(exc)) from exc
    if not parts.scheme:
        raise InvalidURL(url, "missing scheme")
    if not parts.netloc:
        raise InvalidURL(url, "missing host")
    host = parts.hostname or ""
    if any(ch in _ILLEGAL_HOST_CHARS or ch.isspace() or not ch.isprintable() for ch in host):
        raise InvalidURL(url, "illegal character in host")

    try:
        parsed = httpx.URL(raw)
    except httpx.InvalidURL as exc:
        raise InvalidURL(url, str(exc)) from exc
    if not parsed.host:
        raise InvalidURL(url, "missing host")

    return raw


def parameters_in_query(method: str) -> bool:
    """Return True when parameters for ``method`` belong in the query string."""
    return str(method).upper() in QUERY_PARAMETER_METHODS


__all__ = ["QUERY_PARAMETER_METHODS", "parameters_in_query", "validate_url"]
