# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Debug rendering of outgoing requests."""

from __future__ import annotations

import shlex
from urllib.parse import urlencode

from .models import TransportRequest
from .url import parameters_in_query

REDACTED = "********"
_SENSITIVE_HEADERS = {"authorization", "proxy-authorization", "cookie"}
_BODY_PREVIEW_BYTES = 256


def to_curl(request: TransportRequest) -> str:
    """
    Render a request as a cURL command line for debug logs.

    Credentials and sensitive headers are redacted; bodies are previewed, not dumped.
    """
    parts = ["curl", "-X", request.method]

    if request.credentials is not None:
        parts += ["-u", f"{request.credentials.username}:{REDACTED}"]

    for name, value in (request.headers or {}).items():
        shown = REDACTED if name.lower() in _SENSITIVE_HEADERS else value
        parts += ["-H", f"{name}: {shown}"]

    url = request.url
    if request.parameters:
        encoded = urlencode(sorted(request.parameters.items()))
        if parameters_in_query(request.method):
            url = f"{url}{'&' if '?' in url else '?'}{encoded}"
        else:
            parts += ["--data", encoded]
    elif request.content is not None:
        parts += ["--data-binary", _preview(request.content)]

    parts.append(url)
    return " ".join(shlex.quote(part) for part in parts)


def _preview(content: bytes) -> str:
    if len(content) <= _BODY_PREVIEW_BYTES:
        return content.decode("utf-8", errors="replace")
    head = content[:_BODY_PREVIEW_BYTES].decode("utf-8", errors="replace")
    return f"{head}...[{len(content)} bytes]"


__all__ = ["REDACTED", "to_curl"]
