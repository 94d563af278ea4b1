# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request/response data models shared by the engine and its transports."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum

Headers = dict[str, str]
Parameters = dict[str, str]
ProgressMonitor = Callable[[float], None]


class HttpMethod(str, Enum):
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Credentials:
    """Basic-auth username/password pair. The password is kept out of repr()."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class RequestTarget:
    """Everything an engine needs to know about where and how to send requests."""

    url: str
    parameters: Mapping[str, str] | None = None
    headers: Mapping[str, str] | None = None
    credentials: Credentials | None = None
    progress_monitor: ProgressMonitor | None = None


@dataclass(frozen=True)
class HttpRequest:
    """A single engine operation: the method plus an optional body payload."""

    method: HttpMethod
    body: bytes | None = None

    @property
    def has_body(self) -> bool:
        return self.body is not None


@dataclass
class TransportRequest:
    """Normalized request handed to Transport implementations."""

    url: str
    method: str = "GET"
    headers: Headers = field(default_factory=dict)
    parameters: Parameters | None = None
    content: bytes | None = None
    credentials: Credentials | None = None
    on_upload_progress: ProgressMonitor | None = None
    on_download_progress: ProgressMonitor | None = None


@dataclass
class ResponseOutcome:
    """Result of one transport round trip.

    ``error`` holds the exception raised by the networking library, untouched.
    ``status_code`` is set whenever a response line was received, even if the
    exchange failed afterwards.
    """

    status_code: int | None = None
    reason_phrase: str = ""
    headers: Headers = field(default_factory=dict)
    content: bytes | None = None
    url: str | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def coerce_body(body: bytes | bytearray | memoryview | str) -> bytes:
    """Return the payload as immutable bytes; text is encoded as UTF-8."""
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    raise TypeError(f"Request body must be bytes-like or str, not {type(body).__name__}")
