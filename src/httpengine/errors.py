# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from enum import Enum
from typing import Optional


class HttpEngineError(Exception):
    """Base class for errors raised by httpengine itself."""


class InvalidURL(HttpEngineError, ValueError):
    """The configured URL cannot be used as an absolute request URL."""

    def __init__(self, url: object, reason: str | None = None):
        self.url = url
        self.reason = reason
        message = f"Invalid URL: {url!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    HTTP_STATUS = "HTTP_STATUS"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


def categorize_exception(exc: Optional[BaseException]) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.

    Only used to annotate log lines; the exception itself is never replaced.
    """
    import socket
    import ssl as ssl_module

    import httpx

    if exc is None:
        return ErrorCategory.NONE

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, httpx.HTTPStatusError):
        return ErrorCategory.HTTP_STATUS

    # httpx wraps the socket/ssl error; look at the cause before the wrapper.
    cause = exc.__cause__ or exc.__context__
    for candidate in (cause, exc):
        if isinstance(candidate, (ssl_module.SSLError, ssl_module.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(candidate, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


__all__ = ["ErrorCategory", "HttpEngineError", "InvalidURL", "categorize_exception"]
