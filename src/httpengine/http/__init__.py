# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport layer exports."""

from .adapters import StubTransport
from .client import Transport, close_default_transport, create_default_transport, get_default_transport
from .debug import to_curl
from .httpx_transport import HttpxTransport
from .models import (
    Credentials,
    Headers,
    HttpMethod,
    HttpRequest,
    Parameters,
    ProgressMonitor,
    RequestTarget,
    ResponseOutcome,
    TransportRequest,
)
from .url import validate_url

__all__ = [
    "Credentials",
    "Headers",
    "HttpMethod",
    "HttpRequest",
    "HttpxTransport",
    "Parameters",
    "ProgressMonitor",
    "RequestTarget",
    "ResponseOutcome",
    "StubTransport",
    "Transport",
    "TransportRequest",
    "close_default_transport",
    "create_default_transport",
    "get_default_transport",
    "to_curl",
    "validate_url",
]
