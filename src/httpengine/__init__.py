# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
httpengine package entrypoint.

A small HTTP engine that issues one request per call and hands back a
``concurrent.futures.Future`` resolving to the raw response body. The actual
networking is done by httpx behind an injectable Transport interface.
"""

from .config import HttpSettings, load_http_settings
from .engine import HttpEngine, RequestEngine
from .errors import HttpEngineError, InvalidURL
from .executors import shutdown_default_executors
from .http import (
    Credentials,
    HttpMethod,
    HttpRequest,
    HttpxTransport,
    ProgressMonitor,
    ResponseOutcome,
    StubTransport,
    Transport,
    close_default_transport,
    create_default_transport,
)
from .log import setup_logging
from .version import __version__

__all__ = [
    "Credentials",
    "HttpEngine",
    "HttpEngineError",
    "HttpMethod",
    "HttpRequest",
    "HttpSettings",
    "HttpxTransport",
    "InvalidURL",
    "ProgressMonitor",
    "RequestEngine",
    "ResponseOutcome",
    "StubTransport",
    "Transport",
    "close_default_transport",
    "create_default_transport",
    "load_http_settings",
    "setup_logging",
    "shutdown_default_executors",
    "__version__",
]
