# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction and factory."""

from __future__ import annotations

import threading
from contextlib import suppress
from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import ResponseOutcome, TransportRequest


class Transport(Protocol):
    """Minimal protocol for performing one HTTP exchange."""

    def send(self, request: TransportRequest) -> ResponseOutcome: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


def create_default_transport(settings: HttpSettings | None = None) -> Transport:
    """Factory for the default httpx-backed transport."""
    from .httpx_transport import HttpxTransport

    return HttpxTransport(settings or load_http_settings())


_default_transport: Transport | None = None
_default_transport_lock = threading.Lock()


def get_default_transport() -> Transport:
    """Return the process-wide shared transport, creating it on first use."""
    global _default_transport
    with _default_transport_lock:
        if _default_transport is None:
            _default_transport = create_default_transport()
        return _default_transport


def close_default_transport() -> None:
    """Close and forget the shared transport; the next engine builds a fresh one."""
    global _default_transport
    with _default_transport_lock:
        transport, _default_transport = _default_transport, None
    if transport is not None:
        with suppress(Exception):
            transport.close()


__all__ = ["Transport", "close_default_transport", "create_default_transport", "get_default_transport"]
