# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Shared background executors.

Requests are dispatched on one pool and their callbacks (progress, response
processing) run on another, so a dispatch worker waiting on callbacks can never
starve the pool it waits on.
"""

from __future__ import annotations

import threading
from concurrent.futures import Executor, ThreadPoolExecutor

from .config import load_http_settings

_lock = threading.Lock()
_dispatch_executor: ThreadPoolExecutor | None = None
_callback_executor: ThreadPoolExecutor | None = None


def _new_pool(prefix: str) -> ThreadPoolExecutor:
    return ThreadPoolExecutor(max_workers=load_http_settings().max_workers, thread_name_prefix=prefix)


def get_dispatch_executor() -> Executor:
    """Return the shared pool that runs transport calls."""
    global _dispatch_executor
    with _lock:
        if _dispatch_executor is None:
            _dispatch_executor = _new_pool("httpengine-dispatch")
        return _dispatch_executor


def get_callback_executor() -> Executor:
    """Return the shared pool used as the default execution context for callbacks."""
    global _callback_executor
    with _lock:
        if _callback_executor is None:
            _callback_executor = _new_pool("httpengine-callback")
        return _callback_executor


def shutdown_default_executors(wait: bool = True) -> None:
    """Shut down both shared pools; they are recreated lazily on next use."""
    global _dispatch_executor, _callback_executor
    with _lock:
        pools = [_dispatch_executor, _callback_executor]
        _dispatch_executor = None
        _callback_executor = None
    for pool in pools:
        if pool is not None:
            pool.shutdown(wait=wait)


__all__ = ["get_callback_executor", "get_dispatch_executor", "shutdown_default_executors"]
