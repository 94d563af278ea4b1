# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Future-returning HTTP engine built on a pluggable Transport."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from concurrent.futures import Executor, Future, wait
from contextlib import suppress
from types import MappingProxyType
from typing import Protocol

import httpx

from .config import HttpSettings, load_http_settings
from .errors import categorize_exception
from .executors import get_callback_executor, get_dispatch_executor
from .http.client import Transport, create_default_transport, get_default_transport
from .http.debug import to_curl
from .http.models import (
    Credentials,
    HttpMethod,
    HttpRequest,
    ProgressMonitor,
    RequestTarget,
    ResponseOutcome,
    TransportRequest,
    coerce_body,
)
from .http.url import validate_url

Body = bytes | bytearray | memoryview | str


class HttpEngine(Protocol):
    """Verb-level HTTP abstraction. Every call resolves its future exactly once."""

    def get(self, body: Body | None = None) -> Future[bytes | None]: ...

    def put(self, body: Body | None = None) -> Future[bytes | None]: ...

    def post(self, body: Body | None = None) -> Future[bytes | None]: ...

    def delete(self) -> Future[bytes | None]: ...


def _frozen(mapping: Mapping[str, str] | None) -> Mapping[str, str] | None:
    if mapping is None:
        return None
    return MappingProxyType({str(k): str(v) for k, v in mapping.items()})


class RequestEngine(HttpEngine):
    """
    Issues one HTTP request per call against a fixed target.

    Transport work runs on the shared dispatch pool. Progress callbacks and
    response processing run on ``executor`` (the shared callback pool unless one
    is given); pass a single-worker executor to serialise response handling.
    HTTP error statuses are not failures unless ``settings.validate_status`` is set.
    """

    def __init__(
        self,
        url: str | httpx.URL,
        *,
        parameters: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        credentials: Credentials | None = None,
        progress_monitor: ProgressMonitor | None = None,
        executor: Executor | None = None,
        transport: Transport | None = None,
        settings: HttpSettings | None = None,
        logger: logging.Logger | None = None,
    ):
        self.target = RequestTarget(
            url=validate_url(url),
            parameters=_frozen(parameters),
            headers=_frozen(headers),
            credentials=credentials,
            progress_monitor=progress_monitor,
        )
        self.settings = settings or load_http_settings()
        self.executor = executor or get_callback_executor()
        self.logger = logger or logging.getLogger(__name__)

        self._owns_transport = False
        if transport is not None:
            self.transport = transport
        elif settings is not None:
            self.transport = create_default_transport(settings)
            self._owns_transport = True
        else:
            self.transport = get_default_transport()

    @property
    def url(self) -> str:
        return self.target.url

    def get(self, body: Body | None = None) -> Future[bytes | None]:
        return self.send(HttpRequest(HttpMethod.GET, None if body is None else coerce_body(body)))

    def put(self, body: Body | None = None) -> Future[bytes | None]:
        return self.send(HttpRequest(HttpMethod.PUT, None if body is None else coerce_body(body)))

    def post(self, body: Body | None = None) -> Future[bytes | None]:
        return self.send(HttpRequest(HttpMethod.POST, None if body is None else coerce_body(body)))

    def delete(self) -> Future[bytes | None]:
        return self.send(HttpRequest(HttpMethod.DELETE))

    def send(self, request: HttpRequest) -> Future[bytes | None]:
        """Start ``request`` in the background and return its future immediately."""
        if request.has_body:
            self.logger.debug("%s data - %s", request.method, self.url)
        else:
            self.logger.debug("%s - %s", request.method, self.url)

        future: Future[bytes | None] = Future()
        # Marked running up front so callers cannot cancel an issued request.
        future.set_running_or_notify_cancel()
        get_dispatch_executor().submit(self._dispatch, self._build_transport_request(request), future)
        return future

    def _build_transport_request(self, request: HttpRequest) -> TransportRequest:
        headers = dict(self.target.headers or {})
        if not any(name.lower() == "user-agent" for name in headers):
            headers["User-Agent"] = self.settings.user_agent

        parameters = None
        if not request.has_body and self.target.parameters:
            parameters = dict(self.target.parameters)

        return TransportRequest(
            url=self.url,
            method=request.method.value,
            headers=headers,
            parameters=parameters,
            content=request.body,
            credentials=self.target.credentials,
        )

    def _dispatch(self, request: TransportRequest, future: Future[bytes | None]) -> None:
        try:
            self._run(request, future)
        except BaseException as exc:
            self._fail_unsettled(future, exc)
            if not isinstance(exc, Exception):
                raise

    def _run(self, request: TransportRequest, future: Future[bytes | None]) -> None:
        # Only callbacks still in flight are tracked; settled ones drop out.
        pending: set[Future[None]] = set()
        pending_lock = threading.Lock()
        monitor = self.target.progress_monitor
        if monitor is not None:

            def settled(done: Future[None]) -> None:
                with pending_lock:
                    pending.discard(done)
                exc = done.exception()
                if exc is not None:
                    self.logger.debug("Progress monitor for %s raised %r", self.url, exc)

            def report(value: float) -> None:
                value = min(1.0, max(0.0, value))
                try:
                    submitted = self.executor.submit(monitor, value)
                except RuntimeError:
                    # Caller's executor was shut down; deliver on this thread instead.
                    self._notify_inline(monitor, value)
                    return
                with pending_lock:
                    pending.add(submitted)
                submitted.add_done_callback(settled)

            request.on_download_progress = report
            if request.content is not None:
                request.on_upload_progress = report

        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug("%s", to_curl(request))

        try:
            outcome = self.transport.send(request)
        except Exception as exc:  # noqa: BLE001
            outcome = ResponseOutcome(url=request.url, error=exc)
        if not isinstance(outcome, ResponseOutcome):
            outcome = ResponseOutcome(
                url=request.url,
                error=TypeError(f"Transport returned {type(outcome).__name__}, expected ResponseOutcome"),
            )

        # Progress callbacks for this request finish before its resolution.
        with pending_lock:
            outstanding = list(pending)
        wait(outstanding)

        try:
            self.executor.submit(self._settle, outcome, future)
        except RuntimeError:
            # Caller's executor was shut down; resolve here so the future still settles.
            self._settle(outcome, future)

    def _notify_inline(self, monitor: ProgressMonitor, value: float) -> None:
        try:
            monitor(value)
        except Exception as exc:  # noqa: BLE001
            self.logger.debug("Progress monitor for %s raised %r", self.url, exc)

    def _settle(self, outcome: ResponseOutcome, future: Future[bytes | None]) -> None:
        try:
            self._process(outcome, future)
        except BaseException as exc:
            self._fail_unsettled(future, exc)
            if not isinstance(exc, Exception):
                raise

    @staticmethod
    def _fail_unsettled(future: Future[bytes | None], exc: BaseException) -> None:
        if not future.done():
            future.set_exception(exc)

    def _process(self, outcome: ResponseOutcome, future: Future[bytes | None]) -> None:
        if outcome.status_code is not None:
            reason = outcome.reason_phrase or httpx.codes.get_reason_phrase(outcome.status_code)
            self.logger.debug(
                "Server responded to request made to %s with: %s - %s",
                self.url,
                outcome.status_code,
                reason,
            )
        else:
            self.logger.warning("Unable to determine server response to request made to %s", self.url)

        if outcome.error is None:
            future.set_result(outcome.content)
            return

        self.logger.error(
            "Request to %s failed with %r (%s)",
            self.url,
            outcome.error,
            categorize_exception(outcome.error).value,
        )
        future.set_exception(outcome.error)

    def close(self) -> None:
        """Release a transport this engine created for its own settings."""
        if self._owns_transport:
            with suppress(Exception):
                self.transport.close()

    def __enter__(self) -> RequestEngine:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


__all__ = ["Body", "HttpEngine", "RequestEngine"]
