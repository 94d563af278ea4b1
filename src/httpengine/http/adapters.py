# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Programmable Transport implementations."""

from __future__ import annotations

from collections.abc import Sequence

from .client import Transport
from .models import ResponseOutcome, TransportRequest


class StubTransport(Transport):
    """Deterministic, programmable Transport for tests and offline callers.

    Registered outcomes are keyed by URL. ``progress`` fractions are replayed
    to the request's progress callbacks before the outcome is returned.
    """

    def __init__(
        self,
        outcomes: dict[str, ResponseOutcome] | None = None,
        *,
        upload_progress: Sequence[float] = (),
        download_progress: Sequence[float] = (),
    ):
        self._outcomes = outcomes or {}
        self.upload_progress = list(upload_progress)
        self.download_progress = list(download_progress)
        self.requests: list[TransportRequest] = []
        self.closed = False

    def add(self, url: str, outcome: ResponseOutcome) -> None:
        self._outcomes[url] = outcome

    def send(self, request: TransportRequest) -> ResponseOutcome:
        self.requests.append(request)
        if request.on_upload_progress is not None and request.content is not None:
            for value in self.upload_progress:
                request.on_upload_progress(value)
        if request.on_download_progress is not None:
            for value in self.download_progress:
                request.on_download_progress(value)
        if request.url in self._outcomes:
            return self._outcomes[request.url]
        return ResponseOutcome(url=request.url, error=ConnectionError("No stubbed response configured"))

    def close(self) -> None:
        self.closed = True


__all__ = ["StubTransport"]
