# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Progress reporting helpers for streamed uploads and downloads."""

from __future__ import annotations

from collections.abc import Iterator

from .models import ProgressMonitor


def fraction(completed: int, total: int | None) -> float | None:
    """Return completed/total clamped to [0.0, 1.0], or None when the total is unknown."""
    if total is None or total <= 0:
        return None
    value = completed / total
    if value < 0.0:
        return 0.0
    if value > 1.0:
        return 1.0
    return value


def content_length(headers) -> int | None:  # noqa: ANN001
    """Parse a Content-Length header from any mapping with ``get``."""
    raw = headers.get("content-length") if headers is not None else None
    if raw is None:
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None
    return value if value >= 0 else None


class ProgressUpload:
    """
    Iterable request body that reports upload progress as chunks are consumed.

    The payload is yielded verbatim; only the chunking is added.
    """

    def __init__(self, payload: bytes, *, chunk_size: int, monitor: ProgressMonitor | None = None):
        self.payload = payload
        self.chunk_size = max(1, chunk_size)
        self.monitor = monitor

    def __len__(self) -> int:
        return len(self.payload)

    def __iter__(self) -> Iterator[bytes]:
        total = len(self.payload)
        sent = 0
        view = memoryview(self.payload)
        while sent < total:
            chunk = bytes(view[sent : sent + self.chunk_size])
            sent += len(chunk)
            yield chunk
            self._report(sent, total)

    def _report(self, sent: int, total: int) -> None:
        if self.monitor is None:
            return
        value = fraction(sent, total)
        if value is not None:
            self.monitor(value)


__all__ = ["ProgressUpload", "content_length", "fraction"]
