# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Transport implementation."""

from __future__ import annotations

from typing import Any

import httpx

from ..config import HttpSettings, load_http_settings
from .client import Transport
from .models import ResponseOutcome, TransportRequest
from .progress import ProgressUpload, content_length, fraction
from .url import parameters_in_query


class HttpxTransport(Transport):
    """Synchronous httpx client wrapper with basic auth and progress reporting."""

    def __init__(self, settings: HttpSettings | None = None, client: httpx.Client | None = None):
        self.settings = settings or load_http_settings()
        if client is None:
            client_kwargs: dict[str, Any] = {
                "follow_redirects": self.settings.allow_redirects,
                "verify": self.settings.verify_ssl,
            }
            if self.settings.timeout is not None:
                client_kwargs["timeout"] = self.settings.timeout
            client = httpx.Client(**client_kwargs)
        self._client = client

    def send(self, request: TransportRequest) -> ResponseOutcome:
        headers = dict(request.headers or {})
        kwargs: dict[str, Any] = {"headers": headers}

        if request.credentials is not None:
            kwargs["auth"] = httpx.BasicAuth(request.credentials.username, request.credentials.password)

        if request.content is not None:
            headers.setdefault("Content-Length", str(len(request.content)))
            kwargs["content"] = ProgressUpload(
                request.content,
                chunk_size=self.settings.chunk_size,
                monitor=request.on_upload_progress,
            )
        elif request.parameters:
            if parameters_in_query(request.method):
                kwargs["params"] = dict(request.parameters)
            else:
                kwargs["data"] = dict(request.parameters)

        outcome = ResponseOutcome(url=request.url)
        try:
            with self._client.stream(request.method, request.url, **kwargs) as resp:
                outcome.status_code = resp.status_code
                outcome.reason_phrase = resp.reason_phrase or httpx.codes.get_reason_phrase(resp.status_code)
                outcome.headers = dict(resp.headers)
                outcome.url = str(resp.url)

                total = content_length(resp.headers)
                content = bytearray()
                for chunk in resp.iter_bytes(self.settings.chunk_size):
                    content.extend(chunk)
                    if request.on_download_progress is not None:
                        value = fraction(resp.num_bytes_downloaded, total)
                        if value is not None:
                            request.on_download_progress(value)
                outcome.content = bytes(content)

                if self.settings.validate_status:
                    resp.raise_for_status()
        except Exception as exc:  # noqa: BLE001
            outcome.error = exc
        return outcome

    def close(self) -> None:
        self._client.close()


__all__ = ["HttpxTransport"]
