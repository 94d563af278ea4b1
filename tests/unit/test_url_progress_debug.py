# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import httpx
import pytest

from httpengine.errors import InvalidURL
from httpengine.http.debug import REDACTED, to_curl
from httpengine.http.models import Credentials, TransportRequest, coerce_body
from httpengine.http.progress import ProgressUpload, content_length, fraction
from httpengine.http.url import parameters_in_query, validate_url


def test_validate_url_accepts_absolute_urls():
    assert validate_url("https://example.test/a?b=1") == "https://example.test/a?b=1"
    assert validate_url("  http://example.test  ") == "http://example.test"
    assert validate_url(httpx.URL("http://example.test/x")) == "http://example.test/x"


@pytest.mark.parametrize(
    "value",
    ["", "example.test/path", "/relative", "http://", 42, "http://exa mple.com/", "http://exa<mple.com/", "http://exa\tmple.com/"],
)
def test_validate_url_rejects(value):
    with pytest.raises(InvalidURL):
        validate_url(value)


def test_parameters_in_query_is_method_dependent():
    assert parameters_in_query("GET") is True
    assert parameters_in_query("delete") is True
    assert parameters_in_query("POST") is False
    assert parameters_in_query("PUT") is False


def test_fraction_clamps_and_handles_unknown_total():
    assert fraction(5, 10) == 0.5
    assert fraction(15, 10) == 1.0
    assert fraction(-1, 10) == 0.0
    assert fraction(3, None) is None
    assert fraction(3, 0) is None


def test_content_length_parsing():
    assert content_length({"content-length": "12"}) == 12
    assert content_length(httpx.Headers({"Content-Length": "7"})) == 7
    assert content_length({"content-length": "abc"}) is None
    assert content_length({"content-length": "-3"}) is None
    assert content_length({}) is None
    assert content_length(None) is None


def test_progress_upload_yields_payload_verbatim():
    seen: list[float] = []
    payload = b"0123456789"
    upload = ProgressUpload(payload, chunk_size=3, monitor=seen.append)
    assert len(upload) == 10
    assert b"".join(upload) == payload
    assert seen == pytest.approx([0.3, 0.6, 0.9, 1.0])
    # Iterable more than once (redirects may resend the body).
    assert b"".join(upload) == payload


def test_progress_upload_empty_payload_reports_nothing():
    seen: list[float] = []
    assert list(ProgressUpload(b"", chunk_size=4, monitor=seen.append)) == []
    assert seen == []


def test_coerce_body():
    assert coerce_body(b"a") == b"a"
    assert coerce_body(bytearray(b"b")) == b"b"
    assert coerce_body(memoryview(b"c")) == b"c"
    assert coerce_body("d") == b"d"
    with pytest.raises(TypeError):
        coerce_body(123)  # type: ignore[arg-type]


def test_to_curl_redacts_credentials_and_auth_headers():
    line = to_curl(
        TransportRequest(
            url="http://example.test/x",
            method="GET",
            headers={"Authorization": "Bearer secret", "X-Test": "1"},
            parameters={"q": "1"},
            credentials=Credentials("user", "hunter2"),
        )
    )
    assert "hunter2" not in line
    assert "secret" not in line
    assert f"user:{REDACTED}" in line
    assert "'X-Test: 1'" in line
    assert line.endswith("'http://example.test/x?q=1'")


def test_to_curl_body_and_form_parameters():
    form = to_curl(TransportRequest(url="http://example.test/", method="POST", parameters={"a": "1"}))
    assert "--data a=1" in form
    body = to_curl(TransportRequest(url="http://example.test/", method="PUT", content=b"x" * 300))
    assert "--data-binary" in body
    assert "[300 bytes]" in body
