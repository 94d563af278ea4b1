# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import io

import pytest

from httpengine.cli import main as cli
from httpengine.http.adapters import StubTransport
from httpengine.http.models import ResponseOutcome

URL = "http://example.test/items"


@pytest.fixture
def stub(monkeypatch):
    transport = StubTransport({URL: ResponseOutcome(status_code=200, content=b"hello")}, download_progress=[1.0])
    captured = {}

    def factory(settings):
        captured["settings"] = settings
        return transport

    monkeypatch.setattr("httpengine.engine.create_default_transport", factory)
    transport.captured = captured
    return transport


def test_cli_get_writes_body(stub, capsysbinary):
    code = cli.main([URL, "-H", "X-Test: 1", "-p", "q=1", "-u", "user:pw"])
    out = capsysbinary.readouterr().out
    assert code == cli.EXIT_OK
    assert out == b"hello"
    sent = stub.requests[0]
    assert sent.method == "GET"
    assert sent.headers["X-Test"] == "1"
    assert sent.parameters == {"q": "1"}
    assert sent.credentials.username == "user"
    assert sent.credentials.password == "pw"
    assert stub.closed is True


def test_cli_post_data_and_progress(stub, capsys):
    code = cli.main([URL, "-X", "post", "--data", "payload", "--progress", "--insecure"])
    err = capsys.readouterr().err
    assert code == cli.EXIT_OK
    assert stub.requests[0].method == "POST"
    assert stub.requests[0].content == b"payload"
    assert stub.requests[0].parameters is None
    assert "progress: 100.0%" in err
    assert stub.captured["settings"].verify_ssl is False


def test_cli_data_file(stub, tmp_path, capsys):
    body = tmp_path / "body.bin"
    body.write_bytes(b"\x00\x01")
    assert cli.main([URL, "-X", "PUT", "--data-file", str(body)]) == cli.EXIT_OK
    assert stub.requests[0].content == b"\x00\x01"
    capsys.readouterr()


def test_cli_reports_transport_failure(stub, capsys):
    stub.add(URL, ResponseOutcome(error=ConnectionError("offline")))
    code = cli.main([URL])
    assert code == cli.EXIT_REQUEST_FAILED
    assert "offline" in capsys.readouterr().err


def test_cli_invalid_url(stub, capsys):
    assert cli.main(["not a url"]) == cli.EXIT_USAGE
    assert "Invalid URL" in capsys.readouterr().err
    assert stub.requests == []


@pytest.mark.parametrize(
    "argv",
    [
        [URL, "-X", "DELETE", "--data", "x"],
        [URL, "-H", "no-colon"],
        [URL, "-p", "novalue"],
        [URL, "-u", "nocolon"],
        [URL, "-X", "PATCH"],
    ],
)
def test_cli_usage_errors(stub, argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)
    assert excinfo.value.code == cli.EXIT_USAGE
    assert stub.requests == []
    capsys.readouterr()


def test_progress_printer_formats_percentage():
    stream = io.StringIO()
    cli.progress_printer(stream)(0.5)
    assert stream.getvalue() == "\rprogress:  50.0%"
