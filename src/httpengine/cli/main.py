# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpengine CLI: issue a single request and write the response body to stdout."""

from __future__ import annotations

import argparse
import sys
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import TextIO

from ..config import HttpSettings, load_http_settings
from ..engine import RequestEngine
from ..errors import InvalidURL
from ..executors import shutdown_default_executors
from ..http.models import Credentials, HttpMethod, ProgressMonitor
from ..log import setup_logging

EXIT_OK = 0
EXIT_REQUEST_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="httpengine", description="Send one HTTP request and print the response body")
    parser.add_argument("url", help="Absolute request URL")
    parser.add_argument(
        "-X",
        "--method",
        default="GET",
        type=str.upper,
        choices=[method.value for method in HttpMethod],
        help="HTTP method (default: GET)",
    )
    body = parser.add_mutually_exclusive_group()
    body.add_argument("-d", "--data", help="Request body as text")
    body.add_argument("--data-file", type=Path, help="Read the request body from a file")
    parser.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        metavar="NAME: VALUE",
        help="Extra request header (repeatable)",
    )
    parser.add_argument(
        "-p",
        "--param",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Request parameter, sent only when there is no body (repeatable)",
    )
    parser.add_argument("-u", "--user", metavar="USER:PASSWORD", help="Basic authentication credentials")
    parser.add_argument("--progress", action="store_true", help="Print transfer progress to stderr")
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed targets)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: HTTPENGINE_LOG_LEVEL or WARNING)")
    return parser


def _split_pair(raw: str, separator: str) -> tuple[str, str] | None:
    name, sep, value = raw.partition(separator)
    name = name.strip()
    if not sep or not name:
        return None
    return name, value.strip()


def _parse_pairs(parser: argparse.ArgumentParser, values: list[str], separator: str, label: str) -> dict[str, str] | None:
    if not values:
        return None
    pairs: dict[str, str] = {}
    for raw in values:
        pair = _split_pair(raw, separator)
        if pair is None:
            parser.error(f"invalid {label} {raw!r}; expected NAME{separator}VALUE")
        name, value = pair
        pairs[name] = value
    return pairs


def _parse_credentials(parser: argparse.ArgumentParser, raw: str | None) -> Credentials | None:
    if raw is None:
        return None
    username, sep, password = raw.partition(":")
    if not sep or not username:
        parser.error("--user expects USER:PASSWORD")
    return Credentials(username=username, password=password)


def _read_body(args: argparse.Namespace) -> bytes | None:
    if args.data is not None:
        return args.data.encode("utf-8")
    if args.data_file is not None:
        return args.data_file.read_bytes()
    return None


def progress_printer(stream: TextIO) -> ProgressMonitor:
    def report(value: float) -> None:
        stream.write(f"\rprogress: {value * 100:5.1f}%")
        stream.flush()

    return report


def _issue(engine: RequestEngine, method: str, body: bytes | None) -> Future[bytes | None]:
    if method == HttpMethod.DELETE.value:
        return engine.delete()
    verb = {
        HttpMethod.GET.value: engine.get,
        HttpMethod.PUT.value: engine.put,
        HttpMethod.POST.value: engine.post,
    }[method]
    return verb(body)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: HttpSettings = load_http_settings()
    if args.insecure:
        settings.verify_ssl = False

    try:
        body = _read_body(args)
    except OSError as exc:
        parser.error(f"cannot read {args.data_file}: {exc}")
    if body is not None and args.method == HttpMethod.DELETE.value:
        parser.error("DELETE does not take a request body")

    headers = _parse_pairs(parser, args.header, ":", "header")
    parameters = _parse_pairs(parser, args.param, "=", "parameter")
    credentials = _parse_credentials(parser, args.user)

    try:
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="httpengine-cli") as executor:
            try:
                engine = RequestEngine(
                    args.url,
                    parameters=parameters,
                    headers=headers,
                    credentials=credentials,
                    progress_monitor=progress_printer(sys.stderr) if args.progress else None,
                    executor=executor,
                    settings=settings,
                )
            except InvalidURL as exc:
                print(f"httpengine: {exc}", file=sys.stderr)
                return EXIT_USAGE

            with engine:
                try:
                    payload = _issue(engine, args.method, body).result()
                except Exception as exc:  # noqa: BLE001
                    if args.progress:
                        sys.stderr.write("\n")
                    print(f"httpengine: request failed: {exc}", file=sys.stderr)
                    return EXIT_REQUEST_FAILED
    finally:
        shutdown_default_executors()

    if args.progress:
        sys.stderr.write("\n")
    sys.stdout.buffer.write(payload or b"")
    sys.stdout.flush()
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
