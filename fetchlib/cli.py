#!/usr/bin/env python3
import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .api import ReqresApi, get_joke
from .config import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, JOKE_ENDPOINT, ClientConfig
from .fetch import fetch_data
from .files import count_mentions, file_info, read_file
from .metrics import Metrics
from .net import HttpTransport
from .render import new_document, render_error, render_joke, render_users
from .types import ALLOWED_METHODS, RequestOptions, Result, TransportProtocol


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch JSON or text from REST endpoints and local files.")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase logging verbosity.")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="Base URL of the users API.")
    parser.add_argument("--joke-endpoint", default=JOKE_ENDPOINT, help="Endpoint used by the joke command.")
    parser.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds (default: none).")
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header to send.")
    sub = parser.add_subparsers(dest="command", required=True)

    fetch = sub.add_parser("fetch", help="Fetch an arbitrary URL.")
    fetch.add_argument("url")
    fetch.add_argument("-X", "--method", default="GET", choices=ALLOWED_METHODS, type=str.upper)
    fetch.add_argument("-H", "--header", dest="headers", action="append", default=[], help='"Name: value"')
    fetch.add_argument("-d", "--data", dest="body", default=None, help="Request body.")

    users = sub.add_parser("users", help="List users.")
    users.add_argument("--html", dest="html_path", default=None, help="Write the rendered user list here.")

    user = sub.add_parser("user", help="Fetch a single user.")
    user.add_argument("user_id")

    resource = sub.add_parser("resource", help="Fetch a single resource.")
    resource.add_argument("resource_id")

    create = sub.add_parser("create-user", help="Create a user.")
    create.add_argument("name")
    create.add_argument("job")

    delete = sub.add_parser("delete-user", help="Delete a user.")
    delete.add_argument("user_id")

    sub.add_parser("joke", help="Tell a programming joke.")

    read = sub.add_parser("read-file", help="Read a local text file.")
    read.add_argument("path")
    read.add_argument("--count", dest="word", default=None, help="Count case-insensitive mentions of a word.")
    return parser.parse_args(argv)


def parse_headers(raw: List[str]) -> Dict[str, str]:
    headers: Dict[str, str] = {}
    for item in raw:
        name, sep, value = item.partition(":")
        if not sep or not name.strip():
            raise ValueError(f"Malformed header {item!r}, expected 'Name: value'")
        headers[name.strip()] = value.strip()
    return headers


def _print_payload(payload: Any) -> None:
    if isinstance(payload, str):
        print(payload)
    else:
        print(json.dumps(payload, indent=2))


def _report(result: Result) -> int:
    if result.error is not None:
        print(f"error: {result.error.message}", file=sys.stderr)
        return 1
    _print_payload(result.payload)
    return 0


async def run(args: argparse.Namespace, transport: TransportProtocol, metrics: Metrics) -> int:
    api = ReqresApi(args.base_url, transport=transport, metrics=metrics)

    if args.command == "fetch":
        try:
            headers = parse_headers(args.headers)
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        options = RequestOptions(method=args.method, headers=headers, body=args.body)
        return _report(await fetch_data(args.url, options, transport=transport, metrics=metrics))
    if args.command == "users":
        result = await api.get_users()
        if args.html_path:
            document = new_document()
            if result.error is not None:
                render_error(document, result.error.message)
            else:
                render_users(result.payload, document)
            Path(args.html_path).write_text(str(document), encoding="utf-8")
            logging.info("Wrote %s", args.html_path)
        return _report(result)
    if args.command == "user":
        return _report(await api.get_user(args.user_id))
    if args.command == "resource":
        return _report(await api.get_resource(args.resource_id))
    if args.command == "create-user":
        return _report(await api.create_user(args.name, args.job))
    if args.command == "delete-user":
        return _report(await api.delete_user(args.user_id))
    if args.command == "joke":
        result = await get_joke(args.joke_endpoint, transport=transport, metrics=metrics)
        if result.error is not None:
            return _report(result)
        for line in render_joke(result.payload):
            print(line)
        return 0
    if args.command == "read-file":
        try:
            text = await read_file(args.path)
        except (OSError, UnicodeDecodeError) as exc:
            print(f"error: Something went wrong! {exc}", file=sys.stderr)
            return 1
        if args.word:
            print(f"There were {count_mentions(text, args.word)} mentions of \"{args.word}\".")
        else:
            for line in file_info(text):
                print(line)
        return 0
    raise ValueError(f"Unknown command {args.command!r}")


def main(argv: Optional[Sequence[str]] = None, transport: Optional[TransportProtocol] = None) -> int:
    args = parse_args(argv)
    log_level = logging.WARNING
    if args.verbose == 1:
        log_level = logging.INFO
    elif args.verbose >= 2:
        log_level = logging.DEBUG
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    config = ClientConfig(
        user_agent=args.user_agent,
        request_timeout=args.timeout,
        base_url=args.base_url,
        joke_endpoint=args.joke_endpoint,
    )
    owns_transport = transport is None
    if transport is None:
        transport = HttpTransport(config)
    metrics = Metrics()
    try:
        status = asyncio.run(run(args, transport, metrics))
    finally:
        if owns_transport:
            transport.close()
    logging.info("Done: %s", metrics.summary())
    return status


if __name__ == "__main__":
    sys.exit(main())
