# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Ferry CLI: issue a single request and print the response."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from ..client import Client, create_client
from ..config import load_client_settings
from ..errors import RequestError
from ..http.models import Response
from ..log import setup_logging

CLI_TEXT_TRUNCATION_BYTES = 4096


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ferry", description="Send one HTTP request and print the response")
    parser.add_argument("url", help="Target URL")
    parser.add_argument("-X", "--method", default="get", help="HTTP method (default: get)")
    parser.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        metavar="NAME: VALUE",
        help="Request header; may be repeated",
    )
    parser.add_argument("-d", "--data", help="Request body; JSON text is sent as JSON")
    parser.add_argument(
        "-p",
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Query parameter; may be repeated",
    )
    parser.add_argument("--timeout", type=float, help="Timeout in seconds")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of human-friendly summary",
    )
    parser.add_argument("--log-level", help="Logging level (default: FERRY_LOG_LEVEL or WARNING)")
    return parser


def _parse_pairs(values: list[str], separator: str) -> dict[str, str]:
    pairs: dict[str, str] = {}
    for raw in values:
        key, sep, value = raw.partition(separator)
        if not sep or not key.strip():
            raise ValueError(f"Expected KEY{separator}VALUE, got {raw!r}")
        pairs[key.strip()] = value.strip()
    return pairs


def build_request_config(args: argparse.Namespace) -> dict[str, Any]:
    config: dict[str, Any] = {"url": args.url, "method": args.method}
    if args.header:
        config["headers"] = _parse_pairs(args.header, ":")
    if args.param:
        config["params"] = _parse_pairs(args.param, "=")
    if args.data is not None:
        try:
            config["data"] = json.loads(args.data)
        except ValueError:
            config["data"] = args.data
    if args.timeout is not None:
        config["timeout"] = args.timeout
    return config


def _truncate_text_bytes(text: str, max_bytes: int) -> str:
    raw = text.encode("utf-8")
    if len(raw) <= max_bytes:
        return text
    suffix = "...[truncated]"
    suffix_bytes = suffix.encode("utf-8")
    keep = max_bytes - len(suffix_bytes)
    if keep <= 0:
        return suffix_bytes[:max_bytes].decode("utf-8", errors="ignore")
    prefix = raw[:keep].decode("utf-8", errors="ignore")
    return prefix + suffix


def _print_json(response: Response) -> None:
    json.dump(response.to_dict(), sys.stdout, indent=2, sort_keys=True, default=str)
    sys.stdout.write("\n")


def _pretty_print(response: Response) -> None:
    print(f"HTTP {response.status} {response.status_text}".rstrip())
    for name, value in response.headers.items():
        print(f"{name}: {value}")
    print()
    data = response.data
    if isinstance(data, bytes):
        body = data.decode("utf-8", errors="replace")
    elif isinstance(data, str):
        body = data
    else:
        body = json.dumps(data, indent=2, default=str)
    print(_truncate_text_bytes(body, CLI_TEXT_TRUNCATION_BYTES))


async def _send(client: Client, config: dict[str, Any]) -> Response:
    async with client:
        return await client.request(config)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = build_request_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    client = create_client(settings=load_client_settings())
    try:
        response = asyncio.run(_send(client, config))
    except RequestError as exc:
        print(f"[ferry] {exc.message}", file=sys.stderr)
        if exc.response is not None:
            if args.json:
                _print_json(exc.response)
            else:
                _pretty_print(exc.response)
        return 1

    if args.json:
        _print_json(response)
    else:
        _pretty_print(response)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
