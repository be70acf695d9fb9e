# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""SamiDB command line client."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

import httpx

from ..api import IMAGE_SUBTYPES, SamiDBApi
from ..config import ApiOptions, load_api_options, load_http_settings
from ..errors import SamiDBError, categorize_exception, error_category_to_reason
from ..http import create_default_http_client
from ..log import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fetch images from the SamiDB API",
        epilog=f"Image shortcuts: {', '.join(IMAGE_SUBTYPES)} (e.g. `samidb img hug`)",
    )
    parser.add_argument("endpoint", nargs="?", help="Endpoint name, e.g. img")
    parser.add_argument("subtype", nargs="?", help="Optional subtype, e.g. hug")
    parser.add_argument("--api-url", help="Base URL of the API")
    parser.add_argument("--api-version", type=int, help="API version number")
    parser.add_argument(
        "--ignore-default-endpoints",
        action="store_true",
        default=None,
        help="Do not fetch the remote endpoint catalog",
    )
    parser.add_argument(
        "--endpoint",
        dest="descriptors",
        action="append",
        default=[],
        metavar="DESCRIPTOR",
        help="Register a custom endpoint descriptor, e.g. 'GET,OPTIONS,HEAD/foo' (repeatable)",
    )
    parser.add_argument("--list", action="store_true", help="List registered endpoints and exit")
    parser.add_argument("--json", action="store_true", help="Output JSON instead of plain text")
    parser.add_argument("--log-level", help="Logging level (default: SAMIDB_LOG_LEVEL or WARNING)")
    return parser


def _options_from_args(args: argparse.Namespace) -> ApiOptions:
    overrides: dict[str, Any] = {}
    if args.api_url:
        overrides["api_url"] = args.api_url
    if args.api_version is not None:
        overrides["version"] = args.api_version
    if args.ignore_default_endpoints:
        overrides["ignore_default_endpoints"] = True
    if args.descriptors:
        endpoints: dict[str, list[str]] = {}
        for descriptor in args.descriptors:
            endpoints.setdefault(descriptor.split(",")[0].lower(), []).append(descriptor)
        overrides["endpoints"] = endpoints
    return load_api_options().merged(overrides)


def _print_result(result: Any, *, as_json: bool) -> None:
    if as_json:
        json.dump(result, sys.stdout, indent=2, sort_keys=True)
        sys.stdout.write("\n")
    elif isinstance(result, (dict, list)):
        print(json.dumps(result, indent=2, sort_keys=True))
    else:
        print(result)


async def _run(args: argparse.Namespace) -> Any:
    http_client = create_default_http_client(load_http_settings())
    api = await SamiDBApi.create(_options_from_args(args), http_client=http_client)
    if args.list:
        return api.endpoints.as_dict()
    return await api.get(args.endpoint, args.subtype)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if not args.list and not args.endpoint:
        parser.error("an endpoint name is required unless --list is given")

    try:
        result = asyncio.run(_run(args))
    except (SamiDBError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except httpx.HTTPError as exc:
        reason = error_category_to_reason(categorize_exception(exc))
        print(f"error: {reason}: {exc}", file=sys.stderr)
        return 1

    _print_result(result, as_json=args.json)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
