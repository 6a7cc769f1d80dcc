"""``perch request`` — run one request through an app and print the result.

Useful for checking what a URL dispatches to without starting a server.
"""

import argparse
import sys

import anyio

from perch.cli._resolve import as_app, resolve_target
from perch.http.response import Response
from perch.testing.client import TestClient


def format_response(response: Response, *, include_headers: bool) -> str:
    lines = [str(response.status)]
    if include_headers:
        lines.append(f"content-type: {response.content_type}")
        lines.extend(f"{name}: {value}" for name, value in response.headers)
        lines.append("")
    if response.body_bytes:
        lines.append(response.body_bytes.decode("utf-8", errors="replace").rstrip("\n"))
    return "\n".join(lines)


def run_request(args: argparse.Namespace) -> None:
    """Dispatch ``args.method args.url`` through ``args.app``."""
    try:
        target = resolve_target(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    client = TestClient(as_app(target))
    response = anyio.run(client.request, args.method, args.url)
    print(format_response(response, include_headers=args.include))
    if response.status >= 400:
        raise SystemExit(1)
