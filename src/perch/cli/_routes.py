"""``perch routes`` — list registered routes.

Prints a METHOD / PATTERN / HANDLER table for a router, recursing into a
host router's patterns and its default handler.
"""

import argparse
import sys

from perch.app import App
from perch.cli._resolve import resolve_target
from perch.routing.host import HostRouter
from perch.routing.router import ANY_METHOD, Router

Row = tuple[str, str, str]


def _handler_name(handler: object) -> str:
    return getattr(handler, "__qualname__", None) or type(handler).__name__


def collect_rows(handler: object, host: str = "") -> list[Row]:
    """Flatten a router tree into table rows."""
    if isinstance(handler, App):
        return collect_rows(handler.handler, host)

    rows: list[Row] = []
    if isinstance(handler, HostRouter):
        for pattern in handler.routes:
            target = pattern.handlers[ANY_METHOD]
            if isinstance(target, (Router, HostRouter)):
                rows.extend(collect_rows(target, pattern.template))
            else:
                rows.append((ANY_METHOD, pattern.template, _handler_name(target)))
        rows.extend(collect_rows(handler.default_handler, host or "(default)"))
    elif isinstance(handler, Router):
        for pattern in handler.routes:
            for method, target in sorted(pattern.handlers.items()):
                rows.append((method, f"{host}{pattern.template}", _handler_name(target)))
    else:
        rows.append((ANY_METHOD, host or ANY_METHOD, _handler_name(handler)))
    return rows


def run_routes(args: argparse.Namespace) -> None:
    """Print the route table for ``args.app``."""
    try:
        target = resolve_target(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = collect_rows(target)
    if not rows:
        print("No routes registered.")
        return

    width_method = max(6, *(len(r[0]) for r in rows))
    width_pattern = max(7, *(len(r[1]) for r in rows))
    fmt = f"{{:<{width_method}}}  {{:<{width_pattern}}}  {{}}"
    print(fmt.format("METHOD", "PATTERN", "HANDLER"))
    sep_len = width_method + width_pattern + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
