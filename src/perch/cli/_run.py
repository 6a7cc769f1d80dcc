"""``perch run`` — serve an app or router with pounce."""

import argparse
import sys

from perch.app import App
from perch.cli._resolve import as_app, import_attribute, resolve_target


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it; CLI flags override the app config.

    pounce re-imports the import string on reload, so it is passed on only
    when it names an ``App``. Routers and factories are wrapped here once
    and served without re-import.
    """
    try:
        app = as_app(resolve_target(args.app))
        app_path = args.app if isinstance(import_attribute(args.app), App) else None
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from perch.server.dev import run_dev_server

    run_dev_server(
        app,
        args.host or app.config.host,
        args.port or app.config.port,
        workers=args.workers or app.config.workers,
        reload=args.reload or app.config.reload,
        log_level=app.config.log_level,
        app_path=app_path,
    )
