"""Perch CLI — inspect, probe, and serve routers.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — HTTP request routing by path, method, and host.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=("debug", "info", "warning", "error"),
        help="Logging level (debug shows every route registration)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:router)")

    # -- perch request ----------------------------------------------------
    request_parser = subparsers.add_parser(
        "request", help="Dispatch one request and print the response"
    )
    request_parser.add_argument("app", help="Import string (e.g. myapp:router)")
    request_parser.add_argument("method", help="HTTP method, e.g. GET")
    request_parser.add_argument(
        "url", help="Path or absolute URL (the host part drives host routing)"
    )
    request_parser.add_argument(
        "-i", "--include", action="store_true", help="Print response headers"
    )

    # -- perch run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve with pounce")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument("--workers", type=int, default=None, help="Worker count")
    run_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "request":
        from perch.cli._request import run_request

        run_request(args)
    elif args.command == "run":
        from perch.cli._run import run_server

        run_server(args)
