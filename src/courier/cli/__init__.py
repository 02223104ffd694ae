"""Courier CLI — serve an app or list its compiled routes.

Entry point registered as ``courier`` in ``pyproject.toml``::

    [project.scripts]
    courier = "courier.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``courier`` command."""
    parser = argparse.ArgumentParser(
        prog="courier",
        description="Courier — named messages served as HTTP POST endpoints.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- courier run ------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Compile the app and start the server")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=auto-detect)",
    )

    # -- courier routes ---------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List compiled routes")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:app)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from courier.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from courier.cli._routes import run_routes

        run_routes(args)
