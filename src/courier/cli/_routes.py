"""``courier routes`` — list compiled routes.

Resolves an import string to a courier App, compiles it, and prints every
route with its procedure and chain lengths.
"""

import argparse
import sys

from courier.cli._resolve import AppResolutionError, resolve_app


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of URL, PROCEDURE, PRE, POST for a courier app."""
    try:
        app = resolve_app(args.app, compile_app=True)
    except AppResolutionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = app.table.routes
    if not routes:
        print("No messages registered.")
        return

    rows = [
        (
            route.url,
            getattr(route.procedure, "__name__", str(route.procedure)),
            str(len(route.pre)),
            str(len(route.post)),
        )
        for route in routes
    ]

    max_url = max(4, *(len(r[0]) for r in rows))  # "URL" header
    max_proc = max(9, *(len(r[1]) for r in rows))  # "PROCEDURE" header

    fmt = f"{{:<{max_url}}}  {{:<{max_proc}}}  {{:>3}}  {{:>4}}"
    print(fmt.format("URL", "PROCEDURE", "PRE", "POST"))
    print("-" * min(max_url + max_proc + 13, 80))
    for row in rows:
        print(fmt.format(*row))
