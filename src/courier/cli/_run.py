"""``courier run`` — compile an app and serve it with pounce."""

import argparse
import dataclasses
import sys

from courier.cli._resolve import AppResolutionError, resolve_app
from courier.errors import ConfigurationError


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and call its ``compile_and_listen``.

    ``--host``, ``--port`` and ``--workers`` override the app's config.
    """
    try:
        app = resolve_app(args.app)
    except AppResolutionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    overrides: dict[str, object] = {}
    if args.host:
        overrides["host"] = args.host
    if args.port:
        overrides["port"] = args.port
    if args.workers is not None:
        overrides["workers"] = args.workers

    try:
        app.compile_and_listen(dataclasses.replace(app.config, **overrides))
    except ConfigurationError as exc:
        print(f"Error: {args.app}: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
