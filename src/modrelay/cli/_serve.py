"""``modrelay serve`` — build an App from flags and run it."""

import argparse
import dataclasses
import logging
import sys

from modrelay.app import App
from modrelay.config import AppConfig
from modrelay.errors import ConfigurationError


def build_config(args: argparse.Namespace) -> AppConfig:
    """Translate parsed CLI flags into an AppConfig.

    Flags left unset keep the AppConfig defaults.
    """
    config = AppConfig(root=args.root, debug=args.debug, serve_static=not args.no_static)
    overrides: dict[str, object] = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.prefix is not None:
        overrides["module_prefix"] = args.prefix
    overrides["log_level"] = args.log_level or ("debug" if args.debug else config.log_level)
    return dataclasses.replace(config, **overrides)


def serve(args: argparse.Namespace) -> None:
    """Configure logging and run the dev server until interrupted."""
    config = build_config(args)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    app = App(config)
    try:
        app.run()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
