"""modrelay CLI — start the dev server for a project directory.

Entry point registered as ``modrelay`` in ``pyproject.toml``::

    [project.scripts]
    modrelay = "modrelay.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``modrelay`` command."""
    parser = argparse.ArgumentParser(
        prog="modrelay",
        description="modrelay — a dev server that resolves bare module imports.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- modrelay serve ---------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Start the dev server")
    serve_parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root directory (default: current directory)",
    )
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    serve_parser.add_argument(
        "--prefix",
        default=None,
        help="URL prefix for module requests (default: /@modules/)",
    )
    serve_parser.add_argument(
        "--no-static",
        action="store_true",
        help="Do not serve project files, only module requests",
    )
    serve_parser.add_argument(
        "--debug",
        action="store_true",
        help="Show error details in responses and trace every resolution",
    )
    serve_parser.add_argument(
        "--log-level",
        default=None,
        choices=("debug", "info", "warning", "error"),
        help="Logging level (default: info, debug with --debug)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from modrelay.cli._serve import serve

        serve(args)
