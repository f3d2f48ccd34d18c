"""Treeroute CLI: route listing and a development server.

Entry point registered as ``treeroute`` in ``pyproject.toml``::

    [project.scripts]
    treeroute = "treeroute.cli:main"
"""

import argparse
import sys


def _add_mount_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("directory", help="Routes directory")
    parser.add_argument(
        "--index-name",
        default="index",
        help="Basename that maps to its directory's route (default: index)",
    )
    parser.add_argument(
        "--handler",
        default="handler",
        help="Module attribute holding the handler (default: handler)",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``treeroute`` command."""
    parser = argparse.ArgumentParser(
        prog="treeroute",
        description="Treeroute: mount a directory of handler modules as URL routes.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- treeroute routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the routes a directory mounts")
    _add_mount_options(routes_parser)
    routes_parser.add_argument(
        "--load",
        action="store_true",
        help="Import each module and report which ones export a handler",
    )

    # -- treeroute run ----------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve a routes directory")
    _add_mount_options(run_parser)
    run_parser.add_argument(
        "--watch",
        action="store_true",
        help="Re-read route modules on every request",
    )
    run_parser.add_argument("--host", default="127.0.0.1", help="Bind host address")
    run_parser.add_argument("--port", type=int, default=8000, help="Bind port number")
    run_parser.add_argument(
        "--debug",
        action="store_true",
        help="Include tracebacks in 500 responses",
    )
    run_parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error"],
        help="Logging level (default: info)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from treeroute.cli._routes import run_routes

        run_routes(args)
    elif args.command == "run":
        from treeroute.cli._run import run_server

        run_server(args)
