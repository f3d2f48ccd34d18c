"""``treeroute run``: serve a routes directory.

Builds an App, mounts the directory (deferred with ``--watch``, eager
otherwise) and starts the server. A route module that fails to import
in eager mode stops the command before the server starts.
"""

import argparse
import logging
import sys

from treeroute.app import create_app
from treeroute.config import AppConfig, MountConfig
from treeroute.errors import ConfigurationError, RouteLoadError
from treeroute.routing.mount import resolve_root

logger = logging.getLogger("treeroute.cli")


def configure_logging(level: str) -> None:
    """Send treeroute (and uvicorn) log records to stderr at *level*."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )


def run_server(args: argparse.Namespace) -> None:
    """Mount ``args.directory`` on a new App and serve it."""
    configure_logging(args.log_level)

    try:
        config = AppConfig(
            host=args.host,
            port=args.port,
            debug=args.debug,
            routes_dir=args.directory,
            watch=args.watch,
            log_level=args.log_level,
            mount=MountConfig(index_name=args.index_name, handler_name=args.handler),
        )
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    root = resolve_root(args.directory)
    if not root.is_dir():
        logger.warning("Routes directory %s does not exist; serving no routes", root)

    try:
        app = create_app(root, config=config)
    except RouteLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    app.run()
