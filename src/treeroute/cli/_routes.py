"""``treeroute routes``: list the routes a directory mounts.

Prints ROUTE and SOURCE for every mountable file in mount order. With
``--load`` each module is imported and a STATUS column reports whether
it exports a handler.
"""

import argparse
import sys

from treeroute.config import MountConfig
from treeroute.errors import ConfigurationError, RouteLoadError
from treeroute.middleware.protocol import is_handler
from treeroute.routing.loader import ModuleLoader
from treeroute.routing.mount import discover_routes, resolve_root


def run_routes(args: argparse.Namespace) -> None:
    """List the routes under ``args.directory``.

    Exits with status 1 when the directory is missing, or when ``--load``
    finds a module that fails to import.
    """
    try:
        config = MountConfig(index_name=args.index_name, handler_name=args.handler)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    root = resolve_root(args.directory)
    if not root.is_dir():
        print(f"Error: routes directory not found: {root}", file=sys.stderr)
        raise SystemExit(1)

    discovered = discover_routes(root, config)
    if not discovered:
        print("No routes found.")
        return

    # Build rows: (route, source, status)
    rows: list[tuple[str, str, str]] = []
    failed = False
    loader = ModuleLoader(config.handler_name)
    for route, entry in discovered:
        status = ""
        if args.load:
            try:
                status = "ok" if is_handler(loader.load(entry.path)) else "skipped"
            except RouteLoadError as exc:
                status = f"error: {exc.detail}"
                failed = True
        rows.append((route, str(entry.path.relative_to(root)), status))

    max_route = max(max(len(r[0]) for r in rows), 5)  # "ROUTE" header
    max_source = max(max(len(r[1]) for r in rows), 6)  # "SOURCE" header

    fmt = f"{{:<{max_route}}}  {{:<{max_source}}}  {{}}"
    print(fmt.format("ROUTE", "SOURCE", "STATUS" if args.load else "").rstrip())
    print("-" * min(max_route + max_source + 10, 80))
    for route, source, status in rows:
        print(fmt.format(route, source, status).rstrip())

    if failed:
        raise SystemExit(1)
