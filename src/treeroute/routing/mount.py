"""Mount a routes directory onto a registrar.

Scans the root once, translates every discovered file to a route, and
registers it with ``registrar.use(route, handler)``:

- **eager**: each module is loaded at mount time. Exports that are not
  handlers are skipped. A module that fails to load aborts the mount
  before any route of it is registered.
- **deferred**: a ``ReloadingHandler`` is registered per route. It
  reloads the module on every request, so edits to existing route files
  apply without remounting. The set of routes is fixed at mount time.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Protocol

import anyio.to_thread

from treeroute._internal.invoke import invoke
from treeroute.config import MountConfig
from treeroute.http.request import Request
from treeroute.http.response import Response
from treeroute.middleware.protocol import Handler, Next, is_handler
from treeroute.routing.loader import Loader, ModuleLoader
from treeroute.routing.scanner import as_path, scan
from treeroute.routing.translator import path_to_route
from treeroute.routing.types import FileEntry, MountedRoute, MountMode

logger = logging.getLogger("treeroute.routing")

DEFAULT_ROUTES_DIR = "routes"


class Registrar(Protocol):
    """Anything routes can be mounted on (``App`` is one)."""

    def use(self, path: str, handler: Handler) -> Any: ...


def resolve_root(
    target: str | os.PathLike[str] | None = None,
    base_dir: str | os.PathLike[str] | None = None,
) -> Path:
    """Resolve a routes directory to an absolute path.

    Relative targets are joined to *base_dir*, or to the current working
    directory when no *base_dir* is given. ``None`` means ``"routes"``.

    Raises:
        InvalidPathError: If *target* or *base_dir* is not a path value.
    """
    path = as_path(DEFAULT_ROUTES_DIR if target is None else target)
    if not path.is_absolute():
        base = as_path(base_dir, what="base directory") if base_dir is not None else Path.cwd()
        path = base / path
    return path.resolve()


class ReloadingHandler:
    """Per-request handler reload for deferred mounts.

    Each call loads the route file again in a worker thread. A handler
    export is invoked with the request; anything else hands the request
    to the next layer. Load errors are not caught here.
    """

    __slots__ = ("loader", "route", "source")

    def __init__(self, source: Path, route: str, loader: Loader) -> None:
        self.source = source
        self.route = route
        self.loader = loader

    async def __call__(self, request: Request, response: Response, next: Next) -> Any:
        handler = await anyio.to_thread.run_sync(self.loader.load, self.source)
        if not is_handler(handler):
            return await next()
        return await invoke(handler, request, response, next)

    def __repr__(self) -> str:
        return f"ReloadingHandler({self.route!r}, {str(self.source)!r})"


def discover_routes(
    root: str | os.PathLike[str],
    config: MountConfig | None = None,
) -> list[tuple[str, FileEntry]]:
    """Scan *root* and pair each mountable file with its route, in mount order.

    Nothing is imported; this is what ``mount_routes()`` will register
    before handler checks.
    """
    config = config or MountConfig()
    root_path = as_path(root)
    prefixes = config.ignore_prefixes

    def skip(path: Path) -> bool:
        return bool(prefixes) and path.name.startswith(prefixes)

    entries = scan(
        root_path,
        index_name=config.index_name,
        suffixes=config.suffixes,
        skip=skip,
    )
    return [
        (path_to_route(entry.path, root_path, index_name=config.index_name), entry)
        for entry in entries
    ]


def mount_routes(
    registrar: Registrar,
    root: str | os.PathLike[str],
    *,
    mode: MountMode | str = MountMode.EAGER,
    loader: Loader | None = None,
    config: MountConfig | None = None,
) -> list[MountedRoute]:
    """Register every handler file under *root* with *registrar*.

    Args:
        registrar: Receives ``use(route, handler)`` calls in discovery order.
        root: The routes directory. Relative paths are taken as they
            are; use :func:`resolve_root` to anchor them first.
        mode: ``"eager"`` or ``"deferred"``.
        loader: Loads handler exports. Defaults to a ``ModuleLoader``
            reading ``config.handler_name``, fresh per call in deferred mode.
        config: Discovery settings.

    Returns:
        One ``MountedRoute`` per registration.

    Raises:
        InvalidPathError: If *root* is not a path value.
        RouteLoadError: In eager mode, if a route module fails to load.
    """
    config = config or MountConfig()
    mode = MountMode(mode)
    root_path = as_path(root)
    if loader is None:
        loader = ModuleLoader(config.handler_name, fresh=mode is MountMode.DEFERRED)

    mounted: list[MountedRoute] = []
    seen: dict[str, Path] = {}
    for route, entry in discover_routes(root_path, config):
        if mode is MountMode.EAGER:
            handler = loader.load(entry.path)
            if not is_handler(handler):
                logger.debug("Skipping %s: no %r handler", entry.path, config.handler_name)
                continue
        else:
            handler = ReloadingHandler(entry.path, route, loader)

        if route in seen:
            logger.warning(
                "Route %s is defined by both %s and %s; both are mounted",
                route,
                seen[route],
                entry.path,
            )
        seen.setdefault(route, entry.path)
        mounted.append(MountedRoute(route, entry.path, mode, handler))

    # Nothing is registered until every module has loaded
    for record in mounted:
        registrar.use(record.route, record.handler)
        logger.debug("Mounted %s -> %s (%s)", record.route, record.source, mode)

    logger.info("Mounted %d route(s) from %s (%s)", len(mounted), root_path, mode)
    return mounted
