"""Filesystem routing: routes directories mapped onto mount paths.

Conventions::

    routes/
      index.py           # /
      _helpers.py        # never mounted (private)
      users/
        index.py         # /users
        profile.py       # /users/profile

Each route file exports ``handler(request, response, next)``; files that
don't are skipped. Route files run as standalone modules outside any
package, so code they share must be importable from ``sys.path``; an
``_``-prefixed file beside them is never mounted but cannot be imported
by name either.
"""

from treeroute.routing.loader import Loader, ModuleLoader, load_module
from treeroute.routing.mount import (
    ReloadingHandler,
    Registrar,
    discover_routes,
    mount_routes,
    resolve_root,
)
from treeroute.routing.scanner import is_index_file, scan
from treeroute.routing.translator import path_to_route
from treeroute.routing.types import FileEntry, MountedRoute, MountMode

__all__ = [
    "FileEntry",
    "Loader",
    "ModuleLoader",
    "MountMode",
    "MountedRoute",
    "Registrar",
    "ReloadingHandler",
    "discover_routes",
    "is_index_file",
    "load_module",
    "mount_routes",
    "path_to_route",
    "resolve_root",
    "scan",
]
