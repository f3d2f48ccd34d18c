"""Data models for filesystem route discovery.

Immutable frozen dataclasses. ``FileEntry`` records are rebuilt on every
scan; ``MountedRoute`` records describe what a mount registered.
"""

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from treeroute.middleware.protocol import Handler


class MountMode(StrEnum):
    """How discovered handler modules are loaded.

    ``EAGER`` loads each module once at mount time. ``DEFERRED`` re-reads
    the module on every request so edits apply without remounting.
    """

    EAGER = "eager"
    DEFERRED = "deferred"


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A file discovered under the routes root.

    Attributes:
        path: Path of the file, built from the root the scan started at.
        is_index: True when the extension-stripped basename is the
            reserved index name.
    """

    path: Path
    is_index: bool = False


@dataclass(frozen=True, slots=True)
class MountedRoute:
    """A route registered with a registrar by ``mount_routes()``.

    Attributes:
        route: The route string passed to ``registrar.use()``.
        source: The handler module's file.
        mode: Which loading mode registered it.
        handler: The handler itself (eager) or the reloading adapter (deferred).
    """

    route: str
    source: Path
    mode: MountMode
    handler: Handler
