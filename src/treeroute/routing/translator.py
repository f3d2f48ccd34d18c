"""File path to route string translation.

A discovered file's route is its path below the routes root, extension
removed, joined with ``/``. A terminal index file stands for its
directory::

    routes/index.py            -> /
    routes/users/index.py      -> /users
    routes/users/profile.py    -> /users/profile
    routes/a/index/b.py        -> /a/index/b

Only the file's own basename is checked against the index name;
intermediate directories called ``index`` are kept.
"""

import os

from treeroute.errors import InvalidPathError


def path_to_route(
    file_path: str | os.PathLike[str],
    base: str | os.PathLike[str] | None = None,
    *,
    index_name: str = "index",
) -> str:
    """Convert *file_path* into a route string relative to *base*.

    Segments are collected from the end of the path back to the first
    one named like *base*'s last segment, which is where the walk stops.
    Without a usable *base* only the file's basename is used.

    Pure: the filesystem is never consulted.

    Args:
        file_path: Path of the handler file.
        base: The routes root the file was discovered under.
        index_name: Basename (extension stripped) that maps to its
            directory's route.

    Raises:
        InvalidPathError: If *file_path* is not a path value.
    """
    if not isinstance(file_path, (str, os.PathLike)):
        msg = f"Expecting file path to be a str or os.PathLike, got {type(file_path).__name__}"
        raise InvalidPathError(msg)

    target = os.path.splitext(os.path.normpath(os.fspath(file_path)))[0]

    base_str = os.fspath(base) if isinstance(base, (str, os.PathLike)) else ""
    if not base_str:
        name = os.path.basename(target)
        return "/" + (name if name != index_name else "")

    stop = os.path.normpath(base_str).split(os.sep)[-1]
    parts = target.split(os.sep)

    segments: list[str] = []
    for i in range(len(parts) - 1, -1, -1):
        segment = parts[i]
        if segment == stop:
            break
        if i == len(parts) - 1 and segment == index_name:
            continue
        if segment:
            segments.append(segment)

    return "/" + "/".join(reversed(segments))
