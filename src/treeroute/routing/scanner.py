"""Filesystem discovery for routes directories.

Walks a directory tree and returns its files in mount order:

- within one directory, the index file comes before its siblings;
- other siblings keep the order the filesystem lists them in;
- each subdirectory's files follow, fully expanded, after the files of
  the directory that contains it.

Symbolic links are followed, but a directory whose real path was
already entered during the scan is not entered again, so link cycles
terminate.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Collection
from pathlib import Path

from treeroute.errors import InvalidPathError
from treeroute.routing.types import FileEntry

logger = logging.getLogger("treeroute.routing")


def as_path(value: object, *, what: str = "root") -> Path:
    """Coerce a ``str`` / ``os.PathLike`` to ``Path`` or raise ``InvalidPathError``."""
    if isinstance(value, Path):
        return value
    if isinstance(value, (str, os.PathLike)):
        return Path(value)
    msg = f"Expecting {what} path to be a str or os.PathLike, got {type(value).__name__}"
    raise InvalidPathError(msg)


def is_index_file(path: Path, index_name: str = "index") -> bool:
    """Whether *path*'s basename, extension stripped, is *index_name*."""
    return os.path.splitext(path.name)[0] == index_name


def scan(
    root: str | os.PathLike[str],
    *,
    index_name: str = "index",
    suffixes: Collection[str] | None = None,
    skip: Callable[[Path], bool] | None = None,
) -> list[FileEntry]:
    """Discover every file under *root*, index files first at each level.

    Args:
        root: Directory to scan.
        index_name: Basename (extension stripped) marking a directory's
            own handler.
        suffixes: When given, only files with one of these extensions
            are returned.
        skip: Predicate over entry paths; files and directories for
            which it returns true are left out.

    Returns:
        The ordered discovery sequence. Empty when *root* does not exist.

    Raises:
        InvalidPathError: If *root* is not a path value.
        NotADirectoryError: If *root* exists but is not a directory.
    """
    root_path = as_path(root)
    if not root_path.exists():
        logger.debug("Routes root %s does not exist; nothing to scan", root_path)
        return []

    entries: list[FileEntry] = []
    _scan_directory(
        root_path,
        index_name=index_name,
        suffixes=frozenset(suffixes) if suffixes is not None else None,
        skip=skip,
        visited=set(),
        entries=entries,
    )
    return entries


def _scan_directory(
    directory: Path,
    *,
    index_name: str,
    suffixes: frozenset[str] | None,
    skip: Callable[[Path], bool] | None,
    visited: set[Path],
    entries: list[FileEntry],
) -> None:
    """Append *directory*'s files, then recurse into its subdirectories."""
    real = directory.resolve()
    if real in visited:
        logger.debug("Skipping %s: already scanned as %s", directory, real)
        return
    visited.add(real)

    files: list[FileEntry] = []
    dirs: list[Path] = []

    for item in directory.iterdir():
        if skip is not None and skip(item):
            continue
        if item.is_file():
            if suffixes is not None and item.suffix not in suffixes:
                continue
            files.append(FileEntry(item, is_index_file(item, index_name)))
        elif item.is_dir():
            dirs.append(item)

    # Stable: only moves index files ahead, keeps listing order otherwise
    files.sort(key=lambda entry: not entry.is_index)
    entries.extend(files)

    for subdir in dirs:
        _scan_directory(
            subdir,
            index_name=index_name,
            suffixes=suffixes,
            skip=skip,
            visited=visited,
            entries=entries,
        )
