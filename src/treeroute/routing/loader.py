"""Handler module loading.

The mount controller never imports route files itself; it asks a
``Loader``. The default ``ModuleLoader`` executes a file as an isolated
module (nothing is added to ``sys.modules`` or ``sys.path``) and returns
the attribute holding its handler. Tests substitute any object with a
``load(path)`` method.
"""

from __future__ import annotations

import importlib.util
import itertools
import logging
from pathlib import Path
from types import ModuleType
from typing import Protocol, runtime_checkable

from treeroute.errors import RouteLoadError

logger = logging.getLogger("treeroute.routing")

_module_ids = itertools.count()


@runtime_checkable
class Loader(Protocol):
    """Turns a handler file into the value it exports."""

    def load(self, path: Path) -> object: ...


class ModuleLoader:
    """Load handler exports from Python source files.

    Args:
        attribute: Module attribute holding the handler.
        fresh: Re-read and re-execute the source on every ``load()``.
            When false, each file is executed once per loader and the
            export is cached.

    Usage::

        loader = ModuleLoader("handler", fresh=True)
        handler = loader.load(Path("routes/users/index.py"))
    """

    __slots__ = ("_cache", "attribute", "fresh")

    def __init__(self, attribute: str = "handler", *, fresh: bool = False) -> None:
        self.attribute = attribute
        self.fresh = fresh
        self._cache: dict[Path, object] = {}

    def load(self, path: Path) -> object:
        """Return the module's ``attribute`` export, or ``None`` if it has none.

        Raises:
            RouteLoadError: If the file cannot be read, compiled, or executed.
        """
        key = Path(path).resolve()
        if not self.fresh and key in self._cache:
            return self._cache[key]

        module = load_module(key)
        value = getattr(module, self.attribute, None)
        if not self.fresh:
            # Racing loads both store an equivalent value; last write wins.
            self._cache[key] = value
        return value

    def clear(self) -> None:
        """Forget cached exports so the next ``load()`` re-executes."""
        self._cache.clear()


def load_module(path: Path) -> ModuleType:
    """Execute *path* as a new, unregistered module and return it.

    The source is compiled from disk on every call instead of going
    through ``__pycache__``, so an edit is seen even when it keeps the
    file's size and modification time.
    """
    module_name = f"_treeroute_{path.stem}_{next(_module_ids)}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise RouteLoadError(path, "not an importable Python file")

    module = importlib.util.module_from_spec(spec)
    try:
        source = path.read_bytes()
        code = compile(source, str(path), "exec", dont_inherit=True)
        exec(code, module.__dict__)  # noqa: S102
    except Exception as exc:
        raise RouteLoadError(path, f"{type(exc).__name__}: {exc}") from exc

    logger.debug("Loaded route module %s", path)
    return module
