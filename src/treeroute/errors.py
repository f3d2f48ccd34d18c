"""Treeroute exception hierarchy.

Shared across the scanner, translator, loader, mount controller and the
application pipeline so every module raises and catches the same types.
"""

from dataclasses import dataclass
from pathlib import Path


class TreerouteError(Exception):
    """Base for all treeroute-specific errors."""


class InvalidPathError(TreerouteError, TypeError):
    """Raised when a root or file argument is not a path value.

    Only ``str`` and ``os.PathLike`` objects are accepted.
    """


class ConfigurationError(TreerouteError):
    """Raised when mount or app configuration is invalid."""


class RouteLoadError(TreerouteError):
    """A handler module could not be read, compiled, or executed.

    The original exception is always available as ``__cause__``.
    """

    def __init__(self, path: Path, detail: str = "") -> None:
        self.path = path
        self.detail = detail
        message = f"Failed to load route module {path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class HTTPError(TreerouteError):
    """An error that maps directly to an HTTP status code.

    Raised by the stack or by handlers. The ASGI pipeline catches these
    and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no layer produced a response for the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
