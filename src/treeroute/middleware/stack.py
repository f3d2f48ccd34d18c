"""Mount-path middleware stack.

Layers are registered with ``use(path, handler)`` during setup and
frozen into a tuple when the app starts serving. A layer matches a
request when the request path is its mount path or continues it past
a ``/``; the layer at ``/`` matches everything.
"""

from dataclasses import dataclass

from treeroute.errors import InvalidPathError
from treeroute.middleware.protocol import Handler


def normalize_mount_path(path: str) -> str:
    """Normalize a mount path to a leading ``/`` and no trailing ``/``.

    Examples::

        ""          -> "/"
        "users"     -> "/users"
        "/users/"   -> "/users"
        "//a//b"    -> "/a/b"
    """
    if not isinstance(path, str):
        msg = f"Mount path must be a string, got {type(path).__name__}"
        raise InvalidPathError(msg)
    parts = [part for part in path.split("/") if part]
    return "/" + "/".join(parts)


@dataclass(frozen=True, slots=True)
class Layer:
    """A frozen ``use()`` registration."""

    path: str
    handler: Handler

    def matches(self, request_path: str) -> bool:
        """Whether this layer handles *request_path*."""
        if self.path == "/":
            return True
        return request_path == self.path or request_path.startswith(self.path + "/")


class MiddlewareStack:
    """Ordered layers. Mutable during setup, read by the pipeline.

    Usage::

        stack = MiddlewareStack()
        stack.use("/users", handler)
        [layer.path for layer in stack.matching("/users/42")]  # ["/users"]
    """

    __slots__ = ("_layers",)

    def __init__(self) -> None:
        self._layers: list[Layer] = []

    def use(self, path: str, handler: Handler) -> Layer:
        """Append a layer at *path* and return it."""
        layer = Layer(normalize_mount_path(path), handler)
        self._layers.append(layer)
        return layer

    @property
    def layers(self) -> tuple[Layer, ...]:
        return tuple(self._layers)

    def matching(self, request_path: str) -> tuple[Layer, ...]:
        """Layers that match *request_path*, in registration order."""
        return tuple(layer for layer in self._layers if layer.matches(request_path))

    def __len__(self) -> int:
        return len(self._layers)
