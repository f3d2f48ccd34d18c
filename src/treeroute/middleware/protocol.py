"""Handler protocol and Next type alias.

A handler is any callable matching::

    async def handler(request: Request, response: Response, next: Next) -> Response: ...

No base class required. The stack checks the shape, not the lineage:
anything that passes :func:`is_handler` is registered, anything else is
treated as a plain module export and skipped.

``next()`` runs the remaining layers that match the request path and
returns the response they produced.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeAlias, runtime_checkable

from treeroute.http.request import Request
from treeroute.http.response import Response

# The remaining layers of the stack
Next: TypeAlias = Callable[[], Awaitable[Response]]


@runtime_checkable
class Handler(Protocol):
    """Protocol for route handlers and stack middleware.

    Accepts both functions and callable objects::

        # Function handler
        async def handler(request: Request, response: Response, next: Next) -> Response:
            if request.relative_path != "/":
                return await next()
            return response.with_body("users")

        # Class handler
        class Timing:
            async def __call__(self, request, response, next):
                start = time.monotonic()
                result = await next()
                return result.with_header("X-Time", f"{time.monotonic() - start:.3f}")

    Sync ``def`` handlers work too; their return value is used directly.
    """

    def __call__(self, request: Request, response: Response, next: Next) -> Any: ...


def is_handler(value: object) -> bool:
    """Whether *value* can be registered as a handler."""
    return isinstance(value, Handler)
