"""Per-request dispatch.

An ASGI ``http`` scope becomes a ``Request``; the layers whose mount path
covers the request path run as a ``next()`` chain; whatever comes back,
or whatever was raised, is sent as one ``Response``.
"""

from collections.abc import Callable, Sequence
from typing import Any

from treeroute._internal.asgi import Receive, Scope, Send
from treeroute._internal.invoke import invoke
from treeroute.errors import HTTPError, NotFound
from treeroute.http.request import Request
from treeroute.http.response import Response
from treeroute.middleware.stack import Layer
from treeroute.server.errors import handle_http_error, handle_internal_error
from treeroute.server.negotiation import negotiate
from treeroute.server.sender import send_response


async def run_layers(layers: Sequence[Layer], request: Request) -> Response:
    """Run the layers matching ``request.path`` as a ``next()`` chain.

    Each layer gets the request re-mounted at its own path and a fresh
    empty ``Response``. Calling ``next()`` past the last matching layer
    raises ``NotFound``.
    """
    matching = [layer for layer in layers if layer.matches(request.path)]

    async def call(index: int) -> Response:
        if index >= len(matching):
            raise NotFound
        layer = matching[index]

        async def _next() -> Response:
            return await call(index + 1)

        result = await invoke(layer.handler, request.mounted_at(layer.path), Response(), _next)
        return negotiate(result)

    return await call(0)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    layers: Sequence[Layer],
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        response = await run_layers(layers, request)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)

    await send_response(response, send)
