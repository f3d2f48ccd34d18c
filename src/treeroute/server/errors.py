"""Turning exceptions into responses.

``HTTPError`` raised by the stack (``NotFound`` when no layer answers)
or by a handler keeps its status. Anything else, including a route
module that fails to reload in deferred mode, is a 500 and is logged
with its traceback. Handlers registered with ``@app.error(...)`` take
precedence over the plain-text defaults.
"""

import inspect
import logging
import traceback
from collections.abc import Callable, Mapping
from typing import Any

from treeroute._internal.invoke import invoke
from treeroute.errors import HTTPError
from treeroute.http.request import Request
from treeroute.http.response import Response
from treeroute.server.negotiation import negotiate

logger = logging.getLogger("treeroute.server")

_PLAIN_TEXT = "text/plain; charset=utf-8"


def _arguments(handler: Callable[..., Any], request: Request, exc: Exception) -> tuple:
    arity = len(inspect.signature(handler).parameters)
    return (request, exc)[: min(arity, 2)]


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
    status: int,
) -> Response:
    """Run a registered error handler and negotiate what it returns.

    The handler is called with as many of ``(request, exc)`` as it
    declares parameters. A result left at 200 takes *status* instead.
    """
    response = negotiate(await invoke(handler, *_arguments(handler, request, exc)))
    return response if response.status != 200 else response.with_status(status)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: Mapping[int | type, Callable[..., Any]],
    debug: bool,
) -> Response:
    logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    handler = error_handlers.get(type(exc), error_handlers.get(exc.status))
    if handler is not None:
        return await call_error_handler(handler, request, exc, exc.status)

    body = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        body = str(exc)
    return Response(body, exc.status, _PLAIN_TEXT, tuple(exc.headers))


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: Mapping[int | type, Callable[..., Any]],
    debug: bool,
) -> Response:
    logger.exception("500 %s %s", request.method, request.path)

    handler = error_handlers.get(500, error_handlers.get(type(exc)))
    if handler is not None:
        return await call_error_handler(handler, request, exc, 500)

    body = "".join(traceback.format_exception(exc)) if debug else "Internal Server Error"
    return Response(body, 500, _PLAIN_TEXT)
