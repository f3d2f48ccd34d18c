"""Middleware: Protocol-based, no inheritance required.

A handler is any callable matching:
    async def handler(request: Request, response: Response, next: Next) -> Response

Layers are registered at mount paths with ``App.use()``; route files
discovered by ``App.mount()`` become layers too.
"""

from treeroute.middleware.protocol import Handler, Next, is_handler
from treeroute.middleware.stack import Layer, MiddlewareStack, normalize_mount_path

__all__ = [
    "Handler",
    "Layer",
    "MiddlewareStack",
    "Next",
    "is_handler",
    "normalize_mount_path",
]
