"""Server startup.

Serves a live ``App`` object with uvicorn. Uvicorn's own reloader needs
an import string and restarts the process; live handler edits are
instead covered by deferred mounts (``AppConfig(watch=True)``), which
re-read each route module per request inside the running process.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("treeroute.server")


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    log_level: str = "info",
) -> None:
    """Start a single-process uvicorn server for *app*.

    Args:
        app: ASGI callable (a treeroute ``App``).
        host: Bind host address.
        port: Bind port number.
        log_level: Uvicorn log level name.
    """
    import uvicorn

    config = uvicorn.Config(app, host=host, port=port, log_level=log_level, lifespan="on")
    server = uvicorn.Server(config)
    logger.info("Serving on http://%s:%d", host, port)
    server.run()
