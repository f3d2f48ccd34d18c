"""The treeroute application.

An ``App`` is a middleware stack with routes directories mounted on it.
Everything is registered up front; the first request (or the ASGI
lifespan startup) freezes the stack into the tuple the pipeline reads.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeAlias

from treeroute._internal.asgi import Receive, Scope, Send
from treeroute._internal.invoke import invoke
from treeroute._internal.types import ErrorHandler
from treeroute.config import AppConfig
from treeroute.middleware.protocol import Handler
from treeroute.middleware.stack import Layer, MiddlewareStack
from treeroute.routing.loader import Loader
from treeroute.routing.mount import mount_routes, resolve_root
from treeroute.routing.types import MountedRoute, MountMode
from treeroute.server.handler import handle_request

logger = logging.getLogger("treeroute.server")

Hook: TypeAlias = Callable[[], Any]


class App:
    """A mountable ASGI application.

    Usage::

        app = App(AppConfig(watch=True))
        app.use("/", log_requests)
        app.mount("routes", base_dir=Path(__file__).parent)
        app.run()

    Layers run in the order they were registered, so middleware added
    with :meth:`use` before :meth:`mount` wraps the mounted routes and
    anything added after it only sees what they pass on.

    Thread safety:
        Registration happens on one thread before serving. Freezing is
        guarded by a lock with a re-check inside it, so concurrent first
        requests capture the layers exactly once.
    """

    __slots__ = (
        "_error_handlers",
        "_freeze_lock",
        "_frozen",
        "_hooks",
        "_layers",
        "_mounted",
        "_stack",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._stack = MiddlewareStack()
        self._mounted: list[MountedRoute] = []
        self._error_handlers: dict[int | type, ErrorHandler] = {}
        self._hooks: dict[str, list[Hook]] = {"startup": [], "shutdown": []}
        self._layers: tuple[Layer, ...] = ()
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Setup --

    def use(self, path: str, handler: Handler) -> None:
        """Add *handler* as a layer for *path* and every path below it."""
        self._check_not_frozen()
        self._stack.use(path, handler)

    def mount(
        self,
        target: str | os.PathLike[str] | None = None,
        *,
        mode: MountMode | str | None = None,
        base_dir: str | os.PathLike[str] | None = None,
        loader: Loader | None = None,
    ) -> list[MountedRoute]:
        """Register every handler file under a routes directory.

        Args:
            target: The directory; ``config.routes_dir`` when omitted.
            mode: ``"eager"`` or ``"deferred"``. Follows ``config.watch``
                when omitted.
            base_dir: Anchor for a relative *target* instead of the
                working directory.
            loader: Replaces the default ``ModuleLoader``.

        Returns:
            What this call registered, in registration order.

        Raises:
            RouteLoadError: A module failed to load during an eager mount.
        """
        self._check_not_frozen()
        if mode is None:
            mode = MountMode.DEFERRED if self.config.watch else MountMode.EAGER
        root = resolve_root(self.config.routes_dir if target is None else target, base_dir)
        mounted = mount_routes(self, root, mode=mode, loader=loader, config=self.config.mount)
        self._mounted += mounted
        return mounted

    def error(
        self,
        code_or_exception: int | type[Exception],
    ) -> Callable[[ErrorHandler], ErrorHandler]:
        """Decorator registering a handler for a status code or exception type."""

        def register(func: ErrorHandler) -> ErrorHandler:
            self._check_not_frozen()
            self._error_handlers[code_or_exception] = func
            return func

        return register

    def on_startup(self, func: Hook) -> Hook:
        self._check_not_frozen()
        self._hooks["startup"].append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        self._check_not_frozen()
        self._hooks["shutdown"].append(func)
        return func

    @property
    def routes(self) -> tuple[MountedRoute, ...]:
        return tuple(self._mounted)

    @property
    def layers(self) -> tuple[Layer, ...]:
        return self._stack.layers

    # -- Serving --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the app and serve it until interrupted."""
        from treeroute.server.dev import run_server

        self._ensure_frozen()
        run_server(
            self,
            self.config.host if host is None else host,
            self.config.port if port is None else port,
            log_level=self.config.log_level,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return

        self._ensure_frozen()
        await handle_request(
            scope,
            receive,
            send,
            layers=self._layers,
            error_handlers=self._error_handlers,
            debug=self.config.debug,
        )

    async def startup(self) -> None:
        await self._run_hooks("startup")

    async def shutdown(self) -> None:
        await self._run_hooks("shutdown")

    async def _run_hooks(self, phase: str) -> None:
        for hook in self._hooks[phase]:
            await invoke(hook)

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        self._ensure_frozen()
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("Startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Freezing --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if not self._frozen:
                self._layers = self._stack.layers
                self._frozen = True
                logger.debug(
                    "Serving %d layer(s), %d mounted route(s)",
                    len(self._layers),
                    len(self._mounted),
                )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Call use(), mount() and the hook decorators before the first request."
            )
            raise RuntimeError(msg)


def create_app(
    routes_dir: str | Path,
    *,
    config: AppConfig | None = None,
    base_dir: str | Path | None = None,
) -> App:
    """An ``App`` with *routes_dir* mounted in the mode *config* selects."""
    app = App(config)
    app.mount(routes_dir, base_dir=base_dir)
    return app
