"""Treeroute: mount a directory of handler modules as URL routes.

Each file under a routes directory becomes a route named after its
path; ``index`` files stand for their directory. Handlers are loaded
once at mount time, or re-read on every request while developing.

Basic usage::

    from treeroute import App, AppConfig

    app = App(AppConfig(watch=True))
    app.mount("routes")
    app.run()

A route file::

    # routes/users/index.py  ->  /users
    async def handler(request, response, next):
        if request.relative_path != "/":
            return await next()
        return response.with_json({"users": []})
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "Handler",
    "InvalidPathError",
    "MountConfig",
    "MountMode",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "RouteLoadError",
    "TreerouteError",
    "mount_routes",
    "path_to_route",
    "scan",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import treeroute`` fast while providing a clean top-level API.
    """
    if name == "App":
        from treeroute.app import App

        return App

    if name in ("AppConfig", "MountConfig"):
        from treeroute import config as _config

        return getattr(_config, name)

    if name == "Request":
        from treeroute.http.request import Request

        return Request

    if name == "Response":
        from treeroute.http.response import Response

        return Response

    if name in ("Handler", "Next"):
        from treeroute.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("MountMode", "mount_routes", "path_to_route", "scan"):
        from treeroute import routing as _routing

        return getattr(_routing, name)

    if name in (
        "ConfigurationError",
        "HTTPError",
        "InvalidPathError",
        "NotFound",
        "RouteLoadError",
        "TreerouteError",
    ):
        from treeroute import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
