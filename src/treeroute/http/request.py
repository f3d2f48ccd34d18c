"""The request a handler receives.

A ``Request`` is created once per ASGI ``http`` scope. The stack hands
every layer its own copy via :meth:`Request.mounted_at`, which differs
only in ``mount_path``; the body is shared between copies and read from
the ASGI channel at most once.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import parse_qsl

from treeroute._internal.asgi import Receive, Scope
from treeroute.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """Frozen request metadata plus lazy access to the body."""

    method: str
    path: str
    headers: Headers
    query_string: bytes
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    # Where the layer handling this copy was registered ("" before dispatch)
    mount_path: str = ""

    _receive: Receive | None = field(default=None, repr=False, compare=False)
    _body: dict[str, bytes] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        server, client = scope.get("server"), scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            http_version=scope.get("http_version", "1.1"),
            server=(server[0], server[1]) if server else None,
            client=(client[0], client[1]) if client else None,
            _receive=receive,
        )

    def mounted_at(self, mount_path: str) -> Request:
        """This request as seen by a layer registered at *mount_path*."""
        return replace(self, mount_path=mount_path)

    @property
    def relative_path(self) -> str:
        """``path`` below ``mount_path``; ``"/"`` when they are equal.

        For ``GET /users/42`` a layer at ``/users`` sees ``/42`` and a
        layer at ``/`` sees ``/users/42``.
        """
        prefix = self.mount_path.rstrip("/")
        if not prefix:
            return self.path
        return self.path[len(prefix):] or "/"

    @property
    def query(self) -> dict[str, str]:
        """Query parameters. Repeated keys keep their first value."""
        decoded = self.query_string.decode("latin-1")
        params: dict[str, str] = {}
        for key, value in parse_qsl(decoded, keep_blank_values=True):
            params.setdefault(key, value)
        return params

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        if not self.query_string:
            return self.path
        return f"{self.path}?{self.query_string.decode('latin-1')}"

    async def body(self) -> bytes:
        """The full request body, read on first use."""
        if "data" not in self._body:
            chunks: list[bytes] = []
            more = self._receive is not None
            while more:
                message = await self._receive()
                chunks.append(message.get("body", b""))
                more = message.get("more_body", False)
            self._body["data"] = b"".join(chunks)
        return self._body["data"]

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")

    async def json(self) -> Any:
        return json_module.loads(await self.body())
