"""In-process test client for treeroute applications.

Drives the app through its ASGI interface and hands back the same
``Response`` type handlers build, so assertions read like handler code.
"""

from __future__ import annotations

import json as json_module
from typing import Any

from treeroute.app import App
from treeroute.http.response import Response

_DEFAULT_CONTENT_TYPE = "text/html; charset=utf-8"


class _Exchange:
    """One request/response round trip over ASGI messages."""

    __slots__ = ("_pending", "body", "headers", "status")

    def __init__(self, body: bytes) -> None:
        self._pending: list[dict[str, Any]] = [
            {"type": "http.request", "body": body, "more_body": False},
        ]
        self.status = 500
        self.headers: list[tuple[bytes, bytes]] = []
        self.body = bytearray()

    async def receive(self) -> dict[str, Any]:
        if self._pending:
            return self._pending.pop()
        return {"type": "http.disconnect"}

    async def send(self, message: dict[str, Any]) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
            self.headers = list(message.get("headers", ()))
        elif message["type"] == "http.response.body":
            self.body += message.get("body", b"")

    def to_response(self) -> Response:
        content_type = _DEFAULT_CONTENT_TYPE
        headers: list[tuple[str, str]] = []
        for raw_name, raw_value in self.headers:
            name, value = raw_name.decode("latin-1"), raw_value.decode("latin-1")
            if name == "content-type":
                content_type = value
            elif name != "content-length":
                headers.append((name, value))
        return Response(
            body=bytes(self.body),
            status=self.status,
            content_type=content_type,
            headers=tuple(headers),
        )


class TestClient:
    """Send requests to an ``App`` without a server.

    Entering the client freezes the app and runs its startup hooks;
    leaving runs the shutdown hooks::

        async with TestClient(app) as client:
            response = await client.get("/users/profile")
            assert response.text == "Profile"
    """

    __test__ = False
    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> TestClient:
        self.app._ensure_frozen()
        await self.app.startup()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.app.shutdown()

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("GET", path, headers=headers)

    async def delete(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        return await self.request("DELETE", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes = b"",
        json: Any = None,
    ) -> Response:
        return await self.request("POST", path, headers=headers, body=body, json=json)

    async def put(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes = b"",
        json: Any = None,
    ) -> Response:
        return await self.request("PUT", path, headers=headers, body=body, json=json)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes = b"",
        json: Any = None,
    ) -> Response:
        """Send *method* *path* and return the app's response.

        ``json`` replaces ``body`` and defaults the content type to
        ``application/json``; explicit *headers* win.
        """
        merged: dict[str, str] = {}
        if json is not None:
            body = json_module.dumps(json).encode("utf-8")
            merged["content-type"] = "application/json"
        for name, value in (headers or {}).items():
            merged[name.lower()] = value

        exchange = _Exchange(body)
        await self.app(_http_scope(method, path, merged), exchange.receive, exchange.send)
        return exchange.to_response()


def _http_scope(method: str, target: str, headers: dict[str, str]) -> dict[str, Any]:
    path, _, query = target.partition("?")
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method.upper(),
        "scheme": "http",
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": query.encode("latin-1"),
        "root_path": "",
        "headers": [(k.encode("latin-1"), v.encode("latin-1")) for k, v in headers.items()],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 0),
    }
