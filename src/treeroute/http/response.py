"""The response a handler builds.

Every handler is passed an empty ``Response`` and returns either a
value the pipeline negotiates or a ``Response`` derived from that one.
``with_*`` methods never mutate; they return a changed copy.
"""

import json as json_module
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Response:
    """Status, content type, extra headers and a ``str`` or ``bytes`` body."""

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/html; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    def with_body(self, body: str | bytes) -> "Response":
        return replace(self, body=body)

    def with_status(self, status: int) -> "Response":
        return replace(self, status=status)

    def with_content_type(self, content_type: str) -> "Response":
        return replace(self, content_type=content_type)

    def with_header(self, name: str, value: str) -> "Response":
        """Append one header; earlier values for *name* are kept."""
        return self.with_headers({name: value})

    def with_headers(self, headers: Mapping[str, str]) -> "Response":
        return replace(self, headers=self.headers + tuple(headers.items()))

    def with_json(self, data: Any) -> "Response":
        """Serialize *data* as the body and switch to ``application/json``."""
        encoded = json_module.dumps(data, default=str)
        return replace(self, body=encoded, content_type="application/json")

    def header(self, name: str) -> str | None:
        """First value of header *name*, compared case-insensitively."""
        wanted = name.lower()
        return next((value for key, value in self.headers if key.lower() == wanted), None)

    @property
    def body_bytes(self) -> bytes:
        return self.body.encode("utf-8") if isinstance(self.body, str) else self.body

    @property
    def text(self) -> str:
        return self.body.decode("utf-8") if isinstance(self.body, bytes) else self.body
