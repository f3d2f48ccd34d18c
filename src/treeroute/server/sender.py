"""Response emission: one ``Response`` becomes two ASGI messages."""

from treeroute._internal.asgi import Send
from treeroute.http.response import Response

# Statuses that never carry a message body
_BODILESS = frozenset({204, 304})


def _payload(response: Response) -> bytes:
    if response.status < 200 or response.status in _BODILESS:
        return b""
    return response.body_bytes


def _encode_headers(response: Response, length: int) -> list[tuple[bytes, bytes]]:
    pairs = [("content-type", response.content_type), *response.headers]
    encoded = [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in pairs]
    encoded.append((b"content-length", str(length).encode("latin-1")))
    return encoded


async def send_response(response: Response, send: Send) -> None:
    """Send *response* as ``http.response.start`` plus a single body message."""
    payload = _payload(response)
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": _encode_headers(response, len(payload)),
        }
    )
    await send({"type": "http.response.body", "body": payload})
