"""Drive an ASGI SSE app in-process and collect what it sends."""

import asyncio
from dataclasses import dataclass, field
from typing import Any

from eventwire._internal.asgi import ASGIApp
from eventwire.realtime.events import FieldSet
from eventwire.testing.sse import parse_sse_frames


@dataclass(slots=True)
class SSECapture:
    """Everything an SSE endpoint sent over one connection."""

    status: int = 0
    headers: dict[str, str] = field(default_factory=dict)
    chunks: list[bytes] = field(default_factory=list)
    finished: bool = False

    @property
    def body(self) -> str:
        return b"".join(self.chunks).decode("utf-8")

    @property
    def messages(self) -> list[FieldSet]:
        return parse_sse_frames(self.body)


async def capture_sse(
    app: ASGIApp,
    path: str = "/",
    *,
    method: str = "GET",
    disconnect_after: int | None = None,
    timeout: float = 5.0,
) -> SSECapture:
    """Send one request to *app* and record the response.

    The client disconnects after ``disconnect_after`` non-empty body
    chunks; otherwise the connection stays open until the app ends the
    response.
    """
    scope: dict[str, Any] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": path,
        "raw_path": path.encode("latin-1"),
        "query_string": b"",
        "root_path": "",
        "headers": [(b"accept", b"text/event-stream")],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 0),
    }

    # receive() blocks until the test decides to disconnect
    disconnect_trigger = asyncio.Event()
    body_sent = False
    capture = SSECapture()

    async def receive() -> dict[str, Any]:
        nonlocal body_sent
        if not body_sent:
            body_sent = True
            return {"type": "http.request", "body": b"", "more_body": False}
        await disconnect_trigger.wait()
        return {"type": "http.disconnect"}

    async def send(message: Any) -> None:
        if message["type"] == "http.response.start":
            capture.status = message["status"]
            capture.headers = {
                name.decode("latin-1"): value.decode("latin-1") for name, value in message["headers"]
            }
        elif message["type"] == "http.response.body":
            if message.get("body"):
                capture.chunks.append(message["body"])
            if not message.get("more_body", False):
                capture.finished = True
            if disconnect_after is not None and len(capture.chunks) >= disconnect_after:
                disconnect_trigger.set()

    await asyncio.wait_for(app(scope, receive, send), timeout=timeout)
    return capture
