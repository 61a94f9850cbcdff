"""Live Feed — Server-Sent Events with eventwire.

Two endpoints, each its own ``EventStreamApp``:

- ``/feed``: a welcome comment, then status updates
- ``/clock``: three clock ticks, one per interval

Run:
    python app.py

Then, in another terminal:
    curl -N http://127.0.0.1:8000/feed
"""

import time
from typing import Any

from eventwire import Comment, Event, StreamConfig
from eventwire.realtime.producers import ticker
from eventwire.server.asgi import EventStreamApp

WAIT = 0.01

config = StreamConfig(retry_ms=3000, wait_seconds=WAIT)

_NOTIFICATIONS = [
    ("status", "Deployment started."),
    ("alert", "CPU usage above 90% on worker-3."),
    ("status", "CPU usage back to normal."),
]


def feed():
    yield Comment("Welcome to the live feed!")
    for n, (kind, message) in enumerate(_NOTIFICATIONS, start=1):
        time.sleep(WAIT)
        yield Event(event=kind, id=str(n), data=message)


def clock():
    return ticker(WAIT, count=3)


_ROUTES = {
    "/feed": EventStreamApp(feed, config=config),
    "/clock": EventStreamApp(clock, config=config),
}


async def app(scope: dict[str, Any], receive: Any, send: Any) -> None:
    """Dispatch by path; anything else is a 404."""
    if scope["type"] == "lifespan":
        await _ROUTES["/feed"](scope, receive, send)
        return

    route = _ROUTES.get(scope.get("path", ""))
    if route is not None:
        await route(scope, receive, send)
        return

    await send(
        {
            "type": "http.response.start",
            "status": 404,
            "headers": [(b"content-type", b"text/plain; charset=utf-8")],
        }
    )
    await send({"type": "http.response.body", "body": b"Not Found"})


if __name__ == "__main__":
    from eventwire.server.dev import run_dev_server

    run_dev_server(app, config.host, config.port)
