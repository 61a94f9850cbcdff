"""Server-Sent Events over ASGI.

``EventStreamApp`` hosts one ``MessageStream`` per connection:

1. Sends ``http.response.start`` with the recommended SSE headers.
2. Runs the (blocking) message stream in an anyio worker thread, so a
   producer that sleeps between messages never blocks the event loop.
   Each flushed message is sent back on the event loop as one
   ``http.response.body`` chunk.
3. A disconnect monitor awaits ``http.disconnect`` and marks the sink
   as disconnected; the stream notices after its next write.
4. Ends the response with an empty final body chunk.
"""

import contextlib
import logging
import threading

import anyio
import anyio.from_thread
import anyio.to_thread

from eventwire._internal.asgi import Receive, Scope, Send, encode_headers
from eventwire.config import StreamConfig
from eventwire.realtime.log import StreamLogger
from eventwire.realtime.outcomes import RunResult
from eventwire.realtime.stream import RECOMMENDED_HEADERS, MessageStream, Producer

logger = logging.getLogger("eventwire.server")


class ASGISink:
    """Sink that turns each flush into one ASGI body chunk.

    Used from the worker thread running the stream; ``send`` is called
    on the event loop through ``anyio.from_thread.run``.
    """

    __slots__ = ("_buffer", "_disconnected", "_send")

    def __init__(self, send: Send, disconnected: threading.Event) -> None:
        self._send = send
        self._disconnected = disconnected
        self._buffer: list[str] = []

    def write(self, text: str) -> bool:
        self._buffer.append(text)
        return True

    def flush(self) -> bool:
        body = "".join(self._buffer).encode("utf-8")
        self._buffer.clear()
        if not body or self._disconnected.is_set():
            return True
        try:
            anyio.from_thread.run(
                self._send,
                {"type": "http.response.body", "body": body, "more_body": True},
            )
        except (OSError, RuntimeError) as exc:
            logger.debug("Sending SSE chunk failed: %s", exc)
            return False
        return True

    def is_connected(self) -> bool:
        return not self._disconnected.is_set()

    def close(self) -> None:
        self._buffer.clear()


class EventStreamApp:
    """ASGI application streaming one producer to every client.

    The producer factory is called once per connection, so each client
    gets its own generator.

    Usage::

        app = EventStreamApp(demo_producer(wait=1.0))
        # pounce / any ASGI server: serve ``app``
    """

    def __init__(
        self,
        producer: Producer,
        *,
        config: StreamConfig | None = None,
        logger: StreamLogger | None = None,
    ) -> None:
        self.producer = producer
        self.config = config or StreamConfig()
        self.logger = logger
        headers = RECOMMENDED_HEADERS
        if self.config.allow_origin:
            headers = (*headers, ("Access-Control-Allow-Origin", self.config.allow_origin))
        self._headers = encode_headers(headers)
        self._limiter: anyio.CapacityLimiter | None = None  # Created lazily inside the event loop

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await _lifespan(receive, send)
            return
        if scope["type"] != "http":
            return
        if scope.get("method", "GET") != "GET":
            await _method_not_allowed(send)
            return
        await self.stream(receive, send)

    async def stream(self, receive: Receive, send: Send) -> RunResult:
        """Stream the producer over one HTTP connection."""
        if self._limiter is None:
            self._limiter = anyio.CapacityLimiter(self.config.max_streams)

        await send({"type": "http.response.start", "status": 200, "headers": self._headers})

        disconnected = threading.Event()
        stream = MessageStream(ASGISink(send, disconnected), logger=self.logger, config=self.config)

        finished = False

        async def monitor_disconnect() -> None:
            """Wait for client disconnect."""
            try:
                while True:
                    message = await receive()
                    if message.get("type") == "http.disconnect":
                        disconnected.set()
                        return
            finally:
                # A cancelled request stops the stream at its next write.
                if not finished:
                    disconnected.set()

        failure: Exception | None = None
        result = RunResult(delivered=0)
        async with anyio.create_task_group() as tg:
            tg.start_soon(monitor_disconnect)
            try:
                result = await anyio.to_thread.run_sync(stream.run, self.producer, limiter=self._limiter)
            except Exception as exc:
                failure = exc
            finished = True
            tg.cancel_scope.cancel()

        if not disconnected.is_set():
            with contextlib.suppress(OSError, RuntimeError):
                await send({"type": "http.response.body", "body": b"", "more_body": False})

        if failure is not None:
            logger.error("SSE stream aborted: %s: %s", type(failure).__name__, failure)
            raise failure

        logger.debug(
            "SSE stream finished: %d message(s), stopped by %s",
            result.delivered,
            result.stopped_by.cause if result.stopped_by else "producer exhaustion",
        )
        return result


async def _lifespan(receive: Receive, send: Send) -> None:
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return


async def _method_not_allowed(send: Send) -> None:
    body = b"Method not allowed. Allowed methods: GET"
    await send(
        {
            "type": "http.response.start",
            "status": 405,
            "headers": encode_headers(
                (
                    ("Allow", "GET"),
                    ("Content-Type", "text/plain; charset=utf-8"),
                    ("Content-Length", str(len(body))),
                )
            ),
        }
    )
    await send({"type": "http.response.body", "body": body})
