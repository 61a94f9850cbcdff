"""Eventwire — a Server-Sent Events emitter.

Turns a producer of messages into SSE wire format, writes it to an open
output channel, and stops cleanly when the client goes away.

Basic usage::

    from eventwire import Comment, Event, MessageStream

    def producer():
        yield Comment("Welcome!")
        yield Event(event="update", data="hello")

    with MessageStream() as stream:  # writes to stdout
        stream.run(producer)

Over HTTP (any ASGI server)::

    from eventwire.server.asgi import EventStreamApp
    app = EventStreamApp(producer)
"""

__version__ = "0.1.0"
__all__ = [
    "LINE_SEPARATOR",
    "RECOMMENDED_HEADERS",
    "Comment",
    "ConfigurationError",
    "EmptyRepresentation",
    "Event",
    "EventwireError",
    "Field",
    "FieldSet",
    "FormatError",
    "InvalidMessageType",
    "InvalidProducerResult",
    "InvalidSinkResource",
    "LoggingMessageStream",
    "MemoryLogger",
    "Message",
    "MessageStream",
    "NullLogger",
    "Outcome",
    "RunResult",
    "StdlibLogger",
    "StreamConfig",
    "StreamLogger",
    "StreamSink",
    "StreamState",
    "UnknownFieldRenderer",
    "render",
    "render_lines",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import eventwire`` fast while providing a clean top-level API.
    """
    if name in ("Comment", "Event", "Field", "FieldSet", "Message"):
        from eventwire.realtime import events as _events

        return getattr(_events, name)

    if name in ("LINE_SEPARATOR", "render", "render_lines"):
        from eventwire.realtime import format as _format

        return getattr(_format, name)

    if name in ("LoggingMessageStream", "MessageStream", "RECOMMENDED_HEADERS"):
        from eventwire.realtime import stream as _stream

        return getattr(_stream, name)

    if name in ("Outcome", "RunResult", "StreamState"):
        from eventwire.realtime import outcomes as _outcomes

        return getattr(_outcomes, name)

    if name in ("MemoryLogger", "NullLogger", "StdlibLogger", "StreamLogger"):
        from eventwire.realtime import log as _log

        return getattr(_log, name)

    if name == "StreamSink":
        from eventwire.realtime.sink import StreamSink

        return StreamSink

    if name == "StreamConfig":
        from eventwire.config import StreamConfig

        return StreamConfig

    if name in (
        "ConfigurationError",
        "EmptyRepresentation",
        "EventwireError",
        "FormatError",
        "InvalidMessageType",
        "InvalidProducerResult",
        "InvalidSinkResource",
        "UnknownFieldRenderer",
    ):
        from eventwire import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
