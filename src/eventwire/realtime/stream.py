"""The SSE drive loop.

``MessageStream`` pulls messages from a producer one at a time, renders
each one to wire format, writes and flushes it, and checks that the
client is still there before pulling the next. It stops when the
producer is exhausted, a write fails, or the client disconnects; the
last two are normal endings for a long-lived stream and are logged as a
notice, not raised.

Usage::

    def producer():
        yield Comment("Welcome!")
        for tick in count():
            yield Event(event="tick", data=str(tick))
            time.sleep(1)

    with MessageStream(response.stream, logger=StdlibLogger()) as stream:
        stream.run(producer)
"""

import contextlib
from collections.abc import Callable, Generator, Iterator, Mapping
from types import TracebackType
from typing import Any, TypeAlias

from eventwire.config import StreamConfig
from eventwire.errors import ConfigurationError, InvalidMessageType, InvalidProducerResult
from eventwire.realtime.events import FieldSet, as_field_set
from eventwire.realtime.format import render_lines
from eventwire.realtime.log import MemoryLogger, StdlibLogger, StreamLogger
from eventwire.realtime.outcomes import Outcome, RunResult, StreamState
from eventwire.realtime.sink import OutputSink, as_sink, open_process_output

Producer: TypeAlias = Callable[[], list[Any] | tuple[Any, ...] | Iterator[Any]]

RECOMMENDED_HEADERS: tuple[tuple[str, str], ...] = (
    ("Content-Type", "text/event-stream"),
    ("Cache-Control", "no-cache"),
    ("Connection", "keep-alive"),
    # https://www.nginx.com/resources/wiki/start/topics/examples/x-accel/#x-accel-buffering
    ("X-Accel-Buffering", "no"),
)


def _iterate(result: object) -> Iterator[Any]:
    if isinstance(result, (list, tuple)):
        return iter(result)
    if isinstance(result, Iterator) and not isinstance(result, Mapping):
        return result
    raise InvalidProducerResult(result)


class MessageStream:
    """Drives one SSE connection.

    Args:
        sink: An ``OutputSink`` or a writable file-like handle. When
            omitted, the stream opens the process's standard output and
            closes it again in ``close()``.
        logger: Receives ``debug`` and ``notice`` events. Defaults to a
            ``StdlibLogger`` on ``eventwire.stream``.
        config: Wire and logging options.
    """

    def __init__(
        self,
        sink: OutputSink | Any = None,
        *,
        logger: StreamLogger | None = None,
        config: StreamConfig | None = None,
    ) -> None:
        if sink is None:
            self.sink: OutputSink = open_process_output()
            self._owns_sink = True
        else:
            self.sink = as_sink(sink)
            self._owns_sink = False
        self.logger: StreamLogger = logger if logger is not None else StdlibLogger()
        self.config = config or StreamConfig()
        self.state = StreamState.IDLE

    @staticmethod
    def recommended_headers() -> list[str]:
        """HTTP headers the hosting layer should send before streaming."""
        return [f"{name}: {value}" for name, value in RECOMMENDED_HEADERS]

    def run(self, producer: Producer) -> RunResult:
        """Stream every message the producer yields.

        The producer is called once and must return a list, a tuple, or
        an iterator (typically it is a generator function). Each element
        must be a ``FieldSet``, a mapping of field names, or have a
        ``to_fields()`` method.

        Raises:
            InvalidProducerResult: The producer returned something else.
            InvalidMessageType: An element cannot be converted.
            FormatError: An element has no renderable field.
        """
        if self.state in (StreamState.RUNNING, StreamState.DRAINING):
            msg = "MessageStream.run() is already in progress on this stream."
            raise ConfigurationError(msg)

        messages = _iterate(producer())
        self.state = StreamState.RUNNING
        delivered = 0
        outcome = Outcome.DELIVERED
        try:
            if self.config.retry_ms is not None:
                outcome = self.deliver(FieldSet(retry=self.config.retry_ms))

            while not outcome.stops:
                try:
                    value = next(messages)
                except StopIteration:
                    self.state = StreamState.EXHAUSTED
                    break

                fields = as_field_set(value)
                if fields is None:
                    raise InvalidMessageType(value)

                outcome = self.deliver(fields)
                if outcome is not Outcome.WRITE_FAILED:
                    delivered += 1

            if outcome.stops:
                self.state = StreamState.DRAINING
                self._log("notice", f"Shutdown signal received. Cause: {outcome.cause}")
        finally:
            # Runs the producer's own finally blocks.
            if isinstance(messages, Generator):
                messages.close()
            self.state = StreamState.STOPPED

        return RunResult(delivered=delivered, stopped_by=outcome if outcome.stops else None)

    def deliver(self, fields: FieldSet) -> Outcome:
        """Write one message, flush it, and check the connection.

        The whole message is rendered before the first write, so a
        format error never leaves a partial message on the wire.
        """
        lines = render_lines(fields)
        separator = self.config.line_separator

        for line in lines:
            if not self.sink.write(line + separator):
                return Outcome.WRITE_FAILED

        if self.config.log_output:
            self._log("debug", f"New output received. Output: {lines!r}")

        if not self.sink.flush():
            return Outcome.WRITE_FAILED
        if not self.sink.is_connected():
            return Outcome.DISCONNECTED
        return Outcome.DELIVERED

    def close(self) -> None:
        """Release the sink if this stream opened it."""
        if self._owns_sink:
            self.sink.close()

    def __enter__(self) -> "MessageStream":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _log(self, level: str, msg: str) -> None:
        # Logger failures never propagate.
        with contextlib.suppress(Exception):
            getattr(self.logger, level)(msg)


class LoggingMessageStream(MessageStream):
    """A ``MessageStream`` that replays its own log to the client.

    Before each message, every line buffered in the ``MemoryLogger`` is
    written as a separate comment block. Log lines produced while
    replaying are dropped, so each round only forwards what happened
    since the previous message.
    """

    def __init__(
        self,
        logger: MemoryLogger,
        sink: OutputSink | Any = None,
        *,
        config: StreamConfig | None = None,
    ) -> None:
        super().__init__(sink, logger=logger, config=config)
        self.memory = logger

    def deliver(self, fields: FieldSet) -> Outcome:
        if self.memory.has_buffer and self.memory.has_messages:
            for line in self.memory.flush_messages():
                outcome = super().deliver(FieldSet(comment=line))
                if outcome.stops:
                    return outcome
            self.memory.flush_messages()
        return super().deliver(fields)
