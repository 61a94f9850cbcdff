"""Output sinks: where the message stream writes its bytes.

A sink writes text, pushes it to the transport on ``flush()``, and
reports whether the remote peer is still there. Failures are reported
as ``False`` rather than raised, so the stream can stop cleanly.
"""

import io
import logging
import sys
from collections.abc import Callable
from typing import IO, Any, Protocol, runtime_checkable

from eventwire.errors import InvalidSinkResource

logger = logging.getLogger("eventwire.sink")


@runtime_checkable
class OutputSink(Protocol):
    """Transport used by ``MessageStream``."""

    def write(self, text: str) -> bool: ...

    def flush(self) -> bool: ...

    def is_connected(self) -> bool: ...

    def close(self) -> None: ...


def _is_binary(handle: Any) -> bool:
    if isinstance(handle, io.TextIOBase):
        return False
    if isinstance(handle, (io.RawIOBase, io.BufferedIOBase)):
        return True
    return "b" in getattr(handle, "mode", "")


class StreamSink:
    """Sink over a file-like handle (socket file, pipe, response body...).

    Binary handles receive UTF-8. Unless ``is_connected`` is given, the
    peer counts as connected while the handle is open. The handle is
    closed by ``close()`` only when ``owned`` is true.
    """

    __slots__ = ("_binary", "_is_connected", "handle", "owned")

    def __init__(
        self,
        handle: IO[Any],
        *,
        owned: bool = False,
        is_connected: Callable[[], bool] | None = None,
    ) -> None:
        if not callable(getattr(handle, "write", None)):
            raise InvalidSinkResource(handle, "no write() method")
        if getattr(handle, "closed", False):
            raise InvalidSinkResource(handle, "handle is closed")
        writable = getattr(handle, "writable", None)
        if callable(writable) and not writable():
            raise InvalidSinkResource(handle, "handle is not writable")

        self.handle = handle
        self.owned = owned
        self._binary = _is_binary(handle)
        self._is_connected = is_connected

    def write(self, text: str) -> bool:
        try:
            self.handle.write(text.encode("utf-8") if self._binary else text)
        except (OSError, ValueError) as exc:
            logger.debug("Write to %r failed: %s", self.handle, exc)
            return False
        return True

    def flush(self) -> bool:
        flush = getattr(self.handle, "flush", None)
        if flush is None:
            return True
        try:
            flush()
        except (OSError, ValueError) as exc:
            logger.debug("Flush of %r failed: %s", self.handle, exc)
            return False
        return True

    def is_connected(self) -> bool:
        if self._is_connected is not None:
            return self._is_connected()
        return not getattr(self.handle, "closed", False)

    def close(self) -> None:
        if self.owned and not getattr(self.handle, "closed", False):
            self.handle.close()


def open_process_output() -> StreamSink:
    """Open an owned binary sink over the process's standard output.

    The file descriptor itself stays open when the sink is closed.
    """
    sys.stdout.flush()
    handle = open(sys.stdout.fileno(), "wb", closefd=False)  # noqa: SIM115
    return StreamSink(handle, owned=True)


def as_sink(value: Any) -> OutputSink:
    """Use *value* as a sink, wrapping plain writable handles."""
    if isinstance(value, OutputSink):
        return value
    return StreamSink(value)
