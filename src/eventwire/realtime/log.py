"""Logging capability consumed by ``MessageStream``.

The stream only needs ``debug()`` and ``notice()``. Three
implementations ship here:

- ``NullLogger`` drops everything.
- ``StdlibLogger`` forwards to a stdlib ``logging.Logger`` (the default).
- ``MemoryLogger`` keeps the most recent lines so they can be replayed
  to the client as SSE comments (see ``LoggingMessageStream``).
"""

import logging
from collections import deque
from datetime import datetime
from typing import Protocol, runtime_checkable

# Between INFO and WARNING, as in syslog.
NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")

LEVELS = ("debug", "info", "notice", "warning", "error", "critical")


@runtime_checkable
class StreamLogger(Protocol):
    """Minimal logger interface injected into ``MessageStream``."""

    def debug(self, msg: str) -> None: ...

    def notice(self, msg: str) -> None: ...


class NullLogger:
    """Discards every message."""

    def debug(self, msg: str) -> None:
        pass

    def notice(self, msg: str) -> None:
        pass


class StdlibLogger:
    """Adapts a stdlib ``logging.Logger`` to ``StreamLogger``."""

    __slots__ = ("logger",)

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("eventwire.stream")

    def debug(self, msg: str) -> None:
        self.logger.debug(msg)

    def notice(self, msg: str) -> None:
        self.logger.log(NOTICE, msg)


class MemoryLogger:
    """Keeps recent log lines in memory until they are flushed.

    Lines below ``action_level`` are ignored. At most ``max_buffer_size``
    lines are retained, oldest dropped first; a size of ``0`` or less
    retains nothing.

    Each line reads ``[level] 2024-01-31 12:00:00: message``.
    """

    def __init__(self, action_level: str = "debug", max_buffer_size: int = 10) -> None:
        self.action_level = action_level
        self.max_buffer_size = max_buffer_size
        self._lines: deque[str] = deque(maxlen=max(max_buffer_size, 0))

    @property
    def action_level(self) -> str:
        return self._action_level

    @action_level.setter
    def action_level(self, level: str) -> None:
        self._action_level = _check_level(level)

    @property
    def has_buffer(self) -> bool:
        return self.max_buffer_size > 0

    @property
    def has_messages(self) -> bool:
        return bool(self._lines)

    def log(self, level: str, msg: str) -> None:
        level = _check_level(level)
        if not self.has_buffer:
            return
        if LEVELS.index(level) < LEVELS.index(self._action_level):
            return
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        self._lines.append(f"[{level}] {timestamp}: {msg}")

    def debug(self, msg: str) -> None:
        self.log("debug", msg)

    def info(self, msg: str) -> None:
        self.log("info", msg)

    def notice(self, msg: str) -> None:
        self.log("notice", msg)

    def warning(self, msg: str) -> None:
        self.log("warning", msg)

    def error(self, msg: str) -> None:
        self.log("error", msg)

    def flush_messages(self) -> list[str]:
        """Return buffered lines, oldest first, and empty the buffer."""
        lines = list(self._lines)
        self._lines.clear()
        return lines


def _check_level(level: str) -> str:
    if level not in LEVELS:
        msg = f"Invalid log level {level!r}. Valid log levels are: [{', '.join(LEVELS)}]"
        raise ValueError(msg)
    return level
