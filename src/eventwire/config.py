"""Stream configuration.

StreamConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass

from eventwire.errors import ConfigurationError
from eventwire.realtime.format import LINE_SEPARATOR


@dataclass(frozen=True, slots=True)
class StreamConfig:
    """Stream and demo-server configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = StreamConfig(retry_ms=3000, port=3000)
    """

    # Wire
    line_separator: str = LINE_SEPARATOR
    retry_ms: int | None = None  # Sent as a leading ``retry:`` block when set

    # Logging
    log_output: bool = True  # Debug-log every rendered block

    # ASGI host
    allow_origin: str | None = "*"
    max_streams: int = 100  # Worker threads available to concurrent streams

    # Demo server
    host: str = "127.0.0.1"
    port: int = 8000
    wait_seconds: float = 1.0  # Delay between demo fixture messages

    def __post_init__(self) -> None:
        if self.line_separator not in ("\n", "\r\n", "\r"):
            msg = f"line_separator must be a line break, got {self.line_separator!r}"
            raise ConfigurationError(msg)
        if self.retry_ms is not None and self.retry_ms <= 0:
            msg = f"retry_ms must be positive, got {self.retry_ms!r}"
            raise ConfigurationError(msg)
        if self.max_streams < 1:
            msg = f"max_streams must be at least 1, got {self.max_streams!r}"
            raise ConfigurationError(msg)
        if self.wait_seconds < 0:
            msg = f"wait_seconds must not be negative, got {self.wait_seconds!r}"
            raise ConfigurationError(msg)
