"""Step outcomes and run state for ``MessageStream``.

A write+check step returns an ``Outcome`` instead of raising: the
stream inspects it to decide whether to pull the next message.
"""

from dataclasses import dataclass
from enum import Enum


class Outcome(Enum):
    """Result of delivering one message."""

    DELIVERED = "delivered"
    DISCONNECTED = "disconnected"
    WRITE_FAILED = "write_failed"

    @property
    def cause(self) -> str:
        """Human-readable shutdown cause, logged when the stream stops."""
        return _CAUSES[self]

    @property
    def stops(self) -> bool:
        return self is not Outcome.DELIVERED


_CAUSES = {
    Outcome.DELIVERED: "delivered",
    Outcome.DISCONNECTED: "connection closed",
    Outcome.WRITE_FAILED: "output error",
}


class StreamState(Enum):
    """Lifecycle of one ``MessageStream.run()`` invocation.

    ``IDLE -> RUNNING -> DRAINING -> STOPPED`` on shutdown,
    ``IDLE -> RUNNING -> EXHAUSTED -> STOPPED`` when the producer ends.
    """

    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    EXHAUSTED = "exhausted"
    STOPPED = "stopped"


@dataclass(frozen=True, slots=True)
class RunResult:
    """What a finished run did.

    ``delivered`` counts produced messages that were written and flushed,
    including one after which the client was found disconnected.

    ``stopped_by`` is ``None`` when the producer ran out of messages.
    """

    delivered: int
    stopped_by: Outcome | None = None

    @property
    def exhausted(self) -> bool:
        return self.stopped_by is None
