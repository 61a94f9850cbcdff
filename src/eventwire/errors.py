"""Eventwire exception hierarchy.

Shared across the formatter, the message stream, the sinks and the ASGI
host so every module raises and catches the same types.

Write failures and client disconnects are not exceptions: the message
stream reports them as an ``Outcome`` and returns normally.
"""

from typing import Any


def type_name(value: Any) -> str:
    """The class name of *value*, used in error messages."""
    if value is None:
        return "None"
    cls = type(value)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


class EventwireError(Exception):
    """Base for all eventwire-specific errors."""


class ConfigurationError(EventwireError):
    """Raised when the stream is wired up incorrectly.

    These indicate misuse by the caller. They are never retried or
    suppressed by the stream.
    """


class InvalidSinkResource(ConfigurationError, TypeError):
    """The output handle passed to a sink is not a writable transport."""

    def __init__(self, value: Any, reason: str = "") -> None:
        self.actual_type = type_name(value)
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f"The output sink must be a writable stream, got {self.actual_type!r} instead{detail}."
        )


class InvalidProducerResult(ConfigurationError, TypeError):
    """The producer factory returned neither a sequence nor an iterator."""

    def __init__(self, value: Any) -> None:
        self.actual_type = type_name(value)
        super().__init__(
            "The producer passed to MessageStream.run() must return a list, a tuple "
            f"or an iterator (e.g. be a generator function), got {self.actual_type!r} instead."
        )


class InvalidMessageType(ConfigurationError, TypeError):
    """The producer yielded something that cannot become a FieldSet."""

    def __init__(self, value: Any) -> None:
        self.actual_type = type_name(value)
        super().__init__(
            "The producer must yield a FieldSet, a mapping of SSE fields, or a message "
            f"with a to_fields() method, got {self.actual_type!r} instead."
        )


class FormatError(EventwireError):
    """Raised when a message cannot be represented in SSE wire format.

    Always a bug in the calling code, never a transient condition.
    """


class EmptyRepresentation(FormatError, ValueError):
    """Every field of the message was absent, empty or invalid."""

    def __init__(self, fields: tuple[str, ...]) -> None:
        self.fields = fields
        super().__init__(
            "Empty stream format representation! A message must define at least one "
            f"of the following fields: [{', '.join(fields)}]"
        )


class UnknownFieldRenderer(FormatError, LookupError):
    """A declared field kind has no renderer in the formatter table."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"The field {field!r} has no renderer in the wire formatter.")


class ServerNotInstalledError(EventwireError, ImportError):
    """The optional ASGI server used by ``eventwire serve`` is missing."""
