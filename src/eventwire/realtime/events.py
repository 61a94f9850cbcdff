"""FieldSet and message types.

Frozen dataclasses for Server-Sent Events. The wire formatter inspects
a ``FieldSet`` to produce the wire protocol; messages only need to know
how to turn themselves into one.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, TypeAlias, runtime_checkable


class Field(Enum):
    """SSE field kinds, declared in wire emission order."""

    COMMENT = "comment"
    ID = "id"
    RETRY = "retry"
    EVENT = "event"
    DATA = "data"


DataValue: TypeAlias = str | Sequence[str] | None


@dataclass(frozen=True, slots=True)
class FieldSet:
    """The field values of one SSE message.

    Any field may be ``None``. Validation happens in the formatter:
    empty strings and non-positive ``retry`` values are skipped there,
    and a FieldSet that produces no line at all cannot be rendered.
    """

    comment: str | None = None
    id: str | None = None
    retry: int | None = None
    event: str | None = None
    data: DataValue = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Any]) -> "FieldSet":
        """Build a FieldSet from a raw mapping keyed by field name.

        Keys may be field names (``"data"``) or ``Field`` members.
        Unknown keys are ignored, which lets JSON fixtures carry extra
        properties.
        """
        values: dict[str, Any] = {}
        for key, value in mapping.items():
            name = key.value if isinstance(key, Field) else key
            if name in _FIELD_NAMES:
                values[name] = value
        return cls(**values)

    def get(self, field: Field) -> Any:
        return getattr(self, field.value)


_FIELD_NAMES = frozenset(f.value for f in Field)


@runtime_checkable
class Message(Protocol):
    """Anything that can be converted to a FieldSet."""

    def to_fields(self) -> FieldSet: ...


@dataclass(frozen=True, slots=True)
class Event:
    """A general-purpose SSE message.

    Usage::

        yield Event(event="update", id="7", data=json.dumps(payload))
    """

    data: DataValue = None
    event: str = ""
    id: str | None = None
    retry: int = 0
    comment: str = ""

    def to_fields(self) -> FieldSet:
        return FieldSet(
            comment=self.comment,
            id=self.id,
            retry=self.retry,
            event=self.event,
            data=self.data,
        )


@dataclass(frozen=True, slots=True)
class Comment:
    """A comment-only message. Clients ignore it; proxies see traffic."""

    text: str

    def to_fields(self) -> FieldSet:
        return FieldSet(comment=self.text)


def as_field_set(value: object) -> FieldSet | None:
    """Convert a producer value to a FieldSet, or ``None`` if it has no form."""
    if isinstance(value, FieldSet):
        return value
    if isinstance(value, Mapping):
        return FieldSet.from_mapping(value)
    if isinstance(value, Message) and not isinstance(value, type):
        fields = value.to_fields()
        if isinstance(fields, FieldSet):
            return fields
        if isinstance(fields, Mapping):
            return FieldSet.from_mapping(fields)
    return None
