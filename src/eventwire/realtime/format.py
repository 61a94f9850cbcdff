"""SSE wire formatter.

Pure functions that turn a ``FieldSet`` into the lines of one SSE
message. Field lines are emitted in a fixed order (comment, id, retry,
event, data) and the message ends with two empty lines.

See https://html.spec.whatwg.org/multipage/server-sent-events.html#parsing-an-event-stream
"""

import os
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from eventwire.errors import EmptyRepresentation, UnknownFieldRenderer
from eventwire.realtime.events import Field, FieldSet

LINE_SEPARATOR = os.linesep

# Every line break the SSE parser recognizes: CRLF, lone CR, lone LF.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")

_TERMINATOR = ("", "")


def _text(value: Any) -> str | None:
    if isinstance(value, str) and value != "":
        return value
    return None


def _render_comment(fields: FieldSet) -> list[str]:
    comment = _text(fields.get(Field.COMMENT))
    if comment is None:
        return []
    return [f": {part}" for part in _LINE_BREAK.split(comment)]


def _render_id(fields: FieldSet) -> list[str]:
    event_id = _text(fields.get(Field.ID))
    return [f"id: {event_id}"] if event_id is not None else []


def _render_retry(fields: FieldSet) -> list[str]:
    value = fields.get(Field.RETRY)
    if value is None or isinstance(value, bool):
        return []
    try:
        retry = int(value)
    except (TypeError, ValueError, OverflowError):
        return []
    return [f"retry: {retry:d}"] if retry > 0 else []


def _render_event(fields: FieldSet) -> list[str]:
    event = _text(fields.get(Field.EVENT))
    return [f"event: {event}"] if event is not None else []


def _render_data(fields: FieldSet) -> list[str]:
    data = fields.get(Field.DATA)
    if isinstance(data, str):
        segments = [data]
    elif isinstance(data, Iterable) and not isinstance(data, (bytes, bytearray, Mapping)):
        segments = [str(item) for item in data]
    else:
        # Scalars, bytes and mappings count as absent.
        return []
    lines: list[str] = []
    for segment in segments:
        lines.extend(f"data: {part}" for part in _LINE_BREAK.split(segment))
    return lines


_RENDERERS: dict[Field, Callable[[FieldSet], list[str]]] = {
    Field.COMMENT: _render_comment,
    Field.ID: _render_id,
    Field.RETRY: _render_retry,
    Field.EVENT: _render_event,
    Field.DATA: _render_data,
}


def render_lines(fields: FieldSet | Mapping[Any, Any]) -> list[str]:
    """Format a message as SSE lines, terminator included.

    Raises:
        EmptyRepresentation: No field produced a line.
        UnknownFieldRenderer: A ``Field`` member has no renderer.
    """
    if not isinstance(fields, FieldSet):
        fields = FieldSet.from_mapping(fields)

    lines: list[str] = []
    for field in Field:
        renderer = _RENDERERS.get(field)
        if renderer is None:
            raise UnknownFieldRenderer(field.value)
        lines.extend(renderer(fields))

    if not lines:
        raise EmptyRepresentation(tuple(f.value for f in Field))

    lines.extend(_TERMINATOR)
    return lines


def render(fields: FieldSet | Mapping[Any, Any], separator: str = LINE_SEPARATOR) -> str:
    """Format a message as a single SSE text buffer.

    For line output, use ``render_lines()``.
    """
    return separator.join(render_lines(fields))
