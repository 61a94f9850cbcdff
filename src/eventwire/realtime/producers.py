"""Demo producers.

Ready-made producers for the CLI and the demo server: a welcome
comment, a JSON fixture replayed with a delay between messages, and a
clock ticker. Each is a plain generator; ``demo_producer()`` chains
them into the zero-argument callable ``MessageStream.run()`` expects.

Blocking happens inside the generators (``sleep`` between messages),
after the previous message has been written and flushed.
"""

import json
import time
from collections.abc import Callable, Iterator
from datetime import datetime
from pathlib import Path
from typing import Any

from eventwire.errors import ConfigurationError
from eventwire.realtime.events import Comment, Event

FIXTURES_DIR = Path(__file__).parent / "fixtures"
DEFAULT_FIXTURE = "message_stream.json"


def welcome(text: str = "Welcome!") -> Iterator[Comment]:
    yield Comment(text)


def load_fixture(path: str | Path | None = None) -> list[dict[str, Any]]:
    """Load a JSON list of raw field mappings.

    Without a path, the bundled demo fixture is used.
    """
    if path is None:
        raw = (FIXTURES_DIR / DEFAULT_FIXTURE).read_text("utf-8")
        source = DEFAULT_FIXTURE
    else:
        raw = Path(path).read_text("utf-8")
        source = str(path)

    try:
        content = json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"Fixture {source!r} is not valid JSON: {exc}"
        raise ConfigurationError(msg) from exc

    if not isinstance(content, list) or not all(isinstance(item, dict) for item in content):
        msg = f"Fixture {source!r} must contain a JSON list of objects."
        raise ConfigurationError(msg)
    return content


def replay(
    messages: list[dict[str, Any]],
    wait: float = 1.0,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> Iterator[dict[str, Any]]:
    """Yield each message, sleeping ``wait`` seconds after each one."""
    for message in messages:
        yield message
        if wait > 0:
            sleep(wait)


def ticker(
    interval: float = 1.0,
    count: int | None = None,
    *,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], datetime] = datetime.now,
) -> Iterator[Event]:
    """Yield a ``tick`` event with the current time every ``interval`` seconds.

    Runs forever when ``count`` is ``None``.
    """
    n = 0
    while count is None or n < count:
        n += 1
        yield Event(event="tick", id=str(n), data=clock().isoformat(timespec="seconds"))
        if interval > 0:
            sleep(interval)


def demo_producer(
    fixture: str | Path | None = None,
    wait: float = 1.0,
    ticks: int | None = 0,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[[], Iterator[Any]]:
    """Build the demo producer: welcome, fixture replay, then ticks.

    ``ticks=None`` ticks forever; ``0`` skips the ticker.
    """
    messages = load_fixture(fixture)

    def produce() -> Iterator[Any]:
        yield from welcome()
        yield from replay(messages, wait, sleep=sleep)
        if ticks is None or ticks > 0:
            yield from ticker(wait, ticks, sleep=sleep)

    return produce
