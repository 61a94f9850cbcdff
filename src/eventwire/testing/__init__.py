"""Test utilities for eventwire streams.

Provides an in-memory sink, an in-process ASGI client, and an SSE
parser::

    from eventwire.testing import RecordingSink, parse_sse_frames
"""

from eventwire.testing.client import SSECapture, capture_sse
from eventwire.testing.sinks import RecordingSink
from eventwire.testing.sse import parse_sse_frames

__all__ = [
    "RecordingSink",
    "SSECapture",
    "capture_sse",
    "parse_sse_frames",
]
