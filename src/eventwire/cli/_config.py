"""Build ``StreamConfig`` and the demo producer from CLI arguments."""

import argparse
import sys
from collections.abc import Callable, Iterator
from typing import Any

from eventwire.config import StreamConfig
from eventwire.errors import ConfigurationError
from eventwire.realtime.producers import demo_producer


def config_from_args(args: argparse.Namespace) -> StreamConfig:
    """CLI flags override the ``StreamConfig`` defaults."""
    overrides: dict[str, Any] = {}
    if args.wait is not None:
        overrides["wait_seconds"] = args.wait
    if args.retry is not None:
        overrides["retry_ms"] = args.retry
    if getattr(args, "host", None):
        overrides["host"] = args.host
    if getattr(args, "port", None):
        overrides["port"] = args.port
    try:
        return StreamConfig(**overrides)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc


def producer_from_args(args: argparse.Namespace, config: StreamConfig) -> Callable[[], Iterator[Any]]:
    ticks = None if args.ticks < 0 else args.ticks
    try:
        return demo_producer(args.fixture, config.wait_seconds, ticks)
    except (OSError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
