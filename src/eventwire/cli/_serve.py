"""``eventwire serve`` — the demo producer over HTTP.

Every connection gets its own run of the demo producer.
"""

import argparse
import sys

from eventwire.cli._config import config_from_args, producer_from_args
from eventwire.errors import ServerNotInstalledError
from eventwire.server.asgi import EventStreamApp


def serve(args: argparse.Namespace) -> None:
    config = config_from_args(args)
    app = EventStreamApp(producer_from_args(args, config), config=config)

    from eventwire.server.dev import run_dev_server

    try:
        run_dev_server(app, config.host, config.port)
    except ServerNotInstalledError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
