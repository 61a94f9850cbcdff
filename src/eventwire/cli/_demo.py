"""``eventwire demo`` and ``eventwire headers``.

Streams the demo producer to the process's standard output, the way a
CGI-style host would hand stdout to the client.
"""

import argparse
import logging
import sys

from eventwire.cli._config import config_from_args, producer_from_args
from eventwire.realtime.log import MemoryLogger, StdlibLogger
from eventwire.realtime.stream import LoggingMessageStream, MessageStream


def run_demo(args: argparse.Namespace) -> None:
    config = config_from_args(args)
    producer = producer_from_args(args, config)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    if args.replay_log:
        stream: MessageStream = LoggingMessageStream(MemoryLogger("debug"), config=config)
    else:
        stream = MessageStream(logger=StdlibLogger(), config=config)

    with stream:
        try:
            stream.run(producer)
        except KeyboardInterrupt:
            raise SystemExit(130) from None


def print_headers() -> None:
    for header in MessageStream.recommended_headers():
        print(header)
