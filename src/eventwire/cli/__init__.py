"""Eventwire CLI — stream the demo producer to stdout or over HTTP.

Entry point registered as ``eventwire`` in ``pyproject.toml``::

    [project.scripts]
    eventwire = "eventwire.cli:main"
"""

import argparse
import sys


def _add_producer_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--wait",
        type=float,
        default=None,
        help="Seconds to wait between demo messages (default: 1)",
    )
    parser.add_argument(
        "--fixture",
        default=None,
        help="JSON file with a list of messages to replay (default: bundled demo)",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=0,
        help="Clock ticks to send after the fixture (negative: tick forever)",
    )
    parser.add_argument("--retry", type=int, default=None, help="Client reconnect delay in ms")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``eventwire`` command."""
    parser = argparse.ArgumentParser(
        prog="eventwire",
        description="Eventwire — a Server-Sent Events emitter.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- eventwire demo ---------------------------------------------------
    demo_parser = subparsers.add_parser("demo", help="Stream the demo producer to stdout")
    _add_producer_arguments(demo_parser)
    demo_parser.add_argument(
        "--replay-log",
        action="store_true",
        help="Send the stream's own log lines to the client as SSE comments",
    )
    demo_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log stream events to stderr",
    )

    # -- eventwire headers ------------------------------------------------
    subparsers.add_parser("headers", help="Print the recommended SSE response headers")

    # -- eventwire serve --------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Serve the demo producer over HTTP")
    _add_producer_arguments(serve_parser)
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "demo":
        from eventwire.cli._demo import run_demo

        run_demo(args)
    elif args.command == "headers":
        from eventwire.cli._demo import print_headers

        print_headers()
    elif args.command == "serve":
        from eventwire.cli._serve import serve

        serve(args)
