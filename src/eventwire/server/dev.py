"""Development server for the SSE demo.

Starts a pounce ASGI server with a live ``EventStreamApp`` object.
Pounce is an optional dependency (``pip install eventwire[serve]``).
"""

import logging

from eventwire._internal.asgi import ASGIApp
from eventwire.errors import ServerNotInstalledError

logger = logging.getLogger("eventwire.server")


def run_dev_server(app: ASGIApp, host: str, port: int) -> None:
    """Serve *app* with pounce until interrupted.

    Pounce's ``run()`` takes an import string, but the demo builds its
    app from CLI flags, so ``pounce.Server`` is used directly with the
    ASGI callable. Single worker: each stream holds its connection open.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError:
        msg = (
            "eventwire serve requires 'pounce' as its ASGI server. "
            "Install with: pip install eventwire[serve]"
        )
        raise ServerNotInstalledError(msg) from None

    config = ServerConfig(host=host, port=port, workers=1)
    logger.info("Serving SSE demo on http://%s:%d/", host, port)
    Server(config, app).run()
