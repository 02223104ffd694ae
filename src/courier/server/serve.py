"""Server launch — hands a compiled courier App to pounce.

The transport (sockets, TLS, keep-alive, per-connection tasks) belongs to
pounce. Courier only gives it an ASGI callable whose dispatch table is
already compiled.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from courier.config import AppConfig


def run_server(app: object, config: AppConfig) -> None:
    """Start a pounce server serving *app* with the settings in *config*.

    Pounce's ``run()`` takes an import string (e.g. ``"myapp:app"``), but
    courier has a live ``App`` object, so ``pounce.Server`` is used
    directly with the ASGI callable.

    Blocks until the server shuts down.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    server_config = ServerConfig(
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level,
        keep_alive_timeout=config.keep_alive_timeout,
        request_timeout=config.request_timeout,
        ssl_certfile=config.ssl_certfile,
        ssl_keyfile=config.ssl_keyfile,
    )
    server = Server(server_config, app)
    server.run()
