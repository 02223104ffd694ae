"""Courier application class.

Mutable during setup (messages, global callbacks, URL prefix).
Frozen at runtime when ``compile_and_listen()`` or the ASGI lifespan runs,
or on the first request, whichever comes first.
"""

import threading
from collections.abc import Callable

from courier._internal.asgi import Receive, Scope, Send
from courier._internal.types import Callback, Procedure
from courier.config import AppConfig
from courier.errors import ConfigurationError
from courier.pipeline.options import HandlerOptions
from courier.registry import Registry
from courier.routing.table import DispatchTable
from courier.server.dispatcher import handle_request

# Read per request from App.config, never from a compile_and_listen() override
_REQUEST_FIELDS = ("path_prefix", "max_content_length", "access_log")


class App:
    """The courier application: a ``Registry`` plus an ASGI entry point.

    Registration methods delegate to the owned registry. Once the app is
    compiled, the registry is frozen and every further registration call
    raises ``FrozenRegistryError``.

    Thread safety:
        Setup is single-threaded. The compile transition uses a Lock +
        double-check so exactly one thread compiles, even when several
        ASGI workers see their first request at the same time.
    """

    __slots__ = ("_compile_lock", "_registry", "_table", "config")

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._registry = Registry(self.config.path_prefix)
        self._compile_lock = threading.Lock()
        self._table: DispatchTable | None = None

    # -- Registration --

    def set_path_prefix(self, prefix: str) -> None:
        """Serve every message under *prefix*."""
        self._registry.set_path_prefix(prefix)

    def add_global_pre(self, callback: Callback) -> Callback:
        """Add a callback every message runs before its procedure.

        Returns *callback*, so it also works as a decorator.
        """
        self._registry.add_global_pre(callback)
        return callback

    def add_global_post(self, callback: Callback) -> Callback:
        """Add a callback every message runs after its reply is sent.

        Returns *callback*, so it also works as a decorator.
        """
        self._registry.add_global_post(callback)
        return callback

    def register(
        self,
        name: str,
        procedure: Procedure,
        options: HandlerOptions | None = None,
    ) -> None:
        """Serve *procedure* as message *name*."""
        self._registry.register(name, procedure, options)

    def message(
        self,
        name: str,
        options: HandlerOptions | None = None,
    ) -> Callable[[Procedure], Procedure]:
        """Register a procedure via decorator.

        Usage::

            @app.message("echo")
            def echo(ctx, payload):
                return {"Result": 0, "Description": "OK"}
        """
        return self._registry.message(name, options)

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def table(self) -> DispatchTable:
        """The compiled dispatch table. Compiles the app if needed."""
        return self._ensure_compiled()

    # -- Start --

    def compile(self) -> DispatchTable:
        """Compile the registry into the dispatch table.

        Runs exactly once. Calling it on an app that is already compiled
        raises ``FrozenRegistryError``.
        """
        with self._compile_lock:
            self._table = self._registry.compile()
            return self._table

    def compile_and_listen(self, config: AppConfig | None = None) -> None:
        """Compile, then serve with pounce until shutdown.

        *config* overrides the app's own config for the server settings
        (host, port, workers, TLS, timeouts). Request handling keeps reading
        ``self.config``, so an override that changes one of those fields
        raises ``ConfigurationError`` before anything is compiled.
        """
        if config is not None:
            changed = [
                name
                for name in _REQUEST_FIELDS
                if getattr(config, name) != getattr(self.config, name)
            ]
            if changed:
                msg = (
                    "compile_and_listen() config overrides request-handling "
                    f"settings {changed}; set them on App(config=...) instead."
                )
                raise ConfigurationError(msg)

        self.compile()

        from courier.server.serve import run_server

        run_server(self, config or self.config)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        table = self._ensure_compiled()
        await handle_request(scope, receive, send, table=table, config=self.config)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Compile at startup so configuration faults surface before traffic."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    self._ensure_compiled()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_compiled(self) -> DispatchTable:
        """Return the dispatch table, compiling it on first use."""
        table = self._table
        if table is not None:
            return table
        with self._compile_lock:
            if self._table is None:
                self._table = self._registry.compile()
            return self._table
