"""Message registry — the setup-phase builder.

Mutable during setup (messages, global callbacks, URL prefix).
Frozen for good by ``compile()``, which turns the pending messages into
a sealed ``DispatchTable``. There is no way back: every mutation after
the freeze raises ``FrozenRegistryError``.

Setup is single-threaded by contract. Callers that register from
several places must serialize those calls themselves.
"""

import logging
from collections.abc import Callable

from courier._internal.types import Callback, Procedure
from courier.errors import ConfigurationError, FrozenRegistryError
from courier.pipeline.compiler import compile_routes
from courier.pipeline.options import HandlerOptions
from courier.routing.route import PendingMessage
from courier.routing.table import DispatchTable

logger = logging.getLogger("courier.registry")


def normalize_prefix(prefix: str) -> str:
    """Validate a URL prefix and give it exactly one trailing ``/``.

    Raises ``ConfigurationError`` for an empty prefix or one that does
    not start with ``/``.
    """
    if not prefix:
        msg = "URL prefix must not be empty."
        raise ConfigurationError(msg)
    if not prefix.startswith("/"):
        msg = f"URL prefix must start with '/' (got {prefix!r})."
        raise ConfigurationError(msg)
    return prefix.rstrip("/") + "/"


class Registry:
    """Collects messages and global callbacks, then compiles them once.

    Usage::

        registry = Registry()
        registry.set_path_prefix("/api")
        registry.add_global_pre(require_post)
        registry.register("echo", echo)
        table = registry.compile()   # registry is frozen from here on
    """

    __slots__ = ("_frozen", "_global_post", "_global_pre", "_pending", "_prefix")

    def __init__(self, prefix: str = "/") -> None:
        self._prefix = normalize_prefix(prefix)
        self._global_pre: list[Callback] = []
        self._global_post: list[Callback] = []
        self._pending: list[PendingMessage] = []
        self._frozen = False

    # -- Setup --

    def set_path_prefix(self, prefix: str) -> None:
        """Serve every message under *prefix* (``/api`` -> ``/api/<name>``)."""
        self._check_not_frozen("set_path_prefix")
        self._prefix = normalize_prefix(prefix)

    def add_global_pre(self, callback: Callback) -> None:
        """Append a callback to the pre-chain every message inherits."""
        self._check_not_frozen("add_global_pre")
        self._global_pre.append(callback)

    def add_global_post(self, callback: Callback) -> None:
        """Append a callback to the post-chain every message inherits."""
        self._check_not_frozen("add_global_post")
        self._global_post.append(callback)

    def register(
        self,
        name: str,
        procedure: Procedure,
        options: HandlerOptions | None = None,
    ) -> None:
        """Queue *procedure* to be served as message *name*.

        Duplicate names are not checked here; they collide when
        ``compile()`` publishes the second one.
        """
        self._check_not_frozen("register")
        if not name or name.startswith("/"):
            msg = f"Message name must be non-empty and must not start with '/' (got {name!r})."
            raise ConfigurationError(msg)
        opts = options or HandlerOptions()
        self._pending.append(
            PendingMessage(
                name=name,
                procedure=procedure,
                clear_pre=opts.clear_pre,
                clear_post=opts.clear_post,
                pre=tuple(opts.pre),
                post=tuple(opts.post),
            )
        )

    def message(
        self,
        name: str,
        options: HandlerOptions | None = None,
    ) -> Callable[[Procedure], Procedure]:
        """Register a procedure via decorator."""

        def decorator(func: Procedure) -> Procedure:
            self.register(name, func, options)
            return func

        return decorator

    # -- Freeze --

    def compile(self) -> DispatchTable:
        """Freeze the registry and compile every pending message.

        Runs exactly once; a second call raises ``FrozenRegistryError``.
        Raises ``RouteConflictError`` if two messages share a URL.
        """
        self._check_not_frozen("compile")
        self._frozen = True
        logger.debug(
            "Registry frozen: %d message(s), %d global pre, %d global post",
            len(self._pending),
            len(self._global_pre),
            len(self._global_post),
        )
        return compile_routes(
            self._pending,
            prefix=self._prefix,
            global_pre=self._global_pre,
            global_post=self._global_post,
        )

    # -- Introspection --

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def path_prefix(self) -> str:
        return self._prefix

    @property
    def pending(self) -> tuple[PendingMessage, ...]:
        return tuple(self._pending)

    @property
    def global_pre(self) -> tuple[Callback, ...]:
        return tuple(self._global_pre)

    @property
    def global_post(self) -> tuple[Callback, ...]:
        return tuple(self._global_post)

    def _check_not_frozen(self, operation: str) -> None:
        if self._frozen:
            msg = (
                f"Cannot call {operation}() after the registry was compiled. "
                "Register messages, callbacks, and the URL prefix before the server starts."
            )
            raise FrozenRegistryError(msg)
