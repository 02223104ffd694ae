"""Request-scoped context.

Provides:
- ``Context``: the per-request record threaded through every pipeline
  stage (callbacks and the procedure).
- ``ContextKey``: a typed key for storing extra values on a ``Context``.
- ``context_var`` / ``get_context()``: the current request's context,
  for code that cannot take it as an argument.

A ``Context`` is created fresh for each dispatch and discarded when the
dispatch completes. It is never shared between requests, so it carries
no locks.

Keys are compared by identity, not by name. Two libraries that both
define ``ContextKey("user")`` never see each other's values::

    from courier.context import ContextKey

    STARTED: ContextKey[float] = ContextKey("started")

    def stamp(ctx, request, writer):
        ctx[STARTED] = time.monotonic()
        return True
"""

from contextvars import ContextVar
from typing import Any, Generic, TypeVar, overload

T = TypeVar("T")

_MISSING: Any = object()


class ContextKey(Generic[T]):
    """A typed, identity-compared key into a ``Context``.

    ``default`` is returned by ``ctx[key]`` when the key was never set.
    Without a default, reading an unset key raises ``KeyError``.
    """

    __slots__ = ("default", "name")

    def __init__(self, name: str, default: T = _MISSING) -> None:
        self.name = name
        self.default = default

    def __repr__(self) -> str:
        return f"ContextKey({self.name!r})"


class Context:
    """Per-request scratch space shared by callbacks and the procedure.

    Fixed fields are set by the dispatcher before the pre-chain runs:

    - ``method``: the HTTP method of the request.
    - ``path``: the request path.
    - ``url``: the compiled route URL that matched.
    - ``received_at``: ``time.monotonic()`` when dispatch began.

    Anything else goes through typed keys (see ``ContextKey``).
    """

    __slots__ = ("_values", "method", "path", "received_at", "url")

    def __init__(self, *, method: str, path: str, url: str, received_at: float) -> None:
        self.method = method
        self.path = path
        self.url = url
        self.received_at = received_at
        self._values: dict[ContextKey[Any], Any] = {}

    @overload
    def get(self, key: ContextKey[T]) -> T | None: ...

    @overload
    def get(self, key: ContextKey[T], default: T) -> T: ...

    def get(self, key: ContextKey[Any], default: Any = None) -> Any:
        """Return the value for *key*, or *default* if it was never set."""
        if key in self._values:
            return self._values[key]
        if key.default is not _MISSING:
            return key.default
        return default

    def __getitem__(self, key: ContextKey[T]) -> T:
        try:
            return self._values[key]
        except KeyError:
            if key.default is not _MISSING:
                return key.default
            msg = f"{key!r} is not set in this request's context"
            raise KeyError(msg) from None

    def __setitem__(self, key: ContextKey[T], value: T) -> None:
        self._values[key] = value

    def __delitem__(self, key: ContextKey[Any]) -> None:
        try:
            del self._values[key]
        except KeyError:
            msg = f"{key!r} is not set in this request's context"
            raise KeyError(msg) from None

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __repr__(self) -> str:
        names = ", ".join(k.name for k in self._values)
        return f"<Context {self.method} {self.path} [{names}]>"


context_var: ContextVar[Context] = ContextVar("courier_context")
"""The current dispatch's context. Set by the dispatcher, reset after."""


def get_context() -> Context:
    """Return the context of the request being dispatched.

    Raises ``LookupError`` if called outside a dispatch.
    """
    return context_var.get()
