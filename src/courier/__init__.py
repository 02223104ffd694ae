"""Courier — named messages served as HTTP POST endpoints.

Each message runs through a pipeline compiled once at startup: global and
per-message pre-callbacks, the procedure, then post-callbacks.

Basic usage::

    from courier import App

    app = App()

    @app.message("echo")
    def echo(ctx, payload):
        return {"Result": 0, "Description": "OK"}

    app.compile_and_listen()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Context",
    "ContextKey",
    "CourierError",
    "FrozenRegistryError",
    "HTTPError",
    "HandlerOptions",
    "Registry",
    "ReplyEncodingError",
    "Request",
    "ResponseWriter",
    "RouteConflictError",
    "get_context",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import courier`` fast while providing a clean top-level API.
    """
    if name == "App":
        from courier.app import App

        return App

    if name == "AppConfig":
        from courier.config import AppConfig

        return AppConfig

    if name == "Registry":
        from courier.registry import Registry

        return Registry

    if name == "HandlerOptions":
        from courier.pipeline.options import HandlerOptions

        return HandlerOptions

    if name in ("Context", "ContextKey", "get_context"):
        from courier import context as _context

        return getattr(_context, name)

    if name == "Request":
        from courier.http.request import Request

        return Request

    if name == "ResponseWriter":
        from courier.http.writer import ResponseWriter

        return ResponseWriter

    if name in (
        "ConfigurationError",
        "CourierError",
        "FrozenRegistryError",
        "HTTPError",
        "ReplyEncodingError",
        "RouteConflictError",
    ):
        from courier import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
