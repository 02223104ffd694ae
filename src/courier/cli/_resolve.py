"""Locate the courier App named on the command line.

``courier run`` and ``courier routes`` both take an import string of the
form ``module[:attribute]``. ``courier routes`` also needs the app
compiled, which is where registry faults (duplicate URLs, bad prefix)
first show up; ``resolve_app(..., compile_app=True)`` reports those as
``AppResolutionError`` so the CLI prints one line instead of a traceback.
"""

import importlib

from courier.app import App
from courier.errors import ConfigurationError, RouteConflictError

DEFAULT_ATTRIBUTE = "app"


class AppResolutionError(Exception):
    """The import string did not lead to a usable courier App."""


def _split(import_string: str) -> tuple[str, str]:
    module_path, _, attr_name = import_string.partition(":")
    if not module_path:
        msg = f"{import_string!r} has no module part (expected 'module:attribute')"
        raise AppResolutionError(msg)
    return module_path, attr_name or DEFAULT_ATTRIBUTE


def _load(module_path: str, attr_name: str) -> object:
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as exc:
        msg = f"Cannot import {module_path!r}: {exc}"
        raise AppResolutionError(msg) from exc

    if not hasattr(module, attr_name):
        apps = sorted(name for name, value in vars(module).items() if isinstance(value, App))
        hint = f" (courier apps found: {', '.join(apps)})" if apps else ""
        msg = f"Module {module_path!r} has no attribute {attr_name!r}{hint}"
        raise AppResolutionError(msg)
    return getattr(module, attr_name)


def resolve_app(import_string: str, *, compile_app: bool = False) -> App:
    """Return the courier App named by *import_string*.

    A callable that is not an App is treated as a factory and called with
    no arguments. With *compile_app*, the app is also compiled (if it was not
    already), so configuration faults are raised here.

    Raises:
        AppResolutionError: The module or attribute is missing, the object
            is not an App, its factory failed, or it does not compile.
    """
    module_path, attr_name = _split(import_string)
    obj = _load(module_path, attr_name)

    if callable(obj) and not isinstance(obj, App):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"App factory {import_string!r} failed: {exc}"
            raise AppResolutionError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{import_string!r} is a {type(obj).__name__}, not a courier.App"
        raise AppResolutionError(msg)

    if compile_app and not obj.registry.frozen:
        try:
            obj.compile()
        except RouteConflictError as exc:
            msg = f"{import_string!r} registers two messages at {exc.url!r}"
            raise AppResolutionError(msg) from exc
        except ConfigurationError as exc:
            msg = f"{import_string!r} failed to compile: {exc}"
            raise AppResolutionError(msg) from exc

    return obj
