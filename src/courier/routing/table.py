"""Dispatch table — exact-URL lookup of compiled routes.

Filled by the compiler, then sealed. Sealed tables are only read, so
concurrent requests share one without locking.
"""

from collections.abc import Iterator

from courier.errors import RouteConflictError
from courier.routing.route import CompiledRoute


class DispatchTable:
    """Maps a full URL (prefix + message name) to its ``CompiledRoute``.

    Usage::

        table = DispatchTable()
        table.add(route)
        table.seal()
        route = table.lookup("/api/echo")
    """

    __slots__ = ("_routes", "_sealed")

    def __init__(self) -> None:
        self._routes: dict[str, CompiledRoute] = {}
        self._sealed = False

    def add(self, route: CompiledRoute) -> None:
        """Publish *route*. Raises ``RouteConflictError`` if its URL is taken."""
        if self._sealed:
            msg = "Cannot add routes to a sealed dispatch table."
            raise RuntimeError(msg)
        if route.url in self._routes:
            raise RouteConflictError(route.url)
        self._routes[route.url] = route

    def seal(self) -> None:
        """Freeze the table. No more routes can be added."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    def lookup(self, path: str) -> CompiledRoute | None:
        """Return the route for *path*, or ``None``."""
        return self._routes.get(path)

    @property
    def routes(self) -> list[CompiledRoute]:
        """All routes, in the order they were published."""
        return list(self._routes.values())

    def __contains__(self, path: object) -> bool:
        return path in self._routes

    def __iter__(self) -> Iterator[str]:
        return iter(self._routes)

    def __len__(self) -> int:
        return len(self._routes)
