"""Immutable HTTP request — the transport-in object handed to callbacks.

Frozen metadata with async body access.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field
from typing import Any

from courier._internal.asgi import Receive, Scope
from courier.errors import BodyReadError, PayloadTooLarge
from courier.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers) is frozen at creation. The body is
    read once through ``.body()`` and cached.
    """

    method: str
    path: str
    headers: Headers
    query_string: bytes
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: mutable cache for the body (the dict is mutable, the field is not)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        """The Content-Length header as int."""
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    async def body(self, max_length: int | None = None) -> bytes:
        """Read the full request body.

        Raises ``PayloadTooLarge`` when more than *max_length* bytes
        arrive, and ``BodyReadError`` when the client disconnects or the
        transport fails before the body is complete.
        """
        if "_body" in self._cache:
            return self._cache["_body"]

        declared = self.content_length
        if max_length is not None and declared is not None and declared > max_length:
            raise PayloadTooLarge(max_length)

        chunks: list[bytes] = []
        size = 0
        while True:
            try:
                message = await self._receive()
            except OSError as exc:
                raise BodyReadError(f"Transport failed while reading the body: {exc}") from exc
            if message["type"] == "http.disconnect":
                raise BodyReadError("Client disconnected before the body was complete")
            chunk = message.get("body", b"")
            if chunk:
                size += len(chunk)
                if max_length is not None and size > max_length:
                    raise PayloadTooLarge(max_length)
                chunks.append(chunk)
            if not message.get("more_body", False):
                break

        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(await self.body())

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )
