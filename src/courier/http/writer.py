"""Response writer — the transport-out object handed to callbacks.

Callbacks set the status, headers, and (rarely) body on the writer.
Nothing reaches the client until the dispatcher calls ``commit()``; after
that the response is fixed and further mutations are dropped with a
warning, since the client already has the response.
"""

import logging

from courier._internal.asgi import Send
from courier.http.headers import MutableHeaders

logger = logging.getLogger("courier.server")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


class ResponseWriter:
    """Buffered HTTP response bound to one ASGI ``send`` callable."""

    __slots__ = ("_body", "_closed", "_committed", "_send", "_status", "headers")

    def __init__(self, send: Send) -> None:
        self._send = send
        self._status = 200
        self._body: list[bytes] = []
        self._committed = False
        self._closed = False
        self.headers = MutableHeaders()

    @property
    def status(self) -> int:
        return self._status

    @property
    def committed(self) -> bool:
        """True once the response has been handed to the transport."""
        return self._committed

    @property
    def closed(self) -> bool:
        """True if the transport refused a send (client went away)."""
        return self._closed

    @property
    def body(self) -> bytes:
        """The body written so far."""
        return b"".join(self._body)

    def write_header(self, status: int) -> None:
        """Set the response status."""
        if self._committed:
            logger.warning("Ignoring status %d: response already committed", status)
            return
        self._status = status

    def set_header(self, name: str, value: str) -> None:
        """Set a response header, replacing any previous value."""
        if self._committed:
            logger.warning("Ignoring header %r: response already committed", name)
            return
        self.headers[name] = value

    def write(self, data: bytes | str) -> None:
        """Append *data* to the response body."""
        if self._committed:
            logger.warning("Ignoring %d body bytes: response already committed", len(data))
            return
        self._body.append(data.encode("utf-8") if isinstance(data, str) else data)

    def discard_body(self) -> None:
        """Drop anything written to the body so far."""
        if not self._committed:
            self._body.clear()

    async def commit(self) -> bool:
        """Send the buffered response through ASGI.

        Returns ``False`` if the transport is closed. In that case the
        writer is marked closed and nothing else is sent. Committing twice
        is a no-op.
        """
        if self._committed:
            return not self._closed
        self._committed = True

        body = self.body if _body_allowed(self._status) else b""
        raw_headers = self.headers.to_raw()
        raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

        try:
            await self._send(
                {
                    "type": "http.response.start",
                    "status": self._status,
                    "headers": raw_headers,
                }
            )
            await self._send({"type": "http.response.body", "body": body})
        except OSError:
            logger.debug("Transport closed while sending %d response", self._status)
            self._closed = True
            return False
        return True
