"""Courier exception hierarchy.

Two tiers, handled differently:

- Programming faults (``ConfigurationError`` and subclasses,
  ``ReplyEncodingError``) are raised at the point of misuse and never
  caught by the core. They surface in tests or at startup.
- Per-request errors (``HTTPError`` and subclasses) are caught by the
  dispatcher and turned into a status code for that one request.
"""

from dataclasses import dataclass


class CourierError(Exception):
    """Base for all courier-specific errors."""


class ConfigurationError(CourierError):
    """Raised when the registry is set up incorrectly.

    Bad URL prefix, empty message name, and so on.
    """


class FrozenRegistryError(ConfigurationError):
    """Raised when the registry is mutated, or compiled, after it was frozen."""


class RouteConflictError(ConfigurationError):
    """Raised when two messages compile to the same URL."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Duplicate route for {url!r}: another message already owns this URL.")


class ReplyEncodingError(CourierError):
    """A procedure returned a value that cannot be encoded as JSON.

    Always a bug in the procedure, so it propagates out of the ASGI app
    instead of producing an empty response.
    """

    def __init__(self, url: str, reply: object) -> None:
        self.url = url
        self.reply = reply
        super().__init__(
            f"Procedure for {url!r} returned an unencodable reply of type "
            f"{type(reply).__name__}"
        )


@dataclass(frozen=True, slots=True)
class HTTPError(CourierError):
    """An error that maps directly to an HTTP status code.

    Procedures may raise it instead of returning a bare status. The
    dispatcher answers with ``status`` and an empty body.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BodyReadError(HTTPError):
    """417 — the request body could not be read in full."""

    def __init__(self, detail: str = "Request body could not be read") -> None:
        super().__init__(status=417, detail=detail)


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413 — the request body exceeds ``AppConfig.max_content_length``."""

    def __init__(self, limit: int) -> None:
        super().__init__(status=413, detail=f"Request body exceeds {limit} bytes")
