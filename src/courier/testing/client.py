"""Async test client for courier applications.

Sends requests through the ASGI interface directly — no sockets.
"""

import json as json_module
from dataclasses import dataclass
from typing import Any

from courier.app import App


@dataclass(frozen=True, slots=True)
class TestResponse:
    """A captured response."""

    __test__ = False  # Tell pytest this is not a test class

    status: int
    headers: dict[str, str]
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    @property
    def json(self) -> Any:
        return json_module.loads(self.body)


class TestClient:
    __test__ = False  # Tell pytest this is not a test class
    """Async test client for courier applications.

    Entering the client compiles the app, so registration faults surface
    at the top of the test.

    Usage::

        async with TestClient(app) as client:
            response = await client.post("/echo", json={"Token": "t"})
            assert response.status == 200
    """

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> "TestClient":
        self.app._ensure_compiled()
        return self

    async def __aexit__(self, *args: object) -> None:
        return None

    async def get(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
    ) -> TestResponse:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: object | None = None,
    ) -> TestResponse:
        """Send a POST request."""
        extra_headers: dict[str, str] = {}
        request_body = body or b""

        if json is not None:
            request_body = json_module.dumps(json).encode("utf-8")
            extra_headers["content-type"] = "application/json"

        merged = {**extra_headers, **(headers or {})}
        return await self.request("POST", path, headers=merged, body=request_body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        disconnect: bool = False,
    ) -> TestResponse:
        """Send an arbitrary request through the ASGI app.

        With ``disconnect=True`` the client hangs up before sending the
        body, as a dropped connection would.
        """
        raw_headers: list[tuple[bytes, bytes]] = []
        for name, value in (headers or {}).items():
            raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "path": path,
            "raw_path": path.encode("latin-1"),
            "query_string": b"",
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }

        request_body = body or b""
        body_sent = disconnect

        async def receive() -> dict[str, Any]:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": request_body, "more_body": False}
            return {"type": "http.disconnect"}

        response_status = 200
        response_headers: dict[str, str] = {}
        response_body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal response_status
            if message["type"] == "http.response.start":
                response_status = message["status"]
                for name_b, value_b in message.get("headers", []):
                    response_headers[name_b.decode("latin-1")] = value_b.decode("latin-1")
            elif message["type"] == "http.response.body":
                response_body_parts.append(message.get("body", b""))

        await self.app(scope, receive, send)

        return TestResponse(
            status=response_status,
            headers=response_headers,
            body=b"".join(response_body_parts),
        )
