"""Tests for courier.http.request — immutable request with async body."""

from typing import Any

import pytest

from courier.errors import BodyReadError, PayloadTooLarge
from courier.http.request import Request


def _request(
    messages: list[dict[str, Any]],
    headers: list[tuple[bytes, bytes]] | None = None,
) -> Request:
    queue = list(messages)

    async def receive() -> dict[str, Any]:
        return queue.pop(0)

    scope = {
        "type": "http",
        "method": "POST",
        "path": "/echo",
        "headers": headers or [],
        "query_string": b"a=1",
        "server": ["testserver", 80],
        "client": ["127.0.0.1", 1234],
    }
    return Request.from_asgi(scope, receive)


class TestFromAsgi:
    def test_metadata(self) -> None:
        request = _request([], headers=[(b"content-type", b"application/json")])
        assert request.method == "POST"
        assert request.path == "/echo"
        assert request.query_string == b"a=1"
        assert request.http_version == "1.1"
        assert request.server == ("testserver", 80)
        assert request.client == ("127.0.0.1", 1234)
        assert request.content_type == "application/json"

    def test_frozen(self) -> None:
        request = _request([])
        with pytest.raises(AttributeError):
            request.method = "GET"  # type: ignore[misc]

    def test_content_length(self) -> None:
        assert _request([], headers=[(b"content-length", b"12")]).content_length == 12
        assert _request([], headers=[(b"content-length", b"abc")]).content_length is None
        assert _request([]).content_length is None


class TestBody:
    async def test_single_chunk(self) -> None:
        request = _request([{"type": "http.request", "body": b"hello"}])
        assert await request.body() == b"hello"

    async def test_multiple_chunks(self) -> None:
        request = _request(
            [
                {"type": "http.request", "body": b"hel", "more_body": True},
                {"type": "http.request", "body": b"lo", "more_body": False},
            ]
        )
        assert await request.body() == b"hello"

    async def test_cached(self) -> None:
        request = _request([{"type": "http.request", "body": b"once"}])
        assert await request.body() == b"once"
        assert await request.body() == b"once"

    async def test_disconnect(self) -> None:
        request = _request(
            [
                {"type": "http.request", "body": b"par", "more_body": True},
                {"type": "http.disconnect"},
            ]
        )
        with pytest.raises(BodyReadError) as exc_info:
            await request.body()
        assert exc_info.value.status == 417

    async def test_declared_length_over_limit(self) -> None:
        request = _request([], headers=[(b"content-length", b"100")])
        with pytest.raises(PayloadTooLarge):
            await request.body(max_length=10)

    async def test_streamed_length_over_limit(self) -> None:
        request = _request(
            [
                {"type": "http.request", "body": b"x" * 6, "more_body": True},
                {"type": "http.request", "body": b"x" * 6, "more_body": False},
            ]
        )
        with pytest.raises(PayloadTooLarge) as exc_info:
            await request.body(max_length=10)
        assert exc_info.value.status == 413

    async def test_json(self) -> None:
        request = _request([{"type": "http.request", "body": b'{"Token": "t"}'}])
        assert await request.json() == {"Token": "t"}
