"""Tests for courier.http.writer — buffered response writer."""

from typing import Any

import pytest

from courier.http.writer import ResponseWriter


class Sink:
    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def send(self, message: dict[str, Any]) -> None:
        self.messages.append(message)


class TestResponseWriter:
    def test_defaults(self) -> None:
        writer = ResponseWriter(Sink().send)
        assert writer.status == 200
        assert writer.committed is False
        assert writer.closed is False
        assert writer.body == b""

    async def test_nothing_sent_before_commit(self) -> None:
        sink = Sink()
        writer = ResponseWriter(sink.send)
        writer.write_header(201)
        writer.write("hello")
        assert sink.messages == []

    async def test_commit_sends_start_and_body(self) -> None:
        sink = Sink()
        writer = ResponseWriter(sink.send)
        writer.write_header(201)
        writer.set_header("X-Trace", "abc")
        writer.write("hel")
        writer.write(b"lo")

        assert await writer.commit() is True

        start, body = sink.messages
        assert start["type"] == "http.response.start"
        assert start["status"] == 201
        headers = dict(start["headers"])
        assert headers[b"x-trace"] == b"abc"
        assert headers[b"content-length"] == b"5"
        assert body == {"type": "http.response.body", "body": b"hello"}

    async def test_commit_twice_sends_once(self) -> None:
        sink = Sink()
        writer = ResponseWriter(sink.send)
        await writer.commit()
        await writer.commit()
        assert len(sink.messages) == 2

    async def test_no_body_for_204(self) -> None:
        sink = Sink()
        writer = ResponseWriter(sink.send)
        writer.write_header(204)
        writer.write("ignored")
        await writer.commit()
        assert sink.messages[1]["body"] == b""

    async def test_mutations_after_commit_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        writer = ResponseWriter(Sink().send)
        await writer.commit()

        with caplog.at_level("WARNING", logger="courier.server"):
            writer.write_header(500)
            writer.set_header("x-late", "1")
            writer.write("late")

        assert writer.status == 200
        assert "x-late" not in writer.headers
        assert writer.body == b""
        assert "already committed" in caplog.text

    def test_discard_body(self) -> None:
        writer = ResponseWriter(Sink().send)
        writer.write("partial")
        writer.discard_body()
        assert writer.body == b""

    async def test_closed_transport(self) -> None:
        async def broken(message: dict[str, Any]) -> None:
            raise BrokenPipeError

        writer = ResponseWriter(broken)
        assert await writer.commit() is False
        assert writer.closed is True
        assert writer.committed is True
        assert await writer.commit() is False

    def test_headers_case_insensitive(self) -> None:
        writer = ResponseWriter(Sink().send)
        writer.set_header("Content-Type", "application/json")
        assert writer.headers["content-type"] == "application/json"
        assert "CONTENT-TYPE" in writer.headers
