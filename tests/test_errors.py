"""Tests for courier.errors — exception hierarchy and error messages."""

import pytest

from courier.errors import (
    BodyReadError,
    ConfigurationError,
    CourierError,
    FrozenRegistryError,
    HTTPError,
    PayloadTooLarge,
    ReplyEncodingError,
    RouteConflictError,
)


class TestHierarchy:
    def test_configuration_error_is_courier_error(self) -> None:
        assert issubclass(ConfigurationError, CourierError)

    def test_faults_are_configuration_errors(self) -> None:
        assert issubclass(FrozenRegistryError, ConfigurationError)
        assert issubclass(RouteConflictError, ConfigurationError)

    def test_encoding_error_is_not_http_error(self) -> None:
        assert issubclass(ReplyEncodingError, CourierError)
        assert not issubclass(ReplyEncodingError, HTTPError)

    def test_request_errors_are_http_errors(self) -> None:
        assert issubclass(BodyReadError, HTTPError)
        assert issubclass(PayloadTooLarge, HTTPError)


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=400, detail="bad payload")) == "400: bad payload"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_frozen(self) -> None:
        err = HTTPError(status=400)
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]

    def test_body_read_error(self) -> None:
        assert BodyReadError().status == 417

    def test_payload_too_large(self) -> None:
        err = PayloadTooLarge(1024)
        assert err.status == 413
        assert "1024" in err.detail


class TestFaultMessages:
    def test_route_conflict(self) -> None:
        err = RouteConflictError("/api/echo")
        assert err.url == "/api/echo"
        assert "/api/echo" in str(err)

    def test_reply_encoding(self) -> None:
        reply = object()
        err = ReplyEncodingError("/echo", reply)
        assert err.reply is reply
        assert "/echo" in str(err)
        assert "object" in str(err)


class TestErrorExports:
    """Error types are importable from the top-level courier package."""

    def test_import_courier_error(self) -> None:
        import courier

        assert courier.CourierError is CourierError
        assert courier.FrozenRegistryError is FrozenRegistryError
        assert courier.RouteConflictError is RouteConflictError
