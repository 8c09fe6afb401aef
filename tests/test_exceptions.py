"""Tests for the exception hierarchy."""

from propstack_mcp.exceptions import (
    ApiError,
    ConfigurationError,
    NotFoundError,
    PropStackError,
    SecurityError,
    UnexpectedFormatError,
)


class TestExceptionHierarchy:
    def test_all_are_propstack_errors(self) -> None:
        for cls in (ConfigurationError, SecurityError, ApiError, NotFoundError, UnexpectedFormatError):
            assert issubclass(cls, PropStackError)

    def test_propstack_error_is_exception(self) -> None:
        assert isinstance(PropStackError("test"), Exception)

    def test_api_error_from_status(self) -> None:
        err = ApiError.from_status(401, "Unauthorized")

        assert str(err) == "PropStack API error: 401 Unauthorized"
        assert err.status_code == 401
        assert err.reason == "Unauthorized"

    def test_api_error_without_status(self) -> None:
        err = ApiError("connection refused")

        assert err.status_code is None
        assert str(err) == "connection refused"

    def test_not_found_message(self) -> None:
        err = NotFoundError("Property with unit_id 42 not found")
        assert str(err) == "Property with unit_id 42 not found"
