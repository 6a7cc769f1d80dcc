"""Tests for perch.errors — exception hierarchy."""

import dataclasses

import pytest

from perch.errors import (
    ConfigurationError,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    PerchError,
)


class TestHierarchy:
    def test_configuration_error_is_perch_error(self) -> None:
        assert issubclass(ConfigurationError, PerchError)

    def test_http_errors_are_perch_errors(self) -> None:
        assert issubclass(HTTPError, PerchError)
        assert issubclass(NotFound, HTTPError)
        assert issubclass(MethodNotAllowed, HTTPError)


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=418, detail="teapot")) == "418: teapot"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_frozen(self) -> None:
        exc = HTTPError(status=400)
        with pytest.raises(dataclasses.FrozenInstanceError):
            exc.status = 401  # type: ignore[misc]

    def test_raise_and_catch(self) -> None:
        with pytest.raises(HTTPError) as exc_info:
            raise HTTPError(status=409, detail="conflict")
        assert exc_info.value.status == 409


class TestNotFound:
    def test_defaults(self) -> None:
        exc = NotFound()
        assert exc.status == 404
        assert exc.detail == "Not Found"
        assert exc.headers == ()

    def test_custom_detail(self) -> None:
        assert NotFound("no such user").detail == "no such user"


class TestMethodNotAllowed:
    def test_allow_header_is_sorted(self) -> None:
        exc = MethodNotAllowed(frozenset({"POST", "GET", "HEAD"}))
        assert exc.status == 405
        assert exc.headers == (("Allow", "GET, HEAD, POST"),)

    def test_default_detail(self) -> None:
        assert MethodNotAllowed(frozenset({"GET"})).detail == "Method Not Allowed"
