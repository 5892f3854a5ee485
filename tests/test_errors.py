"""Tests for switchyard.errors — exception hierarchy and error messages."""

import pytest

from switchyard.errors import (
    ConfigurationError,
    HTTPError,
    InvalidPatternError,
    NotFound,
    PipelineError,
    SwitchyardError,
    UnrecoveredPipelineError,
)
from switchyard.routing.pattern import PathPattern


class TestHierarchy:
    def test_http_error_is_switchyard_error(self) -> None:
        assert issubclass(HTTPError, SwitchyardError)

    def test_not_found_is_http_error(self) -> None:
        assert issubclass(NotFound, HTTPError)

    def test_invalid_pattern_is_configuration_error(self) -> None:
        assert issubclass(InvalidPatternError, ConfigurationError)
        assert issubclass(ConfigurationError, SwitchyardError)

    def test_pipeline_errors(self) -> None:
        assert issubclass(PipelineError, SwitchyardError)
        assert issubclass(UnrecoveredPipelineError, SwitchyardError)


class TestHTTPError:
    def test_status_and_detail(self) -> None:
        err = HTTPError(status=400, detail="Bad request body")
        assert err.status == 400
        assert err.detail == "Bad request body"

    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=400, detail="Bad request body")) == "400: Bad request body"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_frozen(self) -> None:
        err = HTTPError(status=400)
        with pytest.raises(AttributeError):
            err.status = 500  # type: ignore[misc]

    def test_default_empty_headers(self) -> None:
        assert HTTPError(status=400).headers == ()


class TestNotFound:
    def test_defaults(self) -> None:
        err = NotFound()
        assert err.status == 404
        assert err.detail == "Not Found"

    def test_custom_detail(self) -> None:
        assert NotFound("user not found").detail == "user not found"


class TestInvalidPatternError:
    def test_carries_spec_and_reason(self) -> None:
        with pytest.raises(InvalidPatternError) as exc_info:
            PathPattern.compile("")
        assert exc_info.value.spec == ""
        assert exc_info.value.reason == "path must not be empty"
        assert "Invalid route pattern ''" in str(exc_info.value)


class TestPipelineErrors:
    def test_pipeline_error_value(self) -> None:
        err = PipelineError({"field": "name"})
        assert err.value == {"field": "name"}
        assert "{'field': 'name'}" in str(err)

    def test_unrecovered_tier_and_error(self) -> None:
        err = UnrecoveredPipelineError("group", "bad input")
        assert err.tier == "group"
        assert err.error == "bad input"
        assert str(err) == "Unrecovered error in group tier: 'bad input'"
