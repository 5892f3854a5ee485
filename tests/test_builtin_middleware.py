"""Tests for switchyard.middleware.builtin — parsers and request logging."""

import logging

import pytest

from switchyard.app import App
from switchyard.errors import HTTPError
from switchyard.http.query import QueryParams
from switchyard.middleware import (
    JSONBodyParser,
    RequestLogger,
    parse_path_params,
    parse_query_params,
)
from switchyard.routing.pattern import PathPattern
from switchyard.testing import TestClient, make_request


class TestJSONBodyParser:
    async def test_decodes_body(self) -> None:
        request = make_request("POST", "/", json={"name": "ada"})
        assert await JSONBodyParser()(request) is None
        assert request.body == {"name": "ada"}

    async def test_empty_body_left_none(self) -> None:
        request = make_request("POST", "/")
        assert await JSONBodyParser()(request) is None
        assert request.body is None

    async def test_malformed_body_dropped(self) -> None:
        request = make_request("POST", "/", body=b"{not json")
        assert await JSONBodyParser()(request) is None
        assert request.body is None

    async def test_malformed_body_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        request = make_request("POST", "/upload", body=b"\xff\xfe")
        with caplog.at_level(logging.DEBUG, logger="switchyard.access"):
            await JSONBodyParser()(request)
        assert "Dropped malformed JSON body on POST /upload" in caplog.text

    async def test_reject_invalid(self) -> None:
        request = make_request("POST", "/", body=b"[1, 2")
        error = await JSONBodyParser(reject_invalid=True)(request)
        assert isinstance(error, HTTPError)
        assert error.status == 400

    async def test_max_length_from_body(self) -> None:
        request = make_request("POST", "/", body=b'"' + b"x" * 20 + b'"')
        error = await JSONBodyParser(max_length=10)(request)
        assert isinstance(error, HTTPError)
        assert error.status == 413
        assert request.body is None

    async def test_max_length_from_header(self) -> None:
        request = make_request("POST", "/", headers={"content-length": "999"}, body=b"{}")
        error = await JSONBodyParser(max_length=10)(request)
        assert isinstance(error, HTTPError)
        assert error.status == 413

    async def test_chunked_body(self) -> None:
        request = make_request("POST", "/", json={"items": list(range(10))}, chunk_size=4)
        await JSONBodyParser()(request)
        assert request.body == {"items": list(range(10))}

    async def test_rejection_answers_through_adapter(self) -> None:
        app = App()
        app.use(JSONBodyParser(reject_invalid=True))
        app.register("/", "POST", lambda request: request.body)

        async with TestClient(app) as client:
            response = await client.post("/", body=b"{oops")

        assert response.status == 400
        assert response.text == "Malformed JSON body"


class TestParseQueryParams:
    def test_populates_query(self) -> None:
        request = make_request("GET", "/search?q=rails&page=2")
        parse_query_params(request)
        assert isinstance(request.query, QueryParams)
        assert request.query["q"] == "rails"
        assert request.query.get_int("page") == 2

    def test_no_query(self) -> None:
        request = make_request("GET", "/search")
        parse_query_params(request)
        assert dict(request.query) == {}


class TestParsePathParams:
    def test_from_pattern(self) -> None:
        request = make_request("GET", "/users/42")
        request.pattern = PathPattern.compile(r"/users/(?<id>\d+)")
        parse_path_params(request)
        assert request.path_params == {"id": "42"}

    def test_no_pattern_clears(self) -> None:
        request = make_request("GET", "/users/42")
        request.path_params = {"stale": "x"}
        parse_path_params(request)
        assert request.path_params == {}

    def test_pattern_without_groups(self) -> None:
        request = make_request("GET", "/users")
        request.pattern = PathPattern.compile("/users")
        parse_path_params(request)
        assert request.path_params == {}


class TestRequestLogger:
    def test_logs_request_summary(self, caplog: pytest.LogCaptureFixture) -> None:
        request = make_request("POST", "/users/7?x=1")
        request.path_params = {"id": "7"}
        request.query = QueryParams("x=1")
        request.body = {"name": "ada"}

        with caplog.at_level(logging.INFO, logger="switchyard.access"):
            assert RequestLogger()(request) is None

        record = caplog.records[-1]
        assert record.name == "switchyard.access"
        assert record.levelno == logging.INFO
        message = record.getMessage()
        assert "POST /users/7?x=1" in message
        assert "{'id': '7'}" in message
        assert "{'x': '1'}" in message
        assert "{'name': 'ada'}" in message

    def test_custom_logger_and_level(self, caplog: pytest.LogCaptureFixture) -> None:
        log = logging.getLogger("myapp.requests")
        with caplog.at_level(logging.DEBUG, logger="myapp.requests"):
            RequestLogger(log, level=logging.DEBUG)(make_request("GET", "/"))
        assert caplog.records[-1].name == "myapp.requests"
        assert caplog.records[-1].levelno == logging.DEBUG

    async def test_in_pipeline_after_parsers(self, caplog: pytest.LogCaptureFixture) -> None:
        app = App()
        app.use(JSONBodyParser()).use(parse_query_params).use(RequestLogger())
        app.register("/items/{id}", "PUT", lambda id: {"id": id})

        with caplog.at_level(logging.INFO, logger="switchyard.access"):
            async with TestClient(app) as client:
                response = await client.put("/items/3?dry=1", json={"n": 1})

        assert response.json() == {"id": "3"}
        message = caplog.records[-1].getMessage()
        assert "{'id': '3'}" in message
        assert "{'dry': '1'}" in message
        assert "{'n': 1}" in message
