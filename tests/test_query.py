"""Tests for switchyard.http.query — parsed query string parameters."""

from switchyard.http.query import QueryParams


class TestQueryParams:
    def test_first_value(self) -> None:
        params = QueryParams("tag=a&tag=b&page=2")
        assert params["tag"] == "a"
        assert params.get_list("tag") == ["a", "b"]
        assert params["page"] == "2"

    def test_bytes_input(self) -> None:
        assert QueryParams(b"q=hello+world")["q"] == "hello world"

    def test_blank_values_kept(self) -> None:
        params = QueryParams("flag=&x=1")
        assert "flag" in params
        assert params["flag"] == ""

    def test_get_default(self) -> None:
        params = QueryParams("")
        assert params.get("missing") is None
        assert params.get("missing", "x") == "x"
        assert len(params) == 0

    def test_get_int(self) -> None:
        params = QueryParams("page=3&size=big")
        assert params.get_int("page") == 3
        assert params.get_int("size", 10) == 10
        assert params.get_int("missing") is None

    def test_to_dict(self) -> None:
        params = QueryParams("a=1&b=2&b=3")
        assert params.to_dict() == {"a": "1", "b": ["2", "3"]}

    def test_from_url(self) -> None:
        params = QueryParams.from_url("/search?q=switch&limit=5")
        assert params.to_dict() == {"q": "switch", "limit": "5"}
        assert params.raw == "q=switch&limit=5"

    def test_from_url_without_query(self) -> None:
        assert len(QueryParams.from_url("/search")) == 0

    def test_percent_decoding(self) -> None:
        assert QueryParams("name=J%C3%BCrgen")["name"] == "Jürgen"
