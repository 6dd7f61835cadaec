"""Unit tests for StardogClient in sckan_export/graph/connection.py.

All tests use unittest.mock - no real HTTP calls are made.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import httpx
import pytest

from sckan_export.graph.connection import SPARQL_RESULTS_JSON, StardogClient
from sckan_export.settings import SCKANSettings
from sckan_export.utils import QueryError


def _make_mock_response(status_code: int = 200, json_data=None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.raise_for_status = MagicMock()
    if json_data is not None:
        resp.json.return_value = json_data
    else:
        resp.json.side_effect = json.JSONDecodeError("Expecting value", "", 0)
    return resp


def _client(**kwargs) -> StardogClient:
    params = {"endpoint": "https://stardog.example.org:5821/", "database": "NPO"}
    params.update(kwargs)
    return StardogClient(**params)


BINDINGS = {
    "head": {"vars": ["Location_IRI"]},
    "results": {"bindings": [{"Location_IRI": {"type": "uri", "value": "http://x/1"}}]},
}


class TestRequest:
    def test_posts_query_with_sparql_json_accept(self) -> None:
        resp = _make_mock_response(json_data=BINDINGS)
        with patch("sckan_export.graph.connection.httpx.post", return_value=resp) as post:
            rows = _client(username="SPARC", password="pw", timeout=30).execute("SELECT *")
        assert rows == BINDINGS["results"]["bindings"]
        args, kwargs = post.call_args
        assert args[0] == "https://stardog.example.org:5821/NPO/query"
        assert kwargs["data"] == {"query": "SELECT *", "reasoning": "false", "offset": "0"}
        assert kwargs["headers"] == {"Accept": SPARQL_RESULTS_JSON}
        assert kwargs["auth"] == ("SPARC", "pw")
        assert kwargs["timeout"] == 30

    def test_no_auth_without_username(self) -> None:
        resp = _make_mock_response(json_data=BINDINGS)
        with patch("sckan_export.graph.connection.httpx.post", return_value=resp) as post:
            _client().execute("SELECT *")
        assert post.call_args.kwargs["auth"] is None

    def test_reasoning_flag(self) -> None:
        resp = _make_mock_response(json_data=BINDINGS)
        with patch("sckan_export.graph.connection.httpx.post", return_value=resp) as post:
            _client(reasoning=True).execute("SELECT *")
        assert post.call_args.kwargs["data"]["reasoning"] == "true"

    def test_empty_bindings(self) -> None:
        resp = _make_mock_response(json_data={"results": {"bindings": []}})
        with patch("sckan_export.graph.connection.httpx.post", return_value=resp):
            assert _client().execute("SELECT *") == []


class TestFailures:
    def test_http_error_status(self) -> None:
        resp = _make_mock_response(status_code=401, json_data={})
        resp.raise_for_status.side_effect = httpx.HTTPStatusError(
            "401 Unauthorized", request=MagicMock(), response=MagicMock()
        )
        with patch("sckan_export.graph.connection.httpx.post", return_value=resp):
            with pytest.raises(QueryError, match="failed"):
                _client().execute("SELECT *")

    def test_network_error(self) -> None:
        with patch(
            "sckan_export.graph.connection.httpx.post",
            side_effect=httpx.ConnectError("connection refused"),
        ):
            with pytest.raises(QueryError):
                _client().execute("SELECT *")

    def test_html_body(self) -> None:
        resp = _make_mock_response(status_code=200)
        with patch("sckan_export.graph.connection.httpx.post", return_value=resp):
            with pytest.raises(QueryError, match="Non-JSON"):
                _client().execute("SELECT *")

    @pytest.mark.parametrize("body", [[], {"boolean": True}, {"results": {}}, {"results": {"bindings": None}}])
    def test_missing_bindings(self, body) -> None:
        resp = _make_mock_response(json_data=body)
        with patch("sckan_export.graph.connection.httpx.post", return_value=resp):
            with pytest.raises(QueryError, match="results.bindings"):
                _client().execute("ASK {}")


class TestFromSettings:
    def test_uses_settings_values(self) -> None:
        cfg = SCKANSettings(
            endpoint="https://db.example.org",
            database="TEST",
            username="u",
            password="p",
            query_timeout=5,
            reasoning=True,
        )
        client = StardogClient.from_settings(cfg)
        assert client.query_url == "https://db.example.org/TEST/query"
        assert client.timeout == 5
        assert client.reasoning is True
        assert (client.username, client.password) == ("u", "p")
