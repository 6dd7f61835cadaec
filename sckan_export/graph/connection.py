"""Stardog SPARQL endpoint access.

A query is sent exactly once; failures surface as ``QueryError`` and end
the export run. The pipeline only needs an object with
``execute(query) -> list[Row]``, so tests substitute in-memory executors.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import httpx

from sckan_export.settings import SCKANSettings, get_settings
from sckan_export.utils import QueryError

logger = logging.getLogger(__name__)

# A result row: variable name -> {"type": ..., "value": ...}; unbound variables are absent.
Row = dict[str, dict[str, Any]]

SPARQL_RESULTS_JSON = "application/sparql-results+json"


class QueryExecutor(Protocol):
    def execute(self, query: str) -> list[Row]: ...


class StardogClient:
    """Thin wrapper over the Stardog HTTP query API."""

    def __init__(
        self,
        endpoint: str,
        database: str,
        username: str = "",
        password: str = "",
        timeout: float = 120.0,
        reasoning: bool = False,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.database = database
        self.username = username
        self.password = password
        self.timeout = timeout
        self.reasoning = reasoning

    @classmethod
    def from_settings(cls, settings: SCKANSettings | None = None) -> "StardogClient":
        cfg = settings or get_settings()
        return cls(
            endpoint=cfg.endpoint,
            database=cfg.database,
            username=cfg.username,
            password=cfg.password,
            timeout=cfg.query_timeout,
            reasoning=cfg.reasoning,
        )

    @property
    def query_url(self) -> str:
        return f"{self.endpoint}/{self.database}/query"

    def execute(self, query: str) -> list[Row]:
        """POST one query and return its ``results.bindings``."""
        url = self.query_url
        auth = (self.username, self.password) if self.username else None
        try:
            resp = httpx.post(
                url,
                data={
                    "query": query,
                    "reasoning": "true" if self.reasoning else "false",
                    "offset": "0",
                },
                headers={"Accept": SPARQL_RESULTS_JSON},
                auth=auth,
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except (httpx.HTTPStatusError, httpx.RequestError) as exc:
            raise QueryError(f"Query request to {url} failed: {exc}") from exc

        try:
            body = resp.json()
        except (json.JSONDecodeError, ValueError) as exc:
            raise QueryError(
                f"Non-JSON response from {url} (status {resp.status_code})"
            ) from exc

        bindings = _extract_bindings(body)
        if bindings is None:
            raise QueryError(f"Response from {url} has no results.bindings")
        logger.debug("Query returned %d rows from %s", len(bindings), url)
        return bindings


def _extract_bindings(body: Any) -> list[Row] | None:
    if not isinstance(body, dict):
        return None
    results = body.get("results")
    if not isinstance(results, dict):
        return None
    bindings = results.get("bindings")
    return bindings if isinstance(bindings, list) else None
