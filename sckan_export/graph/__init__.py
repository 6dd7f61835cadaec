"""Graph module - Stardog query execution and the SPARQL query catalogue."""

from sckan_export.graph.connection import QueryExecutor, Row, StardogClient
from sckan_export.graph.queries import QUERY_ORDER, get_template

__all__ = ["QueryExecutor", "Row", "StardogClient", "QUERY_ORDER", "get_template"]
