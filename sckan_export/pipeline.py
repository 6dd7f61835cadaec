"""Single-pass export: run each query once, shape, fold labels, assemble.

Queries run sequentially, in catalogue order. Neuron metadata is shaped
first because connectivity rows are linked to it. A failed query aborts
the run; rows that break a query's contract are skipped and reported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from functools import partial
from typing import Any

from sckan_export import shaping
from sckan_export.assembler import assemble_document
from sckan_export.graph.connection import QueryExecutor, Row
from sckan_export.graph.queries import get_template
from sckan_export.labels import build_label_dictionary
from sckan_export.utils import QueryError

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    document: dict[str, Any]
    diagnostics: list[shaping.ShapingDiagnostic] = field(default_factory=list)
    row_counts: dict[str, int] = field(default_factory=dict)

    @property
    def rejected_rows(self) -> int:
        return len(self.diagnostics)


def run_query(executor: QueryExecutor, name: str) -> list[Row]:
    """Execute one catalogued query; failures are re-raised as QueryError."""
    template = get_template(name)
    if template is None:
        raise QueryError(f"Unknown query: {name}", query_name=name)

    logger.info("Running query '%s'", name)
    try:
        rows = executor.execute(template["sparql"])
    except QueryError as exc:
        logger.error("Query '%s' failed: %s", name, exc)
        exc.query_name = exc.query_name or name
        raise
    logger.info("Query '%s' returned %d rows", name, len(rows))
    return rows


def run_export(executor: QueryExecutor, *, exported_at: datetime | None = None) -> ExportResult:
    """Run the whole export against ``executor`` and return the validated document."""
    rows: dict[str, list[Row]] = {}
    diagnostics: list[shaping.ShapingDiagnostic] = []

    def _shape(name, adapter):
        rows[name] = run_query(executor, name)
        shaped, rejected = shaping.shape_rows(rows[name], adapter, name)
        diagnostics.extend(rejected)
        return shaped

    metadata = shaping.build_metadata_index(_shape("neuron_metadata", shaping.shape_metadata_row))
    connectivity = _shape(
        "connectivity",
        partial(shaping.shape_connectivity_row, metadata_index=metadata),
    )
    segments = _shape("partial_order", shaping.shape_segment_row)
    locations = _shape("locations", shaping.shape_location_row)
    synonyms = _shape("synonyms", shaping.shape_synonym_row)

    missing = sorted({c.neuron.id for c in connectivity if c.metadata is None})
    if missing:
        logger.warning("%d neurons in connectivity have no metadata record", len(missing))

    labels = build_label_dictionary(
        connectivity=connectivity,
        segments=segments,
        locations=locations,
        synonyms=synonyms,
    )
    document = assemble_document(
        connectivity=connectivity,
        metadata=metadata,
        segments=segments,
        locations=locations,
        labels=labels,
        exported_at=exported_at,
    )

    if diagnostics:
        logger.warning("Skipped %d malformed rows: %s", len(diagnostics), shaping.summarize(diagnostics)["by_query"])

    return ExportResult(
        document=document,
        diagnostics=diagnostics,
        row_counts={name: len(r) for name, r in rows.items()},
    )
