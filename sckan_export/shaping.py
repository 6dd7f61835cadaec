"""Per-query adapters that turn raw SPARQL result rows into typed entities.

Every adapter is total for optional variables (absent -> ``None`` or an
empty list) and raises ``ShapingError`` only when a variable its query
guarantees is missing. ``shape_rows`` turns those errors into diagnostics
and skips the row, so one malformed row never voids the export.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Iterable, Mapping, TypeVar

from sckan_export import enrichment
from sckan_export.graph.connection import Row
from sckan_export.identifiers import split_multi_valued, to_curie
from sckan_export.models import (
    LabeledEntity,
    NeuronMetadata,
    ShapedConnectivity,
    ShapedLocation,
    ShapedSegment,
    SynonymRecord,
)
from sckan_export.utils import ShapingError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SYNAPTIC_FLAG = "YES"


@dataclass(frozen=True)
class ShapingDiagnostic:
    """A row rejected because it broke its query's contract."""

    query: str
    row_index: int
    message: str

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Binding access
# ---------------------------------------------------------------------------

def binding_value(row: Row, name: str) -> str | None:
    """Return the bound value of ``name``; unbound or empty gives None."""
    binding = row.get(name)
    if not binding:
        return None
    value = binding.get("value")
    return value if value else None


def required_value(row: Row, name: str) -> str:
    value = binding_value(row, name)
    if value is None:
        raise ShapingError(name)
    return value


def _entity(row: Row, iri_var: str, label_var: str | None = None) -> LabeledEntity:
    iri = required_value(row, iri_var)
    label = binding_value(row, label_var) if label_var else None
    return LabeledEntity(id=to_curie(iri), iri=iri, label=label)


def _optional_entity(row: Row, iri_var: str, label_var: str) -> LabeledEntity | None:
    if binding_value(row, iri_var) is None:
        return None
    return _entity(row, iri_var, label_var)


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------

def shape_metadata_row(row: Row) -> NeuronMetadata:
    """Neuron metadata row -> NeuronMetadata with model/phenotype/DOI enrichment."""
    iri = required_value(row, "Neuron_IRI")
    neuron_id = to_curie(iri)

    model_id, model_category = enrichment.categorize_model(neuron_id)
    phenotypes = split_multi_valued(binding_value(row, "Phenotypes"))
    reference = binding_value(row, "Reference")
    dois = enrichment.extract_dois(reference)

    return NeuronMetadata(
        id=neuron_id,
        iri=iri,
        label=binding_value(row, "Neuron_Label"),
        preferred_label=binding_value(row, "Preferred_Label"),
        sex=binding_value(row, "Sex"),
        alert=binding_value(row, "Alert"),
        reference=reference,
        diagram_link=binding_value(row, "Diagram_Link"),
        model_id=model_id,
        model_category=model_category,
        species=split_multi_valued(binding_value(row, "Species")),
        phenotypes=phenotypes,
        categorized_phenotypes=enrichment.categorize_phenotypes(phenotypes),
        forward_connections=split_multi_valued(binding_value(row, "Forward_Connections")),
        citation=split_multi_valued(binding_value(row, "Citations")),
        reference_dois=[d.url for d in dois],
        reference_doi_records=dois,
    )


def shape_connectivity_row(
    row: Row, metadata_index: Mapping[str, NeuronMetadata] | None = None
) -> ShapedConnectivity:
    """A-to-B-via-C row -> ShapedConnectivity linked to the neuron's metadata."""
    neuron = _entity(row, "Neuron_ID")
    return ShapedConnectivity(
        neuron=neuron,
        origin=_entity(row, "A_IRI", "A_Label"),
        destination=_entity(row, "B_IRI", "B_Label"),
        via=_optional_entity(row, "C_IRI", "C_Label"),
        target_organ=_optional_entity(row, "Target_Organ_IRI", "Target_Organ_Label"),
        metadata=(metadata_index or {}).get(neuron.id),
    )


def shape_segment_row(row: Row) -> ShapedSegment:
    return ShapedSegment(
        neuron=_entity(row, "Neuron_IRI", "Neuron_Label"),
        node1=_entity(row, "V1", "V1_Label"),
        node2=_entity(row, "V2", "V2_Label"),
        node1_type=binding_value(row, "V1_Type"),
        node2_type=binding_value(row, "V2_Type"),
        is_synaptic=binding_value(row, "IsSynapse") == SYNAPTIC_FLAG,
    )


def shape_location_row(row: Row) -> ShapedLocation:
    connection_type = to_curie(required_value(row, "Connection_Type"))
    return ShapedLocation(
        entity=_entity(row, "Location_IRI", "Location_Label"),
        connection_type=connection_type,
        location_type=enrichment.location_type_for(connection_type),
    )


def shape_synonym_row(row: Row) -> SynonymRecord:
    iri = required_value(row, "Location_IRI")
    return SynonymRecord(id=to_curie(iri), iri=iri, label=required_value(row, "Location_Label"))


# ---------------------------------------------------------------------------
# Batch helpers
# ---------------------------------------------------------------------------

def shape_rows(
    rows: Iterable[Row],
    adapter: Callable[[Row], T],
    query_name: str,
) -> tuple[list[T], list[ShapingDiagnostic]]:
    """Apply ``adapter`` to every row, skipping rows that break the contract."""
    shaped: list[T] = []
    diagnostics: list[ShapingDiagnostic] = []
    for index, row in enumerate(rows):
        try:
            shaped.append(adapter(row))
        except ShapingError as exc:
            diagnostics.append(ShapingDiagnostic(query=query_name, row_index=index, message=str(exc)))
            logger.warning("Skipping %s row %d: %s", query_name, index, exc)
    return shaped, diagnostics


def build_metadata_index(records: Iterable[NeuronMetadata]) -> dict[str, NeuronMetadata]:
    """Key metadata by neuron id; a later record for the same id replaces the earlier one."""
    index: dict[str, NeuronMetadata] = {}
    for record in records:
        if record.id in index:
            logger.debug("Duplicate metadata for %s; keeping the last row", record.id)
        index[record.id] = record
    return index


def summarize(diagnostics: Iterable[ShapingDiagnostic]) -> dict[str, Any]:
    counts: dict[str, int] = {}
    for diag in diagnostics:
        counts[diag.query] = counts.get(diag.query, 0) + 1
    return {"rejected_rows": sum(counts.values()), "by_query": counts}
