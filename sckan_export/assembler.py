"""Assemble shaped entities and the label dictionary into the export document.

Pruning policy: inside every section, object keys holding ``None``, ``""``
or an empty object are dropped (recursively), while lists are always
kept, even when empty. Top-level sections are always present and
``metadata.json_schema`` is emitted as generated.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from sckan_export.models import (
    DoiMetadataEntry,
    ExportDocument,
    ExportMetadata,
    LabelEntry,
    LocationRecord,
    NeuronMetadata,
    ShapedConnectivity,
    ShapedLocation,
    ShapedSegment,
)
from sckan_export.utils import SchemaValidationError

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "2.0"
SCHEMA_TITLE = "SCKAN JSON Format"
JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
DESCRIPTION = "SCKAN neuron connectivity, pathway segments, locations and labels"

DOCUMENTATION = """
SCKAN2JSON File Format Documentation:

1. neural_connectivity: Array of neuron connectivity records
   - id: Neuron ID
   - origin: Origin location ID
   - via: Via/intermediate location ID (optional)
   - destination: Destination location ID
   - target_organ: Target organ ID (optional)

2. neuron_metadata: Dictionary of neuron metadata indexed by neuron ID
   - label, preferred_label, sex, alert, reference, diagram_link: text (omitted when unknown)
   - model_id / model_category: model the neuron belongs to (e.g., "keast")
   - species, phenotypes, categorized_phenotypes, forward_connections,
     citation, reference_dois: arrays, always present (possibly empty)

3. neural_segments: Array of pathway segments, one per directed hop
   - id: Neuron ID
   - nodes: the two connected locations, each with id and optional type
     (e.g., "hasSomaLocation", "hasAxonLocation")
   - is_synaptic: true when the hop ends at a synapse

4. locations: Array of distinct anatomical location records
   - id: Location ID
   - location_type: soma, via, terminal or sensory (when known)
   - connection_type: relation CURIE linking a neuron to the location

5. labels: Dictionary mapping IDs to IRIs and labels
   - iri: Full IRI
   - label: Human-readable label
   - synonyms: Alternative labels, in source order

6. doi_metadata: Dictionary keyed by DOI URL
   - doi: The DOI number (e.g., "10.1159/000060678")
   - label: The reference text the DOI was found in

How to use labels:
- Look up any ID from the other sections in labels: labels[id].label
- Node types such as hasSomaLocation are always present in labels
- IDs that could not be compacted appear as full IRIs
"""


# ---------------------------------------------------------------------------
# Pruning and deduplication
# ---------------------------------------------------------------------------

def _is_empty(value: Any) -> bool:
    return value is None or value == "" or (isinstance(value, dict) and not value)


def prune_empty(value: Any) -> Any:
    """Recursively drop null, empty-string and empty-object values; keep lists."""
    if isinstance(value, dict):
        pruned = {}
        for key, item in value.items():
            item = prune_empty(item)
            if not _is_empty(item):
                pruned[key] = item
        return pruned
    if isinstance(value, (list, tuple)):
        return [item for item in (prune_empty(v) for v in value) if not _is_empty(item)]
    return value


def dedupe_locations(locations: Iterable[LocationRecord]) -> list[LocationRecord]:
    """Drop structurally identical records, keeping first-occurrence order."""
    seen: set[tuple[str, str | None, str | None]] = set()
    unique: list[LocationRecord] = []
    for loc in locations:
        key = (loc.id, loc.location_type, loc.connection_type)
        if key in seen:
            continue
        seen.add(key)
        unique.append(loc)
    return unique


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------

def build_json_schema() -> dict[str, Any]:
    """Generate the document schema from the export models."""
    schema = ExportDocument.model_json_schema()
    schema["title"] = SCHEMA_TITLE
    return {"$schema": JSON_SCHEMA_DIALECT, **schema}


def build_metadata(exported_at: datetime | None = None) -> dict[str, Any]:
    meta = ExportMetadata(
        query_date=exported_at or datetime.now(timezone.utc),
        version=SCHEMA_VERSION,
        description=DESCRIPTION,
        documentation=DOCUMENTATION,
        json_schema=build_json_schema(),
    )
    return meta.model_dump(mode="json")


def collect_doi_metadata(metadata: Iterable[NeuronMetadata]) -> dict[str, DoiMetadataEntry]:
    """DOI URL -> {doi, label}; the label is the reference the DOI came from."""
    dois: dict[str, DoiMetadataEntry] = {}
    for meta in metadata:
        reference = (meta.reference or "").strip() or None
        for record in meta.reference_doi_records:
            dois[record.url] = DoiMetadataEntry(doi=record.doi, label=reference)
    return dois


def _dump(model: Any) -> Any:
    return model.model_dump(mode="json")


def assemble_document(
    *,
    connectivity: Iterable[ShapedConnectivity] = (),
    metadata: Mapping[str, NeuronMetadata] | None = None,
    segments: Iterable[ShapedSegment] = (),
    locations: Iterable[ShapedLocation] = (),
    labels: Mapping[str, LabelEntry] | None = None,
    exported_at: datetime | None = None,
    validate: bool = True,
) -> dict[str, Any]:
    """Build the final export document from shaped entities."""
    metadata = metadata or {}
    labels = labels or {}

    sections: dict[str, Any] = {
        "neural_connectivity": [_dump(c.to_edge()) for c in connectivity],
        "neuron_metadata": {nid: _dump(m.to_record()) for nid, m in metadata.items()},
        "neural_segments": [_dump(s.to_record()) for s in segments],
        "locations": [_dump(loc) for loc in dedupe_locations(s.to_record() for s in locations)],
        "labels": {key: _dump(entry) for key, entry in labels.items()},
        "doi_metadata": {url: _dump(e) for url, e in collect_doi_metadata(metadata.values()).items()},
    }

    document: dict[str, Any] = {"metadata": build_metadata(exported_at)}
    for name, section in sections.items():
        document[name] = prune_empty(section)

    logger.info(
        "Assembled document: %d connections, %d neurons, %d segments, %d locations, %d labels",
        len(document["neural_connectivity"]),
        len(document["neuron_metadata"]),
        len(document["neural_segments"]),
        len(document["locations"]),
        len(document["labels"]),
    )

    if validate:
        validate_document(document)
    return document


def validate_document(document: Mapping[str, Any]) -> ExportDocument:
    """Validate an assembled document against the export models."""
    try:
        return ExportDocument.model_validate(document)
    except ValidationError as exc:
        raise SchemaValidationError(
            f"Export document does not match schema v{SCHEMA_VERSION}: {exc.error_count()} error(s)\n{exc}"
        ) from exc
