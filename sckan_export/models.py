"""Pydantic v2 models for shaped query results and the exported document.

The export models double as the source of the document's JSON schema
(``ExportDocument.model_json_schema()``), so field descriptions here are
what consumers see in ``metadata.json_schema``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExportModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Exported records
# ---------------------------------------------------------------------------

class DoiRecord(ExportModel):
    """A DOI link found in a reference string."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str = Field(..., description="Matched DOI URL (e.g., 'https://doi.org/10.1234/5678')")
    doi: str = Field(..., description="The DOI number (e.g., '10.1159/000060678')")


class ConnectivityEdge(ExportModel):
    """A single neural connectivity record"""

    id: str = Field(..., description="Unique identifier (CURIE) for the neuron")
    origin: str = Field(..., description="CURIE of the origin/source anatomical location")
    via: str | None = Field(default=None, description="CURIE of the intermediate anatomical location (if applicable)")
    destination: str = Field(..., description="CURIE of the destination/target anatomical location")
    target_organ: str | None = Field(default=None, description="CURIE of the target organ (if applicable)")


class NeuronMetadataRecord(ExportModel):
    """Metadata for a single neuron record"""

    label: str | None = Field(default=None, description="Human-readable label for the neuron")
    preferred_label: str | None = Field(
        default=None,
        description="Preferred display label for the neuron (if different from the standard label)",
    )
    sex: str | None = Field(default=None, description="Sex specification for the neuron (e.g., male, female, both)")
    alert: str | None = Field(default=None, description="Alert notes or warnings about this neuron data")
    reference: str | None = Field(default=None, description="Full reference text for the source of this neuron data")
    diagram_link: str | None = Field(default=None, description="URL to a diagram illustrating this neuron's connectivity")
    model_id: str | None = Field(
        default=None,
        description="Model identifier (e.g., 'bolew', 'keast') that categorizes this neuron",
    )
    model_category: str | None = Field(
        default=None,
        description="Human-readable model category (e.g., 'Keast Model of Bladder Innervation')",
    )
    species: list[str] = Field(default_factory=list, description="Species in which this neuron is observed")
    phenotypes: list[str] = Field(default_factory=list, description="Raw phenotype strings from the database")
    categorized_phenotypes: list[str] = Field(
        default_factory=list,
        description="Human-readable phenotype categories (e.g., 'Circuit Role: Intrinsic')",
    )
    forward_connections: list[str] = Field(
        default_factory=list,
        description="Forward neural connections (target neuron CURIEs)",
    )
    citation: list[str] = Field(default_factory=list, description="Citation reference CURIEs")
    reference_dois: list[str] = Field(
        default_factory=list,
        description="DOI URLs extracted from references",
    )


class SegmentNode(ExportModel):
    """A location node in the neural pathway"""

    id: str = Field(..., description="CURIE of the anatomical location")
    type: str | None = Field(
        default=None,
        description="Node type (e.g., 'hasSomaLocation', 'hasAxonLocation')",
    )


class PathwaySegment(ExportModel):
    """A single neural pathway segment for a specific neuron"""

    id: str = Field(..., description="CURIE of the neuron")
    nodes: list[SegmentNode] = Field(..., description="The two connection nodes of this directed hop")
    is_synaptic: bool = Field(default=False, description="Whether this hop is a synaptic connection")


class LocationRecord(ExportModel):
    """A single anatomical location record"""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(..., description="CURIE of the anatomical location")
    location_type: str | None = Field(
        default=None,
        description="Type categorization (soma, via, terminal, sensory)",
    )
    connection_type: str | None = Field(default=None, description="Relation CURIE that links a neuron to this location")


class LabelEntry(ExportModel):
    """Label information for a single ID"""

    model_config = ConfigDict(extra="forbid", frozen=True)

    iri: str | None = Field(default=None, description="Full IRI (URI reference) for this ID")
    label: str | None = Field(default=None, description="Human-readable label for this ID")
    synonyms: tuple[str, ...] = Field(default=(), description="Alternative labels or synonyms")


class DoiMetadataEntry(ExportModel):
    """Metadata for a single DOI reference"""

    doi: str = Field(..., description="The DOI number (e.g., '10.1159/000060678')")
    label: str | None = Field(default=None, description="The citation text from the reference containing this DOI")


class ExportMetadata(ExportModel):
    """Metadata about this data export, including version and documentation"""

    query_date: datetime = Field(..., description="The date and time when this data was exported from the database")
    version: str = Field(..., description="Version of the data format")
    description: str | None = Field(default=None, description="Human-readable description of this data export")
    json_schema: dict[str, Any] = Field(default_factory=dict, description="JSON Schema definition for this data format")
    documentation: str | None = Field(
        default=None,
        description="Extended documentation of all fields and how to use them",
    )


class ExportDocument(ExportModel):
    """SCKAN connectivity export"""

    metadata: ExportMetadata
    neural_connectivity: list[ConnectivityEdge] = Field(
        ...,
        description="Neural connectivity records representing connections between anatomical locations",
    )
    neuron_metadata: dict[str, NeuronMetadataRecord] = Field(
        ...,
        description="Dictionary of neuron metadata indexed by neuron ID",
    )
    neural_segments: list[PathwaySegment] = Field(
        ...,
        description="Ordered neuron pathway segments showing anatomical connections",
    )
    locations: list[LocationRecord] = Field(
        ...,
        description="Anatomical locations used in neural connectivity",
    )
    labels: dict[str, LabelEntry] = Field(
        ...,
        description="Dictionary mapping IDs to IRIs and human-readable labels",
    )
    doi_metadata: dict[str, DoiMetadataEntry] = Field(
        default_factory=dict,
        description="Dictionary of DOI information extracted from references, keyed by DOI URL",
    )


# ---------------------------------------------------------------------------
# Shaped intermediates
# ---------------------------------------------------------------------------

class LabeledEntity(BaseModel):
    """A named graph resource; two entities are the same resource iff their ids match."""

    model_config = ConfigDict(frozen=True)

    id: str
    iri: str
    label: str | None = None


class SynonymRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    iri: str
    label: str


class NeuronMetadata(NeuronMetadataRecord):
    """Shaped metadata row; ``id``/``iri`` and the DOI records stay internal."""

    id: str
    iri: str
    reference_doi_records: list[DoiRecord] = Field(default_factory=list)

    def to_record(self) -> NeuronMetadataRecord:
        return NeuronMetadataRecord(
            **self.model_dump(include=set(NeuronMetadataRecord.model_fields))
        )


class ShapedConnectivity(BaseModel):
    neuron: LabeledEntity
    origin: LabeledEntity
    destination: LabeledEntity
    via: LabeledEntity | None = None
    target_organ: LabeledEntity | None = None
    metadata: NeuronMetadata | None = None

    def entities(self) -> list[LabeledEntity]:
        """Endpoints in label-dictionary insertion order."""
        return [
            e for e in (self.neuron, self.origin, self.via, self.destination, self.target_organ)
            if e is not None
        ]

    def to_edge(self) -> ConnectivityEdge:
        return ConnectivityEdge(
            id=self.neuron.id,
            origin=self.origin.id,
            via=self.via.id if self.via else None,
            destination=self.destination.id,
            target_organ=self.target_organ.id if self.target_organ else None,
        )


class ShapedSegment(BaseModel):
    neuron: LabeledEntity
    node1: LabeledEntity
    node2: LabeledEntity
    node1_type: str | None = None
    node2_type: str | None = None
    is_synaptic: bool = False

    def entities(self) -> list[LabeledEntity]:
        return [self.neuron, self.node1, self.node2]

    def to_record(self) -> PathwaySegment:
        return PathwaySegment(
            id=self.neuron.id,
            nodes=[
                SegmentNode(id=self.node1.id, type=self.node1_type),
                SegmentNode(id=self.node2.id, type=self.node2_type),
            ],
            is_synaptic=self.is_synaptic,
        )


class ShapedLocation(BaseModel):
    entity: LabeledEntity
    location_type: str | None = None
    connection_type: str | None = None

    def to_record(self) -> LocationRecord:
        return LocationRecord(
            id=self.entity.id,
            location_type=self.location_type,
            connection_type=self.connection_type,
        )
