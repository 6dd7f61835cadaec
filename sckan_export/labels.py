"""Label dictionary builder.

The dictionary is produced by a fixed sequence of passes, each taking the
previous stage and returning a new mapping (inputs are never mutated):

1. ``seed_labels``               relation node types with fixed labels
2. ``add_connectivity_labels``   neuron/origin/via/destination/target organ,
                                 then the neuron's preferred label or label
3. ``add_segment_labels``        neurons and path nodes of the segments
4. ``add_location_labels``       connected anatomical locations
5. ``add_synonyms``              additive only; never replaces a primary label

Passes 1-4 overwrite the primary label of an existing id (last writer
wins). A missing label is not a claim: it refreshes the IRI but keeps the
label already recorded.
"""

from __future__ import annotations

from typing import Iterable, Mapping

from sckan_export.enrichment import RELATION_LABELS
from sckan_export.models import (
    LabelEntry,
    LabeledEntity,
    ShapedConnectivity,
    ShapedLocation,
    ShapedSegment,
    SynonymRecord,
)

LabelDictionary = Mapping[str, LabelEntry]


def _put(labels: dict[str, LabelEntry], entity: LabeledEntity) -> None:
    existing = labels.get(entity.id)
    if existing is None:
        labels[entity.id] = LabelEntry(iri=entity.iri, label=entity.label)
        return
    labels[entity.id] = existing.model_copy(
        update={
            "iri": entity.iri,
            "label": entity.label if entity.label is not None else existing.label,
        }
    )


def _relabel(labels: dict[str, LabelEntry], key: str, label: str) -> None:
    labels[key] = labels[key].model_copy(update={"label": label})


def seed_labels() -> dict[str, LabelEntry]:
    return {key: LabelEntry(iri=iri, label=label) for key, (iri, label) in RELATION_LABELS.items()}


def add_connectivity_labels(
    labels: LabelDictionary, connectivity: Iterable[ShapedConnectivity]
) -> dict[str, LabelEntry]:
    result = dict(labels)
    for conn in connectivity:
        for entity in conn.entities():
            _put(result, entity)
        meta = conn.metadata
        if meta is not None:
            preferred = meta.preferred_label or meta.label
            if preferred:
                _relabel(result, conn.neuron.id, preferred)
    return result


def add_segment_labels(
    labels: LabelDictionary, segments: Iterable[ShapedSegment]
) -> dict[str, LabelEntry]:
    result = dict(labels)
    for segment in segments:
        for entity in segment.entities():
            _put(result, entity)
    return result


def add_location_labels(
    labels: LabelDictionary, locations: Iterable[ShapedLocation]
) -> dict[str, LabelEntry]:
    result = dict(labels)
    for location in locations:
        if location.entity.id:
            _put(result, location.entity)
    return result


def add_synonyms(
    labels: LabelDictionary, synonyms: Iterable[SynonymRecord]
) -> dict[str, LabelEntry]:
    result = dict(labels)
    for synonym in synonyms:
        if not synonym.id:
            continue
        existing = result.get(synonym.id)
        if existing is None:
            result[synonym.id] = LabelEntry(iri=synonym.iri, label=synonym.label)
        else:
            result[synonym.id] = existing.model_copy(
                update={"synonyms": existing.synonyms + (synonym.label,)}
            )
    return result


def build_label_dictionary(
    connectivity: Iterable[ShapedConnectivity] = (),
    segments: Iterable[ShapedSegment] = (),
    locations: Iterable[ShapedLocation] = (),
    synonyms: Iterable[SynonymRecord] = (),
) -> dict[str, LabelEntry]:
    """Run every pass in order and return the final dictionary."""
    labels = seed_labels()
    labels = add_connectivity_labels(labels, connectivity)
    labels = add_segment_labels(labels, segments)
    labels = add_location_labels(labels, locations)
    return add_synonyms(labels, synonyms)
