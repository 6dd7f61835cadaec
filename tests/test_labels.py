"""Tests for the label dictionary passes and their precedence."""

from sckan_export import labels as L
from sckan_export.models import (
    LabeledEntity,
    NeuronMetadata,
    ShapedConnectivity,
    ShapedLocation,
    ShapedSegment,
    SynonymRecord,
)


def _entity(curie, label=None):
    return LabeledEntity(id=curie, iri=f"http://example.org/{curie}", label=label)


def _conn(metadata=None, neuron_label=None):
    return ShapedConnectivity(
        neuron=_entity("npokb:1", neuron_label),
        origin=_entity("UBERON:1", "origin"),
        destination=_entity("UBERON:2", "destination"),
        metadata=metadata,
    )


def _meta(**fields):
    return NeuronMetadata(id="npokb:1", iri="http://example.org/npokb:1", **fields)


class TestSeed:
    def test_relation_labels_present_without_data(self):
        labels = L.build_label_dictionary()
        assert labels["hasSomaLocation"].label == "soma"
        assert labels["hasAxonTerminalLocation"].label == "axon terminal"
        assert labels["hasSomaLocation"].iri == "http://uri.interlex.org/tgbugs/uris/readable/hasSomaLocation"


class TestConnectivityPass:
    def test_inserts_every_endpoint(self):
        labels = L.add_connectivity_labels({}, [_conn()])
        assert set(labels) == {"npokb:1", "UBERON:1", "UBERON:2"}
        assert labels["npokb:1"].label is None
        assert labels["UBERON:1"].label == "origin"

    def test_preferred_label_beats_label(self):
        labels = L.add_connectivity_labels({}, [_conn(_meta(label="L1", preferred_label="L2"))])
        assert labels["npokb:1"].label == "L2"

    def test_metadata_label_used_without_preferred(self):
        labels = L.add_connectivity_labels({}, [_conn(_meta(label="L1"))])
        assert labels["npokb:1"].label == "L1"

    def test_no_metadata_keeps_inserted_label(self):
        labels = L.add_connectivity_labels({}, [_conn(neuron_label="raw")])
        assert labels["npokb:1"].label == "raw"


class TestPassOrdering:
    def test_segment_pass_overwrites_connectivity_label(self):
        seg = ShapedSegment(
            neuron=_entity("npokb:1"),
            node1=_entity("UBERON:1", "segment origin"),
            node2=_entity("UBERON:9", "waypoint"),
        )
        labels = L.build_label_dictionary(connectivity=[_conn()], segments=[seg])
        assert labels["UBERON:1"].label == "segment origin"
        assert labels["UBERON:9"].label == "waypoint"

    def test_missing_label_does_not_erase_existing_one(self):
        seg = ShapedSegment(
            neuron=_entity("npokb:1"),
            node1=_entity("UBERON:1"),
            node2=_entity("UBERON:2"),
        )
        labels = L.build_label_dictionary(
            connectivity=[_conn(_meta(preferred_label="L2"))], segments=[seg]
        )
        assert labels["npokb:1"].label == "L2"
        assert labels["UBERON:1"].label == "origin"

    def test_location_pass_runs_last_of_the_primary_passes(self):
        loc = ShapedLocation(entity=_entity("UBERON:2", "location label"))
        labels = L.build_label_dictionary(connectivity=[_conn()], locations=[loc])
        assert labels["UBERON:2"].label == "location label"


class TestSynonyms:
    def test_existing_id_keeps_primary_label(self):
        labels = L.add_location_labels({}, [ShapedLocation(entity=_entity("UBERON:1", "X"))])
        labels = L.add_synonyms(labels, [
            SynonymRecord(id="UBERON:1", iri="http://example.org/UBERON:1", label="Y"),
            SynonymRecord(id="UBERON:1", iri="http://example.org/UBERON:1", label="Y"),
        ])
        assert labels["UBERON:1"].label == "X"
        assert labels["UBERON:1"].synonyms == ("Y", "Y")

    def test_new_id_uses_synonym_as_primary(self):
        labels = L.add_synonyms({}, [SynonymRecord(id="UBERON:5", iri="iri5", label="Z")])
        assert labels["UBERON:5"].label == "Z"
        assert labels["UBERON:5"].synonyms == ()

    def test_second_synonym_for_new_id_is_appended(self):
        labels = L.add_synonyms({}, [
            SynonymRecord(id="UBERON:5", iri="iri5", label="Z"),
            SynonymRecord(id="UBERON:5", iri="iri5", label="Z2"),
        ])
        assert labels["UBERON:5"].label == "Z"
        assert labels["UBERON:5"].synonyms == ("Z2",)


class TestImmutability:
    def test_passes_do_not_mutate_their_input(self):
        seeded = L.seed_labels()
        snapshot = dict(seeded)
        after = L.add_connectivity_labels(seeded, [_conn()])
        after = L.add_synonyms(after, [SynonymRecord(id="hasSomaLocation", iri="x", label="soma location")])
        assert seeded == snapshot
        assert seeded["hasSomaLocation"].synonyms == ()
        assert after["hasSomaLocation"].synonyms == ("soma location",)
        assert "npokb:1" not in seeded
