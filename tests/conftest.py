"""Shared test fixtures for the SCKAN exporter test suite."""

import pytest

from sckan_export.graph.queries import SPARQL_TEMPLATES
from sckan_export.utils import QueryError

UBERON = "http://purl.obolibrary.org/obo/UBERON_"
NPOKB = "http://uri.interlex.org/npo/uris/neurons/"
READABLE = "http://uri.interlex.org/tgbugs/uris/readable/"


def b(value: str) -> dict:
    """Build a single SPARQL JSON binding."""
    return {"type": "uri" if value.startswith("http") else "literal", "value": value}


def row(**bindings: str) -> dict:
    """Build a result row from keyword bindings; ``None`` values are left unbound."""
    return {name: b(value) for name, value in bindings.items() if value is not None}


class FakeExecutor:
    """In-memory query executor keyed by catalogue query name."""

    def __init__(self, rows_by_query: dict | None = None, fail_on: str | None = None) -> None:
        self.rows_by_query = rows_by_query or {}
        self.fail_on = fail_on
        self.executed: list[str] = []
        self._names = {t["sparql"]: name for name, t in SPARQL_TEMPLATES.items()}

    def execute(self, query: str) -> list[dict]:
        name = self._names[query]
        self.executed.append(name)
        if name == self.fail_on:
            raise QueryError("503 Service Unavailable")
        return list(self.rows_by_query.get(name, []))


@pytest.fixture
def metadata_row():
    """A neuron metadata row with every optional variable bound."""
    return row(
        Neuron_IRI=READABLE + "sparc-nlp/keast/4",
        Neuron_Label="neuron type kblad 4",
        Preferred_Label="L6 sympathetic preganglionic to bladder",
        Sex="Male",
        Alert="Soma location inferred",
        Reference="Keast 1995 https://doi.org/10.1159/000060678, see also",
        Species="http://purl.obolibrary.org/obo/NCBITaxon_10116|http://purl.obolibrary.org/obo/NCBITaxon_10090",
        Phenotypes="Sympathetic phenotype|Pre ganglionic phenotype|Odd phenotype",
        Forward_Connections=READABLE + "sparc-nlp/keast/5",
        Citations="PMID:1234|PMID:5678",
    )


@pytest.fixture
def connectivity_row():
    return row(
        Neuron_ID=READABLE + "sparc-nlp/keast/4",
        A_IRI=UBERON + "0006455",
        A_Label="L6 segment of lumbar spinal cord",
        B_IRI=UBERON + "0016508",
        B_Label="pelvic ganglion",
        C_IRI=UBERON + "0003126",
        C_Label="lumbar splanchnic nerve",
        Target_Organ_IRI=UBERON + "0001255",
        Target_Organ_Label="urinary bladder",
    )


@pytest.fixture
def segment_row():
    return row(
        Neuron_IRI=READABLE + "sparc-nlp/keast/4",
        Neuron_Label="neuron type kblad 4",
        V1=UBERON + "0006455",
        V1_Label="L6 segment of lumbar spinal cord",
        V2=UBERON + "0016508",
        V2_Label="pelvic ganglion",
        V1_Type="hasSomaLocation",
        V2_Type="hasAxonTerminalLocation",
        IsSynapse="YES",
    )


@pytest.fixture
def location_row():
    return row(
        Connection_Type=READABLE + "hasSomaLocation",
        Location_IRI=UBERON + "0006455",
        Location_Label="L6 segment of lumbar spinal cord",
    )


@pytest.fixture
def end_to_end_rows():
    """The smallest export: one edge and its neuron's metadata."""
    return {
        "neuron_metadata": [
            row(
                Neuron_IRI=NPOKB + "1",
                Neuron_Label="Neuron A",
                Species="NCBITaxon:1",
            )
        ],
        "connectivity": [
            row(Neuron_ID=NPOKB + "1", A_IRI=UBERON + "1", B_IRI=UBERON + "2"),
        ],
    }


@pytest.fixture
def fake_executor():
    return FakeExecutor
