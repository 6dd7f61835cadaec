"""
SCKAN exporter
Exports the SCKAN neuron connectivity knowledge graph as one JSON document
"""

__version__ = "2.0.0"

from sckan_export.identifiers import Canonicalizer, split_multi_valued, to_curie, to_iri
from sckan_export.labels import build_label_dictionary
from sckan_export.assembler import assemble_document, build_json_schema, prune_empty
from sckan_export.pipeline import ExportResult, run_export
from sckan_export.settings import SCKANSettings, get_settings

__all__ = [
    "Canonicalizer",
    "to_curie",
    "to_iri",
    "split_multi_valued",
    "build_label_dictionary",
    "assemble_document",
    "build_json_schema",
    "prune_empty",
    "ExportResult",
    "run_export",
    "SCKANSettings",
    "get_settings",
]
