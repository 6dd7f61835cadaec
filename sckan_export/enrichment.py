"""Static lookup tables and derivation rules applied while shaping rows.

None of these categories can be derived from the knowledge base itself;
the tables are curated by hand and versioned with ``TABLES_VERSION``.
"""

from __future__ import annotations

import re

from sckan_export.models import DoiRecord

TABLES_VERSION = "2.0"

# (substring, model name); first substring found in the neuron CURIE wins.
MODEL_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("bolew", "Bolser-Lewis Model of Defensive Breathing"),
    ("keast", "Keast Model of Bladder Innervation"),
    ("bromo", "SAWG Model of Bronchomotor Control"),
    ("sdcol", "SAWG Model of the Descending Colon"),
    ("pancr", "SAWG Model of the Pancreas"),
    ("splen", "SAWG Model of the Spleen"),
    ("sstom", "SAWG Model of the Stomach"),
    ("aacar", "UCLA Model of the Heart"),
    ("mmset2cn", "Cranial Nerve Connections"),
    ("femrep", "Female Reproductive System"),
    ("kidney", "Kidney Connections"),
    ("liver", "Liver Connections"),
    ("prostate", "Male Reproductive System (Prostate)"),
    ("semves", "Male Reproductive System (Seminal Vesicles)"),
    ("senmot", "Sensory-Motor Connections"),
    ("swglnd", "Sweat Gland Connections"),
    ("mmset1", "Uncategorized Connections (Set 1)"),
    ("mmset4", "Uncategorized Connections (Set 4)"),
)

PHENOTYPE_CATEGORIES: dict[str, str] = {
    "Parasympathetic phenotype": "ANS: Parasympathetic",
    "Pre ganglionic phenotype, Parasympathetic phenotype": "ANS: Parasympathetic Pre-Ganglionic",
    "Parasympathetic phenotype, Pre ganglionic phenotype": "ANS: Parasympathetic Pre-Ganglionic",
    "Post ganglionic phenotype, Parasympathetic phenotype": "ANS: Parasympathetic Post-Ganglionic",
    "Parasympathetic phenotype, Post ganglionic phenotype": "ANS: Parasympathetic Post-Ganglionic",
    "Sympathetic phenotype": "ANS: Sympathetic",
    "Pre ganglionic phenotype, Sympathetic phenotype": "ANS: Sympathetic Pre-Ganglionic",
    "Sympathetic phenotype, Pre ganglionic phenotype": "ANS: Sympathetic Pre-Ganglionic",
    "Post ganglionic phenotype, Sympathetic phenotype": "ANS: Sympathetic Post-Ganglionic",
    "Sympathetic phenotype, Post ganglionic phenotype": "ANS: Sympathetic Post-Ganglionic",
    "Enteric phenotype": "ANS: Enteric",
    "Sensory phenotype": "Circuit Role: Sensory",
    "Motor phenotype": "Circuit Role: Motor",
    "Intrinsic phenotype": "Circuit Role: Intrinsic",
    "Inhibitory phenotype": "Functional Circuit Role: Inhibitory",
    "Excitatory phenotype": "Functional Circuit Role: Excitatory",
    "Spinal cord ascending projection phenotype": "Projection: Spinal cord ascending projection phenotype",
    "Spinal cord descending projection phenotype": "Projection: Spinal cord descending projection phenotype",
    "Anterior projecting phenotype": "Projection: Anterior projecting",
    "Posterior projecting phenotype": "Projection: Posterior projecting",
    "Intestino fugal projection phenotype": "Projection: Intestino fugal projection phenotype",
}

# Canonicalized relation CURIE -> location type.
LOCATION_TYPES: dict[str, str] = {
    "ilxtr:hasSomaLocation": "soma",
    "ilxtr:hasAxonLocation": "via",
    "ilxtr:hasAxonTerminalLocation": "terminal",
    "ilxtr:hasAxonSensoryLocation": "sensory",
}

_READABLE = "http://uri.interlex.org/tgbugs/uris/readable/"

# Node-type relations that always appear in the label dictionary.
RELATION_LABELS: dict[str, tuple[str, str]] = {
    "hasSomaLocation": (_READABLE + "hasSomaLocation", "soma"),
    "hasAxonLocation": (_READABLE + "hasAxonLocation", "axon"),
    "hasAxonLeadingToSensoryTerminal": (_READABLE + "hasAxonLeadingToSensoryTerminal", "axon to sensory"),
    "hasSensoryAxonTerminalLocation": (_READABLE + "hasSensoryAxonTerminalLocation", "sensory terminal"),
    "hasAxonTerminalLocation": (_READABLE + "hasAxonTerminalLocation", "axon terminal"),
}

# Resolver URL followed by registrant.code/suffix; the suffix ends at whitespace or a comma.
_DOI_URL_PATTERN = re.compile(r"https://doi\.org/([0-9]+\.[0-9]+/[^\s,]+)")


def categorize_model(curie: str | None) -> tuple[str | None, str | None]:
    """Return ``(model_id, model_category)`` for a neuron CURIE, or ``(None, None)``."""
    if not curie:
        return None, None
    lowered = curie.lower()
    for substring, category in MODEL_CATEGORIES:
        if substring in lowered:
            return substring, category
    return None, None


def categorize_phenotype(phenotype: str) -> str:
    # Unmapped labels pass through as their own category.
    return PHENOTYPE_CATEGORIES.get(phenotype, phenotype)


def categorize_phenotypes(phenotypes: list[str]) -> list[str]:
    return [categorize_phenotype(p) for p in phenotypes]


def location_type_for(relation: str) -> str | None:
    return LOCATION_TYPES.get(relation)


def extract_dois(reference: str | None) -> list[DoiRecord]:
    """Find every ``https://doi.org/...`` link in free reference text."""
    if not reference:
        return []
    return [
        DoiRecord(url=match.group(0), doi=match.group(1))
        for match in _DOI_URL_PATTERN.finditer(reference)
    ]
