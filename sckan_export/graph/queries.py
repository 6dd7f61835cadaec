"""Pre-authored SPARQL queries against the NPO knowledge base.

Each entry documents the variables it binds; those names are the row
contract the shaping adapters rely on. Multi-valued variables are
aggregated with ``group_concat(...; separator="|")``.
"""

_PREFIXES = """PREFIX owl: <http://www.w3.org/2002/07/owl#>
PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
PREFIX rdf: <http://www.w3.org/1999/02/22-rdf-syntax-ns#>
PREFIX skos: <http://www.w3.org/2004/02/skos/core#>
PREFIX partOf: <http://purl.obolibrary.org/obo/BFO_0000050>
PREFIX ilxtr: <http://uri.interlex.org/tgbugs/uris/readable/>
PREFIX NIFRID: <http://uri.neuinfo.org/nif/nifstd/readable/>
PREFIX oboInOwl: <http://www.geneontology.org/formats/oboInOwl#>
"""

# Neurons with a soma location and an axon terminal (or sensory) location.
_NEURON_PATTERN = """
            ?Neuron_IRI rdfs:subClassOf*/rdfs:label 'Neuron'.
            OPTIONAL {?Neuron_IRI rdfs:label ?Neuron_Label.}
            ?Neuron_IRI ilxtr:hasSomaLocation ?A_IRI.
            ?A_IRI rdfs:label ?A_Label.
            ?Neuron_IRI (ilxtr:hasAxonTerminalLocation | ilxtr:hasAxonSensoryLocation) ?B_IRI.
            ?B_IRI rdfs:label ?B_Label."""

NEURON_METADATA = _PREFIXES + """
SELECT DISTINCT ?Neuron_IRI ?Neuron_Label ?Preferred_Label ?Species ?Sex ?Phenotypes
                ?Forward_Connections ?Citations ?Alert ?Reference
WHERE
{
    {
        SELECT DISTINCT ?Neuron_IRI ?Neuron_Label ?Preferred_Label ?Sex ?Alert ?Reference
        WHERE
        {""" + _NEURON_PATTERN + """
            OPTIONAL {?Neuron_IRI skos:prefLabel ?Preferred_Label.}
            OPTIONAL {?Neuron_IRI ilxtr:hasPhenotypicSex/rdfs:label ?Sex.}
            OPTIONAL {?Neuron_IRI ilxtr:reference ?Reference.}
            OPTIONAL {?Neuron_IRI ilxtr:alertNote ?Alert.}
        }
    }
    {
        SELECT DISTINCT ?Neuron_IRI ?Neuron_Label
        (group_concat(distinct ?ObservedIn; separator="|") as ?Species)
        WHERE
        {""" + _NEURON_PATTERN + """
            OPTIONAL {?Neuron_IRI ilxtr:isObservedInSpecies/rdfs:label ?ObservedIn.}
        }
        GROUP BY ?Neuron_IRI ?Neuron_Label
    }
    {
        SELECT DISTINCT ?Neuron_IRI ?Neuron_Label
        (group_concat(distinct ?ForwardConnection; separator="|") as ?Forward_Connections)
        WHERE
        {""" + _NEURON_PATTERN + """
            OPTIONAL {?Neuron_IRI ilxtr:hasForwardConnection ?ForwardConnection.}
        }
        GROUP BY ?Neuron_IRI ?Neuron_Label
    }
    {
        SELECT DISTINCT ?Neuron_IRI ?Neuron_Label
        (group_concat(distinct ?Phenotype; separator="|") as ?Phenotypes)
        WHERE
        {""" + _NEURON_PATTERN + """
            OPTIONAL {?Neuron_IRI (ilxtr:hasNeuronalPhenotype |
                                   ilxtr:hasFunctionalCircuitRole |
                                   ilxtr:hasCircuitRole |
                                   ilxtr:hasProjection)/rdfs:label ?Phenotype.}
        }
        GROUP BY ?Neuron_IRI ?Neuron_Label
    }
    {
        SELECT DISTINCT ?Neuron_IRI ?Neuron_Label
        (group_concat(distinct ?Citation; separator="|") as ?Citations)
        WHERE
        {""" + _NEURON_PATTERN + """
            OPTIONAL {?Neuron_IRI ilxtr:literatureCitation ?Citation.}
        }
        GROUP BY ?Neuron_IRI ?Neuron_Label
    }
}
ORDER BY ?Neuron_IRI
LIMIT 100000"""

CONNECTIVITY = _PREFIXES + """
SELECT DISTINCT ?Neuron_ID ?A_IRI ?A_Label ?B_IRI ?B_Label ?C_IRI ?C_Label
                ?Target_Organ_IRI ?Target_Organ_Label
{
    ?Neuron_ID rdfs:subClassOf*/rdfs:label 'Neuron'.

    ?Neuron_ID ilxtr:hasSomaLocation ?A_IRI.
    ?A_IRI rdfs:label ?A_Label.

    OPTIONAL {?Neuron_ID ilxtr:hasAxonLocation ?C_IRI.
              ?C_IRI rdfs:label ?C_Label.}

    ?Neuron_ID (ilxtr:hasAxonTerminalLocation | ilxtr:hasAxonSensoryLocation) ?B_IRI.
    ?B_IRI rdfs:label ?B_Label.

    OPTIONAL {?B_IRI rdfs:subClassOf+ [rdf:type owl:Restriction ;
                                        owl:onProperty partOf: ;
                                        owl:someValuesFrom ?Target_Organ_IRI].
              ?Target_Organ_IRI rdfs:label ?Target_Organ_Label
              FILTER (?Target_Organ_Label in ('heart', 'ovary', 'brain', 'urethra', 'esophagus',
                                              'skin of body', 'lung', 'liver', 'lower urinary tract',
                                              'urinary tract', 'muscle organ', 'gallbladder', 'colon',
                                              'kidney', 'large intestine', 'small intestine', 'stomach',
                                              'spleen', 'urinary bladder', 'penis', 'clitoris',
                                              'pancreas'))}
}
ORDER BY ?Neuron_ID ?A_Label ?B_IRI ?C_Label
LIMIT 120000"""

PARTIAL_ORDER = _PREFIXES + """
SELECT DISTINCT ?Neuron_IRI ?Neuron_Label ?V1 ?V1_Label ?V2 ?V2_Label ?V1_Type ?V2_Type ?IsSynapse
WHERE
{
    ?V1 ilxtr:hasNextNode{ilxtr:isConnectedBy ?Neuron_IRI} ?V2.

    ?V1 rdfs:label ?V1_Label. ?V2 rdfs:label ?V2_Label.
    OPTIONAL {?Neuron_IRI rdfs:label ?Neuron_Label.}

    ?Neuron_IRI ?V1_Location_Type_IRI ?V1.
    ?V1_Location_Type_IRI rdfs:label ?V1_Type.

    ?Neuron_IRI ?V2_Location_Type_IRI ?V2.
    ?V2_Location_Type_IRI rdfs:label ?V2_Type.

    FILTER (ilxtr:hasConnectedLocation not in (?V1_Location_Type_IRI, ?V2_Location_Type_IRI))

    OPTIONAL
    {
        ?Neuron_IRI ilxtr:hasForwardConnection/ilxtr:hasSomaLocation ?Synapse.
        FILTER (?V2 = ?Synapse)
        FILTER (?V2_Type = "hasAxonTerminalLocation")
    }

    BIND (IF (BOUND(?Synapse), "YES", "NO") AS ?IsSynapse)
}
ORDER BY ?Neuron_IRI ?V1_Label ?V2_Label
LIMIT 20000"""

_CONNECTED_LOCATION = """
    ?Neuron_ID ?Connection_Type ?Location_IRI.
    ?Connection_Type rdfs:subPropertyOf+ ilxtr:hasConnectedLocation.
    ?Neuron_ID ilxtr:hasSomaLocation ?s;
               (ilxtr:hasAxonTerminalLocation | ilxtr:hasAxonSensoryLocation) ?x."""

LOCATIONS = _PREFIXES + """
SELECT DISTINCT ?Connection_Type ?Location_IRI ?Location_Label
{""" + _CONNECTED_LOCATION + """
    ?Location_IRI rdfs:label ?Location_Label.
}
ORDER BY DESC(?Location_IRI) ?Location_Label
LIMIT 100000"""

SYNONYMS = _PREFIXES + """
SELECT DISTINCT ?Location_IRI ?Location_Label
{""" + _CONNECTED_LOCATION + """
    ?Location_IRI (NIFRID:synonym | oboInOwl:hasExactSynonym) ?Location_Label.
}
ORDER BY DESC(?Location_IRI) ?Location_Label
LIMIT 100000"""


SPARQL_TEMPLATES: dict[str, dict] = {
    "neuron_metadata": {
        "sparql": NEURON_METADATA,
        "description": "Per-neuron labels, sex, alerts, references and aggregated multi-valued fields",
        "required": ["Neuron_IRI"],
        "optional": [
            "Neuron_Label", "Preferred_Label", "Diagram_Link", "Species", "Sex", "Phenotypes",
            "Forward_Connections", "Citations", "Alert", "Reference",
        ],
    },
    "connectivity": {
        "sparql": CONNECTIVITY,
        "description": "Neuron populations where A projects to B, optionally via C and into a target organ",
        "required": ["Neuron_ID", "A_IRI", "B_IRI"],
        "optional": ["A_Label", "B_Label", "C_IRI", "C_Label", "Target_Organ_IRI", "Target_Organ_Label"],
    },
    "partial_order": {
        "sparql": PARTIAL_ORDER,
        "description": "Ordered node pairs of each neuron's axonal path with their location relations",
        "required": ["Neuron_IRI", "V1", "V2"],
        "optional": ["Neuron_Label", "V1_Label", "V2_Label", "V1_Type", "V2_Type", "IsSynapse"],
    },
    "locations": {
        "sparql": LOCATIONS,
        "description": "Anatomical locations connected to neurons and the relation that connects them",
        "required": ["Connection_Type", "Location_IRI"],
        "optional": ["Location_Label"],
    },
    "synonyms": {
        "sparql": SYNONYMS,
        "description": "Synonyms of connected anatomical locations",
        "required": ["Location_IRI", "Location_Label"],
        "optional": [],
    },
}

# Metadata must be shaped before connectivity, which cross-references it.
QUERY_ORDER: tuple[str, ...] = (
    "neuron_metadata",
    "connectivity",
    "partial_order",
    "locations",
    "synonyms",
)


def get_template(name: str) -> dict | None:
    """Return the query template for ``name`` or None if unknown."""
    return SPARQL_TEMPLATES.get(name)
