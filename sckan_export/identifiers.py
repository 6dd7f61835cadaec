"""CURIE <-> IRI canonicalization for ontology identifiers.

The prefix table is ordered: the first namespace that prefixes an IRI wins,
so more specific namespaces (``mmset1`` under ``readable/``) are listed
before their parents. IRIs outside every namespace are passed through
unchanged and downstream consumers treat them as CURIE-shaped strings.
"""

from __future__ import annotations

from typing import Iterable

from sckan_export.utils import PrefixLookupError

# (prefix, namespace) pairs; order matters.
PREFIX_IRI_MAPPING: tuple[tuple[str, str], ...] = (
    ("BIRNLEX:", "http://uri.neuinfo.org/nif/nifstd/birnlex_"),
    ("UBERON:", "http://purl.obolibrary.org/obo/UBERON_"),
    ("ILX:", "http://uri.interlex.org/base/ilx_"),
    ("mmset1:", "http://uri.interlex.org/tgbugs/uris/readable/sparc-nlp/mmset1/"),
    ("mmset2cn:", "http://uri.interlex.org/tgbugs/uris/readable/sparc-nlp/mmset2cn/"),
    ("mmset4:", "http://uri.interlex.org/tgbugs/uris/readable/sparc-nlp/mmset4/"),
    ("ilxtr:", "http://uri.interlex.org/tgbugs/uris/readable/"),
    ("npokb:", "http://uri.interlex.org/npo/uris/neurons/"),
    ("PAXRAT:", "http://uri.interlex.org/paxinos/uris/rat/labels/"),
    ("MBA:", "http://api.brain-map.org/api/v2/data/Structure/"),
    ("NLX:", "http://uri.neuinfo.org/nif/nifstd/nlx_"),
    ("NIFSTD:", "http://uri.neuinfo.org/nif/nifstd/"),
)

MULTI_VALUE_SEPARATOR = "|"


class Canonicalizer:
    """Bidirectional CURIE/IRI mapping over an ordered prefix table."""

    def __init__(self, mapping: Iterable[tuple[str, str]] = PREFIX_IRI_MAPPING) -> None:
        self.mapping: tuple[tuple[str, str], ...] = tuple(mapping)
        self._namespaces = {prefix: namespace for prefix, namespace in reversed(self.mapping)}

    def to_curie(self, iri: str) -> str:
        """Compact an IRI; unknown IRIs (and existing CURIEs) come back unchanged."""
        if self._has_registered_prefix(iri):
            return iri
        for prefix, namespace in self.mapping:
            if iri.startswith(namespace):
                return prefix + iri[len(namespace):]
        return iri

    def to_iri(self, curie: str) -> str:
        """Expand a CURIE; raises PrefixLookupError for unregistered prefixes."""
        prefix, sep, local = curie.partition(":")
        namespace = self._namespaces.get(prefix + ":") if sep else None
        if namespace is None:
            raise PrefixLookupError(f"No mapping found for prefix {prefix}:")
        return namespace + local

    def split_multi_valued(
        self, raw: str | None, separator: str = MULTI_VALUE_SEPARATOR
    ) -> list[str]:
        """Split an aggregated binding and canonicalize each non-empty part.

        Source order and duplicates are preserved.
        """
        if not raw:
            return []
        return [self.to_curie(part) for part in raw.split(separator) if part]

    def prefix_for_namespace(self, namespace: str) -> str | None:
        for prefix, candidate in self.mapping:
            if candidate == namespace:
                return prefix
        return None

    def namespace_for_prefix(self, prefix: str) -> str | None:
        if not prefix.endswith(":"):
            prefix += ":"
        return self._namespaces.get(prefix)

    def _has_registered_prefix(self, value: str) -> bool:
        head, sep, _ = value.partition(":")
        return bool(sep) and (head + ":") in self._namespaces


_default = Canonicalizer()


def to_curie(iri: str) -> str:
    return _default.to_curie(iri)


def to_iri(curie: str) -> str:
    return _default.to_iri(curie)


def split_multi_valued(raw: str | None, separator: str = MULTI_VALUE_SEPARATOR) -> list[str]:
    return _default.split_multi_valued(raw, separator)
