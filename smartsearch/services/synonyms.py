"""Bilingual synonym lookup over the lexicon's synonym graph."""

from __future__ import annotations

from typing import FrozenSet, Set

from smartsearch.lexicon import Lexicon
from smartsearch.nlp.normalize import normalize, stem


def synonyms(word: str, lexicon: Lexicon) -> FrozenSet[str]:
    """Return the normalized synonyms of ``word``.

    A direct entry in the synonym graph wins. Otherwise every table key
    sharing the word's stem contributes itself and its own synonyms.
    """
    normalized = normalize(word)
    direct = lexicon.synonyms.get(normalized)
    if direct:
        return direct

    found: Set[str] = set()
    for key in lexicon.synonym_stems.get(stem(normalized), ()):
        if key == normalized:
            continue
        found.add(key)
        found.update(lexicon.synonyms.get(key, ()))
    found.discard(normalized)
    return frozenset(found)
