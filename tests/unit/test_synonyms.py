from __future__ import annotations

from smartsearch.lexicon import build_lexicon, default_lexicon
from smartsearch.services.synonyms import synonyms


def test_direct_lookup_normalizes_input() -> None:
    found = synonyms("قهوة", default_lexicon())
    assert "coffee" in found
    assert "cafe" in found
    assert "قهوه" not in found


def test_lookup_is_bilingual() -> None:
    found = synonyms("restaurant", default_lexicon())
    assert "مطعم" in found
    assert "مطاعم" in found


def test_stem_fallback_for_unlisted_inflections() -> None:
    lexicon = default_lexicon()
    pharmacies = synonyms("pharmacies", lexicon)
    assert "pharmacy" in pharmacies
    assert "medicine" in pharmacies
    assert "pharmacies" not in pharmacies

    arabic = synonyms("المطاعم", lexicon)
    assert "مطاعم" in arabic
    assert "restaurant" in arabic


def test_unknown_word_has_no_synonyms() -> None:
    assert synonyms("zzzz", default_lexicon()) == frozenset()


def test_custom_lexicon() -> None:
    lexicon = build_lexicon(synonym_groups=[["shawarma", "شاورما"]])
    assert synonyms("shawarma", lexicon) == frozenset({"شاورما"})
    assert synonyms("coffee", lexicon) == frozenset()
