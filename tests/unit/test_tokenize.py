from __future__ import annotations

from smartsearch.nlp.tokenize import AR_STOP_WORDS, is_stopword, tokenize


def test_tokenize_normalizes_and_drops_short_tokens() -> None:
    assert tokenize("Hello, World! a") == ["hello", "world"]
    assert tokenize("مقهى في مسقط") == ["مقهي", "في", "مسقط"]


def test_tokenize_splits_on_punctuation() -> None:
    assert tokenize("café-bar / grill") == ["cafe", "bar", "grill"]
    assert tokenize("مطعم، مقهى؟") == ["مطعم", "مقهي"]


def test_tokenize_empty_input() -> None:
    assert tokenize("") == []
    assert tokenize("   ") == []
    assert tokenize("!!! ??") == []


def test_stop_words_are_stored_normalized() -> None:
    assert "اريد" in AR_STOP_WORDS
    assert "انا" in AR_STOP_WORDS
    assert "أنا" not in AR_STOP_WORDS


def test_is_stopword_by_language() -> None:
    assert is_stopword("في", "ar")
    assert not is_stopword("في", "en")
    assert is_stopword("the", "en")
    assert not is_stopword("the", "ar")
    assert is_stopword("the", "mixed")
    assert is_stopword("في", "mixed")
    assert not is_stopword("pizza", "mixed")
