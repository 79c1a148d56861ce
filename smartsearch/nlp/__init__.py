"""Text processing primitives shared by the search pipeline."""

from smartsearch.nlp.fuzzy import edit_distance, fuzzy_score
from smartsearch.nlp.normalize import (
    detect_language,
    is_arabic,
    normalize,
    stem,
    stem_ar,
    stem_en,
    strip_definite_article,
)
from smartsearch.nlp.tokenize import is_stopword, tokenize

__all__ = [
    "detect_language",
    "edit_distance",
    "fuzzy_score",
    "is_arabic",
    "is_stopword",
    "normalize",
    "stem",
    "stem_ar",
    "stem_en",
    "strip_definite_article",
    "tokenize",
]
