"""Normalization and light stemming for mixed Arabic/English text."""

from __future__ import annotations

import re
import unicodedata

from smartsearch.models import Language

_ARABIC_DIACRITICS_RE = re.compile(r"[\u0610-\u061A\u064B-\u065F\u0670\u06D6-\u06ED]")
_LATIN_MARKS_RE = re.compile(r"[\u0300-\u036F]")
_ARABIC_CHAR_RE = re.compile(r"[\u0600-\u06FF]")
_LATIN_CHAR_RE = re.compile(r"[a-zA-Z]")
_TATWEEL = "\u0640"

# Hamza-bearing letters decompose under NFD and lose the hamza with the
# diacritics; the table covers the forms that do not decompose.
_LETTER_VARIANTS = str.maketrans(
    {
        "أ": "ا",
        "إ": "ا",
        "آ": "ا",
        "ٱ": "ا",
        "ة": "ه",
        "ؤ": "و",
        "ئ": "ي",
        "ى": "ي",
        "ی": "ي",
        "ک": "ك",
        "گ": "ك",
        "ڤ": "ف",
        "پ": "ب",
        "چ": "ج",
        "ژ": "ز",
    }
)

_ARTICLE_PREFIXES = ("ال", "وال", "بال", "كال", "لل")
_AR_SUFFIXES = ("ات", "ين", "ون", "ان", "تين", "ية", "وا", "ها", "هم", "هن", "كم", "نا")
_AR_PREFIXES = ("مت", "مس", "است")
_AR_MIN_STEM = 2

# (suffix, replacement, minimum word length) checked in order, first hit wins.
_EN_RULES: tuple[tuple[str, str, int], ...] = (
    ("ies", "y", 5),
    ("ing", "", 6),
    ("tion", "", 6),
    ("ness", "", 6),
    ("ment", "", 6),
    ("able", "", 6),
    ("ful", "", 5),
    ("ous", "", 5),
    ("ive", "", 5),
    ("ed", "", 5),
    ("ly", "", 5),
    ("er", "", 5),
    ("es", "", 5),
)


def normalize(text: str) -> str:
    """Canonicalize text: fold case, drop diacritics and unify letter variants."""
    if not text:
        return ""
    folded = unicodedata.normalize("NFD", unicodedata.normalize("NFD", text).casefold())
    folded = _ARABIC_DIACRITICS_RE.sub("", folded)
    folded = _LATIN_MARKS_RE.sub("", folded)
    return folded.replace(_TATWEEL, "").translate(_LETTER_VARIANTS)


def is_arabic(text: str) -> bool:
    return bool(_ARABIC_CHAR_RE.search(text))


def detect_language(text: str) -> Language:
    arabic_chars = len(_ARABIC_CHAR_RE.findall(text))
    latin_chars = len(_LATIN_CHAR_RE.findall(text))
    if arabic_chars and latin_chars:
        return "mixed"
    if arabic_chars > latin_chars:
        return "ar"
    return "en"


def strip_definite_article(word: str) -> str:
    """Remove a leading ال-style article cluster when a 2+ letter remainder is left."""
    for prefix in _ARTICLE_PREFIXES:
        if word.startswith(prefix) and len(word) - len(prefix) >= _AR_MIN_STEM:
            return word[len(prefix) :]
    return word


def stem_ar(word: str) -> str:
    stemmed = strip_definite_article(word)
    for suffix in _AR_SUFFIXES:
        if stemmed.endswith(suffix) and len(stemmed) - len(suffix) >= _AR_MIN_STEM:
            stemmed = stemmed[: -len(suffix)]
            break
    for prefix in _AR_PREFIXES:
        if stemmed.startswith(prefix) and len(stemmed) - len(prefix) >= _AR_MIN_STEM:
            stemmed = stemmed[len(prefix) :]
            break
    return stemmed


def stem_en(word: str) -> str:
    lowered = word.lower()
    if len(lowered) <= 3:
        return lowered
    for suffix, replacement, min_length in _EN_RULES:
        if lowered.endswith(suffix) and len(lowered) >= min_length:
            return lowered[: -len(suffix)] + replacement
    if lowered.endswith("s") and not lowered.endswith("ss"):
        return lowered[:-1]
    return lowered


def stem(word: str) -> str:
    """Stem with the stemmer matching the word's script."""
    return stem_ar(word) if is_arabic(word) else stem_en(word)
