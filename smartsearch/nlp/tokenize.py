"""Tokenization and stop-word classification."""

from __future__ import annotations

import re
from typing import List

from smartsearch.models import Language
from smartsearch.nlp.normalize import normalize

_NON_WORD_RE = re.compile(r"[^\w\s\u0600-\u06FF]")
_ARABIC_PUNCTUATION_RE = re.compile(r"[\u060C\u061B\u061F\u066A-\u066D\u06D4]")
MIN_TOKEN_LENGTH = 2

# Function words plus the filler verbs people type in front of a search
# ("I want", "where is", "please show me").
AR_STOP_WORDS = frozenset(
    normalize(word)
    for word in (
        "في", "من", "على", "إلى", "عن", "مع", "هل", "ما", "هذا", "هذه",
        "ذلك", "تلك", "التي", "الذي", "كان", "كانت", "هو", "هي", "نحن",
        "أنا", "أنت", "هم", "لا", "لم", "لن", "قد", "إن", "أن", "بعد",
        "قبل", "كل", "بين", "أو", "ثم", "حتى", "إذا", "لكن", "و",
        "بل", "بأن", "عند", "فقط", "أيضا", "جدا", "كثير", "قليل",
        "أبحث", "ابحث", "أريد", "اريد", "أبي", "أبغى", "ابغى", "أبا", "ابا",
        "ابي", "محتاج", "أحتاج", "احتاج", "وين", "فين", "أين",
        "يوجد", "يكون", "نبي", "نبغى", "ابحثلي", "دلني", "دلوني",
        "وش", "شو", "ايش", "إيش", "لو", "سمحت", "ممكن", "يا", "الله",
    )
)

EN_STOP_WORDS = frozenset(
    (
        "i", "me", "my", "we", "our", "you", "your", "he", "she", "it",
        "they", "them", "the", "a", "an", "is", "are", "was", "were", "be",
        "been", "being", "have", "has", "had", "do", "does", "did", "will",
        "would", "could", "should", "can", "may", "might", "shall",
        "not", "but", "and", "or", "if", "then", "so", "at", "by", "for",
        "with", "about", "into", "to", "from", "in", "on", "of", "up",
        "out", "no", "nor", "too", "very", "just", "also", "than",
        "find", "looking", "search", "want", "need", "show", "give",
        "where", "what", "which", "who", "how", "please", "help",
        "best", "good", "great", "top", "nearby", "near", "around",
        "recommend", "suggestion", "any", "some", "there",
    )
)


def tokenize(text: str) -> List[str]:
    """Split text into normalized tokens of at least two characters."""
    if not text:
        return []
    cleaned = _ARABIC_PUNCTUATION_RE.sub(" ", _NON_WORD_RE.sub(" ", normalize(text)))
    return [token for token in cleaned.split() if len(token) >= MIN_TOKEN_LENGTH]


def is_stopword(token: str, language: Language) -> bool:
    if language == "ar":
        return token in AR_STOP_WORDS
    if language == "en":
        return token in EN_STOP_WORDS
    return token in AR_STOP_WORDS or token in EN_STOP_WORDS
