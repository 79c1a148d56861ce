"""Approximate string matching based on Levenshtein distance."""

from __future__ import annotations

import math
from typing import List

EXACT_SCORE = 1.0
CONTAINS_SCORE = 0.9
EDIT_SCORE_CEILING = 0.8
MIN_FUZZY_LENGTH = 3
MAX_DISTANCE_RATIO = 0.35


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit costs, keeping two rows of the shorter string."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous: List[int] = list(range(len(b) + 1))
    current: List[int] = [0] * (len(b) + 1)
    for i, char_a in enumerate(a, start=1):
        current[0] = i
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current[j] = min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            )
        previous, current = current, previous
    return previous[len(b)]


def fuzzy_score(query: str, target: str) -> float:
    """Similarity in [0, 1]: 1.0 exact, 0.9 substring, up to 0.8 for close spellings."""
    if query == target:
        return EXACT_SCORE
    if query in target:
        return CONTAINS_SCORE
    if len(query) < MIN_FUZZY_LENGTH or len(target) < MIN_FUZZY_LENGTH:
        return 0.0

    distance = edit_distance(query, target)
    max_len = max(len(query), len(target))
    threshold = max(1, math.floor(max_len * MAX_DISTANCE_RATIO))
    if distance <= threshold:
        return max(0.0, 1 - distance / max_len) * EDIT_SCORE_CEILING
    return 0.0
