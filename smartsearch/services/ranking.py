"""Ranking helpers for scored directory candidates."""

from __future__ import annotations

from typing import Iterable, List

from smartsearch.models import ScoredCandidate

DEFAULT_LIMIT = 20


def rank_candidates(
    scored: Iterable[ScoredCandidate],
    limit: int = DEFAULT_LIMIT,
) -> List[ScoredCandidate]:
    """Drop non-positive scores, order by score (ties keep input order) and truncate."""
    positive = [item for item in scored if item.score > 0]
    ranked = sorted(positive, key=lambda item: item.score, reverse=True)
    return ranked[: max(0, limit)]
