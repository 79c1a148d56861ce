from __future__ import annotations

from typing import List, Sequence

from smartsearch.models import CandidateRecord, ScoredCandidate
from smartsearch.services.ranking import DEFAULT_LIMIT, rank_candidates


def _scored(scores: Sequence[float]) -> List[ScoredCandidate]:
    return [
        ScoredCandidate(candidate=CandidateRecord(id=f"biz-{index}"), score=value)
        for index, value in enumerate(scores)
    ]


def test_rank_orders_by_score_and_drops_non_positive() -> None:
    ranked = rank_candidates(_scored([3.0, 0.0, 5.0, 3.0, -1.0]))
    assert [item.candidate.id for item in ranked] == ["biz-2", "biz-0", "biz-3"]


def test_rank_is_a_prefix_for_any_limit() -> None:
    scored = _scored([1.0, 4.0, 4.0, 2.0, 0.5, 3.0])
    full = rank_candidates(scored, limit=len(scored))
    for limit in range(len(scored) + 1):
        assert rank_candidates(scored, limit=limit) == full[:limit]


def test_rank_default_limit() -> None:
    ranked = rank_candidates(_scored([1.0] * (DEFAULT_LIMIT + 5)))
    assert len(ranked) == DEFAULT_LIMIT
    assert ranked[0].candidate.id == "biz-0"


def test_rank_empty_and_negative_limit() -> None:
    assert rank_candidates([]) == []
    assert rank_candidates(_scored([1.0]), limit=-3) == []
