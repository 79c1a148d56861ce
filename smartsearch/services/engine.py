"""Public entry points of the smart search engine.

Every call is a pure computation over in-memory records: intent extraction,
scoring, ranking and response rendering never touch storage or the network.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from smartsearch.config import ScoreWeights
from smartsearch.lexicon import Lexicon, default_lexicon
from smartsearch.models import (
    CandidateRecord,
    CategoryRecord,
    Locale,
    ScoredCandidate,
    SearchIntent,
    SearchResult,
)
from smartsearch.nlp.normalize import detect_language
from smartsearch.nlp.tokenize import tokenize
from smartsearch.services.entities import extract
from smartsearch.services.intent import classify
from smartsearch.services.ranking import DEFAULT_LIMIT, rank_candidates
from smartsearch.services.response import compose
from smartsearch.services.scoring import score_all

logger = logging.getLogger(__name__)

MAX_QUERY_CHARS = 200
FOLLOW_UP_MAX_WORDS = 3
HISTORY_WINDOW = 4
PAYLOAD_TOP_RESULTS = 10
PAYLOAD_REASONS = 5

CandidateInput = Union[CandidateRecord, Mapping[str, Any]]
CategoryInput = Union[CategoryRecord, Mapping[str, Any]]
HistoryTurn = Mapping[str, str]


def extract_intent(
    query: str,
    categories: Iterable[CategoryInput],
    locale: Locale = "en",
    *,
    lexicon: Optional[Lexicon] = None,
    max_query_chars: int = MAX_QUERY_CHARS,
) -> SearchIntent:
    """Understand a free-text query: language, tokens, entities, core query and intent."""
    lexicon = lexicon or default_lexicon()
    raw = query or ""
    text = raw
    if len(text) > max_query_chars:
        logger.info("query_truncated", extra={"length": len(text), "limit": max_query_chars})
        text = text[:max_query_chars]

    language = detect_language(text)
    tokens = tokenize(text)
    entities, core_tokens = extract(tokens, as_categories(categories), lexicon, language)
    return SearchIntent(
        raw=raw,
        tokens=tuple(tokens),
        language=language,
        entities=entities,
        core_query=" ".join(core_tokens),
        intent_type=classify(text, lexicon.intent_rules),
    )


def smart_search(
    query: str,
    candidates: Iterable[CandidateInput],
    categories: Iterable[CategoryInput],
    locale: Locale = "en",
    limit: int = DEFAULT_LIMIT,
    *,
    lexicon: Optional[Lexicon] = None,
    weights: Optional[ScoreWeights] = None,
    max_query_chars: int = MAX_QUERY_CHARS,
) -> SearchResult:
    """Score every candidate against the query and return the ranked top ``limit``."""
    lexicon = lexicon or default_lexicon()
    intent = extract_intent(
        query,
        categories,
        locale,
        lexicon=lexicon,
        max_query_chars=max_query_chars,
    )
    records = as_candidates(candidates)
    results = rank_candidates(score_all(records, intent, lexicon, weights), limit)
    logger.debug(
        "smart_search_completed",
        extra={
            "candidates": len(records),
            "results": len(results),
            "intent": intent.intent_type.value,
            "language": intent.language,
        },
    )
    return SearchResult(results=results, intent=intent)


def generate_response(
    query: str,
    results: Sequence[ScoredCandidate],
    intent: SearchIntent,
    categories: Iterable[CategoryInput],
    locale: Locale = "en",
    history: Optional[Sequence[HistoryTurn]] = None,
    *,
    lexicon: Optional[Lexicon] = None,
) -> str:
    return compose(
        query,
        results,
        intent,
        as_categories(categories),
        locale,
        history or [],
        lexicon or default_lexicon(),
    )


def build_contextual_query(
    query: str,
    history: Optional[Sequence[HistoryTurn]],
    categories: Iterable[CategoryInput],
    locale: Locale = "en",
    *,
    lexicon: Optional[Lexicon] = None,
) -> str:
    """Fold a short follow-up into the previous user query.

    Refinements ("also", "كمان", ...) with a new core query are appended to the
    previous query; a follow-up without a city inherits the previous one.
    """
    recent = list(history or [])[-HISTORY_WINDOW:]
    previous_query = next(
        (
            turn.get("content", "")
            for turn in reversed(recent)
            if turn.get("role") == "user" and turn.get("content")
        ),
        None,
    )
    if not previous_query or len(query.split()) > FOLLOW_UP_MAX_WORDS:
        return query

    lexicon = lexicon or default_lexicon()
    category_list = as_categories(categories)
    previous = extract_intent(previous_query, category_list, locale, lexicon=lexicon)
    current = extract_intent(query, category_list, locale, lexicon=lexicon)

    if (
        current.core_query
        and previous.core_query
        and current.core_query != previous.core_query
        and lexicon.refinement_pattern.search(query)
    ):
        return f"{previous_query} {query}"
    if current.entities.city is None and previous.entities.city is not None:
        return f"{query} {lexicon.city_display(previous.entities.city, locale)}"
    return query


def to_payload(message: str, result: SearchResult) -> Dict[str, Any]:
    """Serialize a search for API clients: ids of all hits plus details of the top ones."""
    intent = result.intent
    return {
        "ok": True,
        "message": message,
        "resultIds": [item.candidate.id for item in result.results],
        "topResults": [
            _result_payload(item) for item in result.results[:PAYLOAD_TOP_RESULTS]
        ],
        "intent": {
            "type": intent.intent_type.value,
            "language": intent.language,
            "entities": intent.entities.as_dict(),
            "coreQuery": intent.core_query,
        },
        "totalResults": len(result.results),
    }


def _result_payload(item: ScoredCandidate) -> Dict[str, Any]:
    candidate = item.candidate
    return {
        "id": candidate.id,
        "name": {"en": candidate.name.en, "ar": candidate.name.ar},
        "city": candidate.city,
        "slug": candidate.slug,
        "username": candidate.username,
        "category": candidate.category,
        "isVerified": candidate.is_verified,
        "isSpecial": candidate.is_special,
        "score": round(item.score, 2),
        "matchReasons": item.reason_tags[:PAYLOAD_REASONS],
    }


def as_candidates(values: Iterable[CandidateInput]) -> List[CandidateRecord]:
    return [
        value if isinstance(value, CandidateRecord) else CandidateRecord.from_mapping(value)
        for value in values
        if isinstance(value, (CandidateRecord, Mapping))
    ]


def as_categories(values: Iterable[CategoryInput]) -> List[CategoryRecord]:
    return [
        value if isinstance(value, CategoryRecord) else CategoryRecord.from_mapping(value)
        for value in values
        if isinstance(value, (CategoryRecord, Mapping))
    ]
