"""Multi-signal relevance scoring of directory candidates against a search intent."""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple

from smartsearch.config import DEFAULT_WEIGHTS, ScoreWeights
from smartsearch.lexicon import Lexicon, default_lexicon
from smartsearch.models import (
    CandidateRecord,
    MatchReason,
    ReasonKind,
    ScoredCandidate,
    SearchIntent,
)
from smartsearch.nlp.fuzzy import fuzzy_score
from smartsearch.nlp.normalize import normalize, stem, strip_definite_article
from smartsearch.nlp.tokenize import tokenize
from smartsearch.services.synonyms import synonyms

FUZZY_MATCH_THRESHOLD = 0.65
# Synonyms this short ("ac", "it") only match whole tokens, never substrings.
MIN_SUBSTRING_SYNONYM = 3

_ATTRIBUTE_REASONS = {
    "verified": ReasonKind.ATTR_VERIFIED,
    "special": ReasonKind.ATTR_SPECIAL,
    "featured": ReasonKind.ATTR_FEATURED,
}


@dataclass(frozen=True)
class _QueryTerm:
    token: str
    stem: str
    bare: str
    synonyms: FrozenSet[str]


@dataclass(frozen=True)
class _FieldText:
    texts: Tuple[str, ...]
    tokens: Tuple[str, ...]

    @classmethod
    def of(cls, *values: str) -> "_FieldText":
        texts = tuple(normalize(value) for value in values if value)
        tokens = tuple(strip_definite_article(token) for value in values for token in tokenize(value))
        return cls(texts=texts, tokens=tokens)

    def contains(self, word: str) -> bool:
        return any(word in text for text in self.texts)

    def has_stem(self, term: _QueryTerm) -> bool:
        return any(stem(token) == term.stem or token == term.bare for token in self.tokens)

    def has_fuzzy(self, term: _QueryTerm) -> bool:
        return any(fuzzy_score(term.bare, token) > FUZZY_MATCH_THRESHOLD for token in self.tokens)

    def has_synonym(self, term: _QueryTerm) -> bool:
        for synonym in term.synonyms:
            if len(synonym) >= MIN_SUBSTRING_SYNONYM and self.contains(synonym):
                return True
            bare = strip_definite_article(synonym)
            synonym_stem = stem(synonym)
            if any(token == bare or stem(token) == synonym_stem for token in self.tokens):
                return True
        return False


class Scorer:
    """Scores candidates for one search intent; build one per query."""

    def __init__(
        self,
        intent: SearchIntent,
        lexicon: Optional[Lexicon] = None,
        weights: Optional[ScoreWeights] = None,
    ) -> None:
        self.intent = intent
        self.lexicon = lexicon or default_lexicon()
        self.weights = weights or DEFAULT_WEIGHTS
        self.terms = tuple(self._term(token) for token in intent.core_tokens)
        self.city_variants: Tuple[str, ...] = ()
        if intent.entities.city:
            self.city_variants = self.lexicon.normalized_city_variants(intent.entities.city)

    def _term(self, token: str) -> _QueryTerm:
        return _QueryTerm(
            token=token,
            stem=stem(token),
            bare=strip_definite_article(token),
            synonyms=synonyms(token, self.lexicon),
        )

    @property
    def is_bare_query(self) -> bool:
        return not self.terms and self.intent.entities.is_empty

    def score(self, candidate: CandidateRecord) -> ScoredCandidate:
        weights = self.weights
        if self.is_bare_query:
            base = weights.empty_query_verified if candidate.is_verified else 0.0
            return ScoredCandidate(candidate=candidate, score=base)

        total = 0.0
        reasons: List[MatchReason] = []

        def fire(weight: float, kind: ReasonKind, token: Optional[str] = None) -> None:
            nonlocal total
            total += weight
            reasons.append(MatchReason(kind, token))

        name = _FieldText.of(candidate.name.ar, candidate.name.en)
        description = _FieldText.of(candidate.description.ar, candidate.description.en)
        tags = tuple(tag for tag in (normalize(raw) for raw in candidate.tags) if tag.strip())
        category_text = normalize(candidate.category)

        for term in self.terms:
            token = term.token
            if name.contains(token):
                fire(weights.name_exact, ReasonKind.NAME_EXACT, token)
            elif name.has_stem(term):
                fire(weights.name_stem, ReasonKind.NAME_STEM, token)
            elif name.has_fuzzy(term):
                fire(weights.name_fuzzy, ReasonKind.NAME_FUZZY, token)
            elif name.has_synonym(term):
                fire(weights.name_synonym, ReasonKind.NAME_SYNONYM, token)

            if description.contains(token):
                fire(weights.description_exact, ReasonKind.DESCRIPTION_EXACT, token)
            else:
                if description.has_stem(term):
                    fire(weights.description_stem, ReasonKind.DESCRIPTION_STEM, token)
                if description.has_synonym(term):
                    fire(weights.description_synonym, ReasonKind.DESCRIPTION_SYNONYM, token)

            tag_kind = _match_tags(term, tags)
            if tag_kind is ReasonKind.TAG_EXACT:
                fire(weights.tag_exact, tag_kind, token)
            elif tag_kind is ReasonKind.TAG_FUZZY:
                fire(weights.tag_fuzzy, tag_kind, token)
            elif tag_kind is ReasonKind.TAG_SYNONYM:
                fire(weights.tag_synonym, tag_kind, token)

            if category_text and (
                token in category_text or fuzzy_score(token, category_text) > FUZZY_MATCH_THRESHOLD
            ):
                fire(weights.category_text, ReasonKind.CATEGORY_TEXT, token)

        entities = self.intent.entities
        if entities.category_id is not None and candidate.category_id == entities.category_id:
            fire(weights.category_exact, ReasonKind.CATEGORY_EXACT)

        if self.city_variants and _city_matches(candidate.city, self.city_variants):
            fire(weights.city, ReasonKind.CITY_MATCH)

        for attribute in entities.attributes:
            kind = _ATTRIBUTE_REASONS.get(attribute)
            if kind is not None and _has_attribute(candidate, attribute):
                fire(weights.attribute, kind)

        # Quality flags only reorder listings that matched something.
        if reasons:
            if candidate.is_verified:
                total += weights.verified
            if candidate.is_special:
                total += weights.special
            if candidate.is_featured:
                total += weights.featured

        return ScoredCandidate(candidate=candidate, score=total, reasons=tuple(reasons))


def score(
    candidate: CandidateRecord,
    intent: SearchIntent,
    lexicon: Optional[Lexicon] = None,
    weights: Optional[ScoreWeights] = None,
) -> ScoredCandidate:
    return Scorer(intent, lexicon, weights).score(candidate)


def score_all(
    candidates: Iterable[CandidateRecord],
    intent: SearchIntent,
    lexicon: Optional[Lexicon] = None,
    weights: Optional[ScoreWeights] = None,
) -> List[ScoredCandidate]:
    scorer = Scorer(intent, lexicon, weights)
    return [scorer.score(candidate) for candidate in candidates]


def _match_tags(term: _QueryTerm, tags: Sequence[str]) -> Optional[ReasonKind]:
    """Strongest tag signal for the term across all tags."""
    token = term.token
    if any(tag in token or token in tag for tag in tags):
        return ReasonKind.TAG_EXACT
    if any(
        fuzzy_score(token, tag) > FUZZY_MATCH_THRESHOLD or stem(tag) == term.stem for tag in tags
    ):
        return ReasonKind.TAG_FUZZY
    for synonym in term.synonyms:
        for tag in tags:
            if synonym == tag or (len(synonym) >= MIN_SUBSTRING_SYNONYM and synonym in tag):
                return ReasonKind.TAG_SYNONYM
    return None


def _city_matches(city: str, variants: Sequence[str]) -> bool:
    normalized = normalize(city)
    if not normalized:
        return False
    return any(variant and variant in normalized for variant in variants)


def _has_attribute(candidate: CandidateRecord, attribute: str) -> bool:
    if attribute == "verified":
        return candidate.is_verified
    if attribute == "special":
        return candidate.is_special
    if attribute == "featured":
        return candidate.is_featured
    return False
