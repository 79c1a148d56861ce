from __future__ import annotations

import re
from typing import List, Sequence

from smartsearch.models import (
    CandidateRecord,
    CategoryRecord,
    LocalizedText,
    MatchReason,
    ReasonKind,
    ScoredCandidate,
)
from smartsearch.services.engine import extract_intent
from smartsearch.services.response import compose, describe_match

CATEGORIES = [CategoryRecord("cat-cafes", "cafes", LocalizedText("Cafes", "مقاهي"))]


def _blue_cafe(*reasons: MatchReason) -> ScoredCandidate:
    candidate = CandidateRecord(
        id="biz-blue-cafe",
        name=LocalizedText("Blue Cafe", "مقهى الأزرق"),
        description=LocalizedText("Specialty coffee on the corniche", "قهوة مختصة على الكورنيش"),
        city="Muscat",
        is_verified=True,
    )
    return ScoredCandidate(candidate=candidate, score=50.0, reasons=reasons)


def _many(count: int) -> List[ScoredCandidate]:
    return [
        ScoredCandidate(
            candidate=CandidateRecord(id=f"shop-{index}", name=LocalizedText(f"Shop {index}", f"متجر {index}")),
            score=float(count - index),
        )
        for index in range(1, count + 1)
    ]


def _compose(query: str, ranked: Sequence[ScoredCandidate], locale: str = "en", **kwargs) -> str:
    intent = extract_intent(query, CATEGORIES)
    return compose(query, ranked, intent, CATEGORIES, locale, **kwargs)  # type: ignore[arg-type]


def test_no_results_suggests_different_keywords() -> None:
    message = _compose("zzzxxxqqq123", [])
    assert 'couldn\'t find results for "zzzxxxqqq123"' in message
    assert "with different keywords" in message


def test_no_results_suggestions_follow_extracted_entities() -> None:
    message = _compose("verified cafes in muscat", [])
    assert "in a different city or with a broader category or without the quality filters" in message
    assert "different keywords" not in message


def test_arabic_no_results_is_fully_arabic() -> None:
    message = _compose("مطعم غريب جدا", [], "ar")
    assert "عذراً" in message
    assert "بكلمات مختلفة" in message
    assert not re.search("[A-Za-z]", message)


def test_single_result_english() -> None:
    message = _compose("blue cafe in muscat", [_blue_cafe(MatchReason(ReasonKind.NAME_EXACT, "blue"))])
    assert message.startswith('✅ Found 1 result in "Cafes" category and in Muscat:')
    assert "**Blue Cafe** - Muscat" in message
    assert "Specialty coffee on the corniche" in message
    assert "✓ Verified" in message
    assert "Direct name match" in message


def test_single_result_arabic() -> None:
    message = _compose("مقهى الأزرق في مسقط", [_blue_cafe(MatchReason(ReasonKind.NAME_EXACT, "مقهي"))], "ar")
    assert message.startswith("✅ وجدت نتيجة واحدة في مسقط:")
    assert "**مقهى الأزرق**" in message
    assert "**مقهى الأزرق** - مسقط" in message
    assert "Muscat" not in message
    assert "قهوة مختصة" in message
    assert "✓ موثق" in message
    assert "تطابق مباشر في الاسم" in message


def test_single_result_snippet_is_truncated() -> None:
    candidate = CandidateRecord(id="long", name=LocalizedText("Long"), description=LocalizedText("x" * 200))
    message = _compose("long", [ScoredCandidate(candidate=candidate, score=1.0)])
    assert "x" * 150 + "..." in message
    assert "x" * 151 not in message


def test_many_results_lists_top_five() -> None:
    message = _compose("shops", _many(7))
    assert "Found **7** businesses" in message
    assert "1. **Shop 1**" in message
    assert "5. **Shop 5**" in message
    assert "Shop 6" not in message
    assert "Plus 2 more results" in message
    assert "specify a city" in message


def test_many_results_arabic() -> None:
    message = _compose("متاجر", _many(7), "ar")
    assert "وجدت **7** نشاط تجاري" in message
    assert "1. **متجر 1**" in message
    assert "و 2 نتيجة أخرى" in message


def test_many_results_with_category_and_city_context() -> None:
    message = _compose("cafes in muscat", _many(2))
    assert 'Found **2** businesses in "Cafes" category and in Muscat.' in message
    assert "specify a city" not in message
    assert "more results" not in message


def test_recommend_intent_phrasing() -> None:
    message = _compose("recommend shops", _many(3))
    assert message.startswith("💡 Here are my recommendations")


def test_follow_up_phrasing_when_history_has_an_answer() -> None:
    history = [
        {"role": "user", "content": "shops in muscat"},
        {"role": "assistant", "content": "Found 3 businesses"},
    ]
    message = _compose("shops", _many(3), history=history)
    assert "for your follow-up" in message


def test_describe_match_priority() -> None:
    assert describe_match(
        _blue_cafe(MatchReason(ReasonKind.CITY_MATCH), MatchReason(ReasonKind.NAME_FUZZY, "blu")), "en"
    ) == "Related to your search"
    assert describe_match(
        _blue_cafe(MatchReason(ReasonKind.CITY_MATCH), MatchReason(ReasonKind.CATEGORY_EXACT)), "ar"
    ) == "نفس التصنيف"
    assert describe_match(_blue_cafe(MatchReason(ReasonKind.CITY_MATCH)), "en") == "In the requested city"
    assert describe_match(_blue_cafe(), "en") == ""


def test_listed_cities_are_localized_when_known() -> None:
    ranked = [
        ScoredCandidate(
            candidate=CandidateRecord(id="a", name=LocalizedText("Sohar Grill", "مشويات صحار"), city="Sohar"),
            score=2.0,
        ),
        ScoredCandidate(
            candidate=CandidateRecord(id="b", name=LocalizedText("Island Cafe", "مقهى الجزيرة"), city="Atlantis"),
            score=1.0,
        ),
    ]
    arabic = _compose("مطاعم", ranked, "ar")
    assert "**مشويات صحار** - صحار" in arabic
    assert "**مقهى الجزيرة** - Atlantis" in arabic

    english = _compose("grill", ranked)
    assert "**Sohar Grill** - Sohar" in english
