"""Localized chat-style summaries of ranked search results."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

from smartsearch.lexicon import Lexicon, default_lexicon
from smartsearch.models import (
    CandidateRecord,
    CategoryRecord,
    IntentType,
    Locale,
    ReasonKind,
    ScoredCandidate,
    SearchIntent,
)
from smartsearch.nlp.normalize import normalize

MAX_LISTED = 5
SINGLE_SNIPPET_CHARS = 150
LIST_SNIPPET_CHARS = 100
CITY_TIP_MIN_RESULTS = 4

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "no_results": 'Sorry, I couldn\'t find results for "{query}" 😔\n\nTry searching {suggestions}.',
        "suggest_city": "in a different city",
        "suggest_keywords": "with different keywords",
        "suggest_category": "with a broader category",
        "suggest_attributes": "without the quality filters",
        "suggest_join": " or ",
        "one_result": "✅ Found 1 result{context}:\n\n",
        "many_results": "🔍 Found **{count}** businesses{context}.\n\n",
        "follow_up_results": "🔍 Here are **{count}** businesses for your follow-up{context}.\n\n",
        "recommend": "💡 Here are my recommendations{context}:\n\n",
        "top_results": "**Top results:**\n",
        "more_results": "\n📋 Plus {count} more results in the list below.",
        "city_tip": "\n\n💬 You can specify a city to narrow down results.",
        "verified": "✓ Verified",
        "special": "⭐ Special",
        "context_category": 'in "{name}" category',
        "context_city": "in {city}",
        "context_join": " and ",
        "reason_name": "Direct name match",
        "reason_related": "Related to your search",
        "reason_category": "Same category",
        "reason_city": "In the requested city",
    },
    "ar": {
        "no_results": 'عذراً، لم أجد نتائج لـ "{query}" 😔\n\nيمكنك تجربة البحث {suggestions}.',
        "suggest_city": "في مدينة أخرى",
        "suggest_keywords": "بكلمات مختلفة",
        "suggest_category": "بتصنيف عام أكثر",
        "suggest_attributes": "بدون شروط الجودة",
        "suggest_join": " أو ",
        "one_result": "✅ وجدت نتيجة واحدة{context}:\n\n",
        "many_results": "🔍 وجدت **{count}** نشاط تجاري{context}.\n\n",
        "follow_up_results": "🔍 إليك **{count}** نشاط تجاري حسب طلبك الأخير{context}.\n\n",
        "recommend": "💡 أنصحك بهذه الأنشطة التجارية{context}:\n\n",
        "top_results": "**أفضل النتائج:**\n",
        "more_results": "\n📋 و {count} نتيجة أخرى في القائمة أدناه.",
        "city_tip": "\n\n💬 يمكنك تحديد المدينة لتضييق النتائج.",
        "verified": "✓ موثق",
        "special": "⭐ مميز",
        "context_category": 'في تصنيف "{name}"',
        "context_city": "في {city}",
        "context_join": " و",
        "reason_name": "تطابق مباشر في الاسم",
        "reason_related": "مرتبط بالبحث",
        "reason_category": "نفس التصنيف",
        "reason_city": "في المدينة المطلوبة",
    },
}

# First reason present wins.
_REASON_PRIORITY = (
    ("reason_name", (ReasonKind.NAME_EXACT,)),
    ("reason_related", (ReasonKind.NAME_STEM, ReasonKind.NAME_FUZZY, ReasonKind.NAME_SYNONYM)),
    ("reason_category", (ReasonKind.CATEGORY_EXACT,)),
    ("reason_city", (ReasonKind.CITY_MATCH,)),
)


def compose(
    raw_query: str,
    ranked: Sequence[ScoredCandidate],
    intent: SearchIntent,
    categories: Sequence[CategoryRecord],
    locale: Locale,
    history: Optional[Sequence[Mapping[str, str]]] = None,
    lexicon: Optional[Lexicon] = None,
) -> str:
    """Render a localized summary of ``ranked`` for the chat surface."""
    messages = MESSAGES["ar" if locale == "ar" else "en"]
    lexicon = lexicon or default_lexicon()
    count = len(ranked)

    if count == 0:
        return messages["no_results"].format(
            query=raw_query or intent.raw,
            suggestions=messages["suggest_join"].join(_suggestions(intent, messages)),
        )

    context = _context(intent, categories, locale, lexicon, messages)
    if count == 1:
        return _single(ranked[0], context, locale, messages, lexicon)

    if intent.intent_type is IntentType.RECOMMEND:
        response = messages["recommend"].format(context=context)
    elif _is_follow_up(history):
        response = messages["follow_up_results"].format(count=count, context=context)
    else:
        response = messages["many_results"].format(count=count, context=context)

    response += messages["top_results"]
    for position, item in enumerate(ranked[:MAX_LISTED], start=1):
        candidate = item.candidate
        response += f"{position}. **{candidate.name.get(locale)}**{_badges(candidate)}"
        if candidate.city:
            response += f" - {_city_label(candidate.city, locale, lexicon)}"
        response += "\n"
        description = candidate.description.get(locale)
        if description:
            response += f"   {_snippet(description, LIST_SNIPPET_CHARS)}\n"

    if count > MAX_LISTED:
        response += messages["more_results"].format(count=count - MAX_LISTED)
    if intent.entities.city is None and count >= CITY_TIP_MIN_RESULTS:
        response += messages["city_tip"]
    return response


def describe_match(scored: ScoredCandidate, locale: Locale) -> str:
    """Short explanation of why a candidate matched, or ``""`` when nothing fired."""
    messages = MESSAGES["ar" if locale == "ar" else "en"]
    for key, kinds in _REASON_PRIORITY:
        if any(scored.has_reason(kind) for kind in kinds):
            return messages[key]
    return ""


def _single(
    item: ScoredCandidate,
    context: str,
    locale: Locale,
    messages: Dict[str, str],
    lexicon: Lexicon,
) -> str:
    candidate = item.candidate
    response = messages["one_result"].format(context=context)
    response += f"🏢 **{candidate.name.get(locale)}**"
    if candidate.city:
        response += f" - {_city_label(candidate.city, locale, lexicon)}"
    response += "\n"
    description = candidate.description.get(locale)
    if description:
        response += f"{_snippet(description, SINGLE_SNIPPET_CHARS)}\n"
    if candidate.is_verified:
        response += f"{messages['verified']} "
    if candidate.is_special:
        response += f"{messages['special']} "
    reason = describe_match(item, locale)
    if reason:
        response += f"\n💡 {reason}"
    return response


def _suggestions(intent: SearchIntent, messages: Dict[str, str]) -> List[str]:
    entities = intent.entities
    suggestions: List[str] = []
    if entities.city:
        suggestions.append(messages["suggest_city"])
    if intent.core_query:
        suggestions.append(messages["suggest_keywords"])
    if entities.category_id:
        suggestions.append(messages["suggest_category"])
    if entities.attributes:
        suggestions.append(messages["suggest_attributes"])
    return suggestions or [messages["suggest_keywords"]]


def _context(
    intent: SearchIntent,
    categories: Sequence[CategoryRecord],
    locale: Locale,
    lexicon: Lexicon,
    messages: Dict[str, str],
) -> str:
    parts: List[str] = []
    category_id = intent.entities.category_id
    if category_id is not None:
        category = next((item for item in categories if item.id == category_id), None)
        if category is not None:
            parts.append(messages["context_category"].format(name=category.name.get(locale)))
    if intent.entities.city:
        city = lexicon.city_display(intent.entities.city, locale)
        parts.append(messages["context_city"].format(city=city))
    if not parts:
        return ""
    return " " + messages["context_join"].join(parts)


def _city_label(city: str, locale: Locale, lexicon: Lexicon) -> str:
    """Localized display name for a known city, the stored text otherwise."""
    key = lexicon.cities.get(normalize(city))
    return lexicon.city_display(key, locale) if key else city


def _badges(candidate: CandidateRecord) -> str:
    badges: List[str] = []
    if candidate.is_verified:
        badges.append("✓")
    if candidate.is_special:
        badges.append("⭐")
    return f" {' '.join(badges)}" if badges else ""


def _snippet(text: str, limit: int) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."


def _is_follow_up(history: Optional[Sequence[Mapping[str, str]]]) -> bool:
    return any(turn.get("role") == "assistant" for turn in history or ())
