"""Single-pass extraction of city, category and quality attributes from query tokens."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from smartsearch.lexicon import Lexicon
from smartsearch.models import CategoryRecord, Entities, Language
from smartsearch.nlp.fuzzy import MIN_FUZZY_LENGTH, fuzzy_score
from smartsearch.nlp.normalize import normalize, stem_ar, stem_en, strip_definite_article
from smartsearch.nlp.tokenize import is_stopword

CATEGORY_FUZZY_THRESHOLD = 0.75


def extract(
    tokens: Sequence[str],
    categories: Iterable[CategoryRecord],
    lexicon: Lexicon,
    language: Language,
) -> Tuple[Entities, List[str]]:
    """Split tokens into entities and the residual core-query tokens.

    One left-to-right pass: the first city and the first category win,
    attributes accumulate, and non-stop-word leftovers form the core query.
    """
    category_list = list(categories)
    city: Optional[str] = None
    category_id: Optional[str] = None
    attributes: List[str] = []
    core_tokens: List[str] = []

    for token in tokens:
        stop = is_stopword(token, language)

        if city is None:
            matched_city = lexicon.cities.get(token) or lexicon.cities.get(strip_definite_article(token))
            if matched_city is not None:
                city = matched_city
                continue

        attribute = lexicon.attributes.get(token)
        if attribute is not None:
            if attribute not in attributes:
                attributes.append(attribute)
            continue

        if category_id is None:
            category = match_category(token, category_list, allow_fuzzy=not stop)
            if category is not None:
                category_id = category.id
                continue

        if not stop:
            core_tokens.append(token)

    entities = Entities(city=city, category_id=category_id, attributes=tuple(attributes))
    return entities, core_tokens


def match_category(
    token: str,
    categories: Sequence[CategoryRecord],
    *,
    allow_fuzzy: bool = True,
) -> Optional[CategoryRecord]:
    """Return the first category whose name or slug matches the token."""
    for category in categories:
        if _category_matches(token, category, allow_fuzzy=allow_fuzzy):
            return category
    return None


def _category_matches(token: str, category: CategoryRecord, *, allow_fuzzy: bool) -> bool:
    name_ar = normalize(category.name.ar)
    name_en = normalize(category.name.en)
    slug = normalize(category.slug)
    if token in {name_ar, name_en, slug} - {""}:
        return True
    if name_ar:
        if strip_definite_article(token) == strip_definite_article(name_ar):
            return True
        if stem_ar(token) == stem_ar(name_ar):
            return True
    if name_en and stem_en(token) == stem_en(name_en):
        return True
    if not allow_fuzzy or len(token) < MIN_FUZZY_LENGTH:
        return False
    return any(
        fuzzy_score(token, name) > CATEGORY_FUZZY_THRESHOLD for name in (name_ar, name_en) if name
    )
