"""Immutable lookup tables shared by every stage of the search pipeline.

A :class:`Lexicon` is compiled once from plain vocabulary tables and then only
read, so any number of concurrent searches can share one instance. Tests and
hosts may build their own, smaller or extended, lexicons and pass them in.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Sequence, Set, Tuple

import yaml

from smartsearch.errors import LexiconConfigError
from smartsearch.models import IntentType, Locale
from smartsearch.nlp.normalize import normalize, stem
from smartsearch.vocabulary import (
    ATTRIBUTE_KEYWORDS,
    CITY_NAMES,
    INTENT_PATTERNS,
    REFINEMENT_PATTERN,
    SYNONYM_GROUPS,
)

logger = logging.getLogger(__name__)

ATTRIBUTE_TAGS: FrozenSet[str] = frozenset({"verified", "special", "featured", "new", "open"})


@dataclass(frozen=True)
class IntentRule:
    pattern: re.Pattern[str]
    intent_type: IntentType

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


@dataclass(frozen=True)
class Lexicon:
    synonyms: Mapping[str, FrozenSet[str]]
    synonym_stems: Mapping[str, Tuple[str, ...]]
    cities: Mapping[str, str]
    city_variants: Mapping[str, Tuple[str, ...]]
    attributes: Mapping[str, str]
    intent_rules: Tuple[IntentRule, ...]
    refinement_pattern: re.Pattern[str]

    def city_display(self, city: str, locale: Locale) -> str:
        """Human-readable city name: first spelling for English, second for Arabic."""
        variants = self.city_variants.get(city, ())
        index = 1 if locale == "ar" else 0
        if len(variants) > index:
            return variants[index]
        return variants[0] if variants else city

    def normalized_city_variants(self, city: str) -> Tuple[str, ...]:
        variants = self.city_variants.get(city) or (city,)
        return tuple(normalize(variant) for variant in variants)


def build_lexicon(
    synonym_groups: Iterable[Sequence[str]] = SYNONYM_GROUPS,
    city_names: Mapping[str, Sequence[str]] = CITY_NAMES,
    attribute_keywords: Mapping[str, Sequence[str]] = ATTRIBUTE_KEYWORDS,
    intent_patterns: Iterable[Tuple[str, str]] = INTENT_PATTERNS,
    refinement_pattern: str = REFINEMENT_PATTERN,
) -> Lexicon:
    synonyms: Dict[str, Set[str]] = defaultdict(set)
    for group in synonym_groups:
        members = [normalize(word) for word in group if word]
        for word in members:
            synonyms[word].update(other for other in members if other != word)

    stems: Dict[str, List[str]] = defaultdict(list)
    for key in synonyms:
        stems[stem(key)].append(key)

    cities: Dict[str, str] = {}
    city_variants: Dict[str, Tuple[str, ...]] = {}
    for canonical, variants in city_names.items():
        key = normalize(canonical)
        city_variants[key] = tuple(variants)
        cities.setdefault(key, key)
        for variant in variants:
            cities.setdefault(normalize(variant), key)

    attributes: Dict[str, str] = {}
    for attribute, keywords in attribute_keywords.items():
        if attribute not in ATTRIBUTE_TAGS:
            raise LexiconConfigError(f"Unknown attribute tag: {attribute}")
        for keyword in keywords:
            attributes.setdefault(normalize(keyword), attribute)

    return Lexicon(
        synonyms=MappingProxyType({word: frozenset(group) for word, group in synonyms.items()}),
        synonym_stems=MappingProxyType({key: tuple(words) for key, words in stems.items()}),
        cities=MappingProxyType(cities),
        city_variants=MappingProxyType(city_variants),
        attributes=MappingProxyType(attributes),
        intent_rules=tuple(_compile_rule(pattern, name) for pattern, name in intent_patterns),
        refinement_pattern=re.compile(refinement_pattern, re.IGNORECASE),
    )


def _compile_rule(pattern: str, intent_name: str) -> IntentRule:
    try:
        intent_type = IntentType(intent_name)
    except ValueError as exc:
        raise LexiconConfigError(f"Unknown intent type: {intent_name}") from exc
    try:
        compiled = re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        raise LexiconConfigError(f"Invalid intent pattern {pattern!r}: {exc}") from exc
    return IntentRule(pattern=compiled, intent_type=intent_type)


def load_lexicon(path: Path) -> Lexicon:
    """Build a lexicon from the built-in tables extended by a YAML file.

    The file may define ``synonyms`` (list of groups), ``cities`` (canonical
    name to spellings), ``attributes`` (tag to keywords) and ``intents``
    (list of ``{pattern, type}``). Extra intent rules are checked before the
    built-in ones.
    """
    if not path.exists():
        raise LexiconConfigError(f"Lexicon file not found: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise LexiconConfigError(f"Invalid lexicon YAML in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise LexiconConfigError(f"Lexicon file must contain a mapping: {path}")

    groups = [list(group) for group in SYNONYM_GROUPS]
    for group in _as_list(raw.get("synonyms"), "synonyms"):
        groups.append([str(word) for word in _as_list(group, "synonym group")])

    cities = {name: list(variants) for name, variants in CITY_NAMES.items()}
    for name, variants in _as_mapping(raw.get("cities"), "cities").items():
        cities.setdefault(str(name), []).extend(str(v) for v in _as_list(variants, "city variants"))

    attributes = {name: list(words) for name, words in ATTRIBUTE_KEYWORDS.items()}
    for name, words in _as_mapping(raw.get("attributes"), "attributes").items():
        attributes.setdefault(str(name), []).extend(str(w) for w in _as_list(words, "attribute keywords"))

    patterns: List[Tuple[str, str]] = []
    for entry in _as_list(raw.get("intents"), "intents"):
        try:
            patterns.append((str(entry["pattern"]), str(entry["type"])))
        except (KeyError, TypeError) as exc:
            raise LexiconConfigError(f"Invalid intent rule: {entry}") from exc
    patterns.extend(INTENT_PATTERNS)

    lexicon = build_lexicon(groups, cities, attributes, patterns)
    logger.info(
        "lexicon_loaded",
        extra={
            "path": str(path),
            "synonyms": len(lexicon.synonyms),
            "cities": len(lexicon.city_variants),
            "intent_rules": len(lexicon.intent_rules),
        },
    )
    return lexicon


def _as_list(value: Any, label: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise LexiconConfigError(f"Lexicon '{label}' must be a list")
    return value


def _as_mapping(value: Any, label: str) -> Dict[Any, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise LexiconConfigError(f"Lexicon '{label}' must be a mapping")
    return value


@lru_cache(maxsize=1)
def default_lexicon() -> Lexicon:
    return build_lexicon()
