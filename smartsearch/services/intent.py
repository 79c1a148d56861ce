"""Rule-table intent classification."""

from __future__ import annotations

from typing import Iterable

from smartsearch.lexicon import IntentRule
from smartsearch.models import IntentType


def classify(raw_query: str, rules: Iterable[IntentRule]) -> IntentType:
    """Return the intent of the first rule matching the raw query, ``find`` otherwise."""
    for rule in rules:
        if rule.matches(raw_query):
            return rule.intent_type
    return IntentType.FIND
