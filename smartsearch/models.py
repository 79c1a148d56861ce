"""Immutable records passed through the search pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

Language = Literal["ar", "en", "mixed"]
Locale = Literal["en", "ar"]


class IntentType(str, Enum):
    FIND = "find"
    RECOMMEND = "recommend"
    COMPARE = "compare"
    INFO = "info"
    BROWSE = "browse"


class ReasonKind(str, Enum):
    """Closed vocabulary of scoring signals, serialized as ``field:signal``."""

    NAME_EXACT = "name:exact"
    NAME_STEM = "name:stem"
    NAME_FUZZY = "name:fuzzy"
    NAME_SYNONYM = "name:synonym"
    DESCRIPTION_EXACT = "desc:exact"
    DESCRIPTION_STEM = "desc:stem"
    DESCRIPTION_SYNONYM = "desc:synonym"
    TAG_EXACT = "tag:exact"
    TAG_FUZZY = "tag:fuzzy"
    TAG_SYNONYM = "tag:synonym"
    CATEGORY_TEXT = "cat-text"
    CATEGORY_EXACT = "category:exact"
    CITY_MATCH = "city:match"
    ATTR_VERIFIED = "attr:verified"
    ATTR_SPECIAL = "attr:special"
    ATTR_FEATURED = "attr:featured"


@dataclass(frozen=True)
class MatchReason:
    kind: ReasonKind
    token: Optional[str] = None

    @property
    def tag(self) -> str:
        if self.token is None:
            return self.kind.value
        return f"{self.kind.value}:{self.token}"

    def __str__(self) -> str:
        return self.tag


@dataclass(frozen=True)
class LocalizedText:
    en: str = ""
    ar: str = ""

    def get(self, locale: Locale) -> str:
        """Return the text for ``locale``, falling back to the other language."""
        primary, secondary = (self.ar, self.en) if locale == "ar" else (self.en, self.ar)
        return primary or secondary

    @classmethod
    def from_value(cls, value: Any) -> "LocalizedText":
        if isinstance(value, LocalizedText):
            return value
        if isinstance(value, str):
            return cls(en=value, ar=value)
        if not isinstance(value, Mapping):
            return cls()
        return cls(en=_as_text(value.get("en")), ar=_as_text(value.get("ar")))


@dataclass(frozen=True)
class CategoryRecord:
    id: str
    slug: str = ""
    name: LocalizedText = field(default_factory=LocalizedText)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CategoryRecord":
        return cls(
            id=_as_text(data.get("id")),
            slug=_as_text(data.get("slug")),
            name=LocalizedText.from_value(data.get("name")),
        )


@dataclass(frozen=True)
class CandidateRecord:
    """A directory listing as delivered by the host; never mutated by the engine."""

    id: str
    name: LocalizedText = field(default_factory=LocalizedText)
    description: LocalizedText = field(default_factory=LocalizedText)
    slug: str = ""
    username: Optional[str] = None
    category_id: Optional[str] = None
    category: str = ""
    city: str = ""
    tags: Tuple[str, ...] = ()
    is_approved: bool = False
    is_verified: bool = False
    is_special: bool = False
    homepage_featured: bool = False
    homepage_top: bool = False

    @property
    def is_featured(self) -> bool:
        return self.homepage_featured or self.homepage_top

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CandidateRecord":
        """Build a record from host data, treating absent or malformed optional fields as empty."""
        raw_tags = data.get("tags")
        tags: Tuple[str, ...] = ()
        if isinstance(raw_tags, (list, tuple)):
            tags = tuple(tag for tag in raw_tags if isinstance(tag, str) and tag.strip())
        category_id = data.get("categoryId")
        username = data.get("username")
        return cls(
            id=_as_text(data.get("id")),
            name=LocalizedText.from_value(data.get("name")),
            description=LocalizedText.from_value(data.get("description")),
            slug=_as_text(data.get("slug")),
            username=username if isinstance(username, str) and username else None,
            category_id=str(category_id) if category_id not in (None, "") else None,
            category=_as_text(data.get("category")),
            city=_as_text(data.get("city")),
            tags=tags,
            is_approved=data.get("isApproved") is True,
            is_verified=data.get("isVerified") is True,
            is_special=data.get("isSpecial") is True,
            homepage_featured=data.get("homepageFeatured") is True,
            homepage_top=data.get("homepageTop") is True,
        )


@dataclass(frozen=True)
class Entities:
    city: Optional[str] = None
    category_id: Optional[str] = None
    attributes: Tuple[str, ...] = ()
    tags: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.city is None and self.category_id is None and not self.attributes

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"tags": list(self.tags), "attributes": list(self.attributes)}
        if self.city is not None:
            payload["city"] = self.city
        if self.category_id is not None:
            payload["category"] = self.category_id
        return payload


@dataclass(frozen=True)
class SearchIntent:
    raw: str
    tokens: Tuple[str, ...]
    language: Language
    entities: Entities
    core_query: str
    intent_type: IntentType

    @property
    def core_tokens(self) -> List[str]:
        return self.core_query.split()


@dataclass(frozen=True)
class ScoredCandidate:
    candidate: CandidateRecord
    score: float
    reasons: Tuple[MatchReason, ...] = ()

    @property
    def reason_tags(self) -> List[str]:
        return [reason.tag for reason in self.reasons]

    def has_reason(self, kind: ReasonKind) -> bool:
        return any(reason.kind is kind for reason in self.reasons)


@dataclass(frozen=True)
class SearchResult:
    results: List[ScoredCandidate]
    intent: SearchIntent


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)
