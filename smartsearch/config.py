"""Typed configuration for the search engine and its hosts."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoreWeights(BaseModel):
    """Named weights for every scoring signal.

    Within the name, description and tag fields an exact hit must outweigh a
    stemmed hit, which must outweigh a fuzzy hit, which must outweigh a
    synonym hit.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name_exact: float = 30.0
    name_stem: float = 15.0
    name_fuzzy: float = 10.5
    name_synonym: float = 10.0
    description_exact: float = 8.0
    description_stem: float = 4.8
    description_synonym: float = 4.0
    tag_exact: float = 10.0
    tag_fuzzy: float = 7.0
    tag_synonym: float = 5.0
    category_text: float = 10.0
    category_exact: float = 20.0
    city: float = 15.0
    attribute: float = 5.0
    verified: float = 2.0
    special: float = 2.0
    featured: float = 1.0
    empty_query_verified: float = 1.0

    @model_validator(mode="after")
    def _check_ordering(self) -> "ScoreWeights":
        ladders = {
            "name": (self.name_exact, self.name_stem, self.name_fuzzy, self.name_synonym),
            "description": (self.description_exact, self.description_stem, self.description_synonym),
            "tag": (self.tag_exact, self.tag_fuzzy, self.tag_synonym),
        }
        for field_name, ladder in ladders.items():
            if any(stronger <= weaker for stronger, weaker in zip(ladder, ladder[1:])):
                raise ValueError(f"{field_name} weights must strictly decrease: {ladder}")
        if self.empty_query_verified < 0:
            raise ValueError("empty_query_verified must be non-negative")
        return self


DEFAULT_WEIGHTS = ScoreWeights()


class Settings(BaseSettings):
    directory_path: Path = Field(default=Path("directory.yaml"), alias="SMART_SEARCH_DIRECTORY")
    lexicon_path: Path | None = Field(default=None, alias="SMART_SEARCH_LEXICON")
    max_query_chars: int = Field(default=200, alias="SMART_SEARCH_MAX_QUERY_CHARS")
    default_limit: int = Field(default=20, alias="SMART_SEARCH_DEFAULT_LIMIT")
    weights: ScoreWeights = Field(default_factory=ScoreWeights, alias="SMART_SEARCH_WEIGHTS")
    server_name: str = Field(default="Smart Directory Search", alias="SEARCH_SERVER_NAME")
    log_level: str = Field(default="INFO", alias="SMART_SEARCH_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
        populate_by_name=True,
    )


settings = Settings()
