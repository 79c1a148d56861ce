from __future__ import annotations

from pathlib import Path

import pytest

from smartsearch.errors import LexiconConfigError
from smartsearch.lexicon import build_lexicon, default_lexicon, load_lexicon
from smartsearch.models import IntentType, Locale
from smartsearch.nlp.normalize import normalize
from smartsearch.services.intent import classify


def test_default_lexicon_is_shared() -> None:
    assert default_lexicon() is default_lexicon()


def test_synonyms_are_bidirectional() -> None:
    lexicon = default_lexicon()
    assert "coffee" in lexicon.synonyms["قهوه"]
    assert "قهوه" in lexicon.synonyms["coffee"]
    for word, group in lexicon.synonyms.items():
        assert word not in group
        for other in group:
            assert word in lexicon.synonyms[other]


def test_synonyms_are_not_transitive_across_groups() -> None:
    lexicon = default_lexicon()
    assert "electronics" in lexicon.synonyms[normalize("كهربائي")]
    assert "electrician" in lexicon.synonyms[normalize("كهربائي")]
    assert "electrician" not in lexicon.synonyms["electronics"]


def test_city_variants_map_to_canonical_name() -> None:
    lexicon = default_lexicon()
    assert lexicon.cities["مسقط"] == "muscat"
    assert lexicon.cities["muscat"] == "muscat"
    assert lexicon.cities["صلاله"] == "salalah"
    assert lexicon.cities["الرستاق"] == "rustaq"


@pytest.mark.parametrize(("locale", "expected"), [("en", "Muscat"), ("ar", "مسقط")])
def test_city_display(locale: Locale, expected: str) -> None:
    assert default_lexicon().city_display("muscat", locale) == expected


def test_city_display_falls_back_to_key() -> None:
    assert default_lexicon().city_display("atlantis", "ar") == "atlantis"


def test_attribute_keywords() -> None:
    lexicon = default_lexicon()
    assert lexicon.attributes["موثق"] == "verified"
    assert lexicon.attributes["vip"] == "special"
    assert lexicon.attributes["popular"] == "featured"


def test_lexicon_tables_are_read_only() -> None:
    lexicon = default_lexicon()
    with pytest.raises(TypeError):
        lexicon.cities["atlantis"] = "atlantis"  # type: ignore[index]


def test_build_lexicon_rejects_unknown_attribute() -> None:
    with pytest.raises(LexiconConfigError):
        build_lexicon(attribute_keywords={"cheap": ["cheap"]})


def test_build_lexicon_rejects_bad_intent_rules() -> None:
    with pytest.raises(LexiconConfigError):
        build_lexicon(intent_patterns=[("offers", "haggle")])
    with pytest.raises(LexiconConfigError):
        build_lexicon(intent_patterns=[("(unclosed", "find")])


def test_load_lexicon_extends_builtin_tables(tmp_path: Path) -> None:
    lexicon_path = tmp_path / "lexicon.yaml"
    lexicon_path.write_text(
        "\n".join(
            [
                "synonyms:",
                "  - [shawarma, شاورما]",
                "cities:",
                "  sinaw: [Sinaw, سناو]",
                "attributes:",
                "  verified: [certified]",
                "intents:",
                "  - pattern: 'offers|عروض'",
                "    type: browse",
            ]
        ),
        encoding="utf-8",
    )

    lexicon = load_lexicon(lexicon_path)

    assert "شاورما" in lexicon.synonyms["shawarma"]
    assert "coffee" in lexicon.synonyms["cafe"]
    assert lexicon.cities["سناو"] == "sinaw"
    assert lexicon.city_display("sinaw", "ar") == "سناو"
    assert lexicon.attributes["certified"] == "verified"
    assert lexicon.attributes["موثق"] == "verified"
    assert classify("any offers to compare", lexicon.intent_rules) is IntentType.BROWSE
    assert classify("compare two cafes", lexicon.intent_rules) is IntentType.COMPARE


def test_load_lexicon_missing_file(tmp_path: Path) -> None:
    with pytest.raises(LexiconConfigError):
        load_lexicon(tmp_path / "missing.yaml")


def test_load_lexicon_rejects_malformed_sections(tmp_path: Path) -> None:
    lexicon_path = tmp_path / "lexicon.yaml"
    lexicon_path.write_text("synonyms: shawarma\n", encoding="utf-8")
    with pytest.raises(LexiconConfigError):
        load_lexicon(lexicon_path)

    lexicon_path.write_text("intents:\n  - pattern: offers\n", encoding="utf-8")
    with pytest.raises(LexiconConfigError):
        load_lexicon(lexicon_path)
