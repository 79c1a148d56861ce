from __future__ import annotations

import pytest

import server


def test_search_directory_tool_returns_payload() -> None:
    payload = server.search_directory("verified restaurants in Muscat", "en")
    assert payload["ok"] is True
    assert payload["resultIds"] == [
        "biz-al-bahar",
        "biz-blue-cafe",
        "biz-salalah-kitchen",
        "biz-nizwa-pharmacy",
    ]
    top = payload["topResults"][0]
    assert "attr:verified" in top["matchReasons"]
    assert payload["intent"]["entities"]["attributes"] == ["verified"]
    assert payload["message"].startswith('🔍 Found **4** businesses in "Restaurants" category and in Muscat.')


def test_search_directory_tool_handles_unknown_locale_and_no_hits() -> None:
    payload = server.search_directory("zzzxxxqqq123", "fr")
    assert payload["resultIds"] == []
    assert payload["totalResults"] == 0
    assert "different keywords" in payload["message"]


def test_search_directory_respects_limit() -> None:
    payload = server.search_directory("muscat", "en", limit=1)
    assert len(payload["resultIds"]) == 1


def test_explain_query_tool() -> None:
    result = server.explain_query("recommend a pharmacy in Nizwa")
    assert result["type"] == "recommend"
    assert result["entities"]["city"] == "nizwa"
    assert result["entities"]["category"] == "cat-pharmacies"


def test_list_categories_tool() -> None:
    categories = server.list_categories()
    assert categories[0] == {
        "id": "cat-restaurants",
        "slug": "restaurants",
        "name": {"en": "Restaurants", "ar": "مطاعم"},
    }


def test_rate_limit_is_enforced(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(server.RATE_LIMITS_PER_TOOL, "list_categories", 0)
    with pytest.raises(server.RateLimitError):
        server.list_categories()


def test_search_directory_honours_zero_limit() -> None:
    payload = server.search_directory("muscat", "en", limit=0)
    assert payload["resultIds"] == []
    assert payload["totalResults"] == 0
