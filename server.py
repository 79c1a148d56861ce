"""Streamable HTTP MCP server exposing the bilingual smart directory search."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from cachetools import TTLCache
from fastmcp import FastMCP

from smartsearch.config import settings
from smartsearch.directory import load_directory
from smartsearch.lexicon import default_lexicon, load_lexicon
from smartsearch.logging import configure_logging
from smartsearch.services.engine import (
    build_contextual_query,
    extract_intent,
    generate_response,
    smart_search,
    to_payload,
)

configure_logging(settings.log_level)

logger = logging.getLogger(__name__)

RATE_LIMIT_WINDOW = 60
RATE_LIMITS: TTLCache[str, int] = TTLCache(maxsize=512, ttl=RATE_LIMIT_WINDOW)
RATE_LIMITS_PER_TOOL: Dict[str, int] = {
    "search_directory": 120,
    "explain_query": 120,
    "list_categories": 30,
}


class RateLimitError(RuntimeError):
    """Raised when a tool exceeds its per-window call limit."""


def enforce_rate_limit(tool_name: str) -> None:
    limit = RATE_LIMITS_PER_TOOL.get(tool_name, 60)
    count = RATE_LIMITS.get(tool_name, 0)
    if count >= limit:
        raise RateLimitError(f"Rate limit reached for {tool_name}")
    RATE_LIMITS[tool_name] = count + 1


def audit_tool(tool_name: str, status: str, details: Dict[str, Any] | None = None) -> None:
    logger.info(
        f"tool_event {tool_name}",
        extra={
            "tool": tool_name,
            "status": status,
            "details": details or {},
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


mcp = FastMCP(settings.server_name)
directory = load_directory()
lexicon = load_lexicon(settings.lexicon_path) if settings.lexicon_path else default_lexicon()


def search_directory(
    query: str,
    locale: str = "en",
    conversation_history: Optional[List[Dict[str, str]]] = None,
    limit: Optional[int] = None,
) -> Dict[str, Any]:
    """Search approved businesses and return ranked hits with a chat reply."""
    enforce_rate_limit("search_directory")
    safe_locale = "ar" if locale == "ar" else "en"
    history = conversation_history or []
    categories = directory.categories()
    effective_query = build_contextual_query(
        query,
        history,
        categories,
        safe_locale,
        lexicon=lexicon,
    )
    result = smart_search(
        effective_query,
        directory.approved_businesses(),
        categories,
        safe_locale,
        settings.default_limit if limit is None else limit,
        lexicon=lexicon,
        weights=settings.weights,
        max_query_chars=settings.max_query_chars,
    )
    message = generate_response(
        query,
        result.results,
        result.intent,
        categories,
        safe_locale,
        history,
        lexicon=lexicon,
    )
    payload = to_payload(message, result)
    audit_tool(
        "search_directory",
        "success",
        {"count": payload["totalResults"], "follow_up": effective_query != query},
    )
    return payload


def explain_query(query: str, locale: str = "en") -> Dict[str, Any]:
    """Show how a query is understood without running a search."""
    enforce_rate_limit("explain_query")
    safe_locale = "ar" if locale == "ar" else "en"
    intent = extract_intent(
        query,
        directory.categories(),
        safe_locale,
        lexicon=lexicon,
        max_query_chars=settings.max_query_chars,
    )
    result = {
        "raw": intent.raw,
        "tokens": list(intent.tokens),
        "language": intent.language,
        "entities": intent.entities.as_dict(),
        "coreQuery": intent.core_query,
        "type": intent.intent_type.value,
    }
    audit_tool("explain_query", "success", {"type": result["type"]})
    return result


def list_categories() -> List[Dict[str, Any]]:
    """List directory categories with their bilingual names."""
    enforce_rate_limit("list_categories")
    result = [
        {"id": category.id, "slug": category.slug, "name": {"en": category.name.en, "ar": category.name.ar}}
        for category in directory.categories()
    ]
    audit_tool("list_categories", "success", {"count": len(result)})
    return result


for _tool in (search_directory, explain_query, list_categories):
    mcp.tool()(_tool)


if __name__ == "__main__":
    mcp.run(
        transport="streamable-http",
        host="0.0.0.0",
        port=8000,
    )
