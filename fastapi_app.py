"""FastAPI wrapper around the smart search MCP server with optional API-key auth."""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import Annotated, Any, Awaitable, Callable, Dict, List, Literal, cast

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, StringConstraints

from server import (
    RateLimitError,
    directory,
    explain_query,
    list_categories,
    mcp,
    search_directory,
)
from smartsearch import __version__
from smartsearch.config import settings

logger = logging.getLogger(__name__)

ToolCallable = Callable[..., Any]

FASTAPI_API_KEY = os.getenv("FASTAPI_API_KEY", "")
SEARCH_API_KEY_REQUIRED = os.getenv("SEARCH_API_KEY_REQUIRED", "false").strip().lower() in {
    "1",
    "true",
    "yes",
    "on",
}

if SEARCH_API_KEY_REQUIRED and not FASTAPI_API_KEY.strip():
    raise RuntimeError("FASTAPI_API_KEY must be set and non-empty")

mcp_http_app = cast(Any, mcp).http_app(
    path="/",
    transport="streamable-http",
)

TOOLS: Dict[str, ToolCallable] = {
    "search_directory": search_directory,
    "explain_query": explain_query,
    "list_categories": list_categories,
}

TOOL_BRIEFS: Dict[str, str] = {
    "search_directory": "Bilingual smart search over approved businesses with a chat reply.",
    "explain_query": "Show language, entities, core query and intent extracted from a query.",
    "list_categories": "List directory categories with English and Arabic names.",
}


class ToolCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


class HistoryTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class SearchRequest(BaseModel):
    query: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=500)]
    locale: Literal["en", "ar"] = "en"
    conversationHistory: List[HistoryTurn] = Field(default_factory=list)


def require_api_key(x_api_key: str = Header("", alias="X-API-Key")) -> None:
    if not SEARCH_API_KEY_REQUIRED:
        return
    if x_api_key != FASTAPI_API_KEY:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
        )


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> Any:
    async with mcp_http_app.lifespan(app):
        yield


app = FastAPI(
    title=f"{settings.server_name} API",
    version=__version__,
    description="REST wrapper around the smart directory search with a mounted MCP endpoint.",
    lifespan=app_lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/mcp", mcp_http_app)


@app.middleware("http")
async def auth_middleware(request: Request, call_next: Callable[..., Awaitable[Any]]) -> Any:
    if not SEARCH_API_KEY_REQUIRED:
        return await call_next(request)
    path = request.url.path
    is_protected = path.startswith("/api") or path.startswith("/mcp")
    is_open = path in {"/health", "/docs", "/openapi.json", "/redoc"}
    if is_protected and not is_open:
        if request.headers.get("X-API-Key", "") != FASTAPI_API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"detail": "Invalid API key"},
            )
    return await call_next(request)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"ok": False, "error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


@app.get("/health")
async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "categories": len(directory.categories()),
        "businesses": len(directory.approved_businesses()),
    }


@app.get("/api/welcome", dependencies=[Depends(require_api_key)])
async def welcome() -> Dict[str, Any]:
    return {
        "name": settings.server_name,
        "version": __version__,
        "tool_count": len(TOOLS),
        "tool_briefs": TOOL_BRIEFS,
        "locales": ["en", "ar"],
    }


@app.get("/api/tools", dependencies=[Depends(require_api_key)])
async def list_tools_api() -> Dict[str, Any]:
    return {
        "count": len(TOOLS),
        "tools": [{"name": name, "brief": TOOL_BRIEFS[name]} for name in sorted(TOOLS)],
    }


@app.post("/api/tools/{tool_name}", dependencies=[Depends(require_api_key)])
async def call_tool_api(tool_name: str, request: ToolCallRequest) -> Dict[str, Any]:
    tool = TOOLS.get(tool_name)
    if tool is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown tool '{tool_name}'",
        )
    try:
        result = await run_in_threadpool(tool, **request.arguments)
    except TypeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid arguments for tool '{tool_name}': {exc}",
        ) from exc
    except RateLimitError as exc:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("tool_call_failed", extra={"tool": tool_name})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Tool '{tool_name}' execution failed: {exc}",
        ) from exc
    return {"tool": tool_name, "result": result}


@app.post("/api/ai-search", dependencies=[Depends(require_api_key)])
async def ai_search(request: SearchRequest) -> Dict[str, Any]:
    history = [turn.model_dump() for turn in request.conversationHistory]
    try:
        return await run_in_threadpool(
            search_directory,
            request.query,
            request.locale,
            history,
        )
    except RateLimitError as exc:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=str(exc),
        ) from exc
