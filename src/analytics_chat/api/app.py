from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from analytics_chat.api.dependencies import (
    AnalyticsHandlerDep,
    CacheHandlerDep,
    ChatHandlerDep,
    lifespan,
)
from analytics_chat.config import settings
from analytics_chat.dto import (
    AnalyticsQueryRequest,
    ChatRequest,
    ChatResponse,
    ClearAllResponse,
    ClearCacheRequest,
    ClearKeyResponse,
    HealthCheckResponse,
    ModelsResponse,
    QueryResponse,
)
from analytics_chat.handlers.errors import QUESTION_REQUIRED, bad_request

app = FastAPI(
    title="Analytics Chat API",
    description="Ask questions about the Olist e-commerce dataset in plain English",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies get the same 400 as a missing question."""
    return bad_request(QUESTION_REQUIRED)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Analytics Chat API",
        "version": "0.1.0",
        "description": "Ask questions about the Olist e-commerce dataset in plain English",
        "endpoints": {
            "analytics": "/analytics-query",
            "chat": "/chat",
            "cache": "/cache/clear",
            "models": "/models",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse, response_model_exclude_none=True)
async def health(handler: CacheHandlerDep):
    """Health check endpoint."""
    return await handler.health_check()


@app.post("/analytics-query", response_model=QueryResponse)
async def analytics_query(request: AnalyticsQueryRequest, handler: AnalyticsHandlerDep):
    """Translate a question into SQL, run it, and return the rows."""
    return await handler.query(request)


@app.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def chat(request: ChatRequest, handler: ChatHandlerDep):
    """Answer a question conversationally."""
    return await handler.chat(request)


@app.post("/cache/clear", response_model=ClearKeyResponse)
async def clear_cached_answer(request: ClearCacheRequest, handler: CacheHandlerDep):
    """Drop the cached answer for one question."""
    return await handler.clear_key(request)


@app.delete("/cache/clear", response_model=ClearAllResponse, response_model_exclude_none=True)
async def clear_cache(handler: CacheHandlerDep):
    """Clear every cached analytics and chat answer."""
    return await handler.clear_all()


@app.get("/models", response_model=ModelsResponse)
async def list_models(handler: ChatHandlerDep):
    """List the text-generation models available to the configured key."""
    return await handler.list_models()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "analytics_chat.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
