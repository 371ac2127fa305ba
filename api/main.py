"""
BiasDetector API — Main Application

POST /analyze        — Score one article
POST /analyze/batch  — Score several articles concurrently
GET  /example        — Sample article for first-time readers
GET  /sources        — Reliable-source classification table
GET  /health         — Health check
"""

from __future__ import annotations

import asyncio
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.requests import Request

from biasdetector.cache import result_cache
from biasdetector.config import settings
from biasdetector.engine import ScoringEngine
from biasdetector.enrichment.factory import get_provider
from biasdetector.gateway import EnrichmentGateway
from biasdetector.logging import get_logger, setup_logging
from biasdetector.models import Article, example_article
from biasdetector.schemas.analysis import (
    AnalysisBatchItem,
    AnalysisBatchResponse,
    AnalysisResponse,
    ArticleBatchRequest,
    ArticleRequest,
    ExampleArticleResponse,
    HealthResponse,
    SourcesResponse,
)

logger = get_logger("api")


# Built on first use from settings
_engine: ScoringEngine | None = None


def _get_engine() -> ScoringEngine:
    global _engine
    if _engine is None:
        gateway = EnrichmentGateway(
            provider=get_provider(settings.ENRICHMENT_PROVIDER),
            timeout=settings.ENRICHMENT_TIMEOUT,
        )
        _engine = ScoringEngine(gateway=gateway)
    return _engine


# ============================================================
# STARTUP / SHUTDOWN
# ============================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup; release enrichment clients on shutdown."""
    setup_logging()
    logger.info(
        "BiasDetector API starting",
        extra={"provider": settings.ENRICHMENT_PROVIDER},
    )
    yield
    if _engine is not None:
        await _engine.aclose()
    logger.info("BiasDetector API shutting down")


app = FastAPI(
    title="BiasDetector API",
    description="Bias, factual-accuracy and source-reliability scoring for news articles",
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.CORS_ORIGINS.split(",")],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=False,
)


# ============================================================
# GLOBAL ERROR HANDLER
# ============================================================

@app.exception_handler(Exception)
async def global_error_handler(request: Request, exc: Exception):
    """Structured 500 for anything a route did not handle."""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={"error": str(exc), "path": request.url.path, "method": request.method},
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error. The analysis could not be completed."},
    )


# ============================================================
# ROUTES
# ============================================================

async def _analyze(article: Article) -> AnalysisResponse:
    cached = await result_cache.get(article)
    if cached is not None:
        return AnalysisResponse.from_result(cached)

    result = await _get_engine().score(article)
    # A fallback answer is only valid for this request
    if not result.enrichment_degraded:
        await result_cache.put(article, result)
    return AnalysisResponse.from_result(result)


@app.post("/analyze", response_model=AnalysisResponse)
async def analyze(request: ArticleRequest):
    """Score an article for bias, factual accuracy and source reliability."""
    return await _analyze(request.to_article())


@app.post("/analyze/batch", response_model=AnalysisBatchResponse)
async def analyze_batch(request: ArticleBatchRequest):
    """Score several articles concurrently. Failed items carry an error."""
    results = await asyncio.gather(
        *[_analyze(item.to_article()) for item in request.items],
        return_exceptions=True,
    )

    items = []
    for r in results:
        if isinstance(r, AnalysisResponse):
            items.append(AnalysisBatchItem(result=r))
        else:
            logger.warning(
                "Batch item failed",
                extra={"error": str(r), "error_type": type(r).__name__},
            )
            items.append(AnalysisBatchItem(error="Analysis failed for this item."))

    analyzed = sum(1 for i in items if i.result is not None)
    logger.info(
        f"Batch complete: {analyzed}/{len(request.items)} analyzed",
        extra={"batch_size": len(request.items)},
    )
    return AnalysisBatchResponse(results=items, total=len(request.items), analyzed=analyzed)


@app.get("/example", response_model=ExampleArticleResponse)
async def get_example():
    """Return the sample article."""
    article = example_article()
    return ExampleArticleResponse(
        title=article.title,
        content=article.content,
        source=article.source,
        author=article.author,
        date=article.date,
    )


@app.get("/sources", response_model=SourcesResponse)
async def get_sources():
    """Return the reliable-source categories in match order."""
    classifier = _get_engine().classifier
    return {
        "categories": classifier.get_categories(),
        "news_like_tokens": list(classifier.lexicon.news_like_tokens),
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check."""
    return {
        "status": "operational",
        "version": settings.VERSION,
        "enrichment_provider": _get_engine().gateway.provider_name,
        "cache": result_cache.stats,
    }


# ============================================================
# MIDDLEWARE
# ============================================================

_SECURITY_HEADERS = {
    "X-BiasDetector-Version": settings.VERSION,
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

_MAX_BODY_BYTES = 1_048_576


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(_SECURITY_HEADERS)
    return response


@app.middleware("http")
async def enforce_body_size_limit(request: Request, call_next):
    """Refuse bodies over 1 MB before they are parsed."""
    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > _MAX_BODY_BYTES:
        return JSONResponse(
            status_code=413,
            content={"detail": "Request body too large (limit 1 MB)."},
        )
    return await call_next(request)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """One log line per request, health checks excluded."""
    if request.url.path == "/health":
        return await call_next(request)

    start = time.monotonic()
    response = await call_next(request)
    duration_ms = round((time.monotonic() - start) * 1000, 1)

    logger.info(
        "%s %s %d", request.method, request.url.path, response.status_code,
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )
    return response


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run("api.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
