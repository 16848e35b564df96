"""
product_search/api.py
---------------------

HTTP surface for the storefront search: ranked results, type-ahead
suggestions and popular terms over an in-memory catalog.
Run: uvicorn product_search.api:app --reload --port 8010
"""

from typing import List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from product_search.catalog import load_catalog, sample_catalog
from product_search.config import API_HOST, API_PORT, CATALOG_PATH, SUGGESTION_LIMIT
from product_search.highlight import highlight_matches
from product_search.logging_utils import configure_logging, get_logger
from product_search.models import (
    HealthResponse,
    MatchResult,
    ProductRecord,
    SearchHit,
    SearchOptions,
    SearchRequest,
    SearchResponse,
    SuggestionResponse,
)
from product_search.ranking import search
from product_search.suggestions import popular_terms, suggest

logger = get_logger("api")


# ── FastAPI middleware for per-request logging ───────────────────────────────
class LogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        logger.info(f"⇢ {request.method} {request.url.path}")
        resp = await call_next(request)
        logger.info(f"⇠ {request.method} {request.url.path} → {resp.status_code}")
        return resp

################################################################################
# FastAPI App
################################################################################

app = FastAPI(title="Storefront Search API", version="1.0.0")
app.add_middleware(LogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global catalog
CATALOG: Optional[List[ProductRecord]] = None


def initialize_catalog(path: str = CATALOG_PATH) -> List[ProductRecord]:
    """Load the configured catalog, falling back to the built-in sample."""
    global CATALOG

    if path:
        try:
            logger.info(f"Loading catalog from: {path}")
            CATALOG = load_catalog(path)
            return CATALOG
        except (FileNotFoundError, ValueError) as e:
            logger.warning(f"Failed to load catalog: {e}. Using sample data.")

    CATALOG = sample_catalog()
    return CATALOG


def _require_catalog() -> List[ProductRecord]:
    if CATALOG is None:
        raise HTTPException(status_code=503, detail="Catalog not loaded. Check /health endpoint for status.")
    return CATALOG


def _to_hit(result: MatchResult, query: str) -> SearchHit:
    return SearchHit(
        product=result.product.model_dump(exclude_none=True),
        relevance=result.relevance,
        matched_spans=result.matched_spans,
        highlighted_title=highlight_matches(result.product.title, query),
    )

################################################################################
# API Routes
################################################################################

@app.on_event("startup")
async def startup_event():
    configure_logging()
    if CATALOG is None:
        initialize_catalog()


@app.get("/health", response_model=HealthResponse)
def health_check():
    return HealthResponse(
        status="healthy" if CATALOG is not None else "unhealthy",
        catalog_ready=CATALOG is not None,
        products=len(CATALOG or []),
    )


@app.post("/search", response_model=SearchResponse)
def search_endpoint(req: SearchRequest):
    """Rank the catalog against the query. An empty query lists the whole catalog."""
    products = _require_catalog()

    overrides = req.model_dump(include={"threshold", "min_score", "limit"}, exclude_none=True)
    ranked = search(products, req.query, SearchOptions(**overrides))

    if not req.query.strip():
        hits = [SearchHit(product=p.model_dump(exclude_none=True), relevance=1.0) for p in ranked]
    else:
        hits = [_to_hit(r, req.query.strip()) for r in ranked]

    return SearchResponse(results=hits, total_results=len(hits), query=req.query)


@app.get("/suggestions", response_model=SuggestionResponse)
def suggestions_endpoint(q: str = Query(..., min_length=1), limit: int = Query(SUGGESTION_LIMIT, ge=1, le=50)):
    """Type-ahead strings for a partial query"""
    return SuggestionResponse(query=q, suggestions=suggest(_require_catalog(), q, limit))


@app.get("/popular")
def popular_endpoint(limit: int = Query(5, ge=1, le=50)):
    return {"terms": popular_terms(_require_catalog(), limit)}


@app.get("/")
def root():
    """Root endpoint with API info"""
    return {
        "message": "Storefront product search API",
        "version": "1.0.0",
        "features": [
            "Weighted fuzzy ranking across product fields",
            "Prefix-first type-ahead suggestions",
            "Popular terms mined from the catalog",
            "Highlighting of matched text in titles",
        ],
        "endpoints": {
            "health": "/health",
            "search": "/search",
            "suggestions": "/suggestions",
            "popular": "/popular",
            "docs": "/docs",
        },
    }


if __name__ == "__main__":
    configure_logging()
    uvicorn.run(app, host=API_HOST, port=API_PORT, log_level="info")
