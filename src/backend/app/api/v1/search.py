"""
Universal Search API
GET /api/v1/search/universal - Search cards, players, teams and series at once
GET /api/v1/search/health - Search route and catalog store health
"""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi import status as http_status
from fastapi.responses import JSONResponse

from ...database.catalog_store import CatalogStore
from ...models.search import SearchCategory, SearchQuery, SearchResponse
from ...services.search.errors import SearchUnavailableError
from ...services.search.orchestrator import SearchOrchestrator
from ...utils.logging_context import bind_search_context, log_context, log_performance

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/v1/search", tags=["search"])


# Dependency injection placeholders (overridden in main.py)
def get_search_orchestrator() -> SearchOrchestrator:
    """Dependency injection placeholder for the search orchestrator - overridden in main.py"""
    raise RuntimeError("Search orchestrator dependency not initialized")


def get_catalog_store() -> CatalogStore:
    """Dependency injection placeholder for the catalog store - overridden in main.py"""
    raise RuntimeError("Catalog store dependency not initialized")


@router.get("/universal", response_model=SearchResponse)
async def universal_search(
    q: str = Query("", description="Free-text query, e.g. '108 trout', 'rookie', 'angels'"),
    limit: int = Query(50, ge=1, le=100),
    category: SearchCategory = Query(SearchCategory.ALL),
    orchestrator: SearchOrchestrator = Depends(get_search_orchestrator),
):
    """
    Universal search across the catalog

    Example:
        GET /api/v1/search/universal?q=108%20trout&limit=10

        Response:
        {
            "query": "108 trout",
            "results": [
                {"type": "card", "id": "1234", "title": "#108 Mike Trout • Base", "relevanceScore": 95, ...},
                ...
            ],
            "totalResults": 10,
            "searchTimeMs": 42.7
        }
    """
    bind_search_context(query=q, category=category.value, limit=limit)

    try:
        with log_performance("universal_search", logger=logger):
            response = await orchestrator.execute(SearchQuery(text=q, limit=limit, category=category))

        logger.info("universal_search_results", total_results=response.total_results)
        return response

    except SearchUnavailableError as e:
        logger.error("universal_search_unavailable", error=str(e))
        return JSONResponse(
            status_code=http_status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "error": e.message,
                "query": e.query,
                "results": [],
                "totalResults": 0,
            },
        )

    except Exception as e:
        logger.error("universal_search_failed", error=str(e), exc_info=True)
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Search failed", "details": str(e)},
        )


@router.get("/health")
async def search_health(catalog_store: CatalogStore = Depends(get_catalog_store)):
    """
    Search route health

    Example:
        GET /api/v1/search/health

        Response:
        {
            "status": "healthy",
            "route": "universal-search",
            "timestamp": "2025-01-28T10:30:00+00:00",
            "databaseAvailable": true
        }
    """
    with log_context(operation="search_health"):
        database_available = await catalog_store.ping()
        if not database_available:
            logger.warning("search_health_degraded")

    return {
        "status": "healthy" if database_available else "degraded",
        "route": "universal-search",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "databaseAvailable": database_available,
    }
