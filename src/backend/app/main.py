"""
Card Catalog Universal Search
FastAPI Application Entry Point
"""

import logging
import logging.handlers
import os
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import structlog
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.search import get_catalog_store, get_search_orchestrator
from .api.v1.search import router as search_router
from .database.catalog_store import SqlCatalogStore
from .database.database import catalog_db_manager, close_catalog_db, init_catalog_db
from .middleware import LoggingMiddleware
from .services.config.configuration_service import get_config_service
from .services.intent.query_analyzer import QueryAnalyzer
from .services.ranker.relevance_ranker import RelevanceRanker
from .services.search.deduplicator import ResultDeduplicator
from .services.search.orchestrator import SearchOrchestrator
from .services.search.registry import SearchStrategyRegistry
from .services.search.strategy_factory import StrategyFactory

# Load environment variables
load_dotenv()


def configure_logging():
    """
    Configure structured logging using structlog.

    - Production (ENV=production): JSON output for log aggregation
    - Development (ENV=development): Human-readable console output
    - Includes automatic context: timestamp, level, logger name, correlation_id, search_query
    """
    env = os.getenv("ENV", "development").lower()
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    timestamper = structlog.processors.TimeStamper(fmt="iso")

    shared_processors = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.contextvars.merge_contextvars,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        timestamper,
    ]

    if env == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback
        )

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    # stdlib loggers (logging.getLogger(__name__)) render through the same pipeline
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    # Default log path at project root (src/backend/app -> 3 levels up)
    project_root = Path(__file__).resolve().parent.parent.parent.parent
    default_log_path = project_root / "logs" / "card-search.log"
    log_file_path = str(Path(os.getenv("LOG_FILE_PATH", str(default_log_path))).resolve())

    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)

    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file_path,
        maxBytes=10 * 1024 * 1024,  # 10MB per file
        backupCount=5,
        encoding="utf-8"
    )
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.addHandler(stdout_handler)
    root_logger.addHandler(file_handler)
    root_logger.setLevel(log_level)

    # Reduce noise from verbose libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return structlog.get_logger(__name__)


# Initialize structured logging
logger = configure_logging()

# Global instances
catalog_store = None
search_orchestrator = None


def build_search_orchestrator(store, config_service) -> SearchOrchestrator:
    """Wire strategies, registry, analyzer, deduplicator and ranker from search_config.json"""
    search_config = config_service.get_search_config()

    strategies = StrategyFactory(search_config=search_config, catalog_store=store).create_all_strategies()

    return SearchOrchestrator(
        registry=SearchStrategyRegistry(strategies),
        analyzer=QueryAnalyzer.from_config(config_service.get_query_analysis_config()),
        deduplicator=ResultDeduplicator(),
        ranker=RelevanceRanker(),
        config=config_service.get_orchestration_config(),
        limits_config=config_service.get_limits_config()
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown"""
    global catalog_store, search_orchestrator

    logger.info("Starting card catalog search application...")

    config_service = get_config_service()
    if not config_service.validate_config("search_config"):
        raise ValueError("search_config.json is missing or invalid")

    engine = init_catalog_db()
    if await catalog_db_manager.verify_connectivity():
        logger.info("✓ Catalog database reachable")
    else:
        # Searches answer 503 until the database comes back
        logger.warning("Catalog database unreachable at startup")

    catalog_store = SqlCatalogStore(engine)
    search_orchestrator = build_search_orchestrator(catalog_store, config_service)
    logger.info("✓ SearchOrchestrator initialized")

    yield

    logger.info("Shutting down card catalog search application...")
    try:
        await close_catalog_db()
        logger.info("✓ Catalog database closed")
    except Exception as e:
        logger.error(f"Error closing catalog database: {e}")

    logger.info("Shutdown complete")


app = FastAPI(
    title="Card Catalog Universal Search",
    description="Universal search across sports cards, players, teams and series",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Update for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)


def get_orchestrator() -> SearchOrchestrator:
    return search_orchestrator


def get_store() -> SqlCatalogStore:
    return catalog_store


app.include_router(search_router)

# Override dependencies in app (not router)
app.dependency_overrides[get_search_orchestrator] = get_orchestrator
app.dependency_overrides[get_catalog_store] = get_store


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "card-catalog-search",
        "version": "1.0.0",
        "endpoints": {
            "universal_search": "/api/v1/search/universal",
            "search_health": "/api/v1/search/health",
            "docs": "/docs"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    health_status = {
        "status": "healthy",
        "services": {
            "catalog_store": catalog_store is not None,
            "search_orchestrator": search_orchestrator is not None,
            "database_engine": catalog_db_manager._initialized,
        },
        "strategies": search_orchestrator.registry.get_strategy_info() if search_orchestrator else {}
    }

    if not all(health_status["services"].values()):
        health_status["status"] = "unhealthy"

    return health_status


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
