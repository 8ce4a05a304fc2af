"""SEARCHADS — FastAPI Application Entry Point.

Keyword search over an advertisement catalog.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from searchads.config import settings
from searchads.database import build_default_engines, init_db, test_connection
from searchads.engine.search_engine import SearchAdsEngine
from searchads.stores.sql_store import SqlInvertedIndexStore, SqlRelationalStore
from searchads.api.search_routes import router as search_router
from searchads.core.logging import get_logger

logger = get_logger("main")


def build_engine_from_settings() -> SearchAdsEngine:
    """Wire SQL stores and data paths from configuration."""
    ads_engine, index_engine = build_default_engines()
    if test_connection(ads_engine):
        try:
            init_db(ads_engine, index_engine)
        except Exception as e:
            logger.error(f"❌ Table creation failed: {e}")
    else:
        logger.error("❌ Database NOT connected — searches will return no ads")
    return SearchAdsEngine(
        SqlRelationalStore(ads_engine),
        SqlInvertedIndexStore(index_engine),
        ads_data_path=settings.ads_data_path,
        budget_data_path=settings.budget_data_path,
        dedupe_results=settings.dedupe_results,
    )


def create_app(search_engine: Optional[SearchAdsEngine] = None) -> FastAPI:
    """Build the app. Pass an engine to skip configuration-based wiring."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown lifecycle."""
        logger.info("🚀 SEARCHADS starting up...")
        engine = search_engine or build_engine_from_settings()
        if settings.ingest_on_startup:
            engine.init()
        app.state.search_engine = engine
        yield
        engine.shutdown()
        logger.info("SEARCHADS shut down")

    app = FastAPI(
        title="SEARCHADS",
        description="Keyword search over an advertisement catalog.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.include_router(search_router)

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint."""
        engine = getattr(app.state, "search_engine", None)
        return {
            "status": "healthy",
            "service": "searchads",
            "version": "1.0.0",
            "engine_state": engine.state.value if engine else None,
        }

    return app


app = create_app()
