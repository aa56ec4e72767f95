"""
RAGChat - persistence and retrieval backend for a RAG chat application.

Main FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import create_api_router, setup_exception_handlers, setup_middleware
from app.core import Settings, get_settings, setup_logging
from app.core.logging import get_logger
from app.db import build_store_config, close_db, init_database, init_db
from app.plugins.rag import rag_plugin
from app.services.llm import build_provider_selector

logger = get_logger(__name__)


def create_lifespan(settings: Settings):
    """
    Build the application lifespan handler.

    Handles startup and shutdown events:
    - Startup: Register collections, open the store, pick model providers
    - Shutdown: Close connections gracefully
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings)

        logger.info("Starting RAGChat application")

        store_config = build_store_config(
            [rag_plugin(settings.rag.to_plugin_config())]
        )
        app.state.store = await init_db(settings, store_config)

        # Create tables if needed
        await init_database()

        app.state.providers = build_provider_selector(settings)

        logger.info("RAGChat application started")

        yield

        logger.info("Shutting down RAGChat application")

        await close_db()

        logger.info("RAGChat application stopped")

    return lifespan


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to run with; defaults to the environment

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Chat persistence and knowledge retrieval backend",
        lifespan=create_lifespan(settings),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )
    app.state.settings = settings

    # Setup CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_middleware(app)
    setup_exception_handlers(app)

    app.include_router(create_api_router())

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
            "health": "/api/v1/health"
        }

    return app


# Create the app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.debug,
        log_level="info"
    )
