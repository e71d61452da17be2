"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from server.dependencies import close_crawl_service
from server.routes import crawl, health
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup/shutdown logic."""
    logger.info("FastAPI server starting up")

    yield

    await close_crawl_service()
    logger.info("FastAPI server shutting down")


def create_app() -> FastAPI:
    """Factory function to create FastAPI application."""
    app = FastAPI(
        title="Crawl4AI Bridge API",
        description="HTTP surface for the crawl_urls tool",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(crawl.router)

    return app
