"""
FastAPI application factory.

create_app() builds an app with the CORS middleware installed and a
health-check endpoint, which is enough to serve the headers end to end.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from cors_helper.config import get_settings
from cors_helper.middleware.cors import setup_cors
from cors_helper.models.schemas import CorsOptions
from cors_helper.utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: runs on startup and shutdown."""
    settings = get_settings()
    logger.info(
        "cors-helper started  env=%s  origins=%s",
        settings.ENVIRONMENT,
        settings.allowed_origins_list,
    )
    yield
    logger.info("cors-helper shutting down")


def create_app(options: CorsOptions | None = None) -> FastAPI:
    """Create the FastAPI app; *options* overrides the policy from settings."""
    app = FastAPI(title="cors-helper", version="1.0.0", lifespan=lifespan)
    setup_cors(app, options)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict:
        """Return API health status."""
        return {"status": "ok", "version": "1.0.0"}

    return app
