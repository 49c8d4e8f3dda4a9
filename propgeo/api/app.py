"""
API Module
---------
FastAPI application exposing the geocoding endpoints used by the property
listing pages and the admin location picker:
- GET /geocode?address=...
- GET /reverse-geocode?lat=...&lng=...
- GET /health
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..config import ObservabilityConfig
from ..container import Container
from ..domain.errors import ValidationError
from .routes import router

logger = logging.getLogger(__name__)


def configure_logging(config: ObservabilityConfig) -> None:
    logging.basicConfig(
        level=config.level.upper(),
        format=config.format,
        handlers=[logging.StreamHandler()],
    )


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Build the FastAPI app around a container.

    The container (and with it every cache and rate limiter) is created
    once here and shared by all requests served by this process.
    """
    container = container or Container.create_default()
    configure_logging(container.config.observability)

    app = FastAPI(
        title=container.config.api.title,
        description="Geocoding and reverse geocoding for property listings",
        version="1.0.0",
    )
    app.state.container = container

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        logger.info(
            "Rejected geocoding request",
            extra={"path": request.url.path, "error": exc.message},
        )
        return JSONResponse(status_code=400, content={"error": exc.message})

    app.include_router(router, prefix=container.config.api.prefix)
    return app
