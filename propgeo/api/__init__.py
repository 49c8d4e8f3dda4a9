"""HTTP layer - FastAPI application and routes."""

from .app import create_app

__all__ = ["create_app"]
