"""Domain layer - Core models, fallback policy and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    ParseError,
    PropGeoError,
    UpstreamError,
    ValidationError,
)
from .fallback import FallbackPolicy
from .models import (
    ARGENTINA_BOUNDS,
    RECONQUISTA_CENTER,
    CacheEntry,
    GeocodeResult,
    GeoLocation,
    MapBounds,
    ResultKind,
    ReverseGeocodeResult,
    format_address,
    is_valid_coordinate,
)

__all__ = [
    # Models
    "GeoLocation",
    "MapBounds",
    "ARGENTINA_BOUNDS",
    "RECONQUISTA_CENTER",
    "ResultKind",
    "GeocodeResult",
    "ReverseGeocodeResult",
    "CacheEntry",
    "is_valid_coordinate",
    "format_address",
    "FallbackPolicy",
    # Errors
    "PropGeoError",
    "ValidationError",
    "UpstreamError",
    "ParseError",
    "ConfigurationError",
]
