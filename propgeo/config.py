"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- PROPGEO_GEO_USER_AGENT="MyAgency/1.0 (me@example.com)"
- PROPGEO_GEO_RATE_LIMIT_DELAY=1.5
- PROPGEO_FALLBACK_CITY=Avellaneda
- PROPGEO_API_PREFIX=/api
- PROPGEO_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeocodingConfig(BaseSettings):
    """Upstream geocoding, cache and rate limit configuration.

    Environment variables prefixed with PROPGEO_GEO_.
    """

    model_config = SettingsConfigDict(env_prefix="PROPGEO_GEO_")

    user_agent: str = "Marconi-Inmobiliaria/1.0 (contact@marconi-inmobiliaria.com)"
    domain: str = "nominatim.openstreetmap.org"
    scheme: str = "https"
    country_code: str = "ar"
    timeout_seconds: int = 10
    rate_limit_delay: float = 1.0
    cache_ttl_seconds: float = 24 * 60 * 60
    cache_sweep_threshold: int = 1000


class FallbackConfig(BaseSettings):
    """Default location and labels used when geocoding cannot resolve.

    Environment variables prefixed with PROPGEO_FALLBACK_.
    """

    model_config = SettingsConfigDict(env_prefix="PROPGEO_FALLBACK_")

    latitude: float = -29.15
    longitude: float = -59.65
    city: str = "Reconquista"
    province: str = "Santa Fe"
    country: str = "Argentina"

    forward_no_match_label: str = "Reconquista, Santa Fe, Argentina (fallback)"
    forward_error_label: str = "Reconquista, Santa Fe, Argentina (error fallback)"
    forward_pending_label: str = "Reconquista, Santa Fe, Argentina (pending)"

    reverse_no_match_label: str = "Ubicación no encontrada"
    reverse_no_match_address: str = "Dirección no disponible"
    reverse_error_label: str = "Error al obtener dirección"
    reverse_pending_label: str = "Ubicación pendiente"
    reverse_pending_address: str = "Dirección pendiente"


class ApiConfig(BaseSettings):
    """HTTP server configuration.

    Environment variables prefixed with PROPGEO_API_.
    """

    model_config = SettingsConfigDict(env_prefix="PROPGEO_API_")

    title: str = "Marconi Inmobiliaria Geocoding API"
    host: str = "127.0.0.1"
    port: int = 8000
    prefix: str = ""
    base_url: Optional[str] = None


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with PROPGEO_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="PROPGEO_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.geocoding.user_agent)
        print(config.fallback.city)

    Environment variables prefixed with PROPGEO_.
    """

    model_config = SettingsConfigDict(env_prefix="PROPGEO_")

    geocoding: GeocodingConfig = Field(default_factory=GeocodingConfig)
    fallback: FallbackConfig = Field(default_factory=FallbackConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
