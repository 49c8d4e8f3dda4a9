"""Dependency injection container.

This module provides a simple DI container without external frameworks.
The application builds one container at startup; it owns the only
cache and rate limiter instances for each geocoding direction.

Design principles:
1. No magic - explicit registration and resolution
2. Testable - easy to swap implementations
3. Lazy loading - adapters instantiated on first use
4. Thread-safe - FastAPI runs sync endpoints in a threadpool
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, GeocodingConfig, get_config
from .domain.errors import ConfigurationError


def check_geocoding_config(geo: GeocodingConfig) -> None:
    """Reject geocoding settings the services cannot run with.

    Raises:
        ConfigurationError: On the first invalid setting found.
    """
    if geo.rate_limit_delay < 0:
        raise ConfigurationError(
            "Rate limit delay cannot be negative",
            setting_name="geocoding.rate_limit_delay",
            expected_type="float >= 0",
        )
    if geo.cache_ttl_seconds <= 0:
        raise ConfigurationError(
            "Cache TTL must be positive",
            setting_name="geocoding.cache_ttl_seconds",
            expected_type="float > 0",
        )
    if geo.cache_sweep_threshold < 1:
        raise ConfigurationError(
            "Cache sweep threshold must be at least 1",
            setting_name="geocoding.cache_sweep_threshold",
            expected_type="int >= 1",
        )
    if len(geo.country_code.strip()) != 2:
        raise ConfigurationError(
            f"Invalid country code: {geo.country_code!r}",
            setting_name="geocoding.country_code",
            expected_type="ISO 3166-1 alpha-2 code",
        )


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        service = container.resolve(ForwardGeocodingService)

        # Testing
        container = Container.create_default()
        container.register(GeocoderPort, lambda: FakeGeocoder())
        service = container.resolve(ForwardGeocodingService)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[Any, Callable[[], Any]] = field(default_factory=dict, repr=False)
    _singletons: Dict[Any, Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[Any] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: Any,
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type or named binding.

        Args:
            port_type: The type (usually a Protocol) or a string name.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: Any) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.

        Raises:
            ConfigurationError: If the geocoding settings are invalid.
        """
        from .adapters.cache import InMemoryCache
        from .adapters.geocoding import NominatimGeocoderAdapter
        from .adapters.rate_limit import MinIntervalRateLimiter
        from .domain.fallback import FallbackPolicy
        from .ports.geocoding import GeocoderPort
        from .services import ForwardGeocodingService, ReverseGeocodingService

        config = config or get_config()
        container = cls(config=config)
        geo = config.geocoding
        check_geocoding_config(geo)

        container.register(FallbackPolicy, lambda: FallbackPolicy.from_config(config.fallback))
        container.register(GeocoderPort, lambda: NominatimGeocoderAdapter(geo))

        # One cache and one limiter per direction
        for direction in ("geocode", "reverse_geocode"):
            container.register(
                f"cache.{direction}",
                lambda name=direction: InMemoryCache(
                    ttl_seconds=geo.cache_ttl_seconds,
                    sweep_threshold=geo.cache_sweep_threshold,
                    name=name,
                ),
            )
            container.register(
                f"rate_limiter.{direction}",
                lambda name=direction: MinIntervalRateLimiter(
                    min_interval_seconds=geo.rate_limit_delay,
                    name=name,
                ),
            )

        container.register(
            ForwardGeocodingService,
            lambda: ForwardGeocodingService(
                geocoder=container.resolve(GeocoderPort),
                cache=container.resolve("cache.geocode"),
                rate_limiter=container.resolve("rate_limiter.geocode"),
                fallback=container.resolve(FallbackPolicy),
            ),
        )
        container.register(
            ReverseGeocodingService,
            lambda: ReverseGeocodingService(
                geocoder=container.resolve(GeocoderPort),
                cache=container.resolve("cache.reverse_geocode"),
                rate_limiter=container.resolve("rate_limiter.reverse_geocode"),
                fallback=container.resolve(FallbackPolicy),
            ),
        )

        return container
