"""Geocoding services - Cache, rate limit and fallback orchestration.

One service per direction. Each owns its cache and rate limiter, so the
forward and reverse paths never throttle each other.

Request flow:
1. Validate input (ValidationError is the only error that escapes)
2. Cache lookup by normalized key
3. Rate limiter wait
4. Exactly one upstream call
5. Normalize the result, or fall back
6. Cache store (which may trigger the stale-entry sweep)
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from ..domain.errors import ParseError, UpstreamError, ValidationError
from ..domain.fallback import FallbackPolicy
from ..domain.models import (
    GeocodeResult,
    ResultKind,
    ReverseGeocodeResult,
    is_valid_coordinate,
)
from ..ports.cache import CachePort
from ..ports.geocoding import GeocoderPort
from ..ports.rate_limit import RateLimiterPort


def normalize_address(address: Optional[str]) -> str:
    """Cache key for an address: trimmed and lowercased.

    Raises:
        ValidationError: If the address is missing or blank.
    """
    if address is None or not address.strip():
        raise ValidationError("Address parameter is required", parameter="address")
    return address.strip().lower()


def parse_coordinates(lat: Optional[str], lng: Optional[str]) -> Tuple[float, float]:
    """Parse raw query-string coordinates.

    Raises:
        ValidationError: If either value is missing or not a finite number.
    """
    if lat is None or lng is None or not lat.strip() or not lng.strip():
        raise ValidationError(
            "Latitude and longitude parameters are required",
            parameter="lat" if not (lat or "").strip() else "lng",
        )
    try:
        latitude = float(lat)
        longitude = float(lng)
    except ValueError as e:
        raise ValidationError("Invalid latitude or longitude values", cause=e)
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        raise ValidationError("Invalid latitude or longitude values")
    return latitude, longitude


def coordinate_key(latitude: float, longitude: float) -> str:
    """Cache key for a coordinate pair, fixed at 6 decimal places."""
    return f"{latitude:.6f},{longitude:.6f}"


def _first(mapping: Mapping[str, Any], *keys: str) -> str:
    for key in keys:
        value = mapping.get(key)
        if value:
            return str(value)
    return ""


def _join(separator: str, *parts: Any) -> str:
    return separator.join(str(part) for part in parts if part)


@dataclass
class ForwardGeocodingService:
    """Address to coordinates, with caching and fallback.

    Never fails for a valid address: no match and errors both come back
    as fallback results tagged with their ResultKind.

    Attributes:
        geocoder: Upstream geocoding client
        cache: Cache keyed by normalized address
        rate_limiter: Spacing guard for upstream calls
        fallback: Default location policy
    """

    geocoder: GeocoderPort
    cache: CachePort[GeocodeResult]
    rate_limiter: RateLimiterPort
    fallback: FallbackPolicy = field(default_factory=FallbackPolicy)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def geocode(self, address: Optional[str]) -> GeocodeResult:
        """Resolve an address to coordinates.

        Args:
            address: Free-form address as typed by the user.

        Returns:
            The matched location or a fallback.

        Raises:
            ValidationError: If the address is missing or blank.
        """
        key = normalize_address(address)

        cached = self.cache.lookup(key)
        if cached is not None:
            self._logger.debug("Geocode cache hit", extra={"key": key})
            return cached

        try:
            self.rate_limiter.wait()
            result = self.geocoder.search(address.strip())
        except (UpstreamError, ParseError) as e:
            self._logger.warning(
                "Geocode upstream failure, using fallback",
                extra={"key": key, "error": str(e)},
            )
            return self.fallback.forward(ResultKind.FALLBACK_ERROR)
        except Exception as e:
            self._logger.error(
                "Geocode unexpected error, using fallback",
                extra={"key": key, "error": str(e)},
            )
            return self.fallback.forward(ResultKind.FALLBACK_ERROR)

        if result is None:
            self._logger.info("Geocode found no match", extra={"key": key})
            result = self.fallback.forward(ResultKind.FALLBACK_NO_MATCH)

        self.cache.store(key, result)
        return result

    def pending(self) -> GeocodeResult:
        """Placeholder result for a location that has not been resolved yet."""
        return self.fallback.forward(ResultKind.FALLBACK_PENDING)


@dataclass
class ReverseGeocodingService:
    """Coordinates to address, with caching and fallback.

    Attributes:
        geocoder: Upstream geocoding client
        cache: Cache keyed by 6-decimal "lat,lng"
        rate_limiter: Spacing guard for upstream calls
        fallback: Default location policy
    """

    geocoder: GeocoderPort
    cache: CachePort[ReverseGeocodeResult]
    rate_limiter: RateLimiterPort
    fallback: FallbackPolicy = field(default_factory=FallbackPolicy)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def reverse_geocode(self, lat: Optional[str], lng: Optional[str]) -> ReverseGeocodeResult:
        """Resolve raw query-string coordinates to an address.

        Raises:
            ValidationError: If either coordinate is missing or invalid.
        """
        latitude, longitude = parse_coordinates(lat, lng)
        return self.lookup(latitude, longitude)

    def lookup(self, latitude: float, longitude: float) -> ReverseGeocodeResult:
        """Resolve parsed coordinates to an address."""
        key = coordinate_key(latitude, longitude)
        if not is_valid_coordinate(latitude, longitude):
            self._logger.info("Reverse geocode outside service area", extra={"key": key})

        cached = self.cache.lookup(key)
        if cached is not None:
            self._logger.debug("Reverse geocode cache hit", extra={"key": key})
            return cached

        try:
            self.rate_limiter.wait()
            raw = self.geocoder.reverse(latitude, longitude)
            if raw is None or raw.get("address") is None:
                self._logger.info("Reverse geocode found no address", extra={"key": key})
                result = self.fallback.reverse(ResultKind.FALLBACK_NO_MATCH)
            else:
                result = self.to_result(raw)
        except (UpstreamError, ParseError) as e:
            self._logger.warning(
                "Reverse geocode upstream failure, using fallback",
                extra={"key": key, "error": str(e)},
            )
            return self.fallback.reverse(ResultKind.FALLBACK_ERROR)
        except Exception as e:
            self._logger.error(
                "Reverse geocode unexpected error, using fallback",
                extra={"key": key, "error": str(e)},
            )
            return self.fallback.reverse(ResultKind.FALLBACK_ERROR)

        self.cache.store(key, result)
        return result

    def to_result(self, raw: Mapping[str, Any]) -> ReverseGeocodeResult:
        """Map a raw Nominatim result onto the normalized address shape."""
        address = raw["address"]
        return ReverseGeocodeResult(
            street_address=_join(" ", address.get("house_number"), address.get("road")),
            neighborhood=_first(
                address, "neighbourhood", "suburb", "quarter", "city_district"
            ),
            city=_first(address, "city", "town", "village", "municipality")
            or self.fallback.city,
            province=_first(address, "state", "province") or self.fallback.province,
            country=_first(address, "country") or self.fallback.country,
            display_name=str(raw.get("display_name") or ""),
            formatted_address=_join(
                ", ",
                address.get("house_number"),
                address.get("road"),
                _first(address, "neighbourhood", "suburb"),
                _first(address, "city", "town"),
                address.get("state"),
            ),
            kind=ResultKind.RESOLVED,
        )

    def pending(self) -> ReverseGeocodeResult:
        """Placeholder result for coordinates that have not been resolved yet."""
        return self.fallback.reverse(ResultKind.FALLBACK_PENDING)
