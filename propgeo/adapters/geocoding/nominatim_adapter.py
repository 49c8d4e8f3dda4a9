"""Nominatim geocoder adapter.

Thin wrapper around geopy's Nominatim client:
- one request per call, no retries and no caching (the services own both)
- country restriction and identifying User-Agent from configuration
- geopy errors translated into UpstreamError / ParseError
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from geopy.adapters import AdapterHTTPError
from geopy.exc import GeocoderParseError, GeocoderServiceError, GeopyError
from geopy.geocoders import Nominatim

from ...config import GeocodingConfig, get_config
from ...domain.errors import ParseError, UpstreamError
from ...domain.models import GeocodeResult, ResultKind


def _status_code(error: BaseException) -> Optional[int]:
    """Dig the HTTP status out of a geopy error, if there was one."""
    cause = error.__cause__
    if isinstance(cause, AdapterHTTPError):
        return cause.status_code
    return None


@dataclass
class NominatimGeocoderAdapter:
    """Nominatim geocoder adapter.

    This adapter implements GeocoderPort using OpenStreetMap's Nominatim
    geocoding service.

    Attributes:
        config: Geocoding configuration
        geolocator: Pre-built geopy geocoder, built lazily when omitted
    """

    config: GeocodingConfig = field(default_factory=lambda: get_config().geocoding)
    geolocator: Optional[Any] = field(default=None, repr=False)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_geocoder(self) -> Any:
        """Get or initialize the geopy Nominatim client."""
        if self.geolocator is not None:
            return self.geolocator

        self._logger.debug(
            "Initializing Nominatim geocoder",
            extra={
                "user_agent": self.config.user_agent,
                "domain": self.config.domain,
                "timeout": self.config.timeout_seconds,
            },
        )

        self.geolocator = Nominatim(
            user_agent=self.config.user_agent,
            timeout=self.config.timeout_seconds,
            domain=self.config.domain,
            scheme=self.config.scheme,
        )
        return self.geolocator

    def _call(self, query: str, fn: Any, *args: Any, **kwargs: Any) -> Any:
        """Run one geopy request, translating its errors."""
        try:
            return fn(*args, **kwargs)
        except GeocoderParseError as e:
            raise ParseError("Could not parse geocoding response", cause=e, query=query)
        except GeocoderServiceError as e:
            raise UpstreamError(
                "Geocoding service request failed",
                cause=e,
                status_code=_status_code(e),
                query=query,
            )
        except GeopyError as e:
            raise UpstreamError("Geocoding client error", cause=e, query=query)

    def search(self, address: str) -> Optional[GeocodeResult]:
        """Geocode an address within the configured country.

        Args:
            address: Free-form address.

        Returns:
            The first match, or None if nothing was found.

        Raises:
            UpstreamError: On transport failures or non-success statuses.
            ParseError: If the match has no usable coordinates.
        """
        geocoder = self._get_geocoder()
        location = self._call(
            address,
            geocoder.geocode,
            address,
            exactly_one=True,
            addressdetails=True,
            country_codes=self.config.country_code,
        )

        if location is None:
            self._logger.debug("Geocode returned no result", extra={"query": address})
            return None

        try:
            latitude = float(location.latitude)
            longitude = float(location.longitude)
        except (TypeError, ValueError) as e:
            raise ParseError("Invalid coordinates in geocoding response", cause=e, query=address)
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            raise ParseError("Invalid coordinates in geocoding response", query=address)

        raw = location.raw if isinstance(location.raw, Mapping) else {}
        display_name = raw.get("display_name") or location.address or ""

        self._logger.debug(
            "Geocode success",
            extra={"query": address, "display_name": display_name},
        )
        return GeocodeResult(
            latitude=latitude,
            longitude=longitude,
            display_name=str(display_name),
            kind=ResultKind.RESOLVED,
        )

    def reverse(self, latitude: float, longitude: float) -> Optional[Mapping[str, Any]]:
        """Reverse geocode coordinates.

        Args:
            latitude: Latitude in decimal degrees.
            longitude: Longitude in decimal degrees.

        Returns:
            The raw Nominatim result, or None if nothing was found, the
            point is not a valid coordinate, or the result lies outside
            the configured country.

        Raises:
            UpstreamError: On transport failures or non-success statuses.
            ParseError: If the result is not a JSON object.
        """
        query = f"{latitude},{longitude}"
        geocoder = self._get_geocoder()
        try:
            location = self._call(
                query,
                geocoder.reverse,
                (latitude, longitude),
                exactly_one=True,
                addressdetails=True,
            )
        except ValueError as e:
            # geopy rejects out-of-range points before sending anything
            self._logger.info(
                "Reverse geocode point out of range",
                extra={"query": query, "error": str(e)},
            )
            return None

        if location is None:
            self._logger.debug("Reverse geocode returned no result", extra={"query": query})
            return None

        raw = location.raw
        if not isinstance(raw, Mapping):
            raise ParseError("Unexpected reverse geocoding payload", query=query)

        address = raw.get("address")
        if address is not None and not isinstance(address, Mapping):
            raise ParseError("Unexpected address details in payload", query=query)

        country_code = (address or {}).get("country_code")
        if country_code and country_code.lower() != self.config.country_code.lower():
            self._logger.info(
                "Reverse geocode outside configured country",
                extra={"query": query, "country_code": country_code},
            )
            return None

        return raw
