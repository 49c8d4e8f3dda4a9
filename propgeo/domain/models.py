"""Immutable domain models for the geocoding service.

All models are frozen dataclasses with slots. They have no external
dependencies and describe what the two geocoding directions return.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Optional


class ResultKind(Enum):
    """How a geocoding result was obtained.

    Everything other than RESOLVED is a fallback built from the
    configured default location.
    """

    RESOLVED = auto()
    FALLBACK_NO_MATCH = auto()
    FALLBACK_ERROR = auto()
    FALLBACK_PENDING = auto()

    @property
    def is_fallback(self) -> bool:
        return self is not ResultKind.RESOLVED


@dataclass(frozen=True, slots=True)
class GeoLocation:
    """GPS coordinates representing a geographic location."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )

    def as_tuple(self) -> tuple[float, float]:
        return (self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class MapBounds:
    """Geographic bounding box.

    Attributes:
        north: Maximum latitude
        south: Minimum latitude
        east: Maximum longitude
        west: Minimum longitude
    """

    north: float
    south: float
    east: float
    west: float

    def contains(self, latitude: float, longitude: float) -> bool:
        """Check whether a point lies inside the box (edges included)."""
        return (
            self.south <= latitude <= self.north
            and self.west <= longitude <= self.east
        )


ARGENTINA_BOUNDS = MapBounds(
    north=-21.781277,
    south=-55.061314,
    east=-53.591835,
    west=-73.560562,
)

RECONQUISTA_CENTER = GeoLocation(latitude=-29.15, longitude=-59.65)


def is_valid_coordinate(
    latitude: Optional[float],
    longitude: Optional[float],
    bounds: MapBounds = ARGENTINA_BOUNDS,
) -> bool:
    """Check that both coordinates are present, finite and inside bounds."""
    if latitude is None or longitude is None:
        return False
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return False
    return bounds.contains(latitude, longitude)


def format_address(
    address: Optional[str] = None,
    neighborhood: Optional[str] = None,
    city: Optional[str] = None,
) -> str:
    """Join the non-empty parts of a listing address for display."""
    return ", ".join(part for part in (address, neighborhood, city) if part)


@dataclass(frozen=True, slots=True)
class GeocodeResult:
    """Forward geocoding result (address -> coordinates).

    Attributes:
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees
        display_name: Label of the matched place, or a fallback label
        kind: Whether the result is real or a fallback
    """

    latitude: float
    longitude: float
    display_name: str
    kind: ResultKind = ResultKind.RESOLVED

    @property
    def is_fallback(self) -> bool:
        return self.kind.is_fallback

    def to_payload(self) -> dict[str, Any]:
        """Wire representation returned by the HTTP endpoint."""
        return {
            "lat": self.latitude,
            "lng": self.longitude,
            "display_name": self.display_name,
        }


@dataclass(frozen=True, slots=True)
class ReverseGeocodeResult:
    """Reverse geocoding result (coordinates -> address).

    Attributes:
        street_address: House number and road, e.g. "1562 Jorge Newbery"
        neighborhood: Neighbourhood or suburb name
        city: City, town or village
        province: State or province
        country: Country name
        display_name: Full label as returned by the geocoding service
        formatted_address: Comma-joined short address for listings
        kind: Whether the result is real or a fallback
    """

    street_address: str
    neighborhood: str
    city: str
    province: str
    country: str
    display_name: str
    formatted_address: str
    kind: ResultKind = ResultKind.RESOLVED

    @property
    def is_fallback(self) -> bool:
        return self.kind.is_fallback

    def to_payload(self) -> dict[str, Any]:
        """Wire representation returned by the HTTP endpoint."""
        return {
            "address": self.street_address,
            "neighborhood": self.neighborhood,
            "city": self.city,
            "province": self.province,
            "country": self.country,
            "display_name": self.display_name,
            "formatted_address": self.formatted_address,
        }


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A cached value and the time it was stored (POSIX seconds)."""

    key: str
    value: Any
    stored_at: float

    def age(self, now: float) -> float:
        return now - self.stored_at
