"""Services layer - Application orchestration.

Available services:
- ForwardGeocodingService: address -> coordinates
- ReverseGeocodingService: coordinates -> address
"""

from .geocoding_service import (
    ForwardGeocodingService,
    ReverseGeocodingService,
    coordinate_key,
    normalize_address,
    parse_coordinates,
)

__all__ = [
    "ForwardGeocodingService",
    "ReverseGeocodingService",
    "normalize_address",
    "parse_coordinates",
    "coordinate_key",
]
