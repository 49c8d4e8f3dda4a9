"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the geocoding services and the
adapters that talk to the outside world, so each piece can be swapped
in tests.
"""

from .cache import CachePort
from .geocoding import GeocoderPort
from .rate_limit import RateLimiterPort

__all__ = [
    "CachePort",
    "GeocoderPort",
    "RateLimiterPort",
]
