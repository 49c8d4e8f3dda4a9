"""Geocoding port - Abstraction over the upstream geocoding service.

This protocol defines the contract for geocoding services, allowing
different implementations (Nominatim, a test double, etc.) to be used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import GeocodeResult


class GeocoderPort(Protocol):
    """Port for upstream geocoding services.

    Implementation: adapters/geocoding/nominatim_adapter.py

    Implementations make exactly one request per call and never fall
    back on their own: failures are raised so the services can decide.
    """

    def search(self, address: str) -> Optional[GeocodeResult]:
        """Geocode an address to coordinates.

        Args:
            address: Free-form address, e.g. "Belgrano 123, Reconquista".

        Returns:
            The first match, or None if the service found nothing.

        Raises:
            UpstreamError: On transport failures or non-success statuses.
            ParseError: If the response cannot be read.
        """
        ...

    def reverse(self, latitude: float, longitude: float) -> Optional[Mapping[str, Any]]:
        """Reverse geocode coordinates.

        Args:
            latitude: Latitude in decimal degrees.
            longitude: Longitude in decimal degrees.

        Returns:
            The raw result (``display_name`` and ``address`` details), or
            None if the service found nothing in the configured country.

        Raises:
            UpstreamError: On transport failures or non-success statuses.
            ParseError: If the response cannot be read.
        """
        ...
