"""Python client for the geocoding API.

Mirrors what the listing pages do in the browser: ask our own
``/geocode`` endpoint and fall back to the centre of Reconquista whenever
anything goes wrong, so maps always have a point to show.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import requests

from .config import get_config
from .domain.models import RECONQUISTA_CENTER, format_address

logger = logging.getLogger(__name__)


def _default_base_url() -> str:
    api = get_config().api
    return api.base_url or f"http://{api.host}:{api.port}{api.prefix}"


@dataclass
class PropGeoClient:
    """Small requests-based client for the geocoding endpoints.

    Attributes:
        base_url: Root URL of the API, including any route prefix
        timeout: Per-request timeout in seconds
        session: requests session, shared across calls
    """

    base_url: str = field(default_factory=_default_base_url)
    timeout: float = 10.0
    session: requests.Session = field(default_factory=requests.Session, repr=False)

    def _get(self, path: str, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        url = f"{self.base_url.rstrip('/')}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Geocoding API call to {path} failed: {e}")
            return None
        return data if isinstance(data, dict) else None

    def geocode_address(self, address: Optional[str]) -> Tuple[float, float]:
        """Return ``(lat, lng)`` for an address, or the default centre."""
        if not address or not address.strip():
            return RECONQUISTA_CENTER.as_tuple()

        data = self._get("/geocode", {"address": address})
        if data and data.get("lat") and data.get("lng"):
            return float(data["lat"]), float(data["lng"])
        return RECONQUISTA_CENTER.as_tuple()

    def geocode_listing(
        self,
        address: Optional[str],
        neighborhood: Optional[str] = None,
        city: Optional[str] = None,
    ) -> Tuple[float, float]:
        """Geocode a listing from its address parts, as the listing maps do."""
        return self.geocode_address(format_address(address, neighborhood, city))

    def reverse_geocode(self, latitude: float, longitude: float) -> Optional[Dict[str, Any]]:
        """Return the structured address for coordinates, or None on failure."""
        return self._get("/reverse-geocode", {"lat": latitude, "lng": longitude})
