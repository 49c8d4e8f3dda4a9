"""Geocoding HTTP endpoints.

Both endpoints answer 200 with either a real or a fallback result, and
400 only when the query parameters are missing or malformed.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request

from ..services import ForwardGeocodingService, ReverseGeocodingService

router = APIRouter()


def get_forward_service(request: Request) -> ForwardGeocodingService:
    return request.app.state.container.resolve(ForwardGeocodingService)


def get_reverse_service(request: Request) -> ReverseGeocodingService:
    return request.app.state.container.resolve(ReverseGeocodingService)


@router.get("/geocode")
def geocode(
    address: Optional[str] = None,
    service: ForwardGeocodingService = Depends(get_forward_service),
):
    """Convert an address into coordinates.

    Unknown addresses and upstream failures return the default location
    with a fallback marker in ``display_name``.
    """
    return service.geocode(address).to_payload()


@router.get("/reverse-geocode")
def reverse_geocode(
    lat: Optional[str] = None,
    lng: Optional[str] = None,
    service: ReverseGeocodingService = Depends(get_reverse_service),
):
    """Convert coordinates into a structured address."""
    return service.reverse_geocode(lat, lng).to_payload()


@router.get("/health")
def health(
    forward: ForwardGeocodingService = Depends(get_forward_service),
    reverse: ReverseGeocodingService = Depends(get_reverse_service),
):
    return {
        "status": "ok",
        "caches": {
            "geocode": forward.cache.stats(),
            "reverse_geocode": reverse.cache.stats(),
        },
    }
