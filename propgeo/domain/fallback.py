"""Fallback policy shared by both geocoding directions.

Whenever upstream data is missing or the lookup fails, the services answer
with the default location below instead of an error. The labels only differ
so that logs and humans can tell the cases apart; code should look at
``ResultKind`` instead of parsing them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .models import GeocodeResult, ReverseGeocodeResult, ResultKind

if TYPE_CHECKING:
    from ..config import FallbackConfig


@dataclass(frozen=True)
class FallbackPolicy:
    """Default location and labels used when geocoding cannot resolve.

    Attributes:
        latitude: Fallback latitude (Reconquista, Santa Fe)
        longitude: Fallback longitude
        city: Default city for reverse results
        province: Default province for reverse results
        country: Default country for reverse results
    """

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

    @classmethod
    def from_config(cls, config: FallbackConfig) -> FallbackPolicy:
        return cls(**config.model_dump())

    def forward(self, kind: ResultKind) -> GeocodeResult:
        """Build the forward fallback for the given kind."""
        labels = {
            ResultKind.FALLBACK_NO_MATCH: self.forward_no_match_label,
            ResultKind.FALLBACK_ERROR: self.forward_error_label,
            ResultKind.FALLBACK_PENDING: self.forward_pending_label,
        }
        if kind not in labels:
            raise ValueError(f"Not a fallback kind: {kind}")
        return GeocodeResult(
            latitude=self.latitude,
            longitude=self.longitude,
            display_name=labels[kind],
            kind=kind,
        )

    def reverse(self, kind: ResultKind) -> ReverseGeocodeResult:
        """Build the reverse fallback for the given kind."""
        labels = {
            ResultKind.FALLBACK_NO_MATCH: (
                self.reverse_no_match_label,
                self.reverse_no_match_address,
            ),
            ResultKind.FALLBACK_ERROR: (
                self.reverse_error_label,
                self.reverse_error_label,
            ),
            ResultKind.FALLBACK_PENDING: (
                self.reverse_pending_label,
                self.reverse_pending_address,
            ),
        }
        if kind not in labels:
            raise ValueError(f"Not a fallback kind: {kind}")
        display_name, formatted_address = labels[kind]
        return ReverseGeocodeResult(
            street_address="",
            neighborhood="",
            city=self.city,
            province=self.province,
            country=self.country,
            display_name=display_name,
            formatted_address=formatted_address,
            kind=kind,
        )
