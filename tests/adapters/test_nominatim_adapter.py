"""Tests for the Nominatim geocoder adapter."""

from unittest.mock import MagicMock, patch

import pytest
from geopy.adapters import AdapterHTTPError, BaseSyncAdapter
from geopy.exc import GeocoderParseError, GeocoderServiceError, GeocoderTimedOut
from geopy.geocoders import Nominatim
from geopy.location import Location

from propgeo.adapters.cache import InMemoryCache
from propgeo.adapters.geocoding import NominatimGeocoderAdapter
from propgeo.adapters.rate_limit import MinIntervalRateLimiter
from propgeo.config import GeocodingConfig
from propgeo.domain.errors import ParseError, UpstreamError
from propgeo.domain.models import ResultKind
from propgeo.services import ReverseGeocodingService

RECONQUISTA_RAW = {
    "lat": "-29.1444",
    "lon": "-59.6436",
    "display_name": "Belgrano 123, Reconquista, Santa Fe, Argentina",
    "address": {
        "house_number": "123",
        "road": "Belgrano",
        "city": "Reconquista",
        "state": "Santa Fe",
        "country": "Argentina",
        "country_code": "ar",
    },
}


def make_location(raw=RECONQUISTA_RAW):
    return Location(
        raw["display_name"], (float(raw["lat"]), float(raw["lon"])), raw
    )


class ServiceUnavailableAdapter(BaseSyncAdapter):
    """geopy transport that answers every request with HTTP 503."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.urls = []

    def get_json(self, url, *, timeout, headers):
        self.urls.append(url)
        raise AdapterHTTPError(
            "Non-successful status code 503",
            status_code=503,
            headers={},
            text="Service Unavailable",
        )

    def get_text(self, url, *, timeout, headers):
        return self.get_json(url, timeout=timeout, headers=headers)


def make_nominatim():
    return Nominatim(user_agent="TestAgency/1.0", adapter_factory=ServiceUnavailableAdapter)


class TestNominatimGeocoderAdapter:
    """Test suite for NominatimGeocoderAdapter."""

    @pytest.fixture
    def geolocator(self):
        return MagicMock()

    @pytest.fixture
    def adapter(self, geolocator):
        return NominatimGeocoderAdapter(GeocodingConfig(), geolocator=geolocator)

    def test_builds_nominatim_with_configured_user_agent(self):
        config = GeocodingConfig(user_agent="TestAgency/1.0", timeout_seconds=3)
        with patch(
            "propgeo.adapters.geocoding.nominatim_adapter.Nominatim"
        ) as nominatim_cls:
            nominatim_cls.return_value.geocode.return_value = None
            adapter = NominatimGeocoderAdapter(config)
            adapter.search("Belgrano 123")

        nominatim_cls.assert_called_once_with(
            user_agent="TestAgency/1.0",
            timeout=3,
            domain="nominatim.openstreetmap.org",
            scheme="https",
        )

    def test_search_restricts_country_and_single_result(self, adapter, geolocator):
        geolocator.geocode.return_value = make_location()

        adapter.search("Belgrano 123, Reconquista")

        geolocator.geocode.assert_called_once_with(
            "Belgrano 123, Reconquista",
            exactly_one=True,
            addressdetails=True,
            country_codes="ar",
        )

    def test_search_returns_first_result(self, adapter, geolocator):
        geolocator.geocode.return_value = make_location()

        result = adapter.search("Belgrano 123, Reconquista")

        assert result.latitude == pytest.approx(-29.1444)
        assert result.longitude == pytest.approx(-59.6436)
        assert result.display_name == "Belgrano 123, Reconquista, Santa Fe, Argentina"
        assert result.kind is ResultKind.RESOLVED

    def test_search_no_result_returns_none(self, adapter, geolocator):
        geolocator.geocode.return_value = None

        assert adapter.search("ThisAddressDoesNotExistAnywhere12345") is None

    def test_search_http_error_keeps_status_code(self):
        nominatim = make_nominatim()
        adapter = NominatimGeocoderAdapter(GeocodingConfig(), geolocator=nominatim)

        with pytest.raises(UpstreamError) as exc_info:
            adapter.search("Belgrano 123")

        assert exc_info.value.status_code == 503
        assert exc_info.value.query == "Belgrano 123"
        assert len(nominatim.adapter.urls) == 1

    def test_reverse_http_error_keeps_status_code(self):
        adapter = NominatimGeocoderAdapter(GeocodingConfig(), geolocator=make_nominatim())

        with pytest.raises(UpstreamError) as exc_info:
            adapter.reverse(-29.15, -59.65)

        assert exc_info.value.status_code == 503

    def test_search_timeout_is_upstream_error(self, adapter, geolocator):
        geolocator.geocode.side_effect = GeocoderTimedOut("timed out")

        with pytest.raises(UpstreamError) as exc_info:
            adapter.search("Belgrano 123")

        assert exc_info.value.status_code is None

    def test_search_unreadable_payload_is_parse_error(self, adapter, geolocator):
        geolocator.geocode.side_effect = GeocoderParseError("bad json")

        with pytest.raises(ParseError):
            adapter.search("Belgrano 123")

    def test_search_bad_coordinates_is_parse_error(self, adapter, geolocator):
        location = MagicMock()
        location.latitude = "not-a-number"
        location.longitude = "-59.65"
        geolocator.geocode.return_value = location

        with pytest.raises(ParseError):
            adapter.search("Belgrano 123")

    def test_reverse_returns_raw_payload(self, adapter, geolocator):
        geolocator.reverse.return_value = make_location()

        raw = adapter.reverse(-29.15, -59.65)

        assert raw["address"]["city"] == "Reconquista"
        geolocator.reverse.assert_called_once_with(
            (-29.15, -59.65), exactly_one=True, addressdetails=True
        )

    def test_reverse_no_result_returns_none(self, adapter, geolocator):
        geolocator.reverse.return_value = None

        assert adapter.reverse(0.0, 0.0) is None

    def test_reverse_outside_country_returns_none(self, adapter, geolocator):
        raw = dict(RECONQUISTA_RAW)
        raw["address"] = dict(RECONQUISTA_RAW["address"], country_code="uy")
        geolocator.reverse.return_value = make_location(raw)

        assert adapter.reverse(-34.9, -56.2) is None

    def test_reverse_service_error_is_upstream_error(self, adapter, geolocator):
        geolocator.reverse.side_effect = GeocoderServiceError("500")

        with pytest.raises(UpstreamError):
            adapter.reverse(-29.15, -59.65)

    def test_reverse_out_of_range_point_returns_none(self, adapter, geolocator):
        geolocator.reverse.side_effect = ValueError("Latitude must be in the [-90; 90] range.")

        assert adapter.reverse(95.0, 0.0) is None

    def test_reverse_out_of_range_point_sends_no_request(self):
        nominatim = make_nominatim()
        adapter = NominatimGeocoderAdapter(GeocodingConfig(), geolocator=nominatim)

        assert adapter.reverse(95.0, 0.0) is None
        assert nominatim.adapter.urls == []


def test_out_of_range_point_is_cached_not_found():
    nominatim = make_nominatim()
    service = ReverseGeocodingService(
        geocoder=NominatimGeocoderAdapter(GeocodingConfig(), geolocator=nominatim),
        cache=InMemoryCache(name="reverse_geocode"),
        rate_limiter=MinIntervalRateLimiter(min_interval_seconds=0.0),
    )

    result = service.lookup(95.0, 0.0)

    assert result.kind is ResultKind.FALLBACK_NO_MATCH
    assert result.display_name == "Ubicación no encontrada"
    assert service.cache.lookup("95.000000,0.000000") is result
    assert nominatim.adapter.urls == []
