"""
Pytest configuration and shared fixtures.

Provides sample API payloads and a fake Places API built on
httpx.MockTransport so client tests never touch the network.
"""

import os
from typing import Any, Callable, Dict, List

import httpx
import pytest

from placeskit.providers.cache import MemoryCache
from placeskit.providers.google.client import GooglePlacesClient
from placeskit.providers.settings import reset_settings

TEST_API_KEY = "test_api_key_12345"


@pytest.fixture
def geocode_payload() -> Dict[str, Any]:
    """Geocoding API response for a street address."""
    return {
        "status": "OK",
        "results": [
            {
                "formatted_address": "1600 Amphitheatre Pkwy, Mountain View, CA 94043, USA",
                "place_id": "ChIJ2eUgeAK6j4ARbn5u_wAGqWA",
                "types": ["street_address"],
                "geometry": {
                    "location": {"lat": 37.4224764, "lng": -122.0842499},
                    "viewport": {
                        "northeast": {"lat": 37.4238, "lng": -122.0829},
                        "southwest": {"lat": 37.4211, "lng": -122.0856},
                    },
                },
                "plus_code": {"compound_code": "CWC8+W5 Mountain View, California, USA"},
                "address_components": [
                    {"long_name": "1600", "short_name": "1600", "types": ["street_number"]},
                    {"long_name": "Amphitheatre Parkway", "short_name": "Amphitheatre Pkwy", "types": ["route"]},
                    {"long_name": "Mountain View", "short_name": "Mountain View", "types": ["locality", "political"]},
                    {"long_name": "California", "short_name": "CA", "types": ["administrative_area_level_1", "political"]},
                    {"long_name": "United States", "short_name": "US", "types": ["country", "political"]},
                    {"long_name": "94043", "short_name": "94043", "types": ["postal_code"]},
                ],
            }
        ],
    }


@pytest.fixture
def details_payload() -> Dict[str, Any]:
    """Place Details API response for a restaurant."""
    return {
        "status": "OK",
        "html_attributions": [],
        "result": {
            "name": "Pike Place Chowder",
            "place_id": "ChIJ_place_chowder",
            "formatted_address": "1530 Post Alley, Seattle, WA 98101, USA",
            "formatted_phone_number": "(206) 555-0199",
            "international_phone_number": "+1 206-555-0199",
            "website": "https://pikeplacechowder.com/",
            "url": "https://maps.google.com/?cid=123",
            "rating": 4.6,
            "user_ratings_total": 8123,
            "price_level": 2,
            "business_status": "OPERATIONAL",
            "utc_offset": -420,
            "editorial_summary": {"overview": "Chowder shop in the market."},
            "takeout": True,
            "delivery": False,
            "dine_in": True,
            "serves_beer": True,
            "wheelchair_accessible_entrance": True,
            "icon": "https://maps.gstatic.com/icons/restaurant-71.png",
            "icon_background_color": "#FF9E67",
            "reviews": [{"author_name": "Ana", "rating": 5, "text": "Great chowder"}],
            "photos": [{"photo_reference": "photo_ref_1", "width": 800, "height": 600}],
            "opening_hours": {
                "open_now": True,
                "periods": [
                    {"open": {"day": 1, "time": "1100"}, "close": {"day": 1, "time": "1700"}},
                    {"open": {"day": 2, "time": "1100"}, "close": {"day": 2, "time": "1700"}},
                ],
            },
        },
    }


class FakePlacesApi:
    """Records requests and answers them from a queue (or a fixed payload)."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.handler: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={"status": "OK", "results": []})
        )

    def respond_with(self, payload: Any, status_code: int = 200):
        self.handler = lambda request: httpx.Response(status_code, json=payload)

    def respond_with_text(self, body: str, status_code: int = 200):
        self.handler = lambda request: httpx.Response(status_code, text=body)

    def raise_error(self, exc_factory: Callable[[httpx.Request], Exception]):
        def handler(request):
            raise exc_factory(request)
        self.handler = handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def last_params(self) -> Dict[str, str]:
        return dict(self.requests[-1].url.params)


@pytest.fixture
def fake_api() -> FakePlacesApi:
    return FakePlacesApi()


@pytest.fixture
def memory_cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture
def client(fake_api, memory_cache):
    """Client wired to the fake API and an empty in-memory cache."""
    http_client = httpx.Client(transport=httpx.MockTransport(fake_api))
    places_client = GooglePlacesClient(
        api_key=TEST_API_KEY,
        cache=memory_cache,
        http_client=http_client,
    )
    yield places_client
    http_client.close()


@pytest.fixture
def mock_env_vars():
    """Set Google Places environment variables for the duration of a test."""
    original_values = {}
    test_values = {
        "GOOGLE_PLACES_API_KEY": TEST_API_KEY,
        "GOOGLE_PLACES_CACHE_ENABLED": "true",
        "GOOGLE_PLACES_CACHE_EXPIRATION": "3600",
        "GOOGLE_PLACES_CACHE_BACKEND": "memory",
    }

    for key, value in test_values.items():
        original_values[key] = os.getenv(key)
        os.environ[key] = value

    reset_settings()

    yield test_values

    for key, original_value in original_values.items():
        if original_value is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = original_value

    reset_settings()
