"""
Google Places API client.

Uses the Places API (Legacy) and the Geocoding API JSON endpoints.
https://developers.google.com/maps/documentation/places/web-service/overview
https://developers.google.com/maps/documentation/geocoding

Every request operation returns ``Ok(PlacesResponse)`` or ``Err(PlacesError)``;
failures never escape as exceptions.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Union

import httpx

from ..base import CacheStore, Endpoint
from ..cache import CacheKey, FileCache, MemoryCache
from ..errors import (
    ApiError,
    Err,
    InvalidConfiguration,
    MalformedResponse,
    Ok,
    Result,
    TransportError,
)
from ..settings import PlacesSettings, get_settings
from .parameters import (
    DEFAULT_CACHE_EXPIRATION,
    MAX_SEARCH_RADIUS,
    ParameterStore,
    PhotoParams,
)
from .response import PlacesResponse

logger = logging.getLogger(__name__)

SUCCESS_STATUSES = ("OK", "ZERO_RESULTS")


class GooglePlacesClient(ParameterStore):
    """
    Client for the Google Places and Geocoding APIs.

    Decoded payloads are cached under a key derived from the endpoint, the
    merged request parameters and the API key.
    """

    # API endpoints (Legacy)
    GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
    PLACE_DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"
    FIND_PLACE_URL = "https://maps.googleapis.com/maps/api/place/findplacefromtext/json"
    NEARBY_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
    TEXT_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/textsearch/json"
    AUTOCOMPLETE_URL = "https://maps.googleapis.com/maps/api/place/autocomplete/json"
    QUERY_AUTOCOMPLETE_URL = "https://maps.googleapis.com/maps/api/place/queryautocomplete/json"
    PHOTO_URL = "https://maps.googleapis.com/maps/api/place/photo"

    ENDPOINT_URLS = {
        Endpoint.GEOCODE: GEOCODE_URL,
        Endpoint.PLACE_DETAILS: PLACE_DETAILS_URL,
        Endpoint.FIND_PLACE: FIND_PLACE_URL,
        Endpoint.NEARBY_SEARCH: NEARBY_SEARCH_URL,
        Endpoint.TEXT_SEARCH: TEXT_SEARCH_URL,
        Endpoint.AUTOCOMPLETE: AUTOCOMPLETE_URL,
        Endpoint.QUERY_AUTOCOMPLETE: QUERY_AUTOCOMPLETE_URL,
        Endpoint.PHOTO: PHOTO_URL,
    }

    def __init__(
        self,
        api_key: str,
        enable_cache: bool = True,
        cache_expiration: int = DEFAULT_CACHE_EXPIRATION,
        cache: Optional[CacheStore] = None,
        cache_prefix: str = "places_",
        timeout: float = 15.0,
        http_client: Optional[httpx.Client] = None,
        photo_defaults: Optional[PhotoParams] = None,
    ):
        """
        Initialize the Google Places client.

        Args:
            api_key: Google Cloud API key with Places and Geocoding enabled
            enable_cache: Whether to cache decoded responses
            cache_expiration: Cache lifetime in seconds (must not be negative)
            cache: Cache backend (an in-memory cache by default)
            cache_prefix: Namespace prefix for this client's cache keys
            timeout: Request timeout in seconds
            http_client: Optional pre-configured httpx client

        Raises:
            InvalidConfiguration: If cache_expiration is negative
        """
        super().__init__(api_key, enable_cache, cache_expiration, photo_defaults)
        self.cache = cache if cache is not None else MemoryCache()
        self.cache_prefix = cache_prefix
        self.timeout = timeout
        self._client = http_client
        self._owns_client = http_client is None

    def _get_client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(timeout=self.timeout)
            self._owns_client = True
        return self._client

    # Cache keys

    def cache_identifier(self, endpoint: Endpoint, params: Dict[str, Any]) -> str:
        """Identifier of the cache entry for a call; accepted by ``clear_cache``."""
        return CacheKey.build_identifier(endpoint, params)

    def _cache_key(self, identifier: str) -> str:
        return CacheKey(self.cache_prefix, identifier, self.get_api_key()).generate_key()

    def clear_cache(self, identifier: Optional[str] = None) -> int:
        """
        Clear cached data.

        Args:
            identifier: Entry to remove (see ``cache_identifier``). When
                omitted, every entry under this client's prefix is removed.

        Returns:
            Number of entries removed
        """
        if identifier is not None:
            removed = int(self.cache.delete(self._cache_key(identifier)))
        else:
            removed = self.cache.delete_by_prefix(self.cache_prefix)
        logger.info(f"Cleared {removed} Google Places cache entries")
        return removed

    # Operations

    def geocode(
        self,
        address: Union[str, Iterable[str]],
        params: Optional[Dict[str, Any]] = None,
    ) -> Result[PlacesResponse]:
        """
        Geocode an address.

        Args:
            address: Address string, or address parts joined with ","
                (empty parts are skipped)
            params: Additional Geocoding API parameters (region, language,
                components, bounds...)
        """
        if not isinstance(address, str):
            address = ",".join(part for part in address if part)

        request_params = dict(params or {})
        request_params["address"] = address
        return self._cached_request(Endpoint.GEOCODE, request_params)

    def place_details(
        self, place_id: str, fields: Optional[Iterable[str]] = None
    ) -> Result[PlacesResponse]:
        """
        Get place details by Place ID.

        Args:
            place_id: Google Place ID
            fields: Optional list of fields to retrieve
        """
        params = {"place_id": place_id}
        fields = list(fields or [])
        if fields:
            params["fields"] = ",".join(fields)
        return self._cached_request(Endpoint.PLACE_DETAILS, params)

    def find_places(self, query: str) -> Result[PlacesResponse]:
        """Find places by text query, using the stored search options."""
        params = {"input": query, "inputtype": "textquery"}
        params.update(self.search_params.to_query())
        return self._cached_request(Endpoint.FIND_PLACE, params)

    def nearby_search(
        self, lat: float, lng: float, radius: int = 1000
    ) -> Result[PlacesResponse]:
        """
        Search for places near a point, using the stored search options.

        Args:
            lat: Latitude
            lng: Longitude
            radius: Radius in meters, capped at 50000
        """
        params = {
            "location": f"{lat},{lng}",
            "radius": min(int(radius), MAX_SEARCH_RADIUS),
        }
        params.update(self.search_params.to_query())
        return self._cached_request(Endpoint.NEARBY_SEARCH, params)

    def text_search(self, query: str) -> Result[PlacesResponse]:
        """Text search for places, using the stored search options."""
        params = {"query": query}
        params.update(self.search_params.to_query())
        return self._cached_request(Endpoint.TEXT_SEARCH, params)

    def autocomplete(self, input_text: str) -> Result[PlacesResponse]:
        """Get place predictions, using the stored autocomplete options."""
        params = {"input": input_text}
        params.update(self.autocomplete_params.to_query())
        return self._cached_request(Endpoint.AUTOCOMPLETE, params)

    def query_autocomplete(self, input_text: str) -> Result[PlacesResponse]:
        """Get query predictions, using the stored autocomplete options."""
        params = {"input": input_text}
        params.update(self.autocomplete_params.to_query())
        return self._cached_request(Endpoint.QUERY_AUTOCOMPLETE, params)

    def photo_url(
        self,
        photo_reference: str,
        max_width: Optional[int] = None,
        max_height: Optional[int] = None,
    ) -> str:
        """
        Build the URL of a place photo. No request is made.

        Args:
            photo_reference: Photo reference from a details or search result
            max_width: Override for the stored maximum width
            max_height: Override for the stored maximum height
        """
        photo_params = self.photo_params
        if max_width is not None:
            photo_params = photo_params.replace(maxwidth=max_width)
        if max_height is not None:
            photo_params = photo_params.replace(maxheight=max_height)

        params = {"photo_reference": photo_reference, "key": self.get_api_key()}
        params.update(photo_params.to_query())
        return str(httpx.URL(self.PHOTO_URL, params=params))

    # Transport

    def _cached_request(
        self, endpoint: Endpoint, params: Dict[str, Any]
    ) -> Result[PlacesResponse]:
        identifier = self.cache_identifier(endpoint, params)
        cache_key = self._cache_key(identifier)

        if self.is_cache_enabled():
            try:
                cached = self.cache.get(cache_key)
            except OSError as e:
                logger.warning(f"Cache read failed for {identifier}: {e}")
                cached = None
            if cached is not None:
                logger.debug(f"Cache HIT for {identifier}")
                return Ok(PlacesResponse(cached))
            logger.debug(f"Cache MISS for {identifier}")

        result = self._request(endpoint, params)
        if result.is_err:
            return result

        if self.is_cache_enabled():
            try:
                self.cache.set(cache_key, result.value, self.get_cache_expiration())
            except OSError as e:
                logger.warning(f"Cache write failed for {identifier}: {e}")

        return Ok(PlacesResponse(result.value))

    def _request(self, endpoint: Endpoint, params: Dict[str, Any]) -> Result[Dict[str, Any]]:
        """Make a single GET request and decode it."""
        url = self.ENDPOINT_URLS[endpoint]
        query = dict(params)
        query["key"] = self.get_api_key()

        logger.debug(f"Google Places request: {endpoint.value} {url}")

        try:
            response = self._get_client().get(
                url,
                params=query,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except httpx.TimeoutException:
            logger.warning(f"Google Places API timeout for {endpoint.value}")
            return Err(TransportError(f"timed out after {self.timeout:g} seconds", timed_out=True))
        except httpx.HTTPError as e:
            logger.warning(f"Google Places API request failed for {endpoint.value}: {e}")
            return Err(TransportError(str(e)))

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Result[Dict[str, Any]]:
        """Decode the body and map API statuses to errors."""
        try:
            data = response.json()
        except ValueError:
            logger.error(
                f"Google Places API returned a non-JSON body (HTTP {response.status_code})"
            )
            return Err(MalformedResponse(response.status_code))

        if not isinstance(data, dict):
            logger.error("Google Places API returned a JSON value that is not an object")
            return Err(MalformedResponse(response.status_code))

        status = data.get("status")
        if status not in SUCCESS_STATUSES:
            logger.warning(
                f"Google Places API status: {status} (HTTP {response.status_code})"
            )
            return Err(ApiError(
                status=status or "",
                error_message=data.get("error_message"),
                http_status=response.status_code,
            ))

        return Ok(data)

    def close(self):
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client and not self._client.is_closed:
            self._client.close()
        self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def create_client(settings: Optional[PlacesSettings] = None) -> GooglePlacesClient:
    """
    Build a client from settings.

    Args:
        settings: Settings to use (the global settings by default)

    Raises:
        InvalidConfiguration: If no API key is configured
    """
    settings = settings or get_settings()
    if not settings.is_configured():
        raise InvalidConfiguration(
            "Google Places API key not configured. "
            "Set the GOOGLE_PLACES_API_KEY environment variable.",
            code="missing_api_key",
        )

    if settings.google_places_cache_backend == "file":
        cache: CacheStore = FileCache(settings.google_places_cache_dir)
    else:
        cache = MemoryCache()

    return GooglePlacesClient(
        api_key=settings.google_places_api_key,
        enable_cache=settings.google_places_cache_enabled,
        cache_expiration=settings.google_places_cache_expiration,
        cache=cache,
        cache_prefix=settings.google_places_cache_prefix,
        timeout=settings.google_places_timeout,
        photo_defaults=PhotoParams(
            maxwidth=settings.google_places_photo_max_width,
            maxheight=settings.google_places_photo_max_height,
        ),
    )
