"""Google Places / Geocoding client with response caching."""

from .providers import (
    ApiError,
    Err,
    FileCache,
    InvalidConfiguration,
    MalformedResponse,
    MemoryCache,
    Ok,
    PlacesError,
    TransportError,
)
from .providers.google import GooglePlacesClient, PlacesResponse, create_client

__version__ = "1.0.0"

__all__ = [
    "GooglePlacesClient",
    "PlacesResponse",
    "create_client",
    "MemoryCache",
    "FileCache",
    "PlacesError",
    "TransportError",
    "MalformedResponse",
    "ApiError",
    "InvalidConfiguration",
    "Ok",
    "Err",
]
