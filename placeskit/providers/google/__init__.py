"""Google Places API client, request options and response facade."""

from .client import GooglePlacesClient, create_client
from .parameters import AutocompleteParams, ParameterStore, PhotoParams, SearchParams
from .response import AddressType, Amenity, PlacesResponse

__all__ = [
    "GooglePlacesClient",
    "create_client",
    "ParameterStore",
    "SearchParams",
    "AutocompleteParams",
    "PhotoParams",
    "PlacesResponse",
    "AddressType",
    "Amenity",
]
