"""
Base interfaces for the Google Places integration.

This module defines the endpoint identities used to namespace requests
and the contract every cache backend must implement.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional


class Endpoint(Enum):
    """Google Places / Geocoding endpoints supported by the client."""
    GEOCODE = "geocode"
    PLACE_DETAILS = "place"
    FIND_PLACE = "find_places"
    NEARBY_SEARCH = "nearby"
    TEXT_SEARCH = "text_search"
    AUTOCOMPLETE = "autocomplete"
    QUERY_AUTOCOMPLETE = "query_autocomplete"
    PHOTO = "photo"


class CacheStore(ABC):
    """
    Abstract key-value store for decoded API payloads.

    Keys are opaque strings. Implementations must treat a TTL of 0 as
    "never expires".
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a cached payload.

        Args:
            key: Cache key

        Returns:
            The stored payload, or None when absent or expired
        """
        pass

    @abstractmethod
    def set(self, key: str, payload: Dict[str, Any], ttl_seconds: int) -> None:
        """
        Store a payload.

        Args:
            key: Cache key
            payload: Decoded JSON payload
            ttl_seconds: Lifetime in seconds (0 means no expiry)
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove a single entry. Returns True if something was removed."""
        pass

    @abstractmethod
    def delete_by_prefix(self, prefix: str) -> int:
        """Remove every entry whose key starts with prefix. Returns the count."""
        pass
