"""
Request option sets for the Google Places client.

Each option set is an immutable Pydantic model; the ``with_*`` builders
return a new, re-validated copy. ``ParameterStore`` keeps the current
option sets of one client and exposes chainable setters over them.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import Err, InvalidConfiguration, Ok, Result

logger = logging.getLogger(__name__)

MIN_PRICE_LEVEL = 0
MAX_PRICE_LEVEL = 4
MAX_SEARCH_RADIUS = 50000
RANK_BY_VALUES = ("prominence", "distance")
DEFAULT_CACHE_EXPIRATION = 86400


def clamp_price_level(level: int) -> int:
    """Clamp a price level to the 0-4 range used by the API."""
    return max(MIN_PRICE_LEVEL, min(MAX_PRICE_LEVEL, int(level)))


class OptionSet(BaseModel):
    """Base class for the immutable option sets."""

    model_config = ConfigDict(frozen=True)

    def replace(self, **changes: Any):
        """Return a validated copy with the given fields changed."""
        return type(self).model_validate({**self.model_dump(), **changes})

    def to_query(self) -> Dict[str, Any]:
        """
        Render the option set as query parameters.

        Falsy entries (empty strings, None, False, 0, empty lists) are
        dropped; lists are joined with "|" and booleans rendered as "true".
        """
        query = {}
        for name, value in self.model_dump().items():
            if not value:
                continue
            if isinstance(value, bool):
                value = "true"
            elif isinstance(value, (list, tuple)):
                value = "|".join(str(item) for item in value)
            query[name] = value
        return query


class SearchParams(OptionSet):
    """Options shared by find place, nearby search and text search."""

    type: str = ""
    keyword: str = ""
    language: str = ""
    minprice: Optional[int] = None
    maxprice: Optional[int] = None
    opennow: bool = False
    rankby: str = ""
    pagetoken: str = ""

    @field_validator("minprice", "maxprice")
    @classmethod
    def _clamp_price(cls, value: Optional[int]) -> Optional[int]:
        return None if value is None else clamp_price_level(value)

    @field_validator("rankby")
    @classmethod
    def _check_rank_by(cls, value: str) -> str:
        if value and value not in RANK_BY_VALUES:
            raise ValueError(f"rankby must be one of {RANK_BY_VALUES}")
        return value

    def with_rank_by(self, rankby: str) -> "SearchParams":
        """Set the ranking method; unknown values leave the options unchanged."""
        if rankby not in RANK_BY_VALUES:
            logger.debug(f"Ignoring unsupported rankby value: {rankby!r}")
            return self
        return self.replace(rankby=rankby)


class AutocompleteParams(OptionSet):
    """Options for place and query autocomplete."""

    types: List[str] = Field(default_factory=list)
    components: str = ""
    language: str = ""
    location: Optional[str] = None
    radius: Optional[int] = None
    strictbounds: bool = False
    sessiontoken: str = ""

    def with_location(self, lat: float, lng: float, radius: int = MAX_SEARCH_RADIUS) -> "AutocompleteParams":
        """Bias predictions towards a circle around (lat, lng)."""
        return self.replace(location=f"{lat},{lng}", radius=radius)


class PhotoParams(OptionSet):
    """Size limits for photo URLs."""

    maxwidth: Optional[int] = 400
    maxheight: Optional[int] = 400


class ParameterStore:
    """
    Mutable holder for one client's configuration and option sets.

    Setters return the store so calls can be chained. The option sets
    themselves are immutable and replaced wholesale on every change.
    """

    def __init__(
        self,
        api_key: str,
        enable_cache: bool = True,
        cache_expiration: int = DEFAULT_CACHE_EXPIRATION,
        photo_defaults: Optional[PhotoParams] = None,
    ):
        self._api_key = api_key
        self._cache_settings = {"enabled": enable_cache, "expiration": DEFAULT_CACHE_EXPIRATION}
        self._photo_defaults = photo_defaults or PhotoParams()
        self.search_params = SearchParams()
        self.autocomplete_params = AutocompleteParams()
        self.photo_params = self._photo_defaults

        # Unwrap so a negative value fails at construction time
        self.set_cache_expiration(cache_expiration).unwrap()

    # API key

    def set_api_key(self, api_key: str) -> "ParameterStore":
        self._api_key = api_key
        return self

    def get_api_key(self) -> str:
        return self._api_key

    # Cache

    def set_cache_enabled(self, enable: bool) -> "ParameterStore":
        self._cache_settings["enabled"] = enable
        return self

    def is_cache_enabled(self) -> bool:
        return self._cache_settings["enabled"]

    def set_cache_expiration(self, seconds: int) -> Result["ParameterStore"]:
        """
        Set the cache lifetime in seconds.

        Returns:
            Ok(store), or Err(InvalidConfiguration) for a negative value, in
            which case the current expiration is kept.
        """
        if seconds < 0:
            return Err(InvalidConfiguration(
                "Cache expiration time cannot be negative",
                code="invalid_expiration",
                details={"seconds": seconds},
            ))
        self._cache_settings["expiration"] = seconds
        return Ok(self)

    def get_cache_expiration(self) -> int:
        return self._cache_settings["expiration"]

    def get_cache_settings(self) -> Dict[str, Any]:
        return dict(self._cache_settings)

    # Photo options

    def set_photo_max_width(self, width: int) -> "ParameterStore":
        self.photo_params = self.photo_params.replace(maxwidth=width)
        return self

    def get_photo_max_width(self) -> Optional[int]:
        return self.photo_params.maxwidth

    def set_photo_max_height(self, height: int) -> "ParameterStore":
        self.photo_params = self.photo_params.replace(maxheight=height)
        return self

    def get_photo_max_height(self) -> Optional[int]:
        return self.photo_params.maxheight

    # Search options

    def set_search_type(self, place_type: str) -> "ParameterStore":
        self.search_params = self.search_params.replace(type=place_type)
        return self

    def get_search_type(self) -> Optional[str]:
        return self.search_params.type or None

    def set_search_keyword(self, keyword: str) -> "ParameterStore":
        self.search_params = self.search_params.replace(keyword=keyword)
        return self

    def get_search_keyword(self) -> Optional[str]:
        return self.search_params.keyword or None

    def set_min_price(self, level: int) -> "ParameterStore":
        self.search_params = self.search_params.replace(minprice=level)
        return self

    def get_min_price(self) -> Optional[int]:
        return self.search_params.minprice

    def set_max_price(self, level: int) -> "ParameterStore":
        self.search_params = self.search_params.replace(maxprice=level)
        return self

    def get_max_price(self) -> Optional[int]:
        return self.search_params.maxprice

    def set_open_now(self, open_now: bool) -> "ParameterStore":
        self.search_params = self.search_params.replace(opennow=open_now)
        return self

    def get_open_now(self) -> bool:
        return self.search_params.opennow

    def set_rank_by(self, rankby: str) -> "ParameterStore":
        self.search_params = self.search_params.with_rank_by(rankby)
        return self

    def get_rank_by(self) -> Optional[str]:
        return self.search_params.rankby or None

    def set_language(self, language: str) -> "ParameterStore":
        """Set the result language for both search and autocomplete."""
        self.search_params = self.search_params.replace(language=language)
        self.autocomplete_params = self.autocomplete_params.replace(language=language)
        return self

    def get_language(self) -> Optional[str]:
        return self.search_params.language or None

    def set_page_token(self, token: str) -> "ParameterStore":
        self.search_params = self.search_params.replace(pagetoken=token)
        return self

    def get_page_token(self) -> Optional[str]:
        return self.search_params.pagetoken or None

    # Autocomplete options

    def set_autocomplete_types(self, types: List[str]) -> "ParameterStore":
        self.autocomplete_params = self.autocomplete_params.replace(types=list(types))
        return self

    def get_autocomplete_types(self) -> List[str]:
        return list(self.autocomplete_params.types)

    def set_autocomplete_components(self, components: str) -> "ParameterStore":
        self.autocomplete_params = self.autocomplete_params.replace(components=components)
        return self

    def get_autocomplete_components(self) -> Optional[str]:
        return self.autocomplete_params.components or None

    def set_autocomplete_location(self, lat: float, lng: float, radius: int = MAX_SEARCH_RADIUS) -> "ParameterStore":
        self.autocomplete_params = self.autocomplete_params.with_location(lat, lng, radius)
        return self

    def get_autocomplete_location(self) -> Optional[Dict[str, Any]]:
        if self.autocomplete_params.location is None:
            return None
        return {
            "location": self.autocomplete_params.location,
            "radius": self.autocomplete_params.radius,
        }

    def set_strict_bounds(self, strict: bool) -> "ParameterStore":
        self.autocomplete_params = self.autocomplete_params.replace(strictbounds=strict)
        return self

    def get_strict_bounds(self) -> bool:
        return self.autocomplete_params.strictbounds

    def set_session_token(self, token: str) -> "ParameterStore":
        self.autocomplete_params = self.autocomplete_params.replace(sessiontoken=token)
        return self

    def get_session_token(self) -> Optional[str]:
        return self.autocomplete_params.sessiontoken or None

    # Resets

    def reset_search_params(self) -> "ParameterStore":
        self.search_params = SearchParams()
        return self

    def reset_autocomplete_params(self) -> "ParameterStore":
        self.autocomplete_params = AutocompleteParams()
        return self

    def reset_photo_params(self) -> "ParameterStore":
        self.photo_params = self._photo_defaults
        return self

    def reset_all_params(self) -> "ParameterStore":
        self.reset_search_params()
        self.reset_autocomplete_params()
        self.reset_photo_params()
        return self
