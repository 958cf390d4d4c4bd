"""
Tests for the request option sets and the ParameterStore.
"""

import pytest
from pydantic import ValidationError

from placeskit.providers.errors import InvalidConfiguration
from placeskit.providers.google.parameters import (
    AutocompleteParams,
    ParameterStore,
    PhotoParams,
    SearchParams,
    clamp_price_level,
)


@pytest.fixture
def store():
    return ParameterStore(api_key="key")


class TestSearchParams:
    """Test the immutable search option set."""

    @pytest.mark.parametrize("level,expected", [(-3, 0), (0, 0), (2, 2), (4, 4), (9, 4)])
    def test_price_levels_clamped(self, level, expected):
        """It should clamp price levels to 0-4 when set."""
        assert clamp_price_level(level) == expected
        assert SearchParams(minprice=level).minprice == expected
        assert SearchParams().replace(maxprice=level).maxprice == expected

    def test_frozen(self):
        """It should not allow in-place mutation."""
        params = SearchParams()
        with pytest.raises(ValidationError):
            params.keyword = "pizza"

    def test_replace_returns_new_value(self):
        """It should leave the original untouched when replacing a field."""
        params = SearchParams()
        updated = params.replace(keyword="pizza")

        assert params.keyword == ""
        assert updated.keyword == "pizza"

    def test_invalid_rank_by_rejected(self):
        """It should reject unknown ranking methods on construction."""
        with pytest.raises(ValidationError):
            SearchParams(rankby="popularity")

    def test_with_rank_by_ignores_unknown(self):
        """It should keep the previous value for an unknown ranking method."""
        params = SearchParams().with_rank_by("distance")
        assert params.with_rank_by("popularity").rankby == "distance"

    def test_to_query_drops_falsy_values(self):
        """It should only render values that are set."""
        params = SearchParams(type="cafe", opennow=True, minprice=0, maxprice=3)

        assert params.to_query() == {"type": "cafe", "opennow": "true", "maxprice": 3}

    def test_defaults_render_nothing(self):
        """It should render an empty query for default options."""
        assert SearchParams().to_query() == {}


class TestAutocompleteParams:
    """Test the autocomplete option set."""

    def test_with_location(self):
        """It should format the location bias as lat,lng."""
        params = AutocompleteParams().with_location(47.6, -122.3, 2000)

        assert params.location == "47.6,-122.3"
        assert params.radius == 2000

    def test_types_joined_with_pipe(self):
        """It should join types with '|'."""
        params = AutocompleteParams(types=["geocode", "establishment"], strictbounds=True)

        assert params.to_query() == {"types": "geocode|establishment", "strictbounds": "true"}


class TestPhotoParams:
    """Test the photo option set."""

    def test_defaults(self):
        """It should default to 400x400."""
        assert PhotoParams().to_query() == {"maxwidth": 400, "maxheight": 400}


class TestParameterStoreCache:
    """Test cache settings on the store."""

    def test_defaults(self, store):
        """It should enable caching for one day by default."""
        assert store.is_cache_enabled() is True
        assert store.get_cache_expiration() == 86400
        assert store.get_cache_settings() == {"enabled": True, "expiration": 86400}

    def test_set_cache_expiration(self, store):
        """It should accept zero and positive expirations."""
        result = store.set_cache_expiration(0)

        assert result.is_ok
        assert result.unwrap() is store
        assert store.get_cache_expiration() == 0

    def test_negative_expiration_is_an_error(self, store):
        """It should return InvalidConfiguration and keep the old value."""
        result = store.set_cache_expiration(-1)

        assert result.is_err
        assert isinstance(result.error, InvalidConfiguration)
        assert result.error.code == "invalid_expiration"
        assert result.error.message == "Cache expiration time cannot be negative"
        assert store.get_cache_expiration() == 86400

    def test_negative_expiration_in_constructor(self):
        """It should refuse to build a store with a negative expiration."""
        with pytest.raises(InvalidConfiguration):
            ParameterStore(api_key="key", cache_expiration=-10)

    def test_disable_cache(self, store):
        """It should toggle caching and chain."""
        assert store.set_cache_enabled(False) is store
        assert store.is_cache_enabled() is False


class TestParameterStoreSearch:
    """Test search setters and getters."""

    def test_chaining(self, store):
        """It should return the store from every setter."""
        result = (
            store.set_search_type("restaurant")
            .set_search_keyword("vegan")
            .set_min_price(1)
            .set_max_price(7)
            .set_open_now(True)
            .set_rank_by("prominence")
            .set_page_token("token")
        )

        assert result is store
        assert store.get_search_type() == "restaurant"
        assert store.get_search_keyword() == "vegan"
        assert store.get_min_price() == 1
        assert store.get_max_price() == 4
        assert store.get_open_now() is True
        assert store.get_rank_by() == "prominence"
        assert store.get_page_token() == "token"

    def test_unset_getters_return_none(self, store):
        """It should return None for options that were never set."""
        assert store.get_search_type() is None
        assert store.get_min_price() is None
        assert store.get_rank_by() is None
        assert store.get_language() is None
        assert store.get_open_now() is False

    def test_invalid_rank_by_ignored(self, store):
        """It should ignore ranking methods other than prominence/distance."""
        store.set_rank_by("distance").set_rank_by("stars")
        assert store.get_rank_by() == "distance"

    def test_language_applies_to_search_and_autocomplete(self, store):
        """It should set the language for both option sets."""
        store.set_language("pt-BR")

        assert store.search_params.language == "pt-BR"
        assert store.autocomplete_params.language == "pt-BR"
        assert store.get_language() == "pt-BR"

    def test_reset_search_params(self, store):
        """It should restore the default search options."""
        store.set_search_type("bar").set_min_price(2).reset_search_params()
        assert store.search_params == SearchParams()


class TestParameterStoreAutocomplete:
    """Test autocomplete setters and getters."""

    def test_location(self, store):
        """It should store the location bias with its radius."""
        assert store.get_autocomplete_location() is None

        store.set_autocomplete_location(-23.55, -46.63)

        assert store.get_autocomplete_location() == {"location": "-23.55,-46.63", "radius": 50000}

    def test_other_options(self, store):
        """It should store types, components, strict bounds and session token."""
        store.set_autocomplete_types(["(cities)"]) \
            .set_autocomplete_components("country:br") \
            .set_strict_bounds(True) \
            .set_session_token("session-1")

        assert store.get_autocomplete_types() == ["(cities)"]
        assert store.get_autocomplete_components() == "country:br"
        assert store.get_strict_bounds() is True
        assert store.get_session_token() == "session-1"

    def test_reset_all(self, store):
        """It should restore every option set."""
        store.set_session_token("s").set_photo_max_width(1200).set_search_keyword("k")
        store.reset_all_params()

        assert store.autocomplete_params == AutocompleteParams()
        assert store.search_params == SearchParams()
        assert store.get_photo_max_width() == 400


class TestParameterStorePhoto:
    """Test photo setters and getters."""

    def test_photo_size(self, store):
        """It should store the maximum photo size."""
        store.set_photo_max_width(800).set_photo_max_height(600)

        assert store.get_photo_max_width() == 800
        assert store.get_photo_max_height() == 600

    def test_reset_uses_configured_defaults(self):
        """It should reset to the photo defaults the store was built with."""
        store = ParameterStore(api_key="key", photo_defaults=PhotoParams(maxwidth=1024, maxheight=768))
        store.set_photo_max_width(10).reset_photo_params()

        assert store.get_photo_max_width() == 1024
        assert store.get_photo_max_height() == 768

    def test_api_key(self, store):
        """It should replace the API key."""
        assert store.set_api_key("other").get_api_key() == "other"
