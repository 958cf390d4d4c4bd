"""
Tests for error values and the Ok/Err result type.
"""

import pytest

from placeskit.providers.errors import (
    ApiError,
    Err,
    InvalidConfiguration,
    MalformedResponse,
    Ok,
    PlacesError,
    TransportError,
)


class TestErrors:
    """Test error codes and messages."""

    def test_transport_error(self):
        error = TransportError("connection refused")

        assert error.code == "api_error"
        assert error.message == "Google Places API request failed: connection refused"
        assert error.timed_out is False
        assert isinstance(error, PlacesError)

    def test_malformed_response(self):
        error = MalformedResponse(http_status=502)

        assert error.code == "json_error"
        assert error.message == "Failed to parse Google Places API response"
        assert error.details == {"http_status": 502}

    def test_api_error_prefers_provider_message(self):
        assert ApiError("REQUEST_DENIED", "Bad key").message == "Google Places API returned error: Bad key"
        assert ApiError("REQUEST_DENIED").message == "Google Places API returned error: REQUEST_DENIED"

    def test_invalid_configuration_code_override(self):
        assert InvalidConfiguration("nope").code == "invalid_configuration"
        assert InvalidConfiguration("nope", code="invalid_expiration").code == "invalid_expiration"

    def test_to_dict(self):
        """It should serialize code, message, type and details."""
        assert ApiError("OVER_QUERY_LIMIT").to_dict() == {
            "code": "api_error",
            "message": "Google Places API returned error: OVER_QUERY_LIMIT",
            "error_type": "ApiError",
            "details": {"status": "OVER_QUERY_LIMIT"},
        }

    def test_to_dict_without_details(self):
        assert "details" not in TransportError("boom").to_dict()


class TestResult:
    """Test the Ok/Err variants."""

    def test_ok(self):
        result = Ok(42)

        assert result.is_ok and not result.is_err
        assert result.unwrap() == 42
        assert result.unwrap_or(0) == 42

    def test_err(self):
        error = ApiError("NOT_FOUND")
        result = Err(error)

        assert result.is_err and not result.is_ok
        assert result.unwrap_or("fallback") == "fallback"
        with pytest.raises(ApiError) as exc_info:
            result.unwrap()
        assert exc_info.value is error
