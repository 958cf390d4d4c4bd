"""
Error values and the tagged result type returned by client operations.

Client operations never let transport, decoding or API-status failures
escape as exceptions. They return ``Err(error)`` instead, where ``error``
is one of the ``PlacesError`` subclasses below. The errors are still real
exceptions, so ``Result.unwrap()`` can re-raise them.
"""

from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class PlacesError(Exception):
    """Base class for every error produced by the Places client."""

    code = "places_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary."""
        error_dict = {
            "code": self.code,
            "message": self.message,
            "error_type": type(self).__name__,
        }
        if self.details:
            error_dict["details"] = self.details
        return error_dict


class TransportError(PlacesError):
    """The endpoint could not be reached (network failure or timeout)."""

    code = "api_error"

    def __init__(self, reason: str, timed_out: bool = False):
        super().__init__(f"Google Places API request failed: {reason}")
        self.reason = reason
        self.timed_out = timed_out


class MalformedResponse(PlacesError):
    """The response body was not a JSON object."""

    code = "json_error"

    def __init__(self, http_status: Optional[int] = None):
        super().__init__(
            "Failed to parse Google Places API response",
            {"http_status": http_status} if http_status is not None else None,
        )
        self.http_status = http_status


class ApiError(PlacesError):
    """The API answered with a status other than OK or ZERO_RESULTS."""

    code = "api_error"

    def __init__(
        self,
        status: str,
        error_message: Optional[str] = None,
        http_status: Optional[int] = None,
    ):
        super().__init__(
            f"Google Places API returned error: {error_message or status}",
            {"status": status},
        )
        self.status = status
        self.error_message = error_message
        self.http_status = http_status


class InvalidConfiguration(PlacesError):
    """A configuration value was rejected."""

    code = "invalid_configuration"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        if code:
            self.code = code


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying a PlacesError."""

    error: PlacesError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    def unwrap(self):
        raise self.error

    def unwrap_or(self, default: Any) -> Any:
        return default


Result = Union[Ok[T], Err]
