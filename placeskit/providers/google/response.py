"""
Read-only facade over a decoded Google Places / Geocoding payload.

The payload is stored untouched; every accessor walks the raw structure
again when called. Most accessors read the "first result", which depends
on the endpoint that produced the payload (see ``first_result``).
"""

import re
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from .hours import DayHours, CurrentPeriod, find_current_period, format_periods


class AddressType(str, Enum):
    """Address component types read by the structured-address helpers."""
    STREET_NUMBER = "street_number"
    ROUTE = "route"
    SUBPREMISE = "subpremise"
    LOCALITY = "locality"
    ADMINISTRATIVE_AREA_LEVEL_1 = "administrative_area_level_1"
    POSTAL_CODE = "postal_code"
    COUNTRY = "country"


class Amenity(str, Enum):
    """Boolean place attributes reported as amenities."""
    SERVES_BREAKFAST = "serves_breakfast"
    SERVES_LUNCH = "serves_lunch"
    SERVES_DINNER = "serves_dinner"
    SERVES_BEER = "serves_beer"
    SERVES_WINE = "serves_wine"
    SERVES_VEGETARIAN_FOOD = "serves_vegetarian_food"
    TAKEOUT = "takeout"
    DELIVERY = "delivery"
    DINE_IN = "dine_in"
    RESERVABLE = "reservable"
    WHEELCHAIR_ACCESSIBLE_ENTRANCE = "wheelchair_accessible_entrance"
    OUTDOOR_SEATING = "outdoor_seating"
    PARKING = "parking"


AMENITY_LABELS = {
    Amenity.SERVES_BREAKFAST: "Serves Breakfast",
    Amenity.SERVES_LUNCH: "Serves Lunch",
    Amenity.SERVES_DINNER: "Serves Dinner",
    Amenity.SERVES_BEER: "Serves Beer",
    Amenity.SERVES_WINE: "Serves Wine",
    Amenity.SERVES_VEGETARIAN_FOOD: "Serves Vegetarian Food",
    Amenity.TAKEOUT: "Takeout Available",
    Amenity.DELIVERY: "Delivery Available",
    Amenity.DINE_IN: "Dine-in Available",
    Amenity.RESERVABLE: "Reservations Accepted",
    Amenity.WHEELCHAIR_ACCESSIBLE_ENTRANCE: "Wheelchair Accessible",
    Amenity.OUTDOOR_SEATING: "Outdoor Seating",
    Amenity.PARKING: "Parking Available",
}

PRICE_LEVEL_LABELS = {
    0: "Free",
    1: "Inexpensive",
    2: "Moderate",
    3: "Expensive",
    4: "Very Expensive",
}

BUSINESS_STATUS_LABELS = {
    "OPERATIONAL": "Open",
    "CLOSED_TEMPORARILY": "Temporarily Closed",
    "CLOSED_PERMANENTLY": "Permanently Closed",
}

UNKNOWN_LABEL = "Unknown"


class PlacesResponse:
    """
    Structured access to a Places API response.

    Args:
        data: Decoded JSON object as returned by the API
    """

    def __init__(self, data: Dict[str, Any]):
        self._data = data

    def __repr__(self) -> str:
        return f"PlacesResponse(status={self.status!r}, results={len(self.results)})"

    def get_all(self) -> Dict[str, Any]:
        """Return the raw payload."""
        return self._data

    @property
    def status(self) -> str:
        return self._data.get("status", "")

    @property
    def results(self) -> List[Dict[str, Any]]:
        return self._data.get("results", [])

    @property
    def predictions(self) -> List[Dict[str, Any]]:
        """Autocomplete predictions."""
        return self._data.get("predictions", [])

    @property
    def candidates(self) -> List[Dict[str, Any]]:
        """Find-place candidates."""
        return self._data.get("candidates", [])

    @property
    def first_result(self) -> Optional[Dict[str, Any]]:
        """
        The result most accessors read from.

        Search and geocode responses carry a ``results`` list, details
        responses a single ``result``, find-place responses ``candidates``
        and autocomplete responses ``predictions``; they are tried in
        that order.
        """
        if self.results:
            return self.results[0]
        if self._data.get("result"):
            return self._data["result"]
        if self.candidates:
            return self.candidates[0]
        if self.predictions:
            return self.predictions[0]
        return None

    def _field(self, name: str, default: Any = None) -> Any:
        result = self.first_result
        if not result:
            return default
        return result.get(name, default)

    # Location

    @property
    def formatted_address(self) -> Optional[str]:
        return self._field("formatted_address")

    @property
    def coordinates(self) -> Optional[Dict[str, float]]:
        location = (self._field("geometry") or {}).get("location")
        if not location:
            return None
        return {"latitude": location["lat"], "longitude": location["lng"]}

    @property
    def viewport(self) -> Optional[Dict[str, Any]]:
        return (self._field("geometry") or {}).get("viewport")

    @property
    def place_id(self) -> Optional[str]:
        return self._field("place_id")

    @property
    def types(self) -> List[str]:
        return self._field("types", [])

    @property
    def plus_code(self) -> Optional[str]:
        return (self._field("plus_code") or {}).get("compound_code")

    @property
    def utc_offset(self) -> Optional[int]:
        """UTC offset in minutes."""
        return self._field("utc_offset")

    @property
    def distance(self) -> Optional[float]:
        distance = self._field("distance")
        return float(distance) if distance is not None else None

    # Address components

    @property
    def address_components(self) -> List[Dict[str, Any]]:
        return self._field("address_components", [])

    def address_component(self, component_type: str) -> Optional[str]:
        """
        Long name of the first component tagged with ``component_type``.

        The first component whose type set contains the tag wins, even if a
        later component matches more specifically.
        """
        component_type = getattr(component_type, "value", component_type)
        for component in self.address_components:
            if component_type in set(component.get("types", ())):
                return component["long_name"]
        return None

    @property
    def street_number(self) -> Optional[str]:
        return self.address_component(AddressType.STREET_NUMBER.value)

    @property
    def street_name(self) -> Optional[str]:
        return self.address_component(AddressType.ROUTE.value)

    @property
    def city(self) -> Optional[str]:
        return self.address_component(AddressType.LOCALITY.value)

    @property
    def state(self) -> Optional[str]:
        return self.address_component(AddressType.ADMINISTRATIVE_AREA_LEVEL_1.value)

    @property
    def postal_code(self) -> Optional[str]:
        return self.address_component(AddressType.POSTAL_CODE.value)

    @property
    def country(self) -> Optional[str]:
        return self.address_component(AddressType.COUNTRY.value)

    @property
    def structured_address(self) -> Dict[str, Optional[str]]:
        return {
            "street_number": self.street_number,
            "street_name": self.street_name,
            "subpremise": self.address_component(AddressType.SUBPREMISE.value),
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "country": self.country,
            "formatted_address": self.formatted_address,
        }

    # Contact

    @property
    def website(self) -> Optional[str]:
        return self._field("website")

    @property
    def place_url(self) -> Optional[str]:
        """Google Maps URL for the place."""
        return self._field("url")

    @property
    def phone_number(self) -> Optional[str]:
        return self._field("formatted_phone_number")

    @property
    def international_phone_number(self) -> Optional[str]:
        return self._field("international_phone_number")

    @property
    def formatted_phone_number(self) -> Optional[str]:
        """
        Phone number as ``(XXX) XXX-XXXX`` when it has exactly ten digits.

        Any other length is returned as the bare digit string.
        """
        phone_number = self.phone_number
        if not phone_number:
            return None

        digits = re.sub(r"[^0-9]", "", phone_number)
        if len(digits) == 10:
            return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
        return digits

    # Ratings and reviews

    @property
    def rating(self) -> Optional[float]:
        rating = self._field("rating")
        return float(rating) if rating is not None else None

    @property
    def user_ratings_total(self) -> Optional[int]:
        return self._field("user_ratings_total")

    @property
    def reviews(self) -> List[Dict[str, Any]]:
        return self._field("reviews", [])

    @property
    def editorial_summary(self) -> Optional[str]:
        return (self._field("editorial_summary") or {}).get("overview")

    @property
    def photos(self) -> List[Dict[str, Any]]:
        return self._field("photos", [])

    @property
    def popular_times(self) -> Optional[Any]:
        return self._field("popular_times")

    # Opening hours

    @property
    def opening_hours(self) -> Optional[Dict[str, Any]]:
        return self._field("opening_hours")

    @property
    def is_open_now(self) -> Optional[bool]:
        return (self.opening_hours or {}).get("open_now")

    def _periods(self) -> Optional[List[Dict[str, Any]]]:
        hours = self.opening_hours
        if not hours or "periods" not in hours:
            return None
        return hours["periods"]

    def formatted_opening_hours(self) -> Optional[Dict[str, Dict[str, Any]]]:
        """
        Opening hours keyed by weekday name.

        Each value is ``{"open": "HH:MM", "close": "HH:MM", "is_24_7": bool}``;
        a period without a closing time closes at "24:00" and is flagged 24/7.
        """
        periods = self._periods()
        if periods is None:
            return None
        return {day: hours.to_dict() for day, hours in format_periods(periods).items()}

    def opening_hours_text(self) -> List[str]:
        """Opening hours as display lines, e.g. ``"Monday: 09:00 - 17:00"``."""
        periods = self._periods()
        if not periods:
            return []
        formatted: Dict[str, DayHours] = format_periods(periods)
        return [f"{day}: {hours.describe()}" for day, hours in formatted.items()]

    def current_opening_period(self, now: Optional[datetime] = None) -> Optional[CurrentPeriod]:
        """
        The period the place is open in at ``now`` (defaults to local time).

        Periods crossing midnight are only checked against the day they open.
        """
        periods = self._periods()
        if periods is None:
            return None
        return find_current_period(periods, now)

    # Price and status

    @property
    def price_level(self) -> Optional[int]:
        return self._field("price_level")

    @property
    def formatted_price_level(self) -> Optional[str]:
        price_level = self.price_level
        if price_level is None:
            return None
        return PRICE_LEVEL_LABELS.get(price_level, UNKNOWN_LABEL)

    @property
    def business_status(self) -> Optional[str]:
        return self._field("business_status")

    @property
    def formatted_business_status(self) -> str:
        return BUSINESS_STATUS_LABELS.get(self.business_status or "", UNKNOWN_LABEL)

    @property
    def is_permanently_closed(self) -> bool:
        return bool(self._field("permanently_closed", False))

    # Attributes

    @property
    def has_wheelchair_accessible_entrance(self) -> Optional[bool]:
        return self._field("wheelchair_accessible_entrance")

    @property
    def amenities(self) -> Dict[str, str]:
        """Known boolean attributes that are present and true, with labels."""
        result = self.first_result or {}
        return {
            amenity.value: label
            for amenity, label in AMENITY_LABELS.items()
            if result.get(amenity.value) is True
        }

    @property
    def icon_url(self) -> Optional[str]:
        return self._field("icon")

    @property
    def icon_background_color(self) -> Optional[str]:
        return self._field("icon_background_color")

    @property
    def icon_mask_base_uri(self) -> Optional[str]:
        return self._field("icon_mask_base_uri")

    # Autocomplete

    @property
    def description(self) -> Optional[str]:
        return self._field("description")

    @property
    def structured_formatting(self) -> Optional[Dict[str, Any]]:
        return self._field("structured_formatting")

    # Pagination

    @property
    def next_page_token(self) -> Optional[str]:
        return self._data.get("next_page_token")

    @property
    def has_more_results(self) -> bool:
        return "next_page_token" in self._data
