"""
Opening-hours helpers for Places payloads.

Periods come from ``result.opening_hours.periods`` and look like
``{"open": {"day": 1, "time": "0900"}, "close": {"day": 1, "time": "1700"}}``.
Days run from 0 (Sunday) to 6 (Saturday). A period without ``close`` is
open around the clock.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

DAYS = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

ALL_DAY_CLOSE = "24:00"


@dataclass(frozen=True)
class DayHours:
    """Formatted hours for one weekday."""
    open: str
    close: str
    is_24_7: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"open": self.open, "close": self.close, "is_24_7": self.is_24_7}

    def describe(self) -> str:
        if self.is_24_7:
            return "Open 24 hours"
        return f"{self.open} - {self.close}"


@dataclass(frozen=True)
class CurrentPeriod:
    """The period a place is in right now."""
    open_time: str
    close_time: Optional[str]
    is_24_7: bool


def format_time(hhmm: str) -> str:
    """Turn an ``HHMM`` string into ``HH:MM``."""
    return f"{hhmm[:2]}:{hhmm[2:]}"


def day_name(day: int) -> str:
    """Weekday name for an API day index (0 = Sunday)."""
    if not 0 <= day < len(DAYS):
        raise IndexError(f"day index out of range: {day}")
    return DAYS[day]


def format_periods(periods: List[Dict[str, Any]]) -> Dict[str, DayHours]:
    """
    Format periods keyed by weekday name.

    Periods are neither sorted nor merged: when several periods open on the
    same day the last one wins.
    """
    formatted: Dict[str, DayHours] = {}
    for period in periods:
        opening = period["open"]
        closing = period.get("close")
        formatted[day_name(opening["day"])] = DayHours(
            open=format_time(opening["time"]),
            close=format_time(closing["time"]) if closing else ALL_DAY_CLOSE,
            is_24_7=closing is None,
        )
    return formatted


def find_current_period(
    periods: List[Dict[str, Any]], now: Optional[datetime] = None
) -> Optional[CurrentPeriod]:
    """
    Return the first period open at ``now`` (local time of the caller).

    Only periods that open on today's weekday are considered and the
    comparison is ``open <= now <= close`` on HHMM integers, so a period
    running past midnight is not matched once the day has rolled over.
    """
    now = now or datetime.now()
    # isoweekday: Monday=1 .. Sunday=7; the API uses Sunday=0
    current_day = now.isoweekday() % 7
    current_time = now.hour * 100 + now.minute

    for period in periods:
        opening = period["open"]
        if opening["day"] != current_day:
            continue

        closing = period.get("close")
        open_time = int(opening["time"])
        close_time = int(closing["time"]) if closing else None

        if close_time is None or open_time <= current_time <= close_time:
            return CurrentPeriod(
                open_time=opening["time"],
                close_time=closing["time"] if closing else None,
                is_24_7=closing is None,
            )

    return None
