"""Argument normalizers applied to individual calls before dispatch.

Models are inconsistent about key casing and about how they express dates and
places. These helpers map the common variants onto the shapes the application
tools expect. None of them raise on unexpected value types; such values are
ignored.
"""

import re
from typing import Any, TypedDict

_SNAKE_SEGMENT = re.compile(r"_([a-z])")
_DATE_RANGE = re.compile(r"(\d{4}-\d{2}-\d{2})\s*(?:to|-)\s*(\d{4}-\d{2}-\d{2})", re.IGNORECASE)
_SINGLE_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")

LOCATION_KEYS = ("location", "query", "departureDescription")


class DateRange(TypedDict, total=False):
    startDate: str
    endDate: str


class LocationQuery(TypedDict, total=False):
    locationQuery: str


def normalize_args(args: dict[str, Any]) -> dict[str, Any]:
    """Rewrite ``snake_case`` keys as ``camelCase``; values are unchanged.

    Example:
        >>> normalize_args({"departure_port": "Nice", "max_days": 3})
        {'departurePort': 'Nice', 'maxDays': 3}
    """
    return {
        _SNAKE_SEGMENT.sub(lambda m: m.group(1).upper(), key): value
        for key, value in args.items()
    }


def normalize_date_args(args: dict[str, Any]) -> DateRange:
    """Derive ``startDate``/``endDate`` from a call's arguments.

    Explicit non-empty ``startDate`` and ``endDate`` strings win. Otherwise a
    ``date`` string is searched for ``YYYY-MM-DD to YYYY-MM-DD`` (or with a
    hyphen), falling back to a single ``YYYY-MM-DD`` start date.
    """
    result: DateRange = {}

    for key in ("startDate", "endDate"):
        value = args.get(key)
        if isinstance(value, str) and value:
            result[key] = value

    date = args.get("date")
    if not isinstance(date, str) or not date:
        return result

    range_match = _DATE_RANGE.search(date)
    if range_match:
        result.setdefault("startDate", range_match.group(1))
        result.setdefault("endDate", range_match.group(2))
        return result

    single = _SINGLE_DATE.search(date)
    if single:
        result.setdefault("startDate", single.group(0))
    return result


def normalize_location_args(args: dict[str, Any]) -> LocationQuery:
    """Pick ``locationQuery`` from ``location``, ``query`` or ``departureDescription``.

    The first key holding a string that is non-empty after trimming wins.
    """
    for key in LOCATION_KEYS:
        value = args.get(key)
        if isinstance(value, str) and value.strip():
            return {"locationQuery": value.strip()}
    return {}
