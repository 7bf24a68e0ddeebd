"""Radius search and schedule filters for the i-group listing.

Groups are plain dicts here (the serialized API shape), so the filters can
run after the database query without touching ORM state.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any, Iterable

from emma.models.enums import DistanceUnits


METERS_PER_MILE = 1609.34
EARTH_RADIUS_METERS = 6_371_008.8
DEFAULT_RADIUS_MILES = 50.0
TIME_WINDOW_MINUTES = 60

SORT_FIELDS = ("distance", "name", "created_at")
ASCENDING = "ascending"
DESCENDING = "descending"

_RADIUS_SUFFIX = re.compile(r"mi$", re.IGNORECASE)
_DAY_SEPARATORS = re.compile(r"[\s,+]+")
_DAY_NUMBERS = {
    "mon": 0,
    "monday": 0,
    "tue": 1,
    "tuesday": 1,
    "wed": 2,
    "wednesday": 2,
    "thu": 3,
    "thursday": 3,
    "fri": 4,
    "friday": 4,
    "sat": 5,
    "saturday": 5,
    "sun": 6,
    "sunday": 6,
}


@dataclass(frozen=True)
class GeoQuery:
    latitude: float
    longitude: float
    radius_miles: float = DEFAULT_RADIUS_MILES

    @property
    def radius_meters(self) -> float:
        return self.radius_miles * METERS_PER_MILE


def parse_radius(raw: str | None) -> float | None:
    """Radius in miles from ``"25"``, ``"25mi"`` or ``"25.00MI"``."""
    if not raw:
        return None
    try:
        return float(_RADIUS_SUFFIX.sub("", raw.strip()).strip())
    except ValueError:
        return None


def parse_coordinate(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def build_geo_query(lat: str | None, lon: str | None, radius: str | None) -> GeoQuery | None:
    latitude = parse_coordinate(lat)
    longitude = parse_coordinate(lon)
    if latitude is None or longitude is None:
        return None
    return GeoQuery(latitude, longitude, parse_radius(radius) or DEFAULT_RADIUS_MILES)


def haversine_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_METERS * math.asin(min(1.0, math.sqrt(a)))


def within_radius(groups: Iterable[dict[str, Any]], query: GeoQuery) -> list[dict[str, Any]]:
    """Groups inside the radius, each annotated with ``distance`` in meters."""
    nearby = []
    for group in groups:
        lat, lon = group.get("latitude"), group.get("longitude")
        if lat is None or lon is None:
            continue
        distance = haversine_meters(query.latitude, query.longitude, lat, lon)
        if distance <= query.radius_meters:
            nearby.append({**group, "distance": distance, "distance_units": DistanceUnits.METERS.value})
    return nearby


def parse_datetime(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_days(raw: str) -> set[int]:
    names = (part.lower() for part in _DAY_SEPARATORS.split(raw) if part)
    return {_DAY_NUMBERS[name] for name in names if name in _DAY_NUMBERS}


def parse_time_of_day(raw: str) -> int | None:
    """Minutes after midnight from ``19:00``, ``7:00 PM`` or a full ISO datetime."""
    text = raw.strip()
    parsed: time | None = None
    moment = parse_datetime(text)
    if moment is not None:
        parsed = moment.time()
    else:
        for fmt in ("%H:%M", "%H:%M:%S", "%I:%M %p", "%I %p"):
            try:
                parsed = datetime.strptime(text.upper(), fmt).time()
                break
            except ValueError:
                continue
    if parsed is None:
        return None
    return parsed.hour * 60 + parsed.minute


def _event_starts(group: dict[str, Any]) -> list[tuple[datetime, datetime]]:
    ranges = []
    for event in group.get("schedule_events") or []:
        if not isinstance(event, dict):
            continue
        start = parse_datetime(event.get("start"))
        if start is None:
            continue
        end = parse_datetime(event.get("end")) or start
        ranges.append((start, end))
    return ranges


def meets_on_days(group: dict[str, Any], days: set[int]) -> bool:
    return any(start.weekday() in days for start, _ in _event_starts(group))


def parse_dates(raw: str) -> set[date]:
    """Calendar dates from a comma separated list of ISO dates or datetimes."""
    dates = set()
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            dates.add(date.fromisoformat(part[:10]))
        except ValueError:
            continue
    return dates


def meets_on_date(group: dict[str, Any], days: set[date]) -> bool:
    return any(
        start.date() <= day <= end.date()
        for start, end in _event_starts(group)
        for day in days
    )


def meets_near_time(group: dict[str, Any], minutes: int) -> bool:
    return any(
        abs(start.hour * 60 + start.minute - minutes) <= TIME_WINDOW_MINUTES
        for start, _ in _event_starts(group)
    )


def matches_venue_address(
    group: dict[str, Any],
    city: str | None = None,
    state: str | None = None,
    zipcode: str | None = None,
) -> bool:
    venue = group.get("venue") or {}
    address = venue.get("physical_address")
    if not address:
        return False
    if zipcode:
        return address.get("postal_code") == zipcode.strip()
    if city and (address.get("city") or "").lower() != city.strip().lower():
        return False
    if state and (address.get("state") or "").lower() != state.strip().lower():
        return False
    return True


def default_sort(has_geo: bool, by: str | None, order: str | None) -> tuple[str, str]:
    sort_by = by if by in SORT_FIELDS else ("distance" if has_geo else "created_at")
    if order in (ASCENDING, DESCENDING):
        return sort_by, order
    return sort_by, ASCENDING if sort_by == "distance" else DESCENDING


def sort_groups(groups: list[dict[str, Any]], by: str, order: str) -> list[dict[str, Any]]:
    reverse = order == DESCENDING
    if by == "distance":
        return sorted(groups, key=lambda g: g.get("distance", math.inf), reverse=reverse)
    if by == "name":
        return sorted(groups, key=lambda g: (g.get("name") or "").casefold(), reverse=reverse)

    def created(group: dict[str, Any]) -> datetime:
        value = group.get("created_at")
        if isinstance(value, datetime):
            return _as_utc(value)
        return _as_utc(parse_datetime(value) or datetime.min)

    return sorted(groups, key=created, reverse=reverse)
