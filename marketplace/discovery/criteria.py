from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..geo.distance import Coordinate


class SortKey(str, Enum):
    distance = "distance"
    rating = "rating"


class InvalidCoordinate(ValueError):
    """Raised when a query origin lies outside valid latitude/longitude ranges."""


@dataclass(frozen=True)
class DiscoveryCriteria:
    """Optional discovery filters; ``None`` means the filter is not applied."""

    category_id: str | None = None
    gender: str | None = None
    tier: str | None = None
    range_km: float | None = None
    min_rating: float | None = None
    sort: SortKey | None = None


@dataclass(frozen=True)
class RawDiscoveryQuery:
    """Query-string values exactly as received at the HTTP boundary."""

    category_id: str | None = None
    gender: str | None = None
    tier: str | None = None
    range_km: str | None = None
    lat: str | None = None
    lng: str | None = None
    min_rating: str | None = None
    sort: str | None = None


def parse_number(value: Any) -> float | None:
    """Return *value* as a finite float, or ``None`` if it does not parse."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _sort_key(value: str | None) -> SortKey | None:
    try:
        return SortKey(value.strip().lower()) if value else None
    except ValueError:
        return None


def normalize_query(raw: RawDiscoveryQuery) -> tuple[Coordinate | None, DiscoveryCriteria]:
    """Turn loosely typed query values into an origin and typed criteria.

    Unparseable numbers become ``None`` rather than zero. An origin is only
    built when both ``lat`` and ``lng`` parse, and it must be in range.
    """
    lat = parse_number(raw.lat)
    lng = parse_number(raw.lng)
    origin = None
    if lat is not None and lng is not None:
        origin = Coordinate(latitude=lat, longitude=lng)
        if not origin.is_valid():
            raise InvalidCoordinate(f"invalid coordinate lat={lat} lng={lng}")

    criteria = DiscoveryCriteria(
        category_id=_text(raw.category_id),
        gender=_text(raw.gender),
        tier=_text(raw.tier),
        range_km=parse_number(raw.range_km),
        min_rating=parse_number(raw.min_rating),
        sort=_sort_key(raw.sort),
    )
    return origin, criteria
