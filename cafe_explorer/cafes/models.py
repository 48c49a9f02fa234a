from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


class NoiseLevel(str, Enum):
    quiet = "quiet"
    moderate = "moderate"
    lively = "lively"
    loud = "loud"


class Location(BaseModel):
    lat: float
    lng: float


class WeeklyHours(BaseModel):
    """Opening hours per weekday, e.g. ``"7:00 AM - 10:00 PM"``, ``"Closed"`` or ``"24 Hours"``."""

    monday: str
    tuesday: str
    wednesday: str
    thursday: str
    friday: str
    saturday: str
    sunday: str

    def for_day(self, day: str) -> str:
        return getattr(self, day)


class Wifi(BaseModel):
    available: bool = False
    speed: str | None = None
    password: str | None = None


class CafeBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    address: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    phone: str | None = None
    website: str | None = None
    price_level: int = Field(default=1, ge=1, le=4)
    hours: WeeklyHours
    wifi: Wifi = Field(default_factory=Wifi)
    power_outlets: bool = False
    noise_level: NoiseLevel = NoiseLevel.moderate
    study_friendly: bool = False
    amenities: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)


class Cafe(CafeBase):
    id: str
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    review_count: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime


class CafeResult(Cafe):
    distance: float | None = Field(
        default=None, description="Miles from the requested location"
    )


class CafeCreate(CafeBase):
    pass


class CafeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    address: str | None = Field(default=None, min_length=1)
    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    phone: str | None = None
    website: str | None = None
    price_level: int | None = Field(default=None, ge=1, le=4)
    hours: WeeklyHours | None = None
    wifi: Wifi | None = None
    power_outlets: bool | None = None
    noise_level: NoiseLevel | None = None
    study_friendly: bool | None = None
    amenities: list[str] | None = None
    tags: list[str] | None = None
    images: list[str] | None = None


def _csv(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _number(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _first(params: Mapping[str, str], *names: str) -> str | None:
    for name in names:
        if params.get(name) is not None:
            return params[name]
    return None


class SearchFilters(BaseModel):
    """Optional search facets. ``None`` on any field means no constraint."""

    query: str | None = None
    amenities: list[str] | None = None
    price_levels: list[int] | None = None
    min_rating: float | None = None
    noise_levels: list[NoiseLevel] | None = None
    study_friendly: bool | None = None
    open_now: bool | None = None
    distance: float | None = Field(default=None, description="Radius in miles")
    location: Location | None = None

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> SearchFilters:
        """Build filters from raw query-string values.

        Accepts both the snake_case names and the camelCase names used by
        the web client. Values that do not parse are dropped rather than
        rejected.
        """
        query = (_first(params, "query", "q") or "").strip()

        price_levels: list[int] = []
        for part in _csv(_first(params, "price_level", "priceLevel")):
            try:
                price_levels.append(int(part))
            except ValueError:
                continue

        valid_noise = {n.value for n in NoiseLevel}
        noise_levels = [
            NoiseLevel(n.lower())
            for n in _csv(_first(params, "noise_level", "noiseLevel"))
            if n.lower() in valid_noise
        ]

        lat = _number(params.get("lat"))
        lng = _number(params.get("lng"))
        amenities = _csv(params.get("amenities"))

        return cls(
            query=query or None,
            amenities=amenities or None,
            price_levels=price_levels or None,
            min_rating=_number(_first(params, "min_rating", "rating")),
            noise_levels=noise_levels or None,
            study_friendly=_first(params, "study_friendly", "studyFriendly") == "true" or None,
            open_now=_first(params, "open_now", "openNow") == "true" or None,
            distance=_number(params.get("distance")),
            location=Location(lat=lat, lng=lng) if lat is not None and lng is not None else None,
        )


class BusinessStatus(BaseModel):
    is_open: bool
    status: str
    next_change: str | None = None


class CafeListResponse(BaseModel):
    cafes: list[CafeResult]
    total: int
    filters: SearchFilters


class SuggestionsResponse(BaseModel):
    suggestions: list[str]
