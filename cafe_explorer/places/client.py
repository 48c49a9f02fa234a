from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any

import httpx

from ..cafes.geo import calculate_distance
from ..cafes.models import WEEKDAYS, CafeResult, Location, NoiseLevel
from ..exceptions import PlacesAPIError
from .cache import LookupCache, places_cache
from .config import DEFAULT_PLACES_CONFIG, PlacesConfig

logger = logging.getLogger(__name__)

_OK_STATUSES = {"OK", "ZERO_RESULTS"}
_WEEKDAY_RANGE_RE = re.compile(
    r"(\d{1,2}:\d{2})\s*([AP]M)\s*[–—-]\s*(\d{1,2}:\d{2})\s*([AP]M)"
)
_STUDY_TYPES = {"cafe", "library", "book_store"}


def parse_opening_hours(weekday_text: list[str]) -> dict[str, str]:
    """Map the places ``weekday_text`` lines (Monday first) onto an hours table."""
    hours = {day: "Hours not available" for day in WEEKDAYS}
    for day, text in zip(WEEKDAYS, weekday_text):
        if "Closed" in text:
            hours[day] = "Closed"
        elif "Open 24 hours" in text:
            hours[day] = "24 Hours"
        else:
            match = _WEEKDAY_RANGE_RE.search(text)
            if match:
                open_t, open_p, close_t, close_p = match.groups()
                hours[day] = f"{open_t} {open_p} - {close_t} {close_p}"
    return hours


def estimate_noise_level(rating: float, review_count: int) -> NoiseLevel:
    if rating >= 4.5 and review_count > 100:
        return NoiseLevel.lively
    if rating >= 4.0:
        return NoiseLevel.moderate
    return NoiseLevel.quiet


def is_study_friendly(types: list[str], rating: float) -> bool:
    return bool(_STUDY_TYPES & set(types)) and rating >= 3.5


def generate_amenities(types: list[str]) -> list[str]:
    amenities = ["Free WiFi", "Power Outlets"]
    if "library" in types or "book_store" in types:
        amenities += ["Book Collection", "Reading Areas"]
    if "bakery" in types:
        amenities.append("Fresh Pastries")
    if "restaurant" in types:
        amenities.append("Food Available")
    return amenities


def generate_tags(types: list[str]) -> list[str]:
    tags: list[str] = []
    if "cafe" in types:
        tags += ["cafe", "coffee"]
    if "library" in types:
        tags += ["books", "quiet", "study-friendly"]
    if "bakery" in types:
        tags += ["pastries", "bakery"]
    if "restaurant" in types:
        tags += ["food", "restaurant"]
    return tags


class PlacesClient:
    """Thin client for the Google Places web service."""

    def __init__(
        self,
        config: PlacesConfig = DEFAULT_PLACES_CONFIG,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.config = config
        self._http = http_client or httpx.Client(timeout=config.timeout)

    def _get(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.config.base_url}/{endpoint}/json"
        try:
            response = self._http.get(url, params={**params, "key": self.config.api_key})
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Places request to %s failed", endpoint, exc_info=True)
            raise PlacesAPIError(f"Places request to {endpoint} failed") from exc

        status = data.get("status", "UNKNOWN")
        if status not in _OK_STATUSES:
            logger.warning("Places API %s returned status %s", endpoint, status)
            raise PlacesAPIError(f"Google Places API error: {status}", status=status)
        return data

    def search_nearby(
        self,
        location: Location,
        radius: int | None = None,
        place_type: str = "cafe",
        keyword: str | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {
            "location": f"{location.lat},{location.lng}",
            "radius": radius or self.config.default_radius_m,
            "type": place_type,
        }
        if keyword:
            params["keyword"] = keyword
        return self._get("nearbysearch", params).get("results", [])

    def search_text(
        self,
        query: str,
        location: Location | None = None,
        radius: int | None = None,
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"query": f"{query} cafe coffee shop"}
        if location:
            params["location"] = f"{location.lat},{location.lng}"
            if radius:
                params["radius"] = radius
        return self._get("textsearch", params).get("results", [])

    def get_place_details(self, place_id: str) -> dict[str, Any]:
        params = {
            "place_id": place_id,
            "fields": (
                "name,formatted_address,geometry,rating,user_ratings_total,price_level,"
                "opening_hours,types,photos,website,formatted_phone_number"
            ),
        }
        return self._get("details", params).get("result", {})

    def _photo_url(self, reference: str) -> str:
        return (
            f"{self.config.base_url}/photo?maxwidth=400"
            f"&photoreference={reference}&key={self.config.api_key}"
        )

    def convert_to_cafe(
        self,
        place: dict[str, Any],
        user_location: Location | None = None,
    ) -> CafeResult:
        """Map a places result onto the café model, estimating what it lacks."""
        point = place["geometry"]["location"]
        types: list[str] = place.get("types", [])
        rating = float(place.get("rating") or 0.0)
        review_count = int(place.get("user_ratings_total") or 0)
        address = place.get("formatted_address") or place.get("vicinity") or ""
        kind = "cafe" if "cafe" in types else "coffee shop"
        now = datetime.now(timezone.utc)

        distance = None
        if user_location is not None:
            distance = calculate_distance(
                user_location.lat, user_location.lng, point["lat"], point["lng"]
            )

        photos = place.get("photos") or []
        return CafeResult(
            id=place["place_id"],
            name=place["name"],
            description=f"A {kind} located at {address}",
            address=address,
            latitude=point["lat"],
            longitude=point["lng"],
            phone=place.get("formatted_phone_number"),
            website=place.get("website"),
            rating=rating,
            review_count=review_count,
            price_level=min(4, max(1, int(place.get("price_level") or 1))),
            hours=parse_opening_hours(
                (place.get("opening_hours") or {}).get("weekday_text", [])
            ),
            wifi={"available": True, "speed": "High-speed"},
            power_outlets=True,
            noise_level=estimate_noise_level(rating, review_count),
            study_friendly=is_study_friendly(types, rating),
            amenities=generate_amenities(types),
            tags=generate_tags(types),
            images=[
                self._photo_url(p["photo_reference"])
                for p in photos[: self.config.max_photos]
            ],
            created_at=now,
            updated_at=now,
            distance=distance,
        )


def lookup_nearby_cafes(
    client: PlacesClient,
    location: Location,
    radius: int | None = None,
    keyword: str | None = None,
    cache: LookupCache = places_cache,
) -> list[CafeResult]:
    """Nearby cafés from the places service, nearest first, cached per request."""
    params = {"lat": location.lat, "lng": location.lng, "radius": radius, "keyword": keyword}
    places = cache.get_or_fetch(
        "nearbysearch",
        params,
        lambda: client.search_nearby(location, radius=radius, keyword=keyword),
    )
    cafes = [client.convert_to_cafe(p, user_location=location) for p in places]
    return sorted(cafes, key=lambda c: c.distance or 0.0)
