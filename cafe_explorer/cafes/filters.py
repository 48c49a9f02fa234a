from __future__ import annotations

from datetime import datetime

from .geo import calculate_distance
from .hours import is_open_now
from .models import Cafe, CafeResult, Location, SearchFilters


def _searchable_text(cafe: Cafe) -> str:
    return " ".join(
        [cafe.name, cafe.description, cafe.address, *cafe.tags, *cafe.amenities]
    ).lower()


def _has_all_amenities(cafe: Cafe, requested: list[str]) -> bool:
    cafe_amenities = [a.lower() for a in cafe.amenities]
    return all(
        any(want.lower() in have for have in cafe_amenities) for want in requested
    )


def _passes_filters(cafe: Cafe, filters: SearchFilters) -> bool:
    """Check if a café satisfies every facet that is set."""
    if filters.query and filters.query.lower() not in _searchable_text(cafe):
        return False

    if filters.amenities and not _has_all_amenities(cafe, filters.amenities):
        return False

    if filters.price_levels and cafe.price_level not in filters.price_levels:
        return False

    if filters.min_rating and cafe.rating < filters.min_rating:
        return False

    if filters.noise_levels and cafe.noise_level not in filters.noise_levels:
        return False

    if filters.study_friendly and not cafe.study_friendly:
        return False

    return True


def filter_cafes(cafes: list[Cafe], filters: SearchFilters) -> list[Cafe]:
    """Return the cafés matching the static facets, in input order.

    Open-now and distance are evaluated separately by :func:`filter_open_now`
    and :func:`apply_location`.
    """
    return [cafe for cafe in cafes if _passes_filters(cafe, filters)]


def filter_open_now(cafes: list[Cafe], now: datetime) -> list[Cafe]:
    return [cafe for cafe in cafes if is_open_now(cafe.hours, now)]


def apply_location(
    cafes: list[Cafe],
    location: Location | None,
    radius: float | None = None,
) -> list[CafeResult]:
    """Annotate cafés with their distance from *location*.

    When *radius* is positive, cafés farther than *radius* miles are dropped.
    A missing or non-positive radius only annotates.
    """
    results: list[CafeResult] = []
    for cafe in cafes:
        if location is None:
            results.append(CafeResult(**cafe.model_dump(exclude={"distance"})))
            continue
        distance = calculate_distance(
            location.lat, location.lng, cafe.latitude, cafe.longitude
        )
        if radius is not None and radius > 0 and distance > radius:
            continue
        results.append(CafeResult(**cafe.model_dump(exclude={"distance"}), distance=distance))
    return results
