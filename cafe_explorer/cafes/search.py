from __future__ import annotations

from datetime import datetime

from .filters import apply_location, filter_cafes, filter_open_now
from .hours import current_time
from .models import Cafe, CafeResult, SearchFilters
from .ranking import rank_cafes


def search_cafes(
    cafes: list[Cafe],
    filters: SearchFilters,
    now: datetime | None = None,
) -> list[CafeResult]:
    """Run the listing pipeline: facets, open-now, distance, then ranking."""
    # --- Static facets ---
    matched = filter_cafes(cafes, filters)

    # --- Open now (time dependent, evaluated once per request) ---
    if filters.open_now:
        matched = filter_open_now(matched, now or current_time())

    # --- Distance ---
    results = apply_location(matched, filters.location, filters.distance)

    return rank_cafes(results, has_location=filters.location is not None)
