from __future__ import annotations

from collections import Counter
from typing import Any

from ..cafes.models import Cafe
from ..reviews.models import Review
from ..reviews.store import count_by_status
from .store import get_events, recent_activity

_FILTER_FIELDS = (
    "query",
    "amenities",
    "price_levels",
    "min_rating",
    "noise_levels",
    "study_friendly",
    "open_now",
    "has_location",
)


def compute_dashboard(cafes: list[Cafe], reviews: list[Review]) -> dict[str, Any]:
    total_cafes = len(cafes)
    avg_rating = round(sum(c.rating for c in cafes) / total_cafes, 1) if cafes else 0.0
    study_friendly = sum(1 for c in cafes if c.study_friendly)

    searches = get_events("search")
    total_searches = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Filter usage rates
    filter_counts = {name: 0 for name in _FILTER_FIELDS}
    for s in searches:
        for name in _FILTER_FIELDS:
            if s.get(name):
                filter_counts[name] += 1
    filter_usage = {
        k: round(v / total_searches * 100, 1) if total_searches else 0.0
        for k, v in filter_counts.items()
    }

    # Most requested amenities
    amenity_counter: Counter[str] = Counter()
    for s in searches:
        for a in s.get("amenities") or []:
            amenity_counter[a.lower()] += 1
    top_amenities = [{"name": n, "count": c} for n, c in amenity_counter.most_common(5)]

    return {
        "total_cafes": total_cafes,
        "total_reviews": len(reviews),
        "average_rating": avg_rating,
        "study_friendly_cafes": study_friendly,
        "study_friendly_rate": round(study_friendly / total_cafes * 100, 1) if cafes else 0.0,
        "review_status": count_by_status(reviews).model_dump(),
        "total_searches": total_searches,
        "avg_response_time_ms": avg_time,
        "filter_usage": filter_usage,
        "top_amenities": top_amenities,
        "recent_activity": recent_activity(10),
    }
