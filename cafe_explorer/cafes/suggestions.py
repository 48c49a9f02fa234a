from __future__ import annotations

from .models import Cafe

MIN_QUERY_LENGTH = 2
MAX_SUGGESTIONS = 8


def get_suggestions(cafes: list[Cafe], query: str | None, limit: int = MAX_SUGGESTIONS) -> list[str]:
    """Collect distinct café names, tags and amenities containing *query*."""
    q = (query or "").strip().lower()
    if len(q) < MIN_QUERY_LENGTH:
        return []

    # dict keeps first-seen order
    found: dict[str, None] = {}
    for cafe in cafes:
        for candidate in (cafe.name, *cafe.tags, *cafe.amenities):
            if q in candidate.lower():
                found.setdefault(candidate, None)
    return list(found)[:limit]
