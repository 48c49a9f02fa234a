from __future__ import annotations

import math
from typing import TypeVar

from .models import Pagination, Review, ReviewSort

T = TypeVar("T")


def rank_reviews(reviews: list[Review], sort_by: str | ReviewSort | None = None) -> list[Review]:
    """Return reviews ordered by *sort_by* (newest first by default).

    Unknown keys fall back to newest. The input list is left untouched and
    equal keys keep their input order.
    """
    try:
        key = ReviewSort(sort_by) if sort_by else ReviewSort.newest
    except ValueError:
        key = ReviewSort.newest

    if key is ReviewSort.oldest:
        return sorted(reviews, key=lambda r: r.created_at.timestamp())
    if key is ReviewSort.rating:
        return sorted(reviews, key=lambda r: r.rating, reverse=True)
    if key is ReviewSort.helpful:
        return sorted(reviews, key=lambda r: r.helpful, reverse=True)
    return sorted(reviews, key=lambda r: r.created_at.timestamp(), reverse=True)


def paginate(items: list[T], page: int, limit: int) -> tuple[list[T], Pagination]:
    """Slice *items* for a 1-based *page* of size *limit*.

    Page and limit below 1 are clamped to 1.
    """
    page = max(page, 1)
    limit = max(limit, 1)
    total = len(items)
    start = (page - 1) * limit
    end = start + limit
    pagination = Pagination(
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit),
        has_next=end < total,
        has_prev=page > 1,
    )
    return items[start:end], pagination
