from __future__ import annotations

import json
import logging
import threading
import uuid
from collections import Counter
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from ..analytics.store import record_event
from ..config import DEFAULT_APP_CONFIG
from .models import Review, ReviewCreate, ReviewStatus, ReviewStatusCounts

logger = logging.getLogger(__name__)

_reviews: list[Review] | None = None
_lock = threading.RLock()
_review_list_adapter = TypeAdapter(list[Review])


def _load(path: Path) -> list[Review]:
    with path.open(encoding="utf-8") as fh:
        reviews = _review_list_adapter.validate_python(json.load(fh))
    logger.info("Loaded %d reviews from %s", len(reviews), path)
    return reviews


def get_reviews() -> list[Review]:
    """Return a snapshot of every review, loading the seed file on first call."""
    global _reviews
    with _lock:
        if _reviews is None:
            _reviews = _load(DEFAULT_APP_CONFIG.reviews_path)
        return list(_reviews)


def get_review(review_id: str) -> Review | None:
    for review in get_reviews():
        if review.id == review_id:
            return review
    return None


def get_reviews_for_cafe(cafe_id: str, include_rejected: bool = False) -> list[Review]:
    return [
        r for r in get_reviews()
        if r.cafe_id == cafe_id
        and (include_rejected or r.status is not ReviewStatus.rejected)
    ]


def add_review(cafe_id: str, data: ReviewCreate) -> Review:
    global _reviews
    review = Review(
        **data.model_dump(),
        id=uuid.uuid4().hex[:12],
        cafe_id=cafe_id,
        created_at=datetime.now(timezone.utc),
    )
    with _lock:
        _reviews = [*get_reviews(), review]
    logger.info("Added review %s for café %s", review.id, cafe_id)
    record_event("review_created", {
        "review_id": review.id,
        "cafe_id": cafe_id,
        "rating": review.rating,
    })
    return review


def _update(review_id: str, changes: Callable[[Review], dict[str, Any]]) -> Review | None:
    """Replace one review with a copy carrying ``changes(current)``.

    The read and the write happen under the store lock, so concurrent
    updates to the same review are applied one after the other.
    """
    global _reviews
    with _lock:
        reviews = get_reviews()
        for i, current in enumerate(reviews):
            if current.id == review_id:
                break
        else:
            return None
        updated = current.model_copy(update=changes(current))
        reviews[i] = updated
        _reviews = reviews
    return updated


def mark_helpful(review_id: str) -> Review | None:
    return _update(review_id, lambda r: {"helpful": r.helpful + 1})


def set_review_status(review_id: str, status: ReviewStatus) -> Review | None:
    updated = _update(review_id, lambda r: {"status": status})
    if updated is not None:
        logger.info("Review %s moderated to %s", review_id, status.value)
        record_event("review_status_changed", {
            "review_id": review_id,
            "cafe_id": updated.cafe_id,
            "status": status.value,
        })
    return updated


def delete_review(review_id: str) -> bool:
    global _reviews
    with _lock:
        reviews = get_reviews()
        remaining = [r for r in reviews if r.id != review_id]
        if len(remaining) == len(reviews):
            return False
        _reviews = remaining
    logger.info("Deleted review %s", review_id)
    record_event("review_deleted", {"review_id": review_id})
    return True


def delete_reviews_for_cafe(cafe_id: str) -> int:
    """Remove every review owned by *cafe_id*; returns how many were removed."""
    global _reviews
    with _lock:
        reviews = get_reviews()
        remaining = [r for r in reviews if r.cafe_id != cafe_id]
        _reviews = remaining
    removed = len(reviews) - len(remaining)
    if removed:
        logger.info("Deleted %d reviews of café %s", removed, cafe_id)
    return removed


def search_reviews(
    reviews: list[Review],
    query: str | None = None,
    status: ReviewStatus | None = None,
) -> list[Review]:
    """Moderation search over user name and comment, optionally by status."""
    q = (query or "").strip().lower()
    return [
        r for r in reviews
        if (status is None or r.status is status)
        and (not q or q in r.user_name.lower() or q in r.comment.lower())
    ]


def count_by_status(reviews: list[Review]) -> ReviewStatusCounts:
    counts = Counter(r.status.value for r in reviews)
    return ReviewStatusCounts(total=len(reviews), **counts)


def reset_reviews() -> None:
    """Drop in-memory changes; the seed file is reloaded on next access."""
    global _reviews
    with _lock:
        _reviews = None
