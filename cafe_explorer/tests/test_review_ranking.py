from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from cafe_explorer.reviews.models import Review
from cafe_explorer.reviews.ranking import paginate, rank_reviews

BASE = datetime(2024, 6, 1, tzinfo=timezone.utc)


def _review(n: int, days: int, rating: int = 4, helpful: int = 0) -> Review:
    return Review(
        id=f"r{n}",
        cafe_id="1",
        user_name=f"user{n}",
        rating=rating,
        comment="Nice place",
        created_at=BASE + timedelta(days=days),
        helpful=helpful,
    )


@pytest.fixture
def reviews():
    return [
        _review(1, days=3, rating=3, helpful=5),
        _review(2, days=1, rating=5, helpful=0),
        _review(3, days=7, rating=4, helpful=12),
        _review(4, days=5, rating=5, helpful=5),
    ]


def test_newest_is_default(reviews):
    ids = [r.id for r in rank_reviews(reviews)]
    assert ids == ["r3", "r4", "r1", "r2"]
    stamps = [r.created_at for r in rank_reviews(reviews, "newest")]
    assert stamps == sorted(stamps, reverse=True)


def test_oldest(reviews):
    assert [r.id for r in rank_reviews(reviews, "oldest")] == ["r2", "r1", "r4", "r3"]


def test_rating_ties_keep_input_order(reviews):
    assert [r.id for r in rank_reviews(reviews, "rating")] == ["r2", "r4", "r3", "r1"]


def test_helpful_is_non_increasing(reviews):
    ranked = rank_reviews(reviews, "helpful")
    assert [r.helpful for r in ranked] == [12, 5, 5, 0]
    assert [r.id for r in ranked][1:3] == ["r1", "r4"]


def test_unknown_key_falls_back_to_newest(reviews):
    assert rank_reviews(reviews, "funniest") == rank_reviews(reviews, "newest")


def test_input_is_not_mutated(reviews):
    before = list(reviews)
    rank_reviews(reviews, "helpful")
    assert reviews == before


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


def test_second_page_of_twenty_three():
    items = list(range(1, 24))
    page, meta = paginate(items, page=2, limit=10)
    assert page == list(range(11, 21))
    assert meta.total == 23
    assert meta.total_pages == 3
    assert meta.has_next is True
    assert meta.has_prev is True


def test_last_page_is_partial():
    page, meta = paginate(list(range(23)), page=3, limit=10)
    assert len(page) == 3
    assert meta.has_next is False


def test_page_past_the_end_is_empty():
    page, meta = paginate(list(range(5)), page=4, limit=10)
    assert page == []
    assert meta.total_pages == 1
    assert meta.has_prev is True


def test_empty_collection():
    page, meta = paginate([], page=1, limit=10)
    assert page == []
    assert meta.total_pages == 0
    assert meta.has_next is False
    assert meta.has_prev is False


def test_non_positive_limit_is_clamped():
    page, meta = paginate(list(range(3)), page=1, limit=0)
    assert page == [0]
    assert meta.limit == 1
    assert meta.total_pages == 3


def test_page_zero_is_first_page():
    page, meta = paginate(list(range(3)), page=0, limit=2)
    assert page == [0, 1]
    assert meta.page == 1
    assert meta.has_prev is False
