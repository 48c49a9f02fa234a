from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from cafe_explorer.cafes.data_store import get_cafe, update_cafe
from cafe_explorer.cafes.models import CafeUpdate
from cafe_explorer.reviews.models import ReviewCreate, ReviewStatus
from cafe_explorer.reviews.store import (
    add_review,
    delete_reviews_for_cafe,
    get_review,
    get_reviews,
    mark_helpful,
    set_review_status,
)

WORKERS = 8
CALLS_PER_WORKER = 300


def _run_concurrently(fn) -> None:
    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        futures = [pool.submit(fn) for _ in range(WORKERS)]
        for f in futures:
            f.result()


def test_concurrent_helpful_votes_are_all_counted():
    start = get_review("r1").helpful

    def vote():
        for _ in range(CALLS_PER_WORKER):
            mark_helpful("r1")

    _run_concurrently(vote)
    assert get_review("r1").helpful == start + WORKERS * CALLS_PER_WORKER


def test_concurrent_new_reviews_are_all_kept():
    before = len(get_reviews())
    body = ReviewCreate(user_name="Ada", rating=4, comment="Nice")

    def post():
        for _ in range(50):
            add_review("3", body)

    _run_concurrently(post)
    assert len(get_reviews()) == before + WORKERS * 50


def test_votes_and_moderation_do_not_overwrite_each_other():
    start = get_review("r4").helpful

    def vote():
        for _ in range(CALLS_PER_WORKER):
            mark_helpful("r4")

    with ThreadPoolExecutor(max_workers=2) as pool:
        votes = pool.submit(vote)
        moderation = pool.submit(set_review_status, "r4", ReviewStatus.approved)
        votes.result()
        moderation.result()

    review = get_review("r4")
    assert review.helpful == start + CALLS_PER_WORKER
    assert review.status is ReviewStatus.approved


def test_concurrent_cafe_edits_keep_every_field():
    fields = [
        CafeUpdate(phone="(415) 555-9999"),
        CafeUpdate(study_friendly=True),
        CafeUpdate(price_level=3),
        CafeUpdate(tags=["espresso"]),
    ]
    with ThreadPoolExecutor(max_workers=len(fields)) as pool:
        for f in [pool.submit(update_cafe, "6", change) for change in fields]:
            f.result()

    cafe = get_cafe("6")
    assert cafe.phone == "(415) 555-9999"
    assert cafe.study_friendly is True
    assert cafe.price_level == 3
    assert cafe.tags == ["espresso"]


def test_delete_reviews_for_cafe():
    assert delete_reviews_for_cafe("2") == 3
    assert [r for r in get_reviews() if r.cafe_id == "2"] == []
    assert len(get_reviews()) == 12
    assert delete_reviews_for_cafe("2") == 0
