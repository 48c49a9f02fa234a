from __future__ import annotations

from fastapi.testclient import TestClient

from cafe_explorer.analytics.store import get_events
from cafe_explorer.app import app

client = TestClient(app)


def _review_ids(resp) -> list[str]:
    return [r["id"] for r in resp.json()["reviews"]]


def test_list_reviews_newest_first():
    resp = client.get("/api/cafes/1/reviews")
    assert resp.status_code == 200
    assert _review_ids(resp) == ["r4", "r1", "r2", "r3"]
    pagination = resp.json()["pagination"]
    assert pagination == {
        "page": 1,
        "limit": 10,
        "total": 4,
        "total_pages": 1,
        "has_next": False,
        "has_prev": False,
    }


def test_list_reviews_hides_rejected():
    resp = client.get("/api/cafes/7/reviews")
    assert _review_ids(resp) == ["r14"]


def test_list_reviews_sorted_by_helpful():
    resp = client.get("/api/cafes/1/reviews", params={"sortBy": "helpful"})
    assert _review_ids(resp) == ["r3", "r1", "r2", "r4"]


def test_list_reviews_sorted_by_oldest():
    resp = client.get("/api/cafes/1/reviews", params={"sortBy": "oldest"})
    assert _review_ids(resp) == ["r3", "r2", "r1", "r4"]


def test_list_reviews_paginates():
    resp = client.get("/api/cafes/1/reviews", params={"page": 2, "limit": 3})
    body = resp.json()
    assert [r["id"] for r in body["reviews"]] == ["r3"]
    assert body["pagination"]["total_pages"] == 2
    assert body["pagination"]["has_prev"] is True
    assert body["pagination"]["has_next"] is False


def test_list_reviews_rejects_bad_paging():
    assert client.get("/api/cafes/1/reviews", params={"page": 0}).status_code == 422
    assert client.get("/api/cafes/1/reviews", params={"limit": 51}).status_code == 422


def test_list_reviews_unknown_cafe():
    assert client.get("/api/cafes/nope/reviews").status_code == 404


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def test_create_review():
    resp = client.post(
        "/api/cafes/3/reviews",
        json={"user_name": "Ada", "rating": 5, "comment": "Great at 3am.", "wifi_rating": 4},
    )
    assert resp.status_code == 201
    review = resp.json()
    assert review["cafe_id"] == "3"
    assert review["status"] == "approved"
    assert review["helpful"] == 0
    assert review["user_avatar"].startswith("/placeholder.svg")

    listed = client.get("/api/cafes/3/reviews").json()
    assert listed["reviews"][0]["id"] == review["id"]
    assert [e["review_id"] for e in get_events("review_created")] == [review["id"]]


def test_create_review_does_not_touch_cafe_rating():
    before = client.get("/api/cafes/3").json()["cafe"]
    client.post("/api/cafes/3/reviews", json={"user_name": "Ada", "rating": 1, "comment": "Meh"})
    after = client.get("/api/cafes/3").json()["cafe"]
    assert after["rating"] == before["rating"]
    assert after["review_count"] == before["review_count"]


def test_create_review_validation():
    bad_rating = {"user_name": "Ada", "rating": 6, "comment": "Too good"}
    empty_comment = {"user_name": "Ada", "rating": 4, "comment": ""}
    missing_name = {"rating": 4, "comment": "Nice"}
    for body in (bad_rating, empty_comment, missing_name):
        assert client.post("/api/cafes/1/reviews", json=body).status_code == 422


def test_create_review_unknown_cafe():
    resp = client.post("/api/cafes/nope/reviews", json={"user_name": "Ada", "rating": 4, "comment": "Hi"})
    assert resp.status_code == 404


def test_mark_helpful():
    first = client.post("/api/reviews/r2/helpful")
    assert first.status_code == 200
    assert first.json()["helpful"] == 9
    second = client.post("/api/reviews/r2/helpful")
    assert second.json()["helpful"] == 10


def test_mark_helpful_unknown_review():
    assert client.post("/api/reviews/nope/helpful").status_code == 404
