from __future__ import annotations

import time

from fastapi import Depends, FastAPI, HTTPException, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from .analytics.aggregator import compute_dashboard
from .analytics.store import record_event
from .cafes.data_store import add_cafe, delete_cafe, get_cafe, get_cafes, update_cafe
from .cafes.hours import get_business_status
from .cafes.models import (
    WEEKDAYS,
    Cafe,
    CafeCreate,
    CafeListResponse,
    CafeUpdate,
    Location,
    NoiseLevel,
    SearchFilters,
    SuggestionsResponse,
)
from .cafes.ranking import SORT_KEYS, sort_cafes
from .cafes.search import search_cafes
from .cafes.suggestions import get_suggestions
from .config import DEFAULT_APP_CONFIG
from .exceptions import PlacesAPIError
from .logging_config import setup_logging
from .places.client import PlacesClient, lookup_nearby_cafes
from .places.config import DEFAULT_PLACES_CONFIG
from .reviews.models import (
    Review,
    ReviewCreate,
    ReviewModerationList,
    ReviewPage,
    ReviewSort,
    ReviewStatus,
    ReviewStatusUpdate,
)
from .reviews.ranking import paginate, rank_reviews
from .reviews.store import (
    add_review,
    count_by_status,
    delete_review,
    delete_reviews_for_cafe,
    get_reviews,
    get_reviews_for_cafe,
    mark_helpful,
    search_reviews,
    set_review_status,
)

setup_logging()

app = FastAPI(title=DEFAULT_APP_CONFIG.title, version=DEFAULT_APP_CONFIG.version)
app.add_middleware(
    CORSMiddleware,
    allow_origins=DEFAULT_APP_CONFIG.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

_places_client: PlacesClient | None = None


def get_places_client() -> PlacesClient | None:
    """Shared places client, or ``None`` when no API key is configured."""
    global _places_client
    if not DEFAULT_PLACES_CONFIG.is_active:
        return None
    if _places_client is None:
        _places_client = PlacesClient(DEFAULT_PLACES_CONFIG)
    return _places_client


def _require_cafe(cafe_id: str) -> Cafe:
    cafe = get_cafe(cafe_id)
    if cafe is None:
        raise HTTPException(status_code=404, detail="Café not found")
    return cafe


# ---------------------------------------------------------------------------
# Public endpoints
# ---------------------------------------------------------------------------


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata() -> dict:
    cafes = get_cafes()
    amenities = sorted({a for c in cafes for a in c.amenities})
    tags = sorted({t for c in cafes for t in c.tags})
    return {
        "amenities": amenities,
        "tags": tags,
        "noise_levels": [n.value for n in NoiseLevel],
        "price_levels": [1, 2, 3, 4],
        "weekdays": list(WEEKDAYS),
        "review_sort": [s.value for s in ReviewSort],
    }


@app.get("/api/cafes", response_model=CafeListResponse)
def list_cafes(request: Request) -> CafeListResponse:
    start_time = time.time()
    filters = SearchFilters.from_query_params(request.query_params)
    if filters.distance is not None and filters.distance <= 0:
        raise HTTPException(status_code=422, detail="distance must be greater than 0")

    cafes = search_cafes(get_cafes(), filters)

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("search", {
        "query": filters.query,
        "amenities": filters.amenities,
        "price_levels": filters.price_levels,
        "min_rating": filters.min_rating,
        "noise_levels": [n.value for n in filters.noise_levels or []],
        "study_friendly": bool(filters.study_friendly),
        "open_now": bool(filters.open_now),
        "has_location": filters.location is not None,
        "distance": filters.distance,
        "results_returned": len(cafes),
        "response_time_ms": elapsed_ms,
    })
    return CafeListResponse(cafes=cafes, total=len(cafes), filters=filters)


@app.get("/api/cafes/{cafe_id}")
def cafe_detail(cafe_id: str) -> dict:
    cafe = _require_cafe(cafe_id)
    reviews = rank_reviews(get_reviews_for_cafe(cafe_id))
    return {
        "cafe": cafe,
        "reviews": reviews,
        "review_count": len(reviews),
        "status": get_business_status(cafe.hours),
    }


@app.get("/api/cafes/{cafe_id}/reviews", response_model=ReviewPage)
def list_cafe_reviews(
    cafe_id: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=50),
    sort_by: str = Query(default="newest", alias="sortBy"),
) -> ReviewPage:
    _require_cafe(cafe_id)
    ranked = rank_reviews(get_reviews_for_cafe(cafe_id), sort_by)
    items, pagination = paginate(ranked, page, limit)
    return ReviewPage(reviews=items, pagination=pagination)


@app.post("/api/cafes/{cafe_id}/reviews", response_model=Review, status_code=201)
def create_review(cafe_id: str, body: ReviewCreate) -> Review:
    _require_cafe(cafe_id)
    return add_review(cafe_id, body)


@app.post("/api/reviews/{review_id}/helpful", response_model=Review)
def vote_helpful(review_id: str) -> Review:
    review = mark_helpful(review_id)
    if review is None:
        raise HTTPException(status_code=404, detail="Review not found")
    return review


@app.get("/api/search/suggestions", response_model=SuggestionsResponse)
def search_suggestions(q: str = "") -> SuggestionsResponse:
    return SuggestionsResponse(suggestions=get_suggestions(get_cafes(), q))


@app.get("/api/places/nearby")
def places_nearby(
    lat: float = Query(..., ge=-90.0, le=90.0),
    lng: float = Query(..., ge=-180.0, le=180.0),
    radius: int | None = Query(default=None, gt=0, le=50000, description="Metres"),
    keyword: str | None = None,
    client: PlacesClient | None = Depends(get_places_client),
) -> dict:
    if client is None:
        raise HTTPException(status_code=503, detail="Places lookup is not configured")
    try:
        cafes = lookup_nearby_cafes(client, Location(lat=lat, lng=lng), radius, keyword)
    except PlacesAPIError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return {"cafes": cafes, "total": len(cafes)}


# ---------------------------------------------------------------------------
# Admin endpoints
# ---------------------------------------------------------------------------


@app.get("/admin/dashboard")
def admin_dashboard() -> dict:
    return compute_dashboard(get_cafes(), get_reviews())


@app.get("/admin/cafes")
def admin_list_cafes(
    q: str = "",
    sort_by: str = Query(default="name", alias="sortBy"),
) -> dict:
    needle = q.strip().lower()
    cafes = [
        c for c in get_cafes()
        if not needle or needle in c.name.lower() or needle in c.address.lower()
    ]
    if sort_by not in SORT_KEYS:
        raise HTTPException(status_code=422, detail=f"sortBy must be one of {', '.join(SORT_KEYS)}")
    cafes = sort_cafes(cafes, sort_by)
    return {"cafes": cafes, "total": len(cafes)}


@app.post("/admin/cafes", response_model=Cafe, status_code=201)
def admin_create_cafe(body: CafeCreate) -> Cafe:
    return add_cafe(body)


@app.patch("/admin/cafes/{cafe_id}", response_model=Cafe)
def admin_update_cafe(cafe_id: str, body: CafeUpdate) -> Cafe:
    cafe = update_cafe(cafe_id, body)
    if cafe is None:
        raise HTTPException(status_code=404, detail="Café not found")
    return cafe


@app.delete("/admin/cafes/{cafe_id}", status_code=204)
def admin_delete_cafe(cafe_id: str) -> Response:
    if not delete_cafe(cafe_id):
        raise HTTPException(status_code=404, detail="Café not found")
    delete_reviews_for_cafe(cafe_id)
    return Response(status_code=204)


@app.get("/admin/reviews", response_model=ReviewModerationList)
def admin_list_reviews(
    q: str = "",
    status: str = "all",
) -> ReviewModerationList:
    all_reviews = get_reviews()
    if status == "all":
        wanted = None
    else:
        try:
            wanted = ReviewStatus(status)
        except ValueError:
            raise HTTPException(status_code=422, detail=f"Unknown review status: {status}") from None
    reviews = rank_reviews(search_reviews(all_reviews, q, wanted))
    return ReviewModerationList(reviews=reviews, stats=count_by_status(all_reviews))


@app.patch("/admin/reviews/{review_id}/status", response_model=Review)
def admin_set_review_status(review_id: str, body: ReviewStatusUpdate) -> Review:
    review = set_review_status(review_id, body.status)
    if review is None:
        raise HTTPException(status_code=404, detail="Review not found")
    return review


@app.delete("/admin/reviews/{review_id}", status_code=204)
def admin_delete_review(review_id: str) -> Response:
    if not delete_review(review_id):
        raise HTTPException(status_code=404, detail="Review not found")
    return Response(status_code=204)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("cafe_explorer.app:app", host="0.0.0.0", port=8000)
