from __future__ import annotations

from datetime import datetime, timezone

import pytest

from cafe_explorer.analytics.store import clear_events
from cafe_explorer.cafes.data_store import reset_cafes
from cafe_explorer.cafes.models import Cafe
from cafe_explorer.places.cache import places_cache
from cafe_explorer.reviews.store import reset_reviews

OPEN_DAILY = {
    day: "7:00 AM - 10:00 PM"
    for day in ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
}


@pytest.fixture(autouse=True)
def _reset_state():
    """Every test starts from the seed data with empty event log and cache."""
    reset_cafes()
    reset_reviews()
    clear_events()
    places_cache.clear()
    yield


@pytest.fixture
def make_cafe():
    counter = {"n": 0}

    def _make(**overrides) -> Cafe:
        counter["n"] += 1
        data = {
            "id": f"c{counter['n']}",
            "name": f"Café {counter['n']}",
            "description": "",
            "address": "1 Main St",
            "latitude": 37.77,
            "longitude": -122.42,
            "rating": 4.0,
            "review_count": 10,
            "price_level": 2,
            "hours": OPEN_DAILY,
            "noise_level": "moderate",
            "study_friendly": False,
            "amenities": [],
            "tags": [],
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "updated_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        data.update(overrides)
        return Cafe(**data)

    return _make
