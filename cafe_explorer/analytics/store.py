from __future__ import annotations

import time
from typing import Any

_events: list[dict[str, Any]] = []

# Events shown in the admin "recent activity" feed.
ACTIVITY_TYPES = frozenset({
    "cafe_created",
    "cafe_updated",
    "cafe_deleted",
    "review_created",
    "review_status_changed",
    "review_deleted",
})


def record_event(event_type: str, data: dict[str, Any]) -> None:
    _events.append({
        "type": event_type,
        "timestamp": time.time(),
        **data,
    })


def get_events(event_type: str | None = None) -> list[dict[str, Any]]:
    if event_type is None:
        return list(_events)
    return [e for e in _events if e["type"] == event_type]


def recent_activity(limit: int = 10) -> list[dict[str, Any]]:
    """Most recent back-office activity, newest first."""
    activity = [e for e in _events if e["type"] in ACTIVITY_TYPES]
    return list(reversed(activity))[:limit]


def clear_events() -> None:
    _events.clear()
