from __future__ import annotations

import json
import logging
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path

from pydantic import TypeAdapter

from ..analytics.store import record_event
from ..config import DEFAULT_APP_CONFIG
from .models import Cafe, CafeCreate, CafeUpdate

logger = logging.getLogger(__name__)

_cafes: list[Cafe] | None = None
_lock = threading.RLock()
_cafe_list_adapter = TypeAdapter(list[Cafe])


def _load(path: Path) -> list[Cafe]:
    with path.open(encoding="utf-8") as fh:
        cafes = _cafe_list_adapter.validate_python(json.load(fh))
    logger.info("Loaded %d cafés from %s", len(cafes), path)
    return cafes


def get_cafes() -> list[Cafe]:
    """Return a snapshot of the in-memory café list, loading it on first call."""
    global _cafes
    with _lock:
        if _cafes is None:
            _cafes = _load(DEFAULT_APP_CONFIG.cafes_path)
        return list(_cafes)


def get_cafe(cafe_id: str) -> Cafe | None:
    for cafe in get_cafes():
        if cafe.id == cafe_id:
            return cafe
    return None


def add_cafe(data: CafeCreate) -> Cafe:
    global _cafes
    now = datetime.now(timezone.utc)
    cafe = Cafe(
        **data.model_dump(),
        id=uuid.uuid4().hex[:12],
        rating=0.0,
        review_count=0,
        created_at=now,
        updated_at=now,
    )
    with _lock:
        _cafes = [*get_cafes(), cafe]
    logger.info("Added café %s (%s)", cafe.id, cafe.name)
    record_event("cafe_created", {"cafe_id": cafe.id, "name": cafe.name})
    return cafe


def update_cafe(cafe_id: str, changes: CafeUpdate) -> Cafe | None:
    """Apply the non-null fields set on *changes*; returns ``None`` for an unknown id."""
    global _cafes
    with _lock:
        cafes = get_cafes()
        for i, current in enumerate(cafes):
            if current.id == cafe_id:
                break
        else:
            return None

        updated = Cafe(**{
            **current.model_dump(),
            **changes.model_dump(exclude_unset=True, exclude_none=True),
            "updated_at": datetime.now(timezone.utc),
        })
        cafes[i] = updated
        _cafes = cafes
    logger.info("Updated café %s", cafe_id)
    record_event("cafe_updated", {"cafe_id": cafe_id, "name": updated.name})
    return updated


def delete_cafe(cafe_id: str) -> bool:
    global _cafes
    with _lock:
        cafes = get_cafes()
        remaining = [c for c in cafes if c.id != cafe_id]
        if len(remaining) == len(cafes):
            return False
        _cafes = remaining
    logger.info("Deleted café %s", cafe_id)
    record_event("cafe_deleted", {"cafe_id": cafe_id})
    return True


def reset_cafes() -> None:
    """Drop in-memory changes; the seed file is reloaded on next access."""
    global _cafes
    with _lock:
        _cafes = None
