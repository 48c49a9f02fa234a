from __future__ import annotations

from typing import TypeVar

from .models import Cafe

C = TypeVar("C", bound=Cafe)

SORT_KEYS = ("rating", "distance", "name", "price_level")


def _distance(cafe: Cafe) -> float:
    return getattr(cafe, "distance", None) or 0.0


def sort_cafes(cafes: list[C], sort_by: str) -> list[C]:
    """Return a new list ordered by *sort_by*; unknown keys keep input order.

    Python's sort is stable, so ties keep their input order.
    """
    if sort_by == "rating":
        return sorted(cafes, key=lambda c: c.rating, reverse=True)
    if sort_by == "name":
        return sorted(cafes, key=lambda c: c.name.casefold())
    if sort_by == "price_level":
        return sorted(cafes, key=lambda c: c.price_level)
    if sort_by == "distance":
        return sorted(cafes, key=_distance)
    return list(cafes)


def rank_cafes(cafes: list[C], has_location: bool) -> list[C]:
    """Primary listing order: nearest first with a location, else best rated."""
    return sort_cafes(cafes, "distance" if has_location else "rating")
