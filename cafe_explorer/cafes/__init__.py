"""
Café search package.

Responsibilities:
- Hold the in-memory café catalogue seeded from ``data/cafes.json``.
- Filter cafés by search facets (text, amenities, price, rating, noise, study).
- Evaluate opening hours and annotate distance from a reference location.
- Rank the listing by distance or rating.
"""
