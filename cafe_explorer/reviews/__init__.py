"""
Reviews package.

Responsibilities:
- Hold the in-memory review store seeded from ``data/reviews.json``.
- Order reviews (newest, oldest, rating, helpful) and paginate them.
- Support moderation status changes and helpful votes.
"""
