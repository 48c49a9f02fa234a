"""
Places lookup integration.

Responsibilities:
- Query the Google Places web service for nearby or matching cafés.
- Convert places results into the café model.
- Cache lookups for a short TTL.
"""
