"""
Café explorer service.

A café discovery API: filterable listing with distance ranking, café detail
with reviews, search suggestions, an optional places lookup and an admin
back-office for café management and review moderation.
"""
