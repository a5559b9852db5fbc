"""
External place directory (Google Places / Geocoding).

Responsibilities:
- Thin HTTP client for nearby search, place reviews and reverse geocoding.
- Concurrent fan-out over place types, degrading a failed branch to an
  empty list instead of failing the whole listing.
- Quality, chain and category rules for the "open now", zone and featured
  listings.
"""
