"""
Catalog import package.

Responsibilities:
- Read the GeoJSON export of published reviews (Reseñas.json).
- Drop non-food places and map each feature into the catalog schema.
- Persist the catalog as CSV for the data store.
"""
