"""
Catalog ranking engine.

Responsibilities:
- Load the reviewed-places catalog and map rows into venue records.
- Filter by food, country, canonical city and radius.
- Score candidates against the expanded query and collapse duplicates.
- Return sorted, truncated results ready for API serialisation.
- Count searches per user against the lifetime quota.
"""
