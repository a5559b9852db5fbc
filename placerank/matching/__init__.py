"""
Venue matching layer.

Responsibilities:
- Normalize free text so every comparison is case and accent insensitive.
- Exclude catalog entries that are not food or drink establishments.
- Cluster raw city labels into canonical cities using coordinates.
- Collapse duplicate venue records into a single best record.
"""
