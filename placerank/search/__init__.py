"""
Query understanding and relevance scoring.

Responsibilities:
- Expand a free-text query through a mood/amenity/cuisine thesaurus and
  dish-synonym groups into a set of normalized terms.
- Score a venue against those terms across weighted fields.
"""
