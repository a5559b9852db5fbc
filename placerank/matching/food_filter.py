"""
Name and type heuristics that keep only food and drink establishments.

``is_food_place`` is a denylist on the venue name, not a classifier: short or
unusual names can slip through, and substrings can reject a legitimate venue
("tour" inside a longer word). Both are accepted imprecisions.
"""
from __future__ import annotations

from typing import Iterable

from .normalize import normalize_text, strip_diacritics

EXCLUDED_NAME_WORDS: tuple[str, ...] = (
    "óptica",
    "optica",
    "optician",
    "hotel",
    "suite",
    "museo",
    "museum",
    "tour",
    "subterránea",
    "subterranea",
    "alojamiento",
    "hospedaje",
    "hostel",
    "cabaña",
    "cabana",
    "bungalow",
    "lodge",
    "apart hotel",
    "resort",
    "hostal",
    "bed and breakfast",
    "b&b",
    "posada",
    "hostería",
    "hosteria",
)

ALLOWED_PLACE_TYPES: tuple[str, ...] = (
    "restaurant",
    "cafe",
    "bar",
    "bakery",
    "meal_takeaway",
    "meal_delivery",
    "food",
    "night_club",
)

EXCLUDED_PLACE_TYPES: tuple[str, ...] = (
    "lodging",
    "hotel",
    "hospital",
    "pharmacy",
    "store",
    "supermarket",
    "gas_station",
)

def _fold(value: str) -> str:
    # Lowercase and accent-free, punctuation kept: "b&b" must not match "club bar".
    return strip_diacritics(value).lower()


_EXCLUDED_FOLDED = tuple(dict.fromkeys(_fold(word) for word in EXCLUDED_NAME_WORDS))


def is_food_place(name: str | None) -> bool:
    """Return False when the name mentions any non-food establishment word."""
    if not normalize_text(name):
        return False
    folded = _fold(name)
    return not any(word in folded for word in _EXCLUDED_FOLDED)


def _normalize_type(value: str) -> str:
    return (value or "").strip().lower()


def _type_in(normalized_type: str, candidates: tuple[str, ...]) -> bool:
    # Directory types sometimes come back as URIs (schema.org/Restaurant).
    return any(c == normalized_type or c in normalized_type for c in candidates)


def is_food_and_drink_place(types: Iterable[str] | None) -> bool:
    """True when at least one allowed type is present and no excluded one."""
    normalized = [_normalize_type(t) for t in types or [] if t]
    if not normalized:
        return False
    has_allowed = any(_type_in(t, ALLOWED_PLACE_TYPES) for t in normalized)
    has_excluded = any(_type_in(t, EXCLUDED_PLACE_TYPES) for t in normalized)
    return has_allowed and not has_excluded
