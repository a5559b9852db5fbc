from __future__ import annotations

import logging
import random
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Sequence

from ..chips.reviews import extract_chips_from_reviews
from ..errors import UpstreamDataError
from ..matching.food_filter import is_food_and_drink_place
from ..matching.geo import haversine_m
from ..recommendations.models import Chip, DirectoryPlace, GeoPoint
from .config import (
    DEFAULT_DIRECTORY_CONFIG,
    DEFAULT_FEATURED_CONFIG,
    DEFAULT_NEARBY_CONFIG,
    DEFAULT_ZONE_CONFIG,
    DirectoryConfig,
    FeaturedConfig,
    NearbyConfig,
    ZoneConfig,
)
from .google_places import nearby_search, place_reviews, require_api_key

logger = logging.getLogger(__name__)

MAX_CHIP_PLACES = 15

ZONE_TYPE_LABELS: tuple[tuple[str, str], ...] = (
    ("restaurant", "Restaurante"),
    ("cafe", "Café"),
    ("bar", "Bar"),
    ("bakery", "Panadería"),
)
LISTING_TYPE_LABELS: tuple[tuple[str, str], ...] = (
    ("restaurant", "Restaurante"),
    ("bar", "Bar"),
    ("cafe", "Café"),
)

RawPlace = dict[str, Any]


def map_type(types: Sequence[str] | None, labels=ZONE_TYPE_LABELS) -> str:
    for key, label in labels:
        if any(key in t for t in types or []):
            return label
    return "Lugar"


def fan_out(
    calls: Sequence[Callable[[], list]],
    max_workers: int = DEFAULT_DIRECTORY_CONFIG.max_workers,
) -> list[list]:
    """Run ``calls`` concurrently and return their results in call order.

    A call that fails with an upstream error contributes an empty list.
    """
    if not calls:
        return []
    with ThreadPoolExecutor(max_workers=min(max_workers, len(calls))) as pool:
        futures = [pool.submit(call) for call in calls]
        results: list[list] = []
        for future in futures:
            try:
                results.append(future.result())
            except UpstreamDataError:
                logger.warning("Directory branch failed, continuing without it", exc_info=True)
                results.append([])
    return results


def _location(place: RawPlace) -> tuple[float, float] | None:
    loc = (place.get("geometry") or {}).get("location") or {}
    lat, lng = loc.get("lat"), loc.get("lng")
    if isinstance(lat, (int, float)) and isinstance(lng, (int, float)):
        return float(lat), float(lng)
    return None


def _distance(place: RawPlace, origin: tuple[float, float] | None) -> float | None:
    loc = _location(place)
    if origin is None or loc is None:
        return None
    return haversine_m(origin[0], origin[1], loc[0], loc[1])


def to_directory_place(
    place: RawPlace,
    origin: tuple[float, float] | None = None,
    labels=ZONE_TYPE_LABELS,
) -> DirectoryPlace:
    loc = _location(place)
    distance = _distance(place, origin)
    photos = place.get("photos") or []
    return DirectoryPlace(
        place_id=str(place.get("place_id") or ""),
        name=place.get("name") or "",
        vicinity=place.get("vicinity"),
        rating=place.get("rating"),
        user_ratings_total=place.get("user_ratings_total"),
        types=list(place.get("types") or []),
        type=map_type(place.get("types"), labels),
        photo_reference=photos[0].get("photo_reference") if photos else None,
        geometry=GeoPoint(lat=loc[0], lng=loc[1]) if loc else None,
        distance_m=round(distance) if distance is not None else None,
    )


def _unique(places: list[RawPlace], exclude: set[str] | None = None) -> list[RawPlace]:
    seen: set[str] = set(exclude or ())
    out: list[RawPlace] = []
    for p in places:
        pid = p.get("place_id")
        if not pid or pid in seen:
            continue
        seen.add(pid)
        out.append(p)
    return out


def _rating(place: RawPlace) -> float:
    return place.get("rating") or 0.0


def _review_count(place: RawPlace) -> int:
    return place.get("user_ratings_total") or 0


def _fetch_types(
    lat: float,
    lng: float,
    radius_m: int,
    types: Sequence[str],
    open_now: bool,
    config: DirectoryConfig,
) -> list[RawPlace]:
    calls = [
        (lambda t=t: nearby_search(lat, lng, radius_m, t, open_now=open_now, config=config))
        for t in types
    ]
    return [p for batch in fan_out(calls, config.max_workers) for p in batch]


# --- Zone picks ---


def _type_overlaps(types: Sequence[str] | None, wanted: Sequence[str]) -> bool:
    normalized = [(t or "").strip().lower() for t in types or []]
    return any(w in t or t in w for w in wanted for t in normalized if t)


def meets_quality_criteria(place: RawPlace, zone: ZoneConfig = DEFAULT_ZONE_CONFIG) -> bool:
    if _rating(place) < zone.min_rating:
        return False
    if not zone.min_reviews <= _review_count(place) <= zone.max_reviews:
        return False
    types = place.get("types")
    return _type_overlaps(types, zone.allowed_main_types) and not _type_overlaps(
        types, zone.excluded_types
    )


def _pick_category(
    lat: float,
    lng: float,
    types: Sequence[str],
    needed: int,
    exclude: set[str],
    zone: ZoneConfig,
    config: DirectoryConfig,
) -> list[RawPlace]:
    """Best rated places of ``types``; widen the radius when too few qualify."""
    out: list[RawPlace] = []
    for radius in zone.radii_m:
        found = _unique(_fetch_types(lat, lng, radius, types, False, config), exclude)
        qualified = [p for p in found if meets_quality_criteria(p, zone)]
        qualified.sort(key=_rating, reverse=True)
        out = qualified[:needed]
        if len(out) >= needed:
            break
    return out


def recommend_by_zone(
    lat: float,
    lng: float,
    rng: random.Random | None = None,
    zone: ZoneConfig = DEFAULT_ZONE_CONFIG,
    config: DirectoryConfig = DEFAULT_DIRECTORY_CONFIG,
) -> list[DirectoryPlace]:
    require_api_key(config)
    selected: list[RawPlace] = []
    selected_ids: set[str] = set()
    for types, needed in zone.categories:
        picks = _pick_category(lat, lng, types, needed, selected_ids, zone, config)
        selected.extend(picks)
        selected_ids.update(p["place_id"] for p in picks)

    wildcard = _pick_category(
        lat, lng, zone.allowed_main_types, zone.wildcard_count, selected_ids, zone, config
    )
    if len(wildcard) >= zone.wildcard_count:
        selected.extend(wildcard)

    # Mixed order so the cards are not grouped by category.
    (rng or random).shuffle(selected)
    return [to_directory_place(p, (lat, lng)) for p in selected]


# --- Open now ---


def parse_radius(raw: str | None, nearby: NearbyConfig = DEFAULT_NEARBY_CONFIG) -> int:
    if not raw:
        return nearby.default_radius_m
    try:
        value = int(float(raw))
    except ValueError:
        value = 0
    if not value:
        value = nearby.default_radius_m
    return min(nearby.max_radius_m, max(nearby.min_radius_m, value))


def _name_key(place: RawPlace) -> str:
    return (place.get("name") or "").strip().lower()


def list_open_nearby(
    lat: float,
    lng: float,
    radius_m: int | None = None,
    open_now: bool = True,
    nearby: NearbyConfig = DEFAULT_NEARBY_CONFIG,
    config: DirectoryConfig = DEFAULT_DIRECTORY_CONFIG,
) -> list[DirectoryPlace]:
    """Independent food and drink places around a point, best first.

    Known chains, names repeated more than ``max_same_name`` times and places
    with a chain-like review volume are left out.
    """
    require_api_key(config)
    radius = radius_m or nearby.default_radius_m
    found = _unique(_fetch_types(lat, lng, radius, nearby.types, open_now, config))
    found = [
        p for p in found
        if _rating(p) > nearby.min_rating and is_food_and_drink_place(p.get("types"))
    ]

    name_counts: dict[str, int] = {}
    for p in found:
        key = _name_key(p)
        if key:
            name_counts[key] = name_counts.get(key, 0) + 1

    filtered = [
        p for p in found
        if not any(chain in _name_key(p) for chain in nearby.chains)
        and _review_count(p) <= nearby.max_chain_reviews
        and name_counts.get(_name_key(p), 0) <= nearby.max_same_name
    ]

    def preferred(p: RawPlace) -> bool:
        return nearby.preferred_min_reviews <= _review_count(p) <= nearby.preferred_max_reviews

    filtered.sort(key=lambda p: (not preferred(p), -_rating(p)))
    return [
        to_directory_place(p, (lat, lng), LISTING_TYPE_LABELS)
        for p in filtered[: nearby.limit]
    ]


# --- Featured ---


def list_featured(
    featured: FeaturedConfig = DEFAULT_FEATURED_CONFIG,
    config: DirectoryConfig = DEFAULT_DIRECTORY_CONFIG,
) -> list[DirectoryPlace]:
    require_api_key(config)
    lat, lng = featured.center
    found = _fetch_types(lat, lng, featured.radius_m, featured.types, False, config)
    top = _unique([p for p in found if _rating(p) >= featured.min_rating])
    top.sort(key=_rating, reverse=True)
    return [to_directory_place(p, None, LISTING_TYPE_LABELS) for p in top[: featured.limit]]


# --- Review chips ---


def review_chips_for_places(
    place_ids: Sequence[Any],
    config: DirectoryConfig = DEFAULT_DIRECTORY_CONFIG,
) -> dict[str, list[Chip]]:
    require_api_key(config)
    ids = [pid for pid in place_ids if isinstance(pid, str)][:MAX_CHIP_PLACES]
    calls = [(lambda pid=pid: place_reviews(pid, config=config)) for pid in ids]
    reviews_per_place = fan_out(calls, config.max_workers)
    return {
        pid: extract_chips_from_reviews([r.get("text") for r in reviews])
        for pid, reviews in zip(ids, reviews_per_place)
    }
