from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Sequence

from ..chips.questions import extract_chips_from_questions
from ..chips.reviews import extract_chips_from_single_review
from ..errors import NotFoundError
from ..matching.city import (
    available_cities,
    build_canonical_city_map,
    canonical_city_for,
    venue_city_label,
)
from ..matching.dedup import deduplicate, name_key
from ..matching.food_filter import is_food_place
from ..matching.geo import haversine_m
from ..search.expansion import expand_query, extract_city_hint, resolve_city_hint
from ..search.scoring import score_venue, visited_score
from .config import CITIES_CONFIG, RECOMMENDATIONS_CONFIG, SEARCH_CONFIG, RankingConfig
from .data_store import fetch_venues, get_venue
from .models import GeoPoint, PlaceResult, SearchResponse, VenueRecord

logger = logging.getLogger(__name__)

_UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)


@dataclass(frozen=True)
class RankingRequest:
    query: str | None = None
    country: str | None = None
    city: str | None = None
    origin: tuple[float, float] | None = None
    radius_m: float | None = None
    limit: int = 10
    use_city_hint: bool = False


@dataclass
class RankedVenue:
    venue: VenueRecord
    score: int
    city: str | None
    distance_m: float | None = None


@dataclass
class RankingResult:
    items: list[RankedVenue]
    terms: list[str] = field(default_factory=list)
    city_map: dict[str, str] = field(default_factory=dict)
    total_candidates: int = 0


def _country_matches(venue: VenueRecord, country: str | None) -> bool:
    wanted = (country or "").strip().upper()
    if not wanted:
        return True
    return (venue.country or "").strip().upper() == wanted


def _distance(venue: VenueRecord, origin: tuple[float, float] | None) -> float | None:
    if origin is None or not venue.has_coordinates:
        return None
    return haversine_m(origin[0], origin[1], venue.lat, venue.lng)


def rank_venues(
    venues: Sequence[VenueRecord],
    request: RankingRequest,
    config: RankingConfig = SEARCH_CONFIG,
) -> RankingResult:
    """Filter, cluster, score, deduplicate, sort and truncate catalog venues.

    Pure function of its inputs: the city map is rebuilt from the venues
    that survive the food and country filters on every call.
    """
    # --- Hard filters ---
    base = [
        v for v in venues if is_food_place(v.name) and _country_matches(v, request.country)
    ]

    # --- City clustering ---
    city_map = build_canonical_city_map(base, config.city_radius_km)
    city_filter = (request.city or "").strip().lower()
    if request.use_city_hint and request.query:
        hinted = resolve_city_hint(
            extract_city_hint(request.query), available_cities(base, city_map)
        )
        # A city named in the query wins over the selector.
        if hinted:
            city_filter = hinted.lower()

    candidates = base
    if city_filter:
        candidates = [
            v for v in candidates
            if (canonical_city_for(v, city_map) or "").lower() == city_filter
        ]

    if request.origin is not None and request.radius_m is not None:
        candidates = [
            v for v in candidates
            if v.has_coordinates and _distance(v, request.origin) <= request.radius_m
        ]

    # --- Relevance ---
    terms = expand_query(request.query) if request.query and request.query.strip() else []
    scores: dict[int, int] = {}
    if terms:
        for v in candidates:
            scores[id(v)] = score_venue(v, terms, config.weights)
        # Keep an unreviewed duplicate when a same-named record matched.
        matching_names = {
            name_key(v) for v in candidates if scores[id(v)] > 0 and name_key(v)
        }
        candidates = [
            v for v in candidates
            if scores[id(v)] > 0 or (name_key(v) and name_key(v) in matching_names)
        ]

    unique = deduplicate(
        candidates,
        terms=terms,
        city_map=city_map,
        max_distance_m=config.same_place_max_m,
        weights=config.weights,
    )

    items = [
        RankedVenue(
            venue=v,
            score=scores.get(id(v), 0),
            city=canonical_city_for(v, city_map),
            distance_m=_distance(v, request.origin),
        )
        for v in unique
    ]

    def sort_key(item: RankedVenue) -> tuple:
        rating = item.venue.rating or 0.0
        distance = item.distance_m if item.distance_m is not None else math.inf
        if terms:
            return (-item.score, -visited_score(item.venue), -rating, distance)
        return (-rating, -visited_score(item.venue), distance)

    items.sort(key=sort_key)
    logger.debug(
        "Ranked %d venues: %d after filters, %d after dedup",
        len(venues), len(candidates), len(items),
    )
    return RankingResult(
        items=items[: request.limit],
        terms=terms,
        city_map=city_map,
        total_candidates=len(items),
    )


def result_chips(venue: VenueRecord, limit: int):
    chips = extract_chips_from_questions(venue.questions)
    if not chips:
        chips = extract_chips_from_single_review(venue.review)
    return chips[:limit]


def to_place_result(
    item: RankedVenue,
    config: RankingConfig = SEARCH_CONFIG,
    report_distance: bool = True,
) -> PlaceResult:
    venue = item.venue
    return PlaceResult(
        place_id=venue.id,
        name=venue.name,
        address=venue.address,
        rating=venue.rating,
        type=venue.food_type or "Lugar",
        geometry=GeoPoint(lat=venue.lat, lng=venue.lng) if venue.has_coordinates else None,
        distance_m=(
            round(item.distance_m)
            if report_distance and item.distance_m is not None
            else None
        ),
        city=item.city,
        country=venue.country,
        review=venue.review,
        review_date=venue.review_date,
        google_maps_url=venue.maps_url,
        chips=result_chips(venue, config.max_result_chips),
        score=item.score,
    )


def _origin(lat: float | None, lng: float | None) -> tuple[float, float] | None:
    if lat is None or lng is None:
        return None
    return (lat, lng)


def search_places(
    query: str | None = None,
    country: str | None = None,
    city: str | None = None,
    lat: float | None = None,
    lng: float | None = None,
    config: RankingConfig = SEARCH_CONFIG,
) -> SearchResponse:
    """Query search over the catalog.

    The user position only breaks ties by distance; distances are reported
    only when this call site has a radius policy.
    """
    venues = fetch_venues(limit=config.catalog_limit)
    request = RankingRequest(
        query=query,
        country=country,
        city=city,
        origin=_origin(lat, lng),
        radius_m=config.radius_m,
        limit=config.result_limit,
        use_city_hint=True,
    )
    result = rank_venues(venues, request, config)
    report_distance = config.radius_m is not None
    return SearchResponse(
        results=[to_place_result(item, config, report_distance) for item in result.items],
        total_candidates=result.total_candidates,
    )


def recommend_places(
    country: str | None = None,
    city: str | None = None,
    lat: float | None = None,
    lng: float | None = None,
    apply_radius: bool = False,
    config: RankingConfig = RECOMMENDATIONS_CONFIG,
) -> SearchResponse:
    """Rating-ordered browsing of the catalog around a city or a point.

    Distances are reported, and the radius applied, only when the caller
    asks for the radius policy.
    """
    limit = None if (city or "").strip() else config.catalog_limit
    venues = fetch_venues(limit=limit)
    origin = _origin(lat, lng) if apply_radius else None
    request = RankingRequest(
        country=country,
        city=city,
        origin=origin,
        radius_m=config.radius_m if origin else None,
        limit=config.result_limit,
    )
    result = rank_venues(venues, request, config)
    return SearchResponse(
        results=[to_place_result(item, config) for item in result.items],
        total_candidates=result.total_candidates,
    )


def list_cities(country: str | None = None, config: RankingConfig = CITIES_CONFIG) -> list[str]:
    venues = [
        v for v in fetch_venues(limit=config.catalog_limit)
        if is_food_place(v.name) and _country_matches(v, country)
    ]
    city_map = build_canonical_city_map(venues, config.city_radius_km)
    return available_cities(venues, city_map)


def get_place(place_id: str) -> PlaceResult:
    if not _UUID_RE.match(place_id or ""):
        raise NotFoundError("Invalid place id (expected a catalog id).")
    venue = get_venue(place_id)
    if venue is None:
        raise NotFoundError("Place not found.")
    return to_place_result(RankedVenue(venue=venue, score=0, city=venue_city_label(venue)))
