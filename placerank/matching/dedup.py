"""
Duplicate collapsing for catalog venues.

The same venue shows up several times when it was imported in more than one
pass: once with a review, once bare, sometimes with a slightly different
address or without a map link. Records are grouped in three passes (exact
identity key, loose same-place comparator, same name) and each group keeps a
single best record. Output order is the order of first appearance of each
surviving group, so the result depends only on the input list.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence
from urllib.parse import parse_qsl, urlencode, urlsplit

from ..recommendations.models import VenueRecord
from ..search.scoring import DEFAULT_WEIGHTS, ScoringWeights, score_venue, visited_score
from .city import canonical_city_for
from .geo import haversine_m
from .normalize import normalize_text

logger = logging.getLogger(__name__)

SAME_PLACE_MAX_DISTANCE_M = 180.0

# Query parameters that identify a place in a map link ("?cid=123").
_PLACE_PARAMS = ("cid", "place_id", "query_place_id", "ftid")


def normalize_maps_url(url: str | None) -> str:
    """Scheme, host and path of a map link, lowercased, without trailing slash.

    Place-identifying query parameters are kept; everything else in the
    query (tracking, zoom) is dropped.
    """
    raw = (url or "").strip()
    if not raw:
        return ""
    parts = urlsplit(raw)
    if not parts.scheme or not parts.netloc:
        return normalize_text(raw)
    base = f"{parts.scheme}://{parts.netloc}{parts.path}".rstrip("/").lower()
    params = sorted(
        (k.lower(), v.strip().rstrip("/"))
        for k, v in parse_qsl(parts.query)
        if k.lower() in _PLACE_PARAMS and v.strip()
    )
    return f"{base}?{urlencode(params)}" if params else base


def name_key(venue: VenueRecord) -> str:
    return normalize_text(venue.name)


def identity_key(venue: VenueRecord) -> str:
    name = name_key(venue)
    address = normalize_text(venue.address)
    if name and address:
        return f"na:{name}|{address}"
    maps_url = normalize_maps_url(venue.maps_url)
    if maps_url:
        return f"gm:{maps_url}"
    if name:
        return f"n:{name}"
    return f"id:{venue.id}"


def _parse_review_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    # Naive and aware timestamps must stay comparable.
    return parsed.replace(tzinfo=None)


def is_same_place_loose(
    a: VenueRecord,
    b: VenueRecord,
    city_map: dict[str, str] | None = None,
    max_distance_m: float = SAME_PLACE_MAX_DISTANCE_M,
) -> bool:
    """Partial-evidence check that two records denote one physical venue.

    A shared map link is conclusive. Otherwise the normalized names must be
    equal and the records must also agree on location: coordinates within
    ``max_distance_m``, or the same canonical city and the same address.
    Missing evidence on either side means "not the same place".
    """
    url_a = normalize_maps_url(a.maps_url)
    if url_a and url_a == normalize_maps_url(b.maps_url):
        return True

    name_a = name_key(a)
    if not name_a or name_a != name_key(b):
        return False

    if a.has_coordinates and b.has_coordinates:
        if haversine_m(a.lat, a.lng, b.lat, b.lng) <= max_distance_m:
            return True

    city_map = city_map or {}
    city_a = normalize_text(canonical_city_for(a, city_map))
    city_b = normalize_text(canonical_city_for(b, city_map))
    if not city_a or city_a != city_b:
        return False

    address_a = normalize_text(a.address)
    return bool(address_a) and address_a == normalize_text(b.address)


def pick_better(
    a: VenueRecord,
    b: VenueRecord,
    terms: Sequence[str] = (),
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> VenueRecord:
    """Choose the record to keep out of two duplicates; ties keep ``a``."""
    visit_a, visit_b = visited_score(a), visited_score(b)
    if visit_a != visit_b:
        return b if visit_b > visit_a else a

    if terms:
        score_a, score_b = score_venue(a, terms, weights), score_venue(b, terms, weights)
        if score_a != score_b:
            return b if score_b > score_a else a

    rating_a, rating_b = a.rating or 0.0, b.rating or 0.0
    if rating_a != rating_b:
        return b if rating_b > rating_a else a

    date_a, date_b = _parse_review_date(a.review_date), _parse_review_date(b.review_date)
    if date_a is not None and date_b is not None and date_b > date_a:
        return b
    return a


def _exact_pass(venues: Sequence[VenueRecord]) -> list[VenueRecord]:
    groups: dict[str, VenueRecord] = {}
    for venue in venues:
        key = identity_key(venue)
        current = groups.get(key)
        if current is None:
            groups[key] = venue
            continue
        visit_current, visit_next = visited_score(current), visited_score(venue)
        if visit_next > visit_current or (
            visit_next == visit_current and (venue.rating or 0.0) > (current.rating or 0.0)
        ):
            groups[key] = venue
    return list(groups.values())


def _loose_pass(
    venues: Sequence[VenueRecord],
    terms: Sequence[str],
    city_map: dict[str, str],
    max_distance_m: float,
    weights: ScoringWeights,
) -> list[VenueRecord]:
    accepted: list[VenueRecord] = []
    for venue in venues:
        for i, saved in enumerate(accepted):
            if is_same_place_loose(saved, venue, city_map, max_distance_m):
                accepted[i] = pick_better(saved, venue, terms, weights)
                break
        else:
            accepted.append(venue)
    return accepted


def _may_share_name(a: VenueRecord, b: VenueRecord, city_map: dict[str, str]) -> bool:
    # Both located: the loose pass already judged them on distance.
    if a.has_coordinates and b.has_coordinates:
        return False
    city_a = normalize_text(canonical_city_for(a, city_map))
    city_b = normalize_text(canonical_city_for(b, city_map))
    return not (city_a and city_b and city_a != city_b)


def _name_pass(
    venues: Sequence[VenueRecord],
    terms: Sequence[str],
    city_map: dict[str, str],
    weights: ScoringWeights,
) -> list[VenueRecord]:
    accepted: list[VenueRecord] = []
    for venue in venues:
        key = name_key(venue)
        if key:
            for i, saved in enumerate(accepted):
                if name_key(saved) == key and _may_share_name(saved, venue, city_map):
                    accepted[i] = pick_better(saved, venue, terms, weights)
                    break
            else:
                accepted.append(venue)
        else:
            accepted.append(venue)
    return accepted


def deduplicate(
    venues: Sequence[VenueRecord],
    terms: Sequence[str] = (),
    city_map: dict[str, str] | None = None,
    max_distance_m: float = SAME_PLACE_MAX_DISTANCE_M,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> list[VenueRecord]:
    """Collapse duplicate venue records, keeping the best record per group.

    The loose and name passes repeat until neither merges anything, so
    running ``deduplicate`` on its own output returns it unchanged.
    """
    city_map = city_map or {}
    survivors = _exact_pass(venues)
    while True:
        before = len(survivors)
        survivors = _loose_pass(survivors, terms, city_map, max_distance_m, weights)
        survivors = _name_pass(survivors, terms, city_map, weights)
        if len(survivors) == before:
            break
    logger.debug("Deduplicated %d venue records into %d", len(venues), len(survivors))
    return survivors
