"""
City canonicalization.

Catalog rows carry dozens of spellings of the same city ("C1425 Palermo",
"Cdad. Autónoma de Buenos Aires", "Buenos Aires"). Labels are extracted from
the formatted address, then clustered by the distance between their
coordinate centroids; every label in a cluster maps to the label with the
most occurrences. The map is rebuilt per request from the current candidate
set and never stored.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Sequence

from .geo import haversine_km, is_valid_coordinate
from .normalize import strip_diacritics

if TYPE_CHECKING:
    from ..recommendations.models import VenueRecord

DEFAULT_CITY_RADIUS_KM = 50.0
CANONICAL_BUENOS_AIRES = "CABA"

_AUTONOMOUS_CITY_RE = re.compile(
    r"(^|\b)(cdad\.?|ciudad)\s+aut[oó]noma\s+de\s+buenos\s+aires(\b|$)", re.IGNORECASE
)
_BUENOS_AIRES_RE = re.compile(r"^(buenos\s+aires|capital\s+federal)$", re.IGNORECASE)
_HAS_DIGIT_RE = re.compile(r"\d")
_PROVINCE_PREFIX_RE = re.compile(r"^provincia de ", re.IGNORECASE)
_CITY_PREFIX_RE = re.compile(r"^(cdad\.?|ciudad)\b", re.IGNORECASE)
_PROVINCE_LIKE_RE = re.compile(r"[A-Za-zÁÉÍÓÚáéíóúÑñ]+(?:\s+[A-Za-zÁÉÍÓÚáéíóúÑñ]+){0,3}")
_POSTAL_LOCALITY_RE = re.compile(r"^(?:[A-Z]\d{4}[A-Z0-9]*|\d{4,5})\b", re.IGNORECASE)


def normalize_city_label(label: str | None) -> str:
    """Clean a raw city label: drop postal codes and unify Buenos Aires variants."""
    raw = (label or "").strip()
    if not raw:
        return ""
    if _AUTONOMOUS_CITY_RE.search(raw):
        return CANONICAL_BUENOS_AIRES

    # "1100-213 Lisboa" -> "Lisboa", "London EC2A 4PY" -> "London"
    cleaned = " ".join(tok for tok in raw.split() if not _HAS_DIGIT_RE.search(tok))
    if _BUENOS_AIRES_RE.match(cleaned):
        return CANONICAL_BUENOS_AIRES
    return cleaned


def extract_city_from_address(address: str | None) -> str | None:
    """Pick the city segment out of a comma-separated formatted address.

    The segment before the trailing country is the default. A "Provincia de"
    segment backs up one position, and in long addresses a postal-code
    prefixed locality wins over a bare province name that follows it.
    """
    if not address or not address.strip():
        return None
    parts = [p.strip() for p in address.split(",") if p.strip()]
    if len(parts) < 2:
        return None

    candidate = parts[-2]
    if _PROVINCE_PREFIX_RE.match(candidate) and len(parts) >= 3:
        candidate = parts[-3]
    elif len(parts) >= 4:
        previous = parts[-3]
        looks_like_province = (
            not _CITY_PREFIX_RE.match(candidate)
            and _PROVINCE_LIKE_RE.fullmatch(candidate) is not None
        )
        if looks_like_province and _POSTAL_LOCALITY_RE.match(previous):
            candidate = previous

    return normalize_city_label(candidate) or None


def venue_city_label(venue: "VenueRecord") -> str | None:
    """Raw city label for a venue: address first, then the explicit city field."""
    return extract_city_from_address(venue.address) or normalize_city_label(venue.city) or None


def city_sort_key(label: str) -> tuple[str, str]:
    # Accent-insensitive ordering, close to a Spanish collation.
    return strip_diacritics(label).casefold(), label


class _UnionFind:
    def __init__(self, size: int) -> None:
        self.parent = list(range(size))

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, a: int, b: int) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra != rb:
            self.parent[rb] = ra


@dataclass
class _LabelStats:
    count: int = 0
    lat_sum: float = 0.0
    lng_sum: float = 0.0
    coord_count: int = 0


def cluster_city_labels(
    points: Iterable[tuple[str | None, float | None, float | None]],
    radius_km: float = DEFAULT_CITY_RADIUS_KM,
) -> dict[str, str]:
    """Map each raw label to its canonical label.

    ``points`` holds one ``(label, lat, lng)`` observation per venue. Labels
    whose centroids are within ``radius_km`` of each other (transitively)
    share the label with the highest occurrence count; labels never seen with
    coordinates map to themselves.
    """
    stats: dict[str, _LabelStats] = {}
    for label, lat, lng in points:
        if not label:
            continue
        entry = stats.setdefault(label, _LabelStats())
        entry.count += 1
        if is_valid_coordinate(lat) and is_valid_coordinate(lng):
            entry.lat_sum += float(lat)
            entry.lng_sum += float(lng)
            entry.coord_count += 1

    located: list[tuple[str, float, float, int]] = []
    mapping: dict[str, str] = {}
    for label, s in stats.items():
        if s.coord_count:
            located.append((label, s.lat_sum / s.coord_count, s.lng_sum / s.coord_count, s.count))
        else:
            mapping[label] = label

    uf = _UnionFind(len(located))
    for i in range(len(located)):
        for j in range(i + 1, len(located)):
            _, lat_a, lng_a, _ = located[i]
            _, lat_b, lng_b, _ = located[j]
            if haversine_km(lat_a, lng_a, lat_b, lng_b) <= radius_km:
                uf.union(i, j)

    components: dict[int, list[tuple[str, int]]] = {}
    for idx, (label, _, _, count) in enumerate(located):
        components.setdefault(uf.find(idx), []).append((label, count))

    for members in components.values():
        canonical = min(members, key=lambda m: (-m[1], city_sort_key(m[0])))[0]
        for label, _ in members:
            mapping[label] = canonical
    return mapping


def build_canonical_city_map(
    venues: Sequence["VenueRecord"],
    radius_km: float = DEFAULT_CITY_RADIUS_KM,
) -> dict[str, str]:
    return cluster_city_labels(
        ((venue_city_label(v), v.lat, v.lng) for v in venues), radius_km
    )


def canonicalize_city(label: str | None, city_map: dict[str, str]) -> str | None:
    if not label:
        return None
    return city_map.get(label, label)


def canonical_city_for(venue: "VenueRecord", city_map: dict[str, str]) -> str | None:
    return canonicalize_city(venue_city_label(venue), city_map)


def available_cities(venues: Sequence["VenueRecord"], city_map: dict[str, str]) -> list[str]:
    """Distinct canonical cities present in ``venues``, in display order."""
    seen: set[str] = set()
    for venue in venues:
        city = canonical_city_for(venue, city_map)
        if city and city.strip():
            seen.add(city.strip())
    return sorted(seen, key=city_sort_key)
