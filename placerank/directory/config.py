from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class DirectoryConfig:
    api_key: str = os.getenv("GOOGLE_MAPS_API_KEY", "")
    places_url: str = "https://maps.googleapis.com/maps/api/place"
    geocode_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    language: str = "es"
    timeout: float = 10.0
    max_workers: int = 8


@dataclass(frozen=True)
class NearbyConfig:
    """'Open now' listing: independent, well rated food and drink places."""

    default_radius_m: int = 2000
    min_radius_m: int = 1000
    max_radius_m: int = 10000
    # Strictly greater than this rating.
    min_rating: float = 4.0
    limit: int = 60
    types: tuple[str, ...] = (
        "restaurant", "cafe", "bar", "bakery",
        "meal_takeaway", "meal_delivery", "food", "night_club",
    )
    chains: tuple[str, ...] = (
        "starbucks", "mcdonalds", "burger king", "pain quotidien",
        "havanna", "mostaza", "subway", "kfc", "rapipago",
    )
    max_chain_reviews: int = 10_000
    max_same_name: int = 3
    preferred_min_reviews: int = 50
    preferred_max_reviews: int = 5_000


@dataclass(frozen=True)
class ZoneConfig:
    """Zone picks: 2 cafés or bakeries, 2 restaurants, 1 bar, 1 wildcard."""

    radii_m: tuple[int, ...] = (1000, 2000)
    min_rating: float = 4.3
    min_reviews: int = 50
    max_reviews: int = 8_000
    allowed_main_types: tuple[str, ...] = ("restaurant", "cafe", "bar", "bakery", "food")
    excluded_types: tuple[str, ...] = (
        "lodging", "hotel", "store", "supermarket", "gas_station", "pharmacy",
        "hospital", "gym", "school", "dance_school", "beauty_salon", "hair_care", "spa",
    )
    categories: tuple[tuple[tuple[str, ...], int], ...] = (
        (("cafe", "bakery"), 2),
        (("restaurant",), 2),
        (("bar",), 1),
    )
    wildcard_count: int = 1


@dataclass(frozen=True)
class FeaturedConfig:
    # Buenos Aires city centre
    center: tuple[float, float] = (-34.6037, -58.3816)
    radius_m: int = 5000
    types: tuple[str, ...] = ("restaurant", "bar", "cafe")
    min_rating: float = 4.5
    limit: int = 12


DEFAULT_DIRECTORY_CONFIG = DirectoryConfig()
DEFAULT_NEARBY_CONFIG = NearbyConfig()
DEFAULT_ZONE_CONFIG = ZoneConfig()
DEFAULT_FEATURED_CONFIG = FeaturedConfig()
