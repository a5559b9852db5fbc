from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from ..matching.city import DEFAULT_CITY_RADIUS_KM
from ..matching.dedup import SAME_PLACE_MAX_DISTANCE_M
from ..search.scoring import DEFAULT_WEIGHTS, ScoringWeights

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_CATALOG_CSV = Path(__file__).resolve().parent.parent / "data" / "processed" / "lugares.csv"


def catalog_path() -> Path:
    return Path(os.getenv("PLACERANK_CATALOG_PATH", str(_DEFAULT_CATALOG_CSV)))


@dataclass(frozen=True)
class RankingConfig:
    """Named constants of one call site of the ranking pipeline.

    Radii and limits differ between call sites on purpose; each endpoint
    keeps its own instance instead of sharing one value.
    """

    result_limit: int = 10
    radius_m: float | None = None
    city_radius_km: float = DEFAULT_CITY_RADIUS_KM
    same_place_max_m: float = SAME_PLACE_MAX_DISTANCE_M
    catalog_limit: int = 2000
    max_result_chips: int = 3
    weights: ScoringWeights = field(default_factory=lambda: DEFAULT_WEIGHTS)


SEARCH_CONFIG = RankingConfig(result_limit=10)
# Without a city filter the recommendations view reads only the top-rated rows.
RECOMMENDATIONS_CONFIG = RankingConfig(result_limit=10, radius_m=3000.0, catalog_limit=100)
CITIES_CONFIG = RankingConfig()

SEARCH_LIMIT_PER_USER = 7
