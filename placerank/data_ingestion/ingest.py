from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any, List

import pandas as pd

from ..matching.city import extract_city_from_address
from ..matching.food_filter import is_food_place
from ..recommendations.data_store import CATALOG_COLUMNS
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

logger = logging.getLogger(__name__)


def _clean(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _coordinate(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value != value:  # NaN
        return None
    return float(value)


def _food_type(questions: List[dict], question: str) -> str | None:
    for item in questions:
        if item.get("question") == question:
            return _clean(item.get("selected_option"))
    return None


def stable_place_id(name: str, address: str | None, maps_url: str | None) -> str:
    """Deterministic catalog id, so re-importing the export keeps place links valid."""
    key = "\x1f".join((name, address or "", maps_url or ""))
    return str(uuid.uuid5(uuid.NAMESPACE_URL, key))


def feature_to_row(
    feature: dict[str, Any],
    config: IngestionConfig = DEFAULT_INGESTION_CONFIG,
) -> dict[str, Any] | None:
    """Map one GeoJSON feature to a catalog row; None when it has no name."""
    props = feature.get("properties") or {}
    location = props.get("location") or {}
    name = _clean(location.get("name"))
    if not name:
        return None

    coords = (feature.get("geometry") or {}).get("coordinates") or []
    # GeoJSON points are [lng, lat].
    lng = _coordinate(coords[0]) if len(coords) > 0 else None
    lat = _coordinate(coords[1]) if len(coords) > 1 else None
    address = _clean(location.get("address"))
    questions = [q for q in props.get("questions") or [] if isinstance(q, dict)]
    rating = props.get("five_star_rating_published")
    maps_url = _clean(props.get("google_maps_url"))

    return {
        "id": stable_place_id(name, address, maps_url),
        "nombre": name,
        "direccion": address,
        "ciudad": extract_city_from_address(address),
        "pais": _clean(location.get("country_code")),
        "lat": lat,
        "lng": lng,
        "google_maps_url": maps_url,
        "five_star_rating_published": _coordinate(rating),
        "tipo_comida": _food_type(questions, config.food_type_question),
        "review_text_published": _clean(props.get("review_text_published")),
        "fecha_resena": _clean(props.get("date")),
        "questions": json.dumps(questions, ensure_ascii=False),
    }


def build_catalog(
    features: List[dict[str, Any]],
    config: IngestionConfig = DEFAULT_INGESTION_CONFIG,
) -> tuple[pd.DataFrame, List[str]]:
    """Return the catalog frame and the names of the skipped features."""
    rows: List[dict[str, Any]] = []
    skipped: List[str] = []
    for feature in features:
        row = feature_to_row(feature, config)
        if row is None:
            skipped.append("(sin nombre)")
            continue
        if not is_food_place(row["nombre"]):
            skipped.append(row["nombre"])
            continue
        rows.append(row)
    return pd.DataFrame(rows, columns=CATALOG_COLUMNS), skipped


def run_ingestion(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> Path:
    """
    Execute the catalog import.

    Steps:
    - Read the GeoJSON FeatureCollection export.
    - Map features into catalog rows, skipping non-food places.
    - Persist the catalog as CSV for the data store.
    """
    with open(config.source_path, encoding="utf-8") as fh:
        data = json.load(fh)
    features = data.get("features") if isinstance(data, dict) else None
    if not isinstance(features, list):
        raise ValueError(f"{config.source_path} is not a GeoJSON FeatureCollection")

    catalog, skipped = build_catalog(features, config)
    logger.info("Catalog import: %d places kept, %d skipped", len(catalog), len(skipped))

    config.processed_data_dir.mkdir(parents=True, exist_ok=True)
    output_path = config.processed_path
    catalog.to_csv(output_path, index=False)
    return output_path


if __name__ == "__main__":
    path = run_ingestion()
    print(f"Ingestion complete. Processed data saved to: {path}")
