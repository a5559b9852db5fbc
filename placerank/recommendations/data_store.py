from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd

from ..errors import upstream_error
from .config import catalog_path
from .models import QuestionAnswer, VenueRecord

logger = logging.getLogger(__name__)

CATALOG_COLUMNS = [
    "id",
    "nombre",
    "direccion",
    "ciudad",
    "pais",
    "lat",
    "lng",
    "google_maps_url",
    "five_star_rating_published",
    "tipo_comida",
    "review_text_published",
    "fecha_resena",
    "questions",
]

_df: pd.DataFrame | None = None


def _load(path: Path) -> pd.DataFrame:
    df = pd.read_csv(path, dtype=str)
    missing = [c for c in ("id", "nombre") if c not in df.columns]
    if missing:
        raise ValueError(f"catalog is missing columns: {', '.join(missing)}")
    for col in CATALOG_COLUMNS:
        if col not in df.columns:
            df[col] = pd.NA
    for col in ("lat", "lng", "five_star_rating_published"):
        df[col] = pd.to_numeric(df[col], errors="coerce")

    # Best rated first, unrated last, like the catalog query order.
    return df.sort_values(
        "five_star_rating_published", ascending=False, na_position="last", kind="stable"
    ).reset_index(drop=True)


def get_dataframe() -> pd.DataFrame:
    """Return the in-memory catalog DataFrame, loading it on first call.

    Any read failure is reported as an upstream data error; no partial
    catalog is ever returned.
    """
    global _df
    if _df is None:
        path = catalog_path()
        try:
            _df = _load(path)
        except (OSError, ValueError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            logger.warning("Catalog read failed for %s", path, exc_info=True)
            raise upstream_error(str(exc)) from exc
    return _df


def reset_catalog() -> None:
    global _df
    _df = None


def _text(value: Any) -> str | None:
    if value is None or (not isinstance(value, (list, dict)) and pd.isna(value)):
        return None
    text = str(value).strip()
    return text or None


def _number(value: Any) -> float | None:
    if value is None or pd.isna(value):
        return None
    return float(value)


def _questions(value: Any) -> list[QuestionAnswer]:
    raw = value
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            return []
    if not isinstance(raw, list):
        return []
    return [
        QuestionAnswer(
            question=str(item.get("question") or ""),
            selected_option=_text(item.get("selected_option")),
        )
        for item in raw
        if isinstance(item, dict)
    ]


def venue_from_row(row: pd.Series | dict[str, Any]) -> VenueRecord:
    return VenueRecord(
        id=_text(row.get("id")) or "",
        name=_text(row.get("nombre")) or "",
        address=_text(row.get("direccion")),
        maps_url=_text(row.get("google_maps_url")),
        lat=_number(row.get("lat")),
        lng=_number(row.get("lng")),
        city=_text(row.get("ciudad")),
        country=_text(row.get("pais")),
        rating=_number(row.get("five_star_rating_published")),
        review=_text(row.get("review_text_published")),
        review_date=_text(row.get("fecha_resena")),
        food_type=_text(row.get("tipo_comida")),
        questions=_questions(row.get("questions")),
    )


def fetch_venues(limit: int | None = None) -> list[VenueRecord]:
    df = get_dataframe()
    if limit is not None:
        df = df.head(limit)
    return [venue_from_row(row) for _, row in df.iterrows()]


def get_venue(place_id: str) -> VenueRecord | None:
    df = get_dataframe()
    match = df.loc[df["id"] == place_id]
    if match.empty:
        return None
    return venue_from_row(match.iloc[0])
