from __future__ import annotations

import math

from fastapi import FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .directory.google_places import place_reviews, reverse_geocode_city
from .directory.zone import (
    list_featured,
    list_open_nearby,
    parse_radius,
    recommend_by_zone,
    review_chips_for_places,
)
from .errors import PlaceRankError, ValidationError
from .llm.groq_client import summarize_reviews
from .recommendations.models import (
    CitiesResponse,
    CityLookupResponse,
    DirectoryResponse,
    PlaceResult,
    ReviewChipsRequest,
    ReviewChipsResponse,
    ReviewSummaryResponse,
    SearchResponse,
)
from .recommendations.quota import consume_search
from .recommendations.retrieval import get_place, list_cities, recommend_places, search_places

app = FastAPI(title="PlaceRank API", version="1.0.0")


@app.exception_handler(PlaceRankError)
def handle_placerank_error(request: Request, exc: PlaceRankError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Invalid request parameters."})


def _parse_coordinate(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _require_point(lat: str | None, lng: str | None) -> tuple[float, float]:
    lat_num, lng_num = _parse_coordinate(lat), _parse_coordinate(lng)
    if lat_num is None or lng_num is None:
        raise ValidationError("Parameters lat and lng are required.")
    return lat_num, lng_num


def _optional_point(lat: str | None, lng: str | None) -> tuple[float | None, float | None]:
    lat_num, lng_num = _parse_coordinate(lat), _parse_coordinate(lng)
    if lat_num is None or lng_num is None:
        return None, None
    return lat_num, lng_num


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Catalog endpoints ────────────────────────────────────────────────────


@app.get("/lugares/search", response_model=SearchResponse)
def lugares_search(
    q: str | None = None,
    pais: str | None = None,
    ciudad: str | None = None,
    lat: str | None = None,
    lng: str | None = None,
    x_user_id: str | None = Header(default=None),
) -> SearchResponse:
    if x_user_id:
        consume_search(x_user_id)
    lat_num, lng_num = _optional_point(lat, lng)
    return search_places(query=q, country=pais, city=ciudad, lat=lat_num, lng=lng_num)


@app.get("/lugares/recommendations", response_model=SearchResponse)
def lugares_recommendations(
    pais: str | None = None,
    ciudad: str | None = None,
    lat: str | None = None,
    lng: str | None = None,
    apply_radius: str | None = None,
) -> SearchResponse:
    lat_num, lng_num = _optional_point(lat, lng)
    return recommend_places(
        country=pais,
        city=ciudad,
        lat=lat_num,
        lng=lng_num,
        apply_radius=(apply_radius or "").lower() in ("1", "true"),
    )


@app.get("/lugares/ciudades", response_model=CitiesResponse)
def lugares_ciudades(pais: str | None = None) -> CitiesResponse:
    return CitiesResponse(ciudades=list_cities(pais))


# ── Directory endpoints ──────────────────────────────────────────────────


@app.get("/places/nearby", response_model=DirectoryResponse)
def places_nearby(
    lat: str | None = None,
    lng: str | None = None,
    radius: str | None = None,
    opennow: str | None = None,
) -> DirectoryResponse:
    lat_num, lng_num = _require_point(lat, lng)
    results = list_open_nearby(
        lat_num,
        lng_num,
        radius_m=parse_radius(radius),
        open_now=opennow != "false",
    )
    return DirectoryResponse(results=results)


@app.get("/places/recommendations-by-zone", response_model=DirectoryResponse)
def places_by_zone(lat: str | None = None, lng: str | None = None) -> DirectoryResponse:
    lat_num, lng_num = _require_point(lat, lng)
    return DirectoryResponse(results=recommend_by_zone(lat_num, lng_num))


@app.get("/places/featured", response_model=DirectoryResponse)
def places_featured() -> DirectoryResponse:
    return DirectoryResponse(results=list_featured())


@app.post("/places/review-chips", response_model=ReviewChipsResponse)
def places_review_chips(body: ReviewChipsRequest) -> ReviewChipsResponse:
    if not body.place_ids:
        return ReviewChipsResponse()
    return ReviewChipsResponse(chips_by_place_id=review_chips_for_places(body.place_ids))


@app.get("/places/{place_id}/review-summary", response_model=ReviewSummaryResponse)
def place_review_summary(place_id: str, q: str | None = None) -> ReviewSummaryResponse:
    reviews = place_reviews(place_id)
    return ReviewSummaryResponse(summary=summarize_reviews(reviews, q))


@app.get("/places/{place_id}", response_model=PlaceResult)
def place_detail(place_id: str) -> PlaceResult:
    return get_place(place_id)


@app.get("/geocode/city", response_model=CityLookupResponse)
def geocode_city(lat: str | None = None, lng: str | None = None) -> CityLookupResponse:
    lat_num, lng_num = _require_point(lat, lng)
    return CityLookupResponse(city=reverse_geocode_city(lat_num, lng_num))
