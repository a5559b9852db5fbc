from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator

from ..matching.geo import is_valid_coordinate


class QuestionAnswer(BaseModel):
    question: str = ""
    selected_option: str | None = None


class VenueRecord(BaseModel):
    id: str
    name: str = ""
    address: str | None = None
    maps_url: str | None = None
    lat: float | None = None
    lng: float | None = None
    city: str | None = None
    country: str | None = None
    rating: float | None = None
    review: str | None = None
    review_date: str | None = None
    food_type: str | None = None
    questions: list[QuestionAnswer] = Field(default_factory=list)

    @model_validator(mode="after")
    def _paired_coordinates(self) -> "VenueRecord":
        # Coordinates are either both usable or both absent.
        if not (is_valid_coordinate(self.lat) and is_valid_coordinate(self.lng)):
            self.lat = None
            self.lng = None
        if self.rating is not None and not is_valid_coordinate(self.rating):
            self.rating = None
        return self

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None

    @property
    def questions_text(self) -> str:
        return " ".join(
            f"{q.question} {q.selected_option or ''}".strip() for q in self.questions
        )


class Chip(BaseModel):
    label: str
    icon: str


class GeoPoint(BaseModel):
    lat: float
    lng: float


class PlaceResult(BaseModel):
    place_id: str
    name: str
    address: str | None = None
    rating: float | None = None
    type: str = "Lugar"
    geometry: GeoPoint | None = None
    distance_m: int | None = None
    city: str | None = None
    country: str | None = None
    review: str | None = None
    review_date: str | None = None
    google_maps_url: str | None = None
    chips: list[Chip] = Field(default_factory=list)
    score: int | None = None


class SearchResponse(BaseModel):
    results: list[PlaceResult]
    total_candidates: int = 0


class CitiesResponse(BaseModel):
    ciudades: list[str]


class DirectoryPlace(BaseModel):
    place_id: str
    name: str = ""
    vicinity: str | None = None
    rating: float | None = None
    user_ratings_total: int | None = None
    types: list[str] = Field(default_factory=list)
    type: str = "Lugar"
    photo_reference: str | None = None
    geometry: GeoPoint | None = None
    distance_m: int | None = None


class DirectoryResponse(BaseModel):
    results: list[DirectoryPlace]


class ReviewChipsRequest(BaseModel):
    place_ids: list[Any] = Field(default_factory=list, alias="placeIds")


class ReviewChipsResponse(BaseModel):
    chips_by_place_id: dict[str, list[Chip]] = Field(
        default_factory=dict, serialization_alias="chipsByPlaceId"
    )


class ReviewSummaryResponse(BaseModel):
    summary: str | None = None


class CityLookupResponse(BaseModel):
    city: str | None = None
