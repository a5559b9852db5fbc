from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..matching.normalize import normalize_text
from ..recommendations.models import VenueRecord

SUBSTANTIAL_REVIEW_MIN_CHARS = 10


@dataclass(frozen=True)
class ScoringWeights:
    name: int = 10
    food_type: int = 5
    address: int = 4
    questions: int = 6
    review: int = 3
    no_review_penalty: int = 2
    no_review_penalty_with_questions: int = 1


DEFAULT_WEIGHTS = ScoringWeights()


def visited_score(venue: VenueRecord) -> int:
    """3 = rating and review, 2 = review only, 1 = rating only, 0 = neither."""
    has_rating = venue.rating is not None
    has_review = bool((venue.review or "").strip())
    if has_rating and has_review:
        return 3
    if has_review:
        return 2
    if has_rating:
        return 1
    return 0


def score_venue(
    venue: VenueRecord,
    terms: Sequence[str],
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> int:
    """Integer relevance of ``venue`` for already-normalized ``terms``.

    Each term adds its field weight once per field it appears in. Venues
    without a substantial review are penalised so that unevidenced matches
    sort behind evidenced ones; an empty term set is neutral and scores 0.
    """
    if not terms:
        return 0

    name = normalize_text(venue.name)
    food_type = normalize_text(venue.food_type)
    address = normalize_text(venue.address)
    questions = normalize_text(venue.questions_text)
    review = normalize_text(venue.review)
    has_review = len(review) > SUBSTANTIAL_REVIEW_MIN_CHARS
    has_questions = bool(questions)

    score = 0
    for term in terms:
        if not term:
            continue
        if term in name:
            score += weights.name
        if term in food_type:
            score += weights.food_type
        if term in address:
            score += weights.address
        if has_questions and term in questions:
            score += weights.questions
        if has_review and term in review:
            score += weights.review

    if not has_review:
        if score > 0:
            score -= (
                weights.no_review_penalty_with_questions if has_questions else weights.no_review_penalty
            )
        elif score == 0 and not has_questions:
            score = -1
    return score
