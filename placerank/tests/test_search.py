from placerank.recommendations.models import QuestionAnswer, VenueRecord
from placerank.search.expansion import expand_query, extract_city_hint, resolve_city_hint
from placerank.search.scoring import DEFAULT_WEIGHTS, score_venue, visited_score


def test_expand_query_semantic_map():
    terms = expand_query("pet friendly")
    assert terms[0] == "pet friendly"
    assert "perro" in terms
    assert "mascota" in terms


def test_expand_query_dish_groups_match_plural_and_partial_words():
    terms = expand_query("medialunas")
    assert "medialuna" in terms
    assert "croissant" in terms

    terms = expand_query("burgers con papas")
    assert "hamburguesa" in terms
    assert "fries" in terms


def test_expand_query_normalizes_and_dedupes():
    terms = expand_query("Café")
    assert terms[0] == "cafe"
    assert len(terms) == len(set(terms))
    assert "coffee" in terms


def test_expand_query_empty():
    assert expand_query("") == []
    assert expand_query("   ") == []
    assert expand_query(None) == []


def test_extract_city_hint():
    assert extract_city_hint("cafes en londres") == "londres"
    assert extract_city_hint("Pizza en Córdoba, Argentina") == "cordoba"
    assert extract_city_hint("pizza") is None
    assert extract_city_hint("") is None


def test_resolve_city_hint():
    cities = ["CABA", "Córdoba", "San Carlos de Bariloche"]
    assert resolve_city_hint("cordoba", cities) == "Córdoba"
    assert resolve_city_hint("bariloche", cities) == "San Carlos de Bariloche"
    assert resolve_city_hint("mendoza", cities) is None
    assert resolve_city_hint(None, cities) is None


def test_visited_score_ordering():
    both = VenueRecord(id="1", name="a", rating=4.0, review="muy rico todo")
    review_only = VenueRecord(id="2", name="b", review="muy rico todo")
    rating_only = VenueRecord(id="3", name="c", rating=4.0)
    neither = VenueRecord(id="4", name="d")
    assert [visited_score(v) for v in (both, review_only, rating_only, neither)] == [3, 2, 1, 0]


def test_score_without_terms_is_zero():
    bare = VenueRecord(id="1", name="Lo de Juan")
    assert score_venue(bare, []) == 0


def test_score_semantic_match_in_review():
    venue = VenueRecord(id="1", name="Bar Central", review="A mi hija le encanta llevar a su perro.")
    assert score_venue(venue, expand_query("pet friendly")) > 0


def test_score_weights_per_field():
    venue = VenueRecord(
        id="1",
        name="La Pizza de Juan",
        food_type="Pizza",
        address="Pizza 123, CABA, Argentina",
        review="La pizza es espectacular, volvería siempre.",
        questions=[QuestionAnswer(question="Plato recomendado", selected_option="pizza")],
    )
    w = DEFAULT_WEIGHTS
    assert score_venue(venue, ["pizza"]) == w.name + w.food_type + w.address + w.questions + w.review


def test_short_reviews_do_not_count_and_are_penalised():
    venue = VenueRecord(id="1", name="Lo de Juan", food_type="Pizzería", review="pizzeria")
    # Only the food type matches; the eight-character review is not substantial.
    assert score_venue(venue, ["pizzeria"]) == DEFAULT_WEIGHTS.food_type - DEFAULT_WEIGHTS.no_review_penalty


def test_penalty_is_lighter_with_question_evidence():
    questions = [QuestionAnswer(question="Nivel de ruido", selected_option="Bajo")]
    plain = VenueRecord(id="1", name="Lo de Juan", food_type="Pizzería")
    with_questions = VenueRecord(id="2", name="Lo de Juan", food_type="Pizzería", questions=questions)
    terms = expand_query("pizza")
    assert score_venue(plain, terms) == 3
    assert score_venue(with_questions, terms) == 4


def test_no_match_and_no_evidence_scores_negative():
    venue = VenueRecord(id="1", name="Lo de Juan")
    assert score_venue(venue, expand_query("sushi")) == -1


def test_no_match_with_review_scores_zero():
    venue = VenueRecord(id="1", name="Lo de Juan", review="Excelente atención y buenos precios.")
    assert score_venue(venue, expand_query("sushi")) == 0
