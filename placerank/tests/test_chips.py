from placerank.chips.questions import extract_chips_from_questions
from placerank.chips.reviews import extract_chips_from_reviews, extract_chips_from_single_review
from placerank.recommendations.models import QuestionAnswer


def _labels(chips):
    return [c.label for c in chips]


def test_review_chips_need_three_reviews():
    reviews = ["Buen wifi para trabajar", "Excelente wifi"]
    assert extract_chips_from_reviews(reviews) == []


def test_review_chips_need_two_distinct_mentions():
    reviews = [
        "Buen wifi para trabajar con la compu.",
        "El internet anda perfecto.",
        "Tiene una terraza hermosa.",
        "",
        None,
    ]
    assert _labels(extract_chips_from_reviews(reviews)) == ["buen wifi"]


def test_review_chips_match_accents_and_icons():
    reviews = [
        "Lugar tranquilo, ideal para leer.",
        "Muy íntimo y relajado.",
        "Llevamos a nuestro perro y lo atendieron bárbaro.",
        "Pet friendly, aceptan mascotas.",
    ]
    chips = extract_chips_from_reviews(reviews)
    assert _labels(chips) == ["ambiente tranquilo", "pet friendly"]
    assert [c.icon for c in chips] == ["tranquilo", "pet"]


def test_review_chips_capped_at_three():
    reviews = [
        "wifi, terraza, tranquilo y con mi perro",
        "internet, afuera, silencioso, mascotas",
        "trabajar en la terraza es tranquilo, perros bienvenidos",
    ]
    assert len(extract_chips_from_reviews(reviews)) == 3


def test_single_review_chips_are_relaxed():
    assert _labels(extract_chips_from_single_review("Tiene terraza y es barato.")) == [
        "terraza",
        "precio accesible",
    ]
    assert extract_chips_from_single_review("") == []
    assert extract_chips_from_single_review(None) == []


def test_question_chips():
    questions = [
        QuestionAnswer(question="Tipo de comida", selected_option="Parrilla"),
        QuestionAnswer(question="Nivel de ruido", selected_option="Alto"),
        QuestionAnswer(question="¿Reserva recomendada?", selected_option="Sí"),
        QuestionAnswer(question="Precio por persona", selected_option=None),
    ]
    chips = extract_chips_from_questions(questions)
    assert _labels(chips) == ["Parrilla", "Ruido: Alto", "Se recomienda reservar"]
    assert chips[1].icon == "movido"
    assert extract_chips_from_questions([]) == []
    assert extract_chips_from_questions(None) == []
