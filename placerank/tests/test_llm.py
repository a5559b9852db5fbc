from unittest.mock import MagicMock, patch

import pytest

from placerank.errors import ConfigurationError, UpstreamDataError
from placerank.llm.config import LLMConfig
from placerank.llm.groq_client import relevance_score, select_relevant_reviews, summarize_reviews, tokenize

SAMPLE_REVIEWS = [
    {"rating": 5, "text": "La pizza es increíble y el ambiente muy tranquilo."},
    {"rating": 4, "text": "Buena atención, aunque tardaron con los postres."},
    {"rating": 3, "text": "Terraza linda, la música fuerte."},
]

ENABLED_CONFIG = LLMConfig(api_key="test-key")
NO_KEY_CONFIG = LLMConfig(api_key="")


def _mock_groq_response(content: str) -> MagicMock:
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    return response


def test_tokenize_drops_accents_and_short_words():
    assert tokenize("¿Tienen música en vivo?") == ["tienen", "musica", "en", "vivo"]
    assert tokenize(None) == []


def test_relevance_score_ignores_stopwords():
    assert relevance_score("Terraza linda", "una terraza con sol") == 0.5
    assert relevance_score("Lo que sea", "de la") == 1.0


def test_select_relevant_reviews_orders_by_query_overlap():
    selected = select_relevant_reviews(SAMPLE_REVIEWS, "terraza con música", max_reviews=2)
    assert selected[0]["rating"] == 3
    assert len(selected) == 2


def test_select_relevant_reviews_without_query_keeps_order():
    assert select_relevant_reviews(SAMPLE_REVIEWS, "", max_reviews=2) == SAMPLE_REVIEWS[:2]


@patch("placerank.llm.groq_client.Groq")
def test_summarize_reviews_returns_summary(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response(
        "  Pizza muy elogiada y ambiente tranquilo.  "
    )

    summary = summarize_reviews(SAMPLE_REVIEWS, "pizza", config=ENABLED_CONFIG)

    assert summary == "Pizza muy elogiada y ambiente tranquilo."
    messages = mock_groq_cls.return_value.chat.completions.create.call_args.kwargs["messages"]
    assert 'El usuario buscó: "pizza"' in messages[1]["content"]


@patch("placerank.llm.groq_client.Groq")
def test_summarize_reviews_api_error_is_upstream_error(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.side_effect = Exception("API timeout")

    with pytest.raises(UpstreamDataError) as exc_info:
        summarize_reviews(SAMPLE_REVIEWS, config=ENABLED_CONFIG)

    assert exc_info.value.status_code == 502


@patch("placerank.llm.groq_client.Groq")
def test_summarize_reviews_empty_content(mock_groq_cls):
    mock_groq_cls.return_value.chat.completions.create.return_value = _mock_groq_response("")

    assert summarize_reviews(SAMPLE_REVIEWS, config=ENABLED_CONFIG) is None


def test_summarize_reviews_without_reviews():
    assert summarize_reviews([], "pizza", config=NO_KEY_CONFIG) is None


def test_summarize_reviews_without_key():
    with pytest.raises(ConfigurationError):
        summarize_reviews(SAMPLE_REVIEWS, config=NO_KEY_CONFIG)
