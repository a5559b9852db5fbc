from __future__ import annotations

import logging
import re
from typing import Any, Sequence

from groq import Groq

from ..errors import ConfigurationError, UpstreamDataError
from ..matching.normalize import strip_diacritics
from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "Sos un asistente que resume reseñas de restaurantes y cafés. "
    "Respondé solo con el resumen, sin introducción ni títulos."
)

STOPWORDS = frozenset({
    "el", "la", "los", "las", "un", "una", "unos", "unas", "de", "del", "al", "a",
    "en", "y", "que", "es", "por", "para", "con", "no", "se", "lo", "como", "muy",
    "pero", "sus", "le", "ya", "o", "fue", "este", "ha", "si", "porque", "esta",
    "entre", "cuando", "mas", "sin", "sobre", "tambien", "me", "hasta", "hay",
    "donde", "han", "quien", "desde", "todo", "nos", "durante", "uno", "les", "ni",
    "contra", "otros", "ese", "eso", "ante", "ellos", "e", "esto", "mi", "antes",
    "algunos", "su", "te", "ti", "yo", "tu", "tus",
})

_NON_WORD_RE = re.compile(r"[^a-z0-9\s]")


def tokenize(text: str | None) -> list[str]:
    cleaned = _NON_WORD_RE.sub(" ", strip_diacritics((text or "").lower()))
    return [w for w in cleaned.split() if len(w) > 1]


def relevance_score(review_text: str | None, query: str | None) -> float:
    """Share of the query's content words that the review mentions."""
    words = [w for w in tokenize(query) if w not in STOPWORDS]
    if not words:
        return 1.0
    text = strip_diacritics((review_text or "").lower())
    return sum(1 for w in words if w in text) / len(words)


def select_relevant_reviews(
    reviews: Sequence[dict[str, Any]],
    query: str | None,
    max_reviews: int = DEFAULT_LLM_CONFIG.max_reviews,
) -> list[dict[str, Any]]:
    if not (query or "").strip():
        return list(reviews[:max_reviews])
    ranked = sorted(reviews, key=lambda r: relevance_score(r.get("text"), query), reverse=True)
    return ranked[:max_reviews]


def _build_user_message(reviews: Sequence[dict[str, Any]], query: str | None) -> str:
    block = "\n\n".join(f"[{r.get('rating', '?')}★] {r.get('text') or ''}" for r in reviews)
    if (query or "").strip():
        return (
            f'El usuario buscó: "{query}".\n\n'
            f"Reseñas del lugar (las más relevantes para su búsqueda):\n\n{block}\n\n"
            "Generá un resumen en español de 2 a 3 oraciones que responda a lo que "
            "el usuario buscó, basado en lo que dicen estas reseñas."
        )
    return (
        f"Reseñas del lugar:\n\n{block}\n\n"
        "Generá un resumen en español de 2 a 3 oraciones sobre lo que dicen los "
        "visitantes (ambiente, calidad, experiencia)."
    )


def summarize_reviews(
    reviews: Sequence[dict[str, Any]],
    query: str | None = None,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str | None:
    """
    Summarize a place's reviews, focused on ``query`` when one is given.

    Returns None when there are no reviews to summarize.
    Raises ConfigurationError without an API key and UpstreamDataError (502)
    when the Groq call fails.
    """
    if not reviews:
        return None
    if not config.api_key:
        raise ConfigurationError("GROQ_API_KEY is not configured.")

    selected = select_relevant_reviews(reviews, query, config.max_reviews)
    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": _build_user_message(selected, query)},
            ],
            max_tokens=config.max_tokens,
            temperature=0.3,
        )
        content = response.choices[0].message.content or ""
    except Exception as exc:
        logger.warning("Groq summary call failed", exc_info=True)
        raise UpstreamDataError("Could not generate the review summary.", status_code=502) from exc

    return content.strip() or None
