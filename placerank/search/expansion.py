from __future__ import annotations

import re
from typing import Sequence

from ..matching.normalize import normalize_text
from .synonyms import DISH_SYNONYM_GROUPS, QUERY_COUNTRY_SUFFIXES, SEMANTIC_MAP

# Normalized once at import; the tables never change at runtime.
_SEMANTIC_ENTRIES: tuple[tuple[str, tuple[str, ...]], ...] = tuple(
    (normalize_text(key), tuple(normalize_text(t) for t in expansions))
    for key, expansions in SEMANTIC_MAP.items()
)
_DISH_GROUPS: tuple[tuple[str, ...], ...] = tuple(
    tuple(normalize_text(member) for member in group) for group in DISH_SYNONYM_GROUPS
)

_CITY_HINT_RE = re.compile(r"\ben\s+([a-z0-9 ]{2,})$")
_COUNTRY_SUFFIX_RE = re.compile(r"\b(" + "|".join(QUERY_COUNTRY_SUFFIXES) + r")$")


def _query_candidates(normalized: str) -> list[str]:
    words = normalized.split()
    bigrams = [f"{a} {b}" for a, b in zip(words, words[1:])]
    return list(dict.fromkeys([*words, *bigrams, normalized]))


def expand_query(query: str | None) -> list[str]:
    """Expand a free-text query into normalized search terms.

    The whole normalized query is always the first term. Thesaurus entries
    whose key appears in the query contribute their expansions, and a dish
    group contributes all its members when any query word or bigram overlaps
    one of them.
    """
    normalized = normalize_text(query)
    if not normalized:
        return []

    terms: dict[str, None] = {normalized: None}
    for key, expansions in _SEMANTIC_ENTRIES:
        if key and key in normalized:
            terms.update((t, None) for t in expansions if t)

    candidates = _query_candidates(normalized)
    for group in _DISH_GROUPS:
        if any(
            cand == syn or syn in cand or cand in syn
            for syn in group
            for cand in candidates
        ):
            terms.update((syn, None) for syn in group if syn)

    return list(terms)


def extract_city_hint(query: str | None) -> str | None:
    """Return the place named by a trailing "en <city>" phrase, if any.

    >>> extract_city_hint("cafes en londres")
    'londres'
    """
    normalized = normalize_text(query)
    if not normalized:
        return None
    match = _CITY_HINT_RE.search(normalized)
    if not match:
        return None
    hint = _COUNTRY_SUFFIX_RE.sub("", match.group(1)).strip()
    return hint or None


def resolve_city_hint(hint: str | None, cities: Sequence[str]) -> str | None:
    """Match a query hint against the available canonical cities."""
    if not hint:
        return None
    for city in cities:
        if normalize_text(city) == hint:
            return city
    for city in cities:
        normalized = normalize_text(city)
        if normalized and (hint in normalized or normalized in hint):
            return city
    return None
