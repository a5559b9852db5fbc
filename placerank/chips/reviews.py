"""
Review chips.

Rules, kept strict so cards never claim something the reviews do not say:
- fewer than ``MIN_REVIEWS`` non-empty reviews means no chips at all;
- a chip needs a keyword in at least ``MIN_MENTIONS`` distinct reviews;
- only review text is used, never the venue name or category;
- at most ``MAX_CHIPS`` chips per venue.
Single-review catalog records use a relaxed rule: one keyword hit is enough.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..matching.normalize import normalize_text
from ..recommendations.models import Chip

MAX_CHIPS = 3
MIN_REVIEWS = 3
MIN_MENTIONS = 2


@dataclass(frozen=True)
class ChipRule:
    keywords: tuple[str, ...]
    label: str
    icon: str


RULES: tuple[ChipRule, ...] = (
    ChipRule(("wifi", "internet", "trabajo", "trabajar", "conexión", "conexion"), "buen wifi", "wifi"),
    ChipRule(
        ("reservar", "reserva", "reservación", "reservacion", "lleno", "espera", "esperar", "sin reserva"),
        "se recomienda reservar",
        "calendar",
    ),
    ChipRule(("terraza", "afuera", "exterior", "al aire libre", "parque", "jardín", "jardin"), "terraza", "terraza"),
    ChipRule(
        ("tranquilo", "tranquila", "silencioso", "íntimo", "intimo", "calmado", "relajado"),
        "ambiente tranquilo",
        "tranquilo",
    ),
    ChipRule(
        ("ruidoso", "música", "musica", "animado", "animada", "vivo", "fiesta", "ambiente movido"),
        "ambiente movido",
        "movido",
    ),
    ChipRule(
        ("económico", "economico", "barato", "barata", "accesible", "buen precio", "rico y barato"),
        "precio accesible",
        "precio",
    ),
    ChipRule(("caro", "cara", "precio elevado", "costoso", "carísimo", "carisimo"), "precio elevado", "precio"),
    ChipRule(
        ("perro", "perros", "mascota", "mascotas", "pet friendly", "pet-friendly", "dog friendly"),
        "pet friendly",
        "pet",
    ),
)

_NORMALIZED_RULES: tuple[tuple[ChipRule, tuple[str, ...]], ...] = tuple(
    (rule, tuple(normalize_text(k) for k in rule.keywords)) for rule in RULES
)


def _mentions(text: str, keywords: tuple[str, ...]) -> bool:
    return any(kw in text for kw in keywords)


def extract_chips_from_reviews(reviews: Iterable[str | None] | None) -> list[Chip]:
    texts = [normalize_text(r) for r in reviews or []]
    texts = [t for t in texts if t]
    if len(texts) < MIN_REVIEWS:
        return []

    chips: list[Chip] = []
    for rule, keywords in _NORMALIZED_RULES:
        if len(chips) >= MAX_CHIPS:
            break
        mentions = sum(1 for text in texts if _mentions(text, keywords))
        if mentions >= MIN_MENTIONS and all(c.label != rule.label for c in chips):
            chips.append(Chip(label=rule.label, icon=rule.icon))
    return chips


def extract_chips_from_single_review(text: str | None) -> list[Chip]:
    normalized = normalize_text(text)
    if not normalized:
        return []
    chips: list[Chip] = []
    for rule, keywords in _NORMALIZED_RULES:
        if len(chips) >= MAX_CHIPS:
            break
        if _mentions(normalized, keywords) and all(c.label != rule.label for c in chips):
            chips.append(Chip(label=rule.label, icon=rule.icon))
    return chips
