from __future__ import annotations

from typing import Sequence

from ..recommendations.models import Chip, QuestionAnswer

MAX_QUESTION_CHIPS = 5
_RESERVATION_KEYS = ("reservas", "reserva recomendada")


def extract_chips_from_questions(questions: Sequence[QuestionAnswer] | None) -> list[Chip]:
    """Food type, noise level and reservation chips from Q/A data."""
    chips: list[Chip] = []
    for item in questions or []:
        question = (item.question or "").strip().lower()
        option = (item.selected_option or "").strip()
        if not option:
            continue
        if "tipo" in question and "comida" in question:
            chips.append(Chip(label=option, icon="coffee"))
        elif "nivel" in question and "ruido" in question:
            icon = "tranquilo" if "bajo" in option.lower() else "movido"
            chips.append(Chip(label=f"Ruido: {option}", icon=icon))
        elif any(key in question for key in _RESERVATION_KEYS):
            chips.append(Chip(label="Se recomienda reservar", icon="calendar"))
    return chips[:MAX_QUESTION_CHIPS]
