from __future__ import annotations

import re
import unicodedata

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def strip_diacritics(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_text(value: str | None) -> str:
    """Lowercase, drop accents and collapse non-alphanumeric runs to one space.

    Never fails: ``None`` and empty strings normalize to ``""``. Applying it
    to its own output returns the same string.
    """
    if not value:
        return ""
    folded = strip_diacritics(str(value)).lower()
    return _NON_ALNUM_RE.sub(" ", folded).strip()
