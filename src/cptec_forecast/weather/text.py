"""Place-name normalization for upstream search queries."""

import unicodedata


def strip_accents(text: str) -> str:
    """Remove diacritical marks, e.g. 'Brasília' -> 'Brasilia'."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))
