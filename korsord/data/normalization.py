"""Shared helpers for Swedish answer normalization."""

from __future__ import annotations

import re

SWEDISH_FOLDS = {
    "Å": "A",
    "Ä": "A",
    "Ö": "O",
}

NON_LETTER_RE = re.compile(r"[^A-Z]")


def normalize_answer(text: str) -> str:
    """Return the letters-only uppercase form of ``text`` stored in grid cells.

    Å and Ä fold to A, Ö folds to O, and anything outside A-Z after
    uppercasing (digits, spaces, hyphens, other diacritics) is dropped.
    """

    if not text:
        return ""
    upper = text.upper()
    folded = "".join(SWEDISH_FOLDS.get(char, char) for char in upper)
    return NON_LETTER_RE.sub("", folded)


__all__ = ["normalize_answer", "SWEDISH_FOLDS"]
