"""Shared helpers for word list normalization."""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable, List

WORD_RE = re.compile(r"[^A-Z]")


def normalize_word(text: str) -> str:
    """Return an uppercase ASCII-letter form of ``text``.

    Accents are folded onto their base letter and everything that is not a
    letter (spaces, hyphens, digits) is dropped.
    """

    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text.strip())
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return WORD_RE.sub("", stripped.upper())


def normalize_words(entries: Iterable[str]) -> List[str]:
    """Normalize every entry, keeping order and dropping ones that end up empty."""

    words = [normalize_word(entry) for entry in entries]
    return [word for word in words if word]


__all__ = ["normalize_word", "normalize_words"]
