"""Shared helpers for vocabulary word normalization."""

from __future__ import annotations

import re
import unicodedata

from ..core.constants import MAX_WORD_LENGTH, MIN_WORD_LENGTH

NON_WORD_RE = re.compile(r"[^A-Z ]")
SPACES_RE = re.compile(r" {2,}")
WORD_RE = re.compile(r"^[A-Z](?:[A-Z ]*[A-Z])?$")


def normalize_word(text: str) -> str:
    """Return ``text`` uppercased with only ``A-Z`` and interior single spaces.

    Accented letters keep their base letter (``Kōkutsu`` -> ``KOKUTSU``).
    """

    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    cleaned = NON_WORD_RE.sub("", stripped.upper().replace("\t", " "))
    return SPACES_RE.sub(" ", cleaned).strip()


def letter_count(word: str) -> int:
    return sum(1 for char in word if char != " ")


def is_valid_word(
    word: str,
    min_length: int = MIN_WORD_LENGTH,
    max_length: int = MAX_WORD_LENGTH,
) -> bool:
    """True when ``word`` is normalized and its length lies in the playable range."""

    return bool(WORD_RE.match(word)) and min_length <= len(word) <= max_length


__all__ = ["normalize_word", "letter_count", "is_valid_word"]
