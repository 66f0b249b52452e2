"""Text normalisation shared by the ranker."""
from __future__ import annotations

import re
import unicodedata
from typing import List, Tuple

# Anything that is not a letter or digit in any script separates tokens.
_SEPARATORS = re.compile(r"[\W_]+")


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def normalize_name(text: str) -> str:
    """Return ``text`` case-folded, without accents and punctuation.

    Hyphens, apostrophes and any other punctuation become a single space so
    that ``Saint-Jérôme`` and ``saint jerome`` compare equal. Letters from
    other scripts are kept as they are.
    """

    folded = _strip_accents(text).casefold()
    return " ".join(_SEPARATORS.sub(" ", folded).split())


def tokenize(text: str) -> List[str]:
    """Split a name or query into normalised word tokens."""

    return normalize_name(text).split()


def normalize_with_tokens(text: str) -> Tuple[str, Tuple[str, ...]]:
    normalised = normalize_name(text)
    return normalised, tuple(normalised.split())


__all__ = ["normalize_name", "normalize_with_tokens", "tokenize"]
