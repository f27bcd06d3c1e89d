"""
Text normalization for els-finder.

Reduces arbitrary text to the canonical A-Z alphabet the grid is built from.
"""

import re
import unicodedata

# Combining diacritical marks left behind by NFD decomposition
_COMBINING_MARKS_RE = re.compile("[\u0300-\u036f]")

# Digits, whitespace and the punctuation set that is stripped before uppercasing
_STRIP_RE = re.compile(r"[0-9\s.,;:!?¡¿()\[\]{}\"'-]")


def normalize_text(text: str) -> str:
    """
    Canonicalize text for ELS scanning.

    Accented letters are decomposed and their marks dropped, digits,
    whitespace and punctuation are removed, and the rest is uppercased.
    Anything that is still outside A-Z afterwards (symbols, letters of
    other scripts) is discarded so the output alphabet is closed.

    Args:
        text: Raw input text.

    Returns:
        String over [A-Z] only. Empty input yields an empty string.
    """
    if not text:
        return ""
    t = unicodedata.normalize("NFD", text)
    t = _COMBINING_MARKS_RE.sub("", t)
    t = _STRIP_RE.sub("", t)
    t = t.upper()
    return "".join(ch for ch in t if "A" <= ch <= "Z")
