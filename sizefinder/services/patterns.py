"""
Text pattern helpers for sizing content.

Measurement values are pulled from free text by keyword; size tokens are
matched as whole words against the canonical vocabulary.
"""

import re
from typing import List, Optional, Sequence, Tuple

from ..schemas.size import SIZE_TOKENS


CHEST_KEYWORDS: Tuple[str, ...] = ("chest", "bust", "width")
SHOULDER_KEYWORDS: Tuple[str, ...] = ("shoulder", "shoulders", "yoke")
LENGTH_KEYWORDS: Tuple[str, ...] = ("length", "height")

MEASUREMENT_KEYWORDS = {
    "chest": CHEST_KEYWORDS,
    "shoulders": SHOULDER_KEYWORDS,
    "length": LENGTH_KEYWORDS,
}

# Longest tokens first so XXL is not read as XL.
_TOKEN_ALTERNATION = "|".join(sorted(SIZE_TOKENS, key=len, reverse=True))
SIZE_TOKEN_PATTERN = re.compile(rf"\b({_TOKEN_ALTERNATION})\b", re.I)


def _measurement_pattern(keyword: str) -> re.Pattern:
    return re.compile(
        rf"{re.escape(keyword)}[^\d]*(\d+(?:\.\d+)?)[^\d]*(?:inches|\"|in)?",
        re.I,
    )


def find_measurement(text: str, keywords: Sequence[str]) -> Optional[float]:
    """
    Return the first number that follows one of ``keywords`` in ``text``.

    Keywords are tried in the given order and the first keyword that matches
    anywhere wins, even if a later keyword appears earlier in the text.
    Values are not range-checked.
    """
    if not text:
        return None
    for keyword in keywords:
        match = _measurement_pattern(keyword).search(text)
        if match:
            return float(match.group(1))
    return None


def normalize_size_option(text: str) -> Optional[str]:
    """Extract the first canonical size token from ``text``, upper-cased."""
    if not text:
        return None
    match = SIZE_TOKEN_PATTERN.search(text)
    return match.group(1).upper() if match else None


def find_size_tokens(text: str) -> List[str]:
    """All size tokens in ``text``, upper-cased and deduplicated in order of appearance."""
    found: List[str] = []
    for match in SIZE_TOKEN_PATTERN.finditer(text or ""):
        token = match.group(1).upper()
        if token not in found:
            found.append(token)
    return found
