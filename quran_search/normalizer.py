"""
Normalizer module: Arabic diacritic stripping and letter-form unification.

The same function is applied to corpus text at index time and to queries at
search time, so both sides always agree on token spelling.
"""

import re
from typing import List

# Harakat, Quranic annotation marks, superscript alef, tatweel and ZWNJ
ARABIC_DIACRITICS = re.compile(
    r"[\u0610-\u061A\u064B-\u065F\u0670\u06D6-\u06ED\u0640\u200c]"
)

# Arabic yeh -> Farsi yeh, Farsi keheh -> Arabic kaf
LETTER_FORMS = str.maketrans({
    "ي": "ی",
    "ک": "ك",
})


def remove_diacritics(text: str) -> str:
    """Remove diacritics, tatweel and zero-width non-joiners."""
    return ARABIC_DIACRITICS.sub("", text)


def normalize_text(text: str) -> str:
    """
    Normalize Arabic/Persian text for matching.

    Strips diacritics, then maps the yeh and kaf variants to one canonical
    form each. Pure and idempotent.

    Args:
        text: Raw verse or query text

    Returns:
        Normalized text (empty string for empty input)
    """
    if not text:
        return ""
    return remove_diacritics(text).translate(LETTER_FORMS)


def normalize_corpus(corpus: List[List[str]]) -> List[List[str]]:
    """Normalize every verse, keeping the chapter/verse shape intact."""
    return [[normalize_text(verse) for verse in chapter] for chapter in corpus]
