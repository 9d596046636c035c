"""
Index module: inverted index from normalized tokens to verse locations.
"""

import logging
from collections.abc import Mapping
from typing import Dict, Iterator, List, NamedTuple, Tuple

from .tokenizer import tokenize

logger = logging.getLogger(__name__)


class VerseLocation(NamedTuple):
    """Zero-based (chapter, verse) position; orders chapter-then-verse."""

    chapter: int
    verse: int


class InvertedIndex(Mapping):
    """
    Read-only mapping of token -> tuple of VerseLocation.

    Entries keep first-insertion order, which is document order because the
    corpus is scanned chapter by chapter, verse by verse.
    """

    def __init__(self, entries: Dict[str, List[VerseLocation]]):
        self._entries: Dict[str, Tuple[VerseLocation, ...]] = {
            token: tuple(locations) for token, locations in entries.items()
        }

    def __getitem__(self, token: str) -> Tuple[VerseLocation, ...]:
        return self._entries[token]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, token: str) -> Tuple[VerseLocation, ...]:
        """Return the locations for *token*, or an empty tuple."""
        return self._entries.get(token, ())


def build_index(normalized_corpus: List[List[str]]) -> InvertedIndex:
    """
    Build the inverted index from an already normalized corpus.

    Each verse contributes at most one location per distinct token.

    Args:
        normalized_corpus: Chapters of normalized verse text

    Returns:
        Immutable InvertedIndex
    """
    entries: Dict[str, List[VerseLocation]] = {}
    verse_total = 0

    for chapter_index, chapter in enumerate(normalized_corpus):
        for verse_index, verse in enumerate(chapter):
            verse_total += 1
            location = VerseLocation(chapter_index, verse_index)
            # dict.fromkeys dedups while keeping token order
            for token in dict.fromkeys(tokenize(verse)):
                references = entries.get(token)
                if references is None:
                    entries[token] = [location]
                else:
                    references.append(location)

    logger.info(f"Indexed {verse_total} verses, {len(entries)} distinct tokens")
    return InvertedIndex(entries)
