"""
Search module: token and substring lookup of verses.
"""

from typing import List, Optional, Sequence

from .cache import QueryCache
from .index import InvertedIndex, VerseLocation
from .tokenizer import tokenize

MATCH_MODES = ("token", "substring")


def intersect_locations(
    location_lists: Sequence[Sequence[VerseLocation]],
) -> List[VerseLocation]:
    """
    Intersect several location lists, smallest first.

    The result is sorted into document order since set intersection loses it.

    Args:
        location_lists: One list of locations per query token

    Returns:
        Locations present in every list, ascending by (chapter, verse)
    """
    if not location_lists or any(len(lst) == 0 for lst in location_lists):
        return []

    ordered = sorted(location_lists, key=len)
    candidates = set(ordered[0])

    for locations in ordered[1:]:
        lookup = set(locations)
        candidates = {loc for loc in candidates if loc in lookup}
        if not candidates:
            return []

    return sorted(candidates)


class QueryEngine:
    """Resolves raw queries to verse locations in document order."""

    def __init__(self, index: InvertedIndex, cache: QueryCache,
                 normalized_corpus: Optional[List[List[str]]] = None,
                 match: str = "token"):
        if match not in MATCH_MODES:
            raise ValueError(f"Unknown match mode: {match!r}")
        if match == "substring" and normalized_corpus is None:
            raise ValueError("Substring matching needs the normalized corpus")

        self.index = index
        self.cache = cache
        self.normalized_corpus = normalized_corpus
        self.match = match

    def search(self, raw_query: str) -> List[VerseLocation]:
        """
        Search for verses matching *raw_query*.

        Empty queries, queries with no tokens and absent tokens all yield an
        empty list.
        """
        query = self.cache.normalize_query(raw_query)
        if not query:
            return []

        if self.match == "substring":
            return self._search_substring(query)
        return self._search_tokens(query)

    def _search_tokens(self, query: str) -> List[VerseLocation]:
        tokens = tokenize(query)
        if not tokens:
            return []

        if len(tokens) == 1:
            return list(self.index.lookup(tokens[0]))

        location_lists = []
        for token in dict.fromkeys(tokens):
            locations = self.index.lookup(token)
            if not locations:
                return []
            location_lists.append(locations)

        return intersect_locations(location_lists)

    def _search_substring(self, query: str) -> List[VerseLocation]:
        # Can match inside a word, unlike token mode
        return [
            VerseLocation(chapter_index, verse_index)
            for chapter_index, chapter in enumerate(self.normalized_corpus)
            for verse_index, verse in enumerate(chapter)
            if query in verse
        ]
