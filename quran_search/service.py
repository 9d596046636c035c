"""
Service module: the search entry point used by the CLI and the bot.

Builds the normalized corpus, inverted index, query cache and engine once,
then answers raw queries with ranked display records.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from .cache import QueryCache
from .index import VerseLocation, build_index
from .normalizer import normalize_corpus
from .results import (
    DEFAULT_CHAPTER_LABEL,
    MAX_RENDERED_RESULTS,
    SearchOutcome,
    assemble_results,
    chapter_label,
    lookup_entry,
)
from .search import QueryEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VerseView:
    """A single verse with its translation, addressed 1-based."""
    chapter: int
    verse: int
    text: str
    translation: str
    chapter_name: str


class SearchService:
    """
    Search facade over a corpus provider.

    The provider must expose a `corpus` attribute (chapters of verses) and
    an awaitable `load_supplementary()` returning translation and chapter
    names.
    """

    def __init__(self, provider, max_rendered: int = MAX_RENDERED_RESULTS,
                 match: str = "token", cache_size: Optional[int] = None,
                 default_label: str = DEFAULT_CHAPTER_LABEL):
        self.provider = provider
        self.max_rendered = max_rendered
        self.default_label = default_label

        self.corpus: List[List[str]] = provider.corpus
        self.normalized_corpus = normalize_corpus(self.corpus)
        self.index = build_index(self.normalized_corpus)
        self.cache = QueryCache(max_size=cache_size)
        self.engine = QueryEngine(
            self.index, self.cache,
            normalized_corpus=self.normalized_corpus,
            match=match,
        )

    def chapter_count(self) -> int:
        return len(self.corpus)

    def verse_count(self, chapter: int) -> int:
        """Number of verses in a 1-based chapter (0 if out of range)."""
        if not 1 <= chapter <= len(self.corpus):
            return 0
        return len(self.corpus[chapter - 1])

    def locate(self, raw_query: str) -> List[VerseLocation]:
        """Run the query engine only; no supplementary data needed."""
        return self.engine.search(raw_query)

    async def search(self, raw_query: str) -> SearchOutcome:
        """
        Search the corpus and assemble ranked records.

        Args:
            raw_query: Text as typed by the user

        Returns:
            SearchOutcome; empty when the query is blank

        Raises:
            ResourceUnavailable: if translation or chapter names fail to load
        """
        query = self.cache.normalize_query(raw_query)
        if not query:
            return SearchOutcome(query="")

        supplementary = await self.provider.load_supplementary()
        locations = self.engine.search(raw_query)
        records, hidden_count = assemble_results(
            locations,
            supplementary.translation,
            supplementary.chapter_names,
            max_rendered=self.max_rendered,
            default_label=self.default_label,
        )
        logger.debug(f"Query {query!r}: {len(locations)} matches, {hidden_count} hidden")
        return SearchOutcome(
            query=query,
            records=records,
            hidden_count=hidden_count,
            total=len(locations),
        )

    async def view_verse(self, chapter: int, verse: int) -> VerseView:
        """
        Show one verse by 1-based chapter and verse number.

        Raises:
            ValueError: if the reference is outside the corpus
            ResourceUnavailable: if supplementary data fails to load
        """
        if not 1 <= verse <= self.verse_count(chapter):
            raise ValueError(f"Invalid reference {chapter}:{verse}")

        supplementary = await self.provider.load_supplementary()
        c, v = chapter - 1, verse - 1

        return VerseView(
            chapter=chapter,
            verse=verse,
            text=self.corpus[c][v],
            translation=lookup_entry(supplementary.translation, c, v) or "",
            chapter_name=chapter_label(supplementary.chapter_names, c, self.default_label),
        )
