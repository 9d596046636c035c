"""
Quran search core: normalization, indexing, querying and result assembly.
"""

from .cache import QueryCache
from .data import CorpusProvider, parse_corpus_text, read_corpus_source
from .debounce import Debouncer
from .index import InvertedIndex, VerseLocation, build_index
from .loader import LoadState, ResourceUnavailable, Supplementary, SupplementaryLoader
from .normalizer import normalize_corpus, normalize_text, remove_diacritics
from .results import DisplayRecord, SearchOutcome, assemble_results, format_results
from .search import QueryEngine, intersect_locations
from .service import SearchService, VerseView
from .tokenizer import tokenize

__all__ = [
    # Text
    "normalize_text",
    "normalize_corpus",
    "remove_diacritics",
    "tokenize",
    # Index
    "VerseLocation",
    "InvertedIndex",
    "build_index",
    # Search
    "QueryEngine",
    "intersect_locations",
    "QueryCache",
    # Results
    "DisplayRecord",
    "SearchOutcome",
    "assemble_results",
    "format_results",
    # Data and loading
    "CorpusProvider",
    "parse_corpus_text",
    "read_corpus_source",
    "SupplementaryLoader",
    "Supplementary",
    "LoadState",
    "ResourceUnavailable",
    # Entry points
    "SearchService",
    "VerseView",
    "Debouncer",
]
