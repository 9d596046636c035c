"""
Cache module: memoizes normalized query strings.
"""

from collections import OrderedDict
from typing import Callable, Optional

from .normalizer import normalize_text


class QueryCache:
    """
    Maps trimmed query strings to their normalized form.

    Unbounded unless *max_size* is given, in which case the least recently
    used entries are evicted.
    """

    def __init__(self, normalizer: Callable[[str], str] = normalize_text,
                 max_size: Optional[int] = None):
        self._normalizer = normalizer
        self._max_size = max_size or None
        self._entries: "OrderedDict[str, str]" = OrderedDict()

    def get_or_compute(self, trimmed_query: str) -> str:
        """Return the cached normalization of *trimmed_query*, computing it once."""
        if trimmed_query in self._entries:
            if self._max_size:
                self._entries.move_to_end(trimmed_query)
            return self._entries[trimmed_query]

        normalized = self._normalizer(trimmed_query)
        self._entries[trimmed_query] = normalized
        if self._max_size and len(self._entries) > self._max_size:
            self._entries.popitem(last=False)
        return normalized

    def normalize_query(self, raw_query: str) -> str:
        """Trim, then normalize through the cache. Blank input gives ''."""
        trimmed = raw_query.strip()
        if not trimmed:
            return ""
        return self.get_or_compute(trimmed)

    @property
    def max_size(self) -> Optional[int]:
        return self._max_size

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, trimmed_query: str) -> bool:
        return trimmed_query in self._entries
