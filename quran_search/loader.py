"""
Loader module: single-flight asynchronous loading of supplementary data.

Translation and chapter-name data are fetched on first use. Concurrent
callers share one in-flight load; a failed load is not remembered, so the
next call starts a fresh attempt.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class ResourceUnavailable(Exception):
    """Raised when corpus or supplementary data cannot be loaded."""
    pass


class LoadState(Enum):
    NOT_STARTED = "not_started"
    LOADING = "loading"
    LOADED = "loaded"


@dataclass(frozen=True)
class Supplementary:
    """Translation and chapter names, shaped like the corpus."""
    translation: List[List[str]]
    chapter_names: List[List[str]]


class SupplementaryLoader:
    """
    Runs a blocking fetch function at most once at a time.

    Args:
        fetch: Blocking callable returning Supplementary; executed in a
            worker thread via asyncio.to_thread
    """

    def __init__(self, fetch: Callable[[], Supplementary]):
        self._fetch = fetch
        self._value: Optional[Supplementary] = None
        self._task: Optional[asyncio.Future] = None

    @property
    def state(self) -> LoadState:
        if self._value is not None:
            return LoadState.LOADED
        if self._task is not None:
            return LoadState.LOADING
        return LoadState.NOT_STARTED

    @property
    def value(self) -> Optional[Supplementary]:
        return self._value

    async def load(self) -> Supplementary:
        """
        Return the supplementary data, loading it if needed.

        Raises:
            ResourceUnavailable: if the fetch fails; state is reset so a
                later call retries
        """
        if self._value is not None:
            return self._value

        if self._task is None:
            self._task = asyncio.ensure_future(self._run())

        # A cancelled waiter must not cancel the shared load
        return await asyncio.shield(self._task)

    async def _run(self) -> Supplementary:
        logger.info("Loading supplementary resources")
        try:
            value = await asyncio.to_thread(self._fetch)
        except Exception as e:
            self._task = None
            logger.warning(f"Supplementary load failed: {e}")
            if isinstance(e, ResourceUnavailable):
                raise
            raise ResourceUnavailable(str(e)) from e

        self._value = value
        self._task = None
        logger.info("Supplementary resources loaded")
        return value
