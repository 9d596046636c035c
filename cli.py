#!/usr/bin/env python3
import asyncio
import logging

from config import (
    CHAPTER_NAMES_FILE,
    CORPUS_FILE,
    DATA_DIR,
    DEFAULT_LANG,
    LOG_LEVEL,
    MAX_RENDERED_RESULTS,
    QUERY_CACHE_SIZE,
    RESOURCE_BASE_URL,
    SEARCH_MODE,
    TRANSLATION_FILE,
)
from lang import t
from quran_search import CorpusProvider, ResourceUnavailable, SearchService, format_results
from quran_search.utils import parse_reference

logger = logging.getLogger(__name__)


def load_service(lang: str) -> SearchService:
    provider = CorpusProvider.from_directory(
        DATA_DIR,
        base_url=RESOURCE_BASE_URL or None,
        corpus_file=CORPUS_FILE,
        translation_file=TRANSLATION_FILE,
        chapter_names_file=CHAPTER_NAMES_FILE,
    )
    return SearchService(
        provider,
        max_rendered=MAX_RENDERED_RESULTS,
        match=SEARCH_MODE,
        cache_size=QUERY_CACHE_SIZE,
        default_label=t("chapter_label", lang),
    )


async def search_flow(service: SearchService, query: str, lang: str) -> None:
    print(t("searching", lang))
    try:
        outcome = await service.search(query)
    except ResourceUnavailable as e:
        logger.error(f"Search failed: {e}")
        print(t("load_error", lang))
        return

    if outcome.total:
        print(t("results_count", lang, total=outcome.total))
    print(format_results(
        outcome,
        hidden_template=t("hidden", lang),
        empty_text=t("no_results", lang),
    ))


async def view_flow(service: SearchService, chapter: int, verse: int, lang: str) -> None:
    try:
        view = await service.view_verse(chapter, verse)
    except ValueError:
        print(t("invalid_reference", lang))
        return
    except ResourceUnavailable as e:
        logger.error(f"View failed: {e}")
        print(t("load_error", lang))
        return

    print(f"\n{view.chapter_name} {view.verse}")
    print(view.text)
    if view.translation:
        print(view.translation)


async def run(lang: str = DEFAULT_LANG) -> None:
    try:
        service = load_service(lang)
    except ResourceUnavailable as e:
        logger.error(f"Corpus unavailable: {e}")
        print(t("load_error", lang))
        return

    print(f"\n{t('welcome', lang)}")
    print(t("menu", lang))

    while True:
        query = await asyncio.to_thread(input, f"\n{t('prompt', lang)} ")
        if not query.strip():
            break

        reference = parse_reference(query)
        if reference:
            await view_flow(service, *reference, lang)
        else:
            await search_flow(service, query, lang)


def main():
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=LOG_LEVEL,
    )
    try:
        asyncio.run(run())
    except (KeyboardInterrupt, EOFError):
        pass


if __name__ == "__main__":
    main()
