import pytest

import cli
from lang import t
from quran_search import SearchService


@pytest.fixture
def service(small_corpus, make_provider):
    provider = make_provider(
        small_corpus,
        translation=[["Bread and water.", "Water only."], ["Bread alone."]],
        chapter_names=[["The Table"], ["The Bread"]],
    )
    return SearchService(provider)


def test_localized_strings():
    assert t("hidden", "en", count=3) == "The rest are hidden (3 more results)."
    assert t("chapter_label", "fa") == "سوره {number}"
    assert t("missing_key", "en") == "missing_key"
    # Unknown language falls back to English
    assert t("no_results", "xx") == "No results found"


@pytest.mark.asyncio
async def test_search_flow_prints_results(service, capsys):
    await cli.search_flow(service, "water", "en")
    out = capsys.readouterr().out
    assert "2 results" in out
    assert "1- Bread and water. <The Table>" in out
    assert "2- Water only. <The Table>" in out


@pytest.mark.asyncio
async def test_search_flow_reports_load_error(small_corpus, make_provider, capsys):
    service = SearchService(make_provider(small_corpus, fail=True))
    await cli.search_flow(service, "water", "en")
    assert t("load_error", "en") in capsys.readouterr().out


@pytest.mark.asyncio
async def test_view_flow(service, capsys):
    await cli.view_flow(service, 2, 1, "en")
    out = capsys.readouterr().out
    assert "The Bread 1" in out
    assert "bread alone" in out
    assert "Bread alone." in out


@pytest.mark.asyncio
async def test_view_flow_invalid_reference(service, capsys):
    await cli.view_flow(service, 5, 1, "en")
    assert t("invalid_reference", "en") in capsys.readouterr().out
