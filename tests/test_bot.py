import asyncio
from types import SimpleNamespace

import pytest

import bot
from lang import t
from quran_search import SearchService


class FakeMessage:
    """Records replies, edits and deletes in a log shared by one chat."""

    def __init__(self, text="", log=None):
        self.text = text
        self.log = log if log is not None else []
        self.deleted = False

    async def reply_text(self, text):
        reply = FakeMessage(text, self.log)
        self.log.append(reply)
        return reply

    async def edit_text(self, text):
        self.text = text

    async def delete(self):
        self.deleted = True


def make_update(text, chat_id=1, log=None):
    return SimpleNamespace(
        message=FakeMessage(text, log),
        effective_chat=SimpleNamespace(id=chat_id),
    )


def make_context(tasks):
    def create_task(coro):
        task = asyncio.get_running_loop().create_task(coro)
        tasks.append(task)
        return task

    return SimpleNamespace(application=SimpleNamespace(create_task=create_task))


@pytest.fixture
def provider(small_corpus, make_provider):
    return make_provider(
        small_corpus,
        translation=[["Bread and water.", "Water only."], ["Bread alone."]],
        chapter_names=[["The Table"], ["The Bread"]],
    )


@pytest.fixture
def chat(monkeypatch, provider):
    monkeypatch.setattr(bot, "service", SearchService(provider))
    monkeypatch.setattr(bot, "DEBOUNCE_SECONDS", 0.01)
    monkeypatch.setattr(bot, "DEFAULT_LANG", "en")
    monkeypatch.setattr(bot, "_debouncers", {})
    return provider


def texts(log):
    return [m.text for m in log]


@pytest.mark.asyncio
async def test_rapid_messages_run_one_search(chat):
    log, tasks = [], []
    context = make_context(tasks)
    for text in ("br", "bre", "water"):
        await bot.message_router(make_update(text, log=log), context)
    await asyncio.gather(*tasks, return_exceptions=True)

    assert chat.load_calls == 1
    assert texts(log).count(t("searching", "en")) == 1
    assert log[0].deleted
    assert "1- Bread and water. <The Table>" in log[1].text
    assert "2- Water only. <The Table>" in log[1].text


@pytest.mark.asyncio
async def test_each_chat_debounces_separately(chat):
    tasks = []
    context = make_context(tasks)
    await bot.message_router(make_update("water", chat_id=1), context)
    await bot.message_router(make_update("bread", chat_id=2), context)
    await asyncio.gather(*tasks)

    assert chat.load_calls == 2


@pytest.mark.asyncio
async def test_finished_debouncer_is_dropped(chat):
    tasks = []
    context = make_context(tasks)
    await bot.message_router(make_update("wat", chat_id=7), context)
    await bot.message_router(make_update("water", chat_id=7), context)
    assert list(bot._debouncers) == [7]

    await asyncio.gather(*tasks, return_exceptions=True)
    await asyncio.sleep(0)

    assert bot._debouncers == {}


@pytest.mark.asyncio
async def test_search_failure_replaces_status(monkeypatch, chat):
    class BrokenService:
        async def search(self, query):
            raise RuntimeError("boom")

    monkeypatch.setattr(bot, "service", BrokenService())
    log = []
    with pytest.raises(RuntimeError):
        await bot.search_handler(FakeMessage("water", log), "water")

    assert texts(log) == [t("error", "en")]


@pytest.mark.asyncio
async def test_search_failure_in_debounced_task(monkeypatch, chat):
    class BrokenService:
        async def search(self, query):
            raise RuntimeError("boom")

    monkeypatch.setattr(bot, "service", BrokenService())
    log, tasks = [], []
    await bot.message_router(make_update("water", log=log), make_context(tasks))
    results = await asyncio.gather(*tasks, return_exceptions=True)

    assert isinstance(results[0], RuntimeError)
    assert texts(log) == [t("error", "en")]


@pytest.mark.asyncio
async def test_search_load_error(monkeypatch, small_corpus, make_provider, chat):
    monkeypatch.setattr(bot, "service", SearchService(make_provider(small_corpus, fail=True)))
    log = []
    await bot.search_handler(FakeMessage("water", log), "water")

    assert texts(log) == [t("load_error", "en")]


@pytest.mark.asyncio
async def test_reference_shows_verse(chat):
    log = []
    await bot.message_router(make_update("2:1", log=log), make_context([]))

    assert len(log) == 1
    assert log[0].text.startswith("📖 The Bread (1)\nbread alone")
    assert log[0].text.endswith("Bread alone.")


@pytest.mark.asyncio
async def test_invalid_reference(chat):
    log = []
    await bot.message_router(make_update("9:1", log=log), make_context([]))

    assert texts(log) == [t("invalid_reference", "en")]


@pytest.mark.asyncio
async def test_reference_load_error(monkeypatch, small_corpus, make_provider, chat):
    monkeypatch.setattr(bot, "service", SearchService(make_provider(small_corpus, fail=True)))
    log = []
    await bot.message_router(make_update("1:1", log=log), make_context([]))

    assert texts(log) == [t("load_error", "en")]


@pytest.mark.asyncio
async def test_blank_message_is_ignored(chat):
    log, tasks = [], []
    await bot.message_router(make_update("   ", log=log), make_context(tasks))

    assert log == [] and tasks == []
    assert bot._debouncers == {}


@pytest.mark.asyncio
async def test_short_text_is_one_message():
    log = []
    await bot.send_paged_message(FakeMessage(log=log), "a\nb")
    assert texts(log) == ["a\nb"]


@pytest.mark.asyncio
async def test_long_text_splits_at_lines():
    log = []
    lines = [f"{n}- " + "w" * 90 for n in range(100)]
    await bot.send_paged_message(FakeMessage(log=log), "\n".join(lines))

    assert len(log) > 1
    assert all(len(m.text) <= bot.MESSAGE_LIMIT for m in log)
    sent_lines = [line for m in log for line in m.text.split("\n") if line]
    assert sent_lines == lines


@pytest.mark.asyncio
async def test_overlong_line_is_not_truncated():
    log = []
    text = "short\n" + "x" * 9000 + "\ntail"
    await bot.send_paged_message(FakeMessage(log=log), text)

    assert all(len(m.text) <= bot.MESSAGE_LIMIT for m in log)
    assert "".join(texts(log)).replace("\n", "") == text.replace("\n", "")
