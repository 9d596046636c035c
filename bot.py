#!/usr/bin/env python3
import logging

from telegram import Update
from telegram.ext import (
    Application,
    CommandHandler,
    MessageHandler,
    filters,
    ContextTypes,
)

from cli import load_service
from config import BOT_TOKEN, DEBOUNCE_SECONDS, DEFAULT_LANG, LOG_LEVEL
from lang import t
from quran_search import Debouncer, ResourceUnavailable, SearchService, format_results
from quran_search.utils import parse_reference

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=LOG_LEVEL,
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

MESSAGE_LIMIT = 4000

service: SearchService | None = None

# { chat_id: Debouncer }
_debouncers: dict[int, Debouncer] = {}


# ---------------------------------------------------------------------------
# Paged long message helper
# ---------------------------------------------------------------------------

async def send_paged_message(message, text: str):
    """Split long text at line boundaries and send as multiple messages."""
    if len(text) <= MESSAGE_LIMIT:
        await message.reply_text(text)
        return

    step        = MESSAGE_LIMIT - 1
    current_msg = ""
    for line in text.split("\n"):
        # Lines longer than one message are cut into consecutive pieces
        pieces = [line[i:i + step] for i in range(0, len(line), step)] or [""]
        for n, piece in enumerate(pieces, 1):
            chunk = piece + "\n" if n == len(pieces) else piece
            if len(current_msg + chunk) <= MESSAGE_LIMIT:
                current_msg += chunk
            else:
                if current_msg.strip():
                    await message.reply_text(current_msg)
                current_msg = chunk

    if current_msg.strip():
        await message.reply_text(current_msg)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

async def start(update: Update, _context: ContextTypes.DEFAULT_TYPE):
    await update.message.reply_text(f"{t('welcome', DEFAULT_LANG)}\n{t('menu', DEFAULT_LANG)}")


async def search_handler(message, query: str):
    """Run one search and reply with the formatted results."""
    lang   = DEFAULT_LANG
    status = await message.reply_text(t("searching", lang))
    try:
        outcome = await service.search(query)
    except ResourceUnavailable as e:
        logger.warning(f"Search failed, resources unavailable: {e}")
        await status.edit_text(t("load_error", lang))
        return
    except Exception:
        # Never leave the chat on the "searching" status
        await status.edit_text(t("error", lang))
        raise

    await status.delete()
    text = format_results(
        outcome,
        hidden_template=t("hidden", lang),
        empty_text=t("no_results", lang),
    )
    await send_paged_message(message, text)


async def view_handler(message, chapter: int, verse: int):
    lang = DEFAULT_LANG
    try:
        view = await service.view_verse(chapter, verse)
    except ValueError:
        await message.reply_text(t("invalid_reference", lang))
        return
    except ResourceUnavailable as e:
        logger.warning(f"View failed, resources unavailable: {e}")
        await message.reply_text(t("load_error", lang))
        return

    response = f"📖 {view.chapter_name} ({view.verse})\n{view.text}"
    if view.translation:
        response += f"\n\n{view.translation}"
    await send_paged_message(message, response)


def _forget_debouncer(chat_id: int, debouncer: Debouncer) -> None:
    """Drop a chat's debouncer once it has nothing scheduled or running."""
    if debouncer.idle and _debouncers.get(chat_id) is debouncer:
        del _debouncers[chat_id]


async def message_router(update: Update, context: ContextTypes.DEFAULT_TYPE):
    if not update.message or not update.message.text:
        return

    text = update.message.text
    if not text.strip():
        return

    reference = parse_reference(text)
    if reference:
        await view_handler(update.message, *reference)
        return

    # Rapid messages in one chat collapse into the last search
    chat_id    = update.effective_chat.id
    debouncer  = _debouncers.get(chat_id)
    if debouncer is None:
        debouncer = Debouncer(
            search_handler,
            delay=DEBOUNCE_SECONDS,
            create_task=context.application.create_task,
        )
        _debouncers[chat_id] = debouncer
    task = debouncer.trigger(update.message, text)
    task.add_done_callback(lambda _task: _forget_debouncer(chat_id, debouncer))


# ---------------------------------------------------------------------------
# Error handler
# ---------------------------------------------------------------------------

async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    logger.error("Unhandled exception:", exc_info=context.error)
    if isinstance(update, Update) and update.effective_message:
        try:
            await update.effective_message.reply_text(t("error", DEFAULT_LANG))
        except Exception:
            logger.warning("Could not deliver error message", exc_info=True)


def main():
    global service

    print("Loading Quran data...")
    try:
        service = load_service(DEFAULT_LANG)
    except ResourceUnavailable as e:
        print(f"ERROR: {e}")
        return
    print(f"Loaded {service.chapter_count()} chapters")

    if not BOT_TOKEN:
        print("ERROR: TELEGRAM_BOT_TOKEN not set.")
        return

    from telegram.request import HTTPXRequest
    request = HTTPXRequest(connect_timeout=20, read_timeout=60)
    app     = Application.builder().token(BOT_TOKEN).request(request).build()

    app.add_error_handler(error_handler)
    app.add_handler(CommandHandler("start", start))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, message_router))

    print("Bot started! Press Ctrl+C to stop")
    app.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
