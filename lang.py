"""
Localized user-facing strings for the CLI and the bot.

Each language lives in locales/<code>.json and is read the first time it is
asked for. A key missing from the requested language falls back to English,
then to the key itself.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path

logger = logging.getLogger(__name__)

LOCALE_DIR = Path(__file__).parent / "locales"
FALLBACK_LANG = "en"


@lru_cache(maxsize=None)
def messages(lang: str) -> dict:
    """Return the message table for *lang*, or {} if it has no locale file."""
    path = LOCALE_DIR / f"{lang}.json"
    if not path.exists():
        return {}
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Error loading locale {lang}: {e}")
        return {}


def available_languages() -> list:
    return sorted(path.stem for path in LOCALE_DIR.glob("*.json"))


def t(key: str, lang: str = FALLBACK_LANG, **kwargs) -> str:
    """Get a localized string, formatted with *kwargs* when given."""
    text = messages(lang).get(key)
    if text is None:
        text = messages(FALLBACK_LANG).get(key, key)

    if not kwargs:
        return text
    try:
        return text.format(**kwargs)
    except (KeyError, IndexError):
        logger.debug(f"Message {key!r} does not take {sorted(kwargs)}")
        return text
