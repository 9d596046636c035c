import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).parent
DATA_DIR = Path(os.getenv("DATA_DIR", BASE_DIR / "data"))

# When set, data files are fetched from here instead of DATA_DIR
RESOURCE_BASE_URL = os.getenv("RESOURCE_BASE_URL", "")

CORPUS_FILE        = os.getenv("CORPUS_FILE", "Quran.js")
TRANSLATION_FILE   = os.getenv("TRANSLATION_FILE", "QuranTG.js")
CHAPTER_NAMES_FILE = os.getenv("CHAPTER_NAMES_FILE", "Sure.js")

MAX_RENDERED_RESULTS = int(os.getenv("MAX_RENDERED_RESULTS", "200"))
DEBOUNCE_SECONDS     = float(os.getenv("DEBOUNCE_SECONDS", "0.25"))
QUERY_CACHE_SIZE     = int(os.getenv("QUERY_CACHE_SIZE", "0"))  # 0 = unbounded
SEARCH_MODE          = os.getenv("SEARCH_MODE", "token")        # token, substring

DEFAULT_LANG = os.getenv("DEFAULT_LANG", "fa")
LOG_LEVEL    = os.getenv("LOG_LEVEL", "WARNING").upper()

BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN", "")
