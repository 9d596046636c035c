"""
Data module: reading and parsing the delimited corpus files.

Every corpus (verse text, translation, chapter names) is one string with
" + " between chapters and " - " between verses of a chapter. Sources are
plain .txt files, .js files holding a single string variable, or URLs.
"""

import logging
import re
import urllib.request
from pathlib import Path
from typing import List, Optional, Union

from .loader import ResourceUnavailable, Supplementary, SupplementaryLoader

logger = logging.getLogger(__name__)

CHAPTER_DELIMITER = " + "
VERSE_DELIMITER = " - "

CORPUS_FILE = "Quran.js"
TRANSLATION_FILE = "QuranTG.js"
CHAPTER_NAMES_FILE = "Sure.js"

DOWNLOAD_ATTEMPTS = 3
DOWNLOAD_TIMEOUT = 10

_JS_ASSIGNMENT = re.compile(r"=\s*([\"'`])(.*)\1\s*;?\s*$", re.DOTALL)
_JS_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|.)", re.DOTALL)
_JS_SIMPLE_ESCAPES = {
    "n": "\n", "r": "\r", "t": "\t", "b": "\b",
    "f": "\f", "v": "\v", "0": "\0", "\n": "",
}

Source = Union[str, Path]


def parse_corpus_text(text: str) -> List[List[str]]:
    """Split a corpus string into chapters of verses."""
    if not text:
        return []
    return [chapter.split(VERSE_DELIMITER) for chapter in text.split(CHAPTER_DELIMITER)]


def _unescape(m: re.Match) -> str:
    code = m.group(1)
    if len(code) > 1:
        # \xHH, \uHHHH or \u{H...}
        return chr(int(code[1:].strip("{}"), 16))
    return _JS_SIMPLE_ESCAPES.get(code, code)


def extract_js_string(raw: str) -> str:
    """
    Extract the string literal from a `var Name = "...";` script.

    Raises:
        ResourceUnavailable: if no string assignment is found
    """
    m = _JS_ASSIGNMENT.search(raw)
    if not m:
        raise ResourceUnavailable("No string assignment found in script")

    return _JS_ESCAPE.sub(_unescape, m.group(2))


def _download_text(url: str) -> str:
    for attempt in range(DOWNLOAD_ATTEMPTS):
        try:
            logger.info(f"Downloading {url} (attempt {attempt + 1})")
            with urllib.request.urlopen(url, timeout=DOWNLOAD_TIMEOUT) as response:
                return response.read().decode("utf-8")
        except Exception as e:
            logger.warning(f"Download attempt {attempt + 1} failed for {url}: {e}")
    raise ResourceUnavailable(f"Unable to download {url}")


def read_corpus_source(source: Source) -> str:
    """
    Read the raw corpus string from a file path or URL.

    Args:
        source: Path to a .txt/.js file, or an http(s) URL

    Returns:
        The delimited corpus string

    Raises:
        ResourceUnavailable: if the source is missing or unreadable
    """
    name = str(source)
    if name.startswith(("http://", "https://")):
        raw = _download_text(name)
    else:
        path = Path(source)
        if not path.exists():
            raise ResourceUnavailable(f"Corpus source not found: {path}")
        try:
            raw = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise ResourceUnavailable(f"Unable to read {path}: {e}") from e

    if name.endswith(".js"):
        raw = extract_js_string(raw)
    return raw.strip()


def resolve_source(filename: str, data_dir: Optional[Path] = None,
                   base_url: Optional[str] = None) -> Source:
    """Locate *filename* under the base URL if set, else under data_dir."""
    if base_url:
        return f"{base_url.rstrip('/')}/{filename}"
    return Path(data_dir or ".") / filename


class CorpusProvider:
    """
    Holds the verse corpus and lazily loads translation and chapter names.

    The corpus is read synchronously at construction; supplementary data is
    loaded on the first call to load_supplementary().
    """

    def __init__(self, corpus_source: Source, translation_source: Source,
                 chapter_names_source: Source):
        self.corpus: List[List[str]] = parse_corpus_text(read_corpus_source(corpus_source))
        self.translation_source = translation_source
        self.chapter_names_source = chapter_names_source
        self.loader = SupplementaryLoader(self._fetch_supplementary)
        logger.info(f"Loaded corpus with {len(self.corpus)} chapters")

    @classmethod
    def from_directory(cls, data_dir: Path, base_url: Optional[str] = None,
                       corpus_file: str = CORPUS_FILE,
                       translation_file: str = TRANSLATION_FILE,
                       chapter_names_file: str = CHAPTER_NAMES_FILE) -> "CorpusProvider":
        """Build a provider for the standard file names in a directory or URL."""
        return cls(
            resolve_source(corpus_file, data_dir, base_url),
            resolve_source(translation_file, data_dir, base_url),
            resolve_source(chapter_names_file, data_dir, base_url),
        )

    def _fetch_supplementary(self) -> Supplementary:
        translation = parse_corpus_text(read_corpus_source(self.translation_source))
        chapter_names = parse_corpus_text(read_corpus_source(self.chapter_names_source))
        return Supplementary(translation=translation, chapter_names=chapter_names)

    async def load_supplementary(self) -> Supplementary:
        """Load translation and chapter names once; retried after failures."""
        return await self.loader.load()
