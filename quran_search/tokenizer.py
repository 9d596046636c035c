"""
Tokenizer module: splits normalized text into word tokens.
"""

import re
from typing import List

# Whitespace plus . , ، ؛ ؟ ! - /
SEPARATORS = re.compile(r"[\s.,،؛؟!\-/]+")


def tokenize(text: str) -> List[str]:
    """
    Split text on whitespace and punctuation.

    Runs of separators collapse into one boundary and no empty tokens are
    produced. Tokens keep their order of occurrence.
    """
    return [token for token in SEPARATORS.split(text) if token]
