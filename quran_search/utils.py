"""
Utility functions: digit conversion and verse reference parsing.
"""

import re
from typing import Optional, Tuple

_REFERENCE = re.compile(r"^\s*(\d+)\s*:\s*(\d+)\s*$")


def convert_arabic_digits(text: str) -> str:
    """
    Convert Arabic (٠-٩) and Persian (۰-۹) numerals to ASCII digits.

    Args:
        text: Input string

    Returns:
        String with converted digits
    """
    trans = str.maketrans("٠١٢٣٤٥٦٧٨٩۰۱۲۳۴۵۶۷۸۹", "01234567890123456789")
    return text.translate(trans)


def parse_reference(text: str) -> Optional[Tuple[int, int]]:
    """
    Parse a 'S:A' verse reference such as '2:255' or '۲:۲۵۵'.

    Returns:
        (chapter, verse), both 1-based, or None if *text* is not a reference
    """
    m = _REFERENCE.match(convert_arabic_digits(text))
    if not m:
        return None
    return int(m.group(1)), int(m.group(2))
