"""
Results module: turns verse locations into ranked display records.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .index import VerseLocation

MAX_RENDERED_RESULTS = 200
DEFAULT_CHAPTER_LABEL = "Chapter {number}"


@dataclass(frozen=True)
class DisplayRecord:
    """A single ranked search result."""
    rank: int
    translation: str
    chapter_name: str
    location: VerseLocation


@dataclass
class SearchOutcome:
    """Records for one query plus how many matches were not materialized."""
    query: str
    records: List[DisplayRecord] = field(default_factory=list)
    hidden_count: int = 0
    total: int = 0


def lookup_entry(rows: Optional[Sequence[Sequence[str]]], outer: int, inner: int) -> Optional[str]:
    """Return rows[outer][inner], or None when either index is missing."""
    if rows is None or not 0 <= outer < len(rows):
        return None
    row = rows[outer]
    if row is None or not 0 <= inner < len(row):
        return None
    return row[inner]


def chapter_label(chapter_names: Optional[Sequence[Sequence[str]]], chapter: int,
                  default_label: str = DEFAULT_CHAPTER_LABEL) -> str:
    """Chapter name for a zero-based chapter, or the synthesized default."""
    name = lookup_entry(chapter_names, chapter, 0)
    return name or default_label.format(number=chapter + 1)


def assemble_results(
    locations: Sequence[VerseLocation],
    translation: Optional[Sequence[Sequence[str]]],
    chapter_names: Optional[Sequence[Sequence[str]]],
    max_rendered: int = MAX_RENDERED_RESULTS,
    default_label: str = DEFAULT_CHAPTER_LABEL,
) -> Tuple[List[DisplayRecord], int]:
    """
    Build display records for already ordered locations.

    Args:
        locations: Matches in final (document) order
        translation: Chapters of translated verse text
        chapter_names: Chapters whose first entry is the chapter name
        max_rendered: Cap on materialized records
        default_label: Format string used when a chapter name is missing

    Returns:
        (records ranked from 1, number of matches left out by the cap)
    """
    if max_rendered < 0:
        raise ValueError("max_rendered must be >= 0")

    records = [
        DisplayRecord(
            rank=rank,
            translation=lookup_entry(translation, loc.chapter, loc.verse) or "",
            chapter_name=chapter_label(chapter_names, loc.chapter, default_label),
            location=loc,
        )
        for rank, loc in enumerate(locations[:max_rendered], 1)
    ]
    hidden_count = max(0, len(locations) - max_rendered)
    return records, hidden_count


def format_results(outcome: SearchOutcome, hidden_template: str = "{count} more results hidden.",
                   empty_text: str = "No results found") -> str:
    """
    Format an outcome as plain text, one record per line.

    Args:
        outcome: Result of a search
        hidden_template: Format string for the trailing hidden-count line
        empty_text: Text returned when there are no records

    Returns:
        Formatted string for display
    """
    if not outcome.records:
        return empty_text

    lines = [
        f"{record.rank}- {record.translation} <{record.chapter_name}>"
        for record in outcome.records
    ]
    if outcome.hidden_count > 0:
        lines.append(hidden_template.format(count=outcome.hidden_count))
    return "\n".join(lines)
