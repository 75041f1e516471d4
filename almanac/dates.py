"""Date derivation and chronological ordering for timeline entries."""

from __future__ import annotations

from datetime import date
from types import MappingProxyType
from typing import Iterable, Mapping

from almanac.parse import Entry

# Zero-based month index keyed by the three-letter token used in entries
MONTH_INDEX: Mapping[str, int] = MappingProxyType({
    "Jan": 0, "Feb": 1, "Mar": 2, "Apr": 3, "May": 4, "Jun": 5,
    "Jul": 6, "Aug": 7, "Sep": 8, "Oct": 9, "Nov": 10, "Dec": 11,
})


def entry_date(entry: Entry) -> date | None:
    """Return the first day of the entry's month.

    Returns None when the month token is not one of the twelve known
    abbreviations (only possible for entries built by hand), or when
    the year has no calendar date, as with ``0000``.
    """
    index = MONTH_INDEX.get(entry.month)
    if index is None:
        return None
    if not date.min.year <= entry.year <= date.max.year:
        return None
    return date(entry.year, index + 1, 1)


def sort_entries(entries: Iterable[Entry], reverse: bool = False) -> list[Entry]:
    """Sort entries chronologically. The sort is stable.

    Undated entries keep their relative order and always go last.
    """
    dated: list[tuple[date, Entry]] = []
    undated: list[Entry] = []
    for entry in entries:
        d = entry_date(entry)
        if d is None:
            undated.append(entry)
        else:
            dated.append((d, entry))

    dated.sort(key=lambda pair: pair[0], reverse=reverse)
    return [entry for _, entry in dated] + undated


def group_by_category(entries: Iterable[Entry]) -> dict[str, list[Entry]]:
    """Group entries by category, in order of first appearance."""
    groups: dict[str, list[Entry]] = {}
    for entry in entries:
        groups.setdefault(entry.category, []).append(entry)
    return groups


def group_by_year(entries: Iterable[Entry]) -> dict[int, list[Entry]]:
    """Group entries by year, in order of first appearance."""
    groups: dict[int, list[Entry]] = {}
    for entry in entries:
        groups.setdefault(entry.year, []).append(entry)
    return groups
