"""Almanac: parse dated timeline notes and order them chronologically."""

from almanac.dates import MONTH_INDEX, entry_date, group_by_category, sort_entries
from almanac.parse import Entry, parse_timeline

__all__ = [
    "MONTH_INDEX",
    "Entry",
    "entry_date",
    "group_by_category",
    "parse_timeline",
    "sort_entries",
]
