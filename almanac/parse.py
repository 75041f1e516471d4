"""Timeline markdown parsing.

Foundation module used by the loader, renderer and CLI. A timeline is
plain text where ``# `` lines name a category and dated lines like
``Mar, 2022: Launched site [https://example.com]`` are entries.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Entry:
    """A single dated line from a timeline document."""
    month: str
    year: int
    title: str
    link: str | None
    category: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# Category headings: "# Work"
HEADER_PREFIX = "# "

# Cheap shape check for entry lines: "Jan, 2024:"
ENTRY_PREFIX_RE = re.compile(r'^[A-Z][a-z]{2}, [0-9]{4}:')

# Full entry line: "Jan, 2024: Title [optional link]"
# Title stops at the first "[", so "a [b] c [d]" links to "b".
ENTRY_RE = re.compile(r'^([A-Z][a-z]{2}), ([0-9]{4}): ([^\[]+)(?:\[([^\]]+)\])?')

# Characters dropped from the ends of titles, links and headings: ASCII
# whitespace, Unicode space separators, line/paragraph separators and BOM.
# Narrower than str.strip(), which also drops \x1c-\x1f and \x85.
TRIM_CHARS = (
    "\t\n\v\f\r "
    "\u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def trim(text: str) -> str:
    """Strip TRIM_CHARS from both ends of text."""
    return text.strip(TRIM_CHARS)


def match_entry(line: str, category: str = "") -> Entry | None:
    """Build an Entry from a single line, or None if it is not one."""
    if not ENTRY_PREFIX_RE.match(line):
        return None
    m = ENTRY_RE.match(line)
    if not m:
        return None

    link = m.group(4)
    return Entry(
        month=m.group(1),
        year=int(m.group(2)),
        title=trim(m.group(3)),
        link=trim(link) if link is not None else None,
        category=category,
    )


def parse_timeline(content: str) -> list[Entry]:
    """Parse a timeline doc into entries, in document order.

    Each entry carries the text of the nearest ``# `` heading above it
    (empty string before the first heading). Lines that are neither a
    heading nor a well-formed entry are ignored.
    """
    entries: list[Entry] = []
    category = ""

    for line in content.split("\n"):
        if is_header(line):
            category = trim(line[len(HEADER_PREFIX):])
            continue

        entry = match_entry(line, category)
        if entry is not None:
            entries.append(entry)

    return entries


def is_header(line: str) -> bool:
    """Check if a line is a category heading."""
    return line.startswith(HEADER_PREFIX)

