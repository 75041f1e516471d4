"""Read timeline documents from disk."""

from __future__ import annotations

import logging
from pathlib import Path

from almanac.parse import Entry, is_header, parse_timeline

log = logging.getLogger(__name__)


class TimelineError(Exception):
    """Raised when the timeline document cannot be read."""


class TimelineNotFoundError(TimelineError):
    """Raised when the timeline document does not exist."""


class TimelineDecodeError(TimelineError):
    """Raised when the timeline document is not valid UTF-8."""


def load_timeline(path: Path) -> list[Entry]:
    """Read and parse the timeline at ``path``.

    Only LF ends a line, so a stray carriage return stays part of its line.
    Raises TimelineNotFoundError if the file is missing and
    TimelineDecodeError if it is not UTF-8.
    """
    path = Path(path)
    if not path.is_file():
        raise TimelineNotFoundError(f"Timeline not found: {path}")

    try:
        content = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as exc:
        raise TimelineDecodeError(
            f"Timeline is not valid UTF-8: {path} (byte {exc.start})"
        ) from exc

    entries = parse_timeline(content)

    categories = {e.category for e in entries}
    log.info("Loaded %d entries in %d categories from %s", len(entries), len(categories), path)

    skipped = sum(
        1 for line in content.split("\n")
        if line.strip() and not is_header(line)
    ) - len(entries)
    if skipped:
        log.debug("Ignored %d non-entry line(s) in %s", skipped, path)

    return entries
