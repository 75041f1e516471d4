"""Jinja2 rendering of timeline entries to Markdown or HTML pages."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable
from urllib.parse import urlsplit

from jinja2 import Environment, FileSystemLoader, select_autoescape

from almanac.dates import entry_date, group_by_year, sort_entries
from almanac.parse import Entry

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

TEMPLATES: dict[str, str] = {
    "markdown": "timeline.md.j2",
    "html": "timeline.html.j2",
}

# Links with any other scheme (javascript:, data:, ...) render as plain text.
# Scheme-less links such as "notes/2020.html" are kept.
LINK_SCHEMES = ("http", "https", "mailto", "")


class RenderError(Exception):
    """Raised when a timeline cannot be rendered."""


def _get_env() -> Environment:
    """Create a Jinja2 environment loading from almanac/templates/."""
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(enabled_extensions=("html.j2",), default_for_string=False),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def _href(link: str | None) -> str | None:
    """Return link if it is safe to use as an href, else None."""
    if not link:
        return None
    # Browsers drop control characters, so "\x01javascript:" would still run
    if any(ord(c) < 0x20 or ord(c) == 0x7f for c in link):
        return None
    try:
        scheme = urlsplit(link).scheme
    except ValueError:
        return None
    return link if scheme in LINK_SCHEMES else None


def _entry_context(entry: Entry) -> dict[str, Any]:
    return {**entry.to_dict(), "date": entry_date(entry), "href": _href(entry.link)}


def render_timeline(
    entries: Iterable[Entry],
    fmt: str = "markdown",
    title: str = "Timeline",
    reverse: bool = False,
) -> str:
    """Render entries as a chronological page grouped by year.

    Parameters
    ----------
    entries:
        Parsed entries, in any order.
    fmt:
        ``markdown`` or ``html``.
    title:
        Page heading.
    reverse:
        Newest first when True.
    """
    template_name = TEMPLATES.get(fmt)
    if template_name is None:
        raise RenderError(
            f"Unsupported format '{fmt}'. Built-in: {', '.join(TEMPLATES)}."
        )

    ordered = sort_entries(entries, reverse=reverse)
    years = {
        year: [_entry_context(e) for e in group]
        for year, group in group_by_year(ordered).items()
    }

    template = _get_env().get_template(template_name)
    return template.render(title=title, years=years)
