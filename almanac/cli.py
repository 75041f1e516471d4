"""CLI entry point for almanac."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from almanac.config import ConfigError, load_config, resolve_output_path, resolve_timeline_path
from almanac.dates import entry_date, sort_entries
from almanac.loader import TimelineError, load_timeline
from almanac.parse import Entry
from almanac.render import RenderError, render_timeline

log = logging.getLogger(__name__)

# Written to the timeline doc by `almanac init`
TIMELINE_TEMPLATE = """\
Timeline entries, one per line: "Mon, YYYY: Title [optional link]".
Lines starting with "# " set the category for the entries below them.

# General
"""

# Default config template
CONFIG_TEMPLATE = """\
timeline: docs/timeline.md

render:
  title: Timeline
  format: markdown  # markdown | html
  output: null  # path relative to project root; null writes to stdout
  reverse: false
"""

_PROJECT_ROOT = click.option(
    "--project-root",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    default=".",
    help="Project root directory (default: cwd).",
)

_TIMELINE_FILE = click.option(
    "--file",
    "timeline_file",
    type=click.Path(dir_okay=False, resolve_path=True),
    default=None,
    help="Timeline file to read (default: 'timeline' from config).",
)


def _resolve_timeline(project_root: str, timeline_file: str | None) -> tuple[Path, dict | None]:
    """Pick the timeline path: explicit --file wins, else config."""
    if timeline_file:
        return Path(timeline_file), None
    root = Path(project_root)
    config = load_config(root)
    return resolve_timeline_path(config, root), config


def _format_entry(entry: Entry) -> str:
    line = f"{entry.month} {entry.year}  {entry.title}"
    if entry.link is not None:
        line += f" <{entry.link}>"
    if entry.category:
        line += f"  [{entry.category}]"
    return line


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Almanac: dated timelines from plain-text notes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@cli.command()
@_PROJECT_ROOT
def init(project_root: str) -> None:
    """Initialize .almanac/ directory with config and an empty timeline."""
    root = Path(project_root)
    almanac_dir = root / ".almanac"

    if almanac_dir.exists():
        click.echo(f".almanac/ already exists at {almanac_dir}")
        raise SystemExit(1)

    almanac_dir.mkdir(parents=True)
    config_path = almanac_dir / "config.yaml"
    config_path.write_text(CONFIG_TEMPLATE)
    click.echo(f"Created {config_path}")

    # Load config through the standard path to validate it
    config = load_config(root)

    timeline_path = resolve_timeline_path(config, root)
    if timeline_path.exists():
        click.echo(f"Keeping existing {timeline_path}")
    else:
        timeline_path.parent.mkdir(parents=True, exist_ok=True)
        timeline_path.write_text(TIMELINE_TEMPLATE)
        click.echo(f"Created {timeline_path}")

    click.echo("\nAlmanac initialized. Edit .almanac/config.yaml to customize paths.")


@cli.command("list")
@_PROJECT_ROOT
@_TIMELINE_FILE
@click.option("--category", default=None, help="Only show entries in this category.")
@click.option("--reverse", is_flag=True, help="Newest first.")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format.",
)
def list_cmd(
    project_root: str,
    timeline_file: str | None,
    category: str | None,
    reverse: bool,
    fmt: str,
) -> None:
    """List timeline entries in chronological order."""
    try:
        path, _ = _resolve_timeline(project_root, timeline_file)
        entries = load_timeline(path)
    except (ConfigError, TimelineError) as exc:
        click.echo(f"Error: {exc}")
        raise SystemExit(1)

    if category is not None:
        entries = [e for e in entries if e.category == category]
        log.debug("%d entries in category %r", len(entries), category)

    entries = sort_entries(entries, reverse=reverse)

    if fmt == "json":
        payload = []
        for e in entries:
            d = entry_date(e)
            payload.append({**e.to_dict(), "date": d.isoformat() if d else None})
        click.echo(json.dumps(payload, indent=2))
        return

    if not entries:
        click.echo("No entries.")
        return
    for e in entries:
        click.echo(_format_entry(e))


@cli.command()
@_PROJECT_ROOT
@_TIMELINE_FILE
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["markdown", "html"]),
    default=None,
    help="Page format (default: render.format from config, else markdown).",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, resolve_path=True),
    default=None,
    help="Write the page here instead of stdout.",
)
@click.option("--reverse/--no-reverse", default=None, help="Newest first.")
def render(
    project_root: str,
    timeline_file: str | None,
    fmt: str | None,
    output: str | None,
    reverse: bool | None,
) -> None:
    """Render the timeline as a Markdown or HTML page."""
    try:
        path, config = _resolve_timeline(project_root, timeline_file)
        entries = load_timeline(path)
    except (ConfigError, TimelineError) as exc:
        click.echo(f"Error: {exc}")
        raise SystemExit(1)

    render_cfg = config["render"] if config else {}
    fmt = fmt or render_cfg.get("format", "markdown")
    if reverse is None:
        reverse = render_cfg.get("reverse", False)

    if output:
        out_path: Path | None = Path(output)
    elif config:
        out_path = resolve_output_path(config, Path(project_root))
    else:
        out_path = None

    try:
        page = render_timeline(
            entries,
            fmt=fmt,
            title=render_cfg.get("title", "Timeline"),
            reverse=reverse,
        )
    except RenderError as exc:
        click.echo(f"Error: {exc}")
        raise SystemExit(1)

    if out_path is None:
        click.echo(page, nl=False)
        return

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(page, encoding="utf-8")
    log.info("Rendered %d entries to %s", len(entries), out_path)
    click.echo(f"Wrote {out_path}")
