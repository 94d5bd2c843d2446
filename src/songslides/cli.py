import json
import logging
import re
import sys
from pathlib import Path

import click

from .config import load_config
from .dates import CalendarDate
from .decks import resolve_alias
from .exceptions import FetchError, SongSlidesError
from .formatter import SlideTextFormatter
from .fuzzy import MARK_CLOSE, MARK_OPEN
from .header import parse_prefix
from .logging_setup import setup_logging
from .models import Slide
from .position import PositionIndex
from .registry import get_source
from .segmenter import SegmentMode, cleanup, segment, segment_song
from .sources.base import CatalogSource
from .store import Catalog

logger = logging.getLogger(__name__)

_MARKUP_RE = re.compile(re.escape(MARK_OPEN) + "(.*?)" + re.escape(MARK_CLOSE))

_MODES = {mode.value: mode for mode in SegmentMode}


def _slide_dict(slide: Slide) -> dict:
    return {
        "text": slide.text,
        "headers": list(slide.headers),
        "is_label": slide.is_label,
        "is_subtitle": slide.is_subtitle,
        "span": [slide.span.start, slide.span.end],
    }


def _highlight(markup: str) -> str:
    """Turn ``<ins>`` markers into bold terminal text."""
    return _MARKUP_RE.sub(lambda m: click.style(m.group(1), bold=True), markup)


def _segment(text: str, mode: str, song: bool) -> list[Slide]:
    start = parse_prefix(text).body_offset if song else 0
    return segment(text, _MODES[mode], start=start)


def _fail(exc: SongSlidesError) -> None:
    if isinstance(exc, FetchError):
        msg = f"Error: Could not fetch {exc.url}"
        if exc.status_code:
            msg += f" (HTTP {exc.status_code})"
    else:
        msg = f"Error: {exc}"
    click.echo(msg, err=True)
    sys.exit(1)


def _open_source(ctx: click.Context, source: str | None) -> CatalogSource:
    config = ctx.obj
    location = source or config.source
    logger.debug("opening catalog %s", location)
    try:
        return get_source(location, timeout=config.timeout_s)
    except SongSlidesError as exc:
        _fail(exc)


def _open_catalog(ctx: click.Context, source: str | None) -> Catalog:
    catalog = Catalog(_open_source(ctx, source))
    try:
        catalog.refresh()
    except SongSlidesError as exc:
        _fail(exc)
    return catalog


mode_option = click.option(
    "--mode",
    type=click.Choice(list(_MODES)),
    default=SegmentMode.HEADER.value,
    show_default=True,
    help="header: labels attach to the next slide; label: labels are slides.",
)
song_option = click.option(
    "--song", is_flag=True, default=False, help="Skip the '# Title / # Author:' prefix first."
)


@click.group()
@click.option("--debug", is_flag=True, default=False, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, debug: bool) -> None:
    """Turn song and deck text into presentation slides.

    \b
    FILE arguments accept '-' for standard input.
    """
    config = load_config()
    setup_logging(debug, config.log_level)
    ctx.obj = config


@main.command()
@click.argument("file", type=click.File("r", encoding="utf-8"))
@mode_option
@song_option
@click.option("--json", "as_json", is_flag=True, default=False, help="Print slides as JSON.")
def slides(file, mode: str, song: bool, as_json: bool) -> None:
    """Split FILE into slides and print them."""
    result = _segment(file.read(), mode, song)
    if as_json:
        click.echo(json.dumps([_slide_dict(s) for s in result], indent=2, ensure_ascii=False))
        return
    click.echo(SlideTextFormatter().render_listing(result), nl=False)


@main.command("cleanup")
@click.argument("file", type=click.File("r", encoding="utf-8"))
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Write the cleaned text to PATH instead of stdout.")
def cleanup_command(file, output_path: str | None) -> None:
    """Rewrite FILE keeping only what appears on slides."""
    text = cleanup(file.read())
    if output_path is None:
        click.echo(text, nl=False)
        return
    Path(output_path).write_text(text, encoding="utf-8")
    click.echo(f"Written to {output_path}")


@main.command()
@click.argument("file", type=click.File("r", encoding="utf-8"))
@click.argument("offset", type=int)
@mode_option
@song_option
def locate(file, offset: int, mode: str, song: bool) -> None:
    """Print the slide containing character OFFSET of FILE."""
    result = _segment(file.read(), mode, song)
    found = PositionIndex(result).locate(offset)
    if found is None:
        click.echo(f"No slide at offset {offset}")
        return
    number = result.index(found) + 1
    click.echo(f"Slide {number} ({found.span.start}-{found.span.end})")
    click.echo(found.text)


@main.command()
@click.argument("file", type=click.File("r", encoding="utf-8"))
def info(file) -> None:
    """Print the title, extra fields and slide count of a song FILE."""
    header, result = segment_song(file.read())
    click.echo(f"Title:  {header.title or ''}")
    click.echo(f"Author: {header.author or ''}")
    click.echo(f"CCLI:   {header.ccli or ''}")
    click.echo(f"Slides: {len(result)}")


@main.command("search")
@click.argument("query")
@click.option("--source", default=None, metavar="LOCATION",
              help="Catalog directory or server URL (default: $SONGSLIDES_SOURCE).")
@click.pass_context
def search_command(ctx: click.Context, query: str, source: str | None) -> None:
    """Fuzzy-search song titles in a catalog."""
    snapshot = _open_catalog(ctx, source).snapshot
    found = snapshot.search_songs(query)
    if not found:
        click.echo("No matching songs", err=True)
        sys.exit(1)
    for song, m in found:
        if m is None:
            click.echo(f"{song.id:>6}  {song.title}")
        else:
            click.echo(f"{song.id:>6}  {m.score:>3}  {_highlight(m.markup)}")


@main.command()
@click.option("--source", default=None, metavar="LOCATION",
              help="Catalog directory or server URL (default: $SONGSLIDES_SOURCE).")
@click.option("--limit", type=int, default=None, help="Number of decks to show.")
@click.pass_context
def recent(ctx: click.Context, source: str | None, limit: int | None) -> None:
    """Show which songs were used in the most recent decks."""
    snapshot = _open_catalog(ctx, source).snapshot
    table = snapshot.recent(limit or ctx.obj.recent_limit)
    if not table.rows:
        click.echo("No decks with songs")
        return
    for number, title in enumerate(table.titles, start=1):
        click.echo(f"{number:>3}  {title}")
    for row in table.rows:
        marks = "".join("x" if used else "." for used in row.cells)
        click.echo(f"{marks}  {row.song.title}")


@main.command()
@click.argument("title")
@click.option("--source", default=None, metavar="LOCATION",
              help="Catalog directory or server URL (default: $SONGSLIDES_SOURCE).")
@click.pass_context
def deck(ctx: click.Context, title: str, source: str | None) -> None:
    """Print the slides of deck TITLE (a title or an alias such as 'sunday')."""
    resolved = resolve_alias(title)
    catalog_source = _open_source(ctx, source)
    try:
        record = catalog_source.load_deck(resolved)
    except SongSlidesError as exc:
        _fail(exc)
    if record is None:
        click.echo(f"No deck titled {resolved}", err=True)
        sys.exit(1)
    click.echo(f"Deck:  {record.title}")
    click.echo(f"Songs: {', '.join(record.song_ids)}")
    click.echo(SlideTextFormatter().render_listing(segment(record.text)), nl=False)


@main.command()
@click.argument("alias")
def date(alias: str) -> None:
    """Resolve a deck title alias such as 'sunday' or 'last'."""
    resolved = resolve_alias(alias)
    parsed = CalendarDate.parse(resolved)
    if parsed is None:
        click.echo(resolved)
        return
    click.echo(f"{resolved}  {parsed.weekday_name}, week {parsed.week_number}, {parsed.fuzzy()}")
