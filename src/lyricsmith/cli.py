import json
import logging
import sys
from dataclasses import replace
from pathlib import Path

import click

from .config import Config, load_config, validate_config
from .exceptions import (
    ConfigError,
    FetchError,
    InvalidLibraryFormatError,
    ParseError,
    UnsupportedSourceError,
)
from .library import (
    SORT_ORDERS,
    export_library,
    export_library_txt,
    filter_songs,
    format_lyrics_with_chords,
    loads_library,
    normalize_library,
    quick_copy_text,
    read_library,
    sort_songs,
    sync_items,
    write_library,
)
from .log import setup_logging
from .migrate import create_song, utc_now
from .models import Song
from .parsers.ai import parse_song_content
from .parsers.markers import split_lyrics_and_chords
from .registry import get_source
from .spacing import normalize_section_spacing

logger = logging.getLogger(__name__)


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _load(config: Config) -> list[Song]:
    try:
        return read_library(config.library_path)
    except InvalidLibraryFormatError as exc:
        _fail(str(exc))


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log debug output to stderr.")
@click.option("--library", "library_path", default=None, metavar="PATH",
              help="Library JSON file (default: $LYRICSMITH_LIBRARY or lyricsmith-library.json).")
@click.pass_context
def main(ctx: click.Context, verbose: bool, library_path: str | None) -> None:
    """Normalize song lyrics and chords and manage a song library."""
    setup_logging(verbose)
    try:
        config = load_config()
    except ConfigError as exc:
        _fail(str(exc))
    if library_path:
        config = replace(config, library_path=Path(library_path))
    ctx.obj = config


# ---------------------------------------------------------------------------
# split
# ---------------------------------------------------------------------------


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--prefix", default=None, metavar="P", help="Chord line marker (default: ~).")
@click.option("--assume-no-chords/--detect-chords", default=None,
              help="Treat unmarked text as lyrics only (default) or keep every line's chord slot.")
@click.option("--ai", "ai_mode", is_flag=True, default=False,
              help="Clean AI output and read it as alternating chord/lyric lines.")
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Print a JSON object with 'lyrics' and 'chords'.")
@click.pass_obj
def split(config: Config, source, prefix: str | None, assume_no_chords: bool | None,
          ai_mode: bool, as_json: bool) -> None:
    """Split raw song text into aligned lyrics and chords.

    \b
    Reads SOURCE (or stdin).  Lines starting with the chord marker are chord
    lines for the lyric line that follows:
      ~C        G
      Hello darkness, my old friend
    """
    if prefix is not None:
        config = replace(config, chord_line_prefix=prefix)
    if assume_no_chords is not None:
        config = replace(config, assume_no_chords=assume_no_chords)
    try:
        validate_config(config)
    except ConfigError as exc:
        _fail(str(exc))

    text = source.read()
    if ai_mode:
        parsed = parse_song_content(text)
    else:
        parsed = split_lyrics_and_chords(text.strip(), config.chord_line_prefix, config.assume_no_chords)
    aligned = normalize_section_spacing(parsed.lyrics, parsed.chords)

    if as_json:
        click.echo(json.dumps(aligned._asdict(), indent=2, ensure_ascii=False))
    else:
        click.echo(format_lyrics_with_chords(aligned.lyrics, aligned.chords))


# ---------------------------------------------------------------------------
# Library commands
# ---------------------------------------------------------------------------


@main.command()
@click.argument("sources", nargs=-1, required=True)
@click.option("--title", default=None, help="Title for the song (single text source only).")
@click.pass_obj
def add(config: Config, sources: tuple[str, ...], title: str | None) -> None:
    """Add songs from text files, HTML pages, URLs or library JSON exports.

    \b
    Supported sources:
      - .txt / .text / .md / .cho / .chords files
      - .html / .htm files
      - http:// and https:// URLs
      - .json library exports
    """
    songs = _load(config)
    added = []
    for location in sources:
        if location.lower().endswith(".json"):
            try:
                added.extend(loads_library(Path(location).read_text(encoding="utf-8")))
            except OSError:
                _fail(f"Could not read {location}")
            except InvalidLibraryFormatError as exc:
                _fail(f"{location}: {exc}")
            continue

        try:
            loaded = get_source(location).load(location)
        except UnsupportedSourceError as exc:
            click.echo(f"Error: {exc}", err=True)
            click.echo("Supported sources: text files, HTML files, http(s) URLs, .json exports", err=True)
            sys.exit(1)
        except FetchError as exc:
            msg = f"Could not fetch {exc.location}"
            if exc.status_code:
                msg += f" (HTTP {exc.status_code})"
            _fail(msg)
        except ParseError as exc:
            _fail(str(exc))

        song_title = title if title and len(sources) == 1 else loaded.title
        parsed = split_lyrics_and_chords(loaded.text, config.chord_line_prefix, config.assume_no_chords)
        if not (parsed.lyrics.strip() or parsed.chords.strip()):
            logger.warning("Skipping %s: no lyrics or chords", location)
            continue
        added.append(create_song(song_title, parsed.lyrics, parsed.chords))

    songs.extend(added)
    write_library(config.library_path, songs)
    click.echo(f"Imported {len(added)} song(s) into {config.library_path}")


@main.command()
@click.argument("title")
@click.pass_obj
def new(config: Config, title: str) -> None:
    """Create an empty song with the default section skeleton."""
    songs = _load(config)
    song = create_song(title)
    songs.append(song)
    write_library(config.library_path, songs)
    click.echo(song.id)


@main.command(name="list")
@click.argument("query", required=False, default="")
@click.option("--sort", "sort_order", type=click.Choice(SORT_ORDERS), default="titleAsc",
              show_default=True)
@click.pass_obj
def list_songs(config: Config, query: str, sort_order: str) -> None:
    """List songs whose title, tags or key match QUERY."""
    found = sort_songs(filter_songs(_load(config), query), sort_order)
    if not found:
        click.echo("No songs found.")
        return
    for song in found:
        details = [d for d in (song.key, f"{song.tempo} BPM" if song.tempo != 120 else "",
                               song.time_signature if song.time_signature != "4/4" else "") if d]
        line = f"{song.id}  {song.title}"
        if details:
            line += f"  ({' • '.join(details)})"
        click.echo(line)


@main.command()
@click.argument("song_id")
@click.pass_obj
def show(config: Config, song_id: str) -> None:
    """Print a song as title, blank line, then chords above lyrics."""
    for song in _load(config):
        if song.id == song_id:
            click.echo(quick_copy_text(song))
            return
    _fail(f"No song with id {song_id}")


@main.command()
@click.pass_obj
def normalize(config: Config) -> None:
    """Repair ids and re-normalize every song in the library."""
    report = normalize_library(_load(config))
    write_library(config.library_path, report.songs)
    msg = "Library normalized"
    if report.id_fixes:
        msg += f", fixed IDs: {report.id_fixes}"
    if report.updated:
        msg += f", updated: {report.updated}"
    click.echo(msg)


@main.command()
@click.option("--format", "fmt", type=click.Choice(["json", "txt"]), default="json", show_default=True)
@click.option("--no-metadata", is_flag=True, default=False,
              help="JSON: keep only title, lyrics and chords.")
@click.option("--include-chords", is_flag=True, default=False,
              help="TXT: print chord lines above lyrics.")
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Output file path (default: lyricsmith-library-<date>.<format>)")
@click.option("--stdout", is_flag=True, default=False, help="Print to stdout instead of writing a file.")
@click.pass_obj
def export(config: Config, fmt: str, no_metadata: bool, include_chords: bool,
           output_path: str | None, stdout: bool) -> None:
    """Export the library as JSON or plain text."""
    songs = _load(config)
    if fmt == "json":
        content = json.dumps(export_library(songs, include_metadata=not no_metadata),
                             indent=2, ensure_ascii=False) + "\n"
    else:
        content = export_library_txt(songs, include_chords=include_chords)

    if stdout:
        click.echo(content, nl=False)
        return

    dest = Path(output_path) if output_path else Path(f"lyricsmith-library-{utc_now()[:10]}.{fmt}")
    dest.write_text(content, encoding="utf-8")
    click.echo(f"Exported {len(songs)} songs to {dest}")


@main.command()
@click.argument("items_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--all", "include_all", is_flag=True, default=False,
              help="Sync every item, not only starred ones.")
@click.pass_obj
def sync(config: Config, items_file: str, include_all: bool) -> None:
    """Import external sync items (a JSON array of objects with an 'output' field)."""
    try:
        items = json.loads(Path(items_file).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        _fail(f"{items_file} is not valid JSON ({exc.msg})")
    if not isinstance(items, list):
        _fail(f"{items_file} must hold a JSON array")

    songs = _load(config)
    report = sync_items(songs, items, starred_only=not include_all)
    if report.imported:
        songs.extend(report.imported)
        write_library(config.library_path, songs)
    msg = f"Sync: imported {len(report.imported)}"
    if report.skipped:
        msg += f", skipped {report.skipped}"
    click.echo(msg)

