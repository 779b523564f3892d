"""Library-level operations over lists of :class:`~lyricsmith.models.Song`.

Covers the export/import envelope, plain-text export, clipboard-style
formatting, search and sort, id repair, bulk normalization, and import of
external sync items.

Export envelope::

    {
      "version": "1.0",
      "exportDate": "2026-10-18T09:30:00.000Z",
      "songCount": 2,
      "songs": [ {...}, {...} ]
    }
"""

import json
import logging
import re
from collections.abc import Iterable, Mapping
from datetime import datetime
from pathlib import Path
from typing import NamedTuple

from .exceptions import InvalidLibraryFormatError
from .migrate import create_song, generate_id, migrate_song, utc_now
from .models import Song
from .sections import normalize_section_labels, split_lines
from .titles import strip_title_from_lyrics, strip_title_from_song

logger = logging.getLogger(__name__)

LIBRARY_FORMAT_VERSION = "1.0"
TXT_SEPARATOR = "--------------------"
SORT_ORDERS = ("titleAsc", "titleDesc", "recent")

SYNC_TAG = "hook-mill"
_SYNC_HASH_RE = re.compile(r"hm_hash:([a-f0-9]{32,64})", re.IGNORECASE)


class NormalizeReport(NamedTuple):
    songs: list[Song]
    id_fixes: int
    updated: int


class SyncReport(NamedTuple):
    imported: list[Song]
    skipped: int


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_lyrics_with_chords(lyrics: str | None, chords: str | None) -> str:
    """Interleave chords above lyrics: each non-blank chord line precedes its lyric."""
    chord_lines = split_lines(chords)
    out = []
    for i, lyric in enumerate(split_lines(lyrics)):
        chord = chord_lines[i] if i < len(chord_lines) else ""
        if chord.strip():
            out.append(chord)
        out.append(lyric)
    return "\n".join(out)


def _song_body(song: Song, include_chords: bool) -> str:
    title = (song.title or "Untitled").strip()
    lyrics = normalize_section_labels(song.lyrics)
    if include_chords and song.chords.strip():
        aligned = strip_title_from_song(title, lyrics, song.chords)
        return format_lyrics_with_chords(aligned.lyrics, aligned.chords)
    return strip_title_from_lyrics(title, lyrics)


def quick_copy_text(song: Song) -> str:
    """Return ``"{title}\\n\\n{body}"`` with chords shown above their lyrics."""
    title = (song.title or "Untitled").strip()
    return f"{title}\n\n{_song_body(song, include_chords=True)}"


def export_library_txt(songs: Iterable[Song], include_chords: bool = False) -> str:
    """Render *songs* as one plain-text document, one block per song."""
    parts: list[str] = []
    for song in songs:
        body = _song_body(song, include_chords)
        parts.append((song.title or "Untitled").strip())
        parts.append("")
        if body:
            parts.append(body)
        parts.append(TXT_SEPARATOR)
        parts.append("")
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Export / import envelope
# ---------------------------------------------------------------------------


def export_library(songs: Iterable[Song], include_metadata: bool = True, now: str | None = None) -> dict:
    """Return the export envelope for *songs*.

    Without metadata each song is reduced to ``title``, ``lyrics`` and ``chords``.
    """
    if include_metadata:
        entries = [song.to_dict() for song in songs]
    else:
        entries = [{"title": s.title, "lyrics": s.lyrics, "chords": s.chords} for s in songs]
    return {
        "version": LIBRARY_FORMAT_VERSION,
        "exportDate": now or utc_now(),
        "songCount": len(entries),
        "songs": entries,
    }


def import_library(envelope, now: str | None = None) -> list[Song]:
    """Migrate every song in an export *envelope* into new library entries.

    Each imported song gets a fresh id and ``lastEditedAt``.  Individual
    songs are defaulted, never rejected.

    Raises InvalidLibraryFormatError if the envelope has no ``songs`` list.
    """
    if not isinstance(envelope, Mapping):
        raise InvalidLibraryFormatError("expected a JSON object")
    entries = envelope.get("songs")
    if not isinstance(entries, list):
        raise InvalidLibraryFormatError("missing 'songs' list")

    now = now or utc_now()
    songs = []
    for entry in entries:
        song = migrate_song(entry, now=now)
        song.id = generate_id()
        song.last_edited_at = now
        songs.append(song)
    logger.info("Imported %d song(s) from library envelope", len(songs))
    return songs


def loads_library(text: str) -> list[Song]:
    """Parse a library JSON document and import its songs."""
    try:
        envelope = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidLibraryFormatError(f"not valid JSON ({exc.msg})") from exc
    return import_library(envelope)


# ---------------------------------------------------------------------------
# Library file
# ---------------------------------------------------------------------------


def read_library(path: Path) -> list[Song]:
    """Load the library stored at *path*; a missing file is an empty library.

    Stored songs are migrated, keeping their ids and timestamps.
    """
    if not path.exists():
        return []
    try:
        envelope = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidLibraryFormatError(f"{path} is not valid JSON ({exc.msg})") from exc
    if not isinstance(envelope, Mapping) or not isinstance(envelope.get("songs"), list):
        raise InvalidLibraryFormatError(f"{path} has no 'songs' list")
    return [migrate_song(entry) for entry in envelope["songs"]]


def write_library(path: Path, songs: Iterable[Song]) -> None:
    """Write *songs* to *path* as an export envelope."""
    envelope = export_library(songs)
    path.write_text(json.dumps(envelope, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")


# ---------------------------------------------------------------------------
# Maintenance
# ---------------------------------------------------------------------------


def ensure_unique_ids(songs: list[Song]) -> int:
    """Re-issue blank or duplicate ids in place; return how many changed."""
    seen: set[str] = set()
    changed = 0
    for song in songs:
        if not song.id or song.id in seen:
            song.id = generate_id()
            changed += 1
        seen.add(song.id)
    return changed


def normalize_library(songs: list[Song]) -> NormalizeReport:
    """Repair ids and re-run the normalization pipeline on every song."""
    id_fixes = ensure_unique_ids(songs)
    normalized = []
    updated = 0
    for song in songs:
        migrated = migrate_song(song)
        if migrated != song:
            updated += 1
        normalized.append(migrated)
    logger.info("Library normalized: %d id fix(es), %d song(s) updated", id_fixes, updated)
    return NormalizeReport(normalized, id_fixes, updated)


# ---------------------------------------------------------------------------
# Search and sort
# ---------------------------------------------------------------------------


def filter_songs(songs: Iterable[Song], query: str | None) -> list[Song]:
    """Return songs where every query term occurs in the title, a tag or the key."""
    terms = (query or "").lower().split()
    if not terms:
        return list(songs)

    def matches(song: Song) -> bool:
        title = song.title.lower()
        tags = [tag.lower() for tag in song.tags]
        key = song.key.lower()
        return all(term in title or any(term in tag for tag in tags) or term in key for term in terms)

    return [song for song in songs if matches(song)]


def _edited_at(song: Song) -> float:
    try:
        return datetime.fromisoformat(song.last_edited_at.replace("Z", "+00:00")).timestamp()
    except ValueError:
        return 0.0


def sort_songs(songs: Iterable[Song], order: str = "titleAsc") -> list[Song]:
    """Sort by ``titleAsc`` (default), ``titleDesc`` or ``recent`` (newest edit first)."""
    songs = list(songs)
    if order == "titleDesc":
        return sorted(songs, key=lambda s: s.title.casefold(), reverse=True)
    if order == "recent":
        return sorted(songs, key=_edited_at, reverse=True)
    return sorted(songs, key=lambda s: s.title.casefold())


# ---------------------------------------------------------------------------
# External sync items
# ---------------------------------------------------------------------------


def song_from_sync_item(item: Mapping, now: str | None = None) -> Song | None:
    """Build a song from an external sync item, or None if its output is blank.

    The first non-blank output line becomes the title.  Item tags, model
    metadata and the content hash are carried into ``tags`` and ``notes``.
    """
    output = _text_field(item.get("output"))
    if not output.strip():
        return None
    now = now or utc_now()

    first_line = next((line for line in split_lines(output) if line.strip()), "Hook")
    song = create_song(first_line[:120], output, "", now=now)

    tags = [SYNC_TAG]
    item_tags = item.get("tags")
    if isinstance(item_tags, list):
        tags.extend(str(tag) for tag in item_tags if tag)
    song.tags = list(dict.fromkeys(tags))

    digest = _text_field(item.get("hash")).lower()
    meta_bits = [
        f"Imported from Hook Mill on {now}",
        f"model: {item['model']}" if item.get("model") else "",
        f"preset: {item['preset']}" if item.get("preset") else "",
        f"lens: {item['lens']}" if item.get("lens") else "",
        f"hm_hash:{digest}" if digest else "",
    ]
    song.notes = " \n ".join(bit for bit in meta_bits if bit)
    song.created_at = _text_field(item.get("createdAt")) or now
    song.last_edited_at = now
    return song


def sync_items(songs: Iterable[Song], items: Iterable, starred_only: bool = True,
               now: str | None = None) -> SyncReport:
    """Turn external sync *items* into new songs, skipping ones already present.

    An item is skipped when its output is blank or its hash already appears
    (as ``hm_hash:<hash>``) in the notes of an existing or newly synced song.
    """
    known = set()
    for song in songs:
        m = _SYNC_HASH_RE.search(song.notes or "")
        if m:
            known.add(m.group(1).lower())

    imported: list[Song] = []
    skipped = 0
    for item in items:
        if not isinstance(item, Mapping) or (starred_only and not item.get("starred")):
            continue
        digest = _text_field(item.get("hash")).lower()
        if digest and digest in known:
            skipped += 1
            continue
        song = song_from_sync_item(item, now=now)
        if song is None:
            skipped += 1
            continue
        imported.append(song)
        if digest:
            known.add(digest)
    logger.info("Sync: imported %d, skipped %d", len(imported), skipped)
    return SyncReport(imported, skipped)


def _text_field(value) -> str:
    return "" if value is None else str(value)
