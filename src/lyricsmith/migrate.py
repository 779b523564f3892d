"""Song record migration: any song-shaped mapping to a canonical :class:`Song`.

Used for legacy records, library imports and external sync items alike.
Missing fields are defaulted, lyrics go through the label normalizer and
title de-duplication, then lyrics and chords are spacing-normalized together.
Migrating a canonical record returns an equal record.
"""

import logging
import random
import string
import time
from collections.abc import Mapping
from datetime import datetime, timezone

from .models import DEFAULT_TEMPO, DEFAULT_TIME_SIGNATURE, Song
from .sections import normalize_section_labels
from .spacing import normalize_section_spacing
from .titles import strip_title_from_song

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"

# Skeleton for a hand-authored song with no lyrics yet
DEFAULT_SECTIONS = "[Intro]\n\n[Verse 1]\n\n[Pre-Chorus]\n\n[Chorus]\n\n[Verse 2]\n\n[Bridge]\n\n[Outro]"

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(n: int) -> str:
    digits = []
    while True:
        n, r = divmod(n, 36)
        digits.append(_BASE36[r])
        if not n:
            return "".join(reversed(digits))


def generate_id() -> str:
    """Return a new song id: base-36 millisecond clock, ``-``, 8 random base-36 chars."""
    suffix = "".join(random.choices(_BASE36, k=8))
    return f"{_to_base36(int(time.time() * 1000))}-{suffix}"


def utc_now() -> str:
    """Current time as an ISO-8601 UTC timestamp with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _text(value) -> str:
    return value if isinstance(value, str) else ("" if value is None else str(value))


def _tempo(value) -> int:
    if isinstance(value, bool):
        return DEFAULT_TEMPO
    try:
        tempo = int(value)
    except (TypeError, ValueError):
        return DEFAULT_TEMPO
    return tempo if tempo > 0 else DEFAULT_TEMPO


def _tags(value) -> list[str]:
    if isinstance(value, str):
        return [value] if value else []
    if not isinstance(value, (list, tuple, set, frozenset)):
        return []
    return [str(tag) for tag in value if tag]


def migrate_song(data: Mapping | Song | None, now: str | None = None) -> Song:
    """Return a canonical :class:`Song` built from a record of unknown shape.

    Args:
        data: A song-shaped mapping (camelCase keys, any subset present), or a
              :class:`Song`.  ``None`` yields an empty "Untitled" song.
        now:  Timestamp used for missing ``createdAt``/``lastEditedAt``.

    Existing timestamps, ids and tags are preserved verbatim.
    """
    if isinstance(data, Song):
        data = data.to_dict()
    if not isinstance(data, Mapping):
        data = {}
    now = now or utc_now()

    title = _text(data.get("title")) or DEFAULT_TITLE
    lyrics = normalize_section_labels(_text(data.get("lyrics")))
    stripped = strip_title_from_song(title, lyrics, _text(data.get("chords")))
    aligned = normalize_section_spacing(stripped.lyrics, stripped.chords)

    song_id = _text(data.get("id"))
    if not song_id:
        song_id = generate_id()
        logger.debug("Assigned id %s to %r", song_id, title)

    return Song(
        id=song_id,
        title=title,
        lyrics=aligned.lyrics,
        chords=aligned.chords,
        key=_text(data.get("key")),
        tempo=_tempo(data.get("tempo")),
        time_signature=_text(data.get("timeSignature")) or DEFAULT_TIME_SIGNATURE,
        notes=_text(data.get("notes")),
        created_at=_text(data.get("createdAt")) or now,
        last_edited_at=_text(data.get("lastEditedAt")) or now,
        tags=_tags(data.get("tags")),
    )


def create_song(title: str, lyrics: str = "", chords: str = "", now: str | None = None) -> Song:
    """Create a new song; blank *lyrics* are seeded with :data:`DEFAULT_SECTIONS`."""
    now = now or utc_now()
    if lyrics.strip():
        lyrics = normalize_section_labels(lyrics)
    else:
        lyrics = DEFAULT_SECTIONS
    stripped = strip_title_from_song(title, lyrics, chords)
    aligned = normalize_section_spacing(stripped.lyrics, stripped.chords)
    return Song(
        id=generate_id(),
        title=title,
        lyrics=aligned.lyrics,
        chords=aligned.chords,
        created_at=now,
        last_edited_at=now,
    )
