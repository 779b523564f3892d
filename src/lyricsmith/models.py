from dataclasses import dataclass, field
from typing import NamedTuple

DEFAULT_TEMPO = 120
DEFAULT_TIME_SIGNATURE = "4/4"


class AlignedText(NamedTuple):
    """A lyrics text and its chords text, one chord line per lyrics line."""

    lyrics: str
    chords: str


@dataclass
class Song:
    """Canonical song record, as stored in a library.

    ``lyrics`` and ``chords`` obey the alignment invariant: splitting both on
    ``"\\n"`` gives sequences of equal length, and chords line ``i`` is
    rendered above lyrics line ``i``.  Build instances from untrusted data
    with :func:`~lyricsmith.migrate.migrate_song`, never directly.
    """

    id: str
    title: str
    lyrics: str = ""
    chords: str = ""
    key: str = ""
    tempo: int = DEFAULT_TEMPO
    time_signature: str = DEFAULT_TIME_SIGNATURE
    notes: str = ""
    created_at: str = ""  # ISO-8601 UTC
    last_edited_at: str = ""
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Return the canonical JSON shape (camelCase keys)."""
        return {
            "id": self.id,
            "title": self.title,
            "lyrics": self.lyrics,
            "chords": self.chords,
            "key": self.key,
            "tempo": self.tempo,
            "timeSignature": self.time_signature,
            "notes": self.notes,
            "createdAt": self.created_at,
            "lastEditedAt": self.last_edited_at,
            "tags": list(self.tags),
        }
