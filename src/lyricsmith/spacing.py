"""Spacing/alignment normalizer: the enforcer of the alignment invariant.

Takes a lyrics text and a chords text whose line counts need not match and
returns an :class:`~lyricsmith.models.AlignedText` in canonical form:

* both texts have the same number of lines;
* the first non-blank lyrics line is a section label (``[Verse 1]`` is
  inserted when the song does not start with one);
* every label after the first line is preceded by exactly one blank row;
* no other blank lyrics lines, and none at the end;
* label and blank rows carry an empty chord.

Chords line ``i`` of the input belongs to lyrics line ``i`` of the input.
When a lyrics line is dropped (blank) or replaced (label), its chord goes
with it; chords are never shifted onto a later line.
"""

import logging

from .models import AlignedText
from .sections import is_section_label, split_lines

logger = logging.getLogger(__name__)

DEFAULT_FIRST_LABEL = "[Verse 1]"


def normalize_section_spacing(lyrics: str | None, chords: str | None) -> AlignedText:
    """Return *lyrics* and *chords* reconciled into canonical aligned form.

    Feeding the result back in returns it unchanged.
    """
    lyrics_in = split_lines(lyrics)
    chords_in = split_lines(chords)

    out_lyrics: list[str] = []
    out_chords: list[str] = []

    first = next((line for line in lyrics_in if line.strip()), "")
    if not is_section_label(first):
        out_lyrics.append(DEFAULT_FIRST_LABEL)
        out_chords.append("")

    for i, raw in enumerate(lyrics_in):
        trimmed = raw.strip()

        if is_section_label(trimmed):
            if out_lyrics and out_lyrics[-1].strip():
                out_lyrics.append("")
                out_chords.append("")
            out_lyrics.append(trimmed)
            out_chords.append("")
            continue

        if not trimmed:
            # Dropped together with the chord aligned to it
            continue

        out_lyrics.append(raw)
        # chords line i belongs to lyrics line i, labels and blanks included
        out_chords.append(chords_in[i] if i < len(chords_in) else "")

    while out_lyrics and not out_lyrics[-1].strip():
        out_lyrics.pop()
        out_chords.pop()

    if any(c.strip() for c in chords_in[len(lyrics_in):]):
        logger.debug("Discarding chord lines past the end of the lyrics")

    return AlignedText("\n".join(out_lyrics), "\n".join(out_chords))
