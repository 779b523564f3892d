"""Splitter for text that marks chord lines with an explicit prefix.

With the default ``~`` prefix::

    [Verse 1]
    ~C          G
    Hello darkness, my old friend

becomes lyrics ``["[Verse 1]", "Hello darkness, my old friend"]`` and chords
``["", "C          G"]``.  A marker line annotates the next lyric line; if two
marker lines come before a lyric, the later one wins.  Heading and blank
lines never carry a chord.
"""

import logging
import re
from functools import reduce
from typing import NamedTuple

from ..config import DEFAULT_CHORD_LINE_PREFIX
from ..models import AlignedText
from ..sections import is_heading_line, normalize_section_labels, split_lines

logger = logging.getLogger(__name__)


class _SplitState(NamedTuple):
    lyrics: list[str]
    chords: list[str]
    pending: str | None  # chord waiting for its lyric line


def has_chord_markers(text: str | None, prefix: str = DEFAULT_CHORD_LINE_PREFIX) -> bool:
    """Return True if any trimmed line of *text* starts with *prefix*."""
    prefix = prefix or DEFAULT_CHORD_LINE_PREFIX
    return any(line.strip().startswith(prefix) for line in split_lines(text))


def split_lyrics_and_chords(
    text: str | None,
    prefix: str = DEFAULT_CHORD_LINE_PREFIX,
    assume_no_chords: bool = True,
) -> AlignedText:
    """Split marker-annotated *text* into aligned lyrics and chords.

    When no marker line is present and *assume_no_chords* is set, the whole
    text is lyrics and chords are empty.  Otherwise every non-marker line is
    emitted as lyrics with exactly one chord entry beside it.
    """
    prefix = prefix or DEFAULT_CHORD_LINE_PREFIX
    text = text or ""

    if assume_no_chords and not has_chord_markers(text, prefix):
        return AlignedText(normalize_section_labels(text), "")

    def step(state: _SplitState, line: str) -> _SplitState:
        trimmed = line.strip()
        if trimmed.startswith(prefix):
            chord = re.sub(r"^\s", "", trimmed[len(prefix):], count=1)
            if state.pending is not None:
                logger.debug("Chord %r replaced by %r before any lyric", state.pending, chord)
            return state._replace(pending=chord)
        if not trimmed or is_heading_line(trimmed):
            chord = ""
        else:
            chord = state.pending or ""
        state.lyrics.append(line)
        state.chords.append(chord)
        return state._replace(pending=None)

    final = reduce(step, split_lines(text), _SplitState([], [], None))
    return AlignedText(normalize_section_labels("\n".join(final.lyrics)), "\n".join(final.chords))
