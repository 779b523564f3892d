import re

from .models import AlignedText
from .sections import is_section_label, split_lines


def _collapse(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip().lower()


def _is_title_line(line: str, title_key: str) -> bool:
    if is_section_label(line):
        return False
    return _collapse(line) == title_key


def strip_title_from_lyrics(title: str | None, lyrics: str | None) -> str:
    """Remove lyrics lines that merely repeat *title*.

    Comparison ignores case and whitespace runs.  Section labels are kept
    even when they match, and a blank title leaves the lyrics untouched.
    """
    title_key = _collapse(title or "")
    if not title_key:
        return lyrics or ""
    return "\n".join(line for line in split_lines(lyrics) if not _is_title_line(line, title_key))


def strip_title_from_song(title: str | None, lyrics: str | None, chords: str | None) -> AlignedText:
    """Like :func:`strip_title_from_lyrics`, dropping the aligned chord rows too."""
    title_key = _collapse(title or "")
    if not title_key:
        return AlignedText(lyrics or "", chords or "")

    lyrics_in = split_lines(lyrics)
    chords_in = split_lines(chords)
    keep = [not _is_title_line(line, title_key) for line in lyrics_in]

    out_lyrics = [line for line, kept in zip(lyrics_in, keep) if kept]
    out_chords = [c for i, c in enumerate(chords_in) if i >= len(keep) or keep[i]]
    return AlignedText("\n".join(out_lyrics), "\n".join(out_chords))


def normalize_title(filename: str) -> str:
    """Derive a display title from an imported file name.

    ``"my_first-song.txt"`` → ``"My First Song"``,
    ``"darkStar.md"`` → ``"Dark Star"``.
    """
    title = re.sub(r"\.[^/.]+$", "", filename)      # drop extension
    title = re.sub(r"[_\-]+", " ", title)
    title = re.sub(r"\s+", " ", title).strip()
    title = re.sub(r"([a-z])([A-Z])", r"\1 \2", title)  # split camelCase
    return re.sub(r"\w\S*", lambda w: w.group(0)[0].upper() + w.group(0)[1:].lower(), title)
