"""Parsing for freeform and AI-generated song text.

Pipeline:

  1. clean_ai_output()      : strip markdown/heading noise, metadata lines,
                              code fences and surplus blank lines
  2. enforce_alternating()  : chord, lyric, chord, lyric, … split
  3. parse_alternating()    : accept the split only if some chord candidate
                              has content, else lyrics-only
  4. parse_song_content()   : clean + parse_alternating

Example input::

    ## Verse 1
    C        G
    Hello darkness
    Capo: 3

Cleaned, the heading loses its ``##`` and stays ``Verse 1`` (section words
are rewritten before markdown markers are stripped); the capo line is dropped.
"""

import re

from ..models import AlignedText
from ..sections import normalize_section_labels, split_lines

# ---------------------------------------------------------------------------
# Regexes
# ---------------------------------------------------------------------------

_EXCESS_BLANKS_RE = re.compile(r"\n{3,}")
_TRAILING_WS_RE = re.compile(r"[ \t]+$", re.MULTILINE)

# "Verse 2 (softly)" -> [Verse]; trailing text is discarded
_SECTION_WORD_RE = re.compile(r"^(Verse|Chorus|Bridge|Outro)[^\n]*$", re.MULTILINE | re.IGNORECASE)

_MARKDOWN_HEADING_RE = re.compile(r"^#+[ \t]*", re.MULTILINE)
_CODE_FENCE_RE = re.compile(r"```.*?```", re.DOTALL)

# Metadata noise that is neither lyrics nor chords
_METADATA_LINE_RE = re.compile(r"^(?:Capo|Key|Tempo|Time Signature).*$", re.MULTILINE | re.IGNORECASE)


# ---------------------------------------------------------------------------
# Cleaner
# ---------------------------------------------------------------------------


def clean_ai_output(text: str | None) -> str:
    """Return *text* with AI/markdown noise removed.

    Never raises; ``None`` is treated as an empty string.  The result has
    ``\\n`` line endings, no trailing whitespace on any line, and never more
    than one blank line in a row.
    """
    text = (text or "").replace("\r\n", "\n").replace("\r", "\n")
    text = _EXCESS_BLANKS_RE.sub("\n\n", text)
    text = _TRAILING_WS_RE.sub("", text)
    text = text.strip()
    text = _SECTION_WORD_RE.sub(lambda m: f"[{m.group(1).capitalize()}]", text)
    text = _MARKDOWN_HEADING_RE.sub("", text)
    text = _CODE_FENCE_RE.sub("", text)
    text = _METADATA_LINE_RE.sub("", text)
    # Removed fences and metadata lines leave blank runs behind
    text = _TRAILING_WS_RE.sub("", text)
    text = _EXCESS_BLANKS_RE.sub("\n\n", text)
    return text.strip()


# ---------------------------------------------------------------------------
# Alternating-line parser
# ---------------------------------------------------------------------------


def enforce_alternating(lines: list[str]) -> tuple[list[str], list[str]]:
    """Split *lines* into ``(chords, lyrics)``: even indices are chords, odd are lyrics."""
    return lines[0::2], lines[1::2]


def parse_alternating(cleaned: str | None) -> AlignedText:
    """Read cleaned text as alternating chord line / lyric line.

    That reading is only accepted if at least one chord candidate has
    content; otherwise the whole text is lyrics and chords are empty.
    Section labels in the chosen lyrics are normalized.
    """
    cleaned = cleaned or ""
    lines = split_lines(cleaned)

    lyrics_text = cleaned
    chords_text = ""
    if len(lines) > 1:
        chords, lyrics = enforce_alternating(lines)
        if any(line.strip() for line in chords):
            chords_text = "\n".join(chords)
            lyrics_text = "\n".join(lyrics)

    return AlignedText(normalize_section_labels(lyrics_text), chords_text)


def parse_song_content(content: str | None) -> AlignedText:
    """Clean freeform or AI-generated *content* and split it into lyrics and chords."""
    return parse_alternating(clean_ai_output(content))
