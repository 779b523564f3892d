"""Section-label detection and canonicalization.

A *section label* is a lyrics line whose whole trimmed content is
``[Label]``.  Raw input spells headings in many ways::

    Verse 1:           -> [Verse 1]
    (Chorus)           -> [Chorus]
    ** pre-chorus **   -> [Pre-chorus]
    {bridge}           -> [Bridge]

:func:`normalize_section_labels` rewrites any line whose body starts with a
known section keyword into the canonical bracketed form.
"""

import re

# Known section keywords, matched against the label reduced to a-z only
# ("Pre-Chorus 2" -> "prechorus").
SECTION_KEYWORDS = (
    "intro",
    "verse",
    "prechorus",
    "chorus",
    "bridge",
    "outro",
    "hook",
    "refrain",
    "coda",
    "solo",
    "interlude",
    "ending",
    "breakdown",
    "tag",
)

# Canonical label line: [Verse 1]
SECTION_LABEL_RE = re.compile(r"^\s*\[[^\n\]]+\]\s*$")

# Heading candidate: optional decoration, optional opening bracket, the body,
# optional closing bracket, optional decoration, optional colon.
_HEADING_RE = re.compile(
    r"^[*\s\-_=~`]*"
    r"[(\[{]?\s*"
    r"([^\])}]+?)"
    r"\s*[)\]}]?"
    r"[*\s\-_=~`]*:?$"
)

# A line wholly wrapped in brackets, parens or braces: (x2), [Instrumental]
_WRAPPED_RE = re.compile(r"^[(\[{].*[)\]}]$")

_LINE_BREAK_RE = re.compile(r"\r\n?|\n")


def split_lines(text: str | None) -> list[str]:
    """Split *text* on ``\\n``, ``\\r\\n`` or a lone ``\\r``; ``None`` is treated as ``""``."""
    return _LINE_BREAK_RE.split(text or "")


def is_section_label(line: str | None) -> bool:
    """Return True if *line* is a canonical ``[Label]`` line."""
    return bool(SECTION_LABEL_RE.match(line or ""))


def normalize_section_label(line: str) -> str | None:
    """Return the canonical ``[Label]`` form of *line*, or None if it is not a heading."""
    trimmed = line.strip()
    if not trimmed:
        return None
    m = _HEADING_RE.match(trimmed)
    if not m:
        return None
    label = m.group(1).strip()
    reduced = re.sub(r"[^a-z]", "", label.lower())
    if not reduced.startswith(SECTION_KEYWORDS):
        return None
    formatted = re.sub(r"\s+", " ", label)
    formatted = re.sub(r"(^|\s)\S", lambda c: c.group(0).upper(), formatted)
    return f"[{formatted}]"


def normalize_section_labels(text: str | None) -> str:
    """Rewrite every heading line of *text* to ``[Label]``.

    Lines that are not headings, blank lines included, are returned as-is,
    so the line count never changes.  Applying this twice is the same as
    applying it once.
    """
    out = []
    for line in split_lines(text):
        label = normalize_section_label(line)
        out.append(label if label is not None else line)
    return "\n".join(out)


def is_heading_line(line: str | None) -> bool:
    """Return True if *line* should never carry a chord.

    True for lines wholly wrapped in ``()``/``[]``/``{}`` (stage directions
    such as ``(x2)`` included) and for any line the section-label normalizer
    would rewrite, e.g. a bare ``Chorus:``.
    """
    trimmed = (line or "").strip()
    if not trimmed:
        return False
    return bool(_WRAPPED_RE.match(trimmed)) or normalize_section_label(trimmed) is not None
