"""Source for local plain-text song files.

Handles ``.txt``, ``.text``, ``.md``, ``.cho`` and ``.chords`` files.  The
title is derived from the file name (``my_song.txt`` → ``My Song``), matching
how a dropped file is named in the library.
"""

from pathlib import Path

from ..exceptions import ParseError
from ..titles import normalize_title
from .base import SongSource, SourceText
from .utils import read_text_file

TEXT_SUFFIXES = {".txt", ".text", ".md", ".cho", ".chords"}


class TextFileSource(SongSource):
    """Source for local plain-text song files."""

    @classmethod
    def can_handle(cls, location: str) -> bool:
        return Path(location).suffix.lower() in TEXT_SUFFIXES

    def fetch(self, location: str) -> str:
        return read_text_file(location)

    def extract(self, raw: str, location: str) -> SourceText:
        text = raw.strip()
        if not text:
            raise ParseError(location, "File is empty")
        return SourceText(title=normalize_title(Path(location).name), text=text)
