"""Source for chord sheets saved as local HTML pages (``.html`` / ``.htm``)."""

from pathlib import Path

from ..exceptions import ParseError
from ..titles import normalize_title
from .base import SongSource, SourceText
from .utils import html_to_song_text, read_text_file


class HtmlFileSource(SongSource):
    """Source for saved HTML chord sheets."""

    @classmethod
    def can_handle(cls, location: str) -> bool:
        return Path(location).suffix.lower() in (".html", ".htm")

    def fetch(self, location: str) -> str:
        return read_text_file(location)

    def extract(self, raw: str, location: str) -> SourceText:
        title, text = html_to_song_text(raw)
        if not text:
            raise ParseError(location, "No song text found in page")
        return SourceText(title=title or normalize_title(Path(location).name), text=text)
