from abc import ABC, abstractmethod
from typing import NamedTuple


class SourceText(NamedTuple):
    """Raw song text read from a source, with the title it suggests."""

    title: str
    text: str


class SongSource(ABC):
    """Abstract base class for all song text sources."""

    @classmethod
    @abstractmethod
    def can_handle(cls, location: str) -> bool:
        """Return True if this source can read the given path or URL."""

    @abstractmethod
    def fetch(self, location: str) -> str:
        """Read the raw content at location.

        Raises FetchError on I/O or HTTP-level failures.
        """

    @abstractmethod
    def extract(self, raw: str, location: str) -> SourceText:
        """Return the song text and a title for raw content.

        The text is left unsplit; chord/lyric separation is the job of
        :func:`~lyricsmith.parsers.markers.split_lyrics_and_chords`.

        Raises ParseError if no song text can be found.
        """

    def load(self, location: str) -> SourceText:
        """Convenience method: fetch + extract."""
        raw = self.fetch(location)
        return self.extract(raw, location)
