from .exceptions import UnsupportedSourceError
from .sources.base import SongSource
from .sources.html_file import HtmlFileSource
from .sources.text_file import TextFileSource
from .sources.web import WebSource

_SOURCES: list[type[SongSource]] = [
    WebSource,
    HtmlFileSource,
    TextFileSource,
]


def get_source(location: str) -> SongSource:
    """Return an instantiated source for the given path or URL.

    Raises UnsupportedSourceError if no source matches.
    """
    for cls in _SOURCES:
        if cls.can_handle(location):
            return cls()
    raise UnsupportedSourceError(location)
