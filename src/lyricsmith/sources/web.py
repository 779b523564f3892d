"""Source for songs published on the web.

Any ``http://`` or ``https://`` URL is accepted.  HTML responses go through
the same extraction as saved pages (``<pre>`` blocks first, body text
otherwise); ``text/plain`` responses are used as-is.

Many lyric sites return 403 without browser-like headers, so requests send
a desktop User-Agent.
"""

from urllib.parse import unquote, urlparse

import httpx

from ..exceptions import FetchError, ParseError
from ..titles import normalize_title
from .base import SongSource, SourceText
from .utils import html_to_song_text

_FETCH_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Accept": "text/html,application/xhtml+xml,text/plain;q=0.9,*/*;q=0.8",
}


class WebSource(SongSource):
    """Source for song pages fetched over HTTP(S)."""

    def __init__(self) -> None:
        self.content_type = ""

    @classmethod
    def can_handle(cls, location: str) -> bool:
        return urlparse(location).scheme in ("http", "https")

    def fetch(self, location: str) -> str:
        try:
            resp = httpx.get(location, headers=_FETCH_HEADERS, follow_redirects=True, timeout=15)
        except httpx.RequestError as exc:
            raise FetchError(location, 0) from exc
        if resp.status_code != 200:
            raise FetchError(location, resp.status_code)
        self.content_type = resp.headers.get("content-type", "")
        return resp.text

    def extract(self, raw: str, location: str) -> SourceText:
        if self.content_type.startswith("text/plain"):
            title, text = None, raw.strip()
        else:
            title, text = html_to_song_text(raw)
        if not text:
            raise ParseError(location, "No song text found at URL")
        return SourceText(title=title or _title_from_url(location), text=text)


def _title_from_url(url: str) -> str:
    """Derive a song title from the URL slug as a last-resort fallback."""
    slug = unquote(urlparse(url).path.rstrip("/").split("/")[-1])
    return normalize_title(slug) or "Untitled"
