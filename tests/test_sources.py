from unittest.mock import MagicMock, patch

import httpx
import pytest

from lyricsmith.exceptions import FetchError, ParseError, UnsupportedSourceError
from lyricsmith.registry import get_source
from lyricsmith.sources.html_file import HtmlFileSource
from lyricsmith.sources.text_file import TextFileSource
from lyricsmith.sources.utils import html_to_song_text
from lyricsmith.sources.web import WebSource

PRE_PAGE = (
    "<html><head><title>Site | Dark Star</title></head><body>"
    "<h1>Dark Star</h1>"
    "<pre>~A  G\nDark star crashes<br>~D\npouring its light<!-- ad --></pre>"
    "</body></html>"
)
BODY_PAGE = (
    "<html><head><title>Sunny</title><script>var x = 1;</script></head><body>"
    "<h1>Sunny Day</h1><p>Line one</p><p>Line two</p>"
    "</body></html>"
)
TEST_URL = "https://example.com/songs/dark-star"


def _response(status_code=200, text="", content_type="text/html; charset=utf-8") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    resp.headers = {"content-type": content_type}
    return resp


# ---------------------------------------------------------------------------
# can_handle / registry
# ---------------------------------------------------------------------------


def test_text_file_can_handle():
    assert TextFileSource.can_handle("song.txt")
    assert TextFileSource.can_handle("SONG.CHO")
    assert not TextFileSource.can_handle("song.html")


def test_html_file_can_handle():
    assert HtmlFileSource.can_handle("page.htm")
    assert not HtmlFileSource.can_handle("song.txt")


def test_web_can_handle():
    assert WebSource.can_handle(TEST_URL)
    assert WebSource.can_handle("http://example.com/a.txt")
    assert not WebSource.can_handle("song.txt")


def test_registry_picks_source():
    assert isinstance(get_source("a.md"), TextFileSource)
    assert isinstance(get_source("a.html"), HtmlFileSource)
    assert isinstance(get_source("http://example.com/song.txt"), WebSource)


def test_registry_unsupported():
    with pytest.raises(UnsupportedSourceError):
        get_source("song.pdf")


# ---------------------------------------------------------------------------
# Text files
# ---------------------------------------------------------------------------


def test_text_file_load(tmp_path):
    path = tmp_path / "dark_star.txt"
    path.write_text("\n~A\nDark star crashes\n", encoding="utf-8")
    loaded = TextFileSource().load(str(path))
    assert loaded.title == "Dark Star"
    assert loaded.text == "~A\nDark star crashes"


def test_text_file_empty(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("  \n", encoding="utf-8")
    with pytest.raises(ParseError):
        TextFileSource().load(str(path))


def test_text_file_missing(tmp_path):
    with pytest.raises(FetchError) as excinfo:
        TextFileSource().load(str(tmp_path / "missing.txt"))
    assert excinfo.value.status_code == 0


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------


def test_html_pre_blocks_preferred():
    title, text = html_to_song_text(PRE_PAGE)
    assert title == "Dark Star"
    assert text == "~A  G\nDark star crashes\n~D\npouring its light"


def test_html_body_fallback():
    title, text = html_to_song_text(BODY_PAGE)
    assert title == "Sunny Day"
    assert "Line one" in text
    assert "Line two" in text
    assert "Sunny Day" not in text
    assert "var x" not in text


def test_html_file_title_falls_back_to_filename(tmp_path):
    path = tmp_path / "my_song.html"
    path.write_text("<html><body><pre>la la</pre></body></html>", encoding="utf-8")
    loaded = HtmlFileSource().load(str(path))
    assert loaded.title == "My Song"
    assert loaded.text == "la la"


def test_html_file_without_text(tmp_path):
    path = tmp_path / "blank.html"
    path.write_text("<html><body></body></html>", encoding="utf-8")
    with pytest.raises(ParseError):
        HtmlFileSource().load(str(path))


# ---------------------------------------------------------------------------
# Web
# ---------------------------------------------------------------------------


def test_web_load_html():
    with patch("lyricsmith.sources.web.httpx.get", return_value=_response(text=PRE_PAGE)) as get:
        loaded = WebSource().load(TEST_URL)
    assert loaded.title == "Dark Star"
    assert "Dark star crashes" in loaded.text
    assert get.call_args.kwargs["follow_redirects"] is True


def test_web_load_plain_text_uses_url_slug():
    resp = _response(text="~C\nHello\n", content_type="text/plain")
    with patch("lyricsmith.sources.web.httpx.get", return_value=resp):
        loaded = WebSource().load("https://example.com/raw/sunny_day.txt")
    assert loaded.title == "Sunny Day"
    assert loaded.text == "~C\nHello"


def test_web_http_error():
    with patch("lyricsmith.sources.web.httpx.get", return_value=_response(status_code=404)):
        with pytest.raises(FetchError) as excinfo:
            WebSource().load(TEST_URL)
    assert excinfo.value.status_code == 404
    assert "404" in str(excinfo.value)


def test_web_transport_error():
    with patch("lyricsmith.sources.web.httpx.get", side_effect=httpx.ConnectError("boom")):
        with pytest.raises(FetchError) as excinfo:
            WebSource().load(TEST_URL)
    assert excinfo.value.status_code == 0
