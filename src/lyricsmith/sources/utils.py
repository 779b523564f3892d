"""Shared helpers for file and web sources."""

from pathlib import Path

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from ..exceptions import FetchError


def read_text_file(location: str) -> str:
    """Return the contents of a local text file, raising FetchError if unreadable."""
    try:
        return Path(location).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise FetchError(location, 0) from exc


def pre_text(pre_element: Tag) -> str:
    """Extract text from a ``<pre>`` block, treating ``<br>`` as a newline.

    Nested inline tags (``<b>``, ``<span>`` chord markup) contribute their
    text; anything else is kept as written.
    """
    parts: list[str] = []
    for child in pre_element.descendants:
        if isinstance(child, Comment):
            continue
        if isinstance(child, NavigableString):
            parts.append(str(child))
        elif isinstance(child, Tag) and child.name == "br":
            parts.append("\n")
    return "".join(parts)


def html_to_song_text(html: str) -> tuple[str | None, str]:
    """Return ``(title, text)`` for an HTML page holding a song.

    Chord sheets usually live in ``<pre>`` blocks, whose spacing matters, so
    those are preferred; otherwise the visible body text is used with one
    line per block element.  The title comes from the first ``<h1>``, then
    ``<title>``, and is None when neither exists.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()

    heading = soup.find("h1") or soup.find("title")
    title = heading.get_text(strip=True) if heading else None

    pres = soup.find_all("pre")
    if pres:
        text = "\n\n".join(pre_text(pre).strip("\n") for pre in pres)
    else:
        body = soup.body or soup
        for br in body.find_all("br"):
            br.replace_with("\n")
        if heading is not None and heading.name == "h1":
            heading.decompose()
        text = body.get_text("\n")
        text = "\n".join(line.rstrip() for line in text.splitlines())
    return title or None, text.strip()
