import pytest

from lyricsmith.sections import (
    is_heading_line,
    is_section_label,
    normalize_section_label,
    normalize_section_labels,
    split_lines,
)

# ---------------------------------------------------------------------------
# normalize_section_labels
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "line, expected",
    [
        ("Verse 1:", "[Verse 1]"),
        ("(Chorus)", "[Chorus]"),
        ("{bridge}", "[Bridge]"),
        ("[Verse 1]", "[Verse 1]"),
        ("verse 2", "[Verse 2]"),
        ("  Chorus  ", "[Chorus]"),
        ("** pre-chorus **", "[Pre-chorus]"),
        ("- Outro -", "[Outro]"),
        ("Bridge:", "[Bridge]"),
        ("(Chorus x2)", "[Chorus X2]"),
        ("[Ending]", "[Ending]"),
        ("__Interlude__", "[Interlude]"),
        ("Verse    3", "[Verse 3]"),
    ],
)
def test_heading_lines_become_labels(line, expected):
    assert normalize_section_labels(line) == expected


@pytest.mark.parametrize(
    "line",
    [
        "Just a line",
        "Hello darkness, my old friend",
        "[Chorus] x2",
        "(softly)",
        "C  G  Am",
    ],
)
def test_non_heading_lines_unchanged(line):
    assert normalize_section_labels(line) == line


def test_blank_lines_pass_through():
    text = "Verse:\n\n   \nLa la"
    assert normalize_section_labels(text) == "[Verse]\n\n   \nLa la"


def test_line_count_preserved():
    text = "Intro\n\nsome words\n(Chorus)\nmore words\n"
    assert len(normalize_section_labels(text).split("\n")) == len(text.split("\n"))


def test_crlf_input_normalized_to_lf():
    assert normalize_section_labels("Verse 1:\r\nHello") == "[Verse 1]\nHello"


def test_lone_cr_input_normalized_to_lf():
    assert normalize_section_labels("Verse 1:\rHello") == "[Verse 1]\nHello"


def test_none_treated_as_empty():
    assert normalize_section_labels(None) == ""


def test_only_first_letter_of_each_word_is_raised():
    # the rest of each word keeps its original case
    assert normalize_section_labels("VERSE two") == "[VERSE Two]"


@pytest.mark.parametrize(
    "text",
    [
        "Verse 1:\nHello\n(Chorus)\nWorld",
        "** pre-chorus **\n{bridge}\n- Outro -",
        "Just a line\n\n[Chorus] x2",
    ],
)
def test_idempotent(text):
    once = normalize_section_labels(text)
    assert normalize_section_labels(once) == once


def test_normalize_single_label_returns_none_for_lyrics():
    assert normalize_section_label("Hello there") is None
    assert normalize_section_label("   ") is None


# ---------------------------------------------------------------------------
# is_section_label / is_heading_line
# ---------------------------------------------------------------------------


def test_is_section_label():
    assert is_section_label("[Chorus]")
    assert is_section_label("  [Verse 1]  ")
    assert not is_section_label("[Chorus] x2")
    assert not is_section_label("Chorus")
    assert not is_section_label("")
    assert not is_section_label(None)


def test_is_heading_line_wrapped():
    assert is_heading_line("(x2)")
    assert is_heading_line("[Instrumental]")
    assert is_heading_line("{repeat}")


def test_is_heading_line_bare_keyword():
    assert is_heading_line("Chorus:")
    assert is_heading_line("Verse 2")


def test_is_heading_line_lyrics_and_blank():
    assert not is_heading_line("Hello world")
    assert not is_heading_line("")
    assert not is_heading_line(None)


def test_split_lines_handles_mixed_endings():
    assert split_lines("a\r\nb\nc") == ["a", "b", "c"]
    assert split_lines(None) == [""]
