from lyricsmith.models import AlignedText
from lyricsmith.titles import normalize_title, strip_title_from_lyrics, strip_title_from_song

# ---------------------------------------------------------------------------
# strip_title_from_lyrics
# ---------------------------------------------------------------------------


def test_removes_title_line_ignoring_case_and_spacing():
    assert strip_title_from_lyrics("My Song", "My   song\nHello") == "Hello"


def test_label_matching_title_is_kept():
    assert strip_title_from_lyrics("My Song", "[My Song]\nHello") == "[My Song]\nHello"


def test_removes_every_matching_line():
    assert strip_title_from_lyrics("My Song", "My Song\nA\n  my song  ") == "A"


def test_other_lines_untouched():
    lyrics = "[Verse 1]\nMy Song is here\nHello"
    assert strip_title_from_lyrics("My Song", lyrics) == lyrics


def test_blank_title_leaves_lyrics_alone():
    assert strip_title_from_lyrics("", "\nA\n") == "\nA\n"
    assert strip_title_from_lyrics("   ", "\nA\n") == "\nA\n"


def test_none_inputs():
    assert strip_title_from_lyrics(None, None) == ""
    assert strip_title_from_lyrics("Title", None) == ""


# ---------------------------------------------------------------------------
# strip_title_from_song
# ---------------------------------------------------------------------------


def test_strip_title_from_song_drops_paired_chord():
    assert strip_title_from_song("Hi", "Hi\nThere", "X\nY") == AlignedText("There", "Y")


def test_strip_title_from_song_short_chords():
    assert strip_title_from_song("Hi", "A\nHi\nB", "C") == AlignedText("A\nB", "C")


def test_strip_title_from_song_blank_title():
    assert strip_title_from_song("", "Hi\nThere", "X\nY") == AlignedText("Hi\nThere", "X\nY")


# ---------------------------------------------------------------------------
# normalize_title
# ---------------------------------------------------------------------------


def test_normalize_title_snake_and_kebab():
    assert normalize_title("my_first-song.txt") == "My First Song"


def test_normalize_title_camel_case():
    assert normalize_title("darkStar.md") == "Dark Star"


def test_normalize_title_all_caps():
    assert normalize_title("ALL CAPS.txt") == "All Caps"


def test_normalize_title_collapses_spaces():
    assert normalize_title("  the   weight .cho") == "The Weight"
