"""Configuration settings for lyricsmith.

Values come from the environment and can be overridden by CLI options:

    LYRICSMITH_CHORD_PREFIX      marker that starts an explicit chord line (``~``)
    LYRICSMITH_ASSUME_NO_CHORDS  ``0``/``false``/``no``/``off`` disables the
                                 lyrics-only fast path of the marker splitter
    LYRICSMITH_LIBRARY           path of the library JSON file
"""

import os
from dataclasses import dataclass
from pathlib import Path

from .exceptions import ConfigError

DEFAULT_CHORD_LINE_PREFIX = "~"
DEFAULT_LIBRARY_PATH = Path("lyricsmith-library.json")

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Config:
    chord_line_prefix: str = DEFAULT_CHORD_LINE_PREFIX
    assume_no_chords: bool = True
    library_path: Path = DEFAULT_LIBRARY_PATH


def load_config() -> Config:
    """Build a :class:`Config` from environment variables."""
    prefix = os.getenv("LYRICSMITH_CHORD_PREFIX", DEFAULT_CHORD_LINE_PREFIX)
    assume = os.getenv("LYRICSMITH_ASSUME_NO_CHORDS", "true").strip().lower()
    library = os.getenv("LYRICSMITH_LIBRARY")
    config = Config(
        chord_line_prefix=prefix,
        assume_no_chords=assume not in _FALSE_VALUES,
        library_path=Path(library) if library else DEFAULT_LIBRARY_PATH,
    )
    validate_config(config)
    return config


def validate_config(config: Config) -> None:
    """Validate configuration values."""
    if not config.chord_line_prefix.strip():
        raise ConfigError("Chord line prefix must not be blank")
