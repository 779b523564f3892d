class LyricsmithError(Exception):
    """Base exception for lyricsmith."""


class FetchError(LyricsmithError):
    """Raised when a source cannot be read (HTTP failure, missing file)."""

    def __init__(self, location: str, status_code: int):
        self.location = location
        self.status_code = status_code
        if status_code:
            super().__init__(f"HTTP {status_code} fetching {location}")
        else:
            super().__init__(f"Could not read {location}")


class ParseError(LyricsmithError):
    """Raised when no song text can be extracted from a source."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Parse error for {location}: {reason}")


class UnsupportedSourceError(LyricsmithError):
    """Raised when no source matches the given location."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"No source found for: {location}")


class InvalidLibraryFormatError(LyricsmithError):
    """Raised when a library export envelope is malformed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid library format: {reason}")


class ConfigError(LyricsmithError):
    """Raised for invalid configuration values."""
