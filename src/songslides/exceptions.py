class SongSlidesError(Exception):
    """Base exception for songslides."""


class FetchError(SongSlidesError):
    """Raised when an HTTP request to a catalog fails."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"HTTP {status_code} fetching {url}")


class SourceError(SongSlidesError):
    """Raised when catalog data cannot be read or decoded."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Cannot read catalog {location}: {reason}")


class UnsupportedSourceError(SongSlidesError):
    """Raised when no catalog source matches the given location."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"No catalog source found for: {location}")


class InvalidTitleError(SongSlidesError):
    """Raised when a deck title fails validation."""

    def __init__(self, title: str, reason: str):
        self.title = title
        self.reason = reason
        super().__init__(f"Invalid deck title {title!r}: {reason}")
