from .exceptions import UnsupportedSourceError
from .sources.base import CatalogSource
from .sources.directory import DirectorySource
from .sources.http import DEFAULT_TIMEOUT, HttpSource

_SOURCES: list[type[CatalogSource]] = [
    HttpSource,
    DirectorySource,
]


def get_source(location: str, timeout: float = DEFAULT_TIMEOUT) -> CatalogSource:
    """Return an instantiated catalog source for the given location.

    Raises UnsupportedSourceError if no source matches.
    """
    for cls in _SOURCES:
        if cls.can_handle(location):
            if cls is HttpSource:
                return HttpSource(location, timeout=timeout)
            return cls(location)
    raise UnsupportedSourceError(location)
