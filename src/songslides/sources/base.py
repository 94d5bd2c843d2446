from abc import ABC, abstractmethod

from ..models import DeckRecord, SongRecord


class CatalogSource(ABC):
    """Abstract base class for places songs and decks are loaded from."""

    @classmethod
    @abstractmethod
    def can_handle(cls, location: str) -> bool:
        """Return True if this source can read the given location."""

    @abstractmethod
    def load_songs(self) -> list[SongRecord]:
        """Return every song in the catalog.

        Raises SourceError (or FetchError for remote sources) on failure.
        """

    @abstractmethod
    def load_decks(self) -> list[DeckRecord]:
        """Return every deck in the catalog.

        Deck text may be empty when the source only lists titles and song ids;
        use :meth:`load_deck` for the full text.
        """

    def load_deck(self, title: str) -> DeckRecord | None:
        """Return one deck with its text, or None if it does not exist."""
        for deck in self.load_decks():
            if deck.title == title:
                return deck
        return None
