"""In-memory catalog of songs and decks.

A :class:`Catalog` wraps a :class:`~songslides.sources.base.CatalogSource`
and hands out immutable :class:`CatalogSnapshot` objects.  ``refresh()``
builds a new snapshot; snapshots already handed out never change.

Usage::

    from songslides.registry import get_source
    from songslides.store import Catalog

    catalog = Catalog(get_source("https://slides.example.org"))
    snapshot = catalog.refresh()
    for song, m in snapshot.search_songs("amazing"):
        print(m.score, song.title)
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .dates import CalendarDate
from .decks import deck_sort_key, display_title, resolve_alias
from .fuzzy import FuzzyMatch, search
from .models import DeckRecord, SongRecord
from .sources.base import CatalogSource

logger = logging.getLogger(__name__)

RECENT_LIMIT = 25


@dataclass(frozen=True)
class RecentRow:
    song: SongRecord
    cells: tuple[bool, ...]  # one per RecentTable.titles entry: song used in that deck


@dataclass(frozen=True)
class RecentTable:
    """Which songs were used in the most recent decks."""

    titles: tuple[str, ...] = ()
    rows: tuple[RecentRow, ...] = ()


@dataclass(frozen=True)
class CatalogSnapshot:
    songs: tuple[SongRecord, ...] = ()
    decks: tuple[DeckRecord, ...] = ()  # dated decks first, newest first
    songs_by_id: Mapping[str, SongRecord] = field(default_factory=lambda: MappingProxyType({}))
    decks_by_title: Mapping[str, DeckRecord] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def build(cls, songs: list[SongRecord], decks: list[DeckRecord]) -> "CatalogSnapshot":
        ordered = sorted(decks, key=lambda d: deck_sort_key(d.title))
        return cls(
            songs=tuple(songs),
            decks=tuple(ordered),
            songs_by_id=MappingProxyType({s.id: s for s in songs}),
            decks_by_title=MappingProxyType({d.title: d for d in ordered}),
        )

    def song(self, song_id: str) -> SongRecord | None:
        return self.songs_by_id.get(str(song_id))

    def deck(self, title: str, today: CalendarDate | None = None) -> DeckRecord | None:
        """Look up a deck by title or alias (``sunday``, ``last``, ...)."""
        return self.decks_by_title.get(resolve_alias(title, today))

    def search_songs(self, query: str) -> list[tuple[SongRecord, FuzzyMatch | None]]:
        """Fuzzy-search song titles; on equal scores our own songs beat imported ones."""
        return search(query, self.songs, title=lambda s: s.title, tiebreak=lambda s: s.imported)

    def recent(self, limit: int = RECENT_LIMIT, today: CalendarDate | None = None) -> RecentTable:
        """Return the song usage table for the *limit* newest decks that have songs."""
        recent_decks: list[DeckRecord] = []
        used: dict[str, None] = {}
        for deck in self.decks:
            if not deck.song_ids:
                continue
            recent_decks.append(deck)
            used.update(dict.fromkeys(deck.song_ids))
            if len(recent_decks) >= limit:
                break

        rows = []
        for song_id in used:
            song = self.song(song_id)
            if song is None:
                continue
            rows.append(RecentRow(song=song, cells=tuple(song_id in d.song_ids for d in recent_decks)))

        return RecentTable(
            titles=tuple(display_title(d.title, today) for d in recent_decks),
            rows=tuple(rows),
        )


class Catalog:
    """Owns the current snapshot of one catalog source."""

    def __init__(self, source: CatalogSource):
        self.source = source
        self._snapshot = CatalogSnapshot()

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    def refresh(self) -> CatalogSnapshot:
        """Reload songs and decks from the source and return the new snapshot.

        Source errors propagate; the previous snapshot stays current.
        """
        songs = self.source.load_songs()
        decks = self.source.load_decks()
        self._snapshot = CatalogSnapshot.build(songs, decks)
        logger.info("catalog refreshed: %d songs, %d decks", len(songs), len(decks))
        return self._snapshot
