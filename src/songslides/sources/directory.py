"""Catalog stored as plain-text files.

Layout::

    <root>/
        songs/<id>.txt        # Title / # Author: ... / # CCLI: ... prefix, then lyrics
        decks/<title>.txt     # deck text; "# Song (@id)" lines reference songs

Every file is UTF-8.  Subdirectories and non-``.txt`` files are ignored.
"""

import logging
from datetime import datetime
from pathlib import Path

from ..exceptions import SourceError
from ..header import parse_prefix, song_references
from ..models import DeckRecord, SongRecord
from .base import CatalogSource

logger = logging.getLogger(__name__)


class DirectorySource(CatalogSource):
    """Catalog read from a directory of ``.txt`` files."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    @classmethod
    def can_handle(cls, location: str) -> bool:
        return "://" not in location and Path(location).is_dir()

    def load_songs(self) -> list[SongRecord]:
        songs = [_song_from_file(path) for path in self._files("songs")]
        logger.debug("loaded %d songs from %s", len(songs), self.root)
        return songs

    def load_decks(self) -> list[DeckRecord]:
        decks = [_deck_from_file(path) for path in self._files("decks")]
        logger.debug("loaded %d decks from %s", len(decks), self.root)
        return decks

    def load_deck(self, title: str) -> DeckRecord | None:
        path = self.root / "decks" / f"{title}.txt"
        if not path.is_file():
            return None
        return _deck_from_file(path)

    def _files(self, subdir: str) -> list[Path]:
        folder = self.root / subdir
        if not folder.is_dir():
            logger.info("no %s directory in %s", subdir, self.root)
            return []
        return sorted(p for p in folder.glob("*.txt") if p.is_file())


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceError(str(path), str(exc)) from exc


def _modified(path: Path) -> datetime:
    return datetime.fromtimestamp(path.stat().st_mtime)


def _song_from_file(path: Path) -> SongRecord:
    text = _read(path)
    header = parse_prefix(text)
    return SongRecord(
        id=path.stem,
        title=header.title or path.stem,
        text=text[header.body_offset :].rstrip("\n"),
        author=header.author,
        ccli=header.ccli,
        modified=_modified(path),
    )


def _deck_from_file(path: Path) -> DeckRecord:
    text = _read(path)
    return DeckRecord(title=path.stem, text=text, song_ids=song_references(text))
