from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Span:
    """Half-open character range ``[start, end)`` into the source text."""

    start: int
    end: int

    def __contains__(self, offset: int) -> bool:
        return self.start <= offset < self.end

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Slide:
    """One unit of display produced by the segmenter.

    Example (header style)::

        Slide(text="Line one\\nLine two", span=Span(30, 48), headers=("Verse 1:",))

    Label-style output carries no headers; section labels become their own
    slides with ``is_label=True`` instead.
    """

    text: str
    span: Span
    headers: tuple[str, ...] = ()
    is_label: bool = False

    @property
    def is_subtitle(self) -> bool:
        return self.text.split("\n", 1)[0] == "_"


@dataclass(frozen=True)
class SongHeader:
    """Fields read from the ``#`` prefix of a song document."""

    title: str | None = None
    author: str | None = None
    ccli: str | None = None
    body_offset: int = 0  # first character after the prefix


@dataclass(frozen=True)
class SongRecord:
    """A stored song, body text without the header prefix."""

    id: str
    title: str
    text: str = ""
    author: str | None = None
    ccli: str | None = None
    imported: bool = False  # came from an external catalogue
    modified: datetime | None = None

    @property
    def document(self) -> str:
        """Editor text: header prefix followed by the body."""
        from .header import song_document

        return song_document(self.title, self.text, author=self.author, ccli=self.ccli)

    @property
    def paste_text(self) -> str:
        """Text for pasting the song into a deck, tagged with its id."""
        from .header import paste_text

        return paste_text(self.title, self.text, song_id=self.id)


@dataclass(frozen=True)
class DeckRecord:
    """A stored deck; the title is usually an ISO date."""

    title: str
    text: str = ""
    song_ids: tuple[str, ...] = field(default_factory=tuple)
