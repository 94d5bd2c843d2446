"""Catalog served by a slides server over HTTP.

Endpoints (JSON)::

    GET <base>/songs             [{"id", "title", "author", "ccli", "imported",
                                   "text", "modified"}, ...]
    GET <base>/decks             [{"title", "songs": [id, ...]}, ...]
    GET <base>/deck?title=<t>    {"title", "text", "created", "modified"}

Optional keys may be missing or null.  ``modified`` is an RFC 3339 timestamp.
"""

import json
import logging
from datetime import datetime

import httpx

from ..exceptions import FetchError, SourceError
from ..header import song_references
from ..models import DeckRecord, SongRecord
from .base import CatalogSource

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15


class HttpSource(CatalogSource):
    """Catalog fetched from a slides server's JSON API."""

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT, client: httpx.Client | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.client = client

    @classmethod
    def can_handle(cls, location: str) -> bool:
        return location.startswith(("http://", "https://"))

    def fetch(self, path: str, params: dict | None = None) -> str:
        """GET *path* under the base URL and return the body text.

        Raises FetchError on transport errors and non-200 responses.
        """
        url = f"{self.base_url}{path}"
        try:
            if self.client is not None:
                resp = self.client.get(url, params=params, timeout=self.timeout)
            else:
                resp = httpx.get(url, params=params, follow_redirects=True, timeout=self.timeout)
        except httpx.RequestError as exc:
            logger.warning("request to %s failed: %s", url, exc)
            raise FetchError(url, 0) from exc
        if resp.status_code != 200:
            raise FetchError(url, resp.status_code)
        logger.debug("fetched %s (%d bytes)", url, len(resp.content))
        return resp.text

    def load_songs(self) -> list[SongRecord]:
        return self.extract_songs(self.fetch("/songs"))

    def load_decks(self) -> list[DeckRecord]:
        return self.extract_decks(self.fetch("/decks"))

    def load_deck(self, title: str) -> DeckRecord | None:
        try:
            body = self.fetch("/deck", params={"title": title})
        except FetchError as exc:
            if exc.status_code == 404:
                return None
            raise
        data = self._decode(body, "/deck")
        if not isinstance(data, dict):
            raise SourceError(self.base_url, "deck payload is not an object")
        text = data.get("text") or ""
        return DeckRecord(title=data.get("title") or title, text=text, song_ids=song_references(text))

    def extract_songs(self, body: str) -> list[SongRecord]:
        """Parse the ``/songs`` payload."""
        items = self._decode(body, "/songs")
        if not isinstance(items, list):
            raise SourceError(self.base_url, "songs payload is not a list")
        try:
            return [_song_from_item(item) for item in items]
        except (KeyError, TypeError, ValueError) as exc:
            raise SourceError(self.base_url, f"bad song entry: {exc}") from exc

    def extract_decks(self, body: str) -> list[DeckRecord]:
        """Parse the ``/decks`` payload."""
        items = self._decode(body, "/decks")
        if not isinstance(items, list):
            raise SourceError(self.base_url, "decks payload is not a list")
        try:
            return [
                DeckRecord(
                    title=item["title"],
                    song_ids=tuple(str(i) for i in item.get("songs") or ()),
                )
                for item in items
            ]
        except (KeyError, TypeError) as exc:
            raise SourceError(self.base_url, f"bad deck entry: {exc}") from exc

    def _decode(self, body: str, path: str):
        try:
            return json.loads(body)
        except json.JSONDecodeError as exc:
            raise SourceError(f"{self.base_url}{path}", "invalid JSON") from exc


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_time(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("unparseable timestamp %r", value)
        return None


def _song_from_item(item: dict) -> SongRecord:
    return SongRecord(
        id=str(item["id"]),
        title=item.get("title") or "",
        text=item.get("text") or "",
        author=item.get("author") or None,
        ccli=item.get("ccli") or None,
        imported=bool(item.get("imported")),
        modified=_parse_time(item.get("modified")),
    )
