"""Song document header prefix.

A stored song is plain text whose first lines may be ``#`` headers::

    # Amazing Grace
    # Author: John Newton
    # CCLI: 22025
    Amazing grace, how sweet the sound
    ...

The first non-field header is the title; ``# <Field>: <value>`` lines fill
the extra fields listed in :data:`EXTRA_FIELDS`.  The prefix is stripped
before the text is segmented for display and written back on save.
"""

import re

from .models import SongHeader

# Extra header fields: attribute name -> label written on save.
EXTRA_FIELDS = {
    "author": "Author",
    "ccli": "CCLI",
}

_FIELD_RE = re.compile(r"^\s*([a-z0-9]+)\s*:\s*(.*)$", re.IGNORECASE)

# A deck line referencing a song by id: "# Amazing Grace (@42)"
SONG_REFERENCE_RE = re.compile(r"^\s*#.*\(@([0-9]+)\)")


def parse_prefix(text: str) -> SongHeader:
    """Return the title and extra fields from the header prefix of *text*.

    Parsing stops at the first line that does not start with ``#`` or at a
    second non-field header after the title; that line is left in the body.
    An unterminated last ``#`` line is still part of the prefix.
    """
    fields: dict[str, str | None] = {name: None for name in EXTRA_FIELDS}
    title = None
    index = 0

    while text.startswith("#", index):
        end = text.find("\n", index)
        next_index = end + 1
        if end == -1:
            end = next_index = len(text)

        line = text[index:end].lstrip("#").strip()
        m = _FIELD_RE.match(line)
        if m and m.group(1).lower() in fields:
            fields[m.group(1).lower()] = m.group(2).strip() or None
        elif title is None:
            title = line
        else:
            break
        index = next_index

    return SongHeader(title=title, body_offset=index, **fields)


def strip_prefix(text: str) -> str:
    """Return *text* without its header prefix."""
    return text[parse_prefix(text).body_offset :]


def render_prefix(title: str, author: str | None = None, ccli: str | None = None) -> str:
    """Render the header prefix; every extra field is written, empty if unset."""
    values = {"author": author, "ccli": ccli}
    parts = [f"# {title}\n"]
    for name, label in EXTRA_FIELDS.items():
        parts.append(f"# {label}: {values[name] or ''}\n")
    return "".join(parts)


def song_document(title: str, body: str, author: str | None = None, ccli: str | None = None) -> str:
    """Return the full editor text of a song: prefix, body, final newline."""
    return f"{render_prefix(title, author, ccli)}{body}\n"


def paste_text(title: str, body: str, song_id: str | None = None) -> str:
    """Return the text inserted into a deck when a song is added to it."""
    if song_id:
        title = f"{title} (@{song_id})"
    return f"# {title}\n{body}\n"


def song_references(deck_text: str) -> tuple[str, ...]:
    """Return the song ids referenced by ``(@id)`` header lines, in order."""
    ids = []
    for line in deck_text.split("\n"):
        m = SONG_REFERENCE_RE.match(line)
        if m:
            ids.append(m.group(1))
    return tuple(ids)


def text_only(text: str) -> str:
    """Return *text* without its first line when that line is a header."""
    if re.match(r"^\s*#", text):
        return text.split("\n", 1)[1] if "\n" in text else ""
    return text
