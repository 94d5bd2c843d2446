"""Fuzzy song-title search.

The search string must appear in the title as an in-order, not necessarily
contiguous, subsequence.  Scoring:

+-------------------------------------------+-------+
| Matched character at the start of a word  | +3    |
+-------------------------------------------+-------+
| Matched character elsewhere               | +1    |
+-------------------------------------------+-------+
| Search occurs contiguously in the title   | +6    |
+-------------------------------------------+-------+
| Search equals the whole title             | +12   |
|   (replaces the +6 bonus)                 |       |
+-------------------------------------------+-------+
"""

import re
import unicodedata
from dataclasses import dataclass
from typing import Any, Callable, Iterable

WORD_START_SCORE = 3
MIDDLE_SCORE = 1
WORD_SCORE = 6
FULL_MATCH_SCORE = 12

MARK_OPEN = "<ins>"
MARK_CLOSE = "</ins>"

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class FuzzyMatch:
    score: int
    markup: str  # title with matched runs wrapped in <ins>...</ins>


def _fold(char: str) -> str:
    lower = char.lower()
    if len(lower) != 1:
        return char
    base = unicodedata.normalize("NFKD", lower)[0]
    return base if base.isalpha() else lower


def normalize(text: str) -> str:
    """Lowercase *text* and drop accents, keeping one character per character."""
    return "".join(_fold(c) for c in text)


def match(search: str, title: str) -> FuzzyMatch | None:
    """Score *search* against *title*; None when it is not a subsequence."""
    wanted = _WHITESPACE_RE.sub("", normalize(search))
    norm = normalize(title)
    if not wanted or len(wanted) > len(norm):
        return None

    si = score = 0
    parts: list[str] = []
    word_start = True
    in_run = False

    for normchar, textchar in zip(norm, title):
        if normchar.isspace():
            if in_run:
                parts.append(MARK_CLOSE)
                in_run = False
            parts.append(textchar)
            word_start = True
            continue

        if si < len(wanted) and normchar == wanted[si]:
            if not in_run:
                parts.append(MARK_OPEN)
                in_run = True
            score += WORD_START_SCORE if word_start else MIDDLE_SCORE
            si += 1
        elif in_run:
            parts.append(MARK_CLOSE)
            in_run = False

        parts.append(textchar)
        word_start = False

    if si != len(wanted):
        return None
    if in_run:
        parts.append(MARK_CLOSE)

    if wanted == _WHITESPACE_RE.sub("", norm):
        score += FULL_MATCH_SCORE
    elif wanted in norm:
        score += WORD_SCORE

    return FuzzyMatch(score=score, markup="".join(parts))


def search(
    query: str,
    items: Iterable[Any],
    title: Callable[[Any], str] = str,
    tiebreak: Callable[[Any], Any] | None = None,
) -> list[tuple[Any, FuzzyMatch | None]]:
    """Return ``(item, match)`` pairs for every item whose title matches *query*.

    Results are ordered by descending score, then by ``tiebreak(item)`` when
    given, then by input order.  A blank query returns every item unscored.
    """
    if not query.strip():
        return [(item, None) for item in items]

    found = []
    for item in items:
        m = match(query, title(item))
        if m is not None:
            found.append((item, m))

    if tiebreak is None:
        found.sort(key=lambda pair: -pair[1].score)
    else:
        found.sort(key=lambda pair: (-pair[1].score, tiebreak(pair[0])))
    return found
