"""Line grammar shared by every segmentation mode.

Each raw line goes through the same pipeline:

  1. clean_line()     trim, then apply the CLEANUP_RULES table
  2. is_chord_line()  chord-only lines are invisible to segmentation
  3. match_label()    section labels / titles end the current slide
  4. classify_line()  BLANK / LABEL / CHORD / LYRIC, combining the above

The rule tables are plain data so they can be tested and extended without
touching the segmenter's control flow.

All patterns are anchored or bounded and use no back-references.
"""

import re
from enum import Enum, auto
from typing import Callable

# ---------------------------------------------------------------------------
# Regexes
# ---------------------------------------------------------------------------

# A single chord symbol: C, C#, Db, Em, Am7, Cmaj7, Gsus4, Bbdim, D.
_CHORD_PAT = r"[A-G](?:##?|bb?)?(?:(?:m|sus|maj|min|aug|dim)?\d?)?\.?"

CHORD_RE = re.compile(rf"^{_CHORD_PAT}$")

# Separators between chords on a chord line: G / D | Em
CHORD_SPLIT_RE = re.compile(r"[\s/|]+")

# Inline chord annotation embedded in a lyric: "You [Dadd4]face", "[G]Amazing"
INLINE_CHORD_RE = re.compile(rf"\[{_CHORD_PAT}\]", re.IGNORECASE)

# Any bracket group without nested brackets; contents are checked by
# _strip_chord_group() token by token.
BRACKET_GROUP_RE = re.compile(r"\[([^\[\]]*)\]")

# Tokens allowed inside a stripped bracket group: G, C2, F#, Dadd4, 2x
CHORD_GROUP_TOKEN_RE = re.compile(r"^(?:[A-G][#a-z0-9]{0,4}|[0-9]x)$")

# Section labels and titles.  Exactly one group is set on a match:
#   1. "Verse 1:", "Refrain:"          one or two words ending in a colon
#   2. "# Title", "## Chorus"         markdown-style header
#   3. "[Chorus 2x]", "verse 2", "Intro"
LABEL_RE = re.compile(
    r"^(?:"
    r"([a-zåäö0-9]+(?:\s[a-zåäö0-9]+)?:)"
    r"|#+(.*)"
    r"|\[?((?:intro|outro|chorus|bridge|verse)(?:\s?\d+)?(?:\s?[0-9]x)?)\]?"
    r")$",
    re.IGNORECASE,
)

# Upper bound on clean-up passes over a single line.
_MAX_CLEANUP_PASSES = 8


def _strip_chord_group(match: re.Match) -> str:
    tokens = [t for t in CHORD_SPLIT_RE.split(match.group(1)) if t]
    if tokens and all(CHORD_GROUP_TOKEN_RE.match(t) for t in tokens):
        return ""
    return match.group(0)


Replacement = str | Callable[[re.Match], str]

# Ordered (pattern, replacement) pairs applied to every line.
CLEANUP_RULES: list[tuple[re.Pattern, Replacement]] = [
    (re.compile(r"\(repeat[^)]*\)", re.IGNORECASE), ""),  # (repeat 2x)
    (re.compile(r"\bcolumn_break\b", re.IGNORECASE), ""),
    (INLINE_CHORD_RE, ""),  # [Am7]
    (BRACKET_GROUP_RE, _strip_chord_group),  # [G/// | C2/// | 2x]
    (re.compile(r"\s{2,}"), " "),
    (re.compile(r" +- +"), ""),  # syllable join: "sna - ror" -> "snaror"
]


# ---------------------------------------------------------------------------
# LineType
# ---------------------------------------------------------------------------


class LineType(Enum):
    BLANK = auto()  # empty after clean-up
    LABEL = auto()  # section label or title: Chorus:, # Title, [Verse 2]
    CHORD = auto()  # chord-only line: G  D/F#  Em  C
    LYRIC = auto()  # everything else


# ---------------------------------------------------------------------------
# Line helpers
# ---------------------------------------------------------------------------


def clean_line(line: str) -> str:
    """Return *line* trimmed and passed through :data:`CLEANUP_RULES`.

    The table is re-applied until the line stops changing, so
    ``clean_line(clean_line(x)) == clean_line(x)``.
    """
    cleaned = line.strip()
    for _ in range(_MAX_CLEANUP_PASSES):
        previous = cleaned
        for pattern, replacement in CLEANUP_RULES:
            cleaned = pattern.sub(replacement, cleaned)
        cleaned = cleaned.strip()
        if cleaned == previous:
            break
    return cleaned


def is_chord_line(line: str) -> bool:
    """Return True if every token of *line* is a chord symbol.

    Tokens are separated by whitespace, ``/`` and ``|``.  A line with no
    tokens at all is not a chord line.
    """
    tokens = [t for t in CHORD_SPLIT_RE.split(line) if t]
    return bool(tokens) and all(CHORD_RE.match(t) for t in tokens)


def match_label(line: str) -> str | None:
    """Return the label text of a LABEL line, ``""`` for a bare ``#``.

    Returns None when *line* is not a label at all.
    """
    m = LABEL_RE.match(line)
    if not m:
        return None
    for group in m.groups():
        if group is not None and group.strip():
            return group.strip()
    return ""


def stable_label(label: str) -> str:
    """Return *label* as it reads back after being written as ``# label``.

    Writing a header can expose text to the clean-up rules again, e.g.
    ``"- foo"`` becomes ``"# - foo"`` and the syllable join turns that into
    ``"#foo"``.  Labels are settled here so serialised text re-segments to
    the same headers.
    """
    for _ in range(_MAX_CLEANUP_PASSES):
        settled = match_label(clean_line(f"# {label}"))
        if settled is None or settled == label:
            break
        label = settled
    return label


def classify_line(line: str) -> LineType:
    """Classify an already cleaned line."""
    if not line:
        return LineType.BLANK
    if is_chord_line(line):
        return LineType.CHORD
    if match_label(line) is not None:
        return LineType.LABEL
    return LineType.LYRIC
