"""Deck titles: weekday aliases, validation and ordering.

Decks are usually titled with the ISO date of the service they belong to.
Users may type an alias such as ``sunday`` or ``last`` instead of a date.
"""

from .dates import CalendarDate
from .exceptions import InvalidTitleError

MIN_TITLE_LENGTH = 4
MAX_TITLE_LENGTH = 32

_VALID_PUNCT = " -._"

# ISO weekday numbers, Monday = 1
_WEEKDAY_ALIASES = {
    "monday": 1, "mon": 1,
    "tuesday": 2, "tue": 2,
    "wednesday": 3, "wed": 3,
    "thursday": 4, "thu": 4,
    "friday": 5, "fri": 5,
    "saturday": 6, "sat": 6,
}
_SUNDAY_ALIASES = {"current", "sunday", "sun"}

RESERVED_TITLES = frozenset(
    {"new", "deck", "decks", "current", "next", "last"}
    | set(_WEEKDAY_ALIASES)
    | _SUNDAY_ALIASES
)


def resolve_alias(title: str, today: CalendarDate | None = None) -> str:
    """Return the ISO date an alias stands for, or *title* unchanged.

    ``last`` is the most recent Sunday (today on a Sunday); ``current`` and
    ``sunday`` the Sunday after it; a weekday name the next such day after
    today.
    """
    today = today or CalendarDate.today()
    alias = title.lower()
    last_sunday = today.week_start(7)

    if alias == "last":
        return last_sunday.iso
    if alias in _SUNDAY_ALIASES:
        return last_sunday.plus_days(7).iso
    if alias in _WEEKDAY_ALIASES:
        wanted = _WEEKDAY_ALIASES[alias]
        ahead = (wanted - today.weekday) % 7 or 7
        return today.plus_days(ahead).iso
    return title


def check_title(title: str) -> None:
    """Raise :class:`InvalidTitleError` if *title* cannot name a deck."""
    if len(title) < MIN_TITLE_LENGTH:
        raise InvalidTitleError(title, "title is too short")
    if len(title) > MAX_TITLE_LENGTH:
        raise InvalidTitleError(title, "title is too long")
    if title != title.strip():
        raise InvalidTitleError(title, "title has leading/trailing spaces")
    if title.lower() in RESERVED_TITLES:
        raise InvalidTitleError(title, "title is reserved")
    for c in title:
        if not (c.isalnum() or c in _VALID_PUNCT):
            raise InvalidTitleError(title, "title has invalid characters")


def is_valid_title(title: str) -> bool:
    try:
        check_title(title)
    except InvalidTitleError:
        return False
    return True


def deck_sort_key(title: str) -> tuple:
    """Sort key: dated decks first, newest first, then other titles A-Z."""
    date = CalendarDate.parse(title) if len(title) == 10 else None
    if date is not None:
        return (0, -date.to_date().toordinal(), "")
    return (1, 0, title)


def display_title(title: str, today: CalendarDate | None = None) -> str:
    """Return a relative description for dated titles, the title otherwise."""
    date = CalendarDate.parse(title) if len(title) == 10 else None
    if date is None:
        return title
    return date.fuzzy(today)
