"""Text-to-slides segmentation.

One engine serves both output conventions, selected by :class:`SegmentMode`:

``HEADER``
    Song and deck style.  Labels collect in a pending buffer and are attached
    to the next slide's ``headers``.

``LABEL``
    Editor style.  Labels become standalone slides (``is_label=True``) and a
    terminal ``END_MARKER`` slide closes the sequence.

Usage::

    from songslides.segmenter import SegmentMode, segment
    slides = segment(text, SegmentMode.LABEL)
"""

from enum import Enum

from .formatter import SlideTextFormatter
from .grammar import LineType, classify_line, clean_line, match_label, stable_label
from .header import parse_prefix
from .models import Slide, SongHeader, Span

END_MARKER = "end"


class SegmentMode(Enum):
    HEADER = "header"  # labels attach to the following slide
    LABEL = "label"  # labels are slides of their own


def _lines(text: str, start: int):
    """Yield ``(raw_line, line_start, line_end)`` for each line from *start*.

    ``line_end`` is one past the terminating newline, or ``len(text)`` for an
    unterminated last line.
    """
    pos = start
    length = len(text)
    while pos <= length:
        newline = text.find("\n", pos)
        if newline == -1:
            if pos < length:
                yield text[pos:], pos, length
            return
        yield text[pos:newline], pos, newline + 1
        pos = newline + 1


def segment(text: str, mode: SegmentMode = SegmentMode.HEADER, start: int = 0) -> list[Slide]:
    """Split *text* into an ordered list of :class:`~songslides.models.Slide`.

    Algorithm
    ---------
    1. Walk the lines from offset *start*, cleaning each with
       :func:`~songslides.grammar.clean_line`.
    2. CHORD lines are skipped without ending the current slide.
    3. BLANK and LABEL lines flush the accumulated content lines as a slide
       spanning its first to last content line.
    4. The label is attached to the next slide (``HEADER``) or emitted as a
       slide spanning the label line (``LABEL``).
    5. Remaining content is flushed at the end of input; ``LABEL`` mode then
       appends the ``END_MARKER`` sentinel with an empty span at ``len(text)``.

    Spans are offsets into *text* itself, whatever *start* is.  Never raises.
    """
    slides: list[Slide] = []
    current: list[str] = []
    pending_headers: list[str] = []
    slide_start = slide_end = start

    def flush() -> None:
        nonlocal pending_headers
        if not current:
            return
        slides.append(
            Slide(
                text="\n".join(current),
                span=Span(slide_start, slide_end),
                headers=tuple(pending_headers),
            )
        )
        current.clear()
        pending_headers = []

    for raw, line_start, line_end in _lines(text, start):
        line = clean_line(raw)
        lt = classify_line(line)

        if lt == LineType.CHORD:
            continue

        if lt in (LineType.BLANK, LineType.LABEL):
            flush()
            label = stable_label(match_label(line)) if lt == LineType.LABEL else None
            if not label:
                continue
            if mode == SegmentMode.LABEL:
                slides.append(Slide(text=label, span=Span(line_start, line_end), is_label=True))
            else:
                pending_headers.append(label)
            continue

        # LineType.LYRIC
        if not current:
            slide_start = line_start
        current.append(line)
        slide_end = line_end

    flush()

    if mode == SegmentMode.LABEL:
        slides.append(Slide(text=END_MARKER, span=Span(len(text), len(text)), is_label=True))
    return slides


def segment_song(text: str) -> tuple[SongHeader, list[Slide]]:
    """Parse the ``#`` header prefix of a song and segment the rest.

    Spans stay in *text* coordinates so they can drive cursor highlighting in
    the full document.
    """
    header = parse_prefix(text)
    return header, segment(text, SegmentMode.HEADER, start=header.body_offset)


def cleanup(text: str) -> str:
    """Re-serialise *text* with everything that never reaches a slide removed.

    Each slide becomes its ``# <header>`` lines, its text and a blank line.
    ``cleanup(cleanup(x)) == cleanup(x)``.
    """
    return SlideTextFormatter().render(segment(text, SegmentMode.HEADER))
