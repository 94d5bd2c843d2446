"""Map cursor offsets in the source text back to slides."""

from bisect import bisect_right

from .models import Slide


class PositionIndex:
    """Binary-search index over the spans of one segmentation.

    Slides with empty spans (the end sentinel) are left out.  Build a new
    index whenever the slide sequence is replaced.
    """

    def __init__(self, slides: list[Slide]):
        self.slides = [s for s in slides if len(s.span)]
        self._starts = [s.span.start for s in self.slides]

    def locate(self, offset: int) -> Slide | None:
        """Return the slide whose span contains *offset*, or None in a gap."""
        i = bisect_right(self._starts, offset) - 1
        if i < 0:
            return None
        slide = self.slides[i]
        return slide if offset in slide.span else None

    def __len__(self) -> int:
        return len(self.slides)


def locate(slides: list[Slide], offset: int) -> Slide | None:
    """Convenience wrapper: build a :class:`PositionIndex` and look up *offset*."""
    return PositionIndex(slides).locate(offset)
