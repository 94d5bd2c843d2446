"""Slide serialisers.

:meth:`SlideTextFormatter.render` writes slides back as plain song text, the
format stored by persistence and produced by ``cleanup``::

    # Verse 1:
    Line one
    Line two

    # Chorus:
    Hey

:meth:`SlideTextFormatter.render_listing` writes a numbered overview for
terminal output.

Usage::

    from songslides.formatter import SlideTextFormatter
    text = SlideTextFormatter().render(slides)
"""

from .models import Slide


class SlideTextFormatter:
    """Render a sequence of :class:`~songslides.models.Slide` to text."""

    def render(self, slides: list[Slide]) -> str:
        """Return song text for *slides*.

        Each slide is its ``# <header>`` lines, its trimmed text and one blank
        line.  Label slides are written as headers of their own.
        """
        parts: list[str] = []
        for slide in slides:
            if slide.is_label:
                if len(slide.span):  # the end sentinel has an empty span
                    parts.append(f"# {slide.text.strip()}\n")
                continue
            for header in slide.headers:
                parts.append(f"# {header.strip()}\n")
            parts.append(slide.text.strip() + "\n\n")
        return "".join(parts)

    def render_listing(self, slides: list[Slide]) -> str:
        """Return a numbered, human-readable overview of *slides*."""
        parts: list[str] = []
        for number, slide in enumerate(slides, start=1):
            span = f"{slide.span.start}-{slide.span.end}"
            if slide.is_label:
                parts.append(f"{number:>3}  [{slide.text}]  ({span})")
                continue
            parts.append(f"{number:>3}  ({span})")
            parts.extend(f"     # {header}" for header in slide.headers)
            parts.extend(f"     {line}" for line in slide.text.split("\n"))
        return "\n".join(parts) + "\n" if parts else ""
