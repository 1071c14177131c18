from __future__ import annotations

import unicodedata
from typing import Literal

from cellchart.errors import GeometryError
from cellchart.geometry import Point, Rect


Horizontal = Literal["left", "center", "right"]
Vertical = Literal["top", "middle", "bottom"]


def text_width(text: str) -> int:
    """Number of terminal cells the text occupies, wide runes take two."""
    width = 0
    for ch in text:
        if unicodedata.combining(ch):
            continue
        width += 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
    return width


def align_rectangle(rect: Rect, area: Rect, horizontal: Horizontal, vertical: Vertical) -> Rect:
    """Moves area within rect according to the alignment."""
    if not area.inside(rect):
        raise GeometryError(f"cannot align area {area} inside rectangle {rect}, the area falls outside of the rectangle")

    gap = rect.dx - area.dx
    if horizontal == "center":
        gap //= 2
    elif horizontal == "left":
        gap = 0
    elif horizontal != "right":
        raise GeometryError(f"unsupported horizontal alignment {horizontal!r}")
    x0 = rect.x0 + gap

    gap = rect.dy - area.dy
    if vertical == "middle":
        gap //= 2
    elif vertical == "top":
        gap = 0
    elif vertical != "bottom":
        raise GeometryError(f"unsupported vertical alignment {vertical!r}")
    y0 = rect.y0 + gap
    return Rect(x0, y0, x0 + area.dx, y0 + area.dy)


def align_text(rect: Rect, text: str, horizontal: Horizontal, vertical: Vertical) -> Point:
    """Returns the start point of a single line of text aligned within rect.

    Text wider than the rectangle starts at its left edge.
    """
    for ch in text:
        if not ch.isprintable():
            raise GeometryError(f"the text contains non-printable character {ch!r}: {text!r}")

    width = min(text_width(text), rect.dx)
    area = Rect(rect.x0, rect.y0, rect.x0 + width, rect.y0 + 1)
    return align_rectangle(rect, area, horizontal, vertical).min
