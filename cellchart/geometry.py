from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def add(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def in_rect(self, rect: "Rect") -> bool:
        return rect.x0 <= self.x < rect.x1 and rect.y0 <= self.y < rect.y1


@dataclass(frozen=True)
class Rect:
    """Half-open rectangle of cells, points with x0 <= x < x1 and y0 <= y < y1."""

    x0: int
    y0: int
    x1: int
    y1: int

    @classmethod
    def from_size(cls, width: int, height: int) -> "Rect":
        if width < 0 or height < 0:
            raise ValueError(f"cannot convert negative size ({width}, {height}) to an area")
        return cls(0, 0, width, height)

    @property
    def min(self) -> Point:
        return Point(self.x0, self.y0)

    @property
    def max(self) -> Point:
        return Point(self.x1, self.y1)

    @property
    def dx(self) -> int:
        return self.x1 - self.x0

    @property
    def dy(self) -> int:
        return self.y1 - self.y0

    def empty(self) -> bool:
        return self.x0 >= self.x1 or self.y0 >= self.y1

    def contains(self, point: Point) -> bool:
        return point.in_rect(self)

    def inside(self, other: "Rect") -> bool:
        """Reports whether every cell of this rectangle is in other."""
        if self.empty():
            return True
        return other.x0 <= self.x0 and self.x1 <= other.x1 and other.y0 <= self.y0 and self.y1 <= other.y1

    def intersect(self, other: "Rect") -> "Rect":
        x0 = max(self.x0, other.x0)
        y0 = max(self.y0, other.y0)
        x1 = min(self.x1, other.x1)
        y1 = min(self.y1, other.y1)
        if x0 >= x1 or y0 >= y1:
            return Rect(0, 0, 0, 0)
        return Rect(x0, y0, x1, y1)
