from __future__ import annotations


class ChartError(ValueError):
    """Base class for failures reported by the axis/scale/zoom engine."""


class InvalidRangeError(ChartError):
    pass


class OutOfBoundsError(ChartError):
    pass


class InsufficientSpaceError(ChartError):
    """The canvas cannot fit the axes, their labels and at least one graph cell."""


class GeometryError(ChartError):
    pass
