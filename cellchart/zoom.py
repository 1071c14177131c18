from __future__ import annotations

import dataclasses
from dataclasses import dataclass
import logging

from cellchart.axes import XDetails, new_x_details
from cellchart.errors import GeometryError, InvalidRangeError, OutOfBoundsError
from cellchart.geometry import Rect
from cellchart.mouse import ButtonFSM, MouseEvent
from cellchart.numbers import split_by_ratio
from cellchart.value import Value


LOGGER = logging.getLogger(__name__)

DEFAULT_SCROLL_STEP = 10


@dataclass(frozen=True)
class TrackerConfig:
    # Percentage of the unzoomed X axis span a single scroll event zooms by.
    scroll_step_percent: int = DEFAULT_SCROLL_STEP

    def __post_init__(self) -> None:
        if not 1 <= self.scroll_step_percent <= 100:
            raise InvalidRangeError(
                f"invalid scroll_step_percent {self.scroll_step_percent}, must be a value in the range 1 <= value <= 100"
            )


@dataclass(frozen=True)
class Range:
    """Highlighted cells start <= x < end, relative to the graph area."""

    start: int = 0
    end: int = 0
    # The last coordinate added to the range.
    last_touched: int = 0

    def length(self) -> int:
        return abs(self.end - self.start)

    def empty(self) -> bool:
        return self.start == self.end

    def add_x(self, x: int) -> "Range":
        """Range after the cursor was dragged to x.

        A fast sweep across the whole range moves it instead of extending both
        ends; a change of direction shrinks the range back to the cursor.
        """
        start, end, last = self.start, self.end, self.last_touched
        if self.empty():
            start, end = x, x + 1
        elif x < start:
            if last == end - 1:
                end = start + 1
            start = x
        elif x >= end:
            if last == start:
                start = end - 1
            end = x + 1
        elif x > last:
            start = x
        elif x < last:
            end = x + 1
        return Range(start=start, end=end, last_touched=x)


@dataclass(frozen=True)
class RollInfo:
    # Boundaries of the base axis before the update.
    old_base_min: Value
    old_base_max: Value

    def rolled_by(self, base_min: Value, base_max: Value) -> int:
        """Shift of the base axis, zero unless both its ends moved equally."""
        min_diff = int(base_min.raw) - int(self.old_base_min.raw)
        max_diff = int(base_max.raw) - int(self.old_base_max.raw)
        if min_diff != max_diff:
            return 0
        return min_diff


class Tracker:
    """Tracks the highlight and zoom state of the X axis driven by the mouse.

    The tracker owns the base (unzoomed) X axis which the caller replaces on
    every draw through update, and the zoomed X axis, if any. Calls that fail
    leave the tracker unchanged.
    """

    def __init__(
        self,
        base_x: XDetails,
        canvas_area: Rect,
        graph_area: Rect,
        config: TrackerConfig | None = None,
    ) -> None:
        self._config = config or TrackerConfig()
        self._base_x: XDetails | None = None
        self._zoom_x: XDetails | None = None
        self._canvas_area = Rect(0, 0, 0, 0)
        self._graph_area = Rect(0, 0, 0, 0)
        self._fsm = ButtonFSM("left", graph_area)
        self._highlight = Range()
        self.update(base_x, canvas_area, graph_area)

    @property
    def zoomed(self) -> bool:
        return self._zoom_x is not None

    def update(self, base_x: XDetails, canvas_area: Rect, graph_area: Rect) -> None:
        if not graph_area.inside(canvas_area):
            raise GeometryError(f"the graph area {graph_area} doesn't fit inside the canvas area {canvas_area}")

        axis_changed = self._axis_changed(base_x)
        size_changed = self._size_changed(canvas_area, graph_area)
        zoom_x = self._zoom_x
        if (axis_changed or size_changed) and zoom_x is not None and self._base_x is not None:
            # The existing zoom may point outside of the new base axis.
            roll = RollInfo(old_base_min=self._base_x.scale.min, old_base_max=self._base_x.scale.max)
            lo, hi = normalize(
                base_x.scale.min,
                base_x.scale.max,
                int(zoom_x.scale.min.raw),
                int(zoom_x.scale.max.raw),
                roll,
            )
            if has_min_max(lo, hi, base_x):
                LOGGER.debug("zoom window %d..%d covers the whole base axis, unzooming", lo, hi)
                zoom_x = None
            else:
                LOGGER.debug("zoom window renormalized to %d..%d", lo, hi)
                zoom_x = new_zoomed_from_base(lo, hi, base_x, canvas_area)

        if size_changed:
            self._highlight = Range()
            self._fsm.update_area(graph_area)
        self._zoom_x = zoom_x
        self._base_x = base_x
        self._canvas_area = canvas_area
        self._graph_area = graph_area

    def mouse(self, event: MouseEvent) -> None:
        assert self._base_x is not None
        zoom_x = self._zoom_x
        if self._graph_area.contains(event.position) and event.button in ("wheel_up", "wheel_down"):
            zoom_x = zoom_to_scroll(
                event,
                self._canvas_area,
                self._graph_area,
                zoom_x or self._base_x,
                self._base_x,
                self._config.scroll_step_percent,
            )

        state, clicked = self._fsm.peek(event)
        highlight = self._highlight
        if state == "down":
            highlight = highlight.add_x(event.position.x - self._graph_area.x0)
        elif clicked:
            if highlight.length() >= 2:
                zoom_x = zoom_to_highlight(zoom_x or self._base_x, highlight, self._canvas_area)
            highlight = Range()
        else:
            highlight = Range()

        if zoom_x is not self._zoom_x:
            if zoom_x is None:
                LOGGER.debug("unzoomed")
            else:
                LOGGER.debug("zoomed to %d..%d", int(zoom_x.scale.min.raw), int(zoom_x.scale.max.raw))
        self._fsm.commit(state)
        self._highlight = highlight
        self._zoom_x = zoom_x

    def highlight(self) -> tuple[bool, Range | None]:
        if self._highlight.empty():
            return False, None
        return True, self._highlight

    def active_axis(self) -> XDetails:
        """The X axis to render, zoomed if a zoom is applied."""
        if self._zoom_x is not None:
            return self._zoom_x
        assert self._base_x is not None
        return self._base_x

    zoom = active_axis

    def _size_changed(self, canvas_area: Rect, graph_area: Rect) -> bool:
        return canvas_area != self._canvas_area or graph_area != self._graph_area

    def _axis_changed(self, base_x: XDetails) -> bool:
        if self._base_x is None:
            return True
        old = self._base_x
        return (base_x.properties, base_x.start, base_x.end) != (old.properties, old.start, old.end)


def normalize(
    base_min: Value,
    base_max: Value,
    min_value: int,
    max_value: int,
    roll: RollInfo | None = None,
) -> tuple[int, int]:
    """Fits the zoom window min_value..max_value into the base axis.

    A window that follows a rolled base axis is shifted along with it. The
    result always holds two distinct values unless the base axis has only one.
    """
    b_min = int(base_min.raw)
    b_max = int(base_max.raw)

    if roll is not None:
        rolled = roll.rolled_by(base_min, base_max)
        min_value += rolled
        max_value += rolled

    new_min = min(max(min_value, b_min), b_max)
    new_max = min(max(max_value, b_min), b_max)
    if new_min > new_max:
        new_min, new_max = new_max, new_min

    if new_min == new_max:
        return find_value_pair(new_min, new_max, base_min, base_max)
    return new_min, new_max


def find_value_pair(min_value: int, max_value: int, base_min: Value, base_max: Value) -> tuple[int, int]:
    """Two distinct values on the base axis closest to min_value and max_value."""
    b_min = int(base_min.raw)
    b_max = int(base_max.raw)

    for v in range(max_value, b_max + 1):
        if v > min_value:
            return min_value, v
    for v in range(min_value, b_min - 1, -1):
        if v < max_value:
            return v, max_value
    return b_min, b_max


def find_cell_pair(base: XDetails, min_cell: int, max_cell: int) -> tuple[Value, Value]:
    """Labels of two cells pointing at distinct values, near min_cell and max_cell."""
    scale = base.scale
    try:
        min_label = scale.cell_label(min_cell)
    except OutOfBoundsError as exc:
        raise OutOfBoundsError(f"unable to determine min label for cell {min_cell}: {exc}") from exc
    try:
        max_label = scale.cell_label(max_cell)
    except OutOfBoundsError as exc:
        raise OutOfBoundsError(f"unable to determine max label for cell {max_cell}: {exc}") from exc

    if max_label.raw - min_label.raw > 1:
        return min_label, max_label

    for cell in range(max_cell, scale.graph_width):
        label = scale.cell_label(cell)
        if label.raw > min_label.raw:
            return min_label, label
    for cell in range(min_cell, -1, -1):
        label = scale.cell_label(cell)
        if label.raw < max_label.raw:
            return label, max_label

    return scale.cell_label(0), scale.cell_label(scale.graph_width - 1)


def new_zoomed_from_base(min_value: int, max_value: int, base: XDetails, canvas_area: Rect) -> XDetails:
    properties = dataclasses.replace(base.properties, min=min_value, max=max_value)
    try:
        return new_x_details(canvas_area, properties)
    except ValueError as exc:
        raise type(exc)(f"failed to create zoomed X axis: {exc}") from exc


def has_min_max(min_value: int, max_value: int, base: XDetails) -> bool:
    return min_value == int(base.scale.min.raw) and max_value == int(base.scale.max.raw)


def zoom_to_highlight(base: XDetails, highlight: Range, canvas_area: Rect) -> XDetails:
    min_label, max_label = find_cell_pair(base, highlight.start, highlight.end - 1)
    return new_zoomed_from_base(int(min_label.raw), int(max_label.raw), base, canvas_area)


def zoom_to_scroll(
    event: MouseEvent,
    canvas_area: Rect,
    graph_area: Rect,
    curr: XDetails,
    base: XDetails,
    scroll_step_percent: int,
) -> XDetails | None:
    """Zoomed X axis after a scroll event, None when fully zoomed out.

    The zoom step is split between both ends of the current window in
    proportion to their distance from the value under the cursor.
    """
    if event.button == "wheel_up":
        direction = 1
        limits = curr
    elif event.button == "wheel_down":
        direction = -1
        limits = base
    else:
        raise InvalidRangeError(f"cannot zoom on button {event.button!r}, expected a scroll")

    cell_x = event.position.x - graph_area.x0
    try:
        target = curr.scale.cell_label(cell_x)
    except OutOfBoundsError as exc:
        raise OutOfBoundsError(f"unable to determine value at the point where scrolling occurred: {exc}") from exc

    curr_min = int(curr.scale.min.raw)
    curr_max = int(curr.scale.max.raw)
    size = int(base.scale.max.raw) - int(base.scale.min.raw)
    step = size * scroll_step_percent // 100
    left = max(1, int(target.raw) - curr_min)
    right = max(1, curr_max - int(target.raw))

    left_step, right_step = split_by_ratio(step, (left, right))
    new_min = curr_min + direction * left_step
    new_max = curr_max - direction * right_step

    lo, hi = normalize(limits.scale.min, limits.scale.max, new_min, new_max)
    if direction < 0 and has_min_max(lo, hi, limits):
        return None

    min_cell = limits.scale.value_to_cell(lo)
    max_cell = limits.scale.value_to_cell(hi)
    min_label, max_label = find_cell_pair(limits, min_cell, max_cell)
    lo, hi = int(min_label.raw), int(max_label.raw)
    if direction < 0:
        # Zooming out never narrows either end and always widens the window.
        lo, hi = min(lo, curr_min), max(hi, curr_max)
        if (lo, hi) == (curr_min, curr_max):
            lo, hi = widen_by_cell(limits, curr_min, curr_max)
        if has_min_max(lo, hi, limits):
            return None
    return new_zoomed_from_base(lo, hi, curr, canvas_area)


def widen_by_cell(base: XDetails, min_value: int, max_value: int) -> tuple[int, int]:
    """Extends min_value..max_value to the nearest distinct labels of base cells.

    An end already at the boundary of base stays there.
    """
    scale = base.scale
    b_min = int(scale.min.raw)
    b_max = int(scale.max.raw)

    lo = min_value
    if min_value > b_min:
        lo = b_min
        for cell in range(scale.value_to_cell(min_value), -1, -1):
            v = int(scale.cell_label(cell).raw)
            if v < min_value:
                lo = v
                break

    hi = max_value
    if max_value < b_max:
        hi = b_max
        for cell in range(scale.value_to_cell(max_value), scale.graph_width):
            v = int(scale.cell_label(cell).raw)
            if v > max_value:
                hi = v
                break
    return lo, hi
