from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping

from cellchart.align import align_text, text_width
from cellchart.errors import InsufficientSpaceError, OutOfBoundsError
from cellchart.geometry import Point, Rect
from cellchart.scales import XScale, YScale
from cellchart.value import Value, new_text_value


LabelOrientation = Literal["horizontal", "vertical"]

# Rows between two consecutive labels on the Y axis.
Y_LABEL_SPACING = 4
# Minimum cells between the starts of two labels on the X axis.
X_LABEL_MIN_SPACING = 3


@dataclass(frozen=True)
class Label:
    value: Value
    position: Point


def y_labels(scale: YScale, label_width: int) -> list[Label]:
    """Labels for the Y axis, ordered from the bottom row up.

    Labels are right-aligned in the label area of label_width cells. Rows
    whose labels would repeat the text of an earlier label are skipped.
    """
    if scale.graph_height < 2:
        raise InsufficientSpaceError(f"cannot place labels on a canvas with height {scale.graph_height}, minimum is 2")
    if label_width < 1:
        raise InsufficientSpaceError(f"cannot place labels in label area width {label_width}, minimum is 1")

    labels: list[Label] = []
    seen: set[str] = set()
    for y in range(scale.graph_height - 1, -1, -Y_LABEL_SPACING):
        label = _row_label(scale, y, label_width)
        text = label.value.text()
        if text not in seen:
            labels.append(label)
            seen.add(text)

    # With data present, always show at least the first and the last value.
    have_data = scale.min.rounded != 0 or scale.max.rounded != 0
    if len(labels) < 2 and have_data:
        labels.append(_row_label(scale, 0, label_width))
    return labels


def _row_label(scale: YScale, y: int, label_width: int) -> Label:
    try:
        value = scale.cell_label(y)
    except OutOfBoundsError as exc:
        raise OutOfBoundsError(f"unable to determine label value for row {y}: {exc}") from exc
    area = Rect(0, y, label_width, y + 1)
    return Label(value=value, position=align_text(area, value.text(), "right", "middle"))


@dataclass(frozen=True)
class XSpace:
    """Remaining space under the X axis while labels are being placed.

    cur and limit are relative to the graph zero, the space covers cells
    cur <= x < limit.
    """

    cur: int
    limit: int
    graph_zero: Point

    @classmethod
    def start(cls, graph_zero: Point, graph_width: int) -> "XSpace":
        return cls(cur=0, limit=graph_width, graph_zero=graph_zero)

    def remaining(self) -> int:
        return self.limit - self.cur

    def relative(self) -> Point:
        return Point(self.cur, self.graph_zero.y + 1)

    def label_pos(self) -> Point:
        # The first row below the graph zero is the axis, the second holds labels.
        return Point(self.cur + self.graph_zero.x, self.graph_zero.y + 2)

    def sub(self, size: int) -> "XSpace":
        if self.remaining() < size:
            raise InsufficientSpaceError(f"unable to subtract {size} from the start, not enough size in {self}")
        return XSpace(cur=self.cur + size, limit=self.limit, graph_zero=self.graph_zero)

    def __str__(self) -> str:
        return f"XSpace(size:{self.remaining()})-cur:{self.cur}-max:{self.limit}"


def x_labels(
    scale: XScale,
    graph_zero: Point,
    custom_labels: Mapping[int, str] | None = None,
    orientation: LabelOrientation = "horizontal",
) -> list[Label]:
    """Labels for the X axis in increasing order of value.

    Placement starts at the minimum value and continues while the next label
    fits in the remaining width. Labels never overlap and are never cut off.
    """
    custom_labels = custom_labels or {}
    space = XSpace.start(graph_zero, scale.graph_width)
    out: list[Label] = []

    last = int(scale.max.raw)
    next_value = int(scale.min.raw)
    while len(out) <= last:
        label, space = _col_label(scale, space, custom_labels, orientation)
        if label is None:
            break
        out.append(label)

        next_value += 1
        if next_value > last:
            break
        next_cell = scale.value_to_cell(next_value)
        skip = max(next_cell - space.relative().x, X_LABEL_MIN_SPACING)
        if space.remaining() <= skip:
            break
        space = space.sub(skip)
    return out


def _col_label(
    scale: XScale,
    space: XSpace,
    custom_labels: Mapping[int, str],
    orientation: LabelOrientation,
) -> tuple[Label | None, XSpace]:
    x = space.relative().x
    try:
        value = scale.cell_label(x)
    except OutOfBoundsError as exc:
        raise OutOfBoundsError(f"unable to determine label value for column {x}: {exc}") from exc

    custom = custom_labels.get(int(value.raw))
    if custom is not None:
        value = new_text_value(custom)

    # Vertical text only takes a single column.
    footprint = text_width(value.text()) if orientation == "horizontal" else 1
    if footprint > space.remaining():
        return None, space

    position = space.label_pos()
    return Label(value=value, position=position), space.sub(footprint)


def longest_label(labels: list[Label]) -> int:
    return max((text_width(label.value.text()) for label in labels), default=0)
