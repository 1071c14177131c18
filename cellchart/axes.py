from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, get_args

from cellchart.errors import InsufficientSpaceError, InvalidRangeError
from cellchart.geometry import Point, Rect
from cellchart.labels import Label, LabelOrientation, longest_label, x_labels, y_labels
from cellchart.scales import XScale, YScale, YScaleMode, new_x_scale, new_y_scale
from cellchart.value import NON_ZERO_DECIMALS, ValueFormatter, new_value


# Width of an axis line in cells.
AXIS_WIDTH = 1

LABEL_ORIENTATIONS: tuple[str, ...] = get_args(LabelOrientation)


@dataclass(frozen=True)
class YProperties:
    min: float
    max: float
    # Height required for the X axis and its labels.
    req_x_height: int
    scale_mode: YScaleMode = "anchored"
    value_formatter: ValueFormatter | None = None


@dataclass(frozen=True)
class YDetails:
    # Width in cells of the Y axis and its labels.
    width: int
    start: Point
    end: Point
    scale: YScale
    # Labels in increasing order of value.
    labels: tuple[Label, ...]
    properties: YProperties


@dataclass(frozen=True)
class XProperties:
    # Positions of the first and the last displayed value of the series.
    min: int
    max: int
    # Width required for the Y axis and its labels.
    req_y_width: int
    custom_labels: Mapping[int, str] = field(default_factory=dict)
    orientation: LabelOrientation = "horizontal"

    def __post_init__(self) -> None:
        if self.orientation not in LABEL_ORIENTATIONS:
            raise InvalidRangeError(
                f"unsupported label orientation {self.orientation!r}, expected one of {LABEL_ORIENTATIONS}"
            )
        object.__setattr__(self, "custom_labels", dict(self.custom_labels))


@dataclass(frozen=True)
class XDetails:
    start: Point
    end: Point
    scale: XScale
    labels: tuple[Label, ...]
    # Properties that produced these details, kept so the axis can be rebuilt
    # over a different min/max.
    properties: XProperties

    def __str__(self) -> str:
        return f"XDetails{{Scale:{self.scale}}}"


def required_width(min_value: float, max_value: float, formatter: ValueFormatter | None = None) -> int:
    """Estimated width of the Y axis and its labels.

    Labels in the middle of the axis can still turn out wider, new_y_details
    handles that once the canvas size is known.
    """
    labels = [
        Label(value=new_value(min_value, NON_ZERO_DECIMALS, formatter), position=Point(0, 0)),
        Label(value=new_value(max_value, NON_ZERO_DECIMALS, formatter), position=Point(0, 0)),
    ]
    return longest_label(labels) + AXIS_WIDTH


def required_height(
    max_value: int,
    custom_labels: Mapping[int, str] | None = None,
    orientation: LabelOrientation = "horizontal",
) -> int:
    """Height of the X axis and its labels."""
    if orientation == "horizontal":
        return AXIS_WIDTH + 1

    # Vertical labels stack their characters downwards, one per row.
    texts = [new_value(float(max_value), NON_ZERO_DECIMALS).text()]
    texts.extend((custom_labels or {}).values())
    return max(len(text) for text in texts) + AXIS_WIDTH


def new_y_details(canvas_area: Rect, properties: YProperties) -> YDetails:
    # One column is reserved for the line chart itself.
    max_width = canvas_area.dx - 1
    req = required_width(properties.min, properties.max, properties.value_formatter)
    if max_width < req:
        raise InsufficientSpaceError(
            f"the available max_width {max_width} is smaller than the reported required width {req}"
        )

    graph_height = canvas_area.dy - properties.req_x_height
    if graph_height < 2:
        raise InsufficientSpaceError(
            f"the canvas height {canvas_area.dy} leaves {graph_height} rows for the graph above an X axis of height "
            f"{properties.req_x_height}, minimum is 2"
        )
    scale = new_y_scale(
        properties.min,
        properties.max,
        graph_height,
        NON_ZERO_DECIMALS,
        properties.scale_mode,
        properties.value_formatter,
    )

    max_label_width = max_width - AXIS_WIDTH
    labels = y_labels(scale, max_label_width)

    # Narrower labels leave more columns to the graph, realign them once.
    widest = longest_label(labels)
    if widest < max_label_width:
        labels = y_labels(scale, widest)
        width = widest + AXIS_WIDTH
    else:
        width = max_width

    return YDetails(
        width=width,
        start=Point(width - 1, 0),
        end=Point(width - 1, graph_height),
        scale=scale,
        labels=tuple(labels),
        properties=properties,
    )


def new_x_details(canvas_area: Rect, properties: XProperties) -> XDetails:
    # One row is reserved for the line chart itself.
    max_height = canvas_area.dy - 1
    req_height = required_height(properties.max, properties.custom_labels, properties.orientation)
    if max_height < req_height:
        raise InsufficientSpaceError(
            f"the available max_height {max_height} is smaller than the reported required height {req_height}"
        )

    graph_width = canvas_area.dx - properties.req_y_width - 1
    if graph_width < 1:
        raise InsufficientSpaceError(
            f"the canvas width {canvas_area.dx} leaves no room for the graph next to a Y axis of width "
            f"{properties.req_y_width}"
        )
    scale = new_x_scale(properties.min, properties.max, graph_width, NON_ZERO_DECIMALS)

    # One column is reserved for the Y axis.
    graph_zero = Point(properties.req_y_width + 1, canvas_area.dy - req_height - 1)
    labels = x_labels(scale, graph_zero, properties.custom_labels, properties.orientation)

    axis_y = canvas_area.dy - req_height
    return XDetails(
        start=Point(properties.req_y_width, axis_y),
        end=Point(properties.req_y_width + graph_width, axis_y),
        scale=scale,
        labels=tuple(labels),
        properties=properties,
    )
