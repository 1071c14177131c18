from cellchart.axes import XDetails, XProperties, YDetails, YProperties, new_x_details, new_y_details
from cellchart.config import ChartOptions, chart_options_from_mapping, load_chart_options
from cellchart.errors import ChartError, GeometryError, InsufficientSpaceError, InvalidRangeError, OutOfBoundsError
from cellchart.frame import ChartFrame, FrameLayout
from cellchart.geometry import Point, Rect
from cellchart.labels import Label
from cellchart.mouse import ButtonFSM, MouseEvent, parse_mouse_event
from cellchart.scales import XScale, YScale, new_x_scale, new_y_scale
from cellchart.value import Value, new_text_value, new_value
from cellchart.zoom import Range, Tracker, TrackerConfig

__all__ = [
    "ButtonFSM",
    "ChartError",
    "ChartFrame",
    "ChartOptions",
    "FrameLayout",
    "GeometryError",
    "InsufficientSpaceError",
    "InvalidRangeError",
    "Label",
    "MouseEvent",
    "OutOfBoundsError",
    "Point",
    "Range",
    "Rect",
    "Tracker",
    "TrackerConfig",
    "Value",
    "XDetails",
    "XProperties",
    "XScale",
    "YDetails",
    "YProperties",
    "YScale",
    "chart_options_from_mapping",
    "load_chart_options",
    "new_text_value",
    "new_value",
    "new_x_details",
    "new_x_scale",
    "new_y_details",
    "new_y_scale",
    "parse_mouse_event",
]
