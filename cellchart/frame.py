from __future__ import annotations

from dataclasses import dataclass
import logging

import numpy as np

from cellchart.axes import (
    XDetails,
    XProperties,
    YDetails,
    YProperties,
    new_x_details,
    new_y_details,
    required_height,
)
from cellchart.config import ChartOptions
from cellchart.errors import InvalidRangeError
from cellchart.geometry import Rect
from cellchart.mouse import MouseEvent
from cellchart.scales import COL_MULT
from cellchart.value import ValueFormatter
from cellchart.zoom import Range, Tracker


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameLayout:
    """Everything needed to paint one frame of the line chart.

    segments maps series names to an (n, 4) array of line segments
    (start_x, start_y, end_x, end_y) in sub-cell coordinates of the graph area.
    """

    x_details: XDetails
    y_details: YDetails
    graph_area: Rect
    highlight: Range | None
    segments: dict[str, np.ndarray]


class ChartFrame:
    """Computes the axes and series geometry of a line chart on every draw.

    Callers serialize access, typically under the lock of the widget that
    owns the frame.
    """

    def __init__(self, options: ChartOptions | None = None, y_value_formatter: ValueFormatter | None = None) -> None:
        self._options = options or ChartOptions()
        self._y_value_formatter = y_value_formatter
        self._series: dict[str, np.ndarray] = {}
        self._tracker: Tracker | None = None

    @property
    def tracker(self) -> Tracker | None:
        return self._tracker

    def series(self, name: str, values: np.ndarray | list[float]) -> None:
        """Sets the values of the named series, replacing earlier values."""
        if not name:
            raise InvalidRangeError("the series name cannot be empty")
        arr = np.asarray(values, dtype=np.float64)
        if arr.ndim != 1:
            raise InvalidRangeError(f"series values must be one-dimensional, got shape {arr.shape}")
        self._series[name] = arr.copy()

    def layout(self, canvas_area: Rect) -> FrameLayout:
        opts = self._options
        x_max = max(0, self._max_points() - 1)
        req_x_height = required_height(x_max, opts.x_labels, opts.x_label_orientation)
        y_min, y_max = self._y_min_max()
        y_details = new_y_details(
            canvas_area,
            YProperties(
                min=y_min,
                max=y_max,
                req_x_height=req_x_height,
                scale_mode=opts.y_scale_mode,
                value_formatter=self._y_value_formatter,
            ),
        )

        x_min = 0
        if opts.x_axis_unscaled:
            graph_width = canvas_area.dx - y_details.width - 1
            x_min = max(0, x_max - (graph_width * COL_MULT - 1))
        x_details = new_x_details(
            canvas_area,
            XProperties(
                min=x_min,
                max=x_max,
                req_y_width=y_details.width,
                custom_labels=opts.x_labels,
                orientation=opts.x_label_orientation,
            ),
        )
        # Exactly graph_width cells, starting right of the X axis origin.
        graph_area = Rect(x_details.start.x + 1, y_details.start.y, canvas_area.x1, x_details.end.y)

        highlight: Range | None = None
        if opts.zoom_enabled:
            if self._tracker is None:
                self._tracker = Tracker(x_details, canvas_area, graph_area, opts.tracker_config())
            else:
                self._tracker.update(x_details, canvas_area, graph_area)
            x_details = self._tracker.active_axis()
            _, highlight = self._tracker.highlight()

        segments = {
            name: series_segments(values, x_details, y_details) for name, values in sorted(self._series.items())
        }
        return FrameLayout(
            x_details=x_details,
            y_details=y_details,
            graph_area=graph_area,
            highlight=highlight,
            segments=segments,
        )

    def mouse(self, event: MouseEvent) -> None:
        if self._tracker is None:
            LOGGER.debug("ignoring mouse event %s before the first layout", event)
            return
        self._tracker.mouse(event)

    def _max_points(self) -> int:
        return max((values.size for values in self._series.values()), default=0)

    def _y_min_max(self) -> tuple[float, float]:
        parts = list(self._series.values())
        if self._options.y_custom_scale is not None:
            parts.append(np.asarray(self._options.y_custom_scale, dtype=np.float64))
        if not parts:
            return 0.0, 0.0
        values = np.concatenate(parts)
        finite = values[np.isfinite(values)]
        if finite.size != values.size:
            LOGGER.debug("ignoring %d non-finite values when sizing the Y axis", values.size - finite.size)
        if finite.size == 0:
            return 0.0, 0.0
        return float(np.min(finite)), float(np.max(finite))


def series_segments(values: np.ndarray, x_details: XDetails, y_details: YDetails) -> np.ndarray:
    """Line segments between consecutive visible points of one series.

    Segments reaching outside of the X window of x_details, e.g. when zoomed,
    or touching a non-finite value are left out.
    """
    values = np.asarray(values, dtype=np.float64)
    if values.size <= 1:
        return np.zeros((0, 4), dtype=np.int64)

    lo = int(x_details.scale.min.raw)
    hi = int(x_details.scale.max.raw)
    idx = np.arange(1, values.size)
    keep = (idx >= lo + 1) & (idx <= hi) & np.isfinite(values[idx - 1]) & np.isfinite(values[idx])
    idx = idx[keep]

    start_x = x_details.scale.values_to_pixels(idx - 1)
    end_x = x_details.scale.values_to_pixels(idx)
    start_y = y_details.scale.values_to_pixels(values[idx - 1])
    end_y = y_details.scale.values_to_pixels(values[idx])
    return np.stack([start_x, start_y, end_x, end_y], axis=1).astype(np.int64)
