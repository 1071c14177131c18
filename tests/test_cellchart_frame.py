from __future__ import annotations

import unittest

import numpy as np

from cellchart.config import ChartOptions
from cellchart.errors import InvalidRangeError
from cellchart.frame import ChartFrame
from cellchart.geometry import Point, Rect
from cellchart.mouse import MouseEvent
from cellchart.zoom import Range


CANVAS = Rect(0, 0, 20, 10)


class ChartFrameTests(unittest.TestCase):
    def test_layout_projects_series(self) -> None:
        frame = ChartFrame()
        frame.series("a", [0, 1, 2, 3])
        layout = frame.layout(CANVAS)

        y, x = layout.y_details, layout.x_details
        self.assertEqual(layout.graph_area, Rect(x.start.x + 1, y.start.y, CANVAS.x1, x.end.y))
        self.assertEqual(layout.graph_area.dx, x.scale.graph_width)
        self.assertEqual(int(x.scale.max.raw), 3)
        self.assertEqual(y.scale.max.raw, 3)

        segments = layout.segments["a"]
        self.assertEqual(segments.shape, (3, 4))
        self.assertEqual(segments[0].tolist()[:2], [0, y.scale.pixel_height - 1])
        self.assertEqual(
            segments[-1].tolist()[2:],
            [x.scale.value_to_pixel(3), y.scale.value_to_pixel(3)],
        )
        self.assertIsNone(layout.highlight)

    def test_segments_connect_consecutive_points(self) -> None:
        frame = ChartFrame()
        frame.series("a", np.array([5.0, 1.0, 4.0, 2.0]))
        segments = frame.layout(CANVAS).segments["a"]
        self.assertTrue(np.array_equal(segments[:-1, 2:], segments[1:, :2]))

    def test_nan_values_break_the_line(self) -> None:
        frame = ChartFrame()
        frame.series("a", [0.0, float("nan"), 2.0, 3.0])
        layout = frame.layout(CANVAS)
        self.assertEqual(layout.segments["a"].shape, (1, 4))
        self.assertEqual(layout.y_details.scale.max.raw, 3)

    def test_empty_frame(self) -> None:
        layout = ChartFrame().layout(CANVAS)
        self.assertEqual(layout.segments, {})
        self.assertEqual(int(layout.x_details.scale.max.raw), 0)

    def test_custom_y_scale_is_widened_by_data(self) -> None:
        frame = ChartFrame(ChartOptions(y_custom_scale=(0.0, 100.0)))
        frame.series("a", [1, 2])
        self.assertEqual(frame.layout(CANVAS).y_details.scale.max.raw, 100)
        frame.series("a", [1, 200])
        self.assertEqual(frame.layout(CANVAS).y_details.scale.max.raw, 200)

    def test_unscaled_x_axis_shows_trailing_points(self) -> None:
        frame = ChartFrame(ChartOptions(x_axis_unscaled=True))
        frame.series("a", np.arange(100, dtype=float))
        layout = frame.layout(CANVAS)

        graph_width = CANVAS.dx - layout.y_details.width - 1
        want_min = 99 - (graph_width * 2 - 1)
        self.assertEqual(int(layout.x_details.scale.min.raw), want_min)
        self.assertEqual(len(layout.segments["a"]), 99 - want_min)

    def test_mouse_before_layout_is_ignored(self) -> None:
        frame = ChartFrame()
        frame.mouse(MouseEvent(position=Point(5, 0), button="left"))
        self.assertIsNone(frame.tracker)

    def test_zoom_disabled(self) -> None:
        frame = ChartFrame(ChartOptions(zoom_enabled=False))
        frame.series("a", [0, 1, 2, 3])
        frame.layout(CANVAS)
        frame.mouse(MouseEvent(position=Point(10, 0), button="left"))
        self.assertIsNone(frame.tracker)
        self.assertIsNone(frame.layout(CANVAS).highlight)

    def test_press_highlights_graph_cells(self) -> None:
        frame = ChartFrame()
        frame.series("a", np.arange(50, dtype=float))
        graph = frame.layout(CANVAS).graph_area
        frame.mouse(MouseEvent(position=Point(graph.x0 + 1, 0), button="left"))
        self.assertEqual(frame.layout(CANVAS).highlight, Range(1, 2, 1))

    def test_scroll_zooms_x_axis(self) -> None:
        frame = ChartFrame(ChartOptions(scroll_step_percent=30))
        frame.series("a", np.arange(50, dtype=float))
        graph = frame.layout(CANVAS).graph_area
        frame.mouse(MouseEvent(position=Point(graph.x0 + graph.dx // 2, 0), button="wheel_up"))

        layout = frame.layout(CANVAS)
        self.assertIsNotNone(frame.tracker)
        self.assertTrue(frame.tracker.zoomed)
        lo, hi = int(layout.x_details.scale.min.raw), int(layout.x_details.scale.max.raw)
        self.assertLess(hi - lo, 49)
        self.assertEqual(len(layout.segments["a"]), hi - lo)

    def test_scroll_on_last_graph_column(self) -> None:
        frame = ChartFrame()
        frame.series("a", np.arange(50, dtype=float))
        graph = frame.layout(CANVAS).graph_area
        frame.mouse(MouseEvent(position=Point(graph.x1 - 1, 0), button="wheel_up"))
        layout = frame.layout(CANVAS)
        self.assertTrue(frame.tracker.zoomed)
        lo, hi = int(layout.x_details.scale.min.raw), int(layout.x_details.scale.max.raw)
        # The window shrinks mostly on the side away from the cursor.
        self.assertGreater(lo, 0)
        self.assertLess(hi - lo, 49)

    def test_drag_to_last_graph_column_zooms(self) -> None:
        frame = ChartFrame()
        frame.series("a", np.arange(50, dtype=float))
        graph = frame.layout(CANVAS).graph_area
        last = graph.x1 - 1
        frame.mouse(MouseEvent(position=Point(last - 4, 0), button="left"))
        frame.mouse(MouseEvent(position=Point(last, 0), button="left"))
        self.assertEqual(frame.layout(CANVAS).highlight, Range(graph.dx - 5, graph.dx, graph.dx - 1))
        frame.mouse(MouseEvent(position=Point(last, 0), button="release"))

        layout = frame.layout(CANVAS)
        self.assertTrue(frame.tracker.zoomed)
        self.assertIsNone(layout.highlight)
        lo, hi = int(layout.x_details.scale.min.raw), int(layout.x_details.scale.max.raw)
        self.assertGreater(lo, 0)
        self.assertLess(hi - lo, 49)

    def test_rejects_invalid_series(self) -> None:
        frame = ChartFrame()
        with self.assertRaises(InvalidRangeError):
            frame.series("", [1, 2])
        with self.assertRaises(InvalidRangeError):
            frame.series("a", [[1, 2], [3, 4]])


if __name__ == "__main__":
    unittest.main()
