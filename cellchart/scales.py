from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, get_args

import numpy as np

from cellchart.errors import InvalidRangeError, OutOfBoundsError
from cellchart.numbers import round_half_away
from cellchart.value import Value, ValueFormatter, new_value


# Each terminal cell holds a grid of 2x4 addressable dots.
COL_MULT = 2
ROW_MULT = 4

YScaleMode = Literal["anchored", "adaptive"]
Y_SCALE_MODES: tuple[str, ...] = get_args(YScaleMode)


@dataclass(frozen=True)
class YScale:
    """Scale of the Y axis, Y coordinates grow down and positions grow up."""

    min: Value
    max: Value
    step: Value
    graph_height: int
    pixel_height: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pixel_height", self.graph_height * ROW_MULT)

    def pixel_to_value(self, y: int) -> float:
        pos = _y_to_position(y, self.pixel_height)
        if pos == 0:
            return self.min.rounded
        if pos == self.pixel_height - 1:
            return self.max.rounded
        v = float(pos) * self.step.rounded
        if self.min.raw != 0:
            v += self.min.raw
        return v

    def value_to_pixel(self, value: float) -> int:
        if self.step.rounded == 0:
            return 0
        v = float(value)
        if self.min.raw != 0:
            v -= self.min.raw
        pos = int(round_half_away(v / self.step.rounded))
        return _position_to_y(pos, self.pixel_height)

    def values_to_pixels(self, values: np.ndarray) -> np.ndarray:
        arr = np.asarray(values, dtype=np.float64)
        if self.step.rounded == 0:
            return np.zeros(arr.shape, dtype=np.int64)
        if self.min.raw != 0:
            arr = arr - self.min.raw
        pos = _round_half_away_array(arr / self.step.rounded)
        if pos.size and (np.min(pos) < 0 or np.max(pos) > self.pixel_height - 1):
            raise OutOfBoundsError(
                f"positions {int(np.min(pos))}..{int(np.max(pos))} out of bounds 0 <= pos <= {self.pixel_height - 1}"
            )
        return (self.pixel_height - 1) - pos

    def cell_label(self, y: int) -> Value:
        pos = _y_to_position(y, self.graph_height)
        pixel_y = _position_to_y(pos * ROW_MULT, self.pixel_height)
        v = self.pixel_to_value(pixel_y)
        return new_value(v, self.min.non_zero_decimals, self.min.formatter)

    def __str__(self) -> str:
        return f"YScale{{Min:{self.min}, Max:{self.max}, Step:{self.step}, GraphHeight:{self.graph_height}}}"


@dataclass(frozen=True)
class XScale:
    """Scale of the X axis, values are positions of points in the series."""

    min: Value
    max: Value
    step: Value
    graph_width: int
    pixel_width: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pixel_width", self.graph_width * COL_MULT)

    def pixel_to_value(self, x: int) -> float:
        if x < 0 or x >= self.pixel_width:
            raise OutOfBoundsError(f"invalid x coordinate {x}, must be in range 0 <= x < {self.pixel_width}")
        if x == 0:
            return self.min.rounded
        if x == self.pixel_width - 1:
            return self.max.rounded
        v = float(x) * self.step.rounded
        if self.min.raw > 0:
            v += self.min.raw
        return v

    def value_to_pixel(self, value: float) -> int:
        fv = float(value)
        if fv < self.min.raw or fv > self.max.rounded:
            raise OutOfBoundsError(
                f"invalid value {value}, must be in range {self.min.raw} <= v <= {self.max.rounded}"
            )
        if self.step.rounded == 0:
            return 0
        if self.min.raw > 0:
            fv -= self.min.raw
        return int(round_half_away(fv / self.step.rounded))

    def values_to_pixels(self, values: np.ndarray) -> np.ndarray:
        arr = np.asarray(values, dtype=np.float64)
        if arr.size and (np.min(arr) < self.min.raw or np.max(arr) > self.max.rounded):
            raise OutOfBoundsError(
                f"values {np.min(arr)}..{np.max(arr)} outside of range {self.min.raw} <= v <= {self.max.rounded}"
            )
        if self.step.rounded == 0:
            return np.zeros(arr.shape, dtype=np.int64)
        if self.min.raw > 0:
            arr = arr - self.min.raw
        return _round_half_away_array(arr / self.step.rounded)

    def value_to_cell(self, value: float) -> int:
        return self.value_to_pixel(value) // COL_MULT

    def cell_label(self, x: int) -> Value:
        """Value of the label under cell x, rounded to the nearest position."""
        v = self.pixel_to_value(x * COL_MULT)
        return new_value(round_half_away(v), self.min.non_zero_decimals)

    def __str__(self) -> str:
        return f"XScale{{Min:{self.min}, Max:{self.max}, Step:{self.step}, GraphWidth:{self.graph_width}}}"


def new_y_scale(
    min_value: float,
    max_value: float,
    graph_height: int,
    non_zero_decimals: int,
    mode: YScaleMode = "anchored",
    formatter: ValueFormatter | None = None,
) -> YScale:
    if max_value < min_value:
        raise InvalidRangeError(f"max({max_value}) cannot be less than min({min_value})")
    if graph_height < 1:
        raise InvalidRangeError(f"graph_height cannot be less than 1, got {graph_height}")

    if mode == "anchored":
        if min_value > 0:
            min_value = 0.0
        if max_value < 0:
            max_value = 0.0
    elif mode == "adaptive":
        # Constant series still anchor at zero so there is a range to draw.
        if min_value > 0 and min_value == max_value:
            min_value = 0.0
        if max_value < 0 and min_value == max_value:
            max_value = 0.0
    else:
        raise InvalidRangeError(f"unsupported y scale mode {mode!r}, expected one of {Y_SCALE_MODES}")

    # One pixel is reserved for the zero value.
    usable_pixels = graph_height * ROW_MULT - 1
    step = new_value((max_value - min_value) / float(usable_pixels), non_zero_decimals)
    return YScale(
        min=new_value(min_value, non_zero_decimals, formatter),
        max=new_value(max_value, non_zero_decimals, formatter),
        step=step,
        graph_height=graph_height,
    )


def new_x_scale(min_value: int, max_value: int, graph_width: int, non_zero_decimals: int) -> XScale:
    if min_value < 0 or max_value < 0:
        raise InvalidRangeError(f"invalid min:{min_value} or max:{max_value}, the values must not be negative")
    if min_value > max_value:
        raise InvalidRangeError(f"invalid min:{min_value}, max:{max_value}, must be min <= max")
    if graph_width < 1:
        raise InvalidRangeError(f"graph_width must be at least 1, got {graph_width}")

    usable_pixels = graph_width * COL_MULT - 1
    step = new_value(float(max_value - min_value) / float(usable_pixels), non_zero_decimals)
    return XScale(
        min=new_value(float(min_value), non_zero_decimals),
        max=new_value(float(max_value), non_zero_decimals),
        step=step,
        graph_width=graph_width,
    )


def _position_to_y(pos: int, height: int) -> int:
    # Positions grow up, Y coordinates grow down.
    top = height - 1
    if pos < 0 or pos > top:
        raise OutOfBoundsError(f"position {pos} out of bounds 0 <= pos <= {top}")
    return top - pos


def _y_to_position(y: int, height: int) -> int:
    top = height - 1
    if y < 0 or y > top:
        raise OutOfBoundsError(f"y coordinate {y} out of bounds 0 <= y <= {top}")
    return top - y


def _round_half_away_array(values: np.ndarray) -> np.ndarray:
    whole = np.trunc(values)
    bump = np.where(np.abs(values - whole) >= 0.5, np.sign(values), 0.0)
    return (whole + bump).astype(np.int64)
