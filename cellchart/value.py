from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Callable, TypeAlias

from cellchart.numbers import round_to_non_zero_places


ValueFormatter: TypeAlias = Callable[[float], str]

# Default precision of values displayed on the chart, the number of non-zero
# decimal places values are rounded up to.
NON_ZERO_DECIMALS = 2

_MAX_FIXED_WIDTH = 10


@dataclass(frozen=True)
class Value:
    """One displayed quantity on an axis.

    `raw` is the unmodified value and `rounded` the value rounded up to
    `non_zero_decimals` non-zero decimal places, `zero_decimals` counts the
    zero decimal places skipped on the way. Values built by `new_text_value`
    only carry `label_text`, their numbers are NaN.
    """

    raw: float
    rounded: float
    zero_decimals: int = 0
    non_zero_decimals: int = 0
    formatter: ValueFormatter | None = None
    label_text: str | None = None

    def text(self) -> str:
        if self.label_text is not None:
            return self.label_text
        if self.formatter is not None:
            return self.formatter(self.rounded)
        return _default_text(self.rounded, self.non_zero_decimals + self.zero_decimals)

    def __str__(self) -> str:
        return f"Value{{Round({self.raw}) => {self.rounded}}}"


def new_value(raw: float, non_zero_decimals: int, formatter: ValueFormatter | None = None) -> Value:
    rounded, zero_decimals = round_to_non_zero_places(float(raw), non_zero_decimals)
    return Value(
        raw=float(raw),
        rounded=rounded,
        zero_decimals=zero_decimals,
        non_zero_decimals=non_zero_decimals,
        formatter=formatter,
    )


def new_text_value(text: str) -> Value:
    return Value(raw=math.nan, rounded=math.nan, label_text=text)


def _default_text(value: float, decimals: int) -> str:
    if not math.isfinite(value) or math.ceil(value) == value:
        return f"{value:.0f}"
    out = f"{value:.{decimals}f}"
    if len(out) > _MAX_FIXED_WIDTH:
        out = f"{value:.2e}"
    return out
