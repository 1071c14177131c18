from __future__ import annotations

import math
from typing import Callable

from cellchart.numbers import round_half_away
from cellchart.value import ValueFormatter


_NANOSECOND = 1e-9


def suffix(decimals: int, unit_suffix: str) -> ValueFormatter:
    """Formats values with a fixed number of decimals followed by unit_suffix."""
    return _suffix_with_transform(decimals, unit_suffix, None)


def round_with_suffix(unit_suffix: str) -> ValueFormatter:
    return _suffix_with_transform(0, unit_suffix, round_half_away)


def round_value(value: float) -> str:
    return round_with_suffix("")(value)


def single_unit_duration(unit_seconds: float, decimals: int) -> ValueFormatter:
    """Formats values measured in unit_seconds as a duration in one unit.

    The unit is the largest of ns, µs, ms, s, m, h and d that keeps the
    magnitude readable, e.g. 90 seconds render as "2m" with zero decimals.
    """
    decimals = max(0, decimals)

    def _format(value: float) -> str:
        if math.isnan(value):
            return ""
        return _duration_text(value * unit_seconds, decimals)

    return _format


def single_unit_seconds(seconds: float) -> str:
    return single_unit_duration(1.0, 0)(seconds)


def _suffix_with_transform(
    decimals: int,
    unit_suffix: str,
    transform: Callable[[float], float] | None,
) -> ValueFormatter:
    def _format(value: float) -> str:
        if math.isnan(value):
            return ""
        if transform is not None:
            value = transform(value)
        return f"{value:.{decimals}f}{unit_suffix}"

    return _format


def _duration_text(seconds: float, decimals: int) -> str:
    prefix = ""
    if seconds < 0:
        prefix = "-"
        seconds = -seconds

    nanos = int(seconds / _NANOSECOND)
    if nanos < 1000:
        return f"{prefix}{nanos}ns"
    if seconds * 1e6 < 1000:
        return f"{prefix}{seconds * 1e6:.{decimals}f}µs"
    if seconds * 1e3 < 1000:
        return f"{prefix}{seconds * 1e3:.{decimals}f}ms"
    if seconds < 60:
        return f"{prefix}{seconds:.{decimals}f}s"
    if seconds / 60 < 60:
        return f"{prefix}{seconds / 60:.{decimals}f}m"
    if seconds / 3600 < 24:
        return f"{prefix}{seconds / 3600:.{decimals}f}h"
    return f"{prefix}{seconds / 86400:.{decimals}f}d"
