from __future__ import annotations

import math


def round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero."""
    if not math.isfinite(value):
        return value
    whole = float(math.trunc(value))
    if abs(value - whole) >= 0.5:
        whole += math.copysign(1.0, value)
    return whole


def round_to_non_zero_places(value: float, places: int) -> tuple[float, int]:
    """Round value up to `places` non-zero decimal places.

    Returns the rounded value and the number of zero decimal places that were
    skipped before the first non-zero one, e.g. 0.00012345 with two places
    becomes (0.00013, 3).
    """
    if value == 0 or not math.isfinite(value):
        return value, 0

    fraction = _fraction_part(value)
    if fraction == 0:
        return value, 0
    zero_places = _zero_places(fraction)
    if places == 0:
        return value, zero_places

    mult = float(10**zero_places * 10 ** abs(places))
    return math.ceil(value * mult) / mult, zero_places


def split_by_ratio(number: int, ratio: tuple[int, int]) -> tuple[int, int]:
    """Split number into two parts proportional to ratio."""
    left, right = ratio
    if number == 0 or left == 0 or right == 0:
        return (0, 0)
    per_unit = float(number) / float(left + right)
    return (int(round_half_away(per_unit * left)), int(round_half_away(per_unit * right)))


def _fraction_part(value: float) -> float:
    sign = 1.0
    if value < 0:
        value = -value
        sign = -1.0
    return (value - math.floor(value)) * sign


def _zero_places(fraction: float) -> int:
    v = abs(fraction)
    places = 0
    while v < 0.1:
        v *= 10
        places += 1
    return places
