from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
import tomllib
from typing import Mapping

from cellchart.axes import LABEL_ORIENTATIONS
from cellchart.errors import InvalidRangeError
from cellchart.labels import LabelOrientation
from cellchart.scales import Y_SCALE_MODES, YScaleMode
from cellchart.zoom import DEFAULT_SCROLL_STEP, TrackerConfig


LOGGER = logging.getLogger(__name__)

CONFIG_TABLE = "linechart"


@dataclass(frozen=True)
class ChartOptions:
    """Options of the line chart engine, validated once on construction.

    scroll_step_percent: share of the unzoomed X axis one scroll event zooms by.
    zoom_enabled: whether mouse events highlight and zoom the X axis.
    x_label_orientation: text flow of the labels under the X axis.
    y_scale_mode: "anchored" keeps zero on the Y axis, "adaptive" fits the data.
    x_labels: custom X labels keyed by the position of the value in the series.
    y_custom_scale: fixed (min, max) of the Y axis, widened by data outside it.
    x_axis_unscaled: show only the trailing points that fit the graph width
        instead of compressing the whole series.
    """

    scroll_step_percent: int = DEFAULT_SCROLL_STEP
    zoom_enabled: bool = True
    x_label_orientation: LabelOrientation = "horizontal"
    y_scale_mode: YScaleMode = "anchored"
    x_labels: Mapping[int, str] = field(default_factory=dict)
    y_custom_scale: tuple[float, float] | None = None
    x_axis_unscaled: bool = False

    def __post_init__(self) -> None:
        # Raises on an out of range step.
        TrackerConfig(scroll_step_percent=self.scroll_step_percent)
        if self.x_label_orientation not in LABEL_ORIENTATIONS:
            raise InvalidRangeError(
                f"unsupported x_label_orientation {self.x_label_orientation!r}, expected one of {LABEL_ORIENTATIONS}"
            )
        if self.y_scale_mode not in Y_SCALE_MODES:
            raise InvalidRangeError(f"unsupported y_scale_mode {self.y_scale_mode!r}, expected one of {Y_SCALE_MODES}")
        for position in self.x_labels:
            if position < 0:
                raise InvalidRangeError(f"x_labels positions must not be negative, got {position}")
        if self.y_custom_scale is not None:
            lo, hi = self.y_custom_scale
            if hi < lo:
                raise InvalidRangeError(f"y_custom_scale max({hi}) cannot be less than min({lo})")
        object.__setattr__(self, "x_labels", dict(self.x_labels))

    def tracker_config(self) -> TrackerConfig:
        return TrackerConfig(scroll_step_percent=self.scroll_step_percent)


def load_chart_options(path: str | Path) -> ChartOptions:
    """Reads ChartOptions from the [linechart] table of a TOML file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart config not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    table = raw.get(CONFIG_TABLE, {})
    if not isinstance(table, dict):
        raise InvalidRangeError(f"[{CONFIG_TABLE}] must be a table")
    return chart_options_from_mapping(table)


def chart_options_from_mapping(table: Mapping[str, object]) -> ChartOptions:
    known = set(ChartOptions.__dataclass_fields__)
    unknown = sorted(set(table) - known)
    if unknown:
        raise InvalidRangeError(f"unknown chart options: {', '.join(unknown)}")

    kwargs: dict[str, object] = {}
    if "scroll_step_percent" in table:
        kwargs["scroll_step_percent"] = _coerce_int(table["scroll_step_percent"], "scroll_step_percent")
    for name in ("zoom_enabled", "x_axis_unscaled"):
        if name in table:
            kwargs[name] = _coerce_bool(table[name], name)
    for name in ("x_label_orientation", "y_scale_mode"):
        if name in table:
            kwargs[name] = _coerce_str(table[name], name)
    if "x_labels" in table:
        kwargs["x_labels"] = _coerce_labels(table["x_labels"], "x_labels")
    if "y_custom_scale" in table:
        kwargs["y_custom_scale"] = _coerce_min_max(table["y_custom_scale"], "y_custom_scale")

    options = ChartOptions(**kwargs)  # type: ignore[arg-type]
    LOGGER.debug("loaded chart options: %s", options)
    return options


def _coerce_int(value: object, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRangeError(f"{field_name} must be an integer")
    return value


def _coerce_bool(value: object, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise InvalidRangeError(f"{field_name} must be a boolean")
    return value


def _coerce_str(value: object, field_name: str) -> str:
    if not isinstance(value, str):
        raise InvalidRangeError(f"{field_name} must be a string")
    return value


def _coerce_labels(value: object, field_name: str) -> dict[int, str]:
    if not isinstance(value, dict):
        raise InvalidRangeError(f"{field_name} must be a table")
    out: dict[int, str] = {}
    for key, text in value.items():
        try:
            position = int(key)
        except ValueError as exc:
            raise InvalidRangeError(f"{field_name} keys must be integer positions, got {key!r}") from exc
        if not isinstance(text, str):
            raise InvalidRangeError(f"{field_name} entries must be strings")
        out[position] = text
    return out


def _coerce_min_max(value: object, field_name: str) -> tuple[float, float]:
    if not isinstance(value, list) or len(value) != 2:
        raise InvalidRangeError(f"{field_name} must be a [min, max] list")
    lo, hi = value
    for item in (lo, hi):
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            raise InvalidRangeError(f"{field_name} entries must be numbers")
    return (float(lo), float(hi))
