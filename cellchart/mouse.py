from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Literal, Mapping, get_args

from cellchart.geometry import Point, Rect


LOGGER = logging.getLogger(__name__)

MouseButton = Literal[
    "left",
    "right",
    "middle",
    "release",
    "wheel_up",
    "wheel_down",
]
MOUSE_BUTTONS: tuple[str, ...] = get_args(MouseButton)

ButtonState = Literal["up", "down"]


@dataclass(frozen=True)
class MouseEvent:
    """Mouse event in canvas cell coordinates."""

    position: Point
    button: MouseButton


def parse_mouse_event(payload: object) -> MouseEvent | None:
    """Parse a normalized `{"x", "y", "button"}` payload into a MouseEvent.

    Returns None for payloads that are not mouse events this engine tracks.
    """
    if not isinstance(payload, Mapping):
        return None
    button = payload.get("button")
    if button not in MOUSE_BUTTONS:
        LOGGER.debug("dropping mouse payload with unsupported button %r", button)
        return None
    x = payload.get("x")
    y = payload.get("y")
    if isinstance(x, bool) or isinstance(y, bool) or not isinstance(x, int) or not isinstance(y, int):
        LOGGER.debug("dropping mouse payload with non-integer position (%r, %r)", x, y)
        return None
    return MouseEvent(position=Point(x, y), button=button)


def button_transition(
    state: ButtonState,
    event: MouseEvent,
    button: MouseButton,
    area: Rect,
) -> tuple[ButtonState, bool]:
    """Next state of the tracked button and whether the event completed a click.

    A click is a press of button followed by a release, both inside area.
    Terminals report a drag with the button held as repeated presses, so
    presses inside the area keep the button down.
    """
    inside = area.contains(event.position)
    if state == "up":
        if event.button == button and inside:
            return "down", False
        return "up", False

    if event.button == button:
        return ("down", False) if inside else ("up", False)
    if event.button == "release":
        return "up", inside
    return "up", False


class ButtonFSM:
    """Tracks one mouse button within an area of the canvas."""

    def __init__(self, button: MouseButton, area: Rect) -> None:
        self._button = button
        self._area = area
        self._state: ButtonState = "up"

    @property
    def state(self) -> ButtonState:
        return self._state

    @property
    def area(self) -> Rect:
        return self._area

    def peek(self, event: MouseEvent) -> tuple[ButtonState, bool]:
        return button_transition(self._state, event, self._button, self._area)

    def commit(self, state: ButtonState) -> None:
        self._state = state

    def update_area(self, area: Rect) -> None:
        self._area = area
