"""Tap and drag detection for single-pointer input.

A press becomes a drag once the pointer has travelled at least the touch
slop away from where it went down; releasing before that is a tap. After a
session turns into a drag it can no longer be a tap, even if the pointer
comes back to where it started.

``classify`` holds the whole state machine as a pure function so it can be
tested without any input source. ``TapDragDetector`` keeps the session
state and turns the classified gestures into callbacks.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .types import Point

logger = logging.getLogger(__name__)


class GesturePhase(Enum):
    IDLE = "idle"
    AWAITING_SLOP = "awaiting_slop"
    DRAGGING = "dragging"


class PointerAction(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CANCEL = "cancel"


@dataclass(frozen=True)
class PointerEvent:
    """A raw event from the input source. UP and CANCEL carry no point."""

    action: PointerAction
    point: Optional[Point] = None

    def __post_init__(self) -> None:
        if self.point is None and self.action in (PointerAction.DOWN, PointerAction.MOVE):
            raise ValueError(f"Pointer {self.action.value} event needs a point")

    @classmethod
    def down(cls, x: float, y: float) -> "PointerEvent":
        return cls(PointerAction.DOWN, Point(x, y))

    @classmethod
    def move(cls, x: float, y: float) -> "PointerEvent":
        return cls(PointerAction.MOVE, Point(x, y))

    @classmethod
    def up(cls) -> "PointerEvent":
        return cls(PointerAction.UP)

    @classmethod
    def cancel(cls) -> "PointerEvent":
        return cls(PointerAction.CANCEL)


class GestureKind(Enum):
    TAP = "tap"
    DRAG_START = "drag_start"
    DRAG = "drag"
    DRAG_END = "drag_end"
    DRAG_CANCEL = "drag_cancel"


@dataclass(frozen=True)
class Gesture:
    kind: GestureKind
    point: Optional[Point] = None


def classify(
    phase: GesturePhase,
    event: PointerEvent,
    origin: Optional[Point],
    slop: float,
) -> Tuple[GesturePhase, List[Gesture]]:
    """Advance the tap/drag state machine by one pointer event.

    Args:
        phase: Current phase of the pointer session.
        event: The incoming pointer event.
        origin: Where the pointer went down (``None`` while idle).
        slop: Travel from ``origin`` at which a press becomes a drag.

    Returns:
        The next phase and the gestures to report, in order. DRAG_START is
        reported at the down position and is always followed by a DRAG at
        the position that crossed the slop. DRAG_END and DRAG_CANCEL carry
        no point; the caller knows the last position.
    """
    action = event.action
    if phase is GesturePhase.IDLE:
        if action is PointerAction.DOWN:
            return GesturePhase.AWAITING_SLOP, []
        return phase, []

    if phase is GesturePhase.AWAITING_SLOP:
        if action is PointerAction.MOVE:
            if origin is not None and (event.point - origin).distance() >= slop:
                return GesturePhase.DRAGGING, [
                    Gesture(GestureKind.DRAG_START, origin),
                    Gesture(GestureKind.DRAG, event.point),
                ]
            return phase, []
        if action is PointerAction.UP:
            return GesturePhase.IDLE, [Gesture(GestureKind.TAP, origin)]
        if action is PointerAction.CANCEL:
            return GesturePhase.IDLE, []
        return phase, []

    if action is PointerAction.MOVE:
        return phase, [Gesture(GestureKind.DRAG, event.point)]
    if action is PointerAction.UP:
        return GesturePhase.IDLE, [Gesture(GestureKind.DRAG_END)]
    if action is PointerAction.CANCEL:
        return GesturePhase.IDLE, [Gesture(GestureKind.DRAG_CANCEL)]
    return phase, []


PointCallback = Callable[[Point], None]


def _ignore(point: Point) -> None:
    pass


class TapDragDetector:
    """Feeds pointer events through ``classify`` and reports gestures.

    End and cancel callbacks receive the last known pointer position.
    """

    def __init__(
        self,
        slop: float,
        on_tap: PointCallback = _ignore,
        on_drag_start: PointCallback = _ignore,
        on_drag: PointCallback = _ignore,
        on_drag_end: PointCallback = _ignore,
        on_drag_cancel: PointCallback = _ignore,
    ):
        self.slop = slop
        self.on_tap = on_tap
        self.on_drag_start = on_drag_start
        self.on_drag = on_drag
        self.on_drag_end = on_drag_end
        self.on_drag_cancel = on_drag_cancel
        self._phase = GesturePhase.IDLE
        self._origin: Optional[Point] = None
        self._last_point: Optional[Point] = None

    @property
    def phase(self) -> GesturePhase:
        return self._phase

    @property
    def origin(self) -> Optional[Point]:
        return self._origin

    @property
    def last_point(self) -> Optional[Point]:
        return self._last_point

    @property
    def active(self) -> bool:
        return self._phase is not GesturePhase.IDLE

    def reset(self) -> None:
        """Drop the current session without reporting anything."""
        self._phase = GesturePhase.IDLE
        self._origin = None
        self._last_point = None

    def feed(self, event: PointerEvent) -> List[Gesture]:
        phase = self._phase
        action = event.action
        if phase is GesturePhase.IDLE:
            if action is PointerAction.DOWN:
                self._origin = event.point
                self._last_point = event.point
            else:
                logger.debug("Ignoring pointer %s with no active session", action.value)
        elif action is PointerAction.DOWN:
            logger.warning("Ignoring pointer down during an active session")
        elif action is PointerAction.MOVE:
            self._last_point = event.point

        next_phase, gestures = classify(phase, event, self._origin, self.slop)
        if next_phase is not phase:
            logger.debug("Gesture phase %s -> %s", phase.value, next_phase.value)
        self._phase = next_phase
        last_point = self._last_point
        if next_phase is GesturePhase.IDLE:
            self._origin = None
            self._last_point = None

        for gesture in gestures:
            self._dispatch(gesture, last_point)
        return gestures

    def _dispatch(self, gesture: Gesture, last_point: Optional[Point]) -> None:
        kind = gesture.kind
        if kind is GestureKind.TAP:
            self.on_tap(gesture.point)
        elif kind is GestureKind.DRAG_START:
            self.on_drag_start(gesture.point)
        elif kind is GestureKind.DRAG:
            self.on_drag(gesture.point)
        elif kind is GestureKind.DRAG_END:
            self.on_drag_end(last_point)
        elif kind is GestureKind.DRAG_CANCEL:
            self.on_drag_cancel(last_point)
