"""
Gesture events understood by the viewport controller.

Views convert toolkit events (wheel, mouse drag, double click, native pinch)
into these records, with positions and deltas already expressed in viewport
space.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class WheelGesture:
    """Zoom by `2 ** delta` around the anchor (x, y)."""
    x: float
    y: float
    delta: float

    @property
    def factor(self) -> float:
        return 2.0 ** self.delta


@dataclass(frozen=True)
class DragGesture:
    """Pan by (dx, dy); scale is unchanged."""
    dx: float
    dy: float


@dataclass(frozen=True)
class PinchGesture:
    """Zoom by `factor` around (x, y), then pan by (dx, dy)."""
    x: float
    y: float
    factor: float
    dx: float = 0.0
    dy: float = 0.0


Gesture = Union[WheelGesture, DragGesture, PinchGesture]


def wheel_delta(amount: float, step: float, ctrl: bool = False, ctrl_multiplier: float = 10.0) -> float:
    """
    Convert a raw wheel amount into a log2 zoom step.

    Positive amounts (scrolling up / away from the user) zoom in. Holding
    Ctrl multiplies the step.
    """
    delta = amount * step
    if ctrl:
        delta *= ctrl_multiplier
    return delta
