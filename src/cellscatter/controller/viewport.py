"""
Viewport Controller
===================
Single writer of the view transform.

Why is this file needed?
------------------------
1. Gestures: wheel, drag, double click and pinch events arrive here as gesture
   records and are turned into a new ViewTransform (zoom clamped, pan free).
2. Reset: "back to overview" is animated over a short, fixed duration. Each
   animation frame recomputes the interpolated transform from the clock, and any
   new gesture cancels the animation (last writer wins).
3. Decoupling: the scene never gets called from here. Every change is published
   through Qt signals; views subscribe and redraw.

Classes:
    ViewportController: Owns the transform and publishes it.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from cellscatter.config import ViewerSettings
from cellscatter.controller.gestures import DragGesture, Gesture, PinchGesture, WheelGesture
from cellscatter.controller.interpolate import ease_cubic_in_out, zoom_transition
from cellscatter.model.transform import IDENTITY, ViewTransform, clamp_scale

logger = logging.getLogger(__name__)


class ViewportController(QObject):
    """
    Owns the current ViewTransform.

    Signals:
        transform_changed(ViewTransform): After every accepted gesture and
            every reset animation frame.
        scale_changed(float): Alongside transform_changed, also when the
            scale did not change (pan). Observers must tolerate repeats.
        transition_finished(): When a reset animation reaches its target.
    """
    transform_changed = Signal(object)
    scale_changed = Signal(float)
    transition_finished = Signal()

    def __init__(
        self,
        extent: tuple[float, float, float, float],
        settings: Optional[ViewerSettings] = None,
        clock: Callable[[], float] = time.monotonic,
        parent: Optional[QObject] = None,
    ) -> None:
        """
        Args:
            extent: Visible viewport extent (x0, y0, x1, y1) in viewport space.
                The reset animation pivots around its center.
            settings: Zoom bounds and reset behavior.
            clock: Seconds-based monotonic clock, injectable for tests.
            parent: Qt parent object.
        """
        super().__init__(parent)
        self.settings = settings or ViewerSettings()
        self._extent = extent
        self._clock = clock

        self._transform: ViewTransform = IDENTITY.scaled_to(
            1.0, self.settings.min_zoom, self.settings.max_zoom
        )

        # in-flight reset animation
        self._transition: Optional[Callable[[float], ViewTransform]] = None
        self._transition_started: float = 0.0

        self._timer = QTimer(self)
        self._timer.setInterval(self.settings.frame_interval_ms)
        self._timer.timeout.connect(self.advance_transition)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def transform(self) -> ViewTransform:
        return self._transform

    @property
    def k(self) -> float:
        return self._transform.scale

    @property
    def is_transitioning(self) -> bool:
        return self._transition is not None

    def canonical_transform(self) -> ViewTransform:
        """The overview transform `reset()` animates to."""
        scale = clamp_scale(self.settings.reset_scale, self.settings.min_zoom, self.settings.max_zoom)
        return ViewTransform(0.0, 0.0, scale)

    def on_gesture(self, gesture: Gesture) -> ViewTransform:
        """
        Apply a gesture and publish the resulting transform.

        Out-of-range zoom requests are clamped, never rejected. A running reset
        animation is cancelled first.

        Raises:
            TypeError: If `gesture` is not one of the known gesture records.
        """
        self._cancel_transition()

        lo, hi = self.settings.min_zoom, self.settings.max_zoom
        current = self._transform

        if isinstance(gesture, WheelGesture):
            new = current.zoomed_at(gesture.factor, gesture.x, gesture.y, lo, hi)
        elif isinstance(gesture, DragGesture):
            new = current.translated(gesture.dx, gesture.dy)
        elif isinstance(gesture, PinchGesture):
            new = current.zoomed_at(gesture.factor, gesture.x, gesture.y, lo, hi).translated(gesture.dx, gesture.dy)
        else:
            raise TypeError(f"Unsupported gesture: {type(gesture).__name__}")

        logger.debug(f"{type(gesture).__name__} -> {new}")
        self._publish(new)
        return new

    def reset(self) -> ViewTransform:
        """
        Start the animated return to the overview.

        Returns:
            The canonical target transform (the same value on every call).
        """
        target = self.canonical_transform()
        self._cancel_transition()
        logger.info(f"Resetting zoom to {target}")

        if self.settings.reset_duration_ms == 0 or self._transform == target:
            self._publish(target)
            self.transition_finished.emit()
            return target

        self._transition = zoom_transition(self._transform, target, self._extent)
        self._transition_started = self._clock()
        self._timer.start()
        return target

    def advance_transition(self) -> None:
        """Move the reset animation to the clock's current time (one frame)."""
        if self._transition is None:
            return

        elapsed_ms = (self._clock() - self._transition_started) * 1000.0
        t = elapsed_ms / self.settings.reset_duration_ms

        if t >= 1.0:
            final = self._transition(1.0)
            self._transition = None
            self._timer.stop()
            self._publish(final)
            self.transition_finished.emit()
            return

        self._publish(self._transition(ease_cubic_in_out(t)))

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _cancel_transition(self) -> None:
        if self._transition is not None:
            logger.debug("Reset animation interrupted.")
        self._transition = None
        self._timer.stop()

    def _publish(self, transform: ViewTransform) -> None:
        self._transform = transform
        self.transform_changed.emit(transform)
        self.scale_changed.emit(transform.scale)
