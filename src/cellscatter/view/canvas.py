"""
Scatter View
============
The QGraphicsView hosting the scatter scene.

Why is this file needed?
------------------------
1. Input: it is the only place that sees raw Qt wheel, mouse and pinch events.
   They are converted to viewport-space gestures and handed to the
   ViewportController. The view never changes its own transform in response.
2. Output: it subscribes to the controller's signals. A new transform moves the
   view layer; a new zoom factor recomputes the semantic unit and, only when
   the unit changed, re-renders the scene.
3. viewBox: the domain rectangle is always fitted into the widget, so the
   pan/zoom group is the only thing that reflows the plot.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QEvent, QPointF, Qt
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QFrame, QGraphicsView, QPinchGesture, QWidget

from cellscatter.config import WHEEL_CTRL_MULTIPLIER, WHEEL_STEP, ViewerSettings
from cellscatter.controller.gestures import DragGesture, PinchGesture, WheelGesture, wheel_delta
from cellscatter.controller.viewport import ViewportController
from cellscatter.model.context import PlotContext
from cellscatter.model.semantic import SemanticScale
from cellscatter.view.scatter_scene import ScatterScene
from cellscatter.view.scene import SceneRenderer

logger = logging.getLogger(__name__)


class ScatterView(QGraphicsView):
    def __init__(
        self,
        context: PlotContext,
        settings: Optional[ViewerSettings] = None,
        controller: Optional[ViewportController] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.context = context
        self.settings = settings or ViewerSettings()

        d = context.domain
        self.controller = controller or ViewportController(
            extent=(d.min_x, d.min_y, d.max_x, d.max_y),
            settings=self.settings,
            parent=self,
        )
        self.semantic = SemanticScale(d, max_zoom=self.settings.max_zoom)
        self.renderer = SceneRenderer(context)
        self.scatter_scene = ScatterScene(self.renderer, self)
        self.setScene(self.scatter_scene)

        self._configure_view()

        # drag state: last pointer position in viewport space
        self._drag_last: Optional[tuple[float, float]] = None

        self.controller.transform_changed.connect(self.scatter_scene.set_view_transform)
        self.controller.scale_changed.connect(self._on_scale_changed)

        # initial render
        self.scatter_scene.set_view_transform(self.controller.transform)
        self.semantic.update(self.controller.k)
        self.scatter_scene.redraw(self.semantic.unit)

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def unit(self) -> float:
        return self.semantic.unit

    def reset_zoom(self) -> None:
        self.controller.reset()

    def detach(self) -> None:
        """Drop transient state before the view is destroyed."""
        self.controller.transform_changed.disconnect(self.scatter_scene.set_view_transform)
        self.controller.scale_changed.disconnect(self._on_scale_changed)
        self.scatter_scene.detach()

    def to_viewport_space(self, pos: QPointF) -> tuple[float, float]:
        """Widget position -> viewport space (scene coordinates before the flip)."""
        scene_pos = self.mapToScene(pos.toPoint())
        return scene_pos.x(), -scene_pos.y()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _configure_view(self) -> None:
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.NoAnchor)
        self.setResizeAnchor(QGraphicsView.ViewportAnchor.NoAnchor)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setViewportUpdateMode(QGraphicsView.ViewportUpdateMode.FullViewportUpdate)
        self.setMouseTracking(True)
        # touchscreen pinch arrives as a QPinchGesture on the viewport
        self.viewport().setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.viewport().grabGesture(Qt.GestureType.PinchGesture)

    def _fit_domain(self) -> None:
        self.fitInView(self.scatter_scene.sceneRect(), Qt.AspectRatioMode.KeepAspectRatio)

    def _on_scale_changed(self, k: float) -> None:
        # pan gestures repeat the same k
        if self.semantic.update(k):
            self.scatter_scene.redraw(self.semantic.unit)

    # ---- Qt events ----

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._fit_domain()

    def showEvent(self, event) -> None:
        super().showEvent(event)
        self._fit_domain()

    def wheelEvent(self, event) -> None:
        pixel = event.pixelDelta().y()
        amount = pixel if pixel else event.angleDelta().y()
        if amount == 0:
            event.ignore()
            return
        ctrl = bool(event.modifiers() & Qt.KeyboardModifier.ControlModifier)
        x, y = self.to_viewport_space(event.position())
        delta = wheel_delta(amount, WHEEL_STEP, ctrl=ctrl, ctrl_multiplier=WHEEL_CTRL_MULTIPLIER)
        self.controller.on_gesture(WheelGesture(x, y, delta))
        event.accept()

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._drag_last = self.to_viewport_space(event.position())
            self.viewport().setCursor(Qt.CursorShape.ClosedHandCursor)
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:
        if self._drag_last is not None and event.buttons() & Qt.MouseButton.LeftButton:
            x, y = self.to_viewport_space(event.position())
            last_x, last_y = self._drag_last
            self._drag_last = (x, y)
            self.controller.on_gesture(DragGesture(x - last_x, y - last_y))
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._drag_last = None
            self.viewport().unsetCursor()
        super().mouseReleaseEvent(event)

    def mouseDoubleClickEvent(self, event) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mouseDoubleClickEvent(event)
            return
        shift = bool(event.modifiers() & Qt.KeyboardModifier.ShiftModifier)
        x, y = self.to_viewport_space(event.position())
        self.controller.on_gesture(WheelGesture(x, y, -1.0 if shift else 1.0))
        event.accept()

    def viewportEvent(self, event) -> bool:
        # trackpad pinch arrives as a native gesture on the viewport widget
        if (
            event.type() == QEvent.Type.NativeGesture
            and event.gestureType() == Qt.NativeGestureType.ZoomNativeGesture
        ):
            x, y = self.to_viewport_space(event.position())
            self.controller.on_gesture(PinchGesture(x, y, 1.0 + event.value()))
            event.accept()
            return True
        if event.type() == QEvent.Type.Gesture:
            pinch = event.gesture(Qt.GestureType.PinchGesture)
            if pinch is not None:
                self.on_pinch(pinch)
                event.accept(pinch)
                return True
        return super().viewportEvent(event)

    def on_pinch(self, pinch: QPinchGesture) -> None:
        """
        Turn one touch pinch update into a combined zoom and pan.

        The zoom pivots on the previous center of the two touch points; the
        move of that center since the last update is the pan.
        """
        viewport = self.viewport()
        x, y = self.to_viewport_space(viewport.mapFromGlobal(pinch.lastCenterPoint()))
        cx, cy = self.to_viewport_space(viewport.mapFromGlobal(pinch.centerPoint()))
        self.controller.on_gesture(PinchGesture(x, y, pinch.scaleFactor(), cx - x, cy - y))
