"""
Qt realization of the scatter scene.

Item tree:

    flip layer        scale(1, -1), data "up" is screen up
      view layer      current ViewTransform (pan/zoom), the only thing a gesture changes
        markers, frame glyphs, labels   fixed data coordinates, sized by the unit

Items are reconciled by primitive key: a render pass updates existing items in
place, creates missing ones and removes stale ones.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QFont, QFontMetricsF, QPainterPath, QPen, QTransform
from PySide6.QtWidgets import (
    QGraphicsEllipseItem, QGraphicsItem, QGraphicsPathItem, QGraphicsScene,
    QGraphicsSimpleTextItem
)

from cellscatter.config import LINE_HEIGHT_EM, TEXT_PIXEL_SIZE
from cellscatter.model.transform import ViewTransform
from cellscatter.view.scene import (
    Glyph, Label, Marker, Primitive, SceneRenderer, marker_key, tooltip_key
)

logger = logging.getLogger(__name__)

Z_MARKERS = 0.0
Z_DECORATIONS = 1.0
Z_TOOLTIPS = 2.0


def to_qtransform(t: ViewTransform) -> QTransform:
    return QTransform(t.scale, 0.0, 0.0, t.scale, t.translate_x, t.translate_y)


# -------------------------------------------------------------------------------
# Items
# -------------------------------------------------------------------------------

class _Layer(QGraphicsItem):
    """Content-less parent item carrying a transform."""

    def __init__(self, parent: Optional[QGraphicsItem] = None) -> None:
        super().__init__(parent)
        self.setFlag(QGraphicsItem.GraphicsItemFlag.ItemHasNoContents, True)

    def boundingRect(self) -> QRectF:
        return QRectF()

    def paint(self, painter, option, widget=None) -> None:
        pass


class MarkerItem(QGraphicsEllipseItem):
    def __init__(
        self,
        point_id: str,
        index: int,
        on_hover: Callable[[int, str, bool], None],
        parent: Optional[QGraphicsItem] = None,
    ) -> None:
        super().__init__(parent)
        self.point_id = point_id
        self.index = index
        self._on_hover = on_hover
        self.setAcceptHoverEvents(True)
        self.setPen(QPen(Qt.PenStyle.NoPen))
        self.setZValue(Z_MARKERS)

    def update_from(self, marker: Marker) -> None:
        r = marker.r
        self.setRect(QRectF(marker.cx - r, marker.cy - r, 2 * r, 2 * r))
        color = QColor(marker.fill)
        color.setAlphaF(marker.fill_opacity)
        self.setBrush(QBrush(color))

    def hoverEnterEvent(self, event) -> None:
        self._on_hover(self.index, self.point_id, True)
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event) -> None:
        self._on_hover(self.index, self.point_id, False)
        super().hoverLeaveEvent(event)


class GlyphItem(QGraphicsPathItem):
    def __init__(self, parent: Optional[QGraphicsItem] = None) -> None:
        super().__init__(parent)
        self.setZValue(Z_DECORATIONS)

    def update_from(self, glyph: Glyph) -> None:
        path = QPainterPath()
        (x0, y0), *rest = glyph.points
        path.moveTo(x0, y0)
        for x, y in rest:
            path.lineTo(x, y)
        if glyph.closed:
            path.closeSubpath()
        self.setPath(path)

        pen = QPen(QColor(glyph.stroke))
        pen.setWidthF(glyph.stroke_width)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        self.setPen(pen)
        self.setBrush(QBrush(QColor(glyph.fill)) if glyph.fill else QBrush(Qt.BrushStyle.NoBrush))


class LabelItem(QGraphicsSimpleTextItem):
    def __init__(self, z: float, parent: Optional[QGraphicsItem] = None) -> None:
        super().__init__(parent)
        font = QFont()
        font.setPixelSize(TEXT_PIXEL_SIZE)
        self.setFont(font)
        self._ascent = QFontMetricsF(font).ascent()
        self.setZValue(z)

    def update_from(self, label: Label) -> None:
        self.setText("\n".join(label.lines))
        self.setPos(label.x, label.y)
        sx, sy = label.text_scale
        # anchor is the first baseline, as with SVG text
        offset = label.first_line * LINE_HEIGHT_EM * TEXT_PIXEL_SIZE - self._ascent
        self.setTransform(QTransform().scale(sx, sy).translate(0.0, offset))


# -------------------------------------------------------------------------------
# Scene
# -------------------------------------------------------------------------------

class ScatterScene(QGraphicsScene):
    """Keeps Qt items in sync with the renderer's primitives."""

    def __init__(self, renderer: SceneRenderer, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.renderer = renderer
        self.unit: Optional[float] = None
        self._items: dict[str, QGraphicsItem] = {}

        # geometry changes on every zoom frame
        self.setItemIndexMethod(QGraphicsScene.ItemIndexMethod.NoIndex)

        self._flip_layer = _Layer()
        self._flip_layer.setTransform(QTransform.fromScale(1.0, -1.0))
        self.addItem(self._flip_layer)
        self._view_layer = _Layer(self._flip_layer)

        x, y, w, h = renderer.context.domain.as_rect()
        # all points on one line: give the flat side a unit extent
        if w <= 0.0:
            x, w = x - 0.5, 1.0
        if h <= 0.0:
            y, h = y - 0.5, 1.0
        # viewBox of the plot, expressed after the flip
        self.setSceneRect(QRectF(x, -(y + h), w, h))

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    @property
    def view_layer(self) -> QGraphicsItem:
        return self._view_layer

    def set_view_transform(self, transform: ViewTransform) -> None:
        """Apply a pan/zoom transform to the whole group at once."""
        self._view_layer.setTransform(to_qtransform(transform))

    def redraw(self, unit: float) -> None:
        """Re-render every primitive at the given unit."""
        self.unit = unit
        scene = self.renderer.render(unit)
        wanted = scene.by_key()

        for key in list(self._items):
            if key not in wanted:
                self._remove(key)
        for primitive in scene.items():
            self._upsert(primitive)

    def item_for(self, key: str) -> Optional[QGraphicsItem]:
        return self._items.get(key)

    def marker_item(self, point_id: str) -> Optional[MarkerItem]:
        item = self._items.get(marker_key(point_id))
        return item if isinstance(item, MarkerItem) else None

    def set_hovered(self, index: int, point_id: str, hovered: bool) -> None:
        """Update one point's tooltip state and redraw only that point."""
        if hovered:
            self.renderer.hover_enter(point_id)
        else:
            self.renderer.hover_leave(point_id)
        if self.unit is None:
            return

        primitives = self.renderer.render_point(index, self.unit)
        keys = {p.key for p in primitives}
        for key in (marker_key(point_id), tooltip_key(point_id)):
            if key not in keys and key in self._items:
                self._remove(key)
        for primitive in primitives:
            self._upsert(primitive)

    def detach(self) -> None:
        """Forget transient hover state (view is going away)."""
        self.renderer.clear()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _upsert(self, primitive: Primitive) -> None:
        item = self._items.get(primitive.key)
        if item is None:
            item = self._create(primitive)
            self._items[primitive.key] = item
        item.update_from(primitive)

    def _create(self, primitive: Primitive) -> QGraphicsItem:
        if isinstance(primitive, Marker):
            return MarkerItem(primitive.point_id, primitive.index, self.set_hovered, self._view_layer)
        if isinstance(primitive, Glyph):
            return GlyphItem(self._view_layer)
        if isinstance(primitive, Label):
            z = Z_TOOLTIPS if primitive.key.startswith("tooltip:") else Z_DECORATIONS
            return LabelItem(z, self._view_layer)
        raise TypeError(f"Unknown primitive: {type(primitive).__name__}")

    def _remove(self, key: str) -> None:
        item = self._items.pop(key)
        self.removeItem(item)
