"""
Overlay panels: the count/percent legend and the "Reset Zoom" button.

Both are floating frames over the scatter view. Clicking either one asks for
a zoom reset.
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import QFrame, QGridLayout, QLabel, QVBoxLayout, QWidget

from cellscatter.config import FILL_OPACITY
from cellscatter.model.legend import LegendRow

PANEL_STYLE = """
    QFrame#overlayPanel {
        background: rgba(255, 255, 255, 230);
        border: 1px solid #c0c0c0;
        border-radius: 6px;
    }
"""


class ClickablePanel(QFrame):
    """Floating frame emitting `clicked` on a left click anywhere inside it."""
    clicked = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("overlayPanel")
        self.setStyleSheet(PANEL_STYLE)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
            event.accept()
            return
        super().mousePressEvent(event)


class ResetZoomPanel(ClickablePanel):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(10, 6, 10, 6)
        layout.addWidget(QLabel("Reset Zoom"))
        self.adjustSize()


class LegendPanel(ClickablePanel):
    """Swatch, type, count and percent for every category."""

    def __init__(self, rows: list[LegendRow], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.rows = rows

        grid = QGridLayout(self)
        grid.setContentsMargins(10, 8, 10, 8)
        grid.setHorizontalSpacing(16)

        for col, title in enumerate(("", "Type", "Count", "Percent")):
            header = QLabel(title)
            header.setStyleSheet("font-weight: bold;")
            grid.addWidget(header, 0, col)

        for i, row in enumerate(rows, start=1):
            grid.addWidget(self._swatch(row.color), i, 0)
            grid.addWidget(QLabel(row.label), i, 1)
            count = QLabel(str(row.count))
            count.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            grid.addWidget(count, i, 2)
            percent = QLabel(f"{row.percent:g}%")
            percent.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
            grid.addWidget(percent, i, 3)

        self.adjustSize()

    @staticmethod
    def _swatch(color: Optional[str]) -> QLabel:
        swatch = QLabel()
        swatch.setFixedSize(14, 14)
        if color:
            c = QColor(color)
            swatch.setStyleSheet(
                f"background: rgba({c.red()}, {c.green()}, {c.blue()}, {FILL_OPACITY});"
            )
        return swatch
