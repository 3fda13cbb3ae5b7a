"""
Main Application Window
=======================
The scatter view filling the window, with the legend floating bottom-right
and the "Reset Zoom" panel top-left.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QVBoxLayout, QWidget

from cellscatter.config import ViewerSettings
from cellscatter.model.context import PlotContext
from cellscatter.model.legend import legend_rows
from cellscatter.view.canvas import ScatterView
from cellscatter.view.panels import LegendPanel, ResetZoomPanel

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Cell Scatter"
PANEL_MARGIN = 10


class MainWindow(QMainWindow):
    def __init__(
        self,
        context: PlotContext,
        settings: Optional[ViewerSettings] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.context = context
        self.setWindowTitle(f"{VISIBLE_APP_NAME} - [{context.dataset.name}]")
        self.resize(1200, 900)

        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        layout = QVBoxLayout(main_widget)
        layout.setContentsMargins(0, 0, 0, 0)

        self.scatter = ScatterView(context, settings=settings)
        layout.addWidget(self.scatter)

        # --- overlays ---
        self.legend_panel = LegendPanel(legend_rows(context), main_widget)
        self.reset_panel = ResetZoomPanel(main_widget)

        self.legend_panel.clicked.connect(self.scatter.reset_zoom)
        self.reset_panel.clicked.connect(self.scatter.reset_zoom)

        self._place_overlays()

    def _place_overlays(self) -> None:
        area = self.centralWidget().rect()
        self.reset_panel.move(area.left() + PANEL_MARGIN, area.top() + PANEL_MARGIN)
        self.legend_panel.move(
            area.right() - self.legend_panel.width() - PANEL_MARGIN,
            area.bottom() - self.legend_panel.height() - PANEL_MARGIN,
        )
        self.reset_panel.raise_()
        self.legend_panel.raise_()

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self._place_overlays()

    def closeEvent(self, event) -> None:
        logger.info("Closing viewer.")
        self.scatter.detach()
        event.accept()
