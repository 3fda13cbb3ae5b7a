"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and design constants
of the scatter viewer.

Why is this file needed?
------------------------
1. Abstraction: zoom limits, sizing divisors and animation timings live in one
   place instead of being scattered through the controller and the renderer.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find the bundled sample dataset when the app is frozen.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    SAMPLE_DATASET_PATH (str): Absolute path to the bundled sample dataset.
    ViewerSettings: Zoom bounds and reset behavior handed to the controller.
"""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # config.py is in src/cellscatter/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


# Paths
ASSETS_PATH: str = get_resource_path("assets")
SAMPLE_DATASET_PATH: str = os.path.join(ASSETS_PATH, "sample-test.json")

# Zoom
MIN_ZOOM: float = 0.5
MAX_ZOOM: float = 100.0
SOFT_CAP_RATIO: float = 0.75  # capK = MAX_ZOOM * SOFT_CAP_RATIO
RESET_SCALE: float = 0.8
RESET_DURATION_MS: int = 250
FRAME_INTERVAL_MS: int = 16

# Wheel deltas are turned into log2 zoom steps
WHEEL_STEP: float = 0.002  # per pixel / per 1/8 degree
WHEEL_CTRL_MULTIPLIER: float = 10.0

# Sizing
UNIT_DIVISOR: float = 250.0
TEXT_PIXEL_SIZE: int = 16
LINE_HEIGHT_EM: float = 1.2

# Categories and colors
TOTAL_CATEGORY: str = "Total"
DEFAULT_FILL: str = "#000000"
FILL_OPACITY: float = 0.8
PERCENT_DECIMALS: int = 3


@dataclass(frozen=True)
class ViewerSettings:
    """Zoom bounds and reset behavior of one viewer instance."""
    min_zoom: float = MIN_ZOOM
    max_zoom: float = MAX_ZOOM
    reset_scale: float = RESET_SCALE
    reset_duration_ms: int = RESET_DURATION_MS
    frame_interval_ms: int = FRAME_INTERVAL_MS

    def __post_init__(self) -> None:
        if not (0.0 < self.min_zoom <= self.max_zoom):
            raise ValueError(
                f"Invalid zoom bounds: min_zoom={self.min_zoom}, max_zoom={self.max_zoom}."
            )
        if self.reset_duration_ms < 0:
            raise ValueError(f"Reset duration must be >= 0, got {self.reset_duration_ms}.")
        if self.frame_interval_ms <= 0:
            raise ValueError(f"Frame interval must be > 0, got {self.frame_interval_ms}.")

    @property
    def cap_k(self) -> float:
        """Soft zoom ceiling past which the semantic unit stops shrinking."""
        return self.max_zoom * SOFT_CAP_RATIO


if not os.path.exists(ASSETS_PATH):
    logger.warning(f"Assets path not found at {ASSETS_PATH}")
