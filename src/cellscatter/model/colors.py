"""
Category color assignment.

A color service hands out one stable color per category label for the whole
session. It is queried once per distinct category when the plot context is
built, never during rendering.
"""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Protocol

import numpy as np
import pyqtgraph as pg

from cellscatter.config import TOTAL_CATEGORY

logger = logging.getLogger(__name__)


class ColorService(Protocol):
    def color_for(self, category: str) -> str:
        """Return a '#rrggbb' color for the category."""
        ...


class PaletteColorService:
    """Evenly spaced hues from pyqtgraph's indexed color wheel."""

    def __init__(self, n_hues: int = 9) -> None:
        if n_hues < 1:
            raise ValueError(f"n_hues must be >= 1, got {n_hues}.")
        self.n_hues = n_hues
        self._assigned: dict[str, str] = {}

    def color_for(self, category: str) -> str:
        if category not in self._assigned:
            index = len(self._assigned)
            self._assigned[category] = pg.intColor(index, hues=self.n_hues).name()
        return self._assigned[category]


class RandomColorService:
    """Random RGB color per category, fixed once drawn."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = np.random.default_rng(seed)
        self._assigned: dict[str, str] = {}

    def color_for(self, category: str) -> str:
        if category not in self._assigned:
            r, g, b = (int(v) for v in self._rng.integers(0, 256, size=3))
            self._assigned[category] = f"#{r:02x}{g:02x}{b:02x}"
        return self._assigned[category]


def build_color_map(categories: Iterable[str], service: ColorService) -> dict[str, str]:
    """
    Assign a color to every distinct category except the "Total" aggregate.

    The service is called exactly once per distinct label, in input order.
    """
    colors: dict[str, str] = {}
    for category in categories:
        if category == TOTAL_CATEGORY or category in colors:
            continue
        colors[category] = service.color_for(category)
    logger.debug(f"Assigned colors to {len(colors)} categories.")
    return colors


def palette_service_for(categories: Iterable[str]) -> PaletteColorService:
    """A palette service with one hue per colorable category."""
    n = len({c for c in categories if c != TOTAL_CATEGORY})
    return PaletteColorService(n_hues=max(1, n))
