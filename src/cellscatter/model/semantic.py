"""
Semantic zoom sizing.

Every primitive of the scene is sized from one scalar, the *unit*. Inside the
zoomed group a unit of `base / k` keeps a constant on-screen size; past the
soft cap `capK = max_zoom * 0.75` the unit is frozen so markers grow again
instead of shrinking to sub-pixel size.
"""
from __future__ import annotations

import logging
from typing import Optional

from cellscatter.config import MAX_ZOOM, SOFT_CAP_RATIO, UNIT_DIVISOR
from cellscatter.model.context import Domain

logger = logging.getLogger(__name__)


def base_unit(domain: Domain) -> float:
    """
    Zoom-independent unit proportional to the data extent.

    A zero-height domain (all points on one horizontal line) falls back to the
    width, and a single-point domain to 1.0, so markers stay visible.
    """
    extent = domain.height
    if extent <= 0.0:
        extent = domain.width
    if extent <= 0.0:
        extent = 1.0
    return extent / UNIT_DIVISOR


def cap_k(max_zoom: float = MAX_ZOOM) -> float:
    return max_zoom * SOFT_CAP_RATIO


def semantic_unit(k: float, base: float, max_zoom: float = MAX_ZOOM) -> float:
    """
    Actual drawing unit at zoom factor `k`.

        unit = base / k      if k < capK
        unit = base / capK   otherwise
    """
    ceiling = cap_k(max_zoom)
    if k < ceiling:
        return base / k
    return base / ceiling


class SemanticScale:
    """
    Tracks the current unit for a fixed domain.

    `update(k)` may be called with redundant zoom factors (pan gestures publish
    an unchanged scale); it reports whether the unit actually changed so the
    caller can skip needless re-renders.
    """

    def __init__(self, domain: Domain, max_zoom: float = MAX_ZOOM) -> None:
        self.base = base_unit(domain)
        self.max_zoom = max_zoom
        self._unit: Optional[float] = None

    @property
    def unit(self) -> float:
        if self._unit is None:
            self._unit = semantic_unit(1.0, self.base, self.max_zoom)
        return self._unit

    def update(self, k: float) -> bool:
        new_unit = semantic_unit(k, self.base, self.max_zoom)
        if new_unit == self._unit:
            return False
        self._unit = new_unit
        logger.debug(f"Semantic unit now {new_unit:.6g} at k={k:.4g}")
        return True
