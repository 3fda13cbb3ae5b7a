"""
View transform: uniform scale plus translation from data space to viewport space.

Viewport space is the coordinate system of the plot frame before the top-level
y-flip, i.e. the space gesture anchors are expressed in.
"""
from __future__ import annotations

from dataclasses import dataclass


def clamp_scale(scale: float, min_zoom: float, max_zoom: float) -> float:
    return max(min_zoom, min(max_zoom, scale))


@dataclass(frozen=True)
class ViewTransform:
    translate_x: float = 0.0
    translate_y: float = 0.0
    scale: float = 1.0

    @property
    def k(self) -> float:
        """Zoom factor."""
        return self.scale

    def apply(self, x: float, y: float) -> tuple[float, float]:
        """Map a data-space point to viewport space."""
        return x * self.scale + self.translate_x, y * self.scale + self.translate_y

    def invert(self, px: float, py: float) -> tuple[float, float]:
        """Map a viewport-space point back to data space."""
        return (px - self.translate_x) / self.scale, (py - self.translate_y) / self.scale

    def translated(self, dx: float, dy: float) -> ViewTransform:
        """Pan by a viewport-space delta; scale is untouched."""
        return ViewTransform(self.translate_x + dx, self.translate_y + dy, self.scale)

    def scaled_to(self, scale: float, min_zoom: float, max_zoom: float) -> ViewTransform:
        """Set the zoom factor (clamped) keeping the translation."""
        return ViewTransform(self.translate_x, self.translate_y, clamp_scale(scale, min_zoom, max_zoom))

    def zoomed_at(
        self,
        factor: float,
        px: float,
        py: float,
        min_zoom: float,
        max_zoom: float,
    ) -> ViewTransform:
        """
        Multiply the zoom factor by `factor` around the anchor `(px, py)`.

        The data point under the anchor keeps its viewport position, also when
        the requested scale is clamped to the zoom bounds.

        Args:
            factor: Requested scale multiplier (> 0).
            px, py: Anchor in viewport space, usually the pointer position.
            min_zoom, max_zoom: Zoom bounds.
        """
        new_scale = clamp_scale(self.scale * factor, min_zoom, max_zoom)
        data_x, data_y = self.invert(px, py)
        return ViewTransform(
            translate_x=px - data_x * new_scale,
            translate_y=py - data_y * new_scale,
            scale=new_scale,
        )

    def as_tuple(self) -> tuple[float, float, float]:
        return self.translate_x, self.translate_y, self.scale

    def __str__(self) -> str:
        return f"translate({self.translate_x:g},{self.translate_y:g}) scale({self.scale:g})"


IDENTITY = ViewTransform()
