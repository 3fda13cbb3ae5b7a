"""
Smooth zoom interpolation for animated view transitions.

Implements the "optimal" pan/zoom path of van Wijk & Nuij (2003), which zooms
out while panning over long distances so the motion reads as one gesture. A
view is described as (center_x, center_y, width) in data space.
"""
from __future__ import annotations

import math
from typing import Callable

from cellscatter.model.transform import ViewTransform

RHO = math.sqrt(2.0)
_RHO2 = 2.0
_RHO4 = 4.0
_EPSILON2 = 1e-12

View = tuple[float, float, float]


def ease_cubic_in_out(t: float) -> float:
    t = min(1.0, max(0.0, t)) * 2.0
    if t <= 1.0:
        return t * t * t / 2.0
    t -= 2.0
    return (t * t * t + 2.0) / 2.0


def smooth_zoom(v0: View, v1: View) -> Callable[[float], View]:
    """Interpolator between two views, parameterized by t in [0, 1]."""
    ux0, uy0, w0 = v0
    ux1, uy1, w1 = v1
    dx = ux1 - ux0
    dy = uy1 - uy0
    d2 = dx * dx + dy * dy

    if d2 < _EPSILON2:
        # Same center: pure exponential zoom
        s = math.log(w1 / w0) / RHO

        def interpolate(t: float) -> View:
            return ux0 + t * dx, uy0 + t * dy, w0 * math.exp(RHO * t * s)

        return interpolate

    d1 = math.sqrt(d2)
    b0 = (w1 * w1 - w0 * w0 + _RHO4 * d2) / (2.0 * w0 * _RHO2 * d1)
    b1 = (w1 * w1 - w0 * w0 - _RHO4 * d2) / (2.0 * w1 * _RHO2 * d1)
    r0 = math.log(math.sqrt(b0 * b0 + 1.0) - b0)
    r1 = math.log(math.sqrt(b1 * b1 + 1.0) - b1)
    s = (r1 - r0) / RHO

    def interpolate(t: float) -> View:
        st = t * s
        cosh_r0 = math.cosh(r0)
        u = w0 / (_RHO2 * d1) * (cosh_r0 * math.tanh(RHO * st + r0) - math.sinh(r0))
        return ux0 + u * dx, uy0 + u * dy, w0 * cosh_r0 / math.cosh(RHO * st + r0)

    return interpolate


def zoom_transition(
    start: ViewTransform,
    end: ViewTransform,
    extent: tuple[float, float, float, float],
) -> Callable[[float], ViewTransform]:
    """
    Interpolate between two transforms as seen through the viewport extent.

    Args:
        start: Transform at t = 0.
        end: Transform at t = 1 (returned exactly).
        extent: Viewport extent (x0, y0, x1, y1); its center is the fixed
            reference point of the interpolation.
    """
    x0, y0, x1, y1 = extent
    px = (x0 + x1) / 2.0
    py = (y0 + y1) / 2.0
    w = max(x1 - x0, y1 - y0)
    if w <= 0.0:
        w = 1.0

    ax, ay = start.invert(px, py)
    bx, by = end.invert(px, py)
    path = smooth_zoom((ax, ay, w / start.scale), (bx, by, w / end.scale))

    def transform_at(t: float) -> ViewTransform:
        if t >= 1.0:
            return end
        ux, uy, view_width = path(t)
        k = w / view_width
        return ViewTransform(px - ux * k, py - uy * k, k)

    return transform_at
