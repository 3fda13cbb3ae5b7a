"""
Scene Renderer
==============
Declarative description of everything drawn inside the zoomed group.

Why is this file needed?
------------------------
1. Separation: the renderer only decides *what* to draw for a given unit and
   hover state. It returns plain primitives in data space; `ScatterScene` turns
   them into Qt items. This keeps the drawing rules testable without a display.
2. Hover state: which points currently show their tooltip is kept here, in a
   transient map keyed by point id. It never touches the Point records and is
   cleared when the view is torn down.

Coordinate convention:
    The whole plot sits under a top-level `scale(1, -1)` so that data "up" is
    screen up. Text would come out mirrored, so every Label is counter-scaled by
    `(unit / 4, -unit / 4)`. Both negations are required.

Classes:
    Marker, Glyph, Label: Primitives.
    Scene: The primitives of one render pass.
    SceneRenderer: Builds scenes for a PlotContext.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from cellscatter.config import FILL_OPACITY
from cellscatter.model.context import PlotContext

logger = logging.getLogger(__name__)

# -------------------------------------------------------------------------------
# Primitives
# -------------------------------------------------------------------------------


@dataclass(frozen=True)
class Marker:
    """Filled circle for one point."""
    key: str
    point_id: str
    index: int
    cx: float
    cy: float
    r: float
    fill: str
    fill_opacity: float = FILL_OPACITY


@dataclass(frozen=True)
class Glyph:
    """Polyline or polygon (frame border, arrowheads)."""
    key: str
    points: tuple[tuple[float, float], ...]
    stroke: str
    stroke_width: float
    fill: Optional[str] = None
    closed: bool = False


@dataclass(frozen=True)
class Label:
    """
    Multi-line text anchored at (x, y) in data space.

    `scale` is the counter-scale magnitude; the text is drawn with
    `scale(scale, -scale)`. `first_line` shifts the block down by whole lines.
    """
    key: str
    x: float
    y: float
    lines: tuple[str, ...]
    scale: float
    first_line: int = 0

    @property
    def text_scale(self) -> tuple[float, float]:
        return self.scale, -self.scale


Primitive = Union[Marker, Glyph, Label]


@dataclass
class Scene:
    unit: float
    markers: list[Marker] = field(default_factory=list)
    decorations: list[Primitive] = field(default_factory=list)
    tooltips: list[Label] = field(default_factory=list)

    def items(self) -> list[Primitive]:
        """All primitives, bottom to top."""
        return [*self.markers, *self.decorations, *self.tooltips]

    def by_key(self) -> dict[str, Primitive]:
        return {p.key: p for p in self.items()}


class TooltipState(Enum):
    HIDDEN = "hidden"
    SHOWN = "shown"


def marker_key(point_id: str) -> str:
    return f"point:{point_id}"


def tooltip_key(point_id: str) -> str:
    return f"tooltip:{point_id}"


def format_bound(value: float) -> str:
    """Bounds print like plain numbers: 0, 12.5, -3.25."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


# -------------------------------------------------------------------------------
# Renderer
# -------------------------------------------------------------------------------

class SceneRenderer:
    """Builds the point layer, frame decorations and tooltips at a given unit."""

    def __init__(self, context: PlotContext) -> None:
        self.context = context
        self._shown: set[str] = set()

    # ---- tooltip state ----

    def tooltip_state(self, point_id: str) -> TooltipState:
        return TooltipState.SHOWN if point_id in self._shown else TooltipState.HIDDEN

    def is_hovered(self, point_id: str) -> bool:
        return point_id in self._shown

    def hover_enter(self, point_id: str) -> None:
        self._shown.add(point_id)

    def hover_leave(self, point_id: str) -> None:
        self._shown.discard(point_id)

    def clear(self) -> None:
        """Drop all hover state (view unmounted)."""
        self._shown.clear()

    # ---- rendering ----

    def render_point(self, i: int, unit: float) -> list[Primitive]:
        """
        Marker (and tooltip, if shown) for the point at index `i`.

        Returns an empty list for an index outside any of the parallel arrays
        and for points of the "Total" aggregate.
        """
        point = self.context.dataset.point(i)
        if point is None:
            return []
        if not self.context.is_marker_eligible(point.category):
            return []

        shown = point.id in self._shown
        primitives: list[Primitive] = [
            Marker(
                key=marker_key(point.id),
                point_id=point.id,
                index=i,
                cx=point.x,
                cy=point.y,
                r=unit * 2 if shown else unit,
                fill=self.context.color_for(point.category),
            )
        ]
        if shown:
            primitives.append(
                Label(
                    key=tooltip_key(point.id),
                    x=point.x + unit * 2,
                    y=point.y,
                    lines=(point.id, point.category),
                    scale=unit / 4,
                )
            )
        return primitives

    def render_frame(self, unit: float) -> list[Primitive]:
        """L-shaped border, two outward arrowheads and the four range labels."""
        d = self.context.domain
        half = unit / 2
        text_scale = unit / 4

        border = Glyph(
            key="frame:border",
            points=((d.min_x, d.max_y), (d.min_x, d.min_y), (d.max_x, d.min_y)),
            stroke="black",
            stroke_width=half,
        )
        # arrowheads point away from the plot: up along y, right along x
        arrow_y = Glyph(
            key="frame:arrow-y",
            points=(
                (d.min_x, d.max_y + unit),
                (d.min_x - half, d.max_y),
                (d.min_x + half, d.max_y),
            ),
            stroke="black",
            stroke_width=half,
            fill="black",
            closed=True,
        )
        arrow_x = Glyph(
            key="frame:arrow-x",
            points=(
                (d.max_x + unit, d.min_y),
                (d.max_x, d.min_y - half),
                (d.max_x, d.min_y + half),
            ),
            stroke="black",
            stroke_width=half,
            fill="black",
            closed=True,
        )

        bottom_left = (d.min_x - unit * 10, d.min_y - unit * 5)
        labels = [
            Label("label:min-x", *bottom_left, lines=(f"x={format_bound(d.min_x)}",), scale=text_scale),
            Label("label:min-y", *bottom_left, lines=(f"y={format_bound(d.min_y)}",), scale=text_scale,
                  first_line=1),
            Label("label:max-y", d.min_x - unit * 10, d.max_y + unit * 5,
                  lines=(f"y={format_bound(d.max_y)}",), scale=text_scale),
            Label("label:max-x", d.max_x - unit * 10, d.min_y - unit * 5,
                  lines=(f"x={format_bound(d.max_x)}",), scale=text_scale),
        ]
        return [border, arrow_y, arrow_x, *labels]

    def render(self, unit: float) -> Scene:
        """Full scene at the given unit."""
        scene = Scene(unit=unit)
        for i in range(self.context.dataset.n_points):
            for primitive in self.render_point(i, unit):
                if isinstance(primitive, Marker):
                    scene.markers.append(primitive)
                else:
                    scene.tooltips.append(primitive)
        scene.decorations.extend(self.render_frame(unit))
        return scene
