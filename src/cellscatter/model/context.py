"""
Plot Context
============
The immutable bundle every other component reads from: the dataset, its
bounding-box domain and the category color mapping.

Why is this file needed?
------------------------
1. Explicit initialization: domain bounds and colors are computed exactly once,
   in `build_plot_context`, instead of living in module-level globals.
2. Immutability: the dataset is fixed after the viewer is mounted. Loading a
   different dataset means building a new context and a new view; nothing
   holds on to a stale one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, TYPE_CHECKING

import numpy as np

from cellscatter.config import DEFAULT_FILL, TOTAL_CATEGORY
from cellscatter.model.colors import ColorService, build_color_map
from cellscatter.model.dataset import CellDataset

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class EmptyDatasetError(ValueError):
    """Raised when a plot context is requested for a dataset without points."""


@dataclass(frozen=True)
class Domain:
    """Bounding box of all point positions, in data space."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def from_arrays(cls, x: npt.NDArray[np.float64], y: npt.NDArray[np.float64]) -> Domain:
        """
        Compute the bounding box of the coordinate arrays.

        Raises:
            EmptyDatasetError: If either array is empty.
        """
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        if x.size == 0 or y.size == 0:
            raise EmptyDatasetError("Cannot compute a domain over an empty coordinate array.")
        return cls(
            min_x=float(x.min()),
            max_x=float(x.max()),
            min_y=float(y.min()),
            max_y=float(y.max()),
        )

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def as_rect(self) -> tuple[float, float, float, float]:
        """(x, y, width, height), the viewBox of the plot."""
        return self.min_x, self.min_y, self.width, self.height


@dataclass(frozen=True)
class PlotContext:
    dataset: CellDataset
    domain: Domain
    colors: Mapping[str, str]

    def color_for(self, category: str) -> str:
        """Assigned color of the category, black for unknown labels."""
        return self.colors.get(category, DEFAULT_FILL)

    @staticmethod
    def is_marker_eligible(category: str) -> bool:
        """The synthetic aggregate label never gets a marker."""
        return category != TOTAL_CATEGORY


def build_plot_context(dataset: CellDataset, color_service: ColorService) -> PlotContext:
    """
    Derive the domain and the color mapping for a loaded dataset.

    Args:
        dataset: The loaded input dataset.
        color_service: Queried once per distinct category ("Total" excluded).

    Returns:
        An immutable PlotContext.

    Raises:
        EmptyDatasetError: If the dataset has no points. The viewer treats this
            as a fatal startup error rather than drawing a degenerate plot.
    """
    if dataset.n_points == 0:
        raise EmptyDatasetError(f"Dataset '{dataset.name}' contains no points.")

    domain = Domain.from_arrays(dataset.x, dataset.y)
    colors = build_color_map(dataset.categories, color_service)

    unknown = set(dataset.cell_types) - set(colors) - {TOTAL_CATEGORY}
    if unknown:
        logger.warning(
            f"{len(unknown)} categories have no assigned color and will be drawn "
            f"in {DEFAULT_FILL}: {sorted(unknown)}"
        )

    logger.info(
        f"Plot context ready: domain x=[{domain.min_x:g}, {domain.max_x:g}], "
        f"y=[{domain.min_y:g}, {domain.max_y:g}], {len(colors)} colors."
    )
    return PlotContext(dataset=dataset, domain=domain, colors=MappingProxyType(dict(colors)))
