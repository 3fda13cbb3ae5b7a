"""
Input Dataset
=============
Loads the embedding of labeled cells that the viewer displays.

The file is a JSON object with parallel arrays, one entry per cell:

    cellid            point identifiers
    xumap, yumap      embedding coordinates
    celltype          category label of each cell

and the precomputed per-category aggregates:

    celltypes         distinct labels, including the synthetic "Total" entry
    celltypenums      number of cells per label
    celltypepercents  fraction of cells per label (0..1)

The dataset is loaded once before the first render and never changes afterwards.
"""
from __future__ import annotations

import json
import logging
import os
from collections import Counter
from dataclasses import dataclass
from typing import Any, Mapping, Optional, TYPE_CHECKING

import numpy as np

from cellscatter.config import TOTAL_CATEGORY

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class DatasetFormatError(ValueError):
    """Raised when the input file does not have the expected structure."""


@dataclass(frozen=True)
class Point:
    """One cell of the embedding. Identity is `id`."""
    id: str
    x: float
    y: float
    category: str


@dataclass(frozen=True, eq=False)
class CellDataset:
    """Parallel point arrays plus per-category aggregates."""
    cell_ids: tuple[str, ...]
    x: npt.NDArray[np.float64]
    y: npt.NDArray[np.float64]
    cell_types: tuple[str, ...]
    categories: tuple[str, ...]
    category_counts: tuple[int, ...]
    category_percents: tuple[float, ...]
    name: str = "dataset"

    @property
    def n_points(self) -> int:
        """Number of markers; points are addressed by index into `cell_ids`."""
        return len(self.cell_ids)

    def point(self, i: int) -> Optional[Point]:
        """Return the point at index `i`, or None if any parallel array is too short."""
        if i < 0:
            return None
        if i >= len(self.cell_ids) or i >= len(self.x) or i >= len(self.y) or i >= len(self.cell_types):
            return None
        return Point(
            id=self.cell_ids[i],
            x=float(self.x[i]),
            y=float(self.y[i]),
            category=self.cell_types[i],
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], name: str = "dataset") -> CellDataset:
        """
        Build a dataset from the decoded JSON object.

        Args:
            data: Mapping with the keys described in the module docstring.
            name: Display name (usually the file stem).

        Raises:
            DatasetFormatError: If a required key is missing or malformed, or if
                a cell id occurs more than once.
        """
        cell_ids = tuple(str(v) for v in _require_list(data, "cellid"))
        cell_types = tuple(str(v) for v in _require_list(data, "celltype"))
        duplicates = sorted(cid for cid, n in Counter(cell_ids).items() if n > 1)
        if duplicates:
            raise DatasetFormatError(
                f"Cell ids must be unique; {len(duplicates)} repeated, e.g. {duplicates[:5]}."
            )
        x = _coordinates(data, "xumap")
        y = _coordinates(data, "yumap")

        lengths = {len(cell_ids), len(x), len(y), len(cell_types)}
        if len(lengths) > 1:
            logger.warning(
                f"Parallel arrays differ in length (cellid={len(cell_ids)}, xumap={len(x)}, "
                f"yumap={len(y)}, celltype={len(cell_types)}); extra entries are not drawn."
            )

        if "celltypes" in data:
            categories = tuple(str(v) for v in _require_list(data, "celltypes"))
            counts = tuple(int(v) for v in _require_list(data, "celltypenums"))
            percents = tuple(float(v) for v in _require_list(data, "celltypepercents"))
            if not (len(categories) == len(counts) == len(percents)):
                raise DatasetFormatError(
                    f"Category aggregates differ in length (celltypes={len(categories)}, "
                    f"celltypenums={len(counts)}, celltypepercents={len(percents)})."
                )
        else:
            logger.info("No category aggregates in dataset, deriving them from 'celltype'.")
            categories, counts, percents = derive_category_aggregates(cell_types)

        return cls(
            cell_ids=cell_ids,
            x=x,
            y=y,
            cell_types=cell_types,
            categories=categories,
            category_counts=counts,
            category_percents=percents,
            name=name,
        )


def derive_category_aggregates(
    cell_types: tuple[str, ...]
) -> tuple[tuple[str, ...], tuple[int, ...], tuple[float, ...]]:
    """Count cells per label (first-seen order) and append the "Total" aggregate."""
    counter = Counter(cell_types)
    total = len(cell_types)

    categories = [c for c in dict.fromkeys(cell_types) if c != TOTAL_CATEGORY]
    counts = [counter[c] for c in categories]
    percents = [n / total if total else 0.0 for n in counts]

    categories.append(TOTAL_CATEGORY)
    counts.append(total)
    percents.append(1.0 if total else 0.0)
    return tuple(categories), tuple(counts), tuple(percents)


def load_dataset(path: str) -> CellDataset:
    """
    Load a dataset from a JSON file.

    Raises:
        OSError: If the file cannot be read.
        DatasetFormatError: If the content is not a valid dataset.
    """
    logger.info(f"Loading dataset from: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise DatasetFormatError(f"Invalid JSON in '{path}': {e}") from e

    if not isinstance(data, dict):
        raise DatasetFormatError(f"Expected a JSON object at top level of '{path}'.")

    stem = os.path.splitext(os.path.basename(path))[0]
    dataset = CellDataset.from_dict(data, name=stem)
    logger.info(f"Loaded {dataset.n_points} points in {len(dataset.categories)} categories.")
    return dataset


# ---- helpers ----

def _require_list(data: Mapping[str, Any], key: str) -> list:
    if key not in data:
        raise DatasetFormatError(f"Missing required key '{key}'.")
    value = data[key]
    if not isinstance(value, list):
        raise DatasetFormatError(f"Key '{key}' must be a list, got {type(value).__name__}.")
    return value


def _coordinates(data: Mapping[str, Any], key: str) -> npt.NDArray[np.float64]:
    values = _require_list(data, key)
    try:
        arr = np.asarray(values, dtype=np.float64).reshape(-1)
    except (TypeError, ValueError) as e:
        raise DatasetFormatError(f"Key '{key}' must contain numbers: {e}") from e
    if not np.all(np.isfinite(arr)):
        raise DatasetFormatError(f"Key '{key}' contains non-finite coordinates.")
    arr.setflags(write=False)
    return arr
