"""Shared fixtures: an offscreen QApplication and small datasets."""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from cellscatter.model.context import build_plot_context
from cellscatter.model.dataset import CellDataset


class RecordingColors:
    """Color service returning fixed colors and recording every request."""

    def __init__(self, colors=None, default="#808080"):
        self.colors = dict(colors or {})
        self.default = default
        self.calls = []

    def color_for(self, category):
        self.calls.append(category)
        return self.colors.get(category, self.default)


def make_dataset(ids, xs, ys, types, **extra):
    data = {"cellid": list(ids), "xumap": list(xs), "yumap": list(ys), "celltype": list(types)}
    data.update(extra)
    return CellDataset.from_dict(data, name="test")


@pytest.fixture(scope="session")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def square_dataset():
    """Domain 0..100 on both axes; cell-3 is a Bcell at (10, 20)."""
    return make_dataset(
        ids=["cell-1", "cell-2", "cell-3", "cell-4"],
        xs=[0.0, 100.0, 10.0, 55.5],
        ys=[0.0, 100.0, 20.0, 42.0],
        types=["Tcell", "NK", "Bcell", "Mystery"],
        celltypes=["Tcell", "NK", "Bcell", "Total"],
        celltypenums=[1, 1, 1, 4],
        celltypepercents=[0.25, 0.25, 0.25, 1.0],
    )


@pytest.fixture
def colors():
    return RecordingColors({"Tcell": "#ff0000", "NK": "#00ff00", "Bcell": "#0000ff"})


@pytest.fixture
def square_context(square_dataset, colors):
    return build_plot_context(square_dataset, colors)
