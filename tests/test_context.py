"""Tests for the plot context: domain and color mapping."""
import numpy as np
import pytest

from cellscatter.model.context import Domain, EmptyDatasetError, PlotContext, build_plot_context

from conftest import RecordingColors, make_dataset


class TestDomain:
    def test_from_arrays(self):
        d = Domain.from_arrays(np.array([3.0, -1.0, 2.0]), np.array([0.5, 4.0, 1.0]))
        assert d == Domain(min_x=-1.0, max_x=3.0, min_y=0.5, max_y=4.0)
        assert d.width == 4.0
        assert d.height == 3.5
        assert d.as_rect() == (-1.0, 0.5, 4.0, 3.5)

    def test_empty_arrays(self):
        with pytest.raises(EmptyDatasetError):
            Domain.from_arrays(np.array([]), np.array([]))

    def test_every_point_is_inside(self, square_context):
        ds = square_context.dataset
        for i in range(ds.n_points):
            p = ds.point(i)
            assert square_context.domain.contains(p.x, p.y)


class TestBuildPlotContext:
    def test_square_domain(self, square_context):
        assert square_context.domain == Domain(0.0, 100.0, 0.0, 100.0)

    def test_one_color_request_per_category(self, square_context, colors):
        assert colors.calls == ["Tcell", "NK", "Bcell"]

    def test_total_has_no_color(self, square_context):
        assert "Total" not in square_context.colors

    def test_unknown_category_is_black(self, square_context):
        assert square_context.color_for("Mystery") == "#000000"
        assert square_context.color_for("Bcell") == "#0000ff"

    def test_colors_are_read_only(self, square_context):
        with pytest.raises(TypeError):
            square_context.colors["Bcell"] = "#ffffff"

    def test_duplicate_categories_are_colored_once(self):
        service = RecordingColors()
        ds = make_dataset(
            ["a", "b"], [0, 1], [0, 1], ["NK", "NK"],
            celltypes=["NK", "NK", "Total"], celltypenums=[1, 1, 2], celltypepercents=[0.5, 0.5, 1.0],
        )
        build_plot_context(ds, service)
        assert service.calls == ["NK"]

    def test_empty_dataset_is_fatal(self):
        ds = make_dataset([], [], [], [])
        with pytest.raises(EmptyDatasetError, match="no points"):
            build_plot_context(ds, RecordingColors())

    def test_single_point(self):
        ds = make_dataset(["only"], [2.0], [3.0], ["NK"])
        ctx = build_plot_context(ds, RecordingColors())
        assert ctx.domain.width == 0.0
        assert ctx.domain.height == 0.0


@pytest.mark.parametrize("category, eligible", [
    ("Bcell", True),
    ("Mystery", True),
    ("Total", False),
    ("total", True),
])
def test_marker_eligibility(category, eligible):
    assert PlotContext.is_marker_eligible(category) is eligible
