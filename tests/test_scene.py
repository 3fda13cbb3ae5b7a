"""Tests for the declarative scene renderer."""
import pytest

from cellscatter.model.context import build_plot_context
from cellscatter.view.scene import (
    Glyph, Label, Marker, SceneRenderer, TooltipState, format_bound
)

from conftest import RecordingColors, make_dataset

UNIT = 0.4


@pytest.fixture
def renderer(square_context):
    return SceneRenderer(square_context)


class TestPoints:
    def test_marker_at_data_position(self, renderer):
        (marker,) = renderer.render_point(2, UNIT)
        assert marker == Marker(
            key="point:cell-3", point_id="cell-3", index=2,
            cx=10.0, cy=20.0, r=UNIT, fill="#0000ff", fill_opacity=0.8,
        )

    def test_unknown_category_drawn_black(self, renderer):
        (marker,) = renderer.render_point(3, UNIT)
        assert marker.fill == "#000000"

    def test_hover_enlarges_and_adds_tooltip(self, renderer):
        renderer.hover_enter("cell-3")
        assert renderer.tooltip_state("cell-3") is TooltipState.SHOWN

        marker, tooltip = renderer.render_point(2, UNIT)
        assert marker.r == pytest.approx(2 * UNIT)
        assert tooltip.key == "tooltip:cell-3"
        assert tooltip.lines == ("cell-3", "Bcell")
        assert (tooltip.x, tooltip.y) == pytest.approx((10.0 + 2 * UNIT, 20.0))
        assert tooltip.text_scale == pytest.approx((UNIT / 4, -UNIT / 4))

    def test_hover_leave_restores(self, renderer):
        renderer.hover_enter("cell-3")
        renderer.hover_leave("cell-3")
        (marker,) = renderer.render_point(2, UNIT)
        assert marker.r == UNIT
        assert renderer.tooltip_state("cell-3") is TooltipState.HIDDEN

    def test_hover_is_per_point(self, renderer):
        renderer.hover_enter("cell-1")
        assert len(renderer.render_point(0, UNIT)) == 2
        assert len(renderer.render_point(2, UNIT)) == 1

    def test_clear_drops_hover_state(self, renderer):
        renderer.hover_enter("cell-1")
        renderer.hover_enter("cell-2")
        renderer.clear()
        assert not renderer.is_hovered("cell-1")
        assert not renderer.is_hovered("cell-2")

    def test_out_of_range_index_draws_nothing(self, renderer):
        assert renderer.render_point(4, UNIT) == []
        assert renderer.render_point(-1, UNIT) == []

    def test_total_category_gets_no_marker(self):
        ds = make_dataset(["a", "b"], [0, 1], [0, 1], ["NK", "Total"])
        renderer = SceneRenderer(build_plot_context(ds, RecordingColors()))
        assert renderer.render_point(1, UNIT) == []
        assert [m.point_id for m in renderer.render(UNIT).markers] == ["a"]

    def test_radius_follows_unit(self, renderer):
        for unit in (0.4, 0.2, 0.4 / 75):
            (marker,) = renderer.render_point(0, unit)
            assert marker.r == unit


class TestFrame:
    def test_border_is_l_shaped(self, renderer):
        frame = {p.key: p for p in renderer.render_frame(UNIT)}
        border = frame["frame:border"]
        assert isinstance(border, Glyph)
        assert border.points == ((0.0, 100.0), (0.0, 0.0), (100.0, 0.0))
        assert border.stroke_width == pytest.approx(UNIT / 2)
        assert not border.closed

    def test_arrowheads_point_outward(self, renderer):
        frame = {p.key: p for p in renderer.render_frame(UNIT)}
        arrow_y = frame["frame:arrow-y"]
        arrow_x = frame["frame:arrow-x"]
        assert arrow_y.closed and arrow_y.fill == "black"
        assert arrow_y.points[0] == pytest.approx((0.0, 100.0 + UNIT))
        assert arrow_x.points[0] == pytest.approx((100.0 + UNIT, 0.0))

    def test_range_labels(self, renderer):
        frame = {p.key: p for p in renderer.render_frame(UNIT) if isinstance(p, Label)}
        assert frame["label:min-x"].lines == ("x=0",)
        assert frame["label:min-y"].lines == ("y=0",)
        assert frame["label:max-y"].lines == ("y=100",)
        assert frame["label:max-x"].lines == ("x=100",)

        min_x, min_y = frame["label:min-x"], frame["label:min-y"]
        assert (min_x.x, min_x.y) == (min_y.x, min_y.y) == pytest.approx((-10 * UNIT, -5 * UNIT))
        assert min_y.first_line == 1
        assert (frame["label:max-y"].x, frame["label:max-y"].y) == pytest.approx((-10 * UNIT, 100 + 5 * UNIT))
        assert (frame["label:max-x"].x, frame["label:max-x"].y) == pytest.approx((100 - 10 * UNIT, -5 * UNIT))
        assert all(label.text_scale == pytest.approx((UNIT / 4, -UNIT / 4)) for label in frame.values())


class TestScene:
    def test_layering(self, renderer):
        renderer.hover_enter("cell-2")
        scene = renderer.render(UNIT)
        assert len(scene.markers) == 4
        assert len(scene.decorations) == 7
        assert [t.key for t in scene.tooltips] == ["tooltip:cell-2"]
        assert scene.items()[-1].key == "tooltip:cell-2"

    def test_keys_are_unique(self, renderer):
        renderer.hover_enter("cell-1")
        scene = renderer.render(UNIT)
        assert len(scene.by_key()) == len(scene.items())


@pytest.mark.parametrize("value, text", [
    (0.0, "0"),
    (100.0, "100"),
    (-3.0, "-3"),
    (12.5, "12.5"),
    (-3.88, "-3.88"),
])
def test_format_bound(value, text):
    assert format_bound(value) == text
