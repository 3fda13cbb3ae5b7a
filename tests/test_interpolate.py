"""Tests for the smooth zoom transition."""
import math

import pytest

from cellscatter.controller.interpolate import ease_cubic_in_out, smooth_zoom, zoom_transition
from cellscatter.model.transform import ViewTransform

EXTENT = (0.0, 0.0, 100.0, 100.0)


@pytest.mark.parametrize("t, expected", [
    (-1.0, 0.0),
    (0.0, 0.0),
    (0.25, 0.0625),
    (0.5, 0.5),
    (0.75, 0.9375),
    (1.0, 1.0),
    (2.0, 1.0),
])
def test_ease_cubic_in_out(t, expected):
    assert ease_cubic_in_out(t) == pytest.approx(expected)


class TestSmoothZoom:
    def test_endpoints(self):
        path = smooth_zoom((0.0, 0.0, 10.0), (30.0, 40.0, 5.0))
        assert path(0.0) == pytest.approx((0.0, 0.0, 10.0))
        assert path(1.0) == pytest.approx((30.0, 40.0, 5.0))

    def test_long_pan_zooms_out_midway(self):
        path = smooth_zoom((0.0, 0.0, 1.0), (1000.0, 0.0, 1.0))
        assert path(0.5)[2] > 1.0

    def test_same_center_is_geometric(self):
        path = smooth_zoom((5.0, 5.0, 8.0), (5.0, 5.0, 2.0))
        cx, cy, w = path(0.5)
        assert (cx, cy) == pytest.approx((5.0, 5.0))
        assert w == pytest.approx(4.0)


class TestZoomTransition:
    def test_starts_at_start_and_ends_exactly_at_end(self):
        start = ViewTransform(100.0, -50.0, 8.0)
        end = ViewTransform(0.0, 0.0, 0.8)
        at = zoom_transition(start, end, EXTENT)
        first = at(0.0)
        assert first.as_tuple() == pytest.approx(start.as_tuple())
        assert at(1.0) is end

    def test_pure_zoom_about_center(self):
        # both transforms keep the extent center (50, 50) in place
        start = ViewTransform(-50.0, -50.0, 2.0)
        at = zoom_transition(start, ViewTransform(0.0, 0.0, 1.0), EXTENT)
        middle = at(0.5)
        assert middle.scale == pytest.approx(math.sqrt(2.0))
        assert middle.apply(50.0, 50.0) == pytest.approx((50.0, 50.0))

    def test_scale_stays_positive(self):
        at = zoom_transition(ViewTransform(-9000.0, 4000.0, 90.0), ViewTransform(0.0, 0.0, 0.8), EXTENT)
        for i in range(11):
            assert at(i / 10).scale > 0.0
