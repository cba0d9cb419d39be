"""Tests for preset route generation."""

import pytest

from chalktalk.core.enums import RoutePreset
from chalktalk.core.field import clamp_point, mirror_point
from chalktalk.core.models import Point
from chalktalk.core.routes import ROUTE_SCRIPTS, generate_route, parse_preset, route_menu


LEFT_WIDEOUT = Point(62.5, 525)
RIGHT_WIDEOUT = Point(562.5, 525)


class TestRouteLibrary:
    """Tests for the preset catalog."""

    def test_every_preset_has_a_script(self):
        assert set(ROUTE_SCRIPTS) == set(RoutePreset)

    def test_menu_order_and_labels(self):
        menu = route_menu()
        assert len(menu) == 14
        assert menu[0] == {"value": "hitch", "label": "Stop"}
        assert menu[1] == {"value": "out-5", "label": "Out (5)"}
        assert menu[-1] == {"value": "cross", "label": "Cross"}

    def test_parse_preset(self):
        assert parse_preset("slant") == RoutePreset.SLANT
        assert parse_preset(RoutePreset.GO) == RoutePreset.GO
        assert parse_preset("wheel") is None
        assert parse_preset(None) is None


class TestGenerateRoute:
    """Tests for route polylines from a left-side receiver."""

    def test_first_point_is_start(self):
        for preset in RoutePreset:
            assert generate_route(LEFT_WIDEOUT, preset)[0] == LEFT_WIDEOUT

    def test_slant(self):
        """One yard stem, then three yards inside over two upfield."""
        points = generate_route(LEFT_WIDEOUT, RoutePreset.SLANT)
        assert points == (
            Point(62.5, 525),
            Point(62.5, 475),
            Point(137.5, 425),
        )

    def test_hitch_comes_back(self):
        points = generate_route(LEFT_WIDEOUT, RoutePreset.HITCH)
        assert points[1] == Point(62.5, 350)
        assert points[2] == Point(87.5, 375)

    def test_in_route_breaks_inside(self):
        points = generate_route(LEFT_WIDEOUT, RoutePreset.IN_10)
        assert points[1] == Point(62.5, 250)
        assert points[2] == Point(187.5, 250)

    def test_out_route_is_clamped_at_sideline(self):
        """Out (5) from the left numbers would leave the field."""
        points = generate_route(LEFT_WIDEOUT, RoutePreset.OUT_5)
        assert points[1] == Point(62.5, 375)
        assert points[2] == Point(25, 375)

    def test_pen_continues_from_clamped_point(self):
        """Comeback: each step starts where the clamped previous one ended."""
        points = generate_route(LEFT_WIDEOUT, RoutePreset.COMEBACK)
        assert points == (
            Point(62.5, 525),
            Point(62.5, 200),
            Point(25, 150),
            Point(25, 200),
        )

    def test_inside_release(self):
        points = generate_route(LEFT_WIDEOUT, RoutePreset.INSIDE_RELEASE_IN_5)
        assert points[1] == Point(87.5, 450)
        assert points[2] == Point(87.5, 375)
        assert points[3] == Point(212.5, 375)

    def test_all_points_in_bounds(self):
        starts = [LEFT_WIDEOUT, RIGHT_WIDEOUT, Point(312.5, 600), Point(25, 25)]
        for start in starts:
            for preset in RoutePreset:
                for point in generate_route(start, preset)[1:]:
                    assert clamp_point(point) == point


class TestMirroring:
    """Routes from opposite sides are mirror images."""

    @pytest.mark.parametrize("preset", list(RoutePreset))
    def test_mirror_symmetry(self, preset):
        left = generate_route(LEFT_WIDEOUT, preset)
        right = generate_route(RIGHT_WIDEOUT, preset)
        assert len(left) == len(right)
        for l_point, r_point in zip(left, right):
            assert mirror_point(l_point).x == pytest.approx(r_point.x)
            assert l_point.y == pytest.approx(r_point.y)

    def test_right_slant_breaks_left(self):
        points = generate_route(RIGHT_WIDEOUT, RoutePreset.SLANT)
        assert points[-1] == Point(487.5, 425)

    def test_center_breaks_as_right_side(self):
        """A start on the center line is treated as right of center."""
        points = generate_route(Point(312.5, 525), RoutePreset.IN_5)
        assert points[-1] == Point(187.5, 375)
