"""Tests for field geometry and coordinate conversion."""

import pytest

from chalktalk.core.field import (
    BOUNDARY_PADDING,
    CENTER_X,
    FIELD_PIXEL_HEIGHT,
    FIELD_PIXEL_WIDTH,
    LOS_Y,
    clamp_point,
    depth_to_y,
    is_in_bounds,
    is_left_of_center,
    mirror_point,
    point_to_yards,
    translate_point,
    yards_to_point,
)
from chalktalk.core.models import Point


class TestConstants:
    """Tests for the derived field constants."""

    def test_field_dimensions(self):
        assert FIELD_PIXEL_WIDTH == 625
        assert FIELD_PIXEL_HEIGHT == 625

    def test_center_and_los(self):
        assert CENTER_X == 312.5
        assert LOS_Y == 500

    def test_padding_is_one_yard(self):
        assert BOUNDARY_PADDING == 25


class TestConversion:
    """Tests for yard <-> drawing-space conversion."""

    def test_origin_is_ball_on_los(self):
        """(0, 0) yards is the center of the field at the LOS."""
        assert yards_to_point(0, 0) == Point(312.5, 500)

    def test_backfield_is_lower_on_drawing(self):
        """Negative depth (backfield) has a larger Y."""
        assert yards_to_point(0, -4) == Point(312.5, 600)

    def test_downfield_is_higher_on_drawing(self):
        assert yards_to_point(0, 10) == Point(312.5, 250)

    def test_lateral_offset(self):
        assert yards_to_point(-10, -1) == Point(62.5, 525)
        assert yards_to_point(10, -1) == Point(562.5, 525)

    @pytest.mark.parametrize("yards", [(0, 0), (-10, -1), (5, 7), (3.5, -2.5)])
    def test_point_to_yards_inverts(self, yards):
        assert point_to_yards(yards_to_point(*yards)) == pytest.approx(yards)

    def test_depth_to_y(self):
        assert depth_to_y(0) == LOS_Y
        assert depth_to_y(5) == 375
        assert depth_to_y(12) == 200


class TestBoundaries:
    """Tests for clamping and bounds checks."""

    def test_clamp_inside_is_unchanged(self):
        point = Point(300, 300)
        assert clamp_point(point) == point

    def test_clamp_each_edge(self):
        assert clamp_point(Point(-50, 300)) == Point(25, 300)
        assert clamp_point(Point(700, 300)) == Point(600, 300)
        assert clamp_point(Point(300, 0)) == Point(300, 25)
        assert clamp_point(Point(300, 1000)) == Point(300, 600)

    def test_clamp_is_idempotent(self):
        point = clamp_point(Point(-100, 900))
        assert clamp_point(point) == point

    def test_is_in_bounds(self):
        assert is_in_bounds(Point(25, 600))
        assert not is_in_bounds(Point(24.9, 300))

    def test_translate_point_clamps(self):
        assert translate_point(Point(100, 100), Point(-200, 0)) == Point(25, 100)
        assert translate_point(Point(100, 100), Point(50, 50)) == Point(150, 150)


class TestSides:
    """Tests for side-of-field helpers."""

    def test_left_of_center(self):
        assert is_left_of_center(Point(62.5, 525))
        assert not is_left_of_center(Point(562.5, 525))

    def test_center_counts_as_right(self):
        assert not is_left_of_center(Point(CENTER_X, 500))

    def test_mirror_point(self):
        assert mirror_point(Point(62.5, 525)) == Point(562.5, 525)
        assert mirror_point(Point(CENTER_X, 100)) == Point(CENTER_X, 100)
