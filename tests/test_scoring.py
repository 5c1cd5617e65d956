"""Tests for the relative-angle quadrant rule."""
import pytest

from core.scoring import relative_angle, relative_position, score_seat


def test_sun_directly_to_right():
    # Heading north (0), sun at east (90) → sun on right
    result = score_seat(sun_azimuth=90, heading=0)
    assert result["position"] == "Right"
    assert result["relative_angle"] == 90.0


def test_sun_directly_to_left():
    # Heading north (0), sun at west (270) → sun on left
    result = score_seat(sun_azimuth=270, heading=0)
    assert result["position"] == "Left"


def test_heading_rotates_relative_angle():
    # Sun north, heading east → relative 270° → left
    assert relative_angle(0, 90) == 270
    assert score_seat(sun_azimuth=0, heading=90)["position"] == "Left"


def test_relative_angle_wraps_into_range():
    assert relative_angle(10, 350) == 20
    assert relative_angle(350, 10) == 340


def test_boundary_45_is_right_not_ahead():
    assert relative_position(45.0) == "Right"


def test_boundary_315_is_ahead_not_left():
    assert relative_position(315.0) == "Ahead"


@pytest.mark.parametrize("angle, expected", [
    (0.0, "Ahead"),
    (44.999, "Ahead"),
    (134.999, "Right"),
    (135.0, "Behind"),
    (180.0, "Behind"),
    (225.0, "Left"),
    (314.999, "Left"),
    (359.9, "Ahead"),
])
def test_quadrants(angle, expected):
    assert relative_position(angle) == expected
