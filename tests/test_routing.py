"""Unit tests for the great-circle helpers in core.routing."""
import math

import pytest

from core.errors import DegenerateGeometry, InvalidInput
from core.models import GeoPoint
from core.routing import (
    central_angle,
    great_circle_path,
    great_circle_point,
    initial_bearing,
    segment_route,
)

_JFK = GeoPoint(40.64, -73.78)
_LAX = GeoPoint(33.94, -118.41)
_TOKYO = GeoPoint(35.55, 139.78)
_SFO = GeoPoint(37.62, -122.38)


def _close(a: GeoPoint, b: GeoPoint, tol: float = 1e-6) -> bool:
    return abs(a.latitude - b.latitude) < tol and abs(a.longitude - b.longitude) < tol


# ---------------------------------------------------------------------------
# great_circle_point
# ---------------------------------------------------------------------------

def test_endpoints_are_reproduced():
    assert _close(great_circle_point(_JFK, _LAX, 0.0), _JFK)
    assert _close(great_circle_point(_JFK, _LAX, 1.0), _LAX)


@pytest.mark.parametrize("t", [0.0, 0.3, 0.5, 1.0])
def test_coincident_points_return_start_unchanged(t):
    assert great_circle_point(_JFK, _JFK, t) == _JFK


def test_midpoint_on_equator():
    mid = great_circle_point(GeoPoint(0.0, 0.0), GeoPoint(0.0, 90.0), 0.5)
    assert mid.latitude == pytest.approx(0.0, abs=1e-9)
    assert mid.longitude == pytest.approx(45.0, abs=1e-9)


def test_great_circle_bulges_poleward():
    # Between two mid-northern points the great circle lies north of the
    # straight lat/lng line.
    mid = great_circle_point(_JFK, _LAX, 0.5)
    assert mid.latitude > (_JFK.latitude + _LAX.latitude) / 2


def test_distance_from_start_grows_monotonically():
    previous = -1.0
    for i in range(21):
        p = great_circle_point(_JFK, _TOKYO, i / 20)
        d = central_angle(_JFK, p)
        assert d > previous
        previous = d


def test_crossing_antimeridian_takes_the_short_way():
    # Tokyo → San Francisco crosses 180°; every point stays in the Pacific.
    for i in range(11):
        p = great_circle_point(_TOKYO, _SFO, i / 10)
        assert abs(p.longitude) >= 120
        assert -180 < p.longitude <= 180


def test_fraction_out_of_range_rejected():
    with pytest.raises(InvalidInput):
        great_circle_point(_JFK, _LAX, 1.5)
    with pytest.raises(InvalidInput):
        great_circle_point(_JFK, _LAX, -0.1)


def test_antipodal_points_rejected():
    with pytest.raises(DegenerateGeometry):
        great_circle_point(GeoPoint(0.0, 0.0), GeoPoint(0.0, 180.0), 0.5)


# ---------------------------------------------------------------------------
# initial_bearing
# ---------------------------------------------------------------------------

def test_bearing_due_north():
    b = initial_bearing(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0))
    assert abs(b - 0.0) < 0.5


def test_bearing_due_east():
    b = initial_bearing(GeoPoint(0.0, 0.0), GeoPoint(0.0, 1.0))
    assert abs(b - 90.0) < 0.5


def test_bearing_due_south():
    b = initial_bearing(GeoPoint(1.0, 0.0), GeoPoint(0.0, 0.0))
    assert abs(b - 180.0) < 0.5


def test_bearing_due_west():
    b = initial_bearing(GeoPoint(0.0, 1.0), GeoPoint(0.0, 0.0))
    assert abs(b - 270.0) < 0.5


def test_bearing_across_antimeridian_is_eastward():
    b = initial_bearing(GeoPoint(0.0, 179.5), GeoPoint(0.0, -179.5))
    assert abs(b - 90.0) < 0.5


def test_bearing_result_in_range():
    for p1, p2 in [
        (GeoPoint(51.5, -0.1), GeoPoint(48.8, 2.3)),
        (_JFK, _LAX),
        (GeoPoint(-33.9, 151.2), GeoPoint(1.3, 103.8)),
    ]:
        b = initial_bearing(p1, p2)
        assert 0.0 <= b < 360.0, f"bearing out of range: {b}"


def test_bearing_of_coincident_points_falls_back_to_zero():
    b = initial_bearing(_JFK, _JFK)
    assert b == 0.0
    assert not math.isnan(b)


# ---------------------------------------------------------------------------
# segment_route / great_circle_path
# ---------------------------------------------------------------------------

def test_segment_route_without_crossing_is_single_segment():
    points = great_circle_path(_JFK, _LAX, 20)
    segments = segment_route(points)
    assert len(segments) == 1
    assert list(segments[0]) == points


def test_segment_route_splits_at_antimeridian():
    points = great_circle_path(_TOKYO, _SFO, 20)
    segments = segment_route(points)
    assert len(segments) == 2
    assert [p for seg in segments for p in seg] == points
    for seg in segments:
        for a, b in zip(seg, seg[1:]):
            assert abs(a.longitude - b.longitude) <= 180


def test_segment_route_empty_input():
    assert segment_route([]) == []


def test_path_between_coincident_points_is_single_point():
    assert great_circle_path(_JFK, _JFK) == [_JFK]


def test_path_has_steps_plus_one_points():
    assert len(great_circle_path(_JFK, _LAX, 8)) == 9


def test_path_rejects_zero_steps():
    with pytest.raises(InvalidInput):
        great_circle_path(_JFK, _LAX, 0)


# ---------------------------------------------------------------------------
# GeoPoint validation
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("lat, lng", [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.5), (float("nan"), 0.0)])
def test_geopoint_rejects_bad_coordinates(lat, lng):
    with pytest.raises(InvalidInput):
        GeoPoint(lat, lng)
