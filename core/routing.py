"""Routing: great-circle geometry for a flight between two points."""
import math
from typing import Iterable

from core.errors import DegenerateGeometry, InvalidInput
from core.models import GeoPoint, PathSegment

# Central angles below this are treated as coincident points (radians).
_COINCIDENT_RAD = 1e-10


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

def _to_vector(p: GeoPoint) -> tuple[float, float, float]:
    lat = math.radians(p.latitude)
    lng = math.radians(p.longitude)
    return (
        math.cos(lat) * math.cos(lng),
        math.cos(lat) * math.sin(lng),
        math.sin(lat),
    )


def _normalize_longitude(lng: float) -> float:
    """Wrap a longitude into (-180, 180]."""
    lng = math.fmod(lng + 180.0, 360.0)
    if lng <= 0:
        lng += 360.0
    return lng - 180.0


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def central_angle(p1: GeoPoint, p2: GeoPoint) -> float:
    """Angular distance in radians between two points (haversine formula)."""
    lat1 = math.radians(p1.latitude)
    lat2 = math.radians(p2.latitude)
    dlat = lat2 - lat1
    dlng = math.radians(p2.longitude - p1.longitude)

    a = (math.sin(dlat / 2) ** 2
         + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2)
    return 2 * math.atan2(math.sqrt(a), math.sqrt(max(0.0, 1 - a)))


def great_circle_point(p1: GeoPoint, p2: GeoPoint, fraction: float) -> GeoPoint:
    """
    Return the point a given fraction of the way along the minor great-circle
    arc from ``p1`` to ``p2``.

    Interpolation happens on 3-D unit vectors (slerp), so the path bends the
    way a real flight does instead of following a straight lat/lng line.
    Coincident endpoints return ``p1`` unchanged.

    Raises:
        InvalidInput:       ``fraction`` outside [0, 1].
        DegenerateGeometry: ``p1`` and ``p2`` are antipodal.
    """
    if not 0.0 <= fraction <= 1.0:
        raise InvalidInput(f"Fraction must be within [0, 1], got {fraction}")

    delta = central_angle(p1, p2)
    if delta < _COINCIDENT_RAD:
        return p1

    sin_delta = math.sin(delta)
    if sin_delta < _COINCIDENT_RAD:
        raise DegenerateGeometry(
            f"No unique great circle between antipodal points {p1} and {p2}"
        )

    a = math.sin((1 - fraction) * delta) / sin_delta
    b = math.sin(fraction * delta) / sin_delta

    x1, y1, z1 = _to_vector(p1)
    x2, y2, z2 = _to_vector(p2)
    x = a * x1 + b * x2
    y = a * y1 + b * y2
    z = a * z1 + b * z2

    norm = math.sqrt(x * x + y * y + z * z)
    x, y, z = x / norm, y / norm, z / norm

    lat = math.degrees(math.atan2(z, math.sqrt(x * x + y * y)))
    lng = math.degrees(math.atan2(y, x))
    return GeoPoint(max(-90.0, min(90.0, lat)), _normalize_longitude(lng))


def initial_bearing(p1: GeoPoint, p2: GeoPoint) -> float:
    """
    Compute the forward azimuth (0–360°, clockwise from north) from
    point 1 to point 2.

    The bearing between coincident points is undefined; 0.0 is returned so
    downstream scoring never sees NaN.
    """
    if central_angle(p1, p2) < _COINCIDENT_RAD:
        return 0.0

    lat1_r = math.radians(p1.latitude)
    lat2_r = math.radians(p2.latitude)
    dlng_r = math.radians(p2.longitude - p1.longitude)

    x = math.sin(dlng_r) * math.cos(lat2_r)
    y = (math.cos(lat1_r) * math.sin(lat2_r)
         - math.sin(lat1_r) * math.cos(lat2_r) * math.cos(dlng_r))

    return (math.degrees(math.atan2(x, y)) + 360) % 360


def segment_route(points: Iterable[GeoPoint]) -> list[PathSegment]:
    """
    Split an ordered run of points into polylines that never cross the
    antimeridian.

    A new segment starts whenever two consecutive points are more than 180°
    apart in longitude. The points themselves are not changed, so joining the
    segments gives back the input sequence.
    """
    segments: list[PathSegment] = []
    current: list[GeoPoint] = []

    for point in points:
        if current and abs(point.longitude - current[-1].longitude) > 180:
            segments.append(tuple(current))
            current = []
        current.append(point)

    if current:
        segments.append(tuple(current))
    return segments


def great_circle_path(
    origin: GeoPoint, destination: GeoPoint, steps: int = 20
) -> list[GeoPoint]:
    """
    Return ``steps + 1`` evenly spaced points from origin to destination.

    When the endpoints coincide the route collapses to a single point.
    """
    if steps < 1:
        raise InvalidInput(f"Path needs at least one step, got {steps}")
    if central_angle(origin, destination) < _COINCIDENT_RAD:
        return [origin]
    return [great_circle_point(origin, destination, i / steps) for i in range(steps + 1)]
