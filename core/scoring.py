"""Seat scoring: where the sun sits relative to the aircraft's nose."""
from core.models import RelativePosition


def relative_angle(sun_azimuth: float, heading: float) -> float:
    """Sun azimuth measured clockwise from the aircraft heading, in [0, 360)."""
    return (sun_azimuth - heading + 360) % 360


def relative_position(angle: float) -> RelativePosition:
    """
    Bucket a relative sun angle into one of four 90° quadrants.

    Each quadrant owns its lower edge: 45° is already Right and 315° is
    already Ahead. An upper-inclusive rule would instead put 135° on the
    Right and 225° Behind; here they open Behind and Left.

        [315, 45)  → Ahead
        [45, 135)  → Right
        [135, 225) → Behind
        [225, 315) → Left
    """
    angle %= 360
    if 45 <= angle < 135:
        return "Right"
    if 135 <= angle < 225:
        return "Behind"
    if 225 <= angle < 315:
        return "Left"
    return "Ahead"


def score_seat(sun_azimuth: float, heading: float) -> dict:
    """
    Given solar azimuth and aircraft heading (degrees, 0=North, clockwise),
    report the relative angle and which quadrant the sun is in.
    """
    angle = relative_angle(sun_azimuth, heading)
    return {
        "relative_angle": round(angle, 3),
        "position": relative_position(angle),
    }
